from __future__ import annotations

from typing import Optional, Set

from hexfill.core.errors import ResultTooLargeError

DEFAULT_MAX_CELLS = 100_000


def enforce_limit(
    cells: Set[str],
    max_count: int = DEFAULT_MAX_CELLS,
    name: Optional[str] = None,
    resolution: int = 0,
) -> Set[str]:
    """Return ``cells`` unchanged, or fail if there are more than ``max_count``."""
    if len(cells) > max_count:
        raise ResultTooLargeError(name, resolution, len(cells), max_count)
    return cells


class CellBudget:
    """Early-abort check the walker runs after every polygon it fills.

    Stops a pathological covering before the rest of the collection is
    tiled. The final ``enforce_limit`` still runs either way.
    """

    def __init__(self, max_count: int, name: Optional[str] = None, resolution: int = 0) -> None:
        self.max_count = max_count
        self.name = name
        self.resolution = resolution

    def check(self, cells: Set[str]) -> None:
        enforce_limit(cells, self.max_count, name=self.name, resolution=self.resolution)
