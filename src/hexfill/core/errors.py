"""Error kinds raised by the polygon-to-hex engine.

Every failure that crosses a public entry point is one of these, carrying a
short message suitable for showing to the user.
"""

from __future__ import annotations

from typing import Optional


class HexfillError(Exception):
    """Base exception for hexfill."""


class ParseError(HexfillError):
    """Missing or malformed polygon text."""


class ClippingError(HexfillError):
    """Viewport corners do not form a usable rectangle."""


class InvalidResolutionError(HexfillError):
    """Requested grid resolution is outside the supported range."""


class MalformedGeometryError(HexfillError):
    """A collection holds a null or empty member."""


class EncodingError(HexfillError):
    """A cell could not be turned into its boundary geometry."""


class UnexpectedError(HexfillError):
    """Anything not classified above."""


class ResultTooLargeError(HexfillError):
    """The covering holds more cells than the configured ceiling."""

    def __init__(
        self,
        name: Optional[str],
        resolution: int,
        count: int,
        limit: int,
    ) -> None:
        self.name = name
        self.resolution = resolution
        self.count = count
        self.limit = limit
        super().__init__(f"Polygon {name or '<unnamed>'} contains too many hexes at resolution {resolution}!")
