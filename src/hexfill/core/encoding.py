from __future__ import annotations

from typing import Any, Dict, Iterable

import h3
import orjson

from hexfill.core.errors import EncodingError


def cell_boundary(cell: str) -> Dict[str, Any]:
    """GeoJSON Polygon for a cell, ring closed and in lng/lat order."""
    try:
        if not h3.is_valid_cell(cell):
            raise EncodingError(f"Invalid hex cell: {cell!r}")
        vertices = h3.cell_to_boundary(cell)
    except (h3.H3BaseException, TypeError, ValueError) as exc:
        raise EncodingError(f"Could not encode hex cell {cell!r}") from exc

    ring = [[lng, lat] for lat, lng in vertices]
    ring.append(list(ring[0]))
    return {"type": "Polygon", "coordinates": [ring]}


def encode_cells(cells: Iterable[str]) -> Dict[str, str]:
    return {str(cell): orjson.dumps(cell_boundary(cell)).decode("utf-8") for cell in sorted(cells)}
