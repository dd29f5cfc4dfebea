"""H3 covering of shapely geometries.

The walker descends through collections and multi-polygons and hands each
polygon to the grid fill; points and lines carry no area and are skipped.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Optional, Set

import h3
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry

from hexfill.core.errors import InvalidResolutionError, MalformedGeometryError
from hexfill.core.limits import CellBudget

logger = logging.getLogger(__name__)

MIN_RESOLUTION = 0
MAX_RESOLUTION = 15

NULL_MEMBER_MESSAGE = "Found null geometry when attempting to get hexes."


class Containment(str, Enum):
    """Which cells count as covering a polygon."""

    OVERLAP = "overlap"
    CENTER = "center"
    FULL = "full"


class GeometryKind(str, Enum):
    POINT = "Point"
    MULTI_POINT = "MultiPoint"
    LINE_STRING = "LineString"
    LINEAR_RING = "LinearRing"
    MULTI_LINE_STRING = "MultiLineString"
    POLYGON = "Polygon"
    MULTI_POLYGON = "MultiPolygon"
    GEOMETRY_COLLECTION = "GeometryCollection"


_KIND_BY_TYPE: Dict[str, GeometryKind] = {kind.value: kind for kind in GeometryKind}

COLLECTION_KINDS = frozenset({GeometryKind.MULTI_POLYGON, GeometryKind.GEOMETRY_COLLECTION})
AREALESS_KINDS = frozenset(
    {
        GeometryKind.POINT,
        GeometryKind.MULTI_POINT,
        GeometryKind.LINE_STRING,
        GeometryKind.LINEAR_RING,
        GeometryKind.MULTI_LINE_STRING,
    }
)


def geometry_kind(geom: BaseGeometry) -> GeometryKind:
    kind = _KIND_BY_TYPE.get(geom.geom_type)
    if kind is None:
        raise MalformedGeometryError(f"Unsupported geometry type: {geom.geom_type}")
    return kind


def validate_resolution(resolution: int) -> int:
    if isinstance(resolution, bool) or not isinstance(resolution, int):
        raise InvalidResolutionError(f"Resolution must be an integer, got {resolution!r}")
    if not MIN_RESOLUTION <= resolution <= MAX_RESOLUTION:
        raise InvalidResolutionError(
            f"Resolution must be between {MIN_RESOLUTION} and {MAX_RESOLUTION}, got {resolution}"
        )
    return resolution


def fill_polygon(polygon: Polygon, resolution: int, containment: Containment = Containment.OVERLAP) -> Set[str]:
    """Cells at ``resolution`` covering a single polygon, holes respected."""
    if polygon.is_empty:
        return set()
    if containment == Containment.CENTER:
        return set(h3.geo_to_cells(polygon, resolution))
    shape = h3.geo_to_h3shape(polygon)
    return set(h3.h3shape_to_cells_experimental(shape, resolution, contain=containment.value))


def tile_geometry(
    geom: Optional[BaseGeometry],
    resolution: int,
    containment: Containment = Containment.OVERLAP,
    budget: Optional[CellBudget] = None,
) -> Set[str]:
    """Collect every cell covering the polygonal parts of ``geom``.

    An empty top-level geometry (for instance a clip that missed the shape)
    yields no cells. A null or empty member inside a collection means the
    upstream geometry is inconsistent and raises ``MalformedGeometryError``.
    """
    validate_resolution(resolution)
    if geom is None:
        raise MalformedGeometryError(NULL_MEMBER_MESSAGE)
    cells: Set[str] = set()
    if geom.is_empty:
        return cells
    _walk(geom, resolution, containment, cells, budget)
    return cells


def _walk(
    geom: BaseGeometry,
    resolution: int,
    containment: Containment,
    cells: Set[str],
    budget: Optional[CellBudget],
) -> None:
    kind = geometry_kind(geom)
    if kind in COLLECTION_KINDS:
        for member in geom.geoms:
            if member is None or member.is_empty:
                raise MalformedGeometryError(NULL_MEMBER_MESSAGE)
            _walk(member, resolution, containment, cells, budget)
    elif kind == GeometryKind.POLYGON:
        filled = fill_polygon(geom, resolution, containment)
        logger.debug("Filled polygon with %d cells at resolution %d", len(filled), resolution)
        cells.update(filled)
        if budget is not None:
            budget.check(cells)
    elif kind in AREALESS_KINDS:
        logger.debug("Ignoring %s member with no area", kind.value)
    else:
        raise MalformedGeometryError(f"Unsupported geometry type: {geom.geom_type}")
