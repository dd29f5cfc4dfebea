from __future__ import annotations

import logging
import math
from typing import Any, Dict

import orjson
from shapely import make_valid, wkt
from shapely.errors import ShapelyError
from shapely.geometry import GeometryCollection, Polygon, mapping, shape
from shapely.geometry.base import BaseGeometry

from hexfill.core.errors import ClippingError, MalformedGeometryError, ParseError
from hexfill.core.hexgrid import COLLECTION_KINDS, NULL_MEMBER_MESSAGE, geometry_kind
from hexfill.core.schemas import PolygonFormat, Viewport

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please input a polygon."
PARSE_FAILED_MESSAGE = "Failed to parse geometry."

# Everything shapely or the JSON decoder raise for text that is not a geometry.
_MALFORMED_INPUT_ERRORS = (
    ShapelyError,
    orjson.JSONDecodeError,
    AttributeError,
    KeyError,
    IndexError,
    TypeError,
    ValueError,
)


def wkt_to_geojson(wkt_str: str) -> str:
    try:
        geom = wkt.loads(wkt_str)
    except _MALFORMED_INPUT_ERRORS as exc:
        raise ParseError(PARSE_FAILED_MESSAGE) from exc
    if geom is None:
        raise ParseError("Could not parse WKT.")
    return geometry_to_geojson(geom)


def geometry_to_geojson(geom: BaseGeometry) -> str:
    return orjson.dumps(mapping(geom)).decode("utf-8")


def geojson_to_geometry(geojson_str: str) -> BaseGeometry:
    """Read a bare geometry, a Feature, or a FeatureCollection."""
    try:
        obj = orjson.loads(geojson_str)
    except orjson.JSONDecodeError as exc:
        raise ParseError(PARSE_FAILED_MESSAGE) from exc
    if not isinstance(obj, dict):
        raise ParseError(PARSE_FAILED_MESSAGE)

    try:
        return _geometry_from_object(obj)
    except _MALFORMED_INPUT_ERRORS as exc:
        raise ParseError(PARSE_FAILED_MESSAGE) from exc


def _geometry_from_object(obj: Dict[str, Any]) -> BaseGeometry:
    kind = obj.get("type")
    if kind == "Feature":
        geometry = obj.get("geometry")
        if not geometry:
            raise ParseError("Feature has no geometry.")
        return shape(geometry)
    if kind == "FeatureCollection":
        members = [_geometry_from_object(feature) for feature in obj.get("features") or []]
        return GeometryCollection(members)
    return shape(obj)


def canonical_geojson(text: str, source_format: PolygonFormat) -> str:
    """Return the canonical GeoJSON text for user input.

    WKT is converted to GeoJSON; GeoJSON (typed or drawn on the map) is kept
    verbatim, so re-preparing it is a no-op. Callers read the result with
    ``geojson_to_geometry``.
    """
    if text is None or not text.strip():
        raise ParseError(EMPTY_INPUT_MESSAGE)
    if source_format == PolygonFormat.WKT:
        return wkt_to_geojson(text)
    return text


def parse_geometry(text: str, source_format: PolygonFormat) -> BaseGeometry:
    return geojson_to_geometry(canonical_geojson(text, source_format))


def viewport_polygon(viewport: Viewport) -> Polygon:
    sw, ne = viewport.south_west, viewport.north_east
    corners = (sw.lat, sw.lng, ne.lat, ne.lng)
    if not all(math.isfinite(value) for value in corners):
        raise ClippingError(f"Could not create bounding box for bounds {viewport}")
    if sw.lat >= ne.lat or sw.lng >= ne.lng:
        raise ClippingError(f"Could not create bounding box for bounds {viewport}")
    coords = [
        (sw.lng, sw.lat),
        (ne.lng, sw.lat),
        (ne.lng, ne.lat),
        (sw.lng, ne.lat),
        (sw.lng, sw.lat),
    ]
    return Polygon(coords)


def clip_to_viewport(geom: BaseGeometry, viewport: Viewport) -> BaseGeometry:
    """Intersect a geometry with the viewport rectangle.

    Collections are clipped member by member, so overlapping members keep
    their own area instead of being merged into a union. The result may be
    empty, a single geometry, or a collection.
    """
    box = viewport_polygon(viewport)
    return _clip(geom, box, viewport)


def _clip(geom: BaseGeometry, box: Polygon, viewport: Viewport) -> BaseGeometry:
    if geometry_kind(geom) in COLLECTION_KINDS:
        pieces = []
        for member in geom.geoms:
            if member is None or member.is_empty:
                raise MalformedGeometryError(NULL_MEMBER_MESSAGE)
            piece = _clip(member, box, viewport)
            if not piece.is_empty:
                pieces.append(piece)
        return GeometryCollection(pieces)

    if not geom.is_valid:
        logger.debug("Repairing invalid %s before clipping", geom.geom_type)
        geom = make_valid(geom)
    try:
        return box.intersection(geom)
    except ShapelyError as exc:
        raise ClippingError(f"Could not clip geometry to bounds {viewport}") from exc
