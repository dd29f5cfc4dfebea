"""The two entry points the map front end calls.

``prepare_polygon`` turns raw user input into canonical GeoJSON, and
``compute_hexes`` runs clip, tile, bound and encode for a prepared polygon.
Both let only ``HexfillError`` subclasses escape.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from shapely.geometry.base import BaseGeometry

from hexfill.components.polyfill.settings import PolyfillSettings
from hexfill.core.encoding import encode_cells
from hexfill.core.errors import HexfillError, ParseError, UnexpectedError
from hexfill.core.geometry import canonical_geojson, clip_to_viewport, geojson_to_geometry
from hexfill.core.hexgrid import Containment, tile_geometry, validate_resolution
from hexfill.core.limits import DEFAULT_MAX_CELLS, CellBudget, enforce_limit
from hexfill.core.schemas import PolygonRequest, Viewport

logger = logging.getLogger(__name__)

UNEXPECTED_MESSAGE = "An unexpected error occurred. Please check your settings."


@dataclass(frozen=True)
class PolyfillConfig:
    max_cells: int = DEFAULT_MAX_CELLS
    containment: Containment = Containment.OVERLAP
    early_abort: bool = False

    @classmethod
    def from_settings(cls, settings: PolyfillSettings) -> "PolyfillConfig":
        return cls(
            max_cells=settings.max_cells,
            containment=settings.containment,
            early_abort=settings.early_abort,
        )


def prepare_polygon(polygon: PolygonRequest) -> BaseGeometry:
    """Parse the polygon's raw input and record its canonical GeoJSON.

    ``raw_geojson`` is written once; preparing again with input that yields
    the same text is a no-op.
    """
    try:
        canonical = canonical_geojson(polygon.raw_input, polygon.source_format)
        geom = geojson_to_geometry(canonical)
    except HexfillError:
        raise
    except Exception as exc:
        logger.error("Unexpected failure preparing polygon '%s'", polygon.name, exc_info=True)
        raise UnexpectedError(UNEXPECTED_MESSAGE) from exc

    if polygon.raw_geojson is None:
        polygon.raw_geojson = canonical
    elif polygon.raw_geojson != canonical:
        raise ParseError(f"Polygon {polygon.name} has already been prepared from different input.")

    logger.info("Prepared polygon '%s' (%s, %s)", polygon.name, polygon.source_format.value, geom.geom_type)
    return geom


def compute_hexes(
    polygon: PolygonRequest,
    resolution: int,
    viewport: Optional[Viewport] = None,
    config: Optional[PolyfillConfig] = None,
) -> Dict[str, str]:
    """Map each covering cell id to its GeoJSON boundary.

    Unprepared polygons are prepared first. When ``viewport`` is given only
    the part of the polygon inside it is tiled.
    """
    config = config or PolyfillConfig()
    try:
        validate_resolution(resolution)
        if polygon.raw_geojson is None:
            geom = prepare_polygon(polygon)
        else:
            geom = geojson_to_geometry(polygon.raw_geojson)

        if viewport is not None:
            geom = clip_to_viewport(geom, viewport)

        budget = CellBudget(config.max_cells, polygon.name, resolution) if config.early_abort else None
        cells = tile_geometry(geom, resolution, config.containment, budget=budget)
        enforce_limit(cells, config.max_cells, name=polygon.name, resolution=resolution)
        encoded = encode_cells(cells)
    except HexfillError:
        raise
    except Exception as exc:
        logger.error("Unexpected failure computing hexes for '%s'", polygon.name, exc_info=True)
        raise UnexpectedError(UNEXPECTED_MESSAGE) from exc

    logger.info(
        "Polygon '%s' covered by %d cells at resolution %d (viewport=%s)",
        polygon.name,
        len(encoded),
        resolution,
        viewport is not None,
    )
    return encoded
