"""Polyfill pipeline - covers user polygons with H3 cells."""

from hexfill.components.polyfill.pipeline import PolyfillConfig, compute_hexes, prepare_polygon
from hexfill.components.polyfill.settings import PolyfillSettings

__all__ = ["PolyfillConfig", "PolyfillSettings", "compute_hexes", "prepare_polygon"]
