from __future__ import annotations

import logging
from typing import Dict, Optional, Type

from fastapi import FastAPI, HTTPException

from hexfill.components.polyfill.pipeline import PolyfillConfig, compute_hexes, prepare_polygon
from hexfill.core.errors import (
    ClippingError,
    EncodingError,
    HexfillError,
    InvalidResolutionError,
    MalformedGeometryError,
    ParseError,
    ResultTooLargeError,
    UnexpectedError,
)
from hexfill.core.schemas import (
    HealthResponse,
    HexesRequest,
    HexesResponse,
    PolygonRequest,
    PreparedPolygonResponse,
)
from hexfill.services.hexfill.settings import HexfillServiceSettings

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: Dict[Type[HexfillError], int] = {
    ParseError: 400,
    ClippingError: 400,
    InvalidResolutionError: 400,
    MalformedGeometryError: 422,
    ResultTooLargeError: 413,
    EncodingError: 500,
    UnexpectedError: 500,
}


def _to_http(exc: HexfillError) -> HTTPException:
    status = _STATUS_BY_ERROR.get(type(exc), 500)
    if status < 500:
        logger.warning("Rejected request: %s", exc)
    return HTTPException(status_code=status, detail=str(exc))


def create_app(settings: Optional[HexfillServiceSettings] = None) -> FastAPI:
    if settings is None:
        settings = HexfillServiceSettings()

    app = FastAPI(title="Hexfill Service", version="1.0")
    app.state.settings = settings
    config = PolyfillConfig.from_settings(settings.polyfill)

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse()

    @app.post("/polygons/prepare", response_model=PreparedPolygonResponse)
    def prepare(req: PolygonRequest) -> PreparedPolygonResponse:
        try:
            prepare_polygon(req)
        except HexfillError as exc:
            raise _to_http(exc) from exc
        return PreparedPolygonResponse(
            name=req.name,
            source_format=req.source_format,
            raw_geojson=req.raw_geojson,
        )

    @app.post("/hexes", response_model=HexesResponse)
    def hexes(req: HexesRequest) -> HexesResponse:
        resolution = req.resolution if req.resolution is not None else settings.polyfill.default_resolution
        try:
            cells = compute_hexes(req.polygon, resolution, req.viewport, config)
        except HexfillError as exc:
            raise _to_http(exc) from exc
        return HexesResponse(name=req.polygon.name, resolution=resolution, count=len(cells), cells=cells)

    return app


settings = HexfillServiceSettings()
app = create_app(settings)
