from __future__ import annotations

from typing import Dict, Optional

import httpx

from hexfill.core.schemas import (
    HexesRequest,
    HexesResponse,
    PolygonRequest,
    PreparedPolygonResponse,
    Viewport,
)


class HexfillClient:
    """Thin client for the hexfill service, as used by the map front end."""

    def __init__(self, base_url: str, timeout_s: float = 60.0, client: Optional[httpx.Client] = None):
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout_s)

    def health(self) -> bool:
        resp = self._client.get(f"{self._base_url}/health")
        resp.raise_for_status()
        return resp.json().get("status") == "ok"

    def prepare(self, polygon: PolygonRequest) -> PreparedPolygonResponse:
        resp = self._client.post(f"{self._base_url}/polygons/prepare", json=polygon.model_dump(mode="json"))
        resp.raise_for_status()
        return PreparedPolygonResponse(**resp.json())

    def hexes(
        self,
        polygon: PolygonRequest,
        resolution: Optional[int] = None,
        viewport: Optional[Viewport] = None,
    ) -> Dict[str, str]:
        payload = HexesRequest(polygon=polygon, resolution=resolution, viewport=viewport).model_dump(
            mode="json",
            by_alias=True,
        )
        resp = self._client.post(f"{self._base_url}/hexes", json=payload)
        resp.raise_for_status()
        return dict(HexesResponse(**resp.json()).cells)

    def close(self) -> None:
        self._client.close()
