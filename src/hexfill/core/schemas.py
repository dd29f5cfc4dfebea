from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PolygonFormat(str, Enum):
    WKT = "wkt"
    GEOJSON = "geojson"
    DRAWN_ON_MAP = "drawn_on_map"


class PolygonRequest(BaseModel):
    """A user-supplied shape and its derived canonical GeoJSON text."""

    name: str = Field(default="", description="Display name of the shape")
    raw_input: str = Field(default="", description="Text exactly as the user entered it")
    raw_geojson: Optional[str] = Field(
        default=None,
        description="Canonical GeoJSON text, set once when the polygon is prepared",
    )
    source_format: PolygonFormat = Field(default=PolygonFormat.WKT)
    hex_color: str = Field(default="#3388ff", description="Display color for the map layer")

    @field_validator("hex_color")
    @classmethod
    def _prefix_hash(cls, value: str) -> str:
        value = value.strip()
        if value and not value.startswith("#"):
            return f"#{value}"
        return value


class LatLng(BaseModel):
    lat: float
    lng: float


class Viewport(BaseModel):
    """Visible map extent as reported by the map widget's getBounds()."""

    model_config = ConfigDict(populate_by_name=True)

    south_west: LatLng = Field(alias="_southWest")
    north_east: LatLng = Field(alias="_northEast")

    @classmethod
    def from_corners(cls, sw_lat: float, sw_lng: float, ne_lat: float, ne_lng: float) -> "Viewport":
        return cls(
            south_west=LatLng(lat=sw_lat, lng=sw_lng),
            north_east=LatLng(lat=ne_lat, lng=ne_lng),
        )

    def __str__(self) -> str:
        return (
            f"NE: {self.north_east.lat}, {self.north_east.lng}\n"
            f"SW: {self.south_west.lat}, {self.south_west.lng}"
        )


class PreparedPolygonResponse(BaseModel):
    name: str
    source_format: PolygonFormat
    raw_geojson: str


class HexesRequest(BaseModel):
    polygon: PolygonRequest
    resolution: Optional[int] = Field(
        default=None,
        description="H3 resolution; the service default is used when omitted",
    )
    viewport: Optional[Viewport] = None


class HexesResponse(BaseModel):
    name: str
    resolution: int
    count: int
    cells: Dict[str, str]


class HealthResponse(BaseModel):
    status: str = Field(default="ok")
