"""Settings for the polygon-to-hex pipeline."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hexfill.core.hexgrid import Containment
from hexfill.core.limits import DEFAULT_MAX_CELLS


class PolyfillSettings(BaseSettings):
    max_cells: int = Field(
        default=DEFAULT_MAX_CELLS,
        description="Largest number of cells a single polygon may produce",
    )
    containment: Containment = Field(
        default=Containment.OVERLAP,
        description="Which cells count as covering a polygon",
    )
    early_abort: bool = Field(
        default=False,
        description="Check the cell ceiling after every polygon instead of only at the end",
    )
    default_resolution: int = Field(
        default=7,
        description="Resolution used when a request does not name one",
    )

    model_config = SettingsConfigDict(
        env_prefix="POLYFILL_",
        env_file=".env.polyfill",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )
