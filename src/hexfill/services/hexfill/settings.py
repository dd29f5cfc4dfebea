from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hexfill.components.polyfill.settings import PolyfillSettings


class HexfillServiceSettings(BaseSettings):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8010)
    polyfill: PolyfillSettings = Field(default_factory=PolyfillSettings)

    model_config = SettingsConfigDict(
        env_prefix="HEXFILL_",
        env_file=".env.hexfill",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
    )
