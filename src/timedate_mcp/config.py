"""Application settings via pydantic-settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TIMEDATE_")

    default_timezone: str = Field(
        default="UTC",
        description="Timezone used when a tool call does not name one.",
    )
    system_timezone: str | None = Field(
        default=None,
        description=(
            "Timezone reported as the system zone. "
            "Detected from the host when unset."
        ),
    )
    hour_format: Literal["auto", "12h", "24h"] = Field(
        default="auto",
        description="Force 12h/24h display preference instead of detecting it.",
    )
    log_level: str = Field(default="info", description="Logging level")
