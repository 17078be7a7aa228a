"""Runtime settings injected into DocMorph adapters.

Values are read from ``DOCMORPH_*`` environment variables; nested raster
options use a double underscore, e.g. ``DOCMORPH_RASTER__DRAW_FORMS=false``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as SettingsError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ValidationError

ENV_PREFIX = "DOCMORPH_"


class RasterSettings(BaseModel):
    """Options handed to the page rasterizer at construction time."""

    model_config = ConfigDict(frozen=True)

    draw_annotations: bool = True
    draw_forms: bool = True
    fill_color: tuple[int, int, int, int] = (255, 255, 255, 255)
    password: str | None = None


class EngineSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        env_ignore_empty=True,
        frozen=True,
        extra="ignore",
    )

    raster: RasterSettings = Field(default_factory=RasterSettings)
    capture_timeout: float = Field(30.0, gt=0)
    capture_page_width: int = Field(794, gt=0)
    capture_scale: float = Field(1.0, gt=0)
    user_agent: str = "DocMorph/0.3"
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        return value.strip().upper()

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Load settings from the environment, raising :class:`ValidationError` on bad values."""

        try:
            return cls()
        except SettingsError as exc:
            raise ValidationError(f"Invalid {ENV_PREFIX}* setting: {exc}") from exc


__all__ = ["EngineSettings", "RasterSettings", "ENV_PREFIX"]
