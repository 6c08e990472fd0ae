"""Pydantic schemas for thumbnail configuration and results."""

from typing import ClassVar, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from ..utils.media_types import SupportedFormat

# ─────────────────────────────────────────────────────────────
# Dimensions
# ─────────────────────────────────────────────────────────────


class Dimensions(NamedTuple):
    """Width/height pair in pixels."""

    width: int
    height: int


# ─────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────


class ThumbnailConfig(BaseModel):
    """Immutable thumbnail settings.

    Attributes:
        max_width: Maximum thumbnail width in pixels (None = unbounded)
        max_height: Maximum thumbnail height in pixels (None = unbounded)
        scale: Preserve aspect ratio (True) or stretch each axis to its bound (False)
        inflate: Allow upscaling images smaller than the bounds
        quality: Output quality for lossy formats (0-100)
    """

    max_width: int | None = Field(default=None, gt=0, description="Maximum width in pixels")
    max_height: int | None = Field(default=None, gt=0, description="Maximum height in pixels")
    scale: bool = Field(default=True, description="Preserve aspect ratio")
    inflate: bool = Field(default=True, description="Allow upscaling small images")
    quality: int = Field(default=75, ge=0, le=100, description="Lossy output quality")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


# ─────────────────────────────────────────────────────────────
# Pipeline output
# ─────────────────────────────────────────────────────────────


class ThumbnailResult(BaseModel):
    """Encoded thumbnail plus the metadata a caller needs to store it."""

    data: bytes = Field(..., repr=False)
    mime: SupportedFormat
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    source_width: int = Field(..., ge=0)
    source_height: int = Field(..., ge=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def extension(self) -> str:
        """File extension matching ``mime`` (without the dot)."""
        return self.mime.extension
