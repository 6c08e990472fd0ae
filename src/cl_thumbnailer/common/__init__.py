"""Common module - error taxonomy and schemas.

Schemas live in ``cl_thumbnailer.common.schemas``; they depend on
``utils.media_types``, which itself imports the errors below.
"""

from .errors import (
    CodecUnavailable,
    DecodeFailed,
    EncodeFailed,
    Stage,
    ThumbnailError,
    UnsupportedFormat,
)

__all__ = [
    "CodecUnavailable",
    "DecodeFailed",
    "EncodeFailed",
    "Stage",
    "ThumbnailError",
    "UnsupportedFormat",
]
