"""cl_thumbnailer - bounded thumbnails for JPEG, PNG and GIF images."""

from .common.errors import (
    CodecUnavailable,
    DecodeFailed,
    EncodeFailed,
    Stage,
    ThumbnailError,
    UnsupportedFormat,
)
from .common.schemas import Dimensions, ThumbnailConfig, ThumbnailResult
from .utils.media_types import SupportedFormat
from .algo.loader import detect_format, load
from .algo.raster import RasterImage
from .algo.renderer import encode, render
from .algo.size_resolver import resolve_size
from .thumbnailer import Thumbnailer, generate_thumbnail

__version__ = "0.1.0"

__all__ = [
    "CodecUnavailable",
    "DecodeFailed",
    "Dimensions",
    "EncodeFailed",
    "RasterImage",
    "Stage",
    "SupportedFormat",
    "ThumbnailConfig",
    "ThumbnailError",
    "ThumbnailResult",
    "Thumbnailer",
    "UnsupportedFormat",
    "__version__",
    "detect_format",
    "encode",
    "generate_thumbnail",
    "load",
    "render",
    "resolve_size",
]
