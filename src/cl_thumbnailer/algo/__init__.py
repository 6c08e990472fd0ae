"""Thumbnail algorithms: loading, sizing, rendering and encoding."""

from .codecs import CODECS, Codec, get_decoder, get_encoder
from .loader import detect_format, load
from .raster import PixelBuffer, RasterImage
from .renderer import encode, render
from .size_resolver import resolve_size

__all__ = [
    "CODECS",
    "Codec",
    "PixelBuffer",
    "RasterImage",
    "detect_format",
    "encode",
    "get_decoder",
    "get_encoder",
    "load",
    "render",
    "resolve_size",
]
