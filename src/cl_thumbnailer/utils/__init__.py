"""Utility helpers - media types and profiling."""

from .media_types import SupportedFormat, is_supported_mime
from .profiling import timed

__all__ = ["SupportedFormat", "is_supported_mime", "timed"]
