"""Error taxonomy for thumbnail generation."""

from enum import StrEnum
from typing_extensions import override


class Stage(StrEnum):
    """Pipeline stage an error was raised from."""

    LOAD = "load"
    ENCODE = "encode"


class ThumbnailError(Exception):
    """Base class for every failure surfaced by the thumbnail pipeline.

    Attributes:
        message: Human readable description
        stage: Stage that failed (load or encode)
    """

    def __init__(self, message: str, stage: Stage = Stage.LOAD):
        self.message: str = message
        self.stage: Stage = stage
        super().__init__(self.message)

    @override
    def __str__(self):
        return f"{self.stage} failed: {self.message}"


class UnsupportedFormat(ThumbnailError):
    """Input or requested output format is not one of JPEG, PNG or GIF."""


class CodecUnavailable(ThumbnailError):
    """The Pillow build lacks the decoder or encoder for a supported format."""


class DecodeFailed(ThumbnailError):
    """Bytes do not parse as a valid image of the claimed format."""


class EncodeFailed(ThumbnailError):
    """Pillow refused to write the thumbnail."""

    def __init__(self, message: str, stage: Stage = Stage.ENCODE):
        super().__init__(message, stage)
