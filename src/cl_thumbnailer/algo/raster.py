"""Decoded rasters with explicit, release-once ownership."""

from types import TracebackType
from typing import Self

from PIL import Image

from ..utils.media_types import SupportedFormat


class PixelBuffer:
    """Reference-counted wrapper around a Pillow image.

    The wrapped image is closed exactly once, when the last owner releases
    its reference.
    """

    def __init__(self, image: Image.Image):
        self._image: Image.Image = image
        self._refs: int = 1
        self.closed: bool = False

    @property
    def image(self) -> Image.Image:
        if self.closed:
            raise RuntimeError("Pixel buffer has already been released")
        return self._image

    @property
    def refs(self) -> int:
        return self._refs

    def acquire(self) -> "PixelBuffer":
        if self.closed:
            raise RuntimeError("Cannot share a released pixel buffer")
        self._refs += 1
        return self

    def release(self) -> None:
        if self.closed:
            return
        self._refs -= 1
        if self._refs == 0:
            self._image.close()
            self.closed = True


class RasterImage:
    """A decoded image owned by whichever pipeline stage holds it.

    Use as a context manager, or call ``release()`` explicitly. Releasing
    twice is a no-op for the same owner.
    """

    def __init__(
        self,
        buffer: PixelBuffer | Image.Image,
        fmt: SupportedFormat,
    ):
        if isinstance(buffer, Image.Image):
            buffer = PixelBuffer(buffer)
        self._buffer: PixelBuffer = buffer
        self.format: SupportedFormat = fmt
        self.width: int
        self.height: int
        self.width, self.height = buffer.image.size
        self._released: bool = False

    @property
    def image(self) -> Image.Image:
        if self._released:
            raise RuntimeError("Raster image has already been released")
        return self._buffer.image

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def released(self) -> bool:
        return self._released

    def shares_buffer_with(self, other: "RasterImage") -> bool:
        return self._buffer is other._buffer

    def share(self) -> "RasterImage":
        """Return a second owner of the same pixel buffer."""
        if self._released:
            raise RuntimeError("Cannot share a released raster image")
        return RasterImage(self._buffer.acquire(), self.format)

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._buffer.release()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self._released else "live"
        return f"RasterImage({self.format}, {self.width}x{self.height}, {state})"
