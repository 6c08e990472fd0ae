"""Pure thumbnail rendering and encoding logic."""

from PIL import Image

from ..common.errors import Stage
from ..common.schemas import Dimensions
from ..utils.media_types import SupportedFormat
from .codecs import get_encoder
from .raster import RasterImage

RESAMPLE = Image.Resampling.BOX


def _true_colour(image: Image.Image) -> Image.Image:
    if image.mode in ("RGB", "RGBA", "L"):
        return image
    if image.mode in ("LA", "PA") or "transparency" in image.info:
        return image.convert("RGBA")
    return image.convert("RGB")


def render(
    source: RasterImage,
    size: Dimensions | tuple[int, int],
    max_width: int | None = None,
    max_height: int | None = None,
) -> RasterImage:
    """
    Produce the thumbnail raster for ``source``.

    When the source already measures exactly ``max_width`` x ``max_height``
    the thumbnail shares the source's pixel buffer instead of resampling.
    The comparison is against the configured bounds, not ``size``.

    Args:
        source: Decoded source raster
        size: Target dimensions from ``resolve_size``
        max_width: Configured width bound
        max_height: Configured height bound

    Returns:
        A new RasterImage owner; release it independently of ``source``
    """
    if source.width == max_width and source.height == max_height:
        return source.share()

    width, height = size
    base = _true_colour(source.image)
    try:
        if width <= 0 or height <= 0:
            thumb = Image.new(base.mode, (max(width, 0), max(height, 0)))
        else:
            thumb = base.resize((width, height), RESAMPLE)
    finally:
        if base is not source.image:
            base.close()

    return RasterImage(thumb, source.format)


def encode(
    thumb: RasterImage,
    fmt: str | SupportedFormat | None = None,
    quality: int = 75,
) -> bytes:
    """
    Encode a raster to bytes.

    Args:
        thumb: Raster to encode
        fmt: Output MIME type; defaults to the raster's source format
        quality: Quality for lossy formats, ignored otherwise

    Returns:
        Encoded image bytes

    Raises:
        UnsupportedFormat: If ``fmt`` is not JPEG, PNG or GIF
        CodecUnavailable: If Pillow lacks the encoder
        EncodeFailed: If Pillow fails to write the image
    """
    target = SupportedFormat.from_mime(fmt, Stage.ENCODE) if fmt is not None else thumb.format
    return get_encoder(target).encode(thumb.image, quality)
