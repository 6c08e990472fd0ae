"""Pure image loading logic: bytes in, decoded raster out."""

from io import BytesIO

from PIL import Image, UnidentifiedImageError

from ..common.errors import DecodeFailed, Stage, UnsupportedFormat
from ..utils.media_types import SupportedFormat
from .codecs import get_decoder
from .raster import RasterImage


def detect_format(data: bytes) -> SupportedFormat:
    """
    Identify the format of encoded image bytes from their signature.

    Args:
        data: Encoded image bytes

    Returns:
        The detected supported format

    Raises:
        UnsupportedFormat: If the bytes are not a recognizable image, or the
            image format is not JPEG, PNG or GIF
        DecodeFailed: If the signature matches but the header is broken
    """
    try:
        with Image.open(BytesIO(data)) as img:
            pil_format = img.format
    except UnidentifiedImageError as exc:
        raise UnsupportedFormat("Could not identify image data", Stage.LOAD) from exc
    except (OSError, EOFError, ValueError) as exc:
        raise DecodeFailed(f"Could not read image header: {exc}", Stage.LOAD) from exc
    return SupportedFormat.from_pil_format(pil_format)


def load(data: bytes, mime_hint: str | SupportedFormat | None = None) -> RasterImage:
    """
    Decode image bytes into an owned raster.

    Without a hint the format is sniffed from the bytes. With a hint the
    hint is validated first and the bytes must decode as that format.

    Args:
        data: Encoded image bytes
        mime_hint: Optional MIME type the caller claims the bytes are

    Returns:
        RasterImage owning the decoded pixels

    Raises:
        UnsupportedFormat: Unknown/unsupported format or hint
        CodecUnavailable: Pillow lacks the decoder for the format
        DecodeFailed: Bytes are not a valid image of the claimed format
    """
    claimed = SupportedFormat.from_mime(mime_hint) if mime_hint is not None else None
    formats = [claimed.pil_format] if claimed is not None else None

    try:
        img = Image.open(BytesIO(data), formats=formats)
    except UnidentifiedImageError as exc:
        if claimed is None:
            raise UnsupportedFormat("Could not identify image data", Stage.LOAD) from exc
        raise DecodeFailed(f"Data is not a valid {claimed} image", Stage.LOAD) from exc
    except (OSError, EOFError, ValueError) as exc:
        raise DecodeFailed(f"Could not read image header: {exc}", Stage.LOAD) from exc

    try:
        fmt = SupportedFormat.from_pil_format(img.format)
        _ = get_decoder(fmt)

        header_size = img.size
        try:
            img.load()
        except (OSError, EOFError, ValueError, SyntaxError) as exc:
            raise DecodeFailed(f"Could not decode {fmt} image: {exc}", Stage.LOAD) from exc

        if img.size != header_size:
            raise DecodeFailed(
                f"Decoded size {img.size} does not match header size {header_size}",
                Stage.LOAD,
            )
    except BaseException:
        img.close()
        raise

    return RasterImage(img, fmt)
