"""Thumbnailer - load, size, render and encode a thumbnail from image bytes."""

from contextlib import ExitStack
from types import TracebackType
from typing import Self

from loguru import logger

from .algo.loader import load
from .algo.raster import RasterImage
from .algo.renderer import encode, render
from .algo.size_resolver import resolve_size
from .common.errors import Stage, ThumbnailError
from .common.schemas import Dimensions, ThumbnailConfig, ThumbnailResult
from .utils.media_types import SupportedFormat
from .utils.profiling import timed


class Thumbnailer:
    """Stateful thumbnail builder.

    Holds at most one source raster and its thumbnail. Both are released by
    ``free_all()``, by loading new data, or on leaving a ``with`` block.

    Example:
        with Thumbnailer(max_width=400, max_height=300) as thumbnailer:
            thumbnailer.load_data(raw_bytes)
            png = thumbnailer.to_bytes("image/png")
    """

    def __init__(self, config: ThumbnailConfig | None = None, **options: object):
        """Initialize thumbnailer.

        Args:
            config: Thumbnail settings. If None, built from ``options``.
            **options: ThumbnailConfig fields, used when ``config`` is None
        """
        if config is not None and options:
            raise TypeError("Pass either a ThumbnailConfig or keyword options, not both")
        self.config: ThumbnailConfig = (
            config if config is not None else ThumbnailConfig.model_validate(options)
        )
        self._source: RasterImage | None = None
        self._thumb: RasterImage | None = None
        self._mime: SupportedFormat | None = None
        self._source_size: Dimensions | None = None
        self._thumb_size: Dimensions | None = None

    def load_data(self, data: bytes, mime: str | SupportedFormat | None = None) -> None:
        """Decode ``data`` and build the thumbnail raster.

        Args:
            data: Encoded image bytes
            mime: Optional MIME type of ``data``; detected when omitted

        Raises:
            UnsupportedFormat, CodecUnavailable, DecodeFailed: On load failure
        """
        self.free_all()
        self._mime = None
        self._source_size = None
        self._thumb_size = None
        config = self.config

        try:
            with ExitStack() as stack:
                source = stack.enter_context(load(data, mime))
                size = resolve_size(
                    source.width,
                    source.height,
                    config.max_width,
                    config.max_height,
                    scale=config.scale,
                    inflate=config.inflate,
                )
                thumb = stack.enter_context(
                    render(source, size, config.max_width, config.max_height)
                )
                _ = stack.pop_all()
        except ThumbnailError as exc:
            logger.warning(f"Thumbnail {exc.stage} failed: {exc.message}")
            raise

        self._source, self._thumb = source, thumb
        self._mime = source.format
        self._source_size = Dimensions(source.width, source.height)
        self._thumb_size = Dimensions(thumb.width, thumb.height)
        logger.debug(
            f"Loaded {source.format} {source.width}x{source.height} -> "
            + f"thumbnail {thumb.width}x{thumb.height}"
            + (" (shared buffer)" if thumb.shares_buffer_with(source) else "")
        )

    def _require_loaded(self) -> None:
        if self._mime is None:
            raise RuntimeError("No image loaded. Call load_data() first.")

    @property
    def mime(self) -> SupportedFormat:
        """MIME type of the loaded source image."""
        self._require_loaded()
        assert self._mime is not None
        return self._mime

    @property
    def source_width(self) -> int:
        self._require_loaded()
        assert self._source_size is not None
        return self._source_size.width

    @property
    def source_height(self) -> int:
        self._require_loaded()
        assert self._source_size is not None
        return self._source_size.height

    @property
    def thumb_width(self) -> int:
        self._require_loaded()
        assert self._thumb_size is not None
        return self._thumb_size.width

    @property
    def thumb_height(self) -> int:
        self._require_loaded()
        assert self._thumb_size is not None
        return self._thumb_size.height

    def to_bytes(self, target_mime: str | SupportedFormat | None = None) -> bytes:
        """Encode the thumbnail.

        Args:
            target_mime: Output MIME type; defaults to the source's type

        Returns:
            Encoded thumbnail bytes

        Raises:
            RuntimeError: If nothing is loaded or the thumbnail was freed
            UnsupportedFormat, CodecUnavailable, EncodeFailed: On encode failure
        """
        if self._thumb is None:
            raise RuntimeError("No thumbnail available. Call load_data() first.")

        try:
            encoded = encode(self._thumb, target_mime, self.config.quality)
        except ThumbnailError as exc:
            logger.warning(f"Thumbnail {exc.stage} failed: {exc.message}")
            raise

        logger.debug(f"Encoded thumbnail as {target_mime or self._thumb.format} ({len(encoded)} bytes)")
        return encoded

    def free_source(self) -> None:
        if self._source is not None:
            self._source.release()
            self._source = None

    def free_thumb(self) -> None:
        if self._thumb is not None:
            self._thumb.release()
            self._thumb = None

    def free_all(self) -> None:
        self.free_source()
        self.free_thumb()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.free_all()


@timed
def generate_thumbnail(
    data: bytes,
    config: ThumbnailConfig | None = None,
    mime_hint: str | SupportedFormat | None = None,
    target_mime: str | SupportedFormat | None = None,
) -> ThumbnailResult:
    """
    Run the whole pipeline on one image.

    Source and thumbnail buffers are released before returning, on success
    and on every failure.

    Args:
        data: Encoded source image bytes
        config: Thumbnail settings (defaults to ThumbnailConfig())
        mime_hint: Optional MIME type of ``data``
        target_mime: Output MIME type; defaults to the source's type

    Returns:
        ThumbnailResult with the encoded bytes and dimensions

    Raises:
        ThumbnailError: Subclass identifying the failure; ``stage`` tells
            load from encode
    """
    try:
        target = (
            SupportedFormat.from_mime(target_mime, Stage.ENCODE) if target_mime is not None else None
        )
    except ThumbnailError as exc:
        logger.warning(f"Thumbnail {exc.stage} failed: {exc.message}")
        raise

    with Thumbnailer(config or ThumbnailConfig()) as thumbnailer:
        thumbnailer.load_data(data, mime_hint)
        encoded = thumbnailer.to_bytes(target)

        return ThumbnailResult(
            data=encoded,
            mime=target or thumbnailer.mime,
            width=thumbnailer.thumb_width,
            height=thumbnailer.thumb_height,
            source_width=thumbnailer.source_width,
            source_height=thumbnailer.source_height,
        )
