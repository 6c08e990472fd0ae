"""Unit tests for thumbnail rendering and encoding.

Tests resampling, the shared-buffer shortcut, colour-mode handling and
format dispatch on encode.
"""

from io import BytesIO
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from cl_thumbnailer.algo.loader import load
from cl_thumbnailer.algo.raster import RasterImage
from cl_thumbnailer.algo.renderer import encode, render
from cl_thumbnailer.common.errors import CodecUnavailable, Stage, UnsupportedFormat
from cl_thumbnailer.common.schemas import Dimensions
from cl_thumbnailer.utils.media_types import SupportedFormat

# ============================================================================
# RENDER - RESAMPLING
# ============================================================================


def test_render_resizes_to_exact_size(synthetic_jpeg: bytes):
    with load(synthetic_jpeg) as source:
        with render(source, Dimensions(400, 300)) as thumb:
            assert thumb.size == (400, 300)
            assert thumb.image.size == (400, 300)
            assert thumb.format is SupportedFormat.JPEG
            assert not thumb.shares_buffer_with(source)


def test_render_leaves_source_untouched(synthetic_png: bytes):
    with load(synthetic_png) as source:
        with render(source, (50, 50)):
            pass

        assert not source.released
        assert source.image.size == (200, 100)


def test_render_can_upscale(synthetic_gif: bytes):
    with load(synthetic_gif) as source:
        with render(source, (640, 480)) as thumb:
            assert thumb.size == (640, 480)


def test_render_palette_to_true_colour(synthetic_gif: bytes):
    """Palette images are resampled in RGB, not with nearest-neighbour."""
    with load(synthetic_gif) as source:
        with render(source, (32, 24)) as thumb:
            assert thumb.image.mode == "RGB"


def test_render_keeps_transparency():
    img = Image.new("P", (40, 40), color=0)
    img.info["transparency"] = 0
    with RasterImage(img, SupportedFormat.GIF) as source:
        with render(source, (20, 20)) as thumb:
            assert thumb.image.mode == "RGBA"


def test_render_zero_height_axis():
    with RasterImage(Image.new("RGB", (1000, 1)), SupportedFormat.PNG) as source:
        with render(source, (10, 0)) as thumb:
            assert thumb.size == (10, 0)


# ============================================================================
# RENDER - SHARED BUFFER SHORTCUT
# ============================================================================


def test_render_shares_buffer_when_source_matches_bounds():
    img = Image.new("RGB", (100, 80))
    source = RasterImage(img, SupportedFormat.PNG)

    thumb = render(source, (100, 80), max_width=100, max_height=80)

    assert thumb.shares_buffer_with(source)
    assert thumb.image is source.image

    source.release()
    source.release()
    thumb.release()


def test_shared_buffer_closed_exactly_once():
    img = Image.new("RGB", (100, 80))
    img.close = MagicMock(wraps=img.close)
    source = RasterImage(img, SupportedFormat.PNG)
    thumb = render(source, (100, 80), max_width=100, max_height=80)

    source.release()
    assert img.close.call_count == 0
    assert thumb.image.size == (100, 80)

    thumb.release()
    thumb.release()
    assert img.close.call_count == 1


def test_render_does_not_share_when_only_target_matches():
    """The shortcut compares against the configured bounds, not the target."""
    with RasterImage(Image.new("RGB", (100, 80)), SupportedFormat.PNG) as source:
        with render(source, (100, 80), max_width=200, max_height=160) as thumb:
            assert not thumb.shares_buffer_with(source)
            assert thumb.size == (100, 80)


def test_render_does_not_share_when_one_bound_unset():
    with RasterImage(Image.new("RGB", (100, 80)), SupportedFormat.PNG) as source:
        with render(source, (100, 80), max_width=100) as thumb:
            assert not thumb.shares_buffer_with(source)


# ============================================================================
# ENCODE
# ============================================================================


def _decode_size(data: bytes) -> tuple[str | None, tuple[int, int]]:
    with Image.open(BytesIO(data)) as img:
        return img.format, img.size


def test_encode_defaults_to_source_format(synthetic_png: bytes):
    with load(synthetic_png) as source, render(source, (60, 30)) as thumb:
        data = encode(thumb)

    assert _decode_size(data) == ("PNG", (60, 30))


@pytest.mark.parametrize("mime", ["image/jpeg", "image/png", "image/gif"])
def test_encode_round_trip_preserves_size(synthetic_jpeg: bytes, mime: str):
    with load(synthetic_jpeg) as source, render(source, (123, 77)) as thumb:
        data = encode(thumb, mime)

    with load(data) as decoded:
        assert decoded.format == mime
        assert decoded.size == (123, 77)


def test_encode_rgba_as_jpeg():
    """Alpha is dropped for JPEG output."""
    with RasterImage(Image.new("RGBA", (20, 20), (10, 20, 30, 128)), SupportedFormat.PNG) as thumb:
        data = encode(thumb, SupportedFormat.JPEG)

    assert _decode_size(data) == ("JPEG", (20, 20))


def test_encode_quality_applies_to_jpeg(noisy_jpeg: bytes):
    with load(noisy_jpeg) as thumb:
        low = encode(thumb, "image/jpeg", quality=10)
        high = encode(thumb, "image/jpeg", quality=95)

    assert len(low) < len(high)


def test_encode_quality_ignored_for_png(synthetic_png: bytes):
    with load(synthetic_png) as thumb:
        assert encode(thumb, "image/png", quality=10) == encode(thumb, "image/png", quality=95)


def test_encode_unsupported_format(synthetic_png: bytes):
    with load(synthetic_png) as thumb:
        with pytest.raises(UnsupportedFormat) as exc_info:
            _ = encode(thumb, "image/bmp")

    assert exc_info.value.stage is Stage.ENCODE


def test_encode_without_jpeg_codec(synthetic_png: bytes):
    with load(synthetic_png) as thumb:
        with patch("cl_thumbnailer.algo.codecs.features.check_codec", return_value=False):
            with pytest.raises(CodecUnavailable) as exc_info:
                _ = encode(thumb, "image/jpeg")

    assert exc_info.value.stage is Stage.ENCODE


@pytest.mark.parametrize(
    ("mode", "mime", "expected_mode"),
    [
        ("CMYK", "image/png", "RGB"),
        ("CMYK", "image/gif", "P"),
        ("LA", "image/jpeg", "RGB"),
        ("LA", "image/png", "LA"),
    ],
)
def test_encode_converts_unwritable_modes(mode: str, mime: str, expected_mode: str):
    """Modes the target encoder cannot store are converted, not rejected."""
    with RasterImage(Image.new(mode, (30, 20)), SupportedFormat.JPEG) as thumb:
        data = encode(thumb, mime)

    with Image.open(BytesIO(data)) as img:
        assert img.size == (30, 20)
        assert img.mode == expected_mode
