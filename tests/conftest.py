"""Test configuration and fixtures for cl_thumbnailer.

Images are synthesized in memory with Pillow so the suite needs no media
files on disk.
"""

from collections.abc import Callable, Iterator
from io import BytesIO

import pytest
from loguru import logger
from PIL import Image, ImageDraw

ImageFactory = Callable[..., bytes]


def _draw_pattern(img: Image.Image) -> None:
    """Grid lines and a circle, so encoders have real content to work with."""
    draw = ImageDraw.Draw(img)
    width, height = img.size
    fill = 255 if img.mode == "L" else (255, 255, 255)
    for x in range(0, width, 50):
        draw.line([(x, 0), (x, height)], fill=fill, width=2)
    for y in range(0, height, 50):
        draw.line([(0, y), (width, y)], fill=fill, width=2)
    draw.ellipse(
        [width * 3 // 8, height // 3, width * 5 // 8, height * 2 // 3],
        fill=100 if img.mode == "L" else (200, 100, 100),
    )


def encode_image(img: Image.Image, pil_format: str, **save_kwargs: object) -> bytes:
    buffer = BytesIO()
    img.save(buffer, format=pil_format, **save_kwargs)
    return buffer.getvalue()


# ============================================================================
# Function-Scoped Fixtures (Run Per Test)
# ============================================================================


@pytest.fixture
def make_image() -> ImageFactory:
    """Factory producing encoded image bytes.

    Usage:
        data = make_image("PNG", (200, 100))
        data = make_image("GIF", (64, 64), mode="P")
    """

    def factory(
        pil_format: str = "JPEG",
        size: tuple[int, int] = (800, 600),
        mode: str = "RGB",
        **save_kwargs: object,
    ) -> bytes:
        base_mode = "L" if mode == "L" else "RGB"
        img = Image.new(base_mode, size, color=80 if base_mode == "L" else (73, 109, 137))
        _draw_pattern(img)
        if mode != base_mode:
            img = img.convert(mode)
        return encode_image(img, pil_format, **save_kwargs)

    return factory


@pytest.fixture
def synthetic_jpeg(make_image: ImageFactory) -> bytes:
    """800x600 JPEG with a grid and a circle."""
    return make_image("JPEG", (800, 600), quality=85)


@pytest.fixture
def synthetic_png(make_image: ImageFactory) -> bytes:
    """200x100 PNG."""
    return make_image("PNG", (200, 100))


@pytest.fixture
def synthetic_gif(make_image: ImageFactory) -> bytes:
    """64x48 palette GIF."""
    return make_image("GIF", (64, 48), mode="P")


@pytest.fixture
def noisy_jpeg() -> bytes:
    """128x128 JPEG of random noise; compresses poorly, useful for quality checks."""
    img = Image.effect_noise((128, 128), 64).convert("RGB")
    return encode_image(img, "JPEG", quality=95)


@pytest.fixture
def bmp_bytes(make_image: ImageFactory) -> bytes:
    """A valid image in a format outside the supported set."""
    return make_image("BMP", (40, 30))


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect loguru messages (INFO and above) emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="INFO")
    yield messages
    logger.remove(handler_id)
