"""Format dispatch: one decode/encode strategy per supported format."""

from dataclasses import dataclass, field
from io import BytesIO

from PIL import Image, features

from ..common.errors import CodecUnavailable, EncodeFailed, Stage
from ..utils.media_types import SupportedFormat


@dataclass(frozen=True)
class Codec:
    """Decode/encode strategy for one format.

    Attributes:
        fmt: Format this codec handles
        feature: Pillow codec feature backing it (None when built into Pillow)
        lossy: Whether the encoder honours a quality setting
        save_options: Extra keyword arguments for ``Image.save``
        modes: Image modes the encoder writes as-is
    """

    fmt: SupportedFormat
    feature: str | None = None
    lossy: bool = False
    modes: tuple[str, ...] = ("L", "P", "RGB", "RGBA")
    save_options: dict[str, object] = field(default_factory=dict)

    def can_decode(self) -> bool:
        Image.init()
        return self.fmt.pil_format in Image.OPEN and self._feature_available()

    def can_encode(self) -> bool:
        Image.init()
        return self.fmt.pil_format in Image.SAVE and self._feature_available()

    def _feature_available(self) -> bool:
        if self.feature is None:
            return True
        return bool(features.check_codec(self.feature))

    def prepare(self, image: Image.Image) -> Image.Image:
        """Return an image in a mode the encoder can write.

        Modes outside ``modes`` become RGBA when the image carries alpha and
        the encoder can store it, RGB otherwise.
        """
        if image.mode in self.modes:
            return image
        has_alpha = image.mode in ("LA", "PA", "RGBa", "La") or "transparency" in image.info
        return image.convert("RGBA" if has_alpha and "RGBA" in self.modes else "RGB")

    def encode(self, image: Image.Image, quality: int) -> bytes:
        save_kwargs: dict[str, object] = dict(self.save_options)
        if self.lossy:
            save_kwargs["quality"] = quality

        prepared = self.prepare(image)
        buffer = BytesIO()
        try:
            prepared.save(buffer, format=self.fmt.pil_format, **save_kwargs)
        except (OSError, ValueError, SystemError) as exc:
            raise EncodeFailed(
                f"Could not write {self.fmt} image of size {image.size}: {exc}"
            ) from exc
        finally:
            if prepared is not image:
                prepared.close()
        return buffer.getvalue()


CODECS: dict[SupportedFormat, Codec] = {
    SupportedFormat.JPEG: Codec(
        SupportedFormat.JPEG, feature="jpg", lossy=True, modes=("L", "RGB", "CMYK")
    ),
    SupportedFormat.PNG: Codec(
        SupportedFormat.PNG,
        feature="zlib",
        modes=("1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"),
    ),
    SupportedFormat.GIF: Codec(SupportedFormat.GIF),
}

if set(CODECS) != set(SupportedFormat):
    raise RuntimeError("Every supported format needs a registered codec")


def get_decoder(fmt: SupportedFormat) -> Codec:
    """Return the codec for ``fmt``, failing if this runtime cannot decode it.

    Raises:
        CodecUnavailable: If Pillow was built without the decoder
    """
    codec = CODECS[fmt]
    if not codec.can_decode():
        raise CodecUnavailable(
            f"Decoder for {fmt} not available. Please install Pillow with {codec.feature} support.",
            Stage.LOAD,
        )
    return codec


def get_encoder(fmt: SupportedFormat) -> Codec:
    """Return the codec for ``fmt``, failing if this runtime cannot encode it.

    Raises:
        CodecUnavailable: If Pillow was built without the encoder
    """
    codec = CODECS[fmt]
    if not codec.can_encode():
        raise CodecUnavailable(
            f"Encoder for {fmt} not available. Please install Pillow with {codec.feature} support.",
            Stage.ENCODE,
        )
    return codec
