from enum import StrEnum

from ..common.errors import Stage, UnsupportedFormat

_MIME_ALIASES: dict[str, str] = {
    "image/jpg": "image/jpeg",
    "image/pjpeg": "image/jpeg",
    "image/x-png": "image/png",
}


class SupportedFormat(StrEnum):
    JPEG = "image/jpeg"
    PNG = "image/png"
    GIF = "image/gif"

    @classmethod
    def from_mime(
        cls, mime: "str | SupportedFormat", stage: Stage = Stage.LOAD
    ) -> "SupportedFormat":
        if isinstance(mime, SupportedFormat):
            return mime

        normalized = mime.strip().lower()
        normalized = _MIME_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedFormat(f"Image MIME type {mime} not supported", stage) from None

    @classmethod
    def from_pil_format(
        cls, pil_format: str | None, stage: Stage = Stage.LOAD
    ) -> "SupportedFormat":
        for member in cls:
            if member.pil_format == pil_format:
                return member
        raise UnsupportedFormat(f"Image format {pil_format} not supported", stage)

    @property
    def pil_format(self) -> str:
        return self.name

    @property
    def extension(self) -> str:
        return "jpg" if self is SupportedFormat.JPEG else self.name.lower()


def is_supported_mime(mime: str) -> bool:
    try:
        _ = SupportedFormat.from_mime(mime)
    except UnsupportedFormat:
        return False
    return True
