"""Winner screenshot naming contract and data-URL decoding.

Filename layout: ``<MM-DD>[_(Name)][_(Score)].png``. The name is sanitized
to ``[A-Za-z0-9_-]`` so it can never contain parentheses, which keeps the
pattern unambiguous. A score suffix is only written after a name suffix, so a
single suffix is always a name.
"""
import base64
import binascii
import re

from civle.domain.day_key import is_day_key
from civle.domain.enums import ValidationReason
from civle.domain.errors import ValidationError
from civle.domain.score_entry import is_valid_score

IMAGE_EXTENSION = ".png"

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")

FILENAME_PATTERN = re.compile(
    r"^(?P<day_key>\d{2}-\d{2})"
    r"(?:_\((?P<name>[A-Za-z0-9_-]+)\))?"
    r"(?:_\((?P<score>-?\d+(?:\.\d+)?)\))?"
    + re.escape(IMAGE_EXTENSION)
    + r"$"
)

_DATA_URL_PATTERN = re.compile(r"^data:image/png;base64,(?P<payload>.+)$", re.DOTALL)
_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
_SCORE_TEXT = re.compile(r"^-?\d+(?:\.\d+)?$")


class ScreenshotInfo:
    """Metadata recovered from a winner screenshot filename."""

    def __init__(self, day_key: str, path: str, name: str | None = None, score=None):
        self.day_key = day_key
        self.path = path
        self.name = name
        self.score = score

    def __repr__(self) -> str:
        return f"ScreenshotInfo(day_key={self.day_key!r}, name={self.name!r}, score={self.score!r})"


def sanitize_name(name: str) -> str:
    return _UNSAFE_NAME_CHARS.sub("_", name)


def format_score(score) -> str:
    """Render a score for a filename; integral floats lose the ``.0``."""
    if isinstance(score, float) and score.is_integer():
        return str(int(score))
    return str(score)


def parse_score(text: str) -> int | float:
    return float(text) if "." in text else int(text)


def build_filename(day_key: str, name: str | None = None, score=None) -> str:
    filename = day_key
    if name:
        filename += f"_({sanitize_name(name)})"
        if score is not None and is_valid_score(score):
            rendered = format_score(score)
            if _SCORE_TEXT.match(rendered):
                filename += f"_({rendered})"
    return filename + IMAGE_EXTENSION


def parse_filename(filename: str) -> dict | None:
    """Inverse of :func:`build_filename`. Returns None for foreign files."""
    match = FILENAME_PATTERN.match(filename)
    if not match:
        return None
    score = match.group("score")
    return {
        "day_key": match.group("day_key"),
        "name": match.group("name"),
        "score": parse_score(score) if score is not None else None,
    }


def decode_data_url(data_url: str) -> bytes:
    """Decode a ``data:image/png;base64,...`` URL into PNG bytes."""
    if not isinstance(data_url, str):
        raise ValidationError(ValidationReason.INVALID_IMAGE)
    match = _DATA_URL_PATTERN.match(data_url.strip())
    if not match:
        raise ValidationError(ValidationReason.INVALID_IMAGE, "Screenshot must be a PNG data URL")
    try:
        image = base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError(ValidationReason.INVALID_IMAGE, "Screenshot is not valid base64")
    return validate_png(image)


def validate_png(image: bytes) -> bytes:
    if not image.startswith(_PNG_SIGNATURE):
        raise ValidationError(ValidationReason.INVALID_IMAGE, "Screenshot is not a PNG image")
    return image


def encode_data_url(image: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(image).decode("ascii")


def filename_day_key(filename: str) -> str | None:
    """Day-key prefix of any ``<MM-DD>...png`` file, parsable or not."""
    if not filename.endswith(IMAGE_EXTENSION):
        return None
    prefix = filename[:5]
    return prefix if is_day_key(prefix) else None
