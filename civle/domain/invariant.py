"""Validation guards for score submissions."""
from typing import Iterable

from civle.domain.enums import ValidationReason
from civle.domain.errors import ValidationError
from civle.domain.score_entry import ScoreEntry, is_valid_score


def validate_score(score) -> None:
    """Raises if the score is missing or not a finite number."""
    if score is None:
        raise ValidationError(ValidationReason.MISSING_SCORE)
    if not is_valid_score(score):
        raise ValidationError(ValidationReason.INVALID_SCORE)


def validate_name_allowed(name: str, blocked_words: Iterable[str]) -> None:
    """Raises if the name contains a blocked word (case-insensitive substring)."""
    lowered = name.lower()
    if any(word and word.lower() in lowered for word in blocked_words):
        raise ValidationError(ValidationReason.BAD_WORD)


def validate_name_available(entries: Iterable[ScoreEntry], name: str) -> None:
    """Raises if another entry already uses the name (case-insensitive)."""
    lowered = name.lower()
    for entry in entries:
        if entry.name is not None and entry.name.lower() == lowered:
            raise ValidationError(ValidationReason.DUPLICATE_NAME)
