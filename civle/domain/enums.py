"""Enums used across the domain."""
from enum import Enum


class ValidationReason(str, Enum):
    MISSING_SCORE = "missing_score"
    INVALID_SCORE = "invalid_score"
    BAD_WORD = "bad_word"
    DUPLICATE_NAME = "duplicate_name"
    INVALID_IMAGE = "invalid_image"

    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    ValidationReason.MISSING_SCORE: "Score required",
    ValidationReason.INVALID_SCORE: "Score must be a finite number",
    ValidationReason.BAD_WORD: "Name contains inappropriate content",
    ValidationReason.DUPLICATE_NAME: "Name already taken",
    ValidationReason.INVALID_IMAGE: "Invalid screenshot data",
}
