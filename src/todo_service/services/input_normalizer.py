"""Cleanup and validation of free-form task input."""

import re

from ..errors import InputValidationError, ValidationFailure

INPUT_MIN_LENGTH = 2
INPUT_MAX_LENGTH = 500

# Pure punctuation, emoji and whitespace are rejected; any of these scripts passes.
MEANINGFUL_TEXT_PATTERN = re.compile(
    "["
    "\u1100-\u11ff\u3131-\u318e\uac00-\ud7a3"  # Hangul jamo, compatibility jamo, syllables
    "a-zA-Z"
    "0-9"
    "\u4e00-\u9fff"  # CJK ideographs
    "\u3040-\u309f\u30a0-\u30ff"  # hiragana, katakana
    "]"
)


def normalize_input(raw: str) -> str:
    """Trim and collapse whitespace in task input.

    Runs of newlines collapse to a single newline and every other
    whitespace run collapses to a single space. Applying it twice gives the
    same result as applying it once.
    """
    text = raw.strip()
    text = re.sub(r"[^\S\n]+", " ", text)
    text = re.sub(r" ?\n[\s]*", "\n", text)
    return text


def validate_input(text: str) -> None:
    """Check that normalized input is usable for extraction.

    Args:
        text: Output of normalize_input

    Raises:
        InputValidationError: With the failure kind and a caller-facing message
    """
    if len(text) == 0:
        raise InputValidationError(ValidationFailure.EMPTY_INPUT, "Please enter a task.")

    if len(text) < INPUT_MIN_LENGTH:
        raise InputValidationError(
            ValidationFailure.TOO_SHORT,
            f"Task text must be at least {INPUT_MIN_LENGTH} characters.",
        )

    if len(text) > INPUT_MAX_LENGTH:
        raise InputValidationError(
            ValidationFailure.TOO_LONG,
            f"Task text can be at most {INPUT_MAX_LENGTH} characters. (current: {len(text)})",
        )

    if not MEANINGFUL_TEXT_PATTERN.search(text):
        raise InputValidationError(
            ValidationFailure.NO_MEANINGFUL_TEXT,
            "Task text must contain letters or digits (Korean, English, numbers, etc.).",
        )
