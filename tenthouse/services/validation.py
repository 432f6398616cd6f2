# tenthouse/services/validation.py
"""
Input checks for public testimonial submissions.

Every rule runs, so the visitor sees all problems at once instead of fixing
them one round-trip at a time.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

DEFAULT_SPAM_WORDS: Tuple[str, ...] = (
    "viagra", "casino", "poker", "loan", "debt",
    "free money", "click here", "buy now",
)

_LINK_RE = re.compile(r"https?://", re.IGNORECASE)


@dataclass(frozen=True)
class ValidationRules:
    name_min: int = 2
    name_max: int = 100
    message_min: int = 10
    message_max: int = 1000
    rating_min: int = 1
    rating_max: int = 5
    spam_words: Tuple[str, ...] = DEFAULT_SPAM_WORDS
    max_links: int = 2

    @classmethod
    def from_settings(cls, settings) -> "ValidationRules":
        return cls(
            name_min=settings.NAME_MIN_LENGTH,
            name_max=settings.NAME_MAX_LENGTH,
            message_min=settings.MESSAGE_MIN_LENGTH,
            message_max=settings.MESSAGE_MAX_LENGTH,
            spam_words=tuple(w.lower() for w in settings.SPAM_WORDS),
            max_links=settings.MAX_LINKS,
        )


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)


def coerce_rating(value: Any) -> Optional[int]:
    """
    Turn a submitted rating into an int, or None when it is not a whole number.
    Accepts 4, 4.0, "4" and " 4.0 "; rejects booleans, 4.5 and "four".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            return int(raw)
        except ValueError:
            pass
        try:
            number = float(raw)
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


def contains_spam(text: str, spam_words: Tuple[str, ...] = DEFAULT_SPAM_WORDS) -> bool:
    lowered = (text or "").lower()
    return any(word in lowered for word in spam_words)


def count_links(text: str) -> int:
    return len(_LINK_RE.findall(text or ""))


def _check_length(value: str, label: str, minimum: int, maximum: int) -> Optional[str]:
    if not value:
        return f"{label} is required"
    if len(value) < minimum:
        return f"{label} must be at least {minimum} characters long"
    if len(value) > maximum:
        return f"{label} must be less than {maximum} characters"
    return None


def validate(name: Any, rating: Any, message: Any, rules: ValidationRules = ValidationRules()) -> ValidationResult:
    errors: List[str] = []
    # lists, numbers and booleans from a JSON body count as missing
    name = name if isinstance(name, str) else ""
    message = message if isinstance(message, str) else ""

    name_error = _check_length(name.strip(), "Name", rules.name_min, rules.name_max)
    if name_error:
        errors.append(name_error)

    score = coerce_rating(rating)
    if score is None or not rules.rating_min <= score <= rules.rating_max:
        errors.append(f"Rating must be between {rules.rating_min} and {rules.rating_max}")

    message_error = _check_length(message.strip(), "Message", rules.message_min, rules.message_max)
    if message_error:
        errors.append(message_error)

    combined = f"{name} {message}"
    if contains_spam(combined, rules.spam_words):
        errors.append("Your message contains inappropriate content")
    if count_links(combined) > rules.max_links:
        errors.append("Your message contains too many links")

    return ValidationResult(valid=not errors, errors=errors)
