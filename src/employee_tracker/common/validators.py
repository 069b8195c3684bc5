from __future__ import annotations

import re
from typing import Optional

from ..core.constants import MAX_RATING, MIN_RATING
from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: str) -> str:
    email = require_non_empty(value, "Email")
    if not _EMAIL_RE.match(email):
        raise ValidationError("Email is not valid")
    return email


def require_rating(value: Optional[float], field_name: str) -> float:
    try:
        rating = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if rating != rating or not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f"{field_name} must be between {MIN_RATING:.1f} and {MAX_RATING:.1f}")
    return rating
