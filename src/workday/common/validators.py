from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import format_hhmm, parse_hhmm


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def normalize_hhmm(value: Optional[str], field_name: str) -> Optional[str]:
    """Validate an optional HH:MM value and return it zero-padded."""
    if value is None:
        return None
    v = str(value).strip()
    if not v:
        raise ValidationError(f"{field_name} must not be blank")
    return format_hhmm(parse_hhmm(v))
