from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    text = "" if value is None else str(value)
    if not text.strip():
        raise ValidationError(f"{field_name} is required")
    return text.strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_name(value: Any, field_name: str, max_len: int) -> str:
    """Trimmed, non-empty and bounded."""
    return require_max_length(require_non_empty(value, field_name), field_name, max_len)
