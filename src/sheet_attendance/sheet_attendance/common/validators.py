from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"Не указано поле «{field_name}»", reason="missing_fields")
    return str(value).strip()


def optional_text(value: Any) -> str:
    """Stringify an optional request value; None becomes an empty string."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
