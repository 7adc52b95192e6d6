from __future__ import annotations

from typing import Any

from ..core.enums import Role
from ..core.exceptions import InvalidInput


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidInput(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise InvalidInput(f"{field_name} must be at least {min_len} characters")
    return value


def require_role(value: Any) -> Role:
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(r.value for r in Role)
        raise InvalidInput(f"role must be one of: {allowed}")
