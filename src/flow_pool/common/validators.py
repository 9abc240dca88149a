from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def normalize_email(value: Optional[str], field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name).lower()
    if "@" not in email:
        raise ValidationError(f"{field_name} is not a valid address")
    return email


def normalize_code(value: Optional[str], field_name: str = "Flow code") -> str:
    """Codes are short labels like G1/E3; compare them case-insensitively."""
    return require_non_empty(value, field_name).upper()


def optional_code(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return normalize_code(value)
