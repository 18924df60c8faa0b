"""
Required-field checks for request DTOs.
"""

from typing import Any

from sqlmodel import SQLModel

from codeclash.core.exceptions import ValidationError


def is_blank(value: Any) -> bool:
    return value is None or value == ""


def require_fields(payload: SQLModel, *fields: str) -> None:
    """Raise ValidationError naming every required field that is absent or empty."""
    missing = [name for name in fields if is_blank(getattr(payload, name, None))]
    if missing:
        raise ValidationError("Missing required fields", details={"missing": missing})
