from __future__ import annotations

import re
from datetime import date
from typing import Any, Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_HHMM_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return value.strip() or None


def require_iso_date(value: Any, field_name: str = "date") -> date:
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid calendar date")


def optional_hhmm(value: Any, field_name: str) -> Optional[str]:
    """Blank or missing means "no time"; anything else must be HH:MM."""

    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be HH:MM")
    value = value.strip()
    if not value:
        return None
    if not _HHMM_RE.match(value):
        raise ValidationError(f"{field_name} must be HH:MM")
    return value


def require_status(value: Any, field_name: str = "status") -> AttendanceStatus:
    try:
        return AttendanceStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def optional_status(value: Any, field_name: str = "status") -> Optional[AttendanceStatus]:
    if value is None or value == "":
        return None
    return require_status(value, field_name)


def positive_int(value: Any, field_name: str, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if parsed <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return parsed
