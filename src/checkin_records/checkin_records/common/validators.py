from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, Type, TypeVar

from ..core.constants import MAX_RECORD_ID_LENGTH
from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_RECORD_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} must be a non-empty string")
    return value.strip()


def require_choice(value: Any, enum_cls: Type[E], field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(str(m.value) for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {choices}")


def require_positive_minutes(value: Any) -> float:
    """Accept numbers and numeric strings; reject booleans, NaN, infinities and values <= 0."""
    if isinstance(value, bool):
        raise ValidationError("minutes must be a positive number")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ValidationError("minutes must be a positive number")
    if not isinstance(value, (int, float)):
        raise ValidationError("minutes must be a positive number")

    try:
        minutes = float(value)
    except OverflowError:
        raise ValidationError("minutes must be a positive number")
    if not math.isfinite(minutes) or minutes <= 0:
        raise ValidationError("minutes must be a positive number")
    return minutes


def require_record_id(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationError("id required")
    if len(value) > MAX_RECORD_ID_LENGTH or not _RECORD_ID_RE.match(value):
        raise ValidationError("id is malformed")
    return value
