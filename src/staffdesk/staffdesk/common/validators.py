from __future__ import annotations

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from ..core.exceptions import ValidationError
from .datetime_utils import parse_clock, parse_iso_date, parse_iso_datetime

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value or ""))


class PayloadReader:
    """Read typed fields from a JSON payload, collecting field-level errors.

    Every accessor records a problem instead of raising, so one request reports
    all of its bad fields at once. Call ``raise_if_errors`` when done.
    """

    def __init__(self, payload: Optional[Mapping[str, Any]]):
        self._data = payload if isinstance(payload, Mapping) else {}
        self.errors: list[dict] = []
        if payload is not None and not isinstance(payload, Mapping):
            self.add_error("body", "Expected a JSON object")

    def add_error(self, field: str, message: str) -> None:
        self.errors.append({"field": field, "message": message})

    def raise_if_errors(self) -> None:
        if self.errors:
            raise ValidationError("Validation failed", self.errors)

    def _raw(self, field: str, required: bool) -> Any:
        value = self._data.get(field)
        if isinstance(value, str) and not value.strip():
            value = None
        if value is None and required:
            self.add_error(field, "Required")
        return value

    def string(self, field: str, *, required: bool = True, min_len: int = 1) -> Optional[str]:
        value = self._raw(field, required)
        if value is None:
            return None
        if not isinstance(value, str):
            self.add_error(field, "Expected a string")
            return None
        value = value.strip()
        if len(value) < min_len:
            self.add_error(field, f"Must be at least {min_len} characters")
            return None
        return value

    def email(self, field: str, *, required: bool = True) -> Optional[str]:
        value = self.string(field, required=required)
        if value is not None and not is_valid_email(value):
            self.add_error(field, "Invalid email format")
            return None
        return value

    def integer(
        self,
        field: str,
        *,
        required: bool = True,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None,
    ) -> Optional[int]:
        value = self._raw(field, required)
        if value is None:
            return None
        if isinstance(value, bool):
            self.add_error(field, "Expected an integer")
            return None
        try:
            number = int(value)
        except (TypeError, ValueError):
            self.add_error(field, "Expected an integer")
            return None
        if isinstance(value, float) and value != number:
            self.add_error(field, "Expected an integer")
            return None
        if min_value is not None and number < min_value:
            self.add_error(field, f"Must be at least {min_value}")
            return None
        if max_value is not None and number > max_value:
            self.add_error(field, f"Must be at most {max_value}")
            return None
        return number

    def amount(self, field: str, *, required: bool = True, default: Optional[Decimal] = None) -> Optional[Decimal]:
        """Non-negative money value with at most two decimals."""
        value = self._raw(field, required and default is None)
        if value is None:
            return default
        if isinstance(value, bool):
            self.add_error(field, "Expected a number")
            return None
        try:
            number = Decimal(str(value))
        except InvalidOperation:
            self.add_error(field, "Expected a number")
            return None
        if not number.is_finite() or number < 0:
            self.add_error(field, "Must be a non-negative number")
            return None
        return number.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    def boolean(self, field: str, *, default: bool) -> bool:
        value = self._data.get(field)
        if value is None:
            return default
        if not isinstance(value, bool):
            self.add_error(field, "Expected a boolean")
            return default
        return value

    def date(self, field: str, *, required: bool = True) -> Optional[date]:
        value = self._raw(field, required)
        if value is None:
            return None
        try:
            return parse_iso_date(str(value))
        except ValueError:
            self.add_error(field, "Invalid date (YYYY-MM-DD)")
            return None

    def datetime(self, field: str, *, required: bool = False) -> Optional[datetime]:
        value = self._raw(field, required)
        if value is None:
            return None
        try:
            return parse_iso_datetime(str(value))
        except ValueError:
            self.add_error(field, "Invalid timestamp")
            return None

    def clock(self, field: str, *, required: bool = True) -> Optional[str]:
        value = self._raw(field, required)
        if value is None:
            return None
        try:
            return parse_clock(str(value))
        except ValueError:
            self.add_error(field, "Invalid time (HH:MM)")
            return None

    def choice(self, field: str, enum_cls: Type[E], *, required: bool = True, default: Optional[E] = None) -> Optional[E]:
        value = self._data.get(field)
        if value is None or value == "":
            if default is not None:
                return default
            if required:
                self.add_error(field, "Required")
            return None
        try:
            return enum_cls(value)
        except ValueError:
            allowed = ", ".join(member.value for member in enum_cls)
            self.add_error(field, f"Must be one of: {allowed}")
            return None
