from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import MAX_DATE_KEY, MAX_IDENTITY_LENGTH
from ..core.exceptions import InvalidDate, InvalidPayment, InvalidTime, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def normalize_identity(value: Any) -> str:
    """Trim an identity for lookup without validating it; non-strings match nobody."""
    return value.strip() if isinstance(value, str) else ""


def require_identity(value: str, field_name: str = "identity") -> str:
    value = require_non_empty(value, field_name)
    if len(value) > MAX_IDENTITY_LENGTH:
        raise ValidationError(f"{field_name} must be at most {MAX_IDENTITY_LENGTH} characters")
    return value


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def require_date_key(value: Any) -> int:
    """Accept a positive integer date key up to MAX_DATE_KEY (YYYYMMDD by convention).

    Calendar correctness is not checked: 20240231 is accepted.
    """
    if not _is_int(value) or value <= 0 or value > MAX_DATE_KEY:
        raise InvalidDate(f"Invalid date: {value!r}")
    return value


def require_time_slot(value: Any) -> int:
    """Accept an HHMM intraday slot (0000-2359)."""
    if not _is_int(value) or value < 0 or value % 100 >= 60 or value // 100 >= 24:
        raise InvalidTime(f"Invalid time slot: {value!r}")
    return value


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise InvalidPayment(f"Invalid amount: {value!r}")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise InvalidPayment(f"Invalid amount: {value!r}")
    if not amount.is_finite():
        raise InvalidPayment(f"Invalid amount: {value!r}")
    return amount


def require_payment_amount(value: Any) -> Decimal:
    amount = _to_decimal(value)
    if amount <= 0:
        raise InvalidPayment(f"Payment amount must be positive: {value!r}")
    return amount


def require_non_negative_amount(value: Any) -> Decimal:
    amount = _to_decimal(value)
    if amount < 0:
        raise InvalidPayment(f"Amount must be zero or positive: {value!r}")
    return amount


def loose_int(value: Any) -> Any:
    """Turn a numeric string into int; anything else comes back unchanged for later validation."""
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return value
    return value


def optional_int(value: Any, field_name: str) -> Optional[int]:
    """Coerce a query-string style value into int, keeping None/'' as None."""
    if value is None or value == "":
        return None
    if _is_int(value):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be an integer")
