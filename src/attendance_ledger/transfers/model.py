from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..common.validators import require_payment_amount


@dataclass(frozen=True)
class Payment:
    """Native-currency value moved from the recorder to the subject alongside an attendance write."""

    amount: Decimal

    @classmethod
    def of(cls, amount: Any) -> "Payment":
        return cls(amount=require_payment_amount(amount))
