from __future__ import annotations

from decimal import Decimal
from typing import Protocol


class BalanceRepository(Protocol):
    """Value-transfer channel bound to the same unit of work as the ledger writes."""

    def get_balance(self, identity: str) -> Decimal:
        raise NotImplementedError

    def set_balance(self, identity: str, amount: Decimal) -> None:
        raise NotImplementedError

    def transfer(self, *, sender: str, recipient: str, amount: Decimal) -> None:
        """Move `amount` or raise InsufficientFunds without touching either balance."""
        raise NotImplementedError
