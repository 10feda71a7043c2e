from __future__ import annotations

from decimal import Decimal

from ..core.exceptions import InsufficientFunds
from ..database.memory import InMemoryLedgerState
from .repository import BalanceRepository


class InMemoryBalanceRepository(BalanceRepository):
    def __init__(self, state: InMemoryLedgerState):
        self._state = state

    def get_balance(self, identity: str) -> Decimal:
        return self._state.balances.get(identity, Decimal("0"))

    def set_balance(self, identity: str, amount: Decimal) -> None:
        self._state.balances[identity] = Decimal(amount)

    def transfer(self, *, sender: str, recipient: str, amount: Decimal) -> None:
        available = self.get_balance(sender)
        if available < amount:
            raise InsufficientFunds(f"{sender} has {available}, needs {amount}")
        self._state.balances[sender] = available - amount
        self._state.balances[recipient] = self.get_balance(recipient) + amount
