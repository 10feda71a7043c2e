from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from ..common.validators import require_identity, require_non_negative_amount
from ..database.unit_of_work import UnitOfWorkFactory

_log = logging.getLogger("attendance_ledger.transfers")


class BalanceService:
    """Balance inspection and seeding for platform tooling (not exposed for writes over HTTP)."""

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self._uow_factory = uow_factory

    def balance_of(self, identity: str) -> Decimal:
        with self._uow_factory(read_only=True) as uow:
            return uow.balances.get_balance(identity)

    def seed_balance(self, identity: str, amount: Any) -> None:
        identity = require_identity(identity)
        amount = require_non_negative_amount(amount)

        with self._uow_factory() as uow:
            uow.balances.set_balance(identity, amount)
        _log.info("balance seeded identity=%s amount=%s", identity, amount)
