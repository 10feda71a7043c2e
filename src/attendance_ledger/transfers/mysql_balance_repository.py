from __future__ import annotations

from decimal import Decimal

from ..core.exceptions import InsufficientFunds
from ..database.mysql_base import fetchone
from .repository import BalanceRepository


class MySQLBalanceRepository(BalanceRepository):
    def __init__(self, cur):
        self._cur = cur

    def _read(self, identity: str, *, for_update: bool = False) -> Decimal:
        sql = "SELECT amount FROM balances WHERE identity=%s"
        if for_update:
            sql += " FOR UPDATE"
        self._cur.execute(sql, (identity,))
        r = fetchone(self._cur)
        return Decimal(str(r["amount"])) if r else Decimal("0")

    def get_balance(self, identity: str) -> Decimal:
        return self._read(identity)

    def set_balance(self, identity: str, amount: Decimal) -> None:
        self._cur.execute(
            """
            INSERT INTO balances(identity, amount) VALUES(%s,%s)
            ON DUPLICATE KEY UPDATE amount=VALUES(amount)
            """,
            (identity, Decimal(amount)),
        )

    def transfer(self, *, sender: str, recipient: str, amount: Decimal) -> None:
        # Row locks are held until the surrounding transaction commits or rolls back.
        available = self._read(sender, for_update=True)
        if available < amount:
            raise InsufficientFunds(f"{sender} has {available}, needs {amount}")
        self._cur.execute("UPDATE balances SET amount=amount-%s WHERE identity=%s", (amount, sender))
        self._cur.execute(
            """
            INSERT INTO balances(identity, amount) VALUES(%s,%s)
            ON DUPLICATE KEY UPDATE amount=amount+VALUES(amount)
            """,
            (recipient, amount),
        )
