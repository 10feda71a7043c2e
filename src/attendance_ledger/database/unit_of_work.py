from __future__ import annotations

from contextlib import ExitStack
from typing import Callable, Optional, Protocol

from ..attendance.memory_attendance_repository import InMemoryAttendanceRepository
from ..attendance.mysql_attendance_repository import MySQLAttendanceRepository
from ..attendance.repository import AttendanceRepository
from ..roles.memory_role_repository import InMemoryRoleRepository
from ..roles.mysql_role_repository import MySQLRoleRepository
from ..roles.repository import RoleRepository
from ..transfers.memory_balance_repository import InMemoryBalanceRepository
from ..transfers.mysql_balance_repository import MySQLBalanceRepository
from ..transfers.repository import BalanceRepository
from .connection import DatabaseConnection
from .memory import InMemoryLedgerState, InMemoryLedgerStore
from .mysql_base import db_cursor


class UnitOfWork(Protocol):
    """One all-or-nothing transaction over roles, attendance and balances.

    Leaving the `with` block normally commits every write made through the
    repositories; leaving it with an exception discards all of them.
    """

    roles: RoleRepository
    attendance: AttendanceRepository
    balances: BalanceRepository

    def __enter__(self) -> "UnitOfWork":
        raise NotImplementedError

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        raise NotImplementedError


# Called with read_only=True by queries that never write.
UnitOfWorkFactory = Callable[..., UnitOfWork]


class MySQLUnitOfWork:
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._stack: Optional[ExitStack] = None

    def __enter__(self) -> "MySQLUnitOfWork":
        self._stack = ExitStack()
        _, cur = self._stack.enter_context(db_cursor(self._conn_factory))
        self.roles = MySQLRoleRepository(cur)
        self.attendance = MySQLAttendanceRepository(cur)
        self.balances = MySQLBalanceRepository(cur)
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        stack, self._stack = self._stack, None
        return stack.__exit__(exc_type, exc, tb)


class InMemoryUnitOfWork:
    """Works on a private copy of the state; the copy replaces the committed
    state only when the block finishes without an exception.

    A read-only unit reads the committed state in place, under the same lock.
    """

    def __init__(self, store: InMemoryLedgerStore, *, read_only: bool = False):
        self._store = store
        self.read_only = read_only
        self._working: Optional[InMemoryLedgerState] = None

    def __enter__(self) -> "InMemoryUnitOfWork":
        self._store.lock.acquire()
        self._working = self._store.state if self.read_only else self._store.state.copy()
        self.roles = InMemoryRoleRepository(self._working)
        self.attendance = InMemoryAttendanceRepository(self._working)
        self.balances = InMemoryBalanceRepository(self._working)
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        try:
            if exc_type is None and not self.read_only:
                self._store.state = self._working
        finally:
            self._working = None
            self._store.lock.release()
        return False


def mysql_uow_factory(conn_factory: DatabaseConnection) -> UnitOfWorkFactory:
    # MySQL reads share the write path: one short transaction per query.
    return lambda read_only=False: MySQLUnitOfWork(conn_factory)


def memory_uow_factory(store: Optional[InMemoryLedgerStore] = None) -> UnitOfWorkFactory:
    store = store or InMemoryLedgerStore()
    return lambda read_only=False: InMemoryUnitOfWork(store, read_only=read_only)
