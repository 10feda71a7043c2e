from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from attendance_ledger.core.enums import Role
from attendance_ledger.database.memory import InMemoryLedgerStore
from attendance_ledger.database.unit_of_work import InMemoryUnitOfWork, MySQLUnitOfWork, memory_uow_factory


class FakeCursor:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self):
        self.cur = FakeCursor()
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self.cur

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self):
        self.conn = FakeConnection()

    def connect(self):
        return self.conn


def test_memory_uow_commits_on_success():
    store = InMemoryLedgerStore()
    with InMemoryUnitOfWork(store) as uow:
        uow.roles.set_owner("owner")
        uow.roles.add_member(identity="a", role=Role.ADMIN, added_by="owner", added_at=datetime(2025, 1, 1))
        uow.balances.set_balance("a", Decimal("3"))

    assert store.state.owner == "owner"
    assert store.state.members["a"].role == Role.ADMIN
    assert store.state.balances["a"] == Decimal("3")


def test_memory_uow_discards_everything_on_error():
    store = InMemoryLedgerStore()
    with pytest.raises(RuntimeError):
        with InMemoryUnitOfWork(store) as uow:
            uow.roles.set_owner("owner")
            uow.balances.set_balance("a", Decimal("3"))
            raise RuntimeError("boom")

    assert store.state.owner is None
    assert store.state.balances == {}


def test_memory_uow_releases_lock_after_error():
    store = InMemoryLedgerStore()
    with pytest.raises(RuntimeError):
        with InMemoryUnitOfWork(store):
            raise RuntimeError("boom")

    assert store.lock.acquire(blocking=False)
    store.lock.release()


def test_mysql_uow_commits_on_success():
    factory = FakeConnFactory()
    with MySQLUnitOfWork(factory) as uow:
        assert uow.roles is not None

    assert factory.conn.committed and not factory.conn.rolled_back
    assert factory.conn.closed and factory.conn.cur.closed


def test_mysql_uow_rolls_back_on_error():
    factory = FakeConnFactory()
    with pytest.raises(ValueError):
        with MySQLUnitOfWork(factory):
            raise ValueError("nope")

    assert factory.conn.rolled_back and not factory.conn.committed
    assert factory.conn.closed


def test_read_only_memory_uow_reads_in_place():
    store = InMemoryLedgerStore()
    with InMemoryUnitOfWork(store) as uow:
        uow.roles.set_owner("owner")
    committed = store.state

    with InMemoryUnitOfWork(store, read_only=True) as uow:
        assert uow.roles.get_owner() == "owner"

    assert store.state is committed
    assert store.lock.acquire(blocking=False)
    store.lock.release()


def test_memory_uow_factory_passes_read_only():
    store = InMemoryLedgerStore()
    factory = memory_uow_factory(store)
    assert factory().read_only is False
    assert factory(read_only=True).read_only is True
