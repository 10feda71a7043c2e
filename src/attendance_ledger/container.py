from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from .attendance.service import AttendanceService
from .core.constants import DEFAULT_EVENT_LOG_SIZE
from .core.enums import LedgerVariant
from .core.events import EventBus, EventLog, log_event
from .core.exceptions import ConfigurationError
from .database.connection import DBConfig, DatabaseConnection
from .database.memory import InMemoryLedgerStore
from .database.unit_of_work import UnitOfWorkFactory, memory_uow_factory, mysql_uow_factory
from .policies.base import LedgerPolicy
from .policies.factory import LedgerPolicyFactory
from .roles.service import RoleService
from .transfers.service import BalanceService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    uow_factory: UnitOfWorkFactory
    policy: LedgerPolicy

    events: EventBus
    event_log: EventLog

    role_service: RoleService
    attendance_service: AttendanceService
    balance_service: BalanceService


def build_container(
    *,
    storage_backend: str = "memory",
    db_config: Optional[dict] = None,
    variant: LedgerVariant | str = LedgerVariant.ADMIN_TIMESLOT,
    event_log_size: int = DEFAULT_EVENT_LOG_SIZE,
    store: Optional[InMemoryLedgerStore] = None,
) -> Container:
    conn = None
    backend = (storage_backend or "").strip().lower()
    if backend == "mysql":
        if not db_config:
            raise ConfigurationError("DB_CONFIG is required for the mysql storage backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        uow_factory = mysql_uow_factory(conn)
    elif backend == "memory":
        uow_factory = memory_uow_factory(store)
    else:
        raise ConfigurationError(f"Unknown storage backend: {storage_backend!r}")

    policy = LedgerPolicyFactory().for_variant(variant)

    events = EventBus()
    event_log = EventLog(event_log_size)
    events.subscribe(log_event)
    events.subscribe(event_log)

    # Shared so role and attendance writes are serialized against each other.
    write_lock = threading.RLock()

    return Container(
        conn=conn,
        uow_factory=uow_factory,
        policy=policy,
        events=events,
        event_log=event_log,
        role_service=RoleService(uow_factory, policy, events, lock=write_lock),
        attendance_service=AttendanceService(uow_factory, policy, events, lock=write_lock),
        balance_service=BalanceService(uow_factory),
    )
