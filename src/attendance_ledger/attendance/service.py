from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import normalize_identity, require_date_key
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import Role
from ..core.events import AttendanceGiven, EventBus
from ..core.exceptions import (
    AttendanceAlreadyRecorded,
    DomainError,
    DuplicateAttendance,
    OperationNotSupported,
    Unauthorized,
)
from ..database.unit_of_work import UnitOfWork, UnitOfWorkFactory
from ..policies.base import LedgerPolicy
from ..transfers.model import Payment
from .model import AttendanceKey, AttendanceRecord, SlotKey

_log = logging.getLogger("attendance_ledger.attendance")


class AttendanceService:
    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        policy: LedgerPolicy,
        events: EventBus,
        *,
        lock: Optional[threading.RLock] = None,
    ):
        self._uow_factory = uow_factory
        self._policy = policy
        self._events = events
        self._lock = lock or threading.RLock()

    def give_attendance(
        self,
        caller: str,
        subject: str,
        date_key: Any,
        time_slot: Any = None,
        *,
        payment: Any = None,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Record `subject` present for `caller`'s class on `date_key` [at `time_slot`].

        Checks run in a fixed order and the first failure is the one raised:
        caller and subject roles come before any argument validation, and a
        raw payment amount is parsed only after every attendance check.
        When a payment accompanies the call, the transfer commits together
        with the attendance mark or not at all.
        """
        caller = normalize_identity(caller)
        subject = normalize_identity(subject)

        with self._lock:
            try:
                with self._uow_factory() as uow:
                    record = self._record(uow, caller, subject, date_key, time_slot, payment, now or now_local())
            except DomainError as e:
                _log.info(
                    "rejected attendance recorder=%s subject=%s date=%s time=%s error=%s",
                    caller, subject, date_key, time_slot, e.code,
                )
                raise

            key = record.key
            self._events.publish(
                AttendanceGiven(recorder=key.recorder, subject=key.subject, date_key=key.date_key, time_slot=key.time_slot)
            )
            return record

    def _record(
        self,
        uow: UnitOfWork,
        caller: str,
        subject: str,
        date_key: Any,
        time_slot: Any,
        payment: Any,
        now: datetime,
    ) -> AttendanceRecord:
        if uow.roles.get_role(caller) != Role.PROFESSOR:
            raise Unauthorized("Only professors can record attendance")
        if uow.roles.get_role(subject) != Role.STUDENT:
            raise Unauthorized(f"{subject!r} is not a registered student")
        if subject == caller:
            raise Unauthorized("Professors cannot record their own attendance")

        date_key = require_date_key(date_key)
        time_slot = self._policy.normalize_time_slot(time_slot)

        key = AttendanceKey(recorder=caller, subject=subject, date_key=date_key, time_slot=time_slot)
        if uow.attendance.has_record(key):
            raise AttendanceAlreadyRecorded("Attendance already recorded")

        slot = None
        if self._policy.tracks_global_slots:
            slot = SlotKey(subject=subject, date_key=date_key, time_slot=time_slot)
            if uow.attendance.get_slot_owner(slot) is not None:
                raise DuplicateAttendance("Attendance slot already taken by another professor")

        if payment is not None and not isinstance(payment, Payment):
            payment = Payment.of(payment)

        record = AttendanceRecord(
            key=key,
            recorded_at=now,
            payment_amount=payment.amount if payment else None,
        )
        uow.attendance.create_record(record)
        if slot is not None:
            uow.attendance.claim_slot(slot, recorder=caller)
        if payment is not None:
            uow.balances.transfer(sender=caller, recipient=subject, amount=payment.amount)
        return record

    # Queries

    def professor_attendance(self, recorder: str, subject: str, date_key: int, time_slot: Optional[int] = None) -> bool:
        key = AttendanceKey(recorder=recorder, subject=subject, date_key=date_key, time_slot=time_slot)
        with self._uow_factory(read_only=True) as uow:
            return uow.attendance.has_record(key)

    def get_record(
        self, recorder: str, subject: str, date_key: int, time_slot: Optional[int] = None
    ) -> Optional[AttendanceRecord]:
        key = AttendanceKey(recorder=recorder, subject=subject, date_key=date_key, time_slot=time_slot)
        with self._uow_factory(read_only=True) as uow:
            return uow.attendance.get_record(key)

    def slot_owner(self, subject: str, date_key: int, time_slot: int) -> Optional[str]:
        if not self._policy.tracks_global_slots:
            raise OperationNotSupported(f"Ledger variant {self._policy.variant.value} keeps no global slot view")
        with self._uow_factory(read_only=True) as uow:
            return uow.attendance.get_slot_owner(SlotKey(subject=subject, date_key=date_key, time_slot=time_slot))

    def has_attendance(self, subject: str, date_key: int, time_slot: int) -> bool:
        return self.slot_owner(subject, date_key, time_slot) is not None

    def history_for_subject(self, subject: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        with self._uow_factory(read_only=True) as uow:
            return list(uow.attendance.list_for_subject(subject, limit))

    def history_for_recorder(self, recorder: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        with self._uow_factory(read_only=True) as uow:
            return list(uow.attendance.list_for_recorder(recorder, limit))
