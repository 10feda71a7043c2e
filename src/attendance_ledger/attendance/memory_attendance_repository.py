from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import AttendanceAlreadyRecorded, DuplicateAttendance
from ..database.memory import InMemoryLedgerState
from .model import AttendanceKey, AttendanceRecord, SlotKey
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self, state: InMemoryLedgerState):
        self._state = state

    def has_record(self, key: AttendanceKey) -> bool:
        return key in self._state.records

    def get_record(self, key: AttendanceKey) -> Optional[AttendanceRecord]:
        return self._state.records.get(key)

    def create_record(self, record: AttendanceRecord) -> None:
        if record.key in self._state.records:
            raise AttendanceAlreadyRecorded("Attendance already recorded")
        self._state.records[record.key] = record

    def get_slot_owner(self, slot: SlotKey) -> Optional[str]:
        return self._state.slots.get(slot)

    def claim_slot(self, slot: SlotKey, *, recorder: str) -> None:
        if slot in self._state.slots:
            raise DuplicateAttendance("Attendance slot already taken by another professor")
        self._state.slots[slot] = recorder

    def _newest(self, items, limit: int):
        items = sorted(items, key=lambda r: (r.key.date_key, r.key.time_slot or 0, r.recorded_at), reverse=True)
        return items[: int(limit)]

    def list_for_subject(self, subject: str, limit: int) -> Sequence[AttendanceRecord]:
        return self._newest([r for r in self._state.records.values() if r.key.subject == subject], limit)

    def list_for_recorder(self, recorder: str, limit: int) -> Sequence[AttendanceRecord]:
        return self._newest([r for r in self._state.records.values() if r.key.recorder == recorder], limit)
