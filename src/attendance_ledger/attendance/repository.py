from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceKey, AttendanceRecord, SlotKey


class AttendanceRepository(Protocol):
    def has_record(self, key: AttendanceKey) -> bool:
        raise NotImplementedError

    def get_record(self, key: AttendanceKey) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_record(self, record: AttendanceRecord) -> None:
        """Insert a record; raises AttendanceAlreadyRecorded if the key exists."""
        raise NotImplementedError

    def get_slot_owner(self, slot: SlotKey) -> Optional[str]:
        raise NotImplementedError

    def claim_slot(self, slot: SlotKey, *, recorder: str) -> None:
        """Mark the global slot as taken; raises DuplicateAttendance if already owned."""
        raise NotImplementedError

    def list_for_subject(self, subject: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_recorder(self, recorder: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
