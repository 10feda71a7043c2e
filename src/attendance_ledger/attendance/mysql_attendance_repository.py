from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.constants import NO_TIME_SLOT
from ..core.exceptions import AttendanceAlreadyRecorded, DuplicateAttendance
from ..database.mysql_base import fetchall, fetchone
from .model import AttendanceKey, AttendanceRecord, SlotKey
from .repository import AttendanceRepository

_RECORD_COLUMNS = "recorder, subject, date_key, time_slot, recorded_at, payment_amount"


def _slot_to_db(time_slot: Optional[int]) -> int:
    return NO_TIME_SLOT if time_slot is None else int(time_slot)


def _slot_from_db(value) -> Optional[int]:
    value = int(value)
    return None if value == NO_TIME_SLOT else value


def _to_record(r: dict) -> AttendanceRecord:
    amount = r.get("payment_amount")
    return AttendanceRecord(
        key=AttendanceKey(
            recorder=str(r["recorder"]),
            subject=str(r["subject"]),
            date_key=int(r["date_key"]),
            time_slot=_slot_from_db(r["time_slot"]),
        ),
        recorded_at=r["recorded_at"],
        payment_amount=Decimal(str(amount)) if amount is not None else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    """Attendance store bound to the cursor of one open transaction.

    The primary keys of attendance_records and attendance_slots enforce both
    uniqueness rules even when two transactions race past the read checks.
    """

    def __init__(self, cur):
        self._cur = cur

    def has_record(self, key: AttendanceKey) -> bool:
        return self.get_record(key) is not None

    def get_record(self, key: AttendanceKey) -> Optional[AttendanceRecord]:
        self._cur.execute(
            f"""
            SELECT {_RECORD_COLUMNS}
            FROM attendance_records
            WHERE recorder=%s AND subject=%s AND date_key=%s AND time_slot=%s
            """,
            (key.recorder, key.subject, key.date_key, _slot_to_db(key.time_slot)),
        )
        r = fetchone(self._cur)
        return _to_record(r) if r else None

    def create_record(self, record: AttendanceRecord) -> None:
        key = record.key
        try:
            self._cur.execute(
                f"""
                INSERT INTO attendance_records({_RECORD_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    key.recorder,
                    key.subject,
                    key.date_key,
                    _slot_to_db(key.time_slot),
                    record.recorded_at,
                    record.payment_amount,
                ),
            )
        except mysql_errors.IntegrityError:
            raise AttendanceAlreadyRecorded("Attendance already recorded")

    def get_slot_owner(self, slot: SlotKey) -> Optional[str]:
        self._cur.execute(
            """
            SELECT recorder FROM attendance_slots
            WHERE subject=%s AND date_key=%s AND time_slot=%s
            """,
            (slot.subject, slot.date_key, slot.time_slot),
        )
        r = fetchone(self._cur)
        return str(r["recorder"]) if r else None

    def claim_slot(self, slot: SlotKey, *, recorder: str) -> None:
        try:
            self._cur.execute(
                """
                INSERT INTO attendance_slots(subject, date_key, time_slot, recorder)
                VALUES(%s,%s,%s,%s)
                """,
                (slot.subject, slot.date_key, slot.time_slot, recorder),
            )
        except mysql_errors.IntegrityError:
            raise DuplicateAttendance("Attendance slot already taken by another professor")

    def list_for_subject(self, subject: str, limit: int) -> Sequence[AttendanceRecord]:
        self._cur.execute(
            f"""
            SELECT {_RECORD_COLUMNS}
            FROM attendance_records
            WHERE subject=%s
            ORDER BY date_key DESC, time_slot DESC, recorded_at DESC
            LIMIT %s
            """,
            (subject, int(limit)),
        )
        return [_to_record(r) for r in fetchall(self._cur)]

    def list_for_recorder(self, recorder: str, limit: int) -> Sequence[AttendanceRecord]:
        self._cur.execute(
            f"""
            SELECT {_RECORD_COLUMNS}
            FROM attendance_records
            WHERE recorder=%s
            ORDER BY date_key DESC, time_slot DESC, recorded_at DESC
            LIMIT %s
            """,
            (recorder, int(limit)),
        )
        return [_to_record(r) for r in fetchall(self._cur)]
