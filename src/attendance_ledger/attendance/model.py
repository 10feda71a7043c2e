from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class AttendanceKey:
    """Per-recorder attendance key. time_slot is None for date-only ledgers."""

    recorder: str
    subject: str
    date_key: int
    time_slot: Optional[int] = None


@dataclass(frozen=True)
class SlotKey:
    """Key of the global (subject, date, slot) view, shared by all recorders."""

    subject: str
    date_key: int
    time_slot: int


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: an attendance mark. Written once, never modified."""

    key: AttendanceKey
    recorded_at: datetime
    payment_amount: Optional[Decimal] = None

    @property
    def recorder(self) -> str:
        return self.key.recorder

    @property
    def subject(self) -> str:
        return self.key.subject

    def to_dict(self) -> dict:
        return {
            "recorder": self.key.recorder,
            "subject": self.key.subject,
            "date": self.key.date_key,
            "time": self.key.time_slot,
            "recorded_at": self.recorded_at.isoformat(),
            "payment_amount": str(self.payment_amount) if self.payment_amount is not None else None,
        }
