"""In-memory ledger state for development and tests.

Why: lets the service run without MySQL while keeping the same
all-or-nothing semantics (see InMemoryUnitOfWork).
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Optional

from ..attendance.model import AttendanceKey, AttendanceRecord, SlotKey
from ..roles.model import RoleMembership


@dataclass
class InMemoryLedgerState:
    owner: Optional[str] = None
    members: Dict[str, RoleMembership] = field(default_factory=dict)
    records: Dict[AttendanceKey, AttendanceRecord] = field(default_factory=dict)
    slots: Dict[SlotKey, str] = field(default_factory=dict)
    balances: Dict[str, Decimal] = field(default_factory=dict)

    def copy(self) -> "InMemoryLedgerState":
        # Values are immutable, so copying the containers is enough.
        return InMemoryLedgerState(
            owner=self.owner,
            members=dict(self.members),
            records=dict(self.records),
            slots=dict(self.slots),
            balances=dict(self.balances),
        )


class InMemoryLedgerStore:
    """Process-wide committed state plus the lock that serializes writers."""

    def __init__(self, state: Optional[InMemoryLedgerState] = None):
        self.state = state or InMemoryLedgerState()
        self.lock = threading.RLock()
