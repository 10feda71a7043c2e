from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role held by a registered identity. "No role" is represented by None."""

    ADMIN = "admin"
    PROFESSOR = "professor"
    STUDENT = "student"


class LedgerVariant(str, Enum):
    """Deployment policy set, chosen once per ledger."""

    ADMIN_TIMESLOT = "admin_timeslot"
    OWNER_DATEONLY = "owner_dateonly"
