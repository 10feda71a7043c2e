from __future__ import annotations

from datetime import datetime

import pytest

from attendance_ledger.container import build_container
from attendance_ledger.core.enums import LedgerVariant

from identities import ADMIN, DEPLOYER, PROFESSOR_1, PROFESSOR_2, STUDENT_1, STUDENT_2


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 1, 9, 0, 0)


@pytest.fixture
def container():
    """Admin-tier ledger with two professors and two students, events cleared."""
    c = build_container(storage_backend="memory", variant=LedgerVariant.ADMIN_TIMESLOT)
    c.role_service.initialize(DEPLOYER, ADMIN)
    c.role_service.add_professor(ADMIN, PROFESSOR_1)
    c.role_service.add_professor(ADMIN, PROFESSOR_2)
    c.role_service.add_student(ADMIN, STUDENT_1)
    c.role_service.add_student(ADMIN, STUDENT_2)
    c.event_log.clear()
    return c


@pytest.fixture
def dateonly_container():
    """Owner-managed, date-only ledger with two professors and one student."""
    c = build_container(storage_backend="memory", variant=LedgerVariant.OWNER_DATEONLY)
    c.role_service.initialize(DEPLOYER)
    c.role_service.add_professor(DEPLOYER, PROFESSOR_1)
    c.role_service.add_professor(DEPLOYER, PROFESSOR_2)
    c.role_service.add_student(DEPLOYER, STUDENT_1)
    c.event_log.clear()
    return c
