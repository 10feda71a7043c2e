from __future__ import annotations

import pytest

from attendance_ledger.core.events import AdminAdded, AttendanceGiven, StudentAdded
from attendance_ledger.core.exceptions import (
    AttendanceAlreadyRecorded,
    ConfigurationError,
    InvalidTime,
    OperationNotSupported,
    Unauthorized,
)

from identities import DEPLOYER, OUTSIDER, PROFESSOR_1, PROFESSOR_2, STUDENT_1

TODAY = 20250101


def test_two_professors_record_same_student_and_date(dateonly_container):
    svc = dateonly_container.attendance_service
    svc.give_attendance(PROFESSOR_1, STUDENT_1, TODAY)
    svc.give_attendance(PROFESSOR_2, STUDENT_1, TODAY)

    assert svc.professor_attendance(PROFESSOR_1, STUDENT_1, TODAY) is True
    assert svc.professor_attendance(PROFESSOR_2, STUDENT_1, TODAY) is True
    assert dateonly_container.event_log.recent() == [
        AttendanceGiven(PROFESSOR_1, STUDENT_1, TODAY, None),
        AttendanceGiven(PROFESSOR_2, STUDENT_1, TODAY, None),
    ]


def test_same_professor_same_date_is_rejected(dateonly_container):
    svc = dateonly_container.attendance_service
    svc.give_attendance(PROFESSOR_1, STUDENT_1, TODAY)
    with pytest.raises(AttendanceAlreadyRecorded):
        svc.give_attendance(PROFESSOR_1, STUDENT_1, TODAY)


def test_time_slot_argument_is_rejected(dateonly_container):
    with pytest.raises(InvalidTime):
        dateonly_container.attendance_service.give_attendance(PROFESSOR_1, STUDENT_1, TODAY, 900)


def test_global_view_is_not_available(dateonly_container):
    with pytest.raises(OperationNotSupported):
        dateonly_container.attendance_service.has_attendance(STUDENT_1, TODAY, 900)


def test_admin_tier_does_not_exist(dateonly_container):
    with pytest.raises(OperationNotSupported):
        dateonly_container.role_service.add_admin(DEPLOYER, OUTSIDER)
    with pytest.raises(ConfigurationError):
        dateonly_container.role_service.initialize(DEPLOYER, OUTSIDER)
    assert AdminAdded(OUTSIDER) not in dateonly_container.event_log.recent()


def test_any_professor_enrolls_students(dateonly_container):
    dateonly_container.role_service.add_student(PROFESSOR_2, OUTSIDER)
    assert dateonly_container.role_service.is_student(OUTSIDER)
    assert dateonly_container.event_log.recent() == [StudentAdded(OUTSIDER)]


def test_only_owner_adds_professors(dateonly_container):
    with pytest.raises(Unauthorized):
        dateonly_container.role_service.add_professor(PROFESSOR_1, OUTSIDER)
    with pytest.raises(Unauthorized):
        dateonly_container.role_service.add_student(STUDENT_1, OUTSIDER)
