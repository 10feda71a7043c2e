from __future__ import annotations

import logging

import pytest

from attendance_ledger.core.constants import MAX_DATE_KEY
from attendance_ledger.core.events import AttendanceGiven
from attendance_ledger.core.exceptions import (
    AttendanceAlreadyRecorded,
    DomainError,
    DuplicateAttendance,
    InvalidDate,
    InvalidPayment,
    InvalidTime,
    Unauthorized,
)

from identities import ADMIN, OUTSIDER, PROFESSOR_1, PROFESSOR_2, STUDENT_1, STUDENT_2

TODAY = 20250101
YESTERDAY = 20241231
TIME_1 = 900
TIME_2 = 1000


def test_records_attendance_and_emits_event(container, fixed_now):
    svc = container.attendance_service
    record = svc.give_attendance(PROFESSOR_1, STUDENT_1, TODAY, TIME_1, now=fixed_now)

    assert record.recorder == PROFESSOR_1
    assert record.recorded_at == fixed_now
    assert svc.professor_attendance(PROFESSOR_1, STUDENT_1, TODAY, TIME_1) is True
    assert svc.has_attendance(STUDENT_1, TODAY, TIME_1) is True
    assert svc.slot_owner(STUDENT_1, TODAY, TIME_1) == PROFESSOR_1
    assert container.event_log.recent() == [AttendanceGiven(PROFESSOR_1, STUDENT_1, TODAY, TIME_1)]


def test_same_professor_cannot_record_twice(container):
    svc = container.attendance_service
    svc.give_attendance(PROFESSOR_1, STUDENT_1, TODAY, TIME_1)

    with pytest.raises(AttendanceAlreadyRecorded):
        svc.give_attendance(PROFESSOR_1, STUDENT_1, TODAY, TIME_1)
    assert len(container.event_log.recent()) == 1


def test_first_professor_owns_the_slot(container):
    svc = container.attendance_service
    svc.give_attendance(PROFESSOR_1, STUDENT_1, TODAY, TIME_1)

    with pytest.raises(DuplicateAttendance):
        svc.give_attendance(PROFESSOR_2, STUDENT_1, TODAY, TIME_1)

    assert svc.professor_attendance(PROFESSOR_2, STUDENT_1, TODAY, TIME_1) is False
    assert svc.slot_owner(STUDENT_1, TODAY, TIME_1) == PROFESSOR_1


@pytest.mark.parametrize(
    "second",
    [
        (PROFESSOR_1, STUDENT_1, YESTERDAY, TIME_1),  # different date
        (PROFESSOR_1, STUDENT_1, TODAY, TIME_2),  # different time
        (PROFESSOR_2, STUDENT_1, TODAY, TIME_2),  # different professor and time
        (PROFESSOR_1, STUDENT_2, TODAY, TIME_1),  # different student
    ],
)
def test_distinct_keys_are_independent(container, second):
    svc = container.attendance_service
    svc.give_attendance(PROFESSOR_1, STUDENT_1, TODAY, TIME_1)
    svc.give_attendance(*second)

    assert svc.professor_attendance(*second) is True
    assert container.event_log.recent()[-1] == AttendanceGiven(*second)


@pytest.mark.parametrize("caller", [ADMIN, STUDENT_1, OUTSIDER])
def test_only_professors_record(container, caller):
    with pytest.raises(Unauthorized):
        container.attendance_service.give_attendance(caller, STUDENT_2, TODAY, TIME_1)


@pytest.mark.parametrize("subject", [OUTSIDER, ADMIN, PROFESSOR_2])
def test_subject_must_be_a_student(container, subject):
    with pytest.raises(Unauthorized):
        container.attendance_service.give_attendance(PROFESSOR_1, subject, TODAY, TIME_1)


def test_professor_cannot_record_self(container):
    with pytest.raises(Unauthorized):
        container.attendance_service.give_attendance(PROFESSOR_1, PROFESSOR_1, TODAY, TIME_1)


@pytest.mark.parametrize("date_key", [0, -20250101, None, "20250101"])
def test_invalid_dates(container, date_key):
    with pytest.raises(InvalidDate):
        container.attendance_service.give_attendance(PROFESSOR_1, STUDENT_1, date_key, TIME_1)


@pytest.mark.parametrize("time_slot", [2400, 960, 1299 + 61, -1, None])
def test_invalid_times(container, time_slot):
    with pytest.raises(InvalidTime):
        container.attendance_service.give_attendance(PROFESSOR_1, STUDENT_1, TODAY, time_slot)


@pytest.mark.parametrize("time_slot", [0, 59, 2359])
def test_boundary_times_are_valid(container, time_slot):
    container.attendance_service.give_attendance(PROFESSOR_1, STUDENT_1, TODAY, time_slot)


@pytest.mark.parametrize("date_key", [20250615, 20240229, 20231231, 20991231, 20250231, 1])
def test_any_positive_date_is_accepted(container, date_key):
    svc = container.attendance_service
    svc.give_attendance(PROFESSOR_1, STUDENT_1, date_key, TIME_1)
    assert svc.professor_attendance(PROFESSOR_1, STUDENT_1, date_key, TIME_1) is True


def test_checks_run_in_order(container):
    svc = container.attendance_service
    # Non-professor caller with a bad date still reports Unauthorized.
    with pytest.raises(Unauthorized):
        svc.give_attendance(OUTSIDER, STUDENT_1, 0, 2400)
    # Bad date is reported before bad time.
    with pytest.raises(InvalidDate):
        svc.give_attendance(PROFESSOR_1, STUDENT_1, 0, 2400)

    svc.give_attendance(PROFESSOR_1, STUDENT_1, TODAY, TIME_1)
    # The same recorder sees AttendanceAlreadyRecorded even though the slot is also owned.
    with pytest.raises(AttendanceAlreadyRecorded):
        svc.give_attendance(PROFESSOR_1, STUDENT_1, TODAY, TIME_1)


def test_rejected_calls_leave_no_trace(container):
    svc = container.attendance_service
    for args in [
        (OUTSIDER, STUDENT_1, TODAY, TIME_1),
        (PROFESSOR_1, OUTSIDER, TODAY, TIME_1),
        (PROFESSOR_1, STUDENT_1, 0, TIME_1),
        (PROFESSOR_1, STUDENT_1, TODAY, 2400),
    ]:
        with pytest.raises(DomainError):
            svc.give_attendance(*args)

    assert svc.history_for_subject(STUDENT_1) == []
    assert svc.has_attendance(STUDENT_1, TODAY, TIME_1) is False
    assert container.event_log.recent() == []


def test_history_is_newest_first(container):
    svc = container.attendance_service
    svc.give_attendance(PROFESSOR_1, STUDENT_1, YESTERDAY, TIME_1)
    svc.give_attendance(PROFESSOR_2, STUDENT_1, TODAY, TIME_2)
    svc.give_attendance(PROFESSOR_1, STUDENT_2, TODAY, TIME_1)

    history = svc.history_for_subject(STUDENT_1)
    assert [(r.recorder, r.key.date_key) for r in history] == [(PROFESSOR_2, TODAY), (PROFESSOR_1, YESTERDAY)]
    assert len(svc.history_for_recorder(PROFESSOR_1)) == 2
    assert len(svc.history_for_subject(STUDENT_1, limit=1)) == 1


def test_date_key_upper_bound(container):
    svc = container.attendance_service
    svc.give_attendance(PROFESSOR_1, STUDENT_1, MAX_DATE_KEY, TIME_1)
    assert svc.professor_attendance(PROFESSOR_1, STUDENT_1, MAX_DATE_KEY, TIME_1) is True

    with pytest.raises(InvalidDate):
        svc.give_attendance(PROFESSOR_1, STUDENT_1, MAX_DATE_KEY + 1, TIME_1)


@pytest.mark.parametrize("caller, subject", [(OUTSIDER, ""), (OUTSIDER, "   "), (PROFESSOR_1, ""), (PROFESSOR_1, None)])
def test_blank_subject_fails_the_role_checks(container, caller, subject):
    with pytest.raises(Unauthorized):
        container.attendance_service.give_attendance(caller, subject, TODAY, TIME_1)


def test_raw_payment_is_checked_after_roles_and_duplicates(container):
    svc = container.attendance_service
    with pytest.raises(Unauthorized):
        svc.give_attendance(OUTSIDER, STUDENT_1, "x", TIME_1, payment="-1")

    svc.give_attendance(PROFESSOR_1, STUDENT_1, TODAY, TIME_1)
    with pytest.raises(AttendanceAlreadyRecorded):
        svc.give_attendance(PROFESSOR_1, STUDENT_1, TODAY, TIME_1, payment="abc")
    with pytest.raises(DuplicateAttendance):
        svc.give_attendance(PROFESSOR_2, STUDENT_1, TODAY, TIME_1, payment="abc")

    with pytest.raises(InvalidPayment):
        svc.give_attendance(PROFESSOR_1, STUDENT_2, TODAY, TIME_1, payment="-1")
    assert svc.history_for_subject(STUDENT_2) == []


def test_accepted_attendance_is_logged_once(container, caplog):
    caplog.set_level(logging.INFO, logger="attendance_ledger")
    container.attendance_service.give_attendance(PROFESSOR_1, STUDENT_1, TODAY, TIME_1)

    infos = [r for r in caplog.records if r.levelno == logging.INFO]
    assert [r.name for r in infos] == ["attendance_ledger.events"]
    assert "AttendanceGiven" in infos[0].getMessage()
