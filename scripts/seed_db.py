"""Replay the demo deployment: roles, balances, and three paid attendance marks.

Identities come from the command line so the same script works against the
memory backend (for a dry run) and a real MySQL database.
"""
from __future__ import annotations

import argparse
import importlib
from datetime import date

from attendance_ledger.common.datetime_utils import date_key_days_from
from attendance_ledger.config import get_settings_module
from attendance_ledger.container import build_container
from attendance_ledger.core.enums import LedgerVariant
from attendance_ledger.transfers.model import Payment


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--owner", default="deployer")
    p.add_argument("--admin", default="admin")
    p.add_argument("--professors", nargs=2, default=["professor1", "professor2"])
    p.add_argument("--students", nargs=2, default=["student1", "student2"])
    p.add_argument("--storage", choices=["memory", "mysql"], default=None)
    return p.parse_args()


def main() -> None:
    args = parse_args()
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        storage_backend=args.storage or settings.STORAGE_BACKEND,
        db_config=dict(settings.DB_CONFIG),
        variant=LedgerVariant.ADMIN_TIMESLOT,
    )
    roles = container.role_service
    attendance = container.attendance_service
    balances = container.balance_service

    prof1, prof2 = args.professors
    stud1, stud2 = args.students

    roles.initialize(args.owner, args.admin)
    print(f"Registry owner: {args.owner}, admin: {args.admin}")

    for prof in (prof1, prof2):
        roles.add_professor(args.admin, prof)
        print(f"   Added professor: {prof}")
    for stud in (stud1, stud2):
        roles.add_student(args.admin, stud)
        print(f"   Added student: {stud}")

    balances.seed_balance(args.admin, 10000)
    balances.seed_balance(prof1, 20000)
    balances.seed_balance(prof2, 20000)
    balances.seed_balance(stud1, 0)
    balances.seed_balance(stud2, 0)

    today = date_key_days_from(date.today(), 0)
    yesterday = date_key_days_from(date.today(), -1)
    one = Payment.of(1)

    marks = [
        (prof1, stud1, today, 900),
        (prof1, stud1, yesterday, 1000),
        (prof2, stud2, today, 900),
    ]
    print("\nRecording attendance with a 1-unit payment each...")
    for prof, stud, date_key, slot in marks:
        attendance.give_attendance(prof, stud, date_key, slot, payment=one)
        print(f"   {prof} recorded {stud} on {date_key} at {slot:04d}")

    print("\nVerifying attendance records...")
    for prof, stud, date_key, slot in marks:
        present = attendance.professor_attendance(prof, stud, date_key, slot)
        global_present = attendance.has_attendance(stud, date_key, slot)
        print(
            f"   {stud} {date_key} {slot:04d} ({prof}): {'present' if present else 'absent'}, "
            f"global: {'present' if global_present else 'absent'}"
        )

    print("\nFinal balances:")
    for identity in (args.owner, args.admin, prof1, prof2, stud1, stud2):
        print(f"   {identity}: {balances.balance_of(identity)}")


if __name__ == "__main__":
    main()
