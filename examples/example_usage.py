"""Example: drive the service layer directly (no Flask).

Shows the date-only ledger variant, where the owner registers professors and
any professor may enroll students.
"""

from attendance_ledger.container import build_container
from attendance_ledger.core.enums import LedgerVariant
from attendance_ledger.core.exceptions import DomainError


def main():
    container = build_container(storage_backend="memory", variant=LedgerVariant.OWNER_DATEONLY)
    roles = container.role_service
    attendance = container.attendance_service

    roles.initialize("owner")
    roles.add_professor("owner", "prof-a")
    roles.add_professor("owner", "prof-b")
    roles.add_student("prof-a", "student-1")

    attendance.give_attendance("prof-a", "student-1", 20250101)
    attendance.give_attendance("prof-b", "student-1", 20250101)
    try:
        attendance.give_attendance("prof-a", "student-1", 20250101)
    except DomainError as e:
        print("rejected:", e.code)

    for event in container.event_log.recent():
        print(event.to_dict())


if __name__ == "__main__":
    main()
