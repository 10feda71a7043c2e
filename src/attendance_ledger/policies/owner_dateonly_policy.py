from __future__ import annotations

from typing import Optional

from ..core.enums import LedgerVariant, Role
from ..core.exceptions import InvalidTime
from .base import LedgerPolicy


class OwnerDateOnlyPolicy(LedgerPolicy):
    """No admin tier: the owner registers professors, professors enroll students.

    Attendance is keyed by date only, and several professors may record the
    same student on the same date.
    """

    variant = LedgerVariant.OWNER_DATEONLY
    supports_admin_tier = False
    uses_time_slots = False
    tracks_global_slots = False

    def can_add_admin(self, *, caller_is_owner: bool, caller_role: Optional[Role]) -> bool:
        return False

    def can_add_professor(self, *, caller_is_owner: bool, caller_role: Optional[Role]) -> bool:
        return caller_is_owner

    def can_add_student(self, *, caller_is_owner: bool, caller_role: Optional[Role]) -> bool:
        return caller_is_owner or caller_role == Role.PROFESSOR

    def normalize_time_slot(self, time_slot: Optional[int]) -> Optional[int]:
        if time_slot is not None:
            raise InvalidTime("This ledger records attendance by date only")
        return None
