from __future__ import annotations

from typing import Optional

from ..common.validators import require_time_slot
from ..core.enums import LedgerVariant, Role
from .base import LedgerPolicy


class AdminTimeSlotPolicy(LedgerPolicy):
    """Owner appoints admins; admins register professors and students.

    Attendance is keyed by HHMM time slot and each (subject, date, slot)
    belongs to the first professor who records it.
    """

    variant = LedgerVariant.ADMIN_TIMESLOT
    supports_admin_tier = True
    uses_time_slots = True
    tracks_global_slots = True

    def can_add_admin(self, *, caller_is_owner: bool, caller_role: Optional[Role]) -> bool:
        return caller_is_owner

    def can_add_professor(self, *, caller_is_owner: bool, caller_role: Optional[Role]) -> bool:
        return caller_role == Role.ADMIN

    def can_add_student(self, *, caller_is_owner: bool, caller_role: Optional[Role]) -> bool:
        return caller_role == Role.ADMIN

    def normalize_time_slot(self, time_slot: Optional[int]) -> Optional[int]:
        return require_time_slot(time_slot)
