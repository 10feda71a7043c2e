from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..core.enums import LedgerVariant, Role


class LedgerPolicy(ABC):
    """Strategy Pattern: who may register whom, and how attendance is keyed.

    A ledger runs under exactly one policy for its whole lifetime.
    """

    variant: LedgerVariant
    supports_admin_tier: bool
    uses_time_slots: bool
    tracks_global_slots: bool

    @abstractmethod
    def can_add_admin(self, *, caller_is_owner: bool, caller_role: Optional[Role]) -> bool:
        raise NotImplementedError

    @abstractmethod
    def can_add_professor(self, *, caller_is_owner: bool, caller_role: Optional[Role]) -> bool:
        raise NotImplementedError

    @abstractmethod
    def can_add_student(self, *, caller_is_owner: bool, caller_role: Optional[Role]) -> bool:
        raise NotImplementedError

    @abstractmethod
    def normalize_time_slot(self, time_slot: Optional[int]) -> Optional[int]:
        """Validate the slot argument; returns the value to key attendance by."""
        raise NotImplementedError
