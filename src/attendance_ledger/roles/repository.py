from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import RoleMembership


class RoleRepository(Protocol):
    """Repository interface for the role directory.

    Note (DIP): services depend on this interface, bound to a unit of work,
    not on a concrete database.
    """

    def get_owner(self) -> Optional[str]:
        raise NotImplementedError

    def set_owner(self, identity: str) -> None:
        raise NotImplementedError

    def get_role(self, identity: str) -> Optional[Role]:
        raise NotImplementedError

    def add_member(self, *, identity: str, role: Role, added_by: Optional[str], added_at: datetime) -> None:
        """Insert a membership; raises AlreadyRegistered if the identity holds any role."""
        raise NotImplementedError

    def list_members(self, role: Role) -> Sequence[RoleMembership]:
        raise NotImplementedError
