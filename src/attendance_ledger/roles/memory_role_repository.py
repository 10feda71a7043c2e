from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import AlreadyRegistered
from ..database.memory import InMemoryLedgerState
from .model import RoleMembership
from .repository import RoleRepository


class InMemoryRoleRepository(RoleRepository):
    def __init__(self, state: InMemoryLedgerState):
        self._state = state

    def get_owner(self) -> Optional[str]:
        return self._state.owner

    def set_owner(self, identity: str) -> None:
        self._state.owner = identity

    def get_role(self, identity: str) -> Optional[Role]:
        member = self._state.members.get(identity)
        return member.role if member else None

    def add_member(self, *, identity: str, role: Role, added_by: Optional[str], added_at: datetime) -> None:
        if identity in self._state.members:
            raise AlreadyRegistered(f"{identity} is already registered")
        self._state.members[identity] = RoleMembership(
            identity=identity,
            role=role,
            added_by=added_by,
            added_at=added_at,
        )

    def list_members(self, role: Role) -> Sequence[RoleMembership]:
        items = [m for m in self._state.members.values() if m.role == role]
        items.sort(key=lambda m: m.added_at)
        return items
