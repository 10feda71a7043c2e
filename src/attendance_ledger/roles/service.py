from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import normalize_identity, require_identity
from ..core.enums import Role
from ..core.events import AdminAdded, EventBus, LedgerEvent, ProfessorAdded, StudentAdded
from ..core.exceptions import (
    AlreadyRegistered,
    ConfigurationError,
    DomainError,
    OperationNotSupported,
    RegistryNotInitialized,
    Unauthorized,
)
from ..database.unit_of_work import UnitOfWork, UnitOfWorkFactory
from ..policies.base import LedgerPolicy
from .model import RoleMembership

_log = logging.getLogger("attendance_ledger.roles")

_EVENTS: dict[Role, Callable[[str], LedgerEvent]] = {
    Role.ADMIN: AdminAdded,
    Role.PROFESSOR: ProfessorAdded,
    Role.STUDENT: StudentAdded,
}


class RoleService:
    """Use case: maintain the role directory.

    One owner is fixed by `initialize`; admins, professors and students are
    added afterwards and never removed. An identity holds at most one of the
    three member roles, whichever role it is being added to.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        policy: LedgerPolicy,
        events: EventBus,
        *,
        lock: Optional[threading.RLock] = None,
    ):
        self._uow_factory = uow_factory
        self._policy = policy
        self._events = events
        self._lock = lock or threading.RLock()

    @property
    def policy(self) -> LedgerPolicy:
        return self._policy

    def initialize(self, owner: str, initial_admin: Optional[str] = None, *, now: Optional[datetime] = None) -> None:
        """Fix the owner identity once; repeated calls with the same owner are no-ops."""
        owner = require_identity(owner, "owner")
        if initial_admin is not None:
            initial_admin = require_identity(initial_admin, "initial admin")
            if not self._policy.supports_admin_tier:
                raise ConfigurationError(f"Ledger variant {self._policy.variant.value} has no admin tier")

        emitted: list[LedgerEvent] = []
        with self._lock:
            with self._uow_factory() as uow:
                current = uow.roles.get_owner()
                if current is None:
                    uow.roles.set_owner(owner)
                    _log.info("registry initialized owner=%s variant=%s", owner, self._policy.variant.value)
                elif current != owner:
                    raise ConfigurationError("Registry is already owned by a different identity")

                if initial_admin is not None:
                    role = uow.roles.get_role(initial_admin)
                    if role is None:
                        uow.roles.add_member(
                            identity=initial_admin,
                            role=Role.ADMIN,
                            added_by=owner,
                            added_at=now or now_local(),
                        )
                        emitted.append(AdminAdded(initial_admin))
                    elif role != Role.ADMIN:
                        raise ConfigurationError(f"Initial admin is already registered as {role.value}")

            for event in emitted:
                self._events.publish(event)

    def add_admin(self, caller: str, identity: str, *, now: Optional[datetime] = None) -> None:
        if not self._policy.supports_admin_tier:
            raise OperationNotSupported(f"Ledger variant {self._policy.variant.value} has no admin tier")
        self._register(caller, identity, Role.ADMIN, self._policy.can_add_admin, now=now)

    def add_professor(self, caller: str, identity: str, *, now: Optional[datetime] = None) -> None:
        self._register(caller, identity, Role.PROFESSOR, self._policy.can_add_professor, now=now)

    def add_student(self, caller: str, identity: str, *, now: Optional[datetime] = None) -> None:
        self._register(caller, identity, Role.STUDENT, self._policy.can_add_student, now=now)

    def _register(self, caller: str, identity: str, role: Role, allowed, *, now: Optional[datetime]) -> None:
        caller = normalize_identity(caller)
        identity = normalize_identity(identity)

        with self._lock:
            try:
                with self._uow_factory() as uow:
                    owner = self._require_owner(uow)
                    if not allowed(caller_is_owner=caller == owner, caller_role=uow.roles.get_role(caller)):
                        raise Unauthorized(f"Caller may not add a {role.value}")
                    require_identity(identity)

                    existing = uow.roles.get_role(identity)
                    if existing is not None:
                        raise AlreadyRegistered(f"{identity} is already registered as {existing.value}")

                    uow.roles.add_member(identity=identity, role=role, added_by=caller, added_at=now or now_local())
            except DomainError as e:
                _log.info("rejected add %s caller=%s identity=%s error=%s", role.value, caller, identity, e.code)
                raise

            self._events.publish(_EVENTS[role](identity))

    @staticmethod
    def _require_owner(uow: UnitOfWork) -> str:
        owner = uow.roles.get_owner()
        if owner is None:
            raise RegistryNotInitialized("Registry has no owner yet")
        return owner

    # Queries

    def owner(self) -> Optional[str]:
        with self._uow_factory(read_only=True) as uow:
            return uow.roles.get_owner()

    def get_role(self, identity: str) -> Optional[Role]:
        with self._uow_factory(read_only=True) as uow:
            return uow.roles.get_role(identity)

    def is_owner(self, identity: str) -> bool:
        owner = self.owner()
        return owner is not None and owner == identity

    def is_admin(self, identity: str) -> bool:
        return self.get_role(identity) == Role.ADMIN

    def is_professor(self, identity: str) -> bool:
        return self.get_role(identity) == Role.PROFESSOR

    def is_student(self, identity: str) -> bool:
        return self.get_role(identity) == Role.STUDENT

    def list_members(self, role: Role) -> Sequence[RoleMembership]:
        with self._uow_factory(read_only=True) as uow:
            return list(uow.roles.list_members(role))
