from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from mysql.connector import errors as mysql_errors

from ..core.enums import Role
from ..core.exceptions import AlreadyRegistered
from ..database.mysql_base import fetchall, fetchone
from .model import RoleMembership
from .repository import RoleRepository


class MySQLRoleRepository(RoleRepository):
    """Role directory bound to the cursor of one open transaction."""

    def __init__(self, cur):
        self._cur = cur

    def get_owner(self) -> Optional[str]:
        self._cur.execute("SELECT identity FROM registry_owner WHERE singleton=1")
        r = fetchone(self._cur)
        return str(r["identity"]) if r else None

    def set_owner(self, identity: str) -> None:
        self._cur.execute(
            """
            INSERT INTO registry_owner(singleton, identity, created_at)
            VALUES(1, %s, %s)
            """,
            (identity, datetime.now()),
        )

    def get_role(self, identity: str) -> Optional[Role]:
        self._cur.execute("SELECT role FROM role_members WHERE identity=%s", (identity,))
        r = fetchone(self._cur)
        return Role(r["role"]) if r else None

    def add_member(self, *, identity: str, role: Role, added_by: Optional[str], added_at: datetime) -> None:
        try:
            self._cur.execute(
                """
                INSERT INTO role_members(identity, role, added_by, added_at)
                VALUES(%s,%s,%s,%s)
                """,
                (identity, role.value, added_by, added_at),
            )
        except mysql_errors.IntegrityError:
            # Lost a race against a concurrent registration of the same identity.
            raise AlreadyRegistered(f"{identity} is already registered")

    def list_members(self, role: Role) -> Sequence[RoleMembership]:
        self._cur.execute(
            """
            SELECT identity, role, added_by, added_at
            FROM role_members
            WHERE role=%s
            ORDER BY added_at, identity
            """,
            (role.value,),
        )
        return [
            RoleMembership(
                identity=str(r["identity"]),
                role=Role(r["role"]),
                added_by=r.get("added_by"),
                added_at=r["added_at"],
            )
            for r in fetchall(self._cur)
        ]
