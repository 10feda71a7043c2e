from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class RoleMembership:
    """Domain entity: one identity's role in the directory.

    Memberships are append-only; nothing updates or removes them.
    """

    identity: str
    role: Role
    added_by: Optional[str]
    added_at: datetime
