from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..core.enums import LedgerVariant
from ..core.exceptions import ConfigurationError
from .admin_timeslot_policy import AdminTimeSlotPolicy
from .base import LedgerPolicy
from .owner_dateonly_policy import OwnerDateOnlyPolicy


@dataclass
class LedgerPolicyFactory:
    """Factory Pattern: pick the policy configured for this deployment."""

    def for_variant(self, variant: Union[LedgerVariant, str]) -> LedgerPolicy:
        try:
            variant = LedgerVariant(variant)
        except ValueError:
            raise ConfigurationError(f"Unknown ledger variant: {variant!r}")

        if variant == LedgerVariant.OWNER_DATEONLY:
            return OwnerDateOnlyPolicy()
        return AdminTimeSlotPolicy()
