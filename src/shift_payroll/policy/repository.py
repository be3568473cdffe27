from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol

from .model import PayPolicy


class PolicyRepository(Protocol):
    def get_for_organization(self, organization_id: str) -> Optional[PayPolicy]:
        raise NotImplementedError

    def save(self, organization_id: str, policy: PayPolicy) -> None:
        raise NotImplementedError

    def get_member_transport(self, organization_id: str) -> dict[str, Decimal]:
        """Per-member transport-per-day overrides keyed by employee id."""

        raise NotImplementedError
