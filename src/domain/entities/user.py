"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from domain.entities.plan import PlanId


@dataclass
class User:
    """Domain entity for an account known to the identity provider.

    ``plan_id`` is written by the billing integration and only read here.
    """

    id: UUID
    email: str = ""
    display_name: str | None = None
    plan_id: PlanId = PlanId.FREE
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_pro(self) -> bool:
        return self.plan_id == PlanId.PRO
