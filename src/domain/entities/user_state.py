"""Viewer state classification entities."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from domain.entities.plan import PlanId


class UserState(StrEnum):
    """Derived classification of a requester relative to a profile."""

    VISITOR = "visitor"
    REGISTERED = "registered"
    FREE_USER = "free_user"
    PRO_USER = "pro_user"
    PUBLIC_VIEWER = "public_viewer"


USER_STATE_LABELS: dict[UserState, str] = {
    UserState.VISITOR: "Visitor",
    UserState.REGISTERED: "Getting Started",
    UserState.FREE_USER: "Free User",
    UserState.PRO_USER: "Pro User",
    UserState.PUBLIC_VIEWER: "Viewer",
}


@dataclass(frozen=True, slots=True)
class UserStateContext:
    """Result of classifying one request. Immutable."""

    state: UserState
    user_id: UUID | None = None
    plan_id: PlanId | None = None
    profile_owner_id: UUID | None = None
    is_owner: bool = False
    is_published: bool | None = None

    @property
    def label(self) -> str:
        return USER_STATE_LABELS[self.state]
