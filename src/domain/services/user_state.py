"""User state engine: classify a requester relative to a profile."""

from uuid import UUID

from domain.entities.plan import PlanId
from domain.entities.user_state import UserState, UserStateContext


def determine_user_state(
    session_user_id: UUID | None,
    profile_owner_id: UUID | None = None,
    plan_id: PlanId | None = None,
    is_published: bool | None = None,
) -> UserStateContext:
    """Derive the viewer state from session, ownership, plan and publication.

    ``session_user_id`` is None when there is no session. ``profile_owner_id``
    is None in a pure account context where no profile page is in view.
    The function is pure; the same inputs always yield the same context.
    """
    # Someone else's profile
    if session_user_id is not None and profile_owner_id is not None:
        if session_user_id != profile_owner_id:
            return UserStateContext(
                state=UserState.PUBLIC_VIEWER,
                user_id=session_user_id,
                plan_id=plan_id,
                profile_owner_id=profile_owner_id,
            )

    if session_user_id is None:
        return UserStateContext(
            state=UserState.VISITOR,
            profile_owner_id=profile_owner_id,
            is_published=is_published,
        )

    # Own profile
    if profile_owner_id is not None:
        if not is_published:
            state = UserState.REGISTERED
        elif plan_id == PlanId.PRO:
            state = UserState.PRO_USER
        else:
            state = UserState.FREE_USER
        return UserStateContext(
            state=state,
            user_id=session_user_id,
            plan_id=plan_id,
            profile_owner_id=profile_owner_id,
            is_owner=True,
            is_published=bool(is_published),
        )

    # Account context, no profile in view
    return UserStateContext(
        state=UserState.REGISTERED,
        user_id=session_user_id,
        plan_id=plan_id,
    )
