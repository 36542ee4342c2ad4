"""Feature permission gate: (user state, feature id) -> allow/deny."""

from dataclasses import dataclass

from domain.entities.plan import FeatureCatalog, PlanId
from domain.entities.user_state import UserState, UserStateContext

LOGIN_REQUIRED = "Log in to use this feature"
PUBLISH_REQUIRED = "Publish your profile first to use this feature"

FREE_TIER_STATES = frozenset({UserState.FREE_USER, UserState.PRO_USER, UserState.REGISTERED})


@dataclass(frozen=True, slots=True)
class FeaturePermission:
    """Outcome of a gate check. ``reason`` is set only when denied."""

    id: str
    allowed: bool
    reason: str | None = None


class FeatureGate:
    """Maps derived user state (or plan) and feature id to a permission.

    Unknown feature ids are allowed for every state except ``visitor``.
    """

    def __init__(self, catalog: FeatureCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> FeatureCatalog:
        return self._catalog

    def check(self, context: UserStateContext, feature_id: str) -> FeaturePermission:
        """Decide whether the classified requester may use a feature."""
        catalog = self._catalog

        if context.is_owner and feature_id.startswith(catalog.edit_prefix):
            return FeaturePermission(id=feature_id, allowed=True)

        if feature_id in catalog.open_features:
            return FeaturePermission(id=feature_id, allowed=True)

        if feature_id in catalog.pro_features:
            allowed = context.state == UserState.PRO_USER
        elif feature_id in catalog.free_features:
            allowed = context.state in FREE_TIER_STATES
        else:
            allowed = context.state != UserState.VISITOR

        if allowed:
            return FeaturePermission(id=feature_id, allowed=True)
        return FeaturePermission(
            id=feature_id,
            allowed=False,
            reason=self._deny_reason(context.state, feature_id),
        )

    def check_plan(self, plan_id: PlanId | None, feature_id: str) -> FeaturePermission:
        """Plan-only check used where no viewer state applies (writes, rendering)."""
        if feature_id in self._catalog.pro_features and plan_id != PlanId.PRO:
            return FeaturePermission(
                id=feature_id,
                allowed=False,
                reason=self._upsell(feature_id),
            )
        return FeaturePermission(id=feature_id, allowed=True)

    def check_all(self, context: UserStateContext) -> list[FeaturePermission]:
        return [self.check(context, feature_id) for feature_id in self._catalog.all_features]

    def _deny_reason(self, state: UserState, feature_id: str) -> str:
        if state in (UserState.VISITOR, UserState.PUBLIC_VIEWER):
            return LOGIN_REQUIRED
        if state == UserState.REGISTERED:
            return PUBLISH_REQUIRED
        return self._upsell(feature_id)

    def _upsell(self, feature_id: str) -> str:
        return f"{self._catalog.display_name(feature_id)} is available in the Pro plan"
