"""Unit tests for the feature permission gate."""

from uuid import uuid4

import pytest

from domain.entities.plan import FeatureCatalog, Features, PlanId
from domain.entities.user_state import UserState, UserStateContext
from domain.services.feature_gate import (
    LOGIN_REQUIRED,
    PUBLISH_REQUIRED,
    FeatureGate,
)


def _context(state: UserState, is_owner: bool = False) -> UserStateContext:
    return UserStateContext(state=state, user_id=uuid4(), is_owner=is_owner)


class TestProFeatures:
    def test_pro_user_gets_pro_feature(self, gate: FeatureGate):
        permission = gate.check(_context(UserState.PRO_USER), Features.ANALYTICS_DASHBOARD)

        assert permission.allowed
        assert permission.reason is None

    def test_free_user_gets_upsell(self, gate: FeatureGate):
        permission = gate.check(_context(UserState.FREE_USER), Features.ANALYTICS_DASHBOARD)

        assert not permission.allowed
        assert permission.reason == "Analytics Dashboard is available in the Pro plan"

    def test_registered_is_asked_to_publish(self, gate: FeatureGate):
        permission = gate.check(_context(UserState.REGISTERED), Features.REMOVE_BRANDING)

        assert not permission.allowed
        assert permission.reason == PUBLISH_REQUIRED

    @pytest.mark.parametrize("state", [UserState.VISITOR, UserState.PUBLIC_VIEWER])
    def test_non_owners_are_asked_to_log_in(self, gate: FeatureGate, state: UserState):
        permission = gate.check(_context(state), Features.ADVANCED_SEO)

        assert not permission.allowed
        assert permission.reason == LOGIN_REQUIRED


class TestFreeFeatures:
    @pytest.mark.parametrize(
        "state", [UserState.REGISTERED, UserState.FREE_USER, UserState.PRO_USER]
    )
    def test_account_holders_get_free_features(self, gate: FeatureGate, state: UserState):
        assert gate.check(_context(state), Features.BASIC_SECTIONS).allowed

    def test_visitor_denied_free_feature(self, gate: FeatureGate):
        permission = gate.check(_context(UserState.VISITOR), Features.PUBLIC_PROFILE)

        assert not permission.allowed
        assert permission.reason == LOGIN_REQUIRED

    def test_public_viewer_denied_free_feature(self, gate: FeatureGate):
        assert not gate.check(_context(UserState.PUBLIC_VIEWER), Features.BASIC_SEO).allowed


class TestOpenAndEditFeatures:
    @pytest.mark.parametrize("state", list(UserState))
    def test_view_public_profile_is_open(self, gate: FeatureGate, state: UserState):
        assert gate.check(_context(state), Features.VIEW_PUBLIC_PROFILE).allowed

    def test_owner_may_edit_own_profile(self, gate: FeatureGate):
        context = _context(UserState.REGISTERED, is_owner=True)

        assert gate.check(context, "edit:profile").allowed

    def test_non_owner_edit_falls_through_to_unknown_rule(self, gate: FeatureGate):
        assert gate.check(_context(UserState.PUBLIC_VIEWER), "edit:profile").allowed
        assert not gate.check(_context(UserState.VISITOR), "edit:profile").allowed


class TestUnknownFeatures:
    """Unknown feature ids fail open for anyone with a session."""

    @pytest.mark.parametrize(
        "state",
        [
            UserState.REGISTERED,
            UserState.FREE_USER,
            UserState.PRO_USER,
            UserState.PUBLIC_VIEWER,
        ],
    )
    def test_unknown_feature_allowed_with_session(self, gate: FeatureGate, state: UserState):
        assert gate.check(_context(state), "teleportation").allowed

    def test_unknown_feature_denied_for_visitor(self, gate: FeatureGate):
        permission = gate.check(_context(UserState.VISITOR), "teleportation")

        assert not permission.allowed
        assert permission.reason == LOGIN_REQUIRED


class TestCheckPlan:
    def test_pro_plan_allows_pro_feature(self, gate: FeatureGate):
        assert gate.check_plan(PlanId.PRO, Features.ADVANCED_SECTIONS).allowed

    @pytest.mark.parametrize("plan_id", [PlanId.FREE, None])
    def test_other_plans_denied_pro_feature(self, gate: FeatureGate, plan_id):
        permission = gate.check_plan(plan_id, Features.REMOVE_BRANDING)

        assert not permission.allowed
        assert permission.reason == "Remove Branding is available in the Pro plan"

    def test_non_pro_feature_always_allowed(self, gate: FeatureGate):
        assert gate.check_plan(PlanId.FREE, Features.BASIC_SECTIONS).allowed


class TestCheckAll:
    def test_covers_every_catalog_feature_in_order(self, gate: FeatureGate):
        permissions = gate.check_all(_context(UserState.FREE_USER))

        assert [p.id for p in permissions] == gate.catalog.all_features

    def test_pro_user_unlocks_everything(self, gate: FeatureGate):
        permissions = gate.check_all(_context(UserState.PRO_USER))

        assert all(p.allowed for p in permissions)


class TestCatalog:
    def test_display_names_come_from_plans(self):
        catalog = FeatureCatalog.from_plans()

        assert catalog.display_name(Features.CUSTOM_CTA) == "Custom CTA"

    def test_display_name_falls_back_to_id(self):
        catalog = FeatureCatalog.from_plans()

        assert catalog.display_name("view-public-profile") == "View public profile"

    def test_catalog_lists_are_disjoint(self):
        catalog = FeatureCatalog()

        assert not catalog.pro_features & catalog.free_features
        assert not catalog.open_features & (catalog.pro_features | catalog.free_features)
