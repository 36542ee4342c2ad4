"""Profile service layer: creation, reads, and the update transaction."""

from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

import structlog

from core.exceptions import (
    AuthorizationError,
    ExperienceLimitError,
    FeatureNotAvailableError,
    InvalidDocumentError,
    InvalidUsernameError,
    NothingToUpdateError,
    ProfileAlreadyExistsError,
    ProfileNotFoundError,
    UsernameTakenError,
)
from domain.entities.analytics import AnalyticsSummary
from domain.entities.experience import MAX_EXPERIENCES
from domain.entities.plan import Features, PlanId
from domain.entities.profile import (
    SEO_OVERRIDE_FIELDS,
    Profile,
    ProfileBundle,
    ProfileUpdate,
    is_valid_username,
    normalize_username,
)
from domain.entities.section import PRO_SECTION_FEATURES, default_section_drafts
from domain.entities.user import User
from domain.entities.user_state import UserStateContext
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.analytics_service import AnalyticsService
from domain.services.document import parse_document, validate_frontmatter
from domain.services.feature_gate import FeatureGate, FeaturePermission
from domain.services.section_renderer import RenderedProfile, SectionRenderer
from domain.services.user_state import determine_user_state

logger = structlog.get_logger()


@dataclass(frozen=True)
class PublicProfileView:
    """What a public page request resolves to."""

    bundle: ProfileBundle
    context: UserStateContext
    rendered: RenderedProfile
    owner_plan: PlanId
    should_record_view: bool


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        gate: FeatureGate,
        renderer: SectionRenderer,
        analytics_service: AnalyticsService | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._gate = gate
        self._renderer = renderer
        self._analytics = analytics_service

    async def create(
        self,
        user_id: UUID,
        username: str,
        email: str = "",
        display_name: str | None = None,
    ) -> ProfileBundle:
        """Create the caller's profile, unpublished, with the starter sections."""
        normalized = normalize_username(username)
        if not is_valid_username(normalized):
            raise InvalidUsernameError(username)

        async with self._uow_factory() as uow:
            if await uow.profiles.get_by_user_id(user_id):
                raise ProfileAlreadyExistsError(str(user_id))
            if await uow.profiles.get_by_username(normalized):
                raise UsernameTakenError(normalized)

            await uow.users.upsert(User(id=user_id, email=email, display_name=display_name))
            profile = await uow.profiles.create(Profile(user_id=user_id, username=normalized))
            sections = await uow.sections.create_many(
                [draft.to_entity(profile.id) for draft in default_section_drafts()]
            )
            await uow.commit()

        logger.info("profile_created", profile_id=str(profile.id), username=normalized)
        return ProfileBundle(profile=profile, sections=list(sections), experiences=[])

    async def get_for_owner(self, user_id: UUID) -> ProfileBundle:
        """The caller's own profile, published or not."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user_id(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            return await self._load_bundle(uow, profile)

    async def get_public(
        self,
        username: str,
        viewer_id: UUID | None = None,
        preview: bool = False,
    ) -> PublicProfileView:
        """Resolve ``/u/{username}`` for a viewer.

        Unpublished profiles look identical to missing ones unless the viewer
        owns them. ``preview`` only suppresses view recording.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_username(normalize_username(username))
            if not profile:
                raise ProfileNotFoundError(username)
            is_owner = profile.is_owned_by(viewer_id)
            if not profile.published and not is_owner:
                raise ProfileNotFoundError(username)

            bundle = await self._load_bundle(uow, profile)
            owner_plan = await self._plan_for(uow, profile.user_id)
            viewer_plan = owner_plan if is_owner else None
            if viewer_id is not None and not is_owner:
                viewer_plan = await self._plan_for(uow, viewer_id)

        context = determine_user_state(
            session_user_id=viewer_id,
            profile_owner_id=profile.user_id,
            plan_id=viewer_plan,
            is_published=profile.published,
        )
        return PublicProfileView(
            bundle=bundle,
            context=context,
            rendered=self._renderer.render_profile(bundle, owner_plan),
            owner_plan=owner_plan,
            should_record_view=profile.published and not preview and not is_owner,
        )

    async def describe_access(
        self, user_id: UUID
    ) -> tuple[UserStateContext, list[FeaturePermission]]:
        """The caller's state relative to their own profile, plus every permission."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user_id(user_id)
            plan_id = await self._plan_for(uow, user_id)

        context = determine_user_state(
            session_user_id=user_id,
            profile_owner_id=profile.user_id if profile else None,
            plan_id=plan_id,
            is_published=profile.published if profile else None,
        )
        return context, self._gate.check_all(context)

    async def update(
        self,
        profile_id: UUID,
        user_id: UUID,
        update: ProfileUpdate,
    ) -> ProfileBundle:
        """Apply a partial update and replace collections in one transaction.

        Scalar fields apply as supplied. ``sections`` and ``experiences``, when
        present, replace the stored collections wholesale. Everything commits
        once or not at all.
        """
        if update.is_empty:
            raise NothingToUpdateError()
        if update.experiences is not None and len(update.experiences) > MAX_EXPERIENCES:
            raise ExperienceLimitError(MAX_EXPERIENCES, len(update.experiences))
        self._validate_document(update)

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(profile_id)
            if not profile:
                raise ProfileNotFoundError(str(profile_id))
            if not profile.is_owned_by(user_id):
                raise AuthorizationError("Only the profile owner can edit this profile")

            plan_id = await self._plan_for(uow, user_id)
            self._enforce_plan(plan_id, update)

            profile.apply(update.fields)
            profile = await uow.profiles.update(profile)

            if update.sections is not None:
                await uow.sections.delete_for_profile(profile.id)
                await uow.sections.create_many(
                    [draft.to_entity(profile.id) for draft in update.sections]
                )

            if update.experiences is not None:
                await uow.experiences.delete_for_profile(profile.id)
                await uow.experiences.create_many(
                    [
                        draft.to_entity(profile.id, order=index)
                        for index, draft in enumerate(update.experiences)
                    ]
                )

            bundle = await self._load_bundle(uow, profile)
            await uow.commit()

        logger.info(
            "profile_updated",
            profile_id=str(profile_id),
            fields=sorted(update.fields),
            replaced_sections=update.sections is not None,
            replaced_experiences=update.experiences is not None,
        )
        return bundle

    async def get_analytics(self, user_id: UUID) -> AnalyticsSummary:
        """Owner analytics, gated by the analytics dashboard feature."""
        if self._analytics is None:
            raise RuntimeError("ProfileService was built without an AnalyticsService")

        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_user_id(user_id)
            if not profile:
                raise ProfileNotFoundError(str(user_id))
            plan_id = await self._plan_for(uow, user_id)

        context = determine_user_state(
            session_user_id=user_id,
            profile_owner_id=profile.user_id,
            plan_id=plan_id,
            is_published=profile.published,
        )
        permission = self._gate.check(context, Features.ANALYTICS_DASHBOARD)
        if not permission.allowed:
            raise FeatureNotAvailableError(permission.id, permission.reason or "")

        return await self._analytics.get_summary(profile.id, views=profile.views)

    # --- helpers ---

    async def _load_bundle(self, uow: IUnitOfWork, profile: Profile) -> ProfileBundle:
        sections = await uow.sections.get_for_profile(profile.id)
        experiences = await uow.experiences.get_for_profile(profile.id)
        return ProfileBundle(
            profile=profile,
            sections=list(sections),
            experiences=list(experiences),
        )

    async def _plan_for(self, uow: IUnitOfWork, user_id: UUID) -> PlanId:
        # No user record yet means the free plan
        user = await uow.users.get(user_id)
        return user.plan_id if user else PlanId.FREE

    def _validate_document(self, update: ProfileUpdate) -> None:
        content = update.fields.get("content")
        if not content:
            return
        errors = validate_frontmatter(parse_document(content).frontmatter)
        if errors:
            raise InvalidDocumentError(errors)

    def _enforce_plan(self, plan_id: PlanId, update: ProfileUpdate) -> None:
        required: list[str] = []
        if update.fields.get("remove_branding") is True:
            required.append(Features.REMOVE_BRANDING)
        if any(update.fields.get(name) for name in SEO_OVERRIDE_FIELDS):
            required.append(Features.ADVANCED_SEO)
        for draft in update.sections or []:
            if draft.type in PRO_SECTION_FEATURES:
                required.append(PRO_SECTION_FEATURES[draft.type])

        for feature_id in required:
            permission = self._gate.check_plan(plan_id, feature_id)
            if not permission.allowed:
                raise FeatureNotAvailableError(feature_id, permission.reason or "")
