"""Profile domain entity."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from domain.entities.experience import ExperienceDraft, ProfileExperience
from domain.entities.section import Section, SectionDraft

USERNAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]{2,19}$")

# Scalar fields a partial update may touch. Collections (sections, experiences)
# are replaced wholesale and travel separately.
UPDATABLE_FIELDS: tuple[str, ...] = (
    "content",
    "published",
    "display_name",
    "headline",
    "location",
    "profile_photo_url",
    "accent_color",
    "layout_style",
    "github_url",
    "linkedin_url",
    "website_url",
    "twitter_url",
    "seo_title",
    "seo_description",
    "seo_keywords",
    "remove_branding",
)

SEO_OVERRIDE_FIELDS: tuple[str, ...] = ("seo_title", "seo_description", "seo_keywords")


def normalize_username(username: str) -> str:
    """Public lookup keys are case-insensitive; store and compare lowercase."""
    return username.strip().lower()


def is_valid_username(username: str) -> bool:
    return bool(USERNAME_PATTERN.match(username))


@dataclass
class Profile:
    """Domain entity for a user's public profile (one per user)."""

    user_id: UUID
    username: str
    id: UUID = field(default_factory=uuid4)
    published: bool = False

    # Generation 1: free-text document with YAML frontmatter
    content: str | None = None

    # Generation 3: structured identity fields
    display_name: str | None = None
    headline: str | None = None
    location: str | None = None
    profile_photo_url: str | None = None
    accent_color: str | None = None
    layout_style: str | None = None

    github_url: str | None = None
    linkedin_url: str | None = None
    website_url: str | None = None
    twitter_url: str | None = None

    seo_title: str | None = None
    seo_description: str | None = None
    seo_keywords: list[str] = field(default_factory=list)

    remove_branding: bool = False
    views: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def is_owned_by(self, user_id: UUID | None) -> bool:
        return user_id is not None and self.user_id == user_id

    def apply(self, changes: dict[str, Any]) -> None:
        """Apply already-validated scalar changes."""
        for name, value in changes.items():
            if name not in UPDATABLE_FIELDS:
                raise ValueError(f"Field is not updatable: {name}")
            setattr(self, name, value)
        self.updated_at = datetime.utcnow()


@dataclass
class ProfileUpdate:
    """A partial profile update.

    ``fields`` holds only the scalar fields the caller supplied. ``None`` for
    ``sections`` or ``experiences`` means "leave the collection alone"; an empty
    list means "clear it".
    """

    fields: dict[str, Any] = field(default_factory=dict)
    sections: list[SectionDraft] | None = None
    experiences: list[ExperienceDraft] | None = None

    @property
    def is_empty(self) -> bool:
        return not self.fields and self.sections is None and self.experiences is None


@dataclass(frozen=True, slots=True)
class ProfileBundle:
    """Read-only value object: a profile with its ordered collections."""

    profile: Profile
    sections: list[Section]
    experiences: list[ProfileExperience]
