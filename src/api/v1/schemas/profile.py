"""Pydantic schemas for Profile API."""

import re
from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator, model_validator

from api.v1.schemas.section import SectionInput
from domain.entities.experience import MAX_EXPERIENCES, ExperienceDraft, ProfileExperience
from domain.entities.profile import UPDATABLE_FIELDS, ProfileBundle, ProfileUpdate
from domain.entities.section import Section
from domain.services.field_resolver import is_site_relative

ABSOLUTE_URL_PATTERN = re.compile(r"^https?://[^\s/?#]+\.[^\s]+$|^https?://localhost(:\d+)?(/[^\s]*)?$")
DATE_PATTERN = r"^\d{4}(-\d{2}){0,2}$"

# Fields where an explicit null means "not supplied"
NON_NULLABLE_FIELDS = frozenset({"published", "remove_branding"})


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def normalize_url(value: str | None) -> str | None:
    """Empty string and null both mean no URL; anything else must be absolute http(s)."""
    value = _blank_to_none(value)
    if value is None:
        return None
    if not ABSOLUTE_URL_PATTERN.match(value):
        raise ValueError("Must be an absolute http(s) URL")
    return value


def normalize_photo_url(value: str | None) -> str | None:
    """Like ``normalize_url`` but also accepts a site-relative path."""
    value = _blank_to_none(value)
    if value is not None and value.startswith(("/", "\\")):
        if not is_site_relative(value):
            raise ValueError("Must be a path on this site or an absolute http(s) URL")
        return value
    return normalize_url(value)


OptionalUrl = Annotated[str | None, Field(max_length=500), AfterValidator(normalize_url)]
OptionalPhotoUrl = Annotated[
    str | None, Field(max_length=500), AfterValidator(normalize_photo_url)
]


class ExperienceInput(BaseModel):
    """One work-history record. Position in the list becomes its order."""

    company: str = Field(..., min_length=1, max_length=200)
    role: str = Field(..., min_length=1, max_length=200)
    start_date: str = Field(..., pattern=DATE_PATTERN)
    end_date: str | None = Field(None, pattern=DATE_PATTERN)
    description: str = Field("", max_length=5000)
    tech_stack: list[str] = Field(default_factory=list, max_length=30)
    location: str | None = Field(None, max_length=100)

    @model_validator(mode="after")
    def validate_dates(self) -> "ExperienceInput":
        if self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    def to_draft(self) -> ExperienceDraft:
        return ExperienceDraft(
            company=self.company.strip(),
            role=self.role.strip(),
            start_date=self.start_date,
            end_date=self.end_date,
            description=self.description,
            tech_stack=list(self.tech_stack),
            location=_blank_to_none(self.location),
        )


class ProfileCreate(BaseModel):
    """Schema for creating the caller's profile."""

    username: str = Field(..., min_length=3, max_length=20)
    display_name: str | None = Field(None, max_length=100)


class ProfileUpdateRequest(BaseModel):
    """Partial update. Only the keys present in the request are applied.

    ``sections`` and ``experiences`` replace the stored collections when
    present; an empty list clears them.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "display_name": "Ana Ruiz",
                "headline": "Engineer",
                "published": True,
                "experiences": [
                    {
                        "company": "Acme",
                        "role": "Backend Engineer",
                        "start_date": "2021-03",
                        "tech_stack": ["Python", "PostgreSQL"],
                    }
                ],
            }
        },
    )

    content: str | None = Field(None, max_length=50000)
    published: bool | None = None

    display_name: str | None = Field(None, max_length=100)
    headline: str | None = Field(None, max_length=200)
    location: str | None = Field(None, max_length=100)
    profile_photo_url: OptionalPhotoUrl = None
    accent_color: str | None = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    layout_style: str | None = Field(None, max_length=50)

    github_url: OptionalUrl = None
    linkedin_url: OptionalUrl = None
    website_url: OptionalUrl = None
    twitter_url: OptionalUrl = None

    seo_title: str | None = Field(None, max_length=200)
    seo_description: str | None = Field(None, max_length=500)
    seo_keywords: list[Annotated[str, Field(max_length=50)]] | None = Field(None, max_length=20)

    remove_branding: bool | None = None

    sections: list[SectionInput] | None = None
    experiences: list[ExperienceInput] | None = Field(None, max_length=MAX_EXPERIENCES)

    @field_validator("display_name", "headline", "location", "layout_style", "seo_title", "seo_description")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    @field_validator("sections")
    @classmethod
    def validate_unique_orders(cls, v: list[Any] | None) -> list[Any] | None:
        if v is None:
            return v
        orders = [section.order for section in v]
        if len(orders) != len(set(orders)):
            raise ValueError("Section orders must be unique")
        return v

    def to_update(self) -> ProfileUpdate:
        """Translate to the domain update, keeping only supplied keys."""
        fields: dict[str, Any] = {}
        for name in UPDATABLE_FIELDS:
            if name not in self.model_fields_set:
                continue
            value = getattr(self, name)
            if value is None and name in NON_NULLABLE_FIELDS:
                continue
            if name == "seo_keywords":
                value = [k.strip() for k in value or [] if k.strip()]
            fields[name] = value

        sections = None
        if "sections" in self.model_fields_set and self.sections is not None:
            sections = [section.to_draft() for section in self.sections]

        experiences = None
        if "experiences" in self.model_fields_set and self.experiences is not None:
            experiences = [experience.to_draft() for experience in self.experiences]

        return ProfileUpdate(fields=fields, sections=sections, experiences=experiences)


class SectionResponse(BaseModel):
    """Schema for a stored section."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: str
    content: dict[str, Any]
    order: int

    @classmethod
    def from_entity(cls, section: Section) -> "SectionResponse":
        return cls(id=section.id, type=section.type, content=section.content, order=section.order)


class ExperienceResponse(BaseModel):
    """Schema for a stored experience."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    company: str
    role: str
    start_date: str
    end_date: str | None = None
    description: str = ""
    tech_stack: list[str] = Field(default_factory=list)
    location: str | None = None
    order: int
    is_current: bool

    @classmethod
    def from_entity(cls, experience: ProfileExperience) -> "ExperienceResponse":
        return cls(
            id=experience.id,
            company=experience.company,
            role=experience.role,
            start_date=experience.start_date,
            end_date=experience.end_date,
            description=experience.description,
            tech_stack=list(experience.tech_stack),
            location=experience.location,
            order=experience.order,
            is_current=experience.is_current,
        )


class ProfileResponse(BaseModel):
    """Schema for the owner's view of a profile."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "username": "ana",
                "published": True,
                "display_name": "Ana Ruiz",
                "headline": "Engineer",
                "views": 42,
                "sections": [],
                "experiences": [],
            }
        },
    )

    id: UUID
    user_id: UUID
    username: str
    published: bool
    content: str | None = None
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
    seo_keywords: list[str] = Field(default_factory=list)
    remove_branding: bool = False
    views: int = 0
    created_at: datetime
    updated_at: datetime
    sections: list[SectionResponse] = Field(default_factory=list)
    experiences: list[ExperienceResponse] = Field(default_factory=list)

    @classmethod
    def from_bundle(cls, bundle: ProfileBundle) -> "ProfileResponse":
        profile = bundle.profile
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            username=profile.username,
            published=profile.published,
            content=profile.content,
            display_name=profile.display_name,
            headline=profile.headline,
            location=profile.location,
            profile_photo_url=profile.profile_photo_url,
            accent_color=profile.accent_color,
            layout_style=profile.layout_style,
            github_url=profile.github_url,
            linkedin_url=profile.linkedin_url,
            website_url=profile.website_url,
            twitter_url=profile.twitter_url,
            seo_title=profile.seo_title,
            seo_description=profile.seo_description,
            seo_keywords=list(profile.seo_keywords),
            remove_branding=profile.remove_branding,
            views=profile.views,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
            sections=[
                SectionResponse.from_entity(s) for s in sorted(bundle.sections, key=lambda s: s.order)
            ],
            experiences=[
                ExperienceResponse.from_entity(e)
                for e in sorted(bundle.experiences, key=lambda e: e.order)
            ],
        )


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse
