"""Profile section domain entity and the closed set of section types."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID, uuid4

from domain.entities.plan import Features


class SectionType(StrEnum):
    """Closed enumeration of typed content blocks a profile may contain."""

    HERO = "hero"
    ABOUT = "about"
    SKILLS = "skills"
    EXPERIENCE = "experience"
    PROJECTS = "projects"
    EDUCATION = "education"
    LINKS = "links"
    CERTIFICATIONS = "certifications"
    MDX = "mdx"

    @classmethod
    def parse(cls, value: str) -> "SectionType | None":
        """Return the member for a stored tag, or None when the tag is unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


SECTION_LABELS: dict[SectionType, str] = {
    SectionType.HERO: "Hero",
    SectionType.ABOUT: "About",
    SectionType.SKILLS: "Skills",
    SectionType.EXPERIENCE: "Experience",
    SectionType.PROJECTS: "Projects",
    SectionType.EDUCATION: "Education",
    SectionType.LINKS: "Links",
    SectionType.CERTIFICATIONS: "Certifications",
    SectionType.MDX: "Custom MDX",
}

SECTION_DESCRIPTIONS: dict[SectionType, str] = {
    SectionType.HERO: "Your name, professional title, and tagline",
    SectionType.ABOUT: "Professional summary and bio",
    SectionType.SKILLS: "Your skills organized by category",
    SectionType.EXPERIENCE: "Your work experience and career history",
    SectionType.PROJECTS: "Showcase your projects and portfolio work",
    SectionType.EDUCATION: "Your educational background and degrees",
    SectionType.LINKS: "Links to your social profiles and websites",
    SectionType.CERTIFICATIONS: "Professional certifications and credentials",
    SectionType.MDX: "Fully custom section using MDX (Pro feature)",
}

# Section types that need a Pro feature, keyed to that feature id
PRO_SECTION_FEATURES: dict[SectionType, str] = {
    SectionType.MDX: Features.ADVANCED_SECTIONS,
}


def is_pro_section(section_type: SectionType) -> bool:
    return section_type in PRO_SECTION_FEATURES


@dataclass
class Section:
    """Domain entity for one ordered, typed content block of a profile."""

    profile_id: UUID
    type: str
    content: dict[str, Any] = field(default_factory=dict)
    order: int = 0
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def kind(self) -> SectionType | None:
        return SectionType.parse(self.type)


@dataclass
class SectionDraft:
    """Caller-supplied section, already validated against its type's schema."""

    type: SectionType
    content: dict[str, Any]
    order: int

    def to_entity(self, profile_id: UUID) -> Section:
        return Section(
            profile_id=profile_id,
            type=self.type.value,
            content=dict(self.content),
            order=self.order,
        )


def default_section_drafts() -> list[SectionDraft]:
    """Starter sections for a newly created profile."""
    return [
        SectionDraft(
            type=SectionType.HERO,
            content={"fullName": "", "title": "", "tagline": "", "location": ""},
            order=0,
        ),
        SectionDraft(type=SectionType.ABOUT, content={"summary": ""}, order=1),
        SectionDraft(type=SectionType.LINKS, content={"items": []}, order=2),
    ]
