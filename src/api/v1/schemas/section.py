"""Pydantic schemas for typed section content.

Each section type has its own content model, and the request union is
discriminated on ``type``: an unknown tag or content that does not fit its
tag is rejected before anything reaches storage. Content keys are camelCase
as stored. Legacy keys (``hero.name``, ``about.bio``, ``links.links`` ...)
are still accepted, and unrecognized keys are kept.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.entities.section import SectionDraft, SectionType

LinkType = Literal["github", "linkedin", "portfolio", "email", "twitter", "website", "other"]


class ContentModel(BaseModel):
    """Base for stored section content."""

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_content(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class HeroContent(ContentModel):
    full_name: str | None = Field(None, max_length=100)
    title: str | None = Field(None, max_length=200)
    tagline: str | None = Field(None, max_length=300)
    location: str | None = Field(None, max_length=100)
    avatar: str | None = Field(None, max_length=500)
    bio: str | None = Field(None, max_length=2000)
    # Legacy
    name: str | None = Field(None, max_length=100)
    role: str | None = Field(None, max_length=200)


class AboutContent(ContentModel):
    summary: str | None = Field(None, max_length=5000)
    # Legacy
    bio: str | None = Field(None, max_length=5000)


class SkillCategory(ContentModel):
    name: str = Field(..., max_length=100)
    items: list[str] = Field(default_factory=list, max_length=50)


class SkillsContent(ContentModel):
    categories: list[SkillCategory] = Field(default_factory=list, max_length=20)


class ExperienceItem(ContentModel):
    company: str = Field(..., max_length=200)
    role: str = Field(..., max_length=200)
    start_date: str | None = Field(None, max_length=20)
    end_date: str | None = Field(None, max_length=20)
    current: bool | None = None
    description: str | None = Field(None, max_length=5000)
    tech_stack: list[str] | None = Field(None, max_length=30)
    location: str | None = Field(None, max_length=100)


class ExperienceContent(ContentModel):
    items: list[ExperienceItem] | None = Field(None, max_length=50)
    # Legacy
    experiences: list[ExperienceItem] | None = Field(None, max_length=50)


class ProjectItem(ContentModel):
    name: str = Field(..., max_length=200)
    description: str | None = Field(None, max_length=5000)
    role: str | None = Field(None, max_length=200)
    tech_stack: list[str] | None = Field(None, max_length=30)
    live_url: str | None = Field(None, max_length=500)
    github_url: str | None = Field(None, max_length=500)
    image: str | None = Field(None, max_length=500)


class ProjectsContent(ContentModel):
    items: list[ProjectItem] = Field(default_factory=list, max_length=50)


class EducationItem(ContentModel):
    institution: str = Field(..., max_length=200)
    degree: str | None = Field(None, max_length=200)
    field: str | None = Field(None, max_length=200)
    start_year: int | str | None = None
    end_year: int | str | None = None
    description: str | None = Field(None, max_length=2000)


class EducationContent(ContentModel):
    items: list[EducationItem] = Field(default_factory=list, max_length=20)


class LinkItem(ContentModel):
    type: LinkType = "other"
    url: str = Field(..., max_length=500)
    label: str | None = Field(None, max_length=100)


class LinksContent(ContentModel):
    items: list[LinkItem] | None = Field(None, max_length=30)
    # Legacy
    links: list[LinkItem] | None = Field(None, max_length=30)


class CertificationItem(ContentModel):
    name: str = Field(..., max_length=200)
    issuer: str | None = Field(None, max_length=200)
    date: str | None = Field(None, max_length=20)
    expiry_date: str | None = Field(None, max_length=20)
    url: str | None = Field(None, max_length=500)


class CertificationsContent(ContentModel):
    items: list[CertificationItem] = Field(default_factory=list, max_length=50)


class MdxContent(ContentModel):
    mdx: str = Field("", max_length=20000)


class SectionInputBase(BaseModel):
    type: str
    content: ContentModel
    order: int = Field(..., ge=0, le=1000)

    def to_draft(self) -> SectionDraft:
        return SectionDraft(
            type=SectionType(self.type),
            content=self.content.to_content(),
            order=self.order,
        )


class HeroSectionInput(SectionInputBase):
    type: Literal["hero"]
    content: HeroContent = Field(default_factory=HeroContent)


class AboutSectionInput(SectionInputBase):
    type: Literal["about"]
    content: AboutContent = Field(default_factory=AboutContent)


class SkillsSectionInput(SectionInputBase):
    type: Literal["skills"]
    content: SkillsContent = Field(default_factory=SkillsContent)


class ExperienceSectionInput(SectionInputBase):
    type: Literal["experience"]
    content: ExperienceContent = Field(default_factory=ExperienceContent)


class ProjectsSectionInput(SectionInputBase):
    type: Literal["projects"]
    content: ProjectsContent = Field(default_factory=ProjectsContent)


class EducationSectionInput(SectionInputBase):
    type: Literal["education"]
    content: EducationContent = Field(default_factory=EducationContent)


class LinksSectionInput(SectionInputBase):
    type: Literal["links"]
    content: LinksContent = Field(default_factory=LinksContent)


class CertificationsSectionInput(SectionInputBase):
    type: Literal["certifications"]
    content: CertificationsContent = Field(default_factory=CertificationsContent)


class MdxSectionInput(SectionInputBase):
    type: Literal["mdx"]
    content: MdxContent = Field(default_factory=MdxContent)


SectionInput = Annotated[
    Union[
        HeroSectionInput,
        AboutSectionInput,
        SkillsSectionInput,
        ExperienceSectionInput,
        ProjectsSectionInput,
        EducationSectionInput,
        LinksSectionInput,
        CertificationsSectionInput,
        MdxSectionInput,
    ],
    Field(discriminator="type"),
]
