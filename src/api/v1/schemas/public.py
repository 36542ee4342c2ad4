"""Pydantic schemas for the public profile page."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from domain.services.profile_service import PublicProfileView


class ViewerResponse(BaseModel):
    """How the requester relates to the profile."""

    state: str
    label: str
    is_owner: bool


class ResolvedProfileResponse(BaseModel):
    """Effective identity fields after every fallback."""

    display_name: str
    headline: str
    location: str
    photo_url: str
    tagline: str
    accent_color: str | None = None
    layout_style: str | None = None
    social_links: dict[str, str] = Field(default_factory=dict)


class SeoMetadataResponse(BaseModel):
    """Page metadata for search engines and social cards."""

    title: str
    description: str
    canonical_url: str
    image: str
    keywords: list[str] = Field(default_factory=list)
    open_graph: dict[str, Any] = Field(default_factory=dict)
    twitter: dict[str, Any] = Field(default_factory=dict)


class RenderedBlockResponse(BaseModel):
    kind: str
    html: str
    section_id: UUID | None = None


class PublicProfileResponse(BaseModel):
    """Rendered public profile."""

    username: str
    published: bool
    viewer: ViewerResponse
    resolved: ResolvedProfileResponse
    metadata: SeoMetadataResponse
    blocks: list[RenderedBlockResponse]
    footer: str | None = None
    html: str

    @classmethod
    def from_view(cls, view: PublicProfileView) -> "PublicProfileResponse":
        rendered = view.rendered
        resolved = rendered.resolved
        metadata = rendered.metadata
        return cls(
            username=rendered.username,
            published=view.bundle.profile.published,
            viewer=ViewerResponse(
                state=view.context.state.value,
                label=view.context.label,
                is_owner=view.context.is_owner,
            ),
            resolved=ResolvedProfileResponse(
                display_name=resolved.display_name,
                headline=resolved.headline,
                location=resolved.location,
                photo_url=resolved.photo_url,
                tagline=resolved.tagline,
                accent_color=resolved.accent_color,
                layout_style=resolved.layout_style,
                social_links=dict(resolved.social_links),
            ),
            metadata=SeoMetadataResponse(
                title=metadata.title,
                description=metadata.description,
                canonical_url=metadata.canonical,
                image=metadata.image,
                keywords=list(metadata.keywords),
                open_graph=metadata.open_graph,
                twitter=metadata.twitter,
            ),
            blocks=[
                RenderedBlockResponse(kind=b.kind, html=b.html, section_id=b.section_id)
                for b in rendered.blocks
            ],
            footer=rendered.footer,
            html=rendered.html,
        )


class PublicProfileDetailResponse(BaseModel):
    data: PublicProfileResponse
