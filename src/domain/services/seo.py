"""SEO metadata for public profile pages."""

from dataclasses import dataclass, field
from typing import Any

from domain.services.field_resolver import ResolvedProfile

OG_IMAGE_WIDTH = 1200
OG_IMAGE_HEIGHT = 630


@dataclass(frozen=True)
class SiteInfo:
    """Public site identity, built once from settings."""

    name: str
    url: str
    description: str
    og_image: str = "/og-image.png"

    def profile_url(self, username: str) -> str:
        return f"{self.url.rstrip('/')}/u/{username}"

    def absolute(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.url.rstrip('/')}{path}"


@dataclass(frozen=True)
class ProfileMetadata:
    """Page metadata: title, description, canonical URL, social cards."""

    title: str
    description: str
    url: str
    image: str
    keywords: list[str] = field(default_factory=list)
    open_graph: dict[str, Any] = field(default_factory=dict)
    twitter: dict[str, Any] = field(default_factory=dict)

    @property
    def canonical(self) -> str:
        return self.url


def build_profile_metadata(resolved: ResolvedProfile, site: SiteInfo) -> ProfileMetadata:
    """Turn resolved SEO fields into page metadata, falling back to site defaults."""
    seo = resolved.seo
    title = f"{seo.title} | {site.name}"
    description = seo.description or site.description
    url = site.profile_url(resolved.username)
    image = site.absolute(seo.image) if seo.image else site.absolute(site.og_image)

    return ProfileMetadata(
        title=title,
        description=description,
        url=url,
        image=image,
        keywords=list(seo.keywords),
        open_graph={
            "type": "profile",
            "title": title,
            "description": description,
            "url": url,
            "site_name": site.name,
            "images": [
                {
                    "url": image,
                    "width": OG_IMAGE_WIDTH,
                    "height": OG_IMAGE_HEIGHT,
                    "alt": seo.title,
                }
            ],
        },
        twitter={
            "card": "summary_large_image",
            "title": title,
            "description": description,
            "images": [image],
            "creator": f"@{resolved.username}",
        },
    )
