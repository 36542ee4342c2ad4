"""Field resolver: one effective value per attribute across schema generations.

Profiles carry up to three overlapping generations of content:

* generation 1, a free-text document whose YAML frontmatter holds title,
  description, keywords and image;
* generation 2, typed sections, where the hero section holds the identity
  fields (with older field names still present in stored data);
* generation 3, structured fields on the profile itself.

Every priority chain lives in this module. Renderers and SEO helpers ask the
resolver instead of reading raw fields. All functions are pure and total:
malformed content resolves to empty values instead of raising.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from domain.entities.profile import Profile
from domain.entities.section import Section, SectionType
from domain.services.document import DocumentFrontmatter, parse_document

# Section body fields: (current name, legacy name)
SECTION_BODY_FIELDS: dict[SectionType, tuple[str, str]] = {
    SectionType.ABOUT: ("summary", "bio"),
    SectionType.EXPERIENCE: ("items", "experiences"),
    SectionType.PROJECTS: ("items", "projects"),
    SectionType.EDUCATION: ("items", "education"),
    SectionType.LINKS: ("items", "links"),
    SectionType.CERTIFICATIONS: ("items", "certifications"),
    SectionType.MDX: ("mdx", "content"),
}

# Section types whose body is text rather than a list of items
TEXT_BODY_TYPES = frozenset({SectionType.ABOUT, SectionType.MDX})


@dataclass(frozen=True)
class ResolvedSeo:
    title: str
    description: str
    keywords: tuple[str, ...] = ()
    image: str | None = None


@dataclass(frozen=True)
class ResolvedProfile:
    """Canonical display view of a profile after applying every fallback."""

    username: str
    display_name: str
    headline: str
    location: str
    photo_url: str
    tagline: str
    accent_color: str | None
    layout_style: str | None
    social_links: dict[str, str] = field(default_factory=dict)
    seo: ResolvedSeo = field(default_factory=lambda: ResolvedSeo(title="", description=""))


def first_text(*candidates: Any) -> str:
    """Return the first candidate that is a non-blank string, else ""."""
    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
    return ""


def as_mapping(content: Any) -> Mapping[str, Any]:
    return content if isinstance(content, Mapping) else {}


def is_site_relative(url: str) -> bool:
    r"""True for a path on this site, false for anything naming another host.

    Browsers drop tabs and newlines from URLs and read a backslash as a
    slash, so ``/\host`` is protocol-relative just like ``//host``.
    """
    normalized = re.sub(r"[\t\n\r]", "", url).replace("\\", "/")
    return normalized.startswith("/") and not normalized.startswith("//")


def resolve_section_text(content: Any, current: str, legacy: str) -> str:
    """Text body of a section: current field name, then the legacy one."""
    data = as_mapping(content)
    return first_text(data.get(current), data.get(legacy))


def resolve_section_items(content: Any, current: str, legacy: str) -> list[Mapping[str, Any]]:
    """List body of a section: current field name, then the legacy one.

    A list under the current name wins even when empty. Non-mapping
    entries are dropped.
    """
    data = as_mapping(content)
    items = data.get(current)
    if not isinstance(items, list):
        items = data.get(legacy)
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, Mapping)]


def resolve_section_body(section: Section) -> Any:
    """Body of a known section type that has a current/legacy field pair."""
    kind = section.kind
    if kind not in SECTION_BODY_FIELDS:
        return None
    current, legacy = SECTION_BODY_FIELDS[kind]
    if kind in TEXT_BODY_TYPES:
        return resolve_section_text(section.content, current, legacy)
    return resolve_section_items(section.content, current, legacy)


def find_hero_content(sections: Sequence[Section]) -> Mapping[str, Any]:
    """Content of the first hero section by render order, or {}."""
    heroes = [s for s in ordered_sections(sections) if s.kind == SectionType.HERO]
    if not heroes:
        return {}
    return as_mapping(heroes[0].content)


def ordered_sections(sections: Sequence[Section]) -> list[Section]:
    """Ascending ``order``; ties keep insertion order (sorted() is stable)."""
    return sorted(sections, key=lambda s: s.order if isinstance(s.order, int) else 0)


def resolve_display_name(profile: Profile, hero: Mapping[str, Any]) -> str:
    return first_text(profile.display_name, hero.get("fullName"), hero.get("name"))


def resolve_headline(profile: Profile, hero: Mapping[str, Any]) -> str:
    return first_text(profile.headline, hero.get("title"), hero.get("role"))


def resolve_location(profile: Profile, hero: Mapping[str, Any]) -> str:
    return first_text(profile.location, hero.get("location"))


def resolve_photo_url(profile: Profile, hero: Mapping[str, Any]) -> str:
    return first_text(profile.profile_photo_url, hero.get("avatar"))


def resolve_seo(
    profile: Profile,
    hero: Mapping[str, Any],
    frontmatter: DocumentFrontmatter,
) -> ResolvedSeo:
    """Explicit override, then identity fields, then hero, then document, then username."""
    title = first_text(
        profile.seo_title,
        profile.display_name,
        hero.get("fullName"),
        hero.get("name"),
        frontmatter.title,
        profile.username,
    )
    description = first_text(
        profile.seo_description,
        profile.headline,
        hero.get("tagline"),
        hero.get("title"),
        frontmatter.description,
    )
    keywords: tuple[str, ...] = tuple(k for k in profile.seo_keywords or [] if k)
    if not keywords:
        keywords = frontmatter.keywords
    image = first_text(profile.profile_photo_url, hero.get("avatar"), frontmatter.image)
    return ResolvedSeo(
        title=title,
        description=description,
        keywords=keywords,
        image=image or None,
    )


def resolve_social_links(profile: Profile) -> dict[str, str]:
    links = {
        "website": profile.website_url,
        "github": profile.github_url,
        "linkedin": profile.linkedin_url,
        "twitter": profile.twitter_url,
    }
    return {name: url for name, url in links.items() if first_text(url)}


def resolve_profile(profile: Profile, sections: Sequence[Section]) -> ResolvedProfile:
    """Compute the canonical display view for a profile and its sections."""
    hero = find_hero_content(sections)
    frontmatter = parse_document(profile.content).frontmatter
    return ResolvedProfile(
        username=profile.username,
        display_name=resolve_display_name(profile, hero),
        headline=resolve_headline(profile, hero),
        location=resolve_location(profile, hero),
        photo_url=resolve_photo_url(profile, hero),
        tagline=first_text(hero.get("tagline")),
        accent_color=first_text(profile.accent_color) or None,
        layout_style=first_text(profile.layout_style) or None,
        social_links=resolve_social_links(profile),
        seo=resolve_seo(profile, hero, frontmatter),
    )
