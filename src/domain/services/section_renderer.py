"""Section renderer: typed content blocks to escaped HTML fragments."""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from html import escape
from typing import Any
from uuid import UUID

import structlog

from domain.entities.experience import ProfileExperience
from domain.entities.plan import PlanId
from domain.entities.profile import ProfileBundle
from domain.entities.section import PRO_SECTION_FEATURES, SECTION_LABELS, Section, SectionType
from domain.services.document import parse_document
from domain.services.feature_gate import FeatureGate
from domain.services.field_resolver import (
    ResolvedProfile,
    as_mapping,
    first_text,
    is_site_relative,
    ordered_sections,
    resolve_profile,
    resolve_section_body,
)
from domain.services.seo import ProfileMetadata, SiteInfo, build_profile_metadata

logger = structlog.get_logger()

SAFE_URL_PREFIXES = ("http://", "https://", "mailto:", "/")

LINK_LABELS = {
    "github": "GitHub",
    "linkedin": "LinkedIn",
    "portfolio": "Portfolio",
    "email": "Email",
    "twitter": "Twitter",
    "website": "Website",
    "other": "Link",
}


@dataclass(frozen=True)
class RenderedBlock:
    """One rendered piece of a profile page."""

    kind: str
    html: str
    section_id: UUID | None = None


@dataclass(frozen=True)
class RenderedProfile:
    """The full public document for a profile."""

    username: str
    resolved: ResolvedProfile
    metadata: ProfileMetadata
    blocks: list[RenderedBlock] = field(default_factory=list)
    footer: str | None = None

    @property
    def html(self) -> str:
        parts = [block.html for block in self.blocks]
        if self.footer:
            parts.append(self.footer)
        return "\n".join(parts)


# --- small HTML helpers ---


def _text(item: Mapping[str, Any], key: str) -> str:
    value = item.get(key)
    if isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    return first_text(value)


def _strings(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [v.strip() for v in value if isinstance(v, str) and v.strip()]


def safe_url(url: Any) -> str | None:
    """Only http(s), mailto and site-relative targets survive."""
    candidate = first_text(url)
    if not candidate:
        return None
    if candidate.startswith("/"):
        return candidate if is_site_relative(candidate) else None
    if candidate.lower().startswith(SAFE_URL_PREFIXES):
        return candidate
    return None


def _link(url: str, label: str) -> str:
    return (
        f'<a href="{escape(url)}" target="_blank" rel="noopener noreferrer">'
        f"{escape(label)}</a>"
    )


def render_markdown(text: str) -> str:
    """Render the markdown subset used in profiles: paragraphs, bullets, headings."""
    html_parts: list[str] = []
    for chunk in text.replace("\r\n", "\n").split("\n\n"):
        lines = [line.rstrip() for line in chunk.strip("\n").split("\n") if line.strip()]
        if not lines:
            continue
        if all(line.lstrip().startswith(("- ", "* ")) for line in lines):
            items = "".join(f"<li>{escape(line.lstrip()[2:].strip())}</li>" for line in lines)
            html_parts.append(f"<ul>{items}</ul>")
        elif len(lines) == 1 and lines[0].startswith("#"):
            level = min(len(lines[0]) - len(lines[0].lstrip("#")), 6)
            heading = lines[0].lstrip("#").strip()
            html_parts.append(f"<h{level}>{escape(heading)}</h{level}>")
        else:
            html_parts.append(f"<p>{'<br>'.join(escape(line) for line in lines)}</p>")
    return f'<div class="markdown">{"".join(html_parts)}</div>'


def _section(kind: str, inner: str, title: str | None = None) -> str:
    heading = f"<h2>{escape(title)}</h2>" if title else ""
    return f'<section class="section section-{escape(kind)}">{heading}{inner}</section>'


def _year(value: Any) -> str:
    text = value if isinstance(value, str) else (str(value) if isinstance(value, int) else "")
    return text.strip()[:4]


def _date_range(start: Any, end: Any, current: bool) -> str:
    start_year = _year(start)
    if current:
        return f"{start_year} - Present" if start_year else "Present"
    end_year = _year(end)
    if start_year and end_year:
        return f"{start_year} - {end_year}"
    return start_year or end_year


def _tags(values: list[str]) -> str:
    if not values:
        return ""
    return '<ul class="tags">' + "".join(f"<li>{escape(v)}</li>" for v in values) + "</ul>"


def _experience_entry(
    role: str,
    company: str,
    dates: str,
    description: str,
    tech_stack: list[str],
    location: str = "",
) -> str:
    parts = [
        f'<div class="dates">{escape(dates)}</div>' if dates else "",
        f"<h3>{escape(role)}</h3>",
        f'<p class="company">{escape(company)}</p>',
        f'<p class="location">{escape(location)}</p>' if location else "",
        render_markdown(description) if description else "",
        _tags(tech_stack),
    ]
    return f'<div class="experience">{"".join(parts)}</div>'


# --- per-type renderers ---
# Each returns None when the section has nothing to show.


def render_hero(section: Section, resolved: ResolvedProfile) -> str | None:
    content = as_mapping(section.content)
    return _identity_header(resolved, bio=first_text(content.get("bio")))


def _identity_header(resolved: ResolvedProfile, bio: str = "") -> str:
    style = f' style="color: {escape(resolved.accent_color)}"' if resolved.accent_color else ""
    parts: list[str] = []
    photo = safe_url(resolved.photo_url)
    if photo:
        parts.append(f'<img class="avatar" src="{escape(photo)}" alt="{escape(resolved.display_name)}">')
    parts.append(f"<h1{style}>{escape(resolved.display_name)}</h1>")
    if resolved.headline:
        line = resolved.headline
        if resolved.location:
            line = f"{line} in {resolved.location}"
        parts.append(f'<p class="headline">{escape(line)}</p>')
    elif resolved.location:
        parts.append(f'<p class="location">{escape(resolved.location)}</p>')
    if resolved.tagline:
        parts.append(f'<p class="tagline">{escape(resolved.tagline)}</p>')
    if bio:
        parts.append(f'<p class="bio">{escape(bio)}</p>')

    links: list[str] = []
    for name, url in resolved.social_links.items():
        target = safe_url(url)
        if not target:
            continue
        label = LINK_LABELS.get(name, name)
        if name == "website":
            label = target.split("://", 1)[-1].rstrip("/")
        links.append(_link(target, label))
    if links:
        parts.append(f'<nav class="social">{"".join(links)}</nav>')

    return f'<header class="section section-hero">{"".join(parts)}</header>'


def render_about(section: Section, resolved: ResolvedProfile) -> str | None:
    text = resolve_section_body(section)
    if not text:
        return None
    return _section("about", render_markdown(text), "About")


def render_skills(section: Section, resolved: ResolvedProfile) -> str | None:
    categories = as_mapping(section.content).get("categories")
    if not isinstance(categories, list):
        return None
    blocks: list[str] = []
    for category in categories:
        if not isinstance(category, Mapping):
            continue
        items = _strings(category.get("items"))
        if not items:
            continue
        name = _text(category, "name")
        heading = f"<h3>{escape(name)}</h3>" if name else ""
        blocks.append(f'<div class="skill-category">{heading}{_tags(items)}</div>')
    if not blocks:
        return None
    return _section("skills", "".join(blocks), "Skills")


def render_experience(section: Section, resolved: ResolvedProfile) -> str | None:
    items = resolve_section_body(section)
    entries: list[str] = []
    for item in items:
        current = item.get("endDate") is None or bool(item.get("current"))
        entries.append(
            _experience_entry(
                role=_text(item, "role"),
                company=_text(item, "company"),
                dates=_date_range(item.get("startDate"), item.get("endDate"), current),
                description=_text(item, "description"),
                tech_stack=_strings(item.get("techStack")),
                location=_text(item, "location"),
            )
        )
    if not entries:
        return None
    return _section("experience", "".join(entries), "Experience")


def render_projects(section: Section, resolved: ResolvedProfile) -> str | None:
    items = resolve_section_body(section)
    entries: list[str] = []
    for item in items:
        name = _text(item, "name")
        if not name:
            continue
        parts = [f"<h3>{escape(name)}</h3>"]
        role = _text(item, "role")
        if role:
            parts.append(f'<p class="role">{escape(role)}</p>')
        image = safe_url(item.get("image"))
        if image:
            parts.append(f'<img src="{escape(image)}" alt="{escape(name)}">')
        description = _text(item, "description")
        if description:
            parts.append(render_markdown(description))
        parts.append(_tags(_strings(item.get("techStack"))))
        links = []
        live = safe_url(item.get("liveUrl"))
        if live:
            links.append(_link(live, "Live"))
        repo = safe_url(item.get("githubUrl"))
        if repo:
            links.append(_link(repo, "Source"))
        if links:
            parts.append(f'<nav class="project-links">{"".join(links)}</nav>')
        entries.append(f'<div class="project">{"".join(parts)}</div>')
    if not entries:
        return None
    return _section("projects", "".join(entries), "Projects")


def render_education(section: Section, resolved: ResolvedProfile) -> str | None:
    items = resolve_section_body(section)
    entries: list[str] = []
    for item in items:
        degree = _text(item, "degree")
        institution = _text(item, "institution")
        if not degree and not institution:
            continue
        title = degree
        study_field = _text(item, "field")
        if study_field:
            title = f"{degree}, {study_field}" if degree else study_field
        dates = _date_range(item.get("startYear"), item.get("endYear"), item.get("endYear") is None)
        parts = [
            f'<div class="dates">{escape(dates)}</div>' if dates else "",
            f"<h3>{escape(title)}</h3>" if title else "",
            f'<p class="institution">{escape(institution)}</p>' if institution else "",
        ]
        description = _text(item, "description")
        if description:
            parts.append(render_markdown(description))
        entries.append(f'<div class="education">{"".join(parts)}</div>')
    if not entries:
        return None
    return _section("education", "".join(entries), "Education")


def render_links(section: Section, resolved: ResolvedProfile) -> str | None:
    items = resolve_section_body(section)
    anchors: list[str] = []
    for item in items:
        link_type = _text(item, "type") or "other"
        raw_url = _text(item, "url")
        if link_type == "email" and raw_url and "@" in raw_url and ":" not in raw_url:
            raw_url = f"mailto:{raw_url}"
        url = safe_url(raw_url)
        if not url:
            continue
        label = _text(item, "label") or LINK_LABELS.get(link_type, link_type)
        anchors.append(_link(url, label))
    if not anchors:
        return None
    return _section("links", f'<nav class="links">{"".join(anchors)}</nav>', "Links")


def render_certifications(section: Section, resolved: ResolvedProfile) -> str | None:
    items = resolve_section_body(section)
    entries: list[str] = []
    for item in items:
        name = _text(item, "name")
        if not name:
            continue
        issuer = _text(item, "issuer")
        issued = _text(item, "date")
        expires = _text(item, "expiryDate")
        meta = " · ".join(
            part
            for part in (issuer, issued, f"Expires {expires}" if expires else "")
            if part
        )
        url = safe_url(item.get("url"))
        heading = _link(url, name) if url else escape(name)
        entries.append(
            f'<div class="certification"><h3>{heading}</h3>'
            + (f'<p class="meta">{escape(meta)}</p>' if meta else "")
            + "</div>"
        )
    if not entries:
        return None
    return _section("certifications", "".join(entries), "Certifications")


def render_mdx(section: Section, resolved: ResolvedProfile) -> str | None:
    # MDX components are not executed server-side; the source renders as markdown
    text = resolve_section_body(section)
    if not text:
        return None
    return _section("mdx", render_markdown(text))


def render_unknown(section: Section) -> str:
    return (
        '<div class="section section-unknown">'
        f'<p>Section type "{escape(str(section.type))}" is not yet implemented</p>'
        "</div>"
    )


SECTION_RENDERERS: dict[SectionType, Callable[[Section, ResolvedProfile], str | None]] = {
    SectionType.HERO: render_hero,
    SectionType.ABOUT: render_about,
    SectionType.SKILLS: render_skills,
    SectionType.EXPERIENCE: render_experience,
    SectionType.PROJECTS: render_projects,
    SectionType.EDUCATION: render_education,
    SectionType.LINKS: render_links,
    SectionType.CERTIFICATIONS: render_certifications,
    SectionType.MDX: render_mdx,
}


def render_legacy_document(content: str) -> str | None:
    """Generation 1 profiles: frontmatter header plus markdown body."""
    parsed = parse_document(content)
    fm = parsed.frontmatter
    if not fm.title and not parsed.body.strip():
        return None

    header: list[str] = []
    if fm.title:
        header.append(f"<h1>{escape(fm.title)}</h1>")
    if fm.description:
        header.append(f'<p class="description">{escape(fm.description)}</p>')

    meta: list[str] = []
    if fm.location:
        meta.append(f'<span class="location">{escape(fm.location)}</span>')
    if fm.email:
        meta.append(f'<a href="mailto:{escape(fm.email)}">{escape(fm.email)}</a>')
    website = safe_url(fm.website)
    if website:
        meta.append(_link(website, "Website"))
    handles = (
        ("twitter", "https://twitter.com/", "Twitter"),
        ("github", "https://github.com/", "GitHub"),
        ("linkedin", "https://linkedin.com/in/", "LinkedIn"),
    )
    for attr, base, label in handles:
        handle = first_text(getattr(fm, attr))
        if handle:
            meta.append(_link(f"{base}{handle.lstrip('@')}", label))
    if meta:
        header.append(f'<div class="meta">{"".join(meta)}</div>')

    body = render_markdown(parsed.body) if parsed.body.strip() else ""
    return (
        '<article class="section section-document">'
        f'<header>{"".join(header)}</header>{body}</article>'
    )


def render_experience_records(experiences: Sequence[ProfileExperience]) -> str | None:
    """The dedicated experience table, rendered as its own block."""
    if not experiences:
        return None
    entries = [
        _experience_entry(
            role=exp.role,
            company=exp.company,
            dates=_date_range(exp.start_date, exp.end_date, exp.is_current),
            description=exp.description or "",
            tech_stack=list(exp.tech_stack),
            location=exp.location or "",
        )
        for exp in sorted(experiences, key=lambda e: e.order)
    ]
    return _section("professional-experience", "".join(entries), "Experience")


class SectionRenderer:
    """Builds the public document for a profile.

    Sections render by ascending order. The experience table always follows
    the section content and is not merged with any ``experience`` section.
    """

    def __init__(self, gate: FeatureGate, site: SiteInfo) -> None:
        self._gate = gate
        self._site = site

    def render_section(self, section: Section, resolved: ResolvedProfile) -> RenderedBlock | None:
        """Render one section. Unknown tags yield a placeholder, never an error."""
        kind = section.kind
        if kind is None:
            return RenderedBlock(kind="unknown", html=render_unknown(section), section_id=section.id)
        html = SECTION_RENDERERS[kind](section, resolved)
        if html is None:
            return None
        return RenderedBlock(kind=kind.value, html=html, section_id=section.id)

    def is_section_allowed(self, section: Section, plan_id: PlanId | None) -> bool:
        kind = section.kind
        if kind is None or kind not in PRO_SECTION_FEATURES:
            return True
        permission = self._gate.check_plan(plan_id, PRO_SECTION_FEATURES[kind])
        if not permission.allowed:
            logger.debug(
                "section_hidden_by_plan",
                section_id=str(section.id),
                section_type=SECTION_LABELS[kind],
                reason=permission.reason,
            )
        return permission.allowed

    def render_profile(self, bundle: ProfileBundle, owner_plan: PlanId | None) -> RenderedProfile:
        profile = bundle.profile
        resolved = resolve_profile(profile, bundle.sections)
        blocks: list[RenderedBlock] = []

        has_hero = any(s.kind == SectionType.HERO for s in bundle.sections)
        if not has_hero and resolved.display_name:
            blocks.append(RenderedBlock(kind="identity", html=_identity_header(resolved)))

        if bundle.sections:
            for section in ordered_sections(bundle.sections):
                if not self.is_section_allowed(section, owner_plan):
                    continue
                block = self.render_section(section, resolved)
                if block is not None:
                    blocks.append(block)
        elif profile.content:
            document = render_legacy_document(profile.content)
            if document:
                blocks.append(RenderedBlock(kind="document", html=document))

        experience_html = render_experience_records(bundle.experiences)
        if experience_html:
            blocks.append(RenderedBlock(kind="professional-experience", html=experience_html))

        footer = None
        if not profile.remove_branding:
            footer = (
                '<footer class="branding">Powered by '
                f'<a href="/">{escape(self._site.name)}</a></footer>'
            )

        return RenderedProfile(
            username=profile.username,
            resolved=resolved,
            metadata=build_profile_metadata(resolved, self._site),
            blocks=blocks,
            footer=footer,
        )
