"""Legacy profile document (free text with YAML frontmatter)."""

import re
from dataclasses import dataclass, field
from typing import Any

import yaml

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 300


@dataclass(frozen=True)
class DocumentFrontmatter:
    """Typed view of the frontmatter keys the platform understands."""

    title: str = ""
    description: str | None = None
    image: str | None = None
    location: str | None = None
    email: str | None = None
    website: str | None = None
    twitter: str | None = None
    github: str | None = None
    linkedin: str | None = None
    keywords: tuple[str, ...] = ()
    published: bool = False


@dataclass(frozen=True)
class ParsedDocument:
    frontmatter: DocumentFrontmatter = field(default_factory=DocumentFrontmatter)
    body: str = ""


def _text(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    return str(value)


def _keywords(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(k.strip() for k in value.split(",") if k.strip())
    if isinstance(value, list):
        return tuple(str(k).strip() for k in value if str(k).strip())
    return ()


def parse_document(content: str | None) -> ParsedDocument:
    """Split a legacy document into frontmatter and markdown body.

    Never raises: a missing or malformed frontmatter block yields defaults.
    """
    if not content:
        return ParsedDocument()

    match = FRONTMATTER_PATTERN.match(content)
    if not match:
        return ParsedDocument(body=content)

    body = content[match.end():]
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError:
        return ParsedDocument(body=body)
    if not isinstance(data, dict):
        return ParsedDocument(body=body)

    return ParsedDocument(
        frontmatter=DocumentFrontmatter(
            title=_text(data, "title") or "",
            description=_text(data, "description"),
            image=_text(data, "image"),
            location=_text(data, "location"),
            email=_text(data, "email"),
            website=_text(data, "website"),
            twitter=_text(data, "twitter"),
            github=_text(data, "github"),
            linkedin=_text(data, "linkedin"),
            keywords=_keywords(data.get("keywords")),
            published=bool(data.get("published", False)),
        ),
        body=body,
    )


def validate_frontmatter(frontmatter: DocumentFrontmatter) -> list[str]:
    """Return human-readable validation errors (empty when valid)."""
    errors: list[str] = []

    if not frontmatter.title.strip():
        errors.append("Title is required")
    if len(frontmatter.title) > TITLE_MAX_LENGTH:
        errors.append(f"Title must be less than {TITLE_MAX_LENGTH} characters")
    if frontmatter.description and len(frontmatter.description) > DESCRIPTION_MAX_LENGTH:
        errors.append(f"Description must be less than {DESCRIPTION_MAX_LENGTH} characters")
    if frontmatter.email and not EMAIL_PATTERN.match(frontmatter.email):
        errors.append("Invalid email format")

    return errors
