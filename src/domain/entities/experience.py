"""Profile experience domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

MAX_EXPERIENCES = 3


def normalize_tech_stack(items: list[str] | None) -> list[str]:
    """Drop blank entries and repeats, keeping first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for item in items or []:
        tech = item.strip() if isinstance(item, str) else ""
        if not tech or tech in seen:
            continue
        seen.add(tech)
        result.append(tech)
    return result


@dataclass
class ProfileExperience:
    """Domain entity for a work-history record attached to a profile."""

    profile_id: UUID
    company: str
    role: str
    start_date: str
    id: UUID = field(default_factory=uuid4)
    end_date: str | None = None
    description: str = ""
    tech_stack: list[str] = field(default_factory=list)
    location: str | None = None
    order: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        self.tech_stack = normalize_tech_stack(self.tech_stack)

    @property
    def is_current(self) -> bool:
        return self.end_date is None


@dataclass
class ExperienceDraft:
    """Caller-supplied experience; ``order`` is assigned from list position."""

    company: str
    role: str
    start_date: str
    end_date: str | None = None
    description: str = ""
    tech_stack: list[str] = field(default_factory=list)
    location: str | None = None

    def to_entity(self, profile_id: UUID, order: int) -> ProfileExperience:
        return ProfileExperience(
            profile_id=profile_id,
            company=self.company,
            role=self.role,
            start_date=self.start_date,
            end_date=self.end_date,
            description=self.description or "",
            tech_stack=list(self.tech_stack),
            location=self.location or None,
            order=order,
        )
