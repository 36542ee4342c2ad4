"""Subscription plans and the feature catalog derived from them."""

from dataclasses import dataclass, field
from enum import StrEnum


class PlanId(StrEnum):
    """Billing plan identifiers attached to a user record."""

    FREE = "free"
    PRO = "pro"


def parse_plan_id(value: str | None) -> PlanId:
    """Map an opaque billing value to a plan, treating anything unknown as free."""
    if value == PlanId.PRO:
        return PlanId.PRO
    return PlanId.FREE


@dataclass(frozen=True, slots=True)
class PlanFeature:
    """A feature line item shown on a plan."""

    id: str
    name: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class PlanPrice:
    """Recurring price of a paid plan."""

    monthly: float
    currency: str = "USD"


@dataclass(frozen=True, slots=True)
class Plan:
    """Domain value object for a subscription plan."""

    id: PlanId
    name: str
    description: str
    features: tuple[PlanFeature, ...]
    price: PlanPrice | None = None


PLANS: dict[PlanId, Plan] = {
    PlanId.FREE: Plan(
        id=PlanId.FREE,
        name="Free",
        description="Perfect for getting started with your professional identity",
        features=(
            PlanFeature(
                "public-profile",
                "Public Profile",
                "Share your profile at a stable /u/<username> address",
            ),
            PlanFeature(
                "basic-sections",
                "Basic Sections",
                "Hero, About, Experience, Education, Skills, Links",
            ),
            PlanFeature(
                "site-branding",
                "Site Branding",
                "Powered-by footer (required on Free plan)",
            ),
            PlanFeature("basic-seo", "Basic SEO", "Standard SEO optimization"),
            PlanFeature(
                "limited-customization",
                "Limited Customization",
                "Basic theme options",
            ),
        ),
    ),
    PlanId.PRO: Plan(
        id=PlanId.PRO,
        name="Pro",
        description="For professionals who want complete control",
        price=PlanPrice(monthly=9.99),
        features=(
            PlanFeature("custom-domain", "Custom Domain", "Use your own domain"),
            PlanFeature(
                "advanced-sections",
                "Advanced Sections",
                "MDX sections, projects with case studies",
            ),
            PlanFeature(
                "remove-branding",
                "Remove Branding",
                "Remove the powered-by footer from your profile",
            ),
            PlanFeature(
                "advanced-seo",
                "Advanced SEO",
                "Custom SEO metadata, rich snippets, enhanced indexing",
            ),
            PlanFeature(
                "analytics-dashboard",
                "Analytics Dashboard",
                "Track profile views, clicks, referrers, and engagement",
            ),
            PlanFeature(
                "recruiter-mode",
                "Recruiter Mode",
                "Clean view for recruiters, PDF export, skill highlights",
            ),
            PlanFeature(
                "custom-cta",
                "Custom CTA",
                "Add custom call-to-action buttons",
            ),
            PlanFeature("priority-support", "Priority Support", "Get help when you need it"),
        ),
    ),
}


class Features:
    """Feature identifier constants."""

    # Pro-only
    CUSTOM_DOMAIN = "custom-domain"
    ADVANCED_SEO = "advanced-seo"
    REMOVE_BRANDING = "remove-branding"
    ADVANCED_SECTIONS = "advanced-sections"
    ANALYTICS_DASHBOARD = "analytics-dashboard"
    RECRUITER_MODE = "recruiter-mode"
    CUSTOM_CTA = "custom-cta"

    # Free tier
    PUBLIC_PROFILE = "public-profile"
    BASIC_SECTIONS = "basic-sections"
    BASIC_SEO = "basic-seo"
    LIMITED_CUSTOMIZATION = "limited-customization"

    # Open to everyone, including visitors
    VIEW_PUBLIC_PROFILE = "view-public-profile"

    EDIT_PREFIX = "edit:"


@dataclass(frozen=True)
class FeatureCatalog:
    """Immutable feature lists consumed by the permission gate.

    Built once at startup and passed to whoever needs to gate features.
    """

    pro_features: frozenset[str] = frozenset(
        {
            Features.CUSTOM_DOMAIN,
            Features.ADVANCED_SEO,
            Features.REMOVE_BRANDING,
            Features.ADVANCED_SECTIONS,
            Features.ANALYTICS_DASHBOARD,
            Features.RECRUITER_MODE,
            Features.CUSTOM_CTA,
        }
    )
    free_features: frozenset[str] = frozenset(
        {
            Features.PUBLIC_PROFILE,
            Features.BASIC_SECTIONS,
            Features.BASIC_SEO,
            Features.LIMITED_CUSTOMIZATION,
        }
    )
    open_features: frozenset[str] = frozenset({Features.VIEW_PUBLIC_PROFILE})
    edit_prefix: str = Features.EDIT_PREFIX
    feature_names: dict[str, str] = field(default_factory=dict, hash=False)

    @classmethod
    def from_plans(cls, plans: dict[PlanId, Plan] = PLANS) -> "FeatureCatalog":
        """Build the catalog with display names taken from the plan table."""
        names = {
            feature.id: feature.name for plan in plans.values() for feature in plan.features
        }
        return cls(feature_names=names)

    def display_name(self, feature_id: str) -> str:
        return self.feature_names.get(feature_id, feature_id.replace("-", " ").capitalize())

    @property
    def all_features(self) -> list[str]:
        """Every gated feature id, sorted for stable output."""
        return sorted(self.pro_features | self.free_features | self.open_features)
