"""Pydantic schemas for Plan API."""

from pydantic import BaseModel, Field

from domain.entities.plan import Plan


class PlanFeatureResponse(BaseModel):
    id: str
    name: str
    description: str = ""


class PlanResponse(BaseModel):
    """Schema for a subscription plan."""

    id: str
    name: str
    description: str
    price_monthly: float | None = None
    currency: str | None = None
    features: list[PlanFeatureResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, plan: Plan) -> "PlanResponse":
        return cls(
            id=plan.id.value,
            name=plan.name,
            description=plan.description,
            price_monthly=plan.price.monthly if plan.price else None,
            currency=plan.price.currency if plan.price else None,
            features=[
                PlanFeatureResponse(id=f.id, name=f.name, description=f.description)
                for f in plan.features
            ],
        )


class PlanListResponse(BaseModel):
    data: list[PlanResponse]
