"""Pydantic schemas for the caller's access state."""

from pydantic import BaseModel, ConfigDict

from domain.entities.plan import FeatureCatalog
from domain.entities.user_state import UserStateContext
from domain.services.feature_gate import FeaturePermission


class FeaturePermissionResponse(BaseModel):
    id: str
    name: str
    allowed: bool
    reason: str | None = None


class AccessStateResponse(BaseModel):
    """The caller's state and what it unlocks."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "state": "free_user",
                "label": "Free User",
                "plan_id": "free",
                "is_owner": True,
                "is_published": True,
                "features": [
                    {
                        "id": "analytics-dashboard",
                        "name": "Analytics Dashboard",
                        "allowed": False,
                        "reason": "Analytics Dashboard is available in the Pro plan",
                    }
                ],
            }
        },
    )

    state: str
    label: str
    plan_id: str | None = None
    is_owner: bool
    is_published: bool | None = None
    features: list[FeaturePermissionResponse]

    @classmethod
    def build(
        cls,
        context: UserStateContext,
        permissions: list[FeaturePermission],
        catalog: FeatureCatalog,
    ) -> "AccessStateResponse":
        return cls(
            state=context.state.value,
            label=context.label,
            plan_id=context.plan_id.value if context.plan_id else None,
            is_owner=context.is_owner,
            is_published=context.is_published,
            features=[
                FeaturePermissionResponse(
                    id=p.id,
                    name=catalog.display_name(p.id),
                    allowed=p.allowed,
                    reason=p.reason,
                )
                for p in permissions
            ],
        )


class AccessStateDetailResponse(BaseModel):
    data: AccessStateResponse
