"""
Activities API router.

Read-only views of the activity registry.
"""
from fastapi import APIRouter

from app.core.exceptions import ApiError
from app.pydantic_models.activity import (
    ActivityDefinitionPydModel,
    ActivityListResponse,
)
from app.services.registry import activity_registry
from app.services.registry.activity_registry import ActivityDefinition
from app.utils.constants import ActivityCategoryEnum, ErrorCode

router = APIRouter(
    prefix="/api/activities",
    tags=["Activities"],
)


def to_pyd_model(definition: ActivityDefinition) -> ActivityDefinitionPydModel:
    return ActivityDefinitionPydModel(
        key=definition.key,
        category=definition.category,
        parameter_name=definition.parameter_name.value,
        unit=definition.unit,
        unit_type=definition.unit_type,
        primary_factor_id=definition.primary_factor_id,
        fallback_factor_ids=list(definition.fallback_factor_ids),
        region=definition.region,
        note=definition.note,
    )


@router.get("", response_model=ActivityListResponse)
async def list_activities(category: ActivityCategoryEnum | None = None):
    """
    List supported activities, optionally restricted to one category.
    """
    category_value = category.value if category else None
    definitions = activity_registry.definitions(category_value)
    categories = [category_value] if category_value else activity_registry.CATEGORIES
    return ActivityListResponse(
        data=[to_pyd_model(d) for d in definitions],
        count=len(definitions),
        categories={c: activity_registry.keys_by_category(c) for c in categories},
    )


@router.get("/{activity_key}", response_model=ActivityDefinitionPydModel)
async def get_activity(activity_key: str):
    definition = activity_registry.lookup(activity_key)
    if definition is None:
        raise ApiError(
            f"Unsupported activity: {activity_key}", ErrorCode.NOT_FOUND, 404
        )
    return to_pyd_model(definition)
