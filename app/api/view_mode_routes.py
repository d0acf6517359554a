from __future__ import annotations

from fastapi import APIRouter

from app.schemas.view_modes import EntityViewModesResponse, ViewModeItem, ViewModeRegistryResponse
from app.services import view_modes

router = APIRouter(prefix="/view-modes", tags=["view-modes"])


def _describe(entity_type: str) -> EntityViewModesResponse:
    return EntityViewModesResponse(
        entityType=entity_type,
        viewModes=[ViewModeItem(id=mode.id, label=mode.label) for mode in view_modes.get_view_modes(entity_type)],
        defaultSettings=view_modes.get_default_settings(entity_type),
        availableSettings=list(view_modes.get_available_settings(entity_type)),
    )


@router.get("", response_model=ViewModeRegistryResponse)
def list_view_modes():
    return ViewModeRegistryResponse(entities=[_describe(name) for name in view_modes.get_entity_types()])


@router.get("/{entity_type}", response_model=EntityViewModesResponse)
def get_entity_view_modes(entity_type: str):
    # 未知实体返回空列表而不是 404，展示层据此退回默认视图
    return _describe(entity_type)
