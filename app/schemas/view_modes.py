from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel


class ViewModeItem(BaseModel):
    id: str
    label: str


class EntityViewModesResponse(BaseModel):
    entityType: str
    viewModes: List[ViewModeItem]
    defaultSettings: Dict[str, Any] = {}
    availableSettings: List[str] = []


class ViewModeRegistryResponse(BaseModel):
    entities: List[EntityViewModesResponse]
