from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class FilterCompileRequest(BaseModel):
    filters: Dict[str, Any] = Field(default_factory=dict, description="前端的过滤选择，键为维度名")


class FilterCompileResponse(BaseModel):
    entityType: str
    filter: Dict[str, Any]
    fields: List[str] = []
