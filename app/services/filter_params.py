"""Rebuild a filter selection from URL query parameters.

Layout mirrors what the web client writes into the address bar:

- flags: ``favorite=true``
- text / choice / single relation: ``title=foo``, ``studioId=12``
- multi relation: ``tagIds=1,2,3`` plus optional ``tagIdsModifier`` / ``tagIdsDepth``
- numeric range: ``rating_min=20&rating_max=80``
- date range: ``date_start=2024-01-01&date_end=2024-12-31``
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from app.services.filter_fields import DimensionKind, FieldRule, get_entity_fields


def _split_ids(raw: str) -> list[str]:
    return [part for part in (p.strip() for p in raw.split(",")) if part]


def _read_range(params: Mapping[str, str], rule: FieldRule, low: str, high: str) -> Dict[str, str] | None:
    lower = params.get(f"{rule.dimension}_{low}")
    upper = params.get(f"{rule.dimension}_{high}")
    if not lower and not upper:
        return None
    rng: Dict[str, str] = {}
    if lower:
        rng[low] = lower
    if upper:
        rng[high] = upper
    return rng


def selection_from_query_params(entity_type: str, params: Mapping[str, str]) -> Dict[str, Any]:
    """Parse ``params`` into a selection understood by ``assemble(entity_type, ...)``."""
    fields = get_entity_fields(entity_type)
    selection: Dict[str, Any] = {}

    for rule in fields:
        key = rule.dimension
        if rule.kind is DimensionKind.NUMBER_RANGE:
            rng = _read_range(params, rule, "min", "max")
            if rng is not None:
                selection[key] = rng
            continue
        if rule.kind is DimensionKind.DATE_RANGE:
            rng = _read_range(params, rule, "start", "end")
            if rng is not None:
                selection[key] = rng
            continue

        if key not in params:
            continue
        raw = params[key]
        # flag 原样透传，交给 assemble 做布尔归一，与字典形式一致
        if rule.kind in (DimensionKind.RELATION, DimensionKind.SCENE_SCOPE, DimensionKind.PARAM) and rule.multi:
            selection[key] = _split_ids(raw)
        else:
            selection[key] = raw

        if rule.kind in (DimensionKind.RELATION, DimensionKind.CHOICE) and rule.modifier_key in params:
            selection[rule.modifier_key] = params[rule.modifier_key]
        if rule.kind is DimensionKind.RELATION and rule.depth_key in params:
            try:
                selection[rule.depth_key] = int(params[rule.depth_key])
            except ValueError:
                # 非法层级参数直接忽略
                pass

    return selection


__all__ = ["selection_from_query_params"]
