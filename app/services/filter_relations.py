from __future__ import annotations

from typing import Any, Iterable, Optional

from app.services.filter_ranges import Modifier

RELATION_MODIFIERS = frozenset({Modifier.INCLUDES.value, Modifier.INCLUDES_ALL.value, Modifier.EXCLUDES.value})


def _collect_ids(raw: Any) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, (str, int)) and not isinstance(raw, bool):
        items: Iterable[Any] = [raw]
    elif isinstance(raw, (list, tuple)):
        items = raw
    else:
        return []

    ids: list[str] = []
    seen: set[str] = set()
    for item in items:
        if item is None:
            continue
        value = str(item).strip()
        if not value or value in seen:
            continue
        seen.add(value)
        ids.append(value)
    return ids


def _coerce_depth(raw: Any) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def build_relation_filter(
    ids: Any,
    *,
    modifier: Any = None,
    default_modifier: str = Modifier.INCLUDES.value,
    depth: Any = None,
) -> Optional[dict]:
    """成员关系谓词：``{"modifier": "INCLUDES", "value": [...ids]}``。

    - 空列表/缺省返回 None（该维度不输出）；
    - id 统一转为字符串，去重但保持首次出现的顺序；
    - modifier 仅接受 INCLUDES / INCLUDES_ALL / EXCLUDES，非法值回落到默认值；
    - depth 用于标签/工作室的层级过滤，无法解析时忽略。
    """
    values = _collect_ids(ids)
    if not values:
        return None

    chosen = modifier.value if isinstance(modifier, Modifier) else modifier
    if chosen not in RELATION_MODIFIERS:
        chosen = default_modifier

    predicate: dict[str, Any] = {"modifier": chosen, "value": values}
    depth_value = _coerce_depth(depth)
    if depth_value is not None:
        predicate["depth"] = depth_value
    return predicate


__all__ = ["RELATION_MODIFIERS", "build_relation_filter"]
