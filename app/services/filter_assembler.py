from __future__ import annotations

import os
from typing import Any, Callable, Dict, Mapping, Optional

from app.services.filter_fields import DimensionKind, FieldRule, get_entity_fields
from app.services.filter_ranges import Modifier, normalize_date_range, normalize_number_range
from app.services.filter_relations import build_relation_filter

TRACE_ENV_KEY = "MEDIA_APP_FILTER_TRACE"

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}

# choice 维度只接受等值类 modifier，区间类缺少 value2
CHOICE_MODIFIERS = frozenset(
    {Modifier.EQUALS.value, Modifier.NOT_EQUALS.value, Modifier.IS_NULL.value, Modifier.NOT_NULL.value}
)


def trace_enabled() -> bool:
    flag = str(os.environ.get(TRACE_ENV_KEY, "")).strip().lower()
    return flag in _TRUE_STRINGS


def _coerce_flag(raw: Any) -> Optional[bool]:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        lowered = raw.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


def _text_value(raw: Any) -> Optional[str]:
    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw)
    return text if text.strip() else None


def _single_or_list(rule: FieldRule, raw: Any) -> Any:
    if rule.multi:
        if isinstance(raw, (list, tuple)):
            return list(raw)
        return [raw]
    return raw


# ---------------------------------------------------------------------------
# 各类维度的处理函数：返回 None 表示该维度不输出
# ---------------------------------------------------------------------------

def _compile_flag(rule: FieldRule, raw: Any, selection: Mapping[str, Any]) -> Optional[bool]:
    return _coerce_flag(raw)


def _compile_number(rule: FieldRule, raw: Any, selection: Mapping[str, Any]) -> Optional[dict]:
    return normalize_number_range(raw, scale=rule.scale)


def _compile_dates(rule: FieldRule, raw: Any, selection: Mapping[str, Any]) -> Optional[dict]:
    return normalize_date_range(raw)


def _compile_relation(rule: FieldRule, raw: Any, selection: Mapping[str, Any]) -> Optional[dict]:
    return build_relation_filter(
        raw,
        modifier=selection.get(rule.modifier_key),
        default_modifier=rule.default_modifier,
        depth=selection.get(rule.depth_key),
    )


def _compile_text(rule: FieldRule, raw: Any, selection: Mapping[str, Any]) -> Optional[dict]:
    value = _text_value(raw)
    if value is None:
        return None
    return {"modifier": Modifier.INCLUDES.value, "value": value}


def _compile_choice(rule: FieldRule, raw: Any, selection: Mapping[str, Any]) -> Optional[dict]:
    value = _text_value(raw)
    if value is None:
        return None
    modifier = selection.get(rule.modifier_key)
    if isinstance(modifier, Modifier):
        modifier = modifier.value
    if not isinstance(modifier, str) or modifier not in CHOICE_MODIFIERS:
        modifier = rule.default_modifier
    return {"modifier": modifier, "value": value}


def _compile_scene_scope(rule: FieldRule, raw: Any, selection: Mapping[str, Any]) -> Optional[dict]:
    if raw is None or raw == "":
        return None
    return build_relation_filter(raw if rule.multi else [raw])


def _compile_param(rule: FieldRule, raw: Any, selection: Mapping[str, Any]) -> Any:
    if raw is None or raw == "":
        return None
    value = _single_or_list(rule, raw)
    if rule.multi and not value:
        return None
    return value


_COMPILERS: Dict[DimensionKind, Callable[[FieldRule, Any, Mapping[str, Any]], Any]] = {
    DimensionKind.FLAG: _compile_flag,
    DimensionKind.NUMBER_RANGE: _compile_number,
    DimensionKind.DATE_RANGE: _compile_dates,
    DimensionKind.RELATION: _compile_relation,
    DimensionKind.TEXT: _compile_text,
    DimensionKind.CHOICE: _compile_choice,
    DimensionKind.SCENE_SCOPE: _compile_scene_scope,
    DimensionKind.PARAM: _compile_param,
}


def assemble(entity_type: str, selection: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """把前端的过滤选择编译为指定实体的后端过滤对象。

    - 未知实体类型抛出 UnknownEntityTypeError（配置错误，必须显式暴露）；
    - 实体未声明的维度直接忽略；
    - 空值/残缺区间/空 id 列表一律省略该维度，不抛异常；
    - 各维度互不影响，字段名来自 filter_fields 中的静态映射表。
    """
    fields = get_entity_fields(entity_type)
    if not isinstance(selection, Mapping):
        selection = {}

    compiled: Dict[str, Any] = {}
    for rule in fields:
        if rule.dimension not in selection:
            continue
        result = _COMPILERS[rule.kind](rule, selection[rule.dimension], selection)
        if result is None:
            continue
        if rule.kind is DimensionKind.SCENE_SCOPE:
            compiled.setdefault(rule.field, {})[rule.sub_field] = result
        else:
            compiled[rule.field] = result

    if trace_enabled():
        print(f"[filters] {entity_type}: {len(compiled)} field(s) -> {sorted(compiled)}")
    return compiled


def build_scene_filter(selection: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    return assemble("scene", selection)


def build_gallery_filter(selection: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    return assemble("gallery", selection)


def build_image_filter(selection: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    return assemble("image", selection)


def build_performer_filter(selection: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    return assemble("performer", selection)


def build_studio_filter(selection: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    return assemble("studio", selection)


def build_tag_filter(selection: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    return assemble("tag", selection)


def build_group_filter(selection: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    return assemble("group", selection)


def build_clip_params(selection: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Clip 列表走 REST 参数：id 列表与 studioId 原样透传，isGenerated 归一为布尔。"""
    return assemble("clip", selection)


__all__ = [
    "CHOICE_MODIFIERS",
    "TRACE_ENV_KEY",
    "assemble",
    "build_clip_params",
    "build_gallery_filter",
    "build_group_filter",
    "build_image_filter",
    "build_performer_filter",
    "build_scene_filter",
    "build_studio_filter",
    "build_tag_filter",
    "trace_enabled",
]
