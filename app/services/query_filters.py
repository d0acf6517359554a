from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, TypeVar, Union

from sqlalchemy import and_, exists, false, func, not_, or_, select, true
from sqlalchemy.sql.elements import ColumnElement

from app.services.filter_ranges import Modifier

TQuery = TypeVar("TQuery")


@dataclass(frozen=True)
class JunctionBinding:
    """多对多关系：父表主键 + 关联表的父/子外键列。"""

    parent_id: ColumnElement
    parent_column: ColumnElement
    entity_column: ColumnElement


@dataclass(frozen=True)
class FieldBinding:
    """把过滤对象中的一个后端字段绑定到具体列，kind 决定使用哪种子句构造器。"""

    kind: str
    column: Optional[ColumnElement] = None
    junction: Optional[JunctionBinding] = None
    extra_columns: tuple = ()


Binding = Union[FieldBinding, JunctionBinding]


def _value(predicate: Any, key: str = "value") -> Any:
    if not isinstance(predicate, Mapping):
        return None
    return predicate.get(key)


def _has(value: Any) -> bool:
    return value is not None and value != ""


def _compare(column: ColumnElement, modifier: str, value: Any, value2: Any) -> Optional[ColumnElement]:
    if modifier == Modifier.EQUALS.value:
        return column == value
    if modifier == Modifier.NOT_EQUALS.value:
        return column != value
    if modifier == Modifier.GREATER_THAN.value:
        return column > value
    if modifier == Modifier.GREATER_THAN_OR_EQUAL.value:
        return column >= value
    if modifier == Modifier.LESS_THAN.value:
        return column < value
    if modifier == Modifier.LESS_THAN_OR_EQUAL.value:
        return column <= value
    if modifier == Modifier.BETWEEN.value:
        if _has(value2):
            return column.between(value, value2)
        return column >= value
    if modifier == Modifier.NOT_BETWEEN.value:
        if _has(value2):
            return or_(column < value, column > value2)
        return column < value
    return None


def numeric_clause(predicate: Any, column: ColumnElement) -> Optional[ColumnElement]:
    """数值比较；缺少 value 或 modifier 不支持时返回 None（不追加条件）。"""
    value = _value(predicate)
    if value is None:
        return None
    modifier = _value(predicate, "modifier") or Modifier.GREATER_THAN.value
    return _compare(column, modifier, value, _value(predicate, "value2"))


def date_clause(predicate: Any, column: ColumnElement) -> Optional[ColumnElement]:
    """日期比较，额外支持 IS_NULL / NOT_NULL；EQUALS 按日粒度比较。"""
    if not isinstance(predicate, Mapping):
        return None
    modifier = predicate.get("modifier") or Modifier.GREATER_THAN.value
    if modifier == Modifier.IS_NULL.value:
        return column.is_(None)
    if modifier == Modifier.NOT_NULL.value:
        return column.isnot(None)

    value = predicate.get("value")
    if not _has(value):
        return None
    if modifier == Modifier.EQUALS.value:
        return func.date(column) == func.date(value)
    if modifier == Modifier.NOT_EQUALS.value:
        return or_(column.is_(None), func.date(column) != func.date(value))
    if modifier == Modifier.NOT_BETWEEN.value and _has(predicate.get("value2")):
        return or_(column.is_(None), column < value, column > predicate["value2"])
    return _compare(column, modifier, value, predicate.get("value2"))


def text_clause(predicate: Any, column: ColumnElement, *extra_columns: ColumnElement) -> Optional[ColumnElement]:
    """大小写不敏感的文本匹配；INCLUDES/EXCLUDES 会覆盖 extra_columns。"""
    if not isinstance(predicate, Mapping):
        return None
    modifier = predicate.get("modifier") or Modifier.INCLUDES.value
    if modifier == Modifier.IS_NULL.value:
        return or_(column.is_(None), column == "")
    if modifier == Modifier.NOT_NULL.value:
        return and_(column.isnot(None), column != "")

    value = predicate.get("value")
    if not _has(value):
        return None
    columns = (column, *extra_columns)
    pattern = f"%{value}%"
    if modifier == Modifier.INCLUDES.value:
        return or_(*(func.lower(col).like(func.lower(pattern)) for col in columns))
    if modifier == Modifier.EXCLUDES.value:
        return and_(*(or_(col.is_(None), func.lower(col).notlike(func.lower(pattern))) for col in columns))
    if modifier == Modifier.EQUALS.value:
        return func.lower(column) == func.lower(value)
    if modifier == Modifier.NOT_EQUALS.value:
        return or_(column.is_(None), func.lower(column) != func.lower(value))
    return None


def favorite_clause(favorite: Any, column: ColumnElement) -> Optional[ColumnElement]:
    if favorite is None:
        return None
    if favorite:
        return column == true()
    return or_(column == false(), column.is_(None))


def direct_membership_clause(predicate: Any, column: ColumnElement) -> Optional[ColumnElement]:
    """外键直连的成员过滤（如 studio_id）。"""
    ids = _value(predicate)
    if not ids:
        return None
    modifier = _value(predicate, "modifier") or Modifier.INCLUDES.value
    if modifier == Modifier.INCLUDES.value:
        return column.in_(list(ids))
    if modifier == Modifier.EXCLUDES.value:
        return or_(column.is_(None), column.notin_(list(ids)))
    return None


def junction_membership_clause(predicate: Any, junction: JunctionBinding) -> Optional[ColumnElement]:
    """经关联表的成员过滤：INCLUDES 命中任一、INCLUDES_ALL 全部命中、EXCLUDES 全不命中。"""
    ids = _value(predicate)
    if not ids:
        return None
    ids = list(ids)
    modifier = _value(predicate, "modifier") or Modifier.INCLUDES.value
    linked = and_(junction.parent_column == junction.parent_id, junction.entity_column.in_(ids))

    if modifier == Modifier.INCLUDES.value:
        return exists().where(linked)
    if modifier == Modifier.EXCLUDES.value:
        return not_(exists().where(linked))
    if modifier == Modifier.INCLUDES_ALL.value:
        matched = (
            select(func.count(func.distinct(junction.entity_column)))
            .where(linked)
            .scalar_subquery()
        )
        return matched == len(set(ids))
    return None


_BUILDERS = {
    "numeric": lambda predicate, binding: numeric_clause(predicate, binding.column),
    "date": lambda predicate, binding: date_clause(predicate, binding.column),
    "text": lambda predicate, binding: text_clause(predicate, binding.column, *binding.extra_columns),
    "favorite": lambda predicate, binding: favorite_clause(predicate, binding.column),
    "direct": lambda predicate, binding: direct_membership_clause(predicate, binding.column),
    "junction": lambda predicate, binding: junction_membership_clause(predicate, binding.junction),
}


def build_clause(predicate: Any, binding: Binding) -> Optional[ColumnElement]:
    if isinstance(binding, JunctionBinding):
        return junction_membership_clause(predicate, binding)
    builder = _BUILDERS.get(binding.kind)
    if builder is None:
        raise ValueError(f"unsupported binding kind: {binding.kind!r}")
    return builder(predicate, binding)


def apply_entity_filter(query: TQuery, entity_filter: Mapping[str, Any], bindings: Mapping[str, Binding]) -> TQuery:
    """对 ORM Query / Select 逐字段追加过滤条件。

    只处理 bindings 中声明过的字段；无法表达的谓词（返回 None）跳过。
    """
    for field, predicate in entity_filter.items():
        binding = bindings.get(field)
        if binding is None:
            continue
        clause = build_clause(predicate, binding)
        if clause is not None:
            query = query.filter(clause)
    return query


__all__ = [
    "FieldBinding",
    "JunctionBinding",
    "apply_entity_filter",
    "build_clause",
    "date_clause",
    "direct_membership_clause",
    "favorite_clause",
    "junction_membership_clause",
    "numeric_clause",
    "text_clause",
]
