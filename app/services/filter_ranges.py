"""Range normalisation shared by every entity filter builder."""

from __future__ import annotations

import math
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional


class Modifier(str, Enum):
    EQUALS = "EQUALS"
    NOT_EQUALS = "NOT_EQUALS"
    GREATER_THAN = "GREATER_THAN"
    GREATER_THAN_OR_EQUAL = "GREATER_THAN_OR_EQUAL"
    LESS_THAN = "LESS_THAN"
    LESS_THAN_OR_EQUAL = "LESS_THAN_OR_EQUAL"
    BETWEEN = "BETWEEN"
    NOT_BETWEEN = "NOT_BETWEEN"
    INCLUDES = "INCLUDES"
    INCLUDES_ALL = "INCLUDES_ALL"
    EXCLUDES = "EXCLUDES"
    IS_NULL = "IS_NULL"
    NOT_NULL = "NOT_NULL"


def _coerce_int(raw: Any) -> Optional[int]:
    """与前端 parseInt 口径一致：'4.7' -> 4，无法解析视为缺省。"""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        # NaN / ±inf 视为缺省
        return int(raw) if math.isfinite(raw) else None
    text = str(raw).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return None


def _coerce_date(raw: Any) -> Optional[str]:
    # 字符串原样透传（YYYY-MM-DD），不做格式化
    if raw is None:
        return None
    if isinstance(raw, (date, datetime)):
        return raw.isoformat()
    if isinstance(raw, str):
        return raw if raw.strip() else None
    return None


def _bounded(lower: Any, upper: Any) -> Optional[dict]:
    if lower is not None and upper is not None:
        # 起止相同也保持 BETWEEN（单日/单值区间），倒置区间原样透传
        return {"modifier": Modifier.BETWEEN.value, "value": lower, "value2": upper}
    if lower is not None:
        return {"modifier": Modifier.GREATER_THAN_OR_EQUAL.value, "value": lower}
    if upper is not None:
        return {"modifier": Modifier.LESS_THAN_OR_EQUAL.value, "value": upper}
    return None


def normalize_number_range(rng: Any, *, scale: int = 1) -> Optional[dict]:
    """Turn a ``{"min", "max"}`` range into a predicate.

    Bounds are parsed as integers and multiplied by ``scale`` (e.g. minutes to
    seconds). Returns ``None`` when neither bound is usable.
    """
    if not isinstance(rng, Mapping):
        return None
    lower = _coerce_int(rng.get("min"))
    upper = _coerce_int(rng.get("max"))
    if scale != 1:
        lower = lower * scale if lower is not None else None
        upper = upper * scale if upper is not None else None
    return _bounded(lower, upper)


def normalize_date_range(rng: Any) -> Optional[dict]:
    """Turn a ``{"start", "end"}`` calendar range into a predicate.

    Both ends are inclusive. Returns ``None`` when neither bound is set.
    """
    if not isinstance(rng, Mapping):
        return None
    return _bounded(_coerce_date(rng.get("start")), _coerce_date(rng.get("end")))


__all__ = ["Modifier", "normalize_date_range", "normalize_number_range"]
