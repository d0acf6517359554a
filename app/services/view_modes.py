"""View modes and card display defaults per entity type.

Single source of truth for which view modes each entity type offers. Built
once at import and exposed read-only; adding a mode (e.g. timeline) to an
entity type means editing this table.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple


@dataclass(frozen=True)
class ViewModeDescriptor:
    id: str
    label: str


@dataclass(frozen=True)
class EntityDisplayConfig:
    label: str
    view_modes: Tuple[ViewModeDescriptor, ...]
    default_settings: Mapping[str, Any]
    available_settings: Tuple[str, ...]


GRID = ViewModeDescriptor("grid", "Grid")
WALL = ViewModeDescriptor("wall", "Wall")
TABLE = ViewModeDescriptor("table", "Table")
TIMELINE = ViewModeDescriptor("timeline", "Timeline")
FOLDER = ViewModeDescriptor("folder", "Folder")
HIERARCHY = ViewModeDescriptor("hierarchy", "Hierarchy")

_LAYOUT_DEFAULTS = {
    "defaultViewMode": "grid",
    "defaultGridDensity": "medium",
    "defaultWallZoom": "medium",
}
_LAYOUT_SETTINGS = ("defaultViewMode", "defaultGridDensity", "defaultWallZoom")
_RATING_ROW = ("showRating", "showFavorite", "showOCounter", "showMenu")


def _frozen(settings: Dict[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(settings))


def _card_defaults(*flags: str) -> Mapping[str, Any]:
    settings: Dict[str, Any] = dict(_LAYOUT_DEFAULTS)
    settings.update({flag: True for flag in flags})
    return _frozen(settings)


# scene / gallery / image 有原生的拍摄/发布日期，因此提供 timeline；
# performer / tag 没有逐条日期概念，永远不提供。
ENTITY_DISPLAY_CONFIG: Mapping[str, EntityDisplayConfig] = MappingProxyType({
    "scene": EntityDisplayConfig(
        label="Scene",
        view_modes=(GRID, WALL, TABLE, TIMELINE, FOLDER),
        default_settings=_card_defaults(
            "showDescriptionOnCard",
            "showDescriptionOnDetail",
            "showCodeOnCard",
            "showStudio",
            "showDate",
            "showRelationshipIndicators",
            *_RATING_ROW,
        ),
        available_settings=_LAYOUT_SETTINGS
        + (
            "showStudio",
            "showDate",
            "showCodeOnCard",
            "showDescriptionOnCard",
            "showDescriptionOnDetail",
            "showRelationshipIndicators",
        )
        + _RATING_ROW,
    ),
    "gallery": EntityDisplayConfig(
        label="Gallery",
        view_modes=(GRID, WALL, TABLE, TIMELINE, FOLDER),
        default_settings=_card_defaults(
            "showDescriptionOnCard",
            "showDescriptionOnDetail",
            "showStudio",
            "showDate",
            "showRelationshipIndicators",
            *_RATING_ROW,
        ),
        available_settings=_LAYOUT_SETTINGS
        + ("showStudio", "showDate", "showDescriptionOnCard", "showDescriptionOnDetail", "showRelationshipIndicators")
        + _RATING_ROW,
    ),
    "image": EntityDisplayConfig(
        label="Image",
        view_modes=(GRID, WALL, TIMELINE, FOLDER),
        default_settings=_card_defaults(
            "showDescriptionOnCard",
            "showDescriptionOnDetail",
            "showStudio",
            "showDate",
            "showRelationshipIndicators",
            *_RATING_ROW,
        ),
        available_settings=_LAYOUT_SETTINGS
        + ("showStudio", "showDate", "showDescriptionOnCard", "showDescriptionOnDetail", "showRelationshipIndicators")
        + _RATING_ROW,
    ),
    "performer": EntityDisplayConfig(
        label="Performer",
        view_modes=(GRID, WALL, TABLE),
        default_settings=_card_defaults(
            "showDescriptionOnCard", "showDescriptionOnDetail", "showRelationshipIndicators", *_RATING_ROW
        ),
        available_settings=_LAYOUT_SETTINGS
        + ("showDescriptionOnCard", "showDescriptionOnDetail", "showRelationshipIndicators")
        + _RATING_ROW,
    ),
    "studio": EntityDisplayConfig(
        label="Studio",
        view_modes=(GRID, WALL, TABLE),
        default_settings=_card_defaults(
            "showDescriptionOnCard", "showDescriptionOnDetail", "showRelationshipIndicators", *_RATING_ROW
        ),
        available_settings=_LAYOUT_SETTINGS
        + ("showDescriptionOnCard", "showDescriptionOnDetail", "showRelationshipIndicators")
        + _RATING_ROW,
    ),
    "tag": EntityDisplayConfig(
        label="Tag",
        view_modes=(GRID, TABLE, HIERARCHY),
        default_settings=_card_defaults(
            "showDescriptionOnCard", "showDescriptionOnDetail", "showRelationshipIndicators", "showMenu"
        ),
        available_settings=_LAYOUT_SETTINGS
        + ("showDescriptionOnCard", "showDescriptionOnDetail", "showRelationshipIndicators", "showMenu"),
    ),
    "group": EntityDisplayConfig(
        label="Group",
        view_modes=(GRID, WALL, TABLE),
        default_settings=_card_defaults(
            "showDescriptionOnCard",
            "showDescriptionOnDetail",
            "showStudio",
            "showDate",
            "showRelationshipIndicators",
            *_RATING_ROW,
        ),
        available_settings=_LAYOUT_SETTINGS
        + ("showStudio", "showDate", "showDescriptionOnCard", "showDescriptionOnDetail", "showRelationshipIndicators")
        + _RATING_ROW,
    ),
    "clip": EntityDisplayConfig(
        label="Clip",
        view_modes=(GRID,),
        default_settings=_frozen(
            {
                "defaultViewMode": "grid",
                "defaultGridDensity": "medium",
                "showSceneTitle": False,
                "showStudio": False,
                "showDate": False,
                "showRelationshipIndicators": True,
                "showRating": False,
                "showFavorite": False,
                "showOCounter": False,
                "showMenu": False,
            }
        ),
        available_settings=(
            "defaultGridDensity",
            "showSceneTitle",
            "showStudio",
            "showDate",
            "showRelationshipIndicators",
        )
        + _RATING_ROW,
    ),
})

SETTING_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "defaultViewMode": "Default view mode",
        "defaultGridDensity": "Default grid density",
        "defaultWallZoom": "Default wall size",
        "showCodeOnCard": "Show studio code on cards",
        "showSceneTitle": "Show scene title",
        "showStudio": "Show studio name",
        "showDate": "Show date",
        "showDescriptionOnCard": "Show description on cards",
        "showDescriptionOnDetail": "Show description on detail page",
        "showRelationshipIndicators": "Show relationship indicators",
        "showRating": "Show rating",
        "showFavorite": "Show favorite",
        "showOCounter": "Show O counter",
        "showMenu": "Show menu",
    }
)

SETTING_DESCRIPTIONS: Mapping[str, str] = MappingProxyType(
    {
        "showCodeOnCard": "Display scene codes in card subtitles",
        "showSceneTitle": "Display parent scene title in card subtitles",
        "showStudio": "Display studio name in card subtitles",
        "showDate": "Display date in card subtitles",
        "showRelationshipIndicators": "Display count badges for performers, tags, etc.",
    }
)


def _lookup(entity_type: str) -> EntityDisplayConfig | None:
    if not isinstance(entity_type, str):
        return None
    return ENTITY_DISPLAY_CONFIG.get(entity_type)


def get_entity_types() -> Tuple[str, ...]:
    """Entity types in display order."""
    return tuple(ENTITY_DISPLAY_CONFIG)


def get_view_modes(entity_type: str) -> Tuple[ViewModeDescriptor, ...]:
    """未知实体返回空序列：展示层把“缺省”理解为没有特殊视图。"""
    config = _lookup(entity_type)
    return config.view_modes if config else ()


def supports_view_mode(entity_type: str, mode_id: str) -> bool:
    return any(mode.id == mode_id for mode in get_view_modes(entity_type))


def get_default_settings(entity_type: str) -> Dict[str, Any]:
    # 返回副本，调用方修改不会影响注册表
    config = _lookup(entity_type)
    return dict(config.default_settings) if config else {}


def get_available_settings(entity_type: str) -> Tuple[str, ...]:
    config = _lookup(entity_type)
    return config.available_settings if config else ()


__all__ = [
    "ENTITY_DISPLAY_CONFIG",
    "EntityDisplayConfig",
    "SETTING_DESCRIPTIONS",
    "SETTING_LABELS",
    "ViewModeDescriptor",
    "get_available_settings",
    "get_default_settings",
    "get_entity_types",
    "get_view_modes",
    "supports_view_mode",
]
