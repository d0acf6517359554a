"""Static per-entity field tables for the filter compiler.

Each entity type declares the dimensions it understands and how each maps to
a backend field. Anything not listed here is ignored by the assembler.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from app.services.exceptions import UnknownEntityTypeError
from app.services.filter_ranges import Modifier


class DimensionKind(str, Enum):
    FLAG = "flag"
    NUMBER_RANGE = "number_range"
    DATE_RANGE = "date_range"
    RELATION = "relation"
    TEXT = "text"
    CHOICE = "choice"
    SCENE_SCOPE = "scene_scope"
    PARAM = "param"


@dataclass(frozen=True)
class FieldRule:
    dimension: str
    field: str
    kind: DimensionKind
    scale: int = 1
    default_modifier: str = Modifier.INCLUDES.value
    multi: bool = True
    # scene_scope 使用：嵌套谓词的子键（如 scene_filter.groups）
    sub_field: Optional[str] = None

    @property
    def modifier_key(self) -> str:
        return f"{self.dimension}Modifier"

    @property
    def depth_key(self) -> str:
        return f"{self.dimension}Depth"


def _flag(dimension: str, field: Optional[str] = None) -> FieldRule:
    return FieldRule(dimension, field or dimension, DimensionKind.FLAG)


def _number(dimension: str, field: str, *, scale: int = 1) -> FieldRule:
    return FieldRule(dimension, field, DimensionKind.NUMBER_RANGE, scale=scale)


def _dates(dimension: str, field: str) -> FieldRule:
    return FieldRule(dimension, field, DimensionKind.DATE_RANGE)


def _relation(dimension: str, field: str, *, multi: bool = True) -> FieldRule:
    return FieldRule(dimension, field, DimensionKind.RELATION, multi=multi)


def _text(dimension: str, field: Optional[str] = None) -> FieldRule:
    return FieldRule(dimension, field or dimension, DimensionKind.TEXT)


def _choice(dimension: str, field: Optional[str] = None) -> FieldRule:
    return FieldRule(dimension, field or dimension, DimensionKind.CHOICE, default_modifier=Modifier.EQUALS.value)


def _scene_scope(dimension: str, field: str, sub_field: str, *, multi: bool) -> FieldRule:
    return FieldRule(dimension, field, DimensionKind.SCENE_SCOPE, multi=multi, sub_field=sub_field)


def _param(dimension: str, *, multi: bool = True) -> FieldRule:
    return FieldRule(dimension, dimension, DimensionKind.PARAM, multi=multi)


SECONDS_PER_MINUTE = 60
BITS_PER_MEGABIT = 1_000_000

# scene 是参考实现：gallery / image 的 rating 与 date 必须与之完全一致
SCENE_FIELDS: Tuple[FieldRule, ...] = (
    _flag("favorite"),
    _flag("performerFavorite", "performer_favorite"),
    _flag("studioFavorite", "studio_favorite"),
    _flag("tagFavorite", "tag_favorite"),
    _relation("performerIds", "performers"),
    _relation("studioId", "studios", multi=False),
    _relation("tagIds", "tags"),
    _relation("groupIds", "groups"),
    _relation("galleryIds", "galleries"),
    _number("rating", "rating100"),
    _number("oCount", "o_counter"),
    _number("duration", "duration", scale=SECONDS_PER_MINUTE),
    _number("playDuration", "play_duration", scale=SECONDS_PER_MINUTE),
    _number("playCount", "play_count"),
    _number("bitrate", "bitrate", scale=BITS_PER_MEGABIT),
    _number("framerate", "framerate"),
    _number("performerCount", "performer_count"),
    _number("performerAge", "performer_age"),
    _number("tagCount", "tag_count"),
    _dates("date", "date"),
    _dates("createdAt", "created_at"),
    _dates("updatedAt", "updated_at"),
    _dates("lastPlayedAt", "last_played_at"),
    _text("title"),
    _text("details"),
    _text("director"),
    _text("videoCodec", "video_codec"),
    _text("audioCodec", "audio_codec"),
    _choice("resolution"),
)

GALLERY_FIELDS: Tuple[FieldRule, ...] = (
    _flag("favorite"),
    _flag("hasFavoriteImage"),
    _number("rating", "rating100"),
    _number("imageCount", "image_count"),
    _text("title"),
    _relation("studioIds", "studios"),
    _relation("performerIds", "performers"),
    _relation("tagIds", "tags"),
    _dates("date", "date"),
)

IMAGE_FIELDS: Tuple[FieldRule, ...] = (
    _flag("favorite"),
    _number("rating", "rating100"),
    _relation("performerIds", "performers"),
    _relation("studioIds", "studios"),
    _relation("tagIds", "tags"),
    _relation("galleryIds", "galleries"),
    _number("oCounter", "o_counter"),
    _dates("date", "date"),
)

PERFORMER_FIELDS: Tuple[FieldRule, ...] = (
    _flag("favorite"),
    _relation("tagIds", "tags"),
    _number("rating", "rating100"),
    _choice("gender"),
    _choice("ethnicity"),
    _choice("hairColor", "hair_color"),
    _choice("eyeColor", "eye_color"),
    _number("age", "age"),
    _number("birthYear", "birth_year"),
    _number("deathYear", "death_year"),
    _number("careerLength", "career_length"),
    _number("height", "height"),
    _number("weight", "weight"),
    _number("oCounter", "o_counter"),
    _number("playCount", "play_count"),
    _number("sceneCount", "scene_count"),
    _dates("birthdate", "birthdate"),
    _dates("deathDate", "death_date"),
    _dates("createdAt", "created_at"),
    _dates("updatedAt", "updated_at"),
    _text("name"),
    _text("details"),
    _text("measurements"),
    _text("tattoos"),
    _text("piercings"),
    _scene_scope("sceneId", "scene_filter", "id", multi=False),
    _scene_scope("groupIds", "scene_filter", "groups", multi=True),
)

STUDIO_FIELDS: Tuple[FieldRule, ...] = (
    _flag("favorite"),
    _relation("tagIds", "tags"),
    _number("rating", "rating100"),
    _number("sceneCount", "scene_count"),
    _number("oCounter", "o_counter"),
    _number("playCount", "play_count"),
    _dates("createdAt", "created_at"),
    _dates("updatedAt", "updated_at"),
    _text("name"),
    _text("details"),
)

TAG_FIELDS: Tuple[FieldRule, ...] = (
    _flag("favorite"),
    _number("rating", "rating100"),
    _number("sceneCount", "scene_count"),
    _number("oCounter", "o_counter"),
    _number("playCount", "play_count"),
    _dates("createdAt", "created_at"),
    _dates("updatedAt", "updated_at"),
    _text("name"),
    _text("description"),
    _relation("performerIds", "performers"),
    _relation("studioId", "studios", multi=False),
    _scene_scope("sceneId", "scenes_filter", "id", multi=False),
    _scene_scope("groupIds", "scenes_filter", "groups", multi=True),
)

GROUP_FIELDS: Tuple[FieldRule, ...] = (
    _flag("favorite"),
    _relation("tagIds", "tags"),
    _relation("performerIds", "performers"),
    _relation("studioId", "studios", multi=False),
    _number("rating", "rating100"),
    _number("sceneCount", "scene_count"),
    _number("duration", "duration", scale=SECONDS_PER_MINUTE),
    _dates("date", "date"),
    _dates("createdAt", "created_at"),
    _dates("updatedAt", "updated_at"),
    _text("name"),
    _text("synopsis"),
    _text("director"),
    _scene_scope("sceneId", "scene_filter", "id", multi=False),
)

# clip 走 REST 参数而不是 GraphQL 谓词，只做透传
CLIP_FIELDS: Tuple[FieldRule, ...] = (
    _param("tagIds"),
    _param("sceneTagIds"),
    _param("performerIds"),
    _param("studioId", multi=False),
    _flag("isGenerated"),
)

ENTITY_FIELDS: Mapping[str, Tuple[FieldRule, ...]] = MappingProxyType(
    {
        "scene": SCENE_FIELDS,
        "gallery": GALLERY_FIELDS,
        "image": IMAGE_FIELDS,
        "performer": PERFORMER_FIELDS,
        "studio": STUDIO_FIELDS,
        "tag": TAG_FIELDS,
        "group": GROUP_FIELDS,
        "clip": CLIP_FIELDS,
    }
)


def get_entity_fields(entity_type: str) -> Tuple[FieldRule, ...]:
    """Return the field table for ``entity_type`` or raise ``UnknownEntityTypeError``."""
    try:
        return ENTITY_FIELDS[entity_type]
    except (KeyError, TypeError):
        raise UnknownEntityTypeError(entity_type) from None


def field_name_for(entity_type: str, dimension: str) -> Optional[str]:
    for rule in get_entity_fields(entity_type):
        if rule.dimension == dimension:
            return rule.field
    return None


__all__ = [
    "DimensionKind",
    "ENTITY_FIELDS",
    "FieldRule",
    "field_name_for",
    "get_entity_fields",
]
