import sys
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.services.view_modes import (  # noqa: E402
    ENTITY_DISPLAY_CONFIG,
    SETTING_LABELS,
    get_available_settings,
    get_default_settings,
    get_entity_types,
    get_view_modes,
    supports_view_mode,
)


def _mode_ids(entity_type):
    return [mode.id for mode in get_view_modes(entity_type)]


def test_timeline_offered_only_for_dated_entities():
    for entity_type in ("scene", "gallery", "image"):
        assert "timeline" in _mode_ids(entity_type)
    for entity_type in ("performer", "tag", "studio", "group", "clip"):
        assert not supports_view_mode(entity_type, "timeline")


def test_view_mode_order():
    assert _mode_ids("scene") == ["grid", "wall", "table", "timeline", "folder"]
    assert _mode_ids("image") == ["grid", "wall", "timeline", "folder"]
    assert _mode_ids("tag") == ["grid", "table", "hierarchy"]
    assert _mode_ids("clip") == ["grid"]


def test_unknown_entity_has_no_view_modes():
    assert get_view_modes("movie") == ()
    assert get_view_modes(None) == ()
    assert supports_view_mode("movie", "grid") is False
    assert get_default_settings("movie") == {}
    assert get_available_settings("movie") == ()


def test_entity_types_listed_in_display_order():
    assert get_entity_types() == ("scene", "gallery", "image", "performer", "studio", "tag", "group", "clip")


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        ENTITY_DISPLAY_CONFIG["movie"] = ENTITY_DISPLAY_CONFIG["scene"]
    with pytest.raises(FrozenInstanceError):
        ENTITY_DISPLAY_CONFIG["scene"].view_modes = ()
    with pytest.raises(TypeError):
        ENTITY_DISPLAY_CONFIG["scene"].default_settings["showDate"] = False
    with pytest.raises(FrozenInstanceError):
        get_view_modes("scene")[0].id = "list"


def test_default_settings_are_copies():
    settings = get_default_settings("scene")
    settings["showDate"] = False
    assert get_default_settings("scene")["showDate"] is True


def test_default_settings_content():
    scene = get_default_settings("scene")
    assert scene["defaultViewMode"] == "grid"
    assert scene["showCodeOnCard"] is True
    clip = get_default_settings("clip")
    assert clip["showSceneTitle"] is False
    assert "defaultWallZoom" not in clip


def test_available_settings_have_labels():
    for entity_type in get_entity_types():
        for key in get_available_settings(entity_type):
            assert key in SETTING_LABELS
