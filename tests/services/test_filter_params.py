import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.services.exceptions import UnknownEntityTypeError  # noqa: E402
from app.services.filter_assembler import assemble  # noqa: E402
from app.services.filter_params import selection_from_query_params  # noqa: E402


def test_query_params_match_structured_selection():
    params = {
        "date_start": "2024-01-01",
        "date_end": "2024-06-30",
        "rating_min": "60",
        "tagIds": "t1, t2,,",
        "favorite": "true",
    }
    selection = selection_from_query_params("gallery", params)
    assert selection == {
        "date": {"start": "2024-01-01", "end": "2024-06-30"},
        "rating": {"min": "60"},
        "tagIds": ["t1", "t2"],
        "favorite": "true",
    }
    assert assemble("gallery", selection) == assemble(
        "gallery",
        {
            "date": {"start": "2024-01-01", "end": "2024-06-30"},
            "rating": {"min": 60},
            "tagIds": ["t1", "t2"],
            "favorite": True,
        },
    )


def test_modifier_and_depth_params():
    selection = selection_from_query_params(
        "scene", {"tagIds": "1,2", "tagIdsModifier": "EXCLUDES", "tagIdsDepth": "-1"}
    )
    assert selection == {"tagIds": ["1", "2"], "tagIdsModifier": "EXCLUDES", "tagIdsDepth": -1}


def test_invalid_depth_is_ignored():
    selection = selection_from_query_params("scene", {"tagIds": "1", "tagIdsDepth": "all"})
    assert selection == {"tagIds": ["1"]}


def test_single_relation_is_not_split():
    assert selection_from_query_params("scene", {"studioId": "12"}) == {"studioId": "12"}


def test_flag_strings_compile_like_dict_form():
    for raw in ("true", "1", "yes", "on", "false", "0", "no", "off", "maybe", "TRUE"):
        selection = selection_from_query_params("scene", {"favorite": raw})
        assert selection == {"favorite": raw}
        assert assemble("scene", selection) == assemble("scene", {"favorite": raw})


def test_flag_query_values():
    assert assemble("scene", selection_from_query_params("scene", {"favorite": "1"})) == {"favorite": True}
    assert assemble("scene", selection_from_query_params("scene", {"favorite": "off"})) == {"favorite": False}
    assert assemble("scene", selection_from_query_params("scene", {"favorite": "maybe"})) == {}


def test_unknown_params_are_ignored():
    assert selection_from_query_params("tag", {"page": "2", "sort": "name"}) == {}


def test_unknown_entity_raises():
    with pytest.raises(UnknownEntityTypeError):
        selection_from_query_params("movie", {})
