import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.services.filter_relations import build_relation_filter  # noqa: E402


def test_ids_become_includes_predicate():
    assert build_relation_filter(["t1", "t2"]) == {"modifier": "INCLUDES", "value": ["t1", "t2"]}


def test_empty_or_missing_ids_are_omitted():
    assert build_relation_filter([]) is None
    assert build_relation_filter(None) is None
    assert build_relation_filter(["", None]) is None
    assert build_relation_filter({"a": 1}) is None


def test_ids_are_stringified_and_deduplicated_in_order():
    assert build_relation_filter([3, "1", 3, "2", "1"]) == {"modifier": "INCLUDES", "value": ["3", "1", "2"]}


def test_bare_id_is_one_element_list():
    assert build_relation_filter("42") == {"modifier": "INCLUDES", "value": ["42"]}
    assert build_relation_filter(0) == {"modifier": "INCLUDES", "value": ["0"]}


def test_modifier_override_and_fallback():
    assert build_relation_filter(["1"], modifier="EXCLUDES")["modifier"] == "EXCLUDES"
    assert build_relation_filter(["1"], modifier="INCLUDES_ALL")["modifier"] == "INCLUDES_ALL"
    assert build_relation_filter(["1"], modifier="BETWEEN")["modifier"] == "INCLUDES"
    assert build_relation_filter(["1"], default_modifier="INCLUDES_ALL")["modifier"] == "INCLUDES_ALL"


def test_depth_is_attached_when_valid():
    assert build_relation_filter(["1"], depth="2") == {"modifier": "INCLUDES", "value": ["1"], "depth": 2}
    assert build_relation_filter(["1"], depth=-1)["depth"] == -1
    assert "depth" not in build_relation_filter(["1"], depth="deep")
