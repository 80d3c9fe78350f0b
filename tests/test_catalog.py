import json

import pytest

from psl_scorer.catalog import (
    Difficulty,
    Priority,
    RecommendationCategory,
    RecommendationEntry,
    RoutineCatalog,
    category_color,
    category_icon,
    category_label,
    difficulty_timeframe,
    export_catalog_json,
    load_catalog,
)
from psl_scorer.errors import CatalogError, UnknownRoutineError


def _entry(title="Test Routine", **kw):
    data = {
        "title": title,
        "description": "desc",
        "category": "fitness",
        "priority": "high",
        "target_metric": "BMI",
        "instructions": ["one", "two"],
    }
    data.update(kw)
    return data


def test_bundled_catalog(catalog):
    assert len(catalog) == 15
    mewing = catalog["Mewing Technique"]
    assert mewing.category is RecommendationCategory.JAWLINE
    assert mewing.priority is Priority.CRITICAL
    assert mewing.instructions
    assert "Posture Correction" in catalog
    assert catalog.get("Nope") is None


def test_unknown_title(catalog):
    with pytest.raises(UnknownRoutineError):
        catalog["Nope"]


def test_priority_rank_order():
    assert [p.rank for p in (Priority.CRITICAL, Priority.HIGH, Priority.MEDIUM, Priority.LOW)] == [0, 1, 2, 3]


def test_lookup_tables_cover_every_value():
    for c in RecommendationCategory:
        assert category_label(c) and category_icon(c) and category_color(c)
    for d in Difficulty:
        assert difficulty_timeframe(d)
    assert category_label("sleep") == "Sleep & Recovery"


def test_entry_from_dict_defaults():
    e = RecommendationEntry.from_dict(_entry())
    assert e.difficulty is Difficulty.MODERATE
    assert e.expected_improvement == 0.5
    assert e.instructions == ("one", "two")
    assert e.tips == ()
    d = e.to_dict()
    assert d["category_label"] == "Fitness"
    assert d["timeframe"] == "1-3 months"


@pytest.mark.parametrize(
    "bad",
    [
        {"title": "x"},
        _entry(category="astrology"),
        _entry(priority="urgent"),
        _entry(expected_improvement="lots"),
    ],
)
def test_entry_from_dict_invalid(bad):
    with pytest.raises(CatalogError):
        RecommendationEntry.from_dict(bad)


def test_duplicate_titles_rejected():
    e = RecommendationEntry.from_dict(_entry())
    with pytest.raises(CatalogError):
        RoutineCatalog([e, e])


def test_catalog_is_read_only(catalog):
    with pytest.raises(TypeError):
        catalog._entries["x"] = None


def test_load_custom_catalog(tmp_path):
    path = tmp_path / "routines.json"
    path.write_text(json.dumps({"version": 1, "routines": [_entry(), _entry("Other")]}), encoding="utf-8")
    cat = load_catalog(str(path))
    assert cat.titles() == ["Test Routine", "Other"]


@pytest.mark.parametrize(
    "content",
    [
        "not json",
        json.dumps([1, 2]),
        json.dumps({"routines": "nope"}),
        json.dumps({"version": 99, "routines": []}),
    ],
)
def test_load_invalid_catalog(tmp_path, content):
    path = tmp_path / "routines.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(str(path))


def test_load_missing_file(tmp_path):
    with pytest.raises(CatalogError):
        load_catalog(str(tmp_path / "missing.json"))


def test_export_catalog_json(catalog):
    exported = json.loads(export_catalog_json(catalog))
    assert len(exported) == len(catalog)
    assert {r["title"] for r in exported} == set(catalog.titles())
