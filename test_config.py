import json

import pytest

from config import (
    DEFAULT_GEOMETRY,
    DEFAULT_THRESHOLDS,
    GeometrySettings,
    ScoreWeights,
    Thresholds,
    apply_overrides,
    load_thresholds,
    load_weights,
)


def write_json(tmp_path, data, name="settings.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_defaults():
    assert DEFAULT_THRESHOLDS.adj_dx == 60
    assert DEFAULT_THRESHOLDS.entropy_bad == 1.5
    assert DEFAULT_GEOMETRY.key_pitch == 60
    assert DEFAULT_GEOMETRY.row_offset(1) == 26
    assert DEFAULT_GEOMETRY.row_offset(2) == 52
    assert DEFAULT_GEOMETRY.row_offset(3) == 26
    assert DEFAULT_GEOMETRY.row_offset(9) == 0
    w = ScoreWeights()
    assert w.adjacency + w.entropy + w.straight + w.pattern + w.step_cv == pytest.approx(1.0)


def test_settings_are_immutable():
    with pytest.raises(AttributeError):
        DEFAULT_THRESHOLDS.adj_dx = 10


def test_load_thresholds(tmp_path):
    path = write_json(tmp_path, {"adj_dx": 64, "entropy_bad": 1.25})
    t = load_thresholds(path)
    assert t.adj_dx == 64
    assert t.entropy_bad == 1.25
    assert t.adj_dy == DEFAULT_THRESHOLDS.adj_dy
    assert DEFAULT_THRESHOLDS.adj_dx == 60


def test_load_weights(tmp_path):
    path = write_json(tmp_path, {"bad_from": 70})
    assert load_weights(path) == ScoreWeights(bad_from=70)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_thresholds(str(tmp_path / "nope.json"))


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{adj_dx: 1", encoding="utf-8")
    with pytest.raises(ValueError):
        load_thresholds(str(path))
    with pytest.raises(ValueError):
        load_thresholds(write_json(tmp_path, [1, 2], "list.json"))


@pytest.mark.parametrize("overrides", [
    {"adj_dz": 1},
    {"adj_dx": "60"},
    {"adj_dx": True},
    {"adj_dx": None},
    {"adj_dx": -1},
    {"high_adj_ratio": 0},
    {"entropy_bad": 0},
    {"stepcv_bad": 0.0},
    {"knight_pitch_x": 0},
    {"entropy_bad": float("nan")},
    {"stepcv_bad": float("inf")},
])
def test_bad_overrides(overrides):
    with pytest.raises(ValueError):
        apply_overrides(Thresholds(), overrides)


def test_geometry_overrides():
    g = apply_overrides(GeometrySettings(), {"key_width": 60})
    assert g.key_pitch == 68
    assert g.row_offset(2) == 60


def test_zero_allowed_where_it_is_not_a_divisor():
    t = apply_overrides(Thresholds(), {"knight_tolerance": 0, "adj_dy": 0})
    assert (t.knight_tolerance, t.adj_dy) == (0, 0)
    with pytest.raises(ValueError):
        apply_overrides(GeometrySettings(), {"key_width": 0})
