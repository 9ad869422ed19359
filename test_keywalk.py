import pytest

from keywalk import analyze_single, available_layouts, build_coord_map
from patterns import FindingKind, Severity
from scorer import BAD, GOOD


def kinds(result):
    return [f.kind for f in result.findings]


def test_qwerty123():
    result = analyze_single("qwerty123", "qwerty")
    assert result.layout == "qwerty"
    assert len(result.points) == 9
    assert result.unknown == ()
    assert result.walks == ("qwerty", "123")
    assert result.findings[0].kind is FindingKind.KNOWN_SUBSTRING
    assert result.findings[0].text == "qwerty"
    m = result.metrics
    assert m.unique_count == 9
    assert m.turn_count == 2
    assert m.adjacency_ratio == pytest.approx(0.875)
    assert m.direction_entropy == pytest.approx(0.5436, abs=1e-4)
    assert result.score.value == 61
    assert result.score.label == BAD


def test_home_row_is_a_straight_line():
    result = analyze_single("asdfgh")
    assert result.metrics.turn_count <= 1
    assert FindingKind.STRAIGHT_LINE in kinds(result)
    assert result.score.value == 100
    assert result.score.label == BAD


def test_scattered_password_scores_low():
    result = analyze_single("xK9#mQ2$vL", "qwerty")
    assert result.score.value < 40
    assert result.score.label == GOOD
    assert FindingKind.KNOWN_SUBSTRING not in kinds(result)
    assert FindingKind.REPEAT not in kinds(result)
    assert kinds(result) == [FindingKind.NONE]
    assert result.bad_findings == []
    assert result.metrics.knight_ratio == pytest.approx(1 / 9)


def test_empty_input():
    result = analyze_single("")
    assert result.points == ()
    assert result.findings == ()
    assert result.walks == ()
    assert result.metrics.total_length == 0
    assert result.score.label == GOOD
    assert analyze_single(None).text == ""


def test_same_input_same_result():
    assert analyze_single("P@ssw0rd!2024") == analyze_single("P@ssw0rd!2024")


def test_unknown_layout_falls_back_to_qwerty(caplog):
    result = analyze_single("qwerty123", "colemak")
    assert result.layout == "qwerty"
    assert result == analyze_single("qwerty123", "qwerty")
    assert "colemak" in caplog.text


@pytest.mark.parametrize("layout", available_layouts())
def test_every_layout_scores_within_scale(layout):
    for text in ("qwerty123", "asdfgh", "xK9#mQ2$vL", "パスワード1"):
        result = analyze_single(text, layout)
        assert result.layout == layout
        assert 0 <= result.score.value <= 100
        assert len(result.points) + len(result.unknown) == len(text)


def test_bad_findings_match_severity():
    result = analyze_single("pÄssw€rd")
    assert result.bad_findings
    assert all(f.severity is Severity.BAD for f in result.bad_findings)
    assert [u.char for u in result.unknown] == ["Ä", "€"]


def test_coord_maps_are_independent():
    a = build_coord_map("qwerty")
    b = build_coord_map("qwerty")
    assert a is not b
    assert a.get_pos("q") == b.get_pos("q")
