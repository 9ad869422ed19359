from layouts import available_layouts
from print_stats import compare_layouts, get_layout_score, main, print_layout_scores


def test_compare_layouts():
    rows = compare_layouts("asdfgh")
    assert [r[0] for r in rows] == available_layouts()
    baseline = dict((name, (score, delta)) for name, score, delta in rows)["qwerty"]
    assert baseline == (100, 0)
    for name, score, delta in rows:
        assert score == get_layout_score("asdfgh", name)
        assert delta == score - 100


def test_other_baseline():
    rows = compare_layouts("qwerty123", baseline="dvorak")
    base = get_layout_score("qwerty123", "dvorak")
    assert all(delta == score - base for _, score, delta in rows)


def test_print_layout_scores(capsys):
    print_layout_scores("asdfgh")
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "'asdfgh'"
    assert "  qwerty score: 100 (baseline)" in out
    assert any(line.startswith("  dvorak score: ") and "(difference from qwerty: " in line for line in out)


def test_main(capsys):
    main(["qwerty123", "asdfgh", "--baseline", "jis"])
    out = capsys.readouterr().out
    assert "'qwerty123'" in out
    assert "  jis score: 61 (baseline)" in out
