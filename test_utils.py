import pytest

from utils import load_lines, split_lines, top_n, write_frequency_table


def test_split_lines():
    assert split_lines("a\n\n  b \n\t\nc") == ["a", "b", "c"]
    assert split_lines("") == []
    assert split_lines(None) == []


def test_load_lines(tmp_path):
    path = tmp_path / "passwords.txt"
    path.write_text("Password123\n\nWelcome2024\n  Admin123  \n", encoding="utf-8")
    assert load_lines(str(path)) == ["Password123", "Welcome2024", "Admin123"]


def test_load_lines_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_lines(str(tmp_path / "missing.txt"))


def test_top_n_keeps_insertion_order_for_ties():
    freq = {"b": 1, "a": 3, "c": 1, "d": 3}
    assert top_n(freq, 3) == [("a", 3), ("d", 3), ("b", 1)]
    assert top_n(freq, 0) == []
    assert top_n({}, 5) == []


def test_write_frequency_table(tmp_path):
    out = tmp_path / "freq.tsv"
    write_frequency_table([("key", {"a": 1, "2": 4}), ("bigram", {"12": 2})], str(out))
    assert out.read_text(encoding="utf-8").splitlines() == [
        "key\t2\t4",
        "key\ta\t1",
        "bigram\t12\t2",
    ]
