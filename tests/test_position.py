"""Tests for byte offset <-> line/character mapping."""
import pytest

from mdstyle.core.linter.position import LineIndex, Position, is_char_boundary


def _aligned_ranges(text: str):
    """Every (start, end) byte pair that lands on character boundaries."""
    data = text.encode("utf-8")
    offsets = [i for i in range(len(data) + 1) if is_char_boundary(data, i)]
    for i, start in enumerate(offsets):
        for end in offsets[i:]:
            yield start, end


# ---------------------------------------------------------------------------
# to_range
# ---------------------------------------------------------------------------


def test_to_range_single_line():
    index = LineIndex("hello world")
    assert index.to_range(6, 11) == (Position(0, 6), Position(0, 11))


def test_to_range_across_lines():
    index = LineIndex("ab\ncd\nef")
    assert index.to_range(1, 7) == (Position(0, 1), Position(2, 1))


def test_to_range_end_of_text_is_after_last_char():
    """byte_end == len(text) maps to the position after the last character."""
    text = "one\ntwo"
    index = LineIndex(text)
    assert index.to_range(4, len(text)) == (Position(1, 0), Position(1, 3))


def test_to_range_trailing_newline():
    index = LineIndex("ab\n")
    assert index.to_range(3, 3) == (Position(1, 0), Position(1, 0))


def test_to_range_counts_characters_not_bytes():
    # "é" is two bytes, "日" three
    index = LineIndex("é日x")
    assert index.to_range(5, 6) == (Position(0, 2), Position(0, 3))


def test_to_range_rejects_split_character():
    index = LineIndex("é")
    assert index.to_range(1, 2) is None
    assert index.to_range(0, 1) is None


def test_to_range_rejects_out_of_bounds_and_reversed():
    index = LineIndex("abc")
    assert index.to_range(0, 4) is None
    assert index.to_range(-1, 2) is None
    assert index.to_range(2, 1) is None


# ---------------------------------------------------------------------------
# to_byte_range
# ---------------------------------------------------------------------------


def test_to_byte_range_inverse():
    index = LineIndex("ab\ncé\nf")
    assert index.to_byte_range(Position(1, 1), Position(2, 0)) == range(4, 7)


def test_to_byte_range_outside_text():
    index = LineIndex("ab\ncd")
    assert index.to_byte_range(Position(0, 0), Position(5, 0)) is None
    assert index.to_byte_range(Position(0, 3), Position(1, 0)) is None


@pytest.mark.parametrize("text", [
    "",
    "plain ascii",
    "two\nlines\n",
    "naïve café\n日本語 text\r\nend",
    "emoji 🎉 here\n\n🎉",
])
def test_round_trip_is_identity(text):
    """to_byte_range(to_range(r)) == r for every character-aligned range."""
    index = LineIndex(text)
    for start, end in _aligned_ranges(text):
        positions = index.to_range(start, end)
        assert positions is not None
        assert index.to_byte_range(*positions) == range(start, end)


def test_line_col_to_byte_range():
    index = LineIndex("x\nuse javascript")
    assert index.line_col_to_byte_range(2, 5, 10) == range(6, 16)


def test_char_to_byte():
    text = "aé\nb日c"
    index = LineIndex(text)
    for char_offset in range(len(text) + 1):
        assert index.char_to_byte(char_offset) == len(text[:char_offset].encode("utf-8"))
