"""Tests for IndexableText: code-point indexing and raw-unit conversion."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from string_tools import IndexableText, SemanticRange, RangeError, CharacterIndexError

SAMPLE = "café \U0001F600 ok"     # 9 code points, 10 UTF-16 units, 13 UTF-8 bytes


# ── SemanticRange ────────────────────────────────────────────────────

def test_range_rejects_inverted_bounds():
    with pytest.raises(RangeError):
        SemanticRange(3, 1)


def test_range_rejects_negative_bounds():
    with pytest.raises(RangeError):
        SemanticRange(-1, 2)


def test_range_errors_are_value_errors():
    with pytest.raises(ValueError):
        SemanticRange(5, 0)


def test_range_overlap():
    assert SemanticRange(0, 5).overlaps(SemanticRange(4, 6))
    assert not SemanticRange(0, 5).overlaps(SemanticRange(5, 6))
    assert len(SemanticRange(2, 7)) == 5


# ── Length and substring ─────────────────────────────────────────────

def test_length_counts_code_points():
    t = IndexableText(SAMPLE)
    assert len(t) == 9
    assert t.length == 9
    assert t.utf16_length == 10
    assert t.utf8_length == 13


def test_identity_range_round_trip():
    for value in ["", "a", SAMPLE, "שלום עולם", "é", "\U0001F468‍\U0001F469"]:
        t = IndexableText(value)
        assert t.substring(SemanticRange(0, len(t))) == value
        assert t.substring(t.full_range()) == value


def test_substring_past_end():
    t = IndexableText("abc")
    with pytest.raises(RangeError):
        t.substring(SemanticRange(1, 4))


def test_substring_around_emoji():
    t = IndexableText(SAMPLE)
    assert t.substring(SemanticRange(5, 6)) == "\U0001F600"
    assert t.substring(SemanticRange(0, 4)) == "café"
    assert t.substring(SemanticRange(3, 3)) == ""


def test_char_at():
    t = IndexableText(SAMPLE)
    assert t.char_at(3) == "é"
    assert t.char_at(5) == "\U0001F600"
    with pytest.raises(CharacterIndexError):
        t.char_at(9)
    with pytest.raises(IndexError):
        t.char_at(-1)


def test_subscript_access():
    t = IndexableText(SAMPLE)
    assert t[5] == "\U0001F600"
    assert t[0:4] == "café"
    assert t[7:] == "ok"
    with pytest.raises(RangeError):
        t[0:20]


def test_range_of():
    t = IndexableText(SAMPLE)
    assert t.range_of("ok") == SemanticRange(7, 9)
    assert t.range_of("\U0001F600") == SemanticRange(5, 6)
    assert t.range_of("zz") is None


def test_rejects_non_str():
    with pytest.raises(TypeError):
        IndexableText(b"bytes")


# ── Raw-unit conversion ──────────────────────────────────────────────

def test_from_utf16_range_across_surrogate_pair():
    t = IndexableText(SAMPLE)
    assert t.from_raw_range(5, 7, "utf16") == SemanticRange(5, 6)
    assert t.from_raw_range(8, 10, "utf16") == SemanticRange(7, 9)


def test_utf16_offset_inside_surrogate_pair():
    t = IndexableText(SAMPLE)
    with pytest.raises(RangeError):
        t.from_raw_range(6, 7, "utf16")


def test_from_utf8_range():
    t = IndexableText(SAMPLE)
    # "é" is two bytes, the emoji four
    assert t.from_raw_range(3, 5, "utf8") == SemanticRange(3, 4)
    assert t.from_raw_range(6, 10, "utf8") == SemanticRange(5, 6)
    with pytest.raises(RangeError):
        t.from_raw_range(4, 5, "utf8")


def test_raw_range_past_end():
    t = IndexableText(SAMPLE)
    with pytest.raises(RangeError):
        t.from_raw_range(0, 11, "utf16")
    with pytest.raises(RangeError):
        t.from_raw_range(0, 10, "codepoint")


def test_to_raw_range():
    t = IndexableText(SAMPLE)
    rng = SemanticRange(5, 9)
    assert t.to_raw_range(rng, "utf16") == (5, 10)
    assert t.to_raw_range(rng, "utf8") == (6, 13)
    assert t.to_raw_range(rng, "codepoint") == (5, 9)


def test_raw_round_trip_every_boundary():
    t = IndexableText(SAMPLE)
    for start in range(len(t) + 1):
        for end in range(start, len(t) + 1):
            rng = SemanticRange(start, end)
            for unit in ("utf16", "utf8"):
                raw = t.to_raw_range(rng, unit)
                assert t.from_raw_range(*raw, unit) == rng


def test_unknown_unit():
    with pytest.raises(ValueError):
        IndexableText("abc").from_raw_range(0, 1, "utf32")


# ── float_value ──────────────────────────────────────────────────────

def test_float_value():
    assert IndexableText("  3.5abc").float_value == 3.5
    assert IndexableText("-2e3").float_value == -2000.0
    assert IndexableText(".5").float_value == 0.5
    assert IndexableText("abc").float_value == 0.0
    assert IndexableText("").float_value == 0.0
