import pytest

from gomodkit.gopages.wrap import (
    BreakZone,
    non_break_zones,
    smallest_non_negative,
    word_wrap,
    word_wrap_lines,
)

WRAP_COLUMN = 20


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", ""),
        ("This line is pretty darn long.", "This line is pretty\ndarn long."),
        (
            "\nThis line is pretty darn long.\nThis one might be too, lots of text.\n\t\t\t",
            "\nThis line is pretty\ndarn long.\nThis one might be\ntoo, lots of text.\n\t\t\t",
        ),
        (
            "\nThis line is just adequate.\n\tThis line is pretty darn long.\n"
            "\t\tThis one might be too, lots of text.\n\t\t\t",
            "\nThis line is just\nadequate.\n\tThis line is pretty\n\tdarn long.\n"
            "\t\tThis one might be\n\t\ttoo, lots of text.\n\t\t\t",
        ),
        (
            "\nSuper-hyphenated-yet-no-less-amazing.\n\t\t\t",
            "\nSuper-hyphenated-yet-no-less-amazing.\n\t\t\t",
        ),
        (
            '\nThis little "phrase will" not be broken.\n\t\t\t',
            '\nThis little \n"phrase will" not\nbe broken.\n\t\t\t',
        ),
        (
            '\nThis "phrase with multiple words" must not be broken.\n\t\t\t',
            '\nThis "phrase with multiple words"\nmust not be broken.\n\t\t\t',
        ),
    ],
    ids=[
        "empty string",
        "one long line",
        "two long lines",
        "wrap indented lines",
        "don't wrap long words",
        "quote wrapping leader long enough",
        "quote wrapping leader too short",
    ],
)
def test_word_wrap_lines(text, expected):
    assert word_wrap_lines(WRAP_COLUMN, text) == expected


@pytest.mark.parametrize(
    "values, expected",
    [
        ([2, 1, 0], 0),
        ([-1, 2, 3], 2),
        ([1, -2, 3], 1),
        ([1, 2, -3], 1),
        ([-1], 0),
    ],
)
def test_smallest_non_negative(values, expected):
    assert smallest_non_negative(*values) == expected


def test_word_wrap_returns_lines():
    assert word_wrap(WRAP_COLUMN, "  This line is pretty darn long.  ") == [
        "This line is pretty",
        "darn long.",
    ]


def test_word_wrap_blank_is_empty():
    assert word_wrap(WRAP_COLUMN, "   \t ") == []


def test_word_wrap_negative_columns():
    with pytest.raises(ValueError):
        word_wrap(-1, "text")


def test_word_wrap_line_pieces_fit():
    text = "one two three four five six seven eight nine ten eleven twelve"
    lines = word_wrap(10, text)
    assert all(len(line) <= 10 for line in lines)
    assert " ".join(lines) == text


def test_non_break_zones():
    assert non_break_zones('a "b" c "d e" "f') == [BreakZone(2, 5), BreakZone(8, 13)]


def test_break_zone_contains():
    zone = BreakZone(3, 6)
    assert [zone.contains(i) for i in range(2, 8)] == [False, True, True, True, False, False]


def test_break_zone_best_break():
    assert BreakZone(12, 25).best_break() == 12
    assert BreakZone(5, 33).best_break() == 33