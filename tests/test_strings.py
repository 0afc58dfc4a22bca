import pytest

from mdbook.strings import (
    take_anchored_lines,
    take_lines,
    take_rustdoc_include_anchored_lines,
    take_rustdoc_include_lines,
)


def joined(*lines):
    return "\n".join(lines)


WORDS = joined("Lorem", "ipsum", "dolor", "sit", "amet")

END_ONLY = joined("Lorem", "ipsum", "dolor", "ANCHOR_END: test", "sit", "amet")
OPEN_ONLY = joined("Lorem", "ipsum", "ANCHOR: test", "dolor", "sit", "amet")
CLOSED = joined(
    "Lorem", "ipsum", "ANCHOR: test", "dolor", "sit", "amet",
    "ANCHOR_END: test", "lorem", "ipsum",
)
REPEATED_START = joined(
    "Lorem", "ANCHOR: test", "ipsum", "ANCHOR: test", "dolor", "sit", "amet",
    "ANCHOR_END: test", "lorem", "ipsum",
)
NESTED = joined(
    "Lorem", "ANCHOR:    test2", "ipsum", "ANCHOR: test", "dolor", "sit", "amet",
    "ANCHOR_END: test", "lorem", "ANCHOR_END:test2", "ipsum",
)
REOPENED = joined(
    "Lorem", "ANCHOR: test", "ipsum", "ANCHOR_END: test", "dolor",
    "ANCHOR: test", "sit", "ANCHOR_END: test", "amet",
)


@pytest.mark.parametrize(
    ("lines", "expected"),
    [
        (slice(1, 3), joined("ipsum", "dolor")),
        (slice(3, None), joined("sit", "amet")),
        (slice(None, 3), joined("Lorem", "ipsum", "dolor")),
        (slice(None), WORDS),
        (slice(4, 3), ""),
        (slice(None, 100), WORDS),
    ],
)
def test_take_lines(lines, expected):
    assert take_lines(WORDS, lines) == expected


def test_take_lines_accepts_range():
    assert take_lines(WORDS, range(1, 3)) == joined("ipsum", "dolor")


def test_take_lines_rejects_negative():
    with pytest.raises(ValueError):
        take_lines(WORDS, slice(-1, None))


def test_take_lines_handles_crlf_and_trailing_newline():
    assert take_lines("a\r\nb\n", slice(None)) == joined("a", "b")


@pytest.mark.parametrize(
    ("text", "anchor", "expected"),
    [
        (WORDS, "test", ""),
        (END_ONLY, "test", ""),
        (OPEN_ONLY, "test", joined("dolor", "sit", "amet")),
        (OPEN_ONLY, "something", ""),
        (CLOSED, "test", joined("dolor", "sit", "amet")),
        (CLOSED, "something", ""),
        (REPEATED_START, "test", joined("ipsum", "dolor", "sit", "amet")),
        (REPEATED_START, "something", ""),
        (NESTED, "test2", joined("ipsum", "dolor", "sit", "amet", "lorem")),
        (NESTED, "test", joined("dolor", "sit", "amet")),
        (NESTED, "something", ""),
    ],
)
def test_take_anchored_lines(text, anchor, expected):
    assert take_anchored_lines(text, anchor) == expected


@pytest.mark.parametrize(
    ("lines", "expected"),
    [
        (slice(1, 3), joined("# Lorem", "ipsum", "dolor", "# sit", "# amet")),
        (slice(3, None), joined("# Lorem", "# ipsum", "# dolor", "sit", "amet")),
        (slice(None, 3), joined("Lorem", "ipsum", "dolor", "# sit", "# amet")),
        (slice(None), WORDS),
        (slice(4, 3), joined("# Lorem", "# ipsum", "# dolor", "# sit", "# amet")),
        (slice(None, 100), WORDS),
    ],
)
def test_take_rustdoc_include_lines(lines, expected):
    assert take_rustdoc_include_lines(WORDS, lines) == expected


ALL_HIDDEN_FIVE = joined("# Lorem", "# ipsum", "# dolor", "# sit", "# amet")
ALL_HIDDEN_SEVEN = joined(
    "# Lorem", "# ipsum", "# dolor", "# sit", "# amet", "# lorem", "# ipsum"
)


@pytest.mark.parametrize(
    ("text", "anchor", "expected"),
    [
        (WORDS, "test", ALL_HIDDEN_FIVE),
        (END_ONLY, "test", ALL_HIDDEN_FIVE),
        (OPEN_ONLY, "test", joined("# Lorem", "# ipsum", "dolor", "sit", "amet")),
        (OPEN_ONLY, "something", ALL_HIDDEN_FIVE),
        (
            CLOSED,
            "test",
            joined("# Lorem", "# ipsum", "dolor", "sit", "amet", "# lorem", "# ipsum"),
        ),
        (CLOSED, "something", ALL_HIDDEN_SEVEN),
        (
            REPEATED_START,
            "test",
            joined("# Lorem", "ipsum", "dolor", "sit", "amet", "# lorem", "# ipsum"),
        ),
        (REPEATED_START, "something", ALL_HIDDEN_SEVEN),
        (
            NESTED,
            "test2",
            joined("# Lorem", "ipsum", "dolor", "sit", "amet", "lorem", "# ipsum"),
        ),
        (
            NESTED,
            "test",
            joined("# Lorem", "# ipsum", "dolor", "sit", "amet", "# lorem", "# ipsum"),
        ),
        (NESTED, "something", ALL_HIDDEN_SEVEN),
        (REOPENED, "test", joined("# Lorem", "ipsum", "# dolor", "sit", "# amet")),
    ],
)
def test_take_rustdoc_include_anchored_lines(text, anchor, expected):
    assert take_rustdoc_include_anchored_lines(text, anchor) == expected