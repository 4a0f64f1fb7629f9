"""Hypothesis property-based tests for strand.cursor.Cursor.

Covers the round-trip, line-count, character-boundary and peek-idempotence
properties over arbitrary Unicode text.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from strand.cursor import Cursor

# Scalar values only: surrogates cannot be encoded as UTF-8.
source_text = st.text(
    alphabet=st.characters(exclude_categories=["Cs"]),
    min_size=0,
    max_size=120,
)

# Mostly words, spaces and newlines.
wordy_text = st.text(alphabet=st.sampled_from(list("ab \xe9\u4e16\U0001f600\n\t")), max_size=60)

# True = advance, False = retreat.
moves = st.lists(st.booleans(), max_size=200)


def _line_at(cursor: Cursor) -> int:
    return cursor.data.encode("utf-8")[: cursor.offset].count(b"\n")


class TestRoundTrip:
    """Retreating undoes advancing."""

    @given(source=source_text, steps=st.integers(min_value=0, max_value=150))
    @settings(max_examples=200)
    def test_retreat_reverses_advance(self, source: str, steps: int) -> None:
        cursor = Cursor(source)
        forward = []
        for _ in range(steps):
            item = cursor.advance()
            if item is None:
                break
            forward.append(item)

        backward = []
        for _ in range(len(forward)):
            backward.append(cursor.retreat())

        assert backward == list(reversed(forward))
        assert cursor.offset == 0
        assert cursor.line == 0
        assert cursor.retreat() is None

    @given(source=source_text)
    def test_full_walk_covers_every_byte(self, source: str) -> None:
        cursor = Cursor(source)
        chars = [c for _, c in cursor]
        assert "".join(chars) == source
        assert cursor.offset == len(source.encode("utf-8"))


class TestInvariants:
    """offset and line stay consistent under any sequence of moves."""

    @given(source=source_text, ops=moves)
    @settings(max_examples=200)
    def test_line_matches_newlines_behind(self, source: str, ops: list[bool]) -> None:
        cursor = Cursor(source)
        for forward in ops:
            if forward:
                cursor.advance()
            else:
                cursor.retreat()
            assert cursor.current_line() == _line_at(cursor)

    @given(source=source_text, ops=moves)
    @settings(max_examples=200)
    def test_offset_is_character_boundary(self, source: str, ops: list[bool]) -> None:
        encoded = source.encode("utf-8")
        cursor = Cursor(source)
        for forward in ops:
            if forward:
                cursor.advance()
            else:
                cursor.retreat()
            # Decoding a prefix that splits a character would raise.
            assert encoded[: cursor.offset].decode("utf-8") == source[: cursor.index]


class TestPeekAgreement:
    """peek and lookback agree with the moves they predict."""

    @given(source=source_text, ops=moves)
    def test_peek_predicts_advance(self, source: str, ops: list[bool]) -> None:
        cursor = Cursor(source)
        for forward in ops:
            if forward:
                expected = cursor.peek()
                assert cursor.peek() == expected
                assert cursor.advance() == expected
            else:
                expected = cursor.lookback()
                assert cursor.lookback() == expected
                assert cursor.retreat() == expected

    @given(source=source_text, steps=st.integers(min_value=0, max_value=50))
    def test_peek_is_idempotent(self, source: str, steps: int) -> None:
        cursor = Cursor(source)
        for _ in range(steps):
            cursor.advance()
        state = (cursor.offset, cursor.line, cursor.index)
        first = (cursor.peek(), cursor.lookback())
        for _ in range(5):
            assert (cursor.peek(), cursor.lookback()) == first
        assert (cursor.offset, cursor.line, cursor.index) == state


class TestViewProperties:
    """Views enumerate exactly the words and lines they should."""

    @given(source=wordy_text)
    def test_words_match_split_when_no_leading_whitespace(self, source: str) -> None:
        stripped = source.lstrip()
        words = [w.rstrip() for _, w in Cursor(stripped).words()]
        assert words == stripped.split()

    @given(source=wordy_text)
    def test_word_offsets_point_at_words(self, source: str) -> None:
        encoded = source.encode("utf-8")
        for offset, word in Cursor(source).words():
            assert encoded[offset:].decode("utf-8").startswith(word)

    @given(lines=st.lists(st.text(alphabet="xyz \xe9", min_size=1, max_size=8), max_size=10))
    def test_lines_match_nonblank_lines(self, lines: list[str]) -> None:
        source = "\n".join(lines)
        items = list(Cursor(source).lines())
        assert [n for n, _ in items] == list(range(len(lines)))
        assert "".join(text for _, text in items) == source
