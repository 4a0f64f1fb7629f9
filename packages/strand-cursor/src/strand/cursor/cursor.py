"""Bidirectional cursor over immutable text.

A :class:`Cursor` walks a string one Unicode scalar value at a time in
either direction. It reports positions as UTF-8 byte offsets and keeps a
running count of the newlines behind it, so tokenizers and line-oriented
parsers can step back and forth without losing track of where they are.

Forward scans (``scan_word``, ``scan_line``, ``skip_whitespace``) are built
from repeated ``advance`` calls; the views in :mod:`strand.cursor.views`
are built from the scans.
"""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass
from typing import Iterator

from strand.cursor.position import Position
from strand.cursor.utils import display_width, is_newline_char, is_whitespace_char, utf8_width
from strand.cursor.views import LineView, WordLineView, WordView

logger = logging.getLogger(__name__)

TextLike = str | bytes | bytearray | memoryview


class CursorBusyError(RuntimeError):
    """Raised when a cursor is moved directly while a view holds it."""


@dataclass
class CursorOptions:
    """Options for a :class:`Cursor`."""

    tab_width: int = 3

    def __post_init__(self) -> None:
        if self.tab_width < 0:
            raise ValueError(f"tab_width must be >= 0, got {self.tab_width}")


def _as_text(data: TextLike) -> tuple[str, int]:
    """Return *data* as ``str`` together with its UTF-8 byte length."""
    if isinstance(data, str):
        # Encoding is also the validation step: lone surrogates raise here.
        return data, len(data.encode("utf-8"))
    if isinstance(data, (bytes, bytearray, memoryview)):
        raw = bytes(data)
        return raw.decode("utf-8"), len(raw)
    raise TypeError(f"expected str or bytes-like text, got {type(data).__name__}")


class Cursor:
    """A single traversal position that moves forward and backward.

    ``offset`` is a UTF-8 byte offset and always sits on a character
    boundary. ``line`` is the number of ``"\\n"`` characters before
    ``offset``. Both are kept in step by every move.

    Example:
        >>> cursor = Cursor("a\\nb")
        >>> cursor.advance(), cursor.advance()
        ((0, 'a'), (1, '\\n'))
        >>> cursor.line
        1
        >>> cursor.retreat()
        (1, '\\n')
        >>> cursor.line
        0
    """

    def __init__(self, data: TextLike, options: CursorOptions | None = None) -> None:
        self._data, self._size = _as_text(data)
        self._options = options or CursorOptions()
        self._offset = 0
        self._line = 0
        # Forward decode state: code point index of the character at offset.
        self._index = 0
        # Weak so that a view dropped part-way stops holding the cursor.
        self._holder: weakref.ref[object] | None = None

    # -- accessors ---------------------------------------------------------

    @property
    def data(self) -> str:
        return self._data

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def index(self) -> int:
        return self._index

    @property
    def line(self) -> int:
        return self._line

    @property
    def options(self) -> CursorOptions:
        return self._options

    @property
    def at_start(self) -> bool:
        return self._index == 0

    @property
    def at_end(self) -> bool:
        return self._index >= len(self._data)

    @property
    def borrowed(self) -> bool:
        """``True`` while a view holds this cursor."""
        return self._active_holder() is not None

    def current_line(self) -> int:
        """Return the number of completed lines behind the cursor."""
        return self._line

    def position(self) -> Position:
        """Return a snapshot of the current position with column information."""
        line_start = self._data.rfind("\n", 0, self._index) + 1
        span = self._data[line_start : self._index]
        return Position(
            offset=self._offset,
            index=self._index,
            line=self._line,
            column=len(span),
            display_column=display_width(span, self._options.tab_width),
        )

    # -- lookahead / lookbehind -------------------------------------------

    def peek(self) -> tuple[int, str] | None:
        """Return ``(offset, char)`` for the next character without moving."""
        if self._index >= len(self._data):
            return None
        return self._offset, self._data[self._index]

    def lookback(self) -> tuple[int, str] | None:
        """Return ``(offset, char)`` for the previous character without moving."""
        if self._index == 0:
            return None
        char = self._data[self._index - 1]
        return self._offset - utf8_width(char), char

    peek_backward = lookback

    def peek_char(self) -> str | None:
        item = self.peek()
        return item[1] if item else None

    def lookback_char(self) -> str | None:
        item = self.lookback()
        return item[1] if item else None

    # -- movement ----------------------------------------------------------

    def advance(self) -> tuple[int, str] | None:
        """Step over the next character.

        Returns ``(offset_before_step, char)``, or ``None`` at the end.
        """
        self._check_free("advance")
        return self._advance()

    def retreat(self) -> tuple[int, str] | None:
        """Step back over the previous character.

        Returns ``(offset_after_step, char)``, or ``None`` at the start.
        """
        self._check_free("retreat")
        if self._index == 0:
            return None
        self._index -= 1
        char = self._data[self._index]
        self._offset -= utf8_width(char)
        if is_newline_char(char):
            self._line -= 1
        return self._offset, char

    def next_char(self) -> str | None:
        item = self.advance()
        return item[1] if item else None

    def prev_char(self) -> str | None:
        item = self.retreat()
        return item[1] if item else None

    def __iter__(self) -> Iterator[tuple[int, str]]:
        return self

    def __next__(self) -> tuple[int, str]:
        item = self.advance()
        if item is None:
            raise StopIteration
        return item

    # -- scanning ----------------------------------------------------------

    def scan_word(self) -> tuple[int, str] | None:
        """Consume non-whitespace characters and return ``(start, slice)``.

        The slice ends with the whitespace character that stopped the scan,
        which is left unconsumed. At the end of the text nothing is
        appended. Returns ``None`` if no character was consumed.
        """
        self._check_free("scan_word")
        return self._scan_word()

    def scan_line(self) -> tuple[int, str] | None:
        """Consume up to and including the next newline; return ``(start, slice)``.

        Returns ``None`` if the cursor sits on a newline or at the end.
        """
        self._check_free("scan_line")
        return self._scan_line()

    def skip_whitespace(self) -> None:
        """Advance past any whitespace."""
        self._check_free("skip_whitespace")
        self._skip_whitespace()

    # -- views -------------------------------------------------------------

    def words(self) -> WordView:
        """Return a single-pass view yielding ``(offset, word)``."""
        return WordView(self)

    def words_with_lines(self) -> WordLineView:
        """Return a single-pass view yielding ``(offset, line, word)``."""
        return WordLineView(self)

    def lines(self) -> LineView:
        """Return a single-pass view yielding ``(line, text)``."""
        return LineView(self)

    # -- copying -----------------------------------------------------------

    def copy(self) -> Cursor:
        """Return an independent cursor at the same position."""
        clone = Cursor.__new__(Cursor)
        clone.__dict__.update(self.__dict__)
        clone._holder = None
        return clone

    __copy__ = copy

    def __repr__(self) -> str:
        return f"Cursor(offset={self._offset}, line={self._line}, size={self._size})"

    # -- internals shared with views ---------------------------------------

    def _advance(self) -> tuple[int, str] | None:
        if self._index >= len(self._data):
            return None
        char = self._data[self._index]
        start = self._offset
        self._index += 1
        self._offset += utf8_width(char)
        if is_newline_char(char):
            self._line += 1
        return start, char

    def _scan_word(self) -> tuple[int, str] | None:
        start_offset, start_index = self._offset, self._index
        char = self.peek_char()
        while char is not None and not is_whitespace_char(char):
            self._advance()
            char = self.peek_char()
        if self._index == start_index:
            return None
        # Include the delimiter; nothing follows at end of text.
        end = self._index if char is None else self._index + 1
        return start_offset, self._data[start_index:end]

    def _scan_line(self) -> tuple[int, str] | None:
        start_offset, start_index = self._offset, self._index
        char = self.peek_char()
        while char is not None and not is_newline_char(char):
            self._advance()
            char = self.peek_char()
        if self._index == start_index:
            return None
        if char is not None:
            self._advance()
        return start_offset, self._data[start_index : self._index]

    def _skip_whitespace(self) -> None:
        char = self.peek_char()
        while char is not None and is_whitespace_char(char):
            self._advance()
            char = self.peek_char()

    def _active_holder(self) -> object | None:
        if self._holder is None:
            return None
        holder = self._holder()
        if holder is None:
            self._holder = None
            logger.debug("view dropped; cursor free at offset %d", self._offset)
        return holder

    def _acquire(self, holder: object) -> None:
        self._check_free(f"open {type(holder).__name__}")
        self._holder = weakref.ref(holder)
        logger.debug("%s acquired cursor at offset %d", type(holder).__name__, self._offset)

    def _release(self, holder: object) -> None:
        if self._active_holder() is holder:
            self._holder = None
            logger.debug("%s released cursor at offset %d", type(holder).__name__, self._offset)

    def _check_free(self, operation: str) -> None:
        holder = self._active_holder()
        if holder is not None:
            logger.debug("rejected %s: cursor held by %s", operation, type(holder).__name__)
            raise CursorBusyError(
                f"cannot {operation}: cursor is held by an active {type(holder).__name__}"
            )
