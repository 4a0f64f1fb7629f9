"""Single-pass views over a cursor.

Each view holds its cursor exclusively from construction until it is
exhausted, closed or dropped; direct moves on the cursor raise
:class:`~strand.cursor.cursor.CursorBusyError` in the meantime.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from types import TracebackType

    from strand.cursor.cursor import Cursor

T = TypeVar("T")


class _CursorView(Generic[T]):
    """Forward-only iterator driving a borrowed cursor."""

    def __init__(self, cursor: Cursor) -> None:
        cursor._acquire(self)
        self._cursor: Cursor | None = cursor

    @property
    def closed(self) -> bool:
        return self._cursor is None

    def close(self) -> None:
        """Stop the view and hand the cursor back."""
        if self._cursor is not None:
            self._cursor._release(self)
            self._cursor = None

    def _step(self, cursor: Cursor) -> T | None:
        raise NotImplementedError

    def __iter__(self) -> _CursorView[T]:
        return self

    def __next__(self) -> T:
        if self._cursor is None:
            raise StopIteration
        item = self._step(self._cursor)
        if item is None:
            self.close()
            raise StopIteration
        return item

    def __enter__(self) -> _CursorView[T]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class WordView(_CursorView[tuple[int, str]]):
    """Yields ``(offset, word)`` for each whitespace-separated word."""

    def _step(self, cursor: Cursor) -> tuple[int, str] | None:
        item = cursor._scan_word()
        if item is None:
            return None
        cursor._skip_whitespace()
        return item


class WordLineView(_CursorView[tuple[int, int, str]]):
    """Yields ``(offset, line, word)``; ``line`` is read before the word is scanned."""

    def _step(self, cursor: Cursor) -> tuple[int, int, str] | None:
        line = cursor.line
        item = cursor._scan_word()
        if item is None:
            return None
        cursor._skip_whitespace()
        offset, word = item
        return offset, line, word


class LineView(_CursorView[tuple[int, str]]):
    """Yields ``(line, text)`` for each line, newline included."""

    def _step(self, cursor: Cursor) -> tuple[int, str] | None:
        line = cursor.line
        item = cursor._scan_line()
        if item is None:
            return None
        return line, item[1]
