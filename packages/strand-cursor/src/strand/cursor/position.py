"""Position snapshots for diagnostics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """A point in the text, as seen by a :class:`~strand.cursor.Cursor`.

    All fields are zero-based. ``column`` counts characters since the last
    newline and ``display_column`` counts terminal cells over the same span.
    """

    offset: int = 0
    index: int = 0
    line: int = 0
    column: int = 0
    display_column: int = 0

    def __str__(self) -> str:
        return f"{self.line + 1}:{self.column + 1}"
