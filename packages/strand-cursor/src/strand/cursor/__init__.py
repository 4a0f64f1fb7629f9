"""strand-cursor: bidirectional cursor over immutable text."""

# Cursor and its options
from strand.cursor.cursor import Cursor, CursorBusyError, CursorOptions, TextLike

# Position snapshots
from strand.cursor.position import Position

# Character utilities
from strand.cursor.utils import (
    cluster_width,
    display_width,
    is_newline_char,
    is_whitespace_char,
    utf8_width,
)

# Views
from strand.cursor.views import LineView, WordLineView, WordView

__all__ = [
    # Cursor
    "Cursor",
    "CursorBusyError",
    "CursorOptions",
    "TextLike",
    # Position
    "Position",
    # Utilities
    "cluster_width",
    "display_width",
    "is_newline_char",
    "is_whitespace_char",
    "utf8_width",
    # Views
    "LineView",
    "WordLineView",
    "WordView",
]
