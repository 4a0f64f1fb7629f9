"""Character utilities: classification predicates and width measurement.

Provides the whitespace/newline predicates the cursor scans with, the
UTF-8 width of a single scalar value, and grapheme-aware terminal widths
used for display columns.
"""

from __future__ import annotations

import grapheme
import wcwidth as _wcwidth

NEWLINE = "\n"

# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def is_newline_char(char: str) -> bool:
    """Return ``True`` if *char* terminates a line."""
    return char == NEWLINE


def is_whitespace_char(char: str) -> bool:
    """Return ``True`` if *char* has the Unicode ``White_Space`` property.

    ``str.isspace`` also accepts the information separators U+001C..U+001F,
    which are not ``White_Space``; those are excluded.
    """
    return char.isspace() and not ("\x1c" <= char <= "\x1f")


# ---------------------------------------------------------------------------
# Encoded width
# ---------------------------------------------------------------------------


def utf8_width(char: str) -> int:
    """Return the number of bytes *char* occupies when encoded as UTF-8."""
    cp = ord(char)
    if cp < 0x80:
        return 1
    if cp < 0x800:
        return 2
    if cp < 0x10000:
        return 3
    return 4


# ---------------------------------------------------------------------------
# Display width
# ---------------------------------------------------------------------------

EMOJI_PRESENTATION = "\ufe0f"


def cluster_width(cluster: str) -> int:
    """Return the terminal cells one grapheme cluster occupies.

    A cluster is as wide as its widest scalar value, so combining marks and
    zero-width joiners add nothing and a joined emoji sequence stays two
    cells. An emoji presentation selector widens its base to two cells.
    Control characters occupy no cells.
    """
    if EMOJI_PRESENTATION in cluster:
        return 2
    return max([_wcwidth.wcwidth(ch) for ch in cluster] + [0])


def display_width(text: str, tab_width: int = 3) -> int:
    """Return the terminal cells *text* occupies, tabs counting *tab_width*."""
    if text.isascii() and text.isprintable():
        return len(text)
    width = 0
    for cluster in grapheme.graphemes(text):
        width += tab_width if cluster == "\t" else cluster_width(cluster)
    return width
