"""Column widths of individual characters.

Classification comes from the East Asian Width and zero-width range
tables that ship with wcwidth:

- Wide (W) and Fullwidth (F) characters: 2 columns
- Combining marks, format and control characters: 0 columns (tab: 1)
- Everything else, Ambiguous included: 1 column
"""

import wcwidth


def char_width(char: str) -> int:
    """Get display width of a single character (code point)."""
    if len(char) != 1:
        return sum(char_width(c) for c in char)

    if char == "\t":
        return 1

    width = wcwidth.wcwidth(char)
    # wcwidth returns -1 for non-printable characters
    if width < 0:
        return 0
    return width


def plain_width(text: str) -> int:
    """Width of text that is known to contain no escape sequences."""
    return sum(char_width(c) for c in text)
