"""Text utilities for terminal display.

Every function here counts terminal columns rather than code points:
escape sequences occupy no columns and CJK characters occupy two.
"""

from dataclasses import dataclass, field
from typing import Literal

from .ansi import Code, Glyph, Token, tokenize
from .errors import OptionsError, check_width
from .style import StyleState, colorize_lines, parse_sgr

Alignment = Literal["left", "center", "right"]
ALIGNMENTS: tuple[str, ...] = ("left", "center", "right")

DEFAULT_ELLIPSIS = "…"


def visible_width(text: str) -> int:
    """Calculate visible width of text in terminal columns.

    Accounts for:
    - Wide characters (CJK) = 2 columns
    - Zero-width characters = 0 columns
    - ANSI escape sequences = 0 columns
    - Normal characters = 1 column

    Text spanning several lines measures as its widest line.

    Args:
        text: Text to measure

    Returns:
        Width in terminal columns
    """
    widest = 0
    width = 0
    for token in tokenize(text):
        if isinstance(token, Glyph):
            if token.char == "\n":
                widest = max(widest, width)
                width = 0
            else:
                width += token.width
    return max(widest, width)


def repeat(char: str, count: int) -> str:
    """Repeat a fill string count times; zero or negative counts give ""."""
    if count <= 0:
        return ""
    return char * count


def pad(text: str, target_width: int, fill: str = " ", align: Alignment = "left") -> str:
    """Pad text with fill characters up to target_width columns.

    Text already at least target_width wide is returned unchanged; use
    :func:`truncate` to shorten it.

    Center alignment puts the extra column on the right when the
    deficit is odd:

        >>> pad("hello", 8, " ", "center")
        ' hello  '

    Raises:
        InvalidWidthError: If target_width is not a non-negative int.
        OptionsError: If align is not left, center or right.
    """
    check_width(target_width, "target_width")
    if align not in ALIGNMENTS:
        raise OptionsError(f"align must be one of {', '.join(ALIGNMENTS)}, got {align!r}")

    deficit = max(0, target_width - visible_width(text))
    if align == "right":
        return repeat(fill, deficit) + text
    elif align == "center":
        left = deficit // 2
        return repeat(fill, left) + text + repeat(fill, deficit - left)
    else:  # left
        return text + repeat(fill, deficit)


def truncate(text: str, target_width: int, ellipsis: str = DEFAULT_ELLIPSIS) -> str:
    """Truncate text to fit within target_width columns.

    Escape sequences before the cut stay in place. A wide character that
    would straddle the cut is dropped whole, so the result may be one
    column narrower than target_width. Styles still open at the cut are
    closed before the ellipsis is appended.

    Args:
        text: Text to truncate
        target_width: Maximum visible width
        ellipsis: String to append when truncated

    Returns:
        Truncated text with ellipsis if needed

    Example:
        >>> truncate("goodnight moon", 8)
        'goodnig…'
    """
    check_width(target_width, "target_width")
    if visible_width(text) <= target_width:
        return text

    ellipsis_width = visible_width(ellipsis)
    if ellipsis_width > target_width:
        return _cut(tokenize(ellipsis), target_width)[0]

    budget = target_width - ellipsis_width
    kept, state = _cut(tokenize(text), budget)
    return kept + state.close_codes() + ellipsis


def _cut(tokens: list[Token], budget: int) -> tuple[str, StyleState]:
    """Keep tokens while they fit in budget columns.

    Stops at the first glyph that does not fit, and at the first code once
    the budget is used up exactly.
    """
    parts = []
    used = 0
    state = StyleState()
    for token in tokens:
        if isinstance(token, Code):
            if used >= budget:
                break
            state = parse_sgr(token.text, state)
        elif used + token.width > budget:
            break
        else:
            used += token.width
        parts.append(token.text)
    return "".join(parts), state


# =============================================================================
# Word wrapping
# =============================================================================


@dataclass
class Word:
    """A run of non-whitespace glyphs with the codes that travel with it."""

    tokens: list[Token] = field(default_factory=list)
    gap: str = ""  # Whitespace separating this word from the previous one
    gap_width: int = 0

    @property
    def text(self) -> str:
        return "".join(token.text for token in self.tokens)

    @property
    def width(self) -> int:
        return sum(token.width for token in self.tokens)


def split_words(segment: str) -> tuple[list[Word], str]:
    """Split one line of text into words.

    Codes inside a word or right after it belong to that word. Codes
    inside a whitespace run move forward to the next word, so they are
    never lost when the whitespace is dropped at a break.

    Returns:
        (words, trailing codes that had no following word)
    """
    words: list[Word] = []
    pending: list[Token] = []  # Codes waiting for the next word
    gap: list[str] = []
    current: Word | None = None

    for token in tokenize(segment):
        if isinstance(token, Code):
            if current is not None:
                current.tokens.append(token)
            else:
                pending.append(token)
        elif token.char.isspace():
            current = None
            gap.append(token.char)
        else:
            if current is None:
                gap_text = "".join(gap) if words else ""
                current = Word(tokens=pending, gap=gap_text, gap_width=visible_width(gap_text))
                words.append(current)
                pending = []
                gap = []
            current.tokens.append(token)

    trailing = "".join(token.text for token in pending)
    return words, trailing


def _split_long_word(word: Word, width: int) -> list[Word]:
    """Break a word into pieces no wider than width, at glyph boundaries."""
    pieces: list[Word] = []
    piece = Word(gap=word.gap, gap_width=word.gap_width)
    used = 0
    for token in word.tokens:
        # A piece always keeps at least one glyph, even one wider than width
        if isinstance(token, Glyph) and token.width and used and used + token.width > width:
            pieces.append(piece)
            piece = Word()
            used = 0
        piece.tokens.append(token)
        used += token.width
    pieces.append(piece)
    return pieces


def _wrap_segment(width: int, segment: str, break_words: bool) -> list[str]:
    words, trailing = split_words(segment)
    if break_words:
        words = [piece for word in words for piece in _split_long_word(word, width)]

    lines: list[str] = []
    line: list[str] = []
    line_width = 0
    for word in words:
        if not line:
            line = [word.text]
            line_width = word.width
        elif line_width + word.gap_width + word.width <= width and word.gap:
            line.extend((word.gap, word.text))
            line_width += word.gap_width + word.width
        else:
            lines.append("".join(line))
            line = [word.text]
            line_width = word.width

    if line or trailing or not lines:
        lines.append("".join(line) + trailing)
    return lines


def word_wrap(width: int, text: str) -> list[str]:
    """Wrap text at word boundaries.

    Each newline forces a break. A word wider than width gets a line of
    its own and is not split. Lines never start with whitespace, and
    trailing whitespace does not add an empty line.

    Args:
        width: Maximum visible width per line
        text: Text to wrap, possibly styled

    Returns:
        Wrapped lines

    Example:
        >>> word_wrap(7, "disestablishment is a multiplicity")
        ['disestablishment', 'is a', 'multiplicity']
    """
    check_width(width)
    lines: list[str] = []
    for segment in text.split("\n"):
        lines.extend(_wrap_segment(width, segment, break_words=False))
    return lines


def hard_wrap(width: int, text: str) -> list[str]:
    """Wrap like :func:`word_wrap`, but split words wider than width.

    Splits fall between glyphs, never inside an escape sequence or a wide
    character.
    """
    check_width(width)
    if width == 0:
        return word_wrap(width, text)
    lines: list[str] = []
    for segment in text.split("\n"):
        lines.extend(_wrap_segment(width, segment, break_words=True))
    return lines


def wrap_text(width: int, text: str, word_boundary: bool = True) -> list[str]:
    """Wrap text and re-open styles on every resulting line."""
    lines = word_wrap(width, text) if word_boundary else hard_wrap(width, text)
    return colorize_lines(lines)
