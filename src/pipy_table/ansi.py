"""Escape-sequence scanning.

Splits styled text into zero-width escape sequences (``Code``) and
visible characters (``Glyph``). Only the shape of a Control Sequence
Introducer span is recognized here; what an SGR sequence means is
decided in :mod:`pipy_table.style`.
"""

import re
from dataclasses import dataclass
from typing import Iterator, Union

from .width import char_width

# ESC [ <parameter bytes> <intermediate bytes> <final byte>
CSI_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")

RESET = "\x1b[0m"


@dataclass(frozen=True)
class Code:
    """An escape sequence, copied verbatim. Occupies no columns."""

    text: str

    @property
    def width(self) -> int:
        return 0


@dataclass(frozen=True)
class Glyph:
    """One visible character and the columns it occupies (0, 1 or 2)."""

    char: str
    width: int

    @property
    def text(self) -> str:
        return self.char


Token = Union[Code, Glyph]


def iter_sequences(text: str) -> Iterator[tuple[str, bool]]:
    """Yield ``(segment, is_code)`` pairs covering text exactly.

    Example:
        >>> list(iter_sequences("a\\x1b[31mb"))
        [('a', False), ('\\x1b[31m', True), ('b', False)]
    """
    pos = 0
    for match in CSI_RE.finditer(text):
        if match.start() > pos:
            yield text[pos : match.start()], False
        yield match.group(0), True
        pos = match.end()
    if pos < len(text):
        yield text[pos:], False


def tokenize(text: str) -> list[Token]:
    """Split text into Code and Glyph tokens.

    Lossless: ``join_tokens(tokenize(s)) == s`` for every string. An
    unterminated sequence such as ``"\\x1b[31"`` is not a Code; its
    characters come back as ordinary glyphs.
    """
    tokens: list[Token] = []
    for segment, is_code in iter_sequences(text):
        if is_code:
            tokens.append(Code(segment))
        else:
            tokens.extend(Glyph(char, char_width(char)) for char in segment)
    return tokens


def join_tokens(tokens: list[Token]) -> str:
    """Reassemble tokens into a string."""
    return "".join(token.text for token in tokens)


def strip_ansi(text: str) -> str:
    """Remove every escape sequence from text."""
    return CSI_RE.sub("", text)


def is_sgr(code: str) -> bool:
    """Check if an escape sequence is a Select Graphic Rendition (ends in 'm')."""
    return code.startswith("\x1b[") and code.endswith("m")


def sgr_params(code: str) -> list[int]:
    """Parse the numeric parameters of an SGR sequence.

    Empty parameters count as 0, so both ``ESC[m`` and ``ESC[;m`` read as
    resets. Returns an empty list when a parameter is not numeric
    (private-mode sequences such as ``ESC[?25m``).
    """
    body = code[2:-1]
    if not body:
        return [0]
    params = []
    for part in body.replace(":", ";").split(";"):
        if not part:
            params.append(0)
        elif part.isdigit():
            params.append(int(part))
        else:
            return []
    return params
