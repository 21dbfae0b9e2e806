"""SGR style tracking and line re-colorizing.

A ``StyleState`` is the parsed form of every SGR code seen so far in a
stream: foreground, background and a set of attributes. It is rebuilt
from codes rather than kept as raw text, so re-opening or closing a style
at a line break emits exactly the codes that are needed.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Sequence, cast

from rich.color import ColorSystem
from rich.errors import StyleSyntaxError
from rich.style import Style

from .ansi import is_sgr, iter_sequences, sgr_params
from .errors import OptionsError


class ColorKind(Enum):
    """How a color was selected."""

    DEFAULT = "default"
    BASIC = "basic"  # 16-color palette, aixterm brights included
    EXTENDED = "extended"  # 256-color palette
    TRUECOLOR = "truecolor"  # 24-bit RGB


@dataclass(frozen=True)
class Color:
    """A foreground or background color.

    ``value`` is the palette index for BASIC (0-15) and EXTENDED (0-255)
    colors, and an ``(r, g, b)`` tuple for TRUECOLOR.
    """

    kind: ColorKind = ColorKind.DEFAULT
    value: int | tuple[int, int, int] | None = None

    @property
    def is_default(self) -> bool:
        return self.kind is ColorKind.DEFAULT

    def sgr(self, background: bool = False) -> str:
        """SGR parameter string selecting this color."""
        if self.kind is ColorKind.BASIC:
            index = cast(int, self.value)
            if index < 8:
                return str((40 if background else 30) + index)
            return str((100 if background else 90) + index - 8)
        if self.kind is ColorKind.EXTENDED:
            return f"{48 if background else 38};5;{self.value}"
        if self.kind is ColorKind.TRUECOLOR:
            r, g, b = cast(tuple[int, int, int], self.value)
            return f"{48 if background else 38};2;{r};{g};{b}"
        return "49" if background else "39"


DEFAULT_COLOR = Color()


class Attribute(Enum):
    """Independent text attributes with their on/off SGR codes."""

    BOLD = (1, 22)
    DIM = (2, 22)
    ITALIC = (3, 23)
    UNDERLINE = (4, 24)
    BLINK = (5, 25)
    INVERSE = (7, 27)
    HIDDEN = (8, 28)
    STRIKETHROUGH = (9, 29)

    @property
    def on(self) -> int:
        return self.value[0]

    @property
    def off(self) -> int:
        return self.value[1]


_ATTR_ON = {attr.on: attr for attr in Attribute}
_ATTR_OFF: dict[int, frozenset[Attribute]] = {}
for _attr in Attribute:
    _ATTR_OFF[_attr.off] = _ATTR_OFF.get(_attr.off, frozenset()) | {_attr}


@dataclass(frozen=True)
class StyleState:
    """Active SGR style at one point in a token stream."""

    foreground: Color = DEFAULT_COLOR
    background: Color = DEFAULT_COLOR
    attributes: frozenset[Attribute] = field(default_factory=frozenset)

    @property
    def is_default(self) -> bool:
        return self.foreground.is_default and self.background.is_default and not self.attributes

    def apply(self, params: Sequence[int]) -> "StyleState":
        """Return the state after one SGR parameter list.

        Examples:
            >>> StyleState().apply([31]).foreground
            Color(kind=<ColorKind.BASIC: 'basic'>, value=1)
            >>> StyleState().apply([1, 4]).apply([0]).is_default
            True
        """
        state = self
        i = 0
        while i < len(params):
            p = params[i]
            if p == 0:
                state = StyleState()
            elif p in _ATTR_ON:
                state = replace(state, attributes=state.attributes | {_ATTR_ON[p]})
            elif p in _ATTR_OFF:
                state = replace(state, attributes=state.attributes - _ATTR_OFF[p])
            elif 30 <= p <= 37:
                state = replace(state, foreground=Color(ColorKind.BASIC, p - 30))
            elif 90 <= p <= 97:
                state = replace(state, foreground=Color(ColorKind.BASIC, p - 90 + 8))
            elif p == 39:
                state = replace(state, foreground=DEFAULT_COLOR)
            elif 40 <= p <= 47:
                state = replace(state, background=Color(ColorKind.BASIC, p - 40))
            elif 100 <= p <= 107:
                state = replace(state, background=Color(ColorKind.BASIC, p - 100 + 8))
            elif p == 49:
                state = replace(state, background=DEFAULT_COLOR)
            elif p in (38, 48):
                color, consumed = _extended_color(params[i + 1 :])
                if color is None:
                    # Malformed extended color; ignore the rest of the list
                    break
                if p == 38:
                    state = replace(state, foreground=color)
                else:
                    state = replace(state, background=color)
                i += consumed
            i += 1
        return state

    def open_codes(self) -> str:
        """Escape sequences that establish this state from the default."""
        codes = []
        if not self.foreground.is_default:
            codes.append(_sgr(self.foreground.sgr()))
        if not self.background.is_default:
            codes.append(_sgr(self.background.sgr(background=True)))
        for attr in sorted(self.attributes, key=lambda a: a.on):
            codes.append(_sgr(str(attr.on)))
        return "".join(codes)

    def close_codes(self) -> str:
        """Escape sequences that return this state to the default.

        Attributes are switched off individually, then the background and
        foreground; no full reset is emitted.
        """
        codes = []
        for off in sorted({attr.off for attr in self.attributes}):
            codes.append(_sgr(str(off)))
        if not self.background.is_default:
            codes.append(_sgr("49"))
        if not self.foreground.is_default:
            codes.append(_sgr("39"))
        return "".join(codes)


def _sgr(params: str) -> str:
    return f"\x1b[{params}m"


def _extended_color(rest: Sequence[int]) -> tuple[Color | None, int]:
    """Parse the tail of a 38/48 code. Returns (color, parameters consumed)."""
    if len(rest) >= 2 and rest[0] == 5:
        return Color(ColorKind.EXTENDED, rest[1]), 2
    if len(rest) >= 4 and rest[0] == 2:
        return Color(ColorKind.TRUECOLOR, (rest[1], rest[2], rest[3])), 4
    return None, 0


def parse_sgr(code: str, state: StyleState | None = None) -> StyleState:
    """Apply one escape sequence to state. Non-SGR sequences leave it unchanged."""
    state = state or StyleState()
    if not is_sgr(code):
        return state
    return state.apply(sgr_params(code))


def state_after(text: str, state: StyleState | None = None) -> StyleState:
    """Style in effect at the end of text, starting from state."""
    state = state or StyleState()
    for segment, is_code in iter_sequences(text):
        if is_code:
            state = parse_sgr(segment, state)
    return state


def colorize_lines(lines: Sequence[str]) -> list[str]:
    """Make each line independently styled.

    The style active at the end of one line is re-opened at the start of
    the next, and every line that ends with a style still open is closed
    so the style cannot leak into whatever is printed beside it.

    Example:
        >>> colorize_lines(["\\x1b[31mHello", "Hi\\x1b[39m"])
        ['\\x1b[31mHello\\x1b[39m', '\\x1b[31mHi\\x1b[39m']
    """
    result = []
    state = StyleState()
    for line in lines:
        prefix = state.open_codes()
        state = state_after(line, state)
        result.append(prefix + line + state.close_codes())
    return result


# =============================================================================
# Named styles (header and border colors)
# =============================================================================

STYLE_ALIASES = {
    "grey": "bright_black",
    "gray": "bright_black",
    "inverse": "reverse",
    "underlined": "underline",
    "strikethrough": "strike",
}


def _rich_word(name: str) -> str:
    word = name.strip().lower()
    if word.startswith("bg_"):
        return "on " + STYLE_ALIASES.get(word[3:], word[3:])
    return STYLE_ALIASES.get(word, word)


def resolve_style(names: Sequence[str]) -> Style:
    """Resolve style tokens such as ``["bold", "red", "bg_blue"]`` to a rich Style.

    Raises:
        OptionsError: If names is not a list of strings or a name is unknown.
    """
    if isinstance(names, str) or not isinstance(names, (list, tuple)):
        raise OptionsError(f"style must be a list of names, got {type(names).__name__}")
    words = []
    for name in names:
        if not isinstance(name, str):
            raise OptionsError(f"style names must be strings, got {name!r}")
        words.append(_rich_word(name))
    try:
        return Style.parse(" ".join(words))
    except StyleSyntaxError as e:
        raise OptionsError(f"unknown style in {list(names)!r}: {e}") from e


def stylize(text: str, names: Sequence[str]) -> str:
    """Wrap text in the SGR codes for the named styles.

    An empty list of names leaves text untouched.

    Example:
        >>> stylize("a", ["red"])
        '\\x1b[31ma\\x1b[0m'
    """
    style = resolve_style(names)
    if not names or not text:
        return text
    return style.render(text, color_system=ColorSystem.TRUECOLOR)
