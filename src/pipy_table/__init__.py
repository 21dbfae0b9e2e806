"""
pipy-table - ANSI and wide-character aware tables for the terminal.

Example:
    from pipy_table import Table, truncate, visible_width, word_wrap

    table = Table(head=["Name", "Notes"], col_widths=[10, 20], word_wrap=True)
    table.push(["漢字", "\\x1b[31mstyled text wraps and keeps its color\\x1b[0m"])
    print(table)

    visible_width("\\x1b[31m中文\\x1b[0m")  # 4
    truncate("goodnight moon", 8)         # 'goodnig…'
    word_wrap(10, "Hello, how are you today?")
"""

__version__ = "0.1.0"

# Errors
from .errors import (
    TableError,
    InvalidWidthError,
    OptionsError,
)

# Character widths
from .width import char_width

# Escape-sequence scanning
from .ansi import (
    Code,
    Glyph,
    Token,
    tokenize,
    join_tokens,
    strip_ansi,
)

# Style state and re-colorizing
from .style import (
    Attribute,
    Color,
    ColorKind,
    StyleState,
    colorize_lines,
    parse_sgr,
    state_after,
    stylize,
)

# Text utilities
from .utils import (
    Alignment,
    visible_width,
    repeat,
    pad,
    truncate,
    word_wrap,
    hard_wrap,
    wrap_text,
)

# Options
from .options import (
    TableChars,
    TableStyle,
    TableOptions,
    default_options,
    deep_merge,
    merge_options,
    options_from_dict,
)

# Tables
from .table import Table, render_table

__all__ = [
    # Version
    "__version__",
    # Errors
    "TableError",
    "InvalidWidthError",
    "OptionsError",
    # Widths
    "char_width",
    # Scanning
    "Code",
    "Glyph",
    "Token",
    "tokenize",
    "join_tokens",
    "strip_ansi",
    # Style
    "Attribute",
    "Color",
    "ColorKind",
    "StyleState",
    "colorize_lines",
    "parse_sgr",
    "state_after",
    "stylize",
    # Utils
    "Alignment",
    "visible_width",
    "repeat",
    "pad",
    "truncate",
    "word_wrap",
    "hard_wrap",
    "wrap_text",
    # Options
    "TableChars",
    "TableStyle",
    "TableOptions",
    "default_options",
    "deep_merge",
    "merge_options",
    "options_from_dict",
    # Tables
    "Table",
    "render_table",
]
