"""Border-drawn tables built on the text utilities.

Example:
    >>> table = Table(head=["a", "b"], style={"head": [], "border": []})
    >>> table.push(["c", "d"])
    >>> print(table)
    ┌───┬───┐
    │ a │ b │
    ├───┼───┤
    │ c │ d │
    └───┴───┘
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from .options import TableOptions, merge_options, options_from_dict
from .style import colorize_lines, stylize
from .utils import pad, repeat, truncate, visible_width, wrap_text

logger = logging.getLogger(__name__)


@dataclass
class Row:
    """One table row after normalization."""

    cells: list[str]
    header_cells: int = 0  # Leading cells styled like the header
    is_head: bool = False


def _cell_text(cell: Any) -> str:
    if cell is None:
        return ""
    return str(cell)


def normalize_rows(row: Any) -> list[Row]:
    """Turn one pushed row into Rows.

    - Sequences are plain rows.
    - ``{key: value}`` is a vertical row: the key is a header cell.
    - ``{key: [v1, v2]}`` is a cross-table row.
    - A mapping with several entries yields one row per entry.
    - Anything else is a single-cell row.
    """
    if isinstance(row, Mapping):
        rows = []
        for key, value in row.items():
            if isinstance(value, (list, tuple)):
                cells = [_cell_text(key)] + [_cell_text(v) for v in value]
            else:
                cells = [_cell_text(key), _cell_text(value)]
            rows.append(Row(cells=cells, header_cells=1))
        return rows
    if isinstance(row, (list, tuple)):
        return [Row(cells=[_cell_text(c) for c in row])]
    return [Row(cells=[_cell_text(row)])]


class Table:
    """A table of rows rendered with box-drawing borders.

    Options may be passed as a dict, as keyword arguments, or both
    (keyword arguments win). See :class:`~pipy_table.options.TableOptions`.
    """

    def __init__(self, options: Mapping[str, Any] | None = None, **overrides: Any):
        merged = dict(options or {})
        merged.update(overrides)
        self.options: TableOptions = options_from_dict(merge_options(merged))
        self.rows: list[Any] = []

    def push(self, *rows: Any) -> None:
        """Append rows (sequences of cells, or mappings for vertical rows)."""
        self.rows.extend(rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __str__(self) -> str:
        return self.render()

    @property
    def width(self) -> int:
        """Visible width of the rendered table."""
        lines = self.render_lines()
        return visible_width(lines[0]) if lines else 0

    def render(self) -> str:
        return "\n".join(self.render_lines())

    def render_lines(self) -> list[str]:
        opts = self.options
        rows: list[Row] = []
        if opts.head:
            rows.append(Row(cells=[_cell_text(c) for c in opts.head], is_head=True))
        for row in self.rows:
            rows.extend(normalize_rows(row))

        ncols = max((len(row.cells) for row in rows), default=0)
        if ncols == 0:
            return []
        for row in rows:
            row.cells.extend([""] * (ncols - len(row.cells)))

        widths, fixed = self._column_widths(rows, ncols)
        logger.debug(f"Resolved column widths: {widths}")

        chars = opts.chars
        lines = []
        top = self._border(chars.top_left, chars.top, chars.top_mid, chars.top_right, widths)
        if top:
            lines.append(top)
        separator = self._border(chars.left_mid, chars.mid, chars.mid_mid, chars.right_mid, widths)

        for index, row in enumerate(rows):
            if index > 0 and separator:
                after_head = rows[index - 1].is_head
                if after_head or not opts.style.compact:
                    lines.append(separator)
            lines.extend(self._render_row(index, row, widths, fixed))

        bottom = self._border(
            chars.bottom_left, chars.bottom, chars.bottom_mid, chars.bottom_right, widths
        )
        if bottom:
            lines.append(bottom)
        return lines

    # =========================================================================
    # Layout
    # =========================================================================

    def _column_widths(self, rows: list[Row], ncols: int) -> tuple[list[int], list[bool]]:
        """Total width of each column, padding included."""
        style = self.options.style
        padding = style.padding_left + style.padding_right
        widths = []
        fixed = []
        for col in range(ncols):
            width = _get(self.options.col_widths, col)
            if width is not None:
                widths.append(width)
                fixed.append(True)
            else:
                natural = max(visible_width(row.cells[col]) for row in rows)
                widths.append(natural + padding)
                fixed.append(False)
        return widths, fixed

    def _cell_lines(self, text: str, content_width: int, fixed: bool) -> list[str]:
        opts = self.options
        if opts.word_wrap and fixed and content_width > 0:
            lines = wrap_text(content_width, text, word_boundary=opts.wrap_on_word_boundary)
        else:
            lines = colorize_lines(text.split("\n"))
        # Over-long words survive word wrapping; keep the grid intact anyway
        return [truncate(line, content_width, opts.truncate) for line in lines]

    def _clip(self, lines: list[str], height: int, content_width: int) -> list[str]:
        """Cut lines to height, marking the cut on the last kept line."""
        if len(lines) <= height:
            return lines
        kept = lines[:height]
        if kept:
            ellipsis = self.options.truncate
            kept[-1] = truncate(kept[-1] + ellipsis, content_width, ellipsis)
        return kept

    def _render_row(self, index: int, row: Row, widths: list[int], fixed: list[bool]) -> list[str]:
        opts = self.options
        style = opts.style
        cells = []
        for col, (text, width) in enumerate(zip(row.cells, widths)):
            content_width = max(0, width - style.padding_left - style.padding_right)
            cells.append(self._cell_lines(text, content_width, fixed[col]))

        height = _get(opts.row_heights, index)
        if height is None:
            height = max(len(lines) for lines in cells)
        else:
            cells = [
                self._clip(lines, height, max(0, w - style.padding_left - style.padding_right))
                for lines, w in zip(cells, widths)
            ]

        v_align = _get(opts.row_aligns, index) or "top"
        border = opts.style.border
        left = stylize(opts.chars.left, border)
        middle = stylize(opts.chars.middle, border)
        right = stylize(opts.chars.right, border)

        columns = []
        for col, (lines, width) in enumerate(zip(cells, widths)):
            content_width = max(0, width - style.padding_left - style.padding_right)
            align = _get(opts.col_aligns, col) or "left"
            styled = row.is_head or col < row.header_cells
            rendered = []
            for line in _align_vertically(lines, height, v_align):
                cell = (
                    repeat(" ", style.padding_left)
                    + pad(line, content_width, " ", align)
                    + repeat(" ", style.padding_right)
                )
                rendered.append(stylize(cell, style.head) if styled else cell)
            columns.append(rendered)

        return [left + middle.join(parts) + right for parts in zip(*columns)]

    def _border(self, left: str, fill: str, joint: str, right: str, widths: list[int]) -> str:
        line = left + joint.join(repeat(fill, w) for w in widths) + right
        if not line:
            return ""
        return stylize(line, self.options.style.border)


def _get(values: Sequence[Any], index: int) -> Any:
    return values[index] if index < len(values) else None


def _align_vertically(lines: list[str], height: int, align: str) -> list[str]:
    missing = height - len(lines)
    if missing <= 0:
        return lines
    if align == "bottom":
        top = missing
    elif align == "center":
        top = missing // 2
    else:
        top = 0
    return [""] * top + lines + [""] * (missing - top)


def render_table(
    rows: Iterable[Any],
    head: Sequence[Any] | None = None,
    **options: Any,
) -> str:
    """Render rows as a table string in one call."""
    if head is not None:
        options["head"] = list(head)
    table = Table(options)
    table.push(*rows)
    return table.render()
