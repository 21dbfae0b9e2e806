"""Tests for table rendering."""

import pytest

from pipy_table import OptionsError, Table, render_table, strip_ansi, visible_width

PLAIN = {"style": {"head": [], "border": []}}


def red(s):
    return f"\x1b[31m{s}\x1b[39m"


def blue(s):
    return f"\x1b[34m{s}\x1b[39m"


class TestTable:
    def test_basic(self):
        table = Table(PLAIN, head=["a", "b"])
        table.push(["c", "d"])
        assert table.render_lines() == [
            "┌───┬───┐",
            "│ a │ b │",
            "├───┼───┤",
            "│ c │ d │",
            "└───┴───┘",
        ]

    def test_default_colors(self):
        table = Table(head=["a", "b"])
        table.push(["c", "d"])
        lines = table.render_lines()
        assert lines[0] == "\x1b[90m┌───┬───┐\x1b[0m"
        assert "\x1b[31m a \x1b[0m" in lines[1]
        assert "\x1b[31m" not in lines[3]
        assert [strip_ansi(line) for line in lines] == [
            "┌───┬───┐",
            "│ a │ b │",
            "├───┼───┤",
            "│ c │ d │",
            "└───┴───┘",
        ]

    def test_fixed_widths_truncate(self):
        table = Table(
            head=["Rel", "Change", "By", "When"],
            style={"head": [], "border": []},
            colWidths=[6, 21, 25, 17],
        )
        table.push(
            ["v0.1", "Testing something cool", "rauchg@gmail.com", "7 minutes ago"],
            ["v0.1", "Testing something cool", "rauchg@gmail.com", "8 minutes ago"],
        )
        assert table.render_lines() == [
            "┌──────┬─────────────────────┬─────────────────────────┬─────────────────┐",
            "│ Rel  │ Change              │ By                      │ When            │",
            "├──────┼─────────────────────┼─────────────────────────┼─────────────────┤",
            "│ v0.1 │ Testing something … │ rauchg@gmail.com        │ 7 minutes ago   │",
            "├──────┼─────────────────────┼─────────────────────────┼─────────────────┤",
            "│ v0.1 │ Testing something … │ rauchg@gmail.com        │ 8 minutes ago   │",
            "└──────┴─────────────────────┴─────────────────────────┴─────────────────┘",
        ]

    def test_vertical_rows(self):
        table = Table(style={"padding_left": 0, "padding_right": 0, "head": [], "border": []})
        table.push({"v0.1": "Testing something cool"}, {"v0.1": "Testing something cool"})
        assert table.render_lines() == [
            "┌────┬──────────────────────┐",
            "│v0.1│Testing something cool│",
            "├────┼──────────────────────┤",
            "│v0.1│Testing something cool│",
            "└────┴──────────────────────┘",
        ]

    def test_cross_table(self):
        table = Table(
            head=["", "Header 1", "Header 2"],
            style={"padding-left": 0, "padding-right": 0, "head": [], "border": []},
        )
        table.push(
            {"Header 3": ["v0.1", "Testing something cool"]},
            {"Header 4": ["v0.1", "Testing something cool"]},
        )
        assert table.render_lines() == [
            "┌────────┬────────┬──────────────────────┐",
            "│        │Header 1│Header 2              │",
            "├────────┼────────┼──────────────────────┤",
            "│Header 3│v0.1    │Testing something cool│",
            "├────────┼────────┼──────────────────────┤",
            "│Header 4│v0.1    │Testing something cool│",
            "└────────┴────────┴──────────────────────┘",
        ]

    def test_custom_chars(self):
        table = Table(
            chars={
                "top": "═",
                "top-mid": "╤",
                "top-left": "╔",
                "top-right": "╗",
                "bottom": "═",
                "bottom-mid": "╧",
                "bottom-left": "╚",
                "bottom-right": "╝",
                "left": "║",
                "left-mid": "╟",
                "right": "║",
                "right-mid": "╢",
            },
            style={"head": [], "border": []},
        )
        table.push(["foo", "bar", "baz"], ["frob", "bar", "quuz"])
        assert table.render_lines() == [
            "╔══════╤═════╤══════╗",
            "║ foo  │ bar │ baz  ║",
            "╟──────┼─────┼──────╢",
            "║ frob │ bar │ quuz ║",
            "╚══════╧═════╧══════╝",
        ]

    def test_multiline_colored_cells(self):
        table = Table(PLAIN)
        table.push([red("Hello\nhow\nare\nyou?"), blue("I\nam\nfine\nthanks!")])
        assert table.render_lines() == [
            "┌───────┬─────────┐",
            "│ " + red("Hello") + " │ " + blue("I") + "       │",
            "│ " + red("how") + "   │ " + blue("am") + "      │",
            "│ " + red("are") + "   │ " + blue("fine") + "    │",
            "│ " + red("you?") + "  │ " + blue("thanks!") + " │",
            "└───────┴─────────┘",
        ]

    def test_word_wrap(self):
        table = Table(PLAIN, col_widths=[7, 9], word_wrap=True)
        table.push(["Hello how are you?", "I am fine thanks!"])
        assert table.render_lines() == [
            "┌───────┬─────────┐",
            "│ Hello │ I am    │",
            "│ how   │ fine    │",
            "│ are   │ thanks! │",
            "│ you?  │         │",
            "└───────┴─────────┘",
        ]

    def test_hard_wrap(self):
        table = Table(PLAIN, col_widths=[6], word_wrap=True, wrap_on_word_boundary=False)
        table.push(["abcdefghij"])
        assert table.render_lines() == [
            "┌──────┐",
            "│ abcd │",
            "│ efgh │",
            "│ ij   │",
            "└──────┘",
        ]

    def test_alignment(self):
        table = Table(PLAIN, col_widths=[7, 7, 7], col_aligns=["left", "center", "right"])
        table.push(["a", "b", "c"])
        assert table.render_lines()[1] == "│ a     │   b   │     c │"

    def test_vertical_alignment(self):
        table = Table(PLAIN, row_aligns=["bottom"])
        table.push(["a", "b\nc\nd"])
        lines = table.render_lines()
        assert lines[1:4] == ["│   │ b │", "│   │ c │", "│ a │ d │"]

    def test_row_height_clips(self):
        table = Table(PLAIN, row_heights=[2], col_widths=[7])
        table.push(["one\ntwo\nthree"])
        assert table.render_lines() == [
            "┌───────┐",
            "│ one   │",
            "│ two…  │",
            "└───────┘",
        ]

    def test_compact(self):
        table = Table(PLAIN, head=["h"], style={"compact": True, "head": [], "border": []})
        table.push(["a"], ["b"])
        assert table.render_lines() == [
            "┌───┐",
            "│ h │",
            "├───┤",
            "│ a │",
            "│ b │",
            "└───┘",
        ]

    def test_wide_characters(self):
        table = Table(PLAIN)
        table.push(["漢字", "x"], ["a", "テスト"])
        lines = table.render_lines()
        assert len({visible_width(line) for line in lines}) == 1
        assert lines[1] == "│ 漢字 │ x      │"

    def test_ragged_rows_are_padded(self):
        table = Table(PLAIN)
        table.push(["a", "b"], ["c"])
        assert table.render_lines()[3] == "│ c │   │"

    def test_width_and_len(self):
        table = Table(PLAIN)
        table.push(["abc"], [None])
        assert len(table) == 2
        assert table.width == 7

    def test_empty_table(self):
        assert Table().render() == ""

    def test_str(self):
        table = Table(PLAIN)
        table.push(["x"])
        assert str(table) == "┌───┐\n│ x │\n└───┘"

    def test_bad_style_name(self):
        table = Table(head=["a"], style={"head": ["no_such_color"]})
        with pytest.raises(OptionsError):
            table.render()


class TestRenderTable:
    def test_render_table(self):
        output = render_table([[1, 2]], head=["a", "b"], style={"head": [], "border": []})
        assert output.splitlines()[3] == "│ 1 │ 2 │"
