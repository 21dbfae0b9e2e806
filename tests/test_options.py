"""Tests for option merging."""

import pytest

from pipy_table import (
    InvalidWidthError,
    OptionsError,
    TableChars,
    TableOptions,
    TableStyle,
    deep_merge,
    default_options,
    merge_options,
    options_from_dict,
)
from pipy_table.options import migrate_options


class TestDefaults:
    def test_default_options(self):
        defaults = default_options()
        assert defaults["chars"]["top_left"] == "┌"
        assert defaults["truncate"] == "…"
        assert defaults["col_widths"] == []
        assert defaults["style"] == {
            "padding_left": 1,
            "padding_right": 1,
            "head": ["red"],
            "border": ["grey"],
            "compact": False,
        }
        assert defaults["head"] == []
        assert defaults["word_wrap"] is False

    def test_fresh_copy_each_call(self):
        first = default_options()
        first["style"]["head"].append("bold")
        assert default_options()["style"]["head"] == ["red"]

    def test_no_options_gives_defaults(self):
        assert merge_options() == default_options()


class TestMergeOptions:
    def test_chars_merge_deeply(self):
        expected = default_options()
        expected["chars"]["left"] = "L"
        assert merge_options({"chars": {"left": "L"}}) == expected

    def test_style_merges_deeply(self):
        expected = default_options()
        expected["style"]["padding_left"] = 2
        assert merge_options({"style": {"padding_left": 2}}) == expected

    def test_head_style_is_replaced(self):
        expected = default_options()
        expected["style"]["head"] = []
        assert merge_options({"style": {"head": []}}) == expected

    def test_border_style_is_replaced(self):
        expected = default_options()
        expected["style"]["border"] = []
        assert merge_options({"style": {"border": []}}) == expected

    def test_longer_list_replaces_not_blends(self):
        merged = merge_options({"style": {"border": ["blue", "bold"]}})
        assert merged["style"]["border"] == ["blue", "bold"]

    def test_cli_table_spellings(self):
        merged = merge_options(
            {
                "colWidths": [6, 21],
                "wordWrap": True,
                "style": {"padding-left": 0},
                "chars": {"top-mid": "╤"},
            }
        )
        assert merged["col_widths"] == [6, 21]
        assert merged["word_wrap"] is True
        assert merged["style"]["padding_left"] == 0
        assert merged["chars"]["top_mid"] == "╤"

    def test_input_not_modified(self):
        options = {"style": {"head": ["blue"]}}
        merge_options(options)
        assert options == {"style": {"head": ["blue"]}}

    def test_explicit_defaults(self):
        merged = merge_options({"a": {"b": 2}}, defaults={"a": {"b": 1, "c": 3}})
        assert merged == {"a": {"b": 2, "c": 3}}

    def test_non_list_color_style_rejected(self):
        with pytest.raises(OptionsError):
            merge_options({"style": {"head": "red"}})
        with pytest.raises(OptionsError):
            merge_options({"style": {"border": {"0": "red"}}})

    def test_non_list_widths_rejected(self):
        with pytest.raises(OptionsError):
            merge_options({"col_widths": 10})

    def test_negative_width_rejected(self):
        with pytest.raises(InvalidWidthError):
            merge_options({"col_widths": [5, -1]})

    def test_bad_alignment_rejected(self):
        with pytest.raises(OptionsError):
            merge_options({"col_aligns": ["middle"]})
        with pytest.raises(OptionsError):
            merge_options({"row_aligns": ["left"]})

    def test_bad_section_rejected(self):
        with pytest.raises(OptionsError):
            merge_options({"chars": "|"})


class TestDeepMerge:
    def test_nested(self):
        base = {"a": {"b": 1, "c": {"d": 2}}, "e": 3}
        assert deep_merge(base, {"a": {"c": {"d": 4}}}) == {"a": {"b": 1, "c": {"d": 4}}, "e": 3}

    def test_none_skipped(self):
        assert deep_merge({"a": 1}, {"a": None}) == {"a": 1}

    def test_lists_replaced(self):
        assert deep_merge({"head": ["a", "b"]}, {"head": ["c"]}) == {"head": ["c"]}

    def test_replace_key_not_merged(self):
        base = {"x": {"y": 1}}
        assert deep_merge(base, {"x": {"z": 2}}, replace_keys=frozenset({("x",)})) == {
            "x": {"z": 2}
        }

    def test_base_not_modified(self):
        base = {"style": {"head": ["red"]}}
        deep_merge(base, {"style": {"head": []}})
        assert base == {"style": {"head": ["red"]}}


class TestOptionsFromDict:
    def test_defaults_round_trip(self):
        assert options_from_dict(default_options()) == TableOptions()

    def test_from_options(self):
        opts = TableOptions.from_options({"style": {"head": [], "compact": True}, "colWidths": [3]})
        assert opts.style == TableStyle(head=(), compact=True)
        assert opts.col_widths == (3,)
        assert opts.chars == TableChars()

    def test_unknown_keys_ignored(self, caplog):
        opts = options_from_dict({**default_options(), "colour": "red"})
        assert opts == TableOptions()
        assert "colour" in caplog.text


class TestMigrateOptions:
    def test_leaves_snake_case_alone(self):
        assert migrate_options({"col_widths": [1]}) == {"col_widths": [1]}

    def test_snake_case_wins(self):
        data = migrate_options({"colWidths": [1], "col_widths": [2]})
        assert data["col_widths"] == [2]

    def test_snake_case_wins_in_sections(self):
        data = migrate_options({"style": {"padding_left": 2, "padding-left": 5}})
        assert data == {"style": {"padding_left": 2}}
        data = migrate_options({"style": {"padding-left": 5, "padding_left": 2}})
        assert data == {"style": {"padding_left": 2}}


class TestErrors:
    def test_options_error_is_value_error(self):
        with pytest.raises(ValueError):
            merge_options({"col_widths": 10})
