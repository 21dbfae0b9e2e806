"""Table options: types, defaults and merging.

User options are plain nested dicts. They are merged over a fresh copy of
the defaults on every call and frozen into ``TableOptions``; nothing is
kept at module level that a caller could mutate.
"""

import logging
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Mapping

from .errors import OptionsError, check_width
from .utils import ALIGNMENTS

logger = logging.getLogger(__name__)

VERTICAL_ALIGNMENTS: tuple[str, ...] = ("top", "center", "bottom")

# Option paths whose values replace the default wholesale instead of merging
REPLACE_KEYS: frozenset[tuple[str, ...]] = frozenset(
    {
        ("head",),
        ("col_widths",),
        ("row_heights",),
        ("col_aligns",),
        ("row_aligns",),
        ("style", "head"),
        ("style", "border"),
    }
)


@dataclass(frozen=True)
class TableChars:
    """Border and joint glyphs."""

    top: str = "─"
    top_mid: str = "┬"
    top_left: str = "┌"
    top_right: str = "┐"
    bottom: str = "─"
    bottom_mid: str = "┴"
    bottom_left: str = "└"
    bottom_right: str = "┘"
    left: str = "│"
    left_mid: str = "├"
    mid: str = "─"
    mid_mid: str = "┼"
    right: str = "│"
    right_mid: str = "┤"
    middle: str = "│"


@dataclass(frozen=True)
class TableStyle:
    """Cell padding and colors."""

    padding_left: int = 1
    padding_right: int = 1
    head: tuple[str, ...] = ("red",)  # Style names for header cells; () = unstyled
    border: tuple[str, ...] = ("grey",)
    compact: bool = False  # No separator lines between body rows


@dataclass(frozen=True)
class TableOptions:
    """Resolved table configuration."""

    chars: TableChars = field(default_factory=TableChars)
    truncate: str = "…"
    col_widths: tuple[int | None, ...] = ()  # None = size to content
    row_heights: tuple[int | None, ...] = ()
    col_aligns: tuple[str, ...] = ()
    row_aligns: tuple[str, ...] = ()
    style: TableStyle = field(default_factory=TableStyle)
    head: tuple[Any, ...] = ()
    word_wrap: bool = False
    wrap_on_word_boundary: bool = True

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> "TableOptions":
        """Merge options over the defaults and freeze the result."""
        return options_from_dict(merge_options(options))


def _listify(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _listify(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_listify(v) for v in value]
    return value


def options_to_dict(options: TableOptions) -> dict:
    """Convert TableOptions to a nested dict with lists for sequences."""
    return _listify(asdict(options))


def default_options() -> dict:
    """A fresh dict of default options."""
    return options_to_dict(TableOptions())


def deep_merge(
    base: Mapping[str, Any],
    overrides: Mapping[str, Any],
    replace_keys: frozenset[tuple[str, ...]] = REPLACE_KEYS,
    _path: tuple[str, ...] = (),
) -> dict:
    """Deep merge two dictionaries. Overrides take precedence.

    Nested dicts merge recursively; everything else, and any path listed
    in replace_keys, is replaced outright. ``None`` overrides are skipped.
    Neither input is modified.
    """
    result = dict(base)

    for key, value in overrides.items():
        if value is None:
            continue

        path = _path + (key,)
        base_value = result.get(key)

        # For nested dicts, merge recursively
        if (
            path not in replace_keys
            and isinstance(value, Mapping)
            and isinstance(base_value, Mapping)
        ):
            result[key] = deep_merge(base_value, value, replace_keys, path)
        elif isinstance(value, Mapping):
            result[key] = deep_merge({}, value, replace_keys, path)
        elif isinstance(value, (list, tuple)):
            result[key] = list(value)
        else:
            result[key] = value

    return result


_KEY_MIGRATIONS = {
    "colWidths": "col_widths",
    "rowHeights": "row_heights",
    "colAligns": "col_aligns",
    "rowAligns": "row_aligns",
    "wordWrap": "word_wrap",
    "wrapOnWordBoundary": "wrap_on_word_boundary",
}


def migrate_options(data: Mapping[str, Any]) -> dict:
    """Rename camelCase and hyphenated keys to their snake_case form.

    Accepts the spellings used by the JavaScript cli-table family, e.g.
    ``colWidths`` and ``{"style": {"padding-left": 2}}``.
    """
    data = dict(data)

    for old_key, new_key in _KEY_MIGRATIONS.items():
        if old_key in data and new_key not in data:
            logger.debug(f"Migrating option {old_key!r} to {new_key!r}")
            data[new_key] = data.pop(old_key)

    for section in ("chars", "style"):
        if section in data and isinstance(data[section], Mapping):
            keys = data[section]
            data[section] = {
                k.replace("-", "_"): v
                for k, v in keys.items()
                if k == k.replace("-", "_") or k.replace("-", "_") not in keys
            }

    return data


def _check_list(value: Any, path: str) -> None:
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise OptionsError(f"{path} must be a list, got {type(value).__name__}")


def validate_options(data: Mapping[str, Any]) -> None:
    """Check the shape of user options before merging.

    Raises:
        OptionsError: If a list-valued or mapping-valued key has the wrong type,
            or an alignment is unknown.
        InvalidWidthError: If a width, height or padding is negative or not an int.
    """
    for path in REPLACE_KEYS:
        value: Any = data
        for key in path:
            value = value.get(key) if isinstance(value, Mapping) else None
        if value is not None:
            _check_list(value, ".".join(path))

    for section in ("chars", "style"):
        if section in data and data[section] is not None and not isinstance(data[section], Mapping):
            raise OptionsError(f"{section} must be a mapping, got {type(data[section]).__name__}")

    for key in ("col_widths", "row_heights"):
        for value in data.get(key) or ():
            if value is not None:
                check_width(value, key)

    for value in data.get("col_aligns") or ():
        if value is not None and value not in ALIGNMENTS:
            raise OptionsError(f"col_aligns entries must be one of {ALIGNMENTS}, got {value!r}")
    for value in data.get("row_aligns") or ():
        if value is not None and value not in VERTICAL_ALIGNMENTS:
            raise OptionsError(
                f"row_aligns entries must be one of {VERTICAL_ALIGNMENTS}, got {value!r}"
            )

    style = data.get("style") or {}
    for key in ("padding_left", "padding_right"):
        if style.get(key) is not None:
            check_width(style[key], f"style.{key}")

    chars = data.get("chars") or {}
    for key, value in chars.items():
        if not isinstance(value, str):
            raise OptionsError(f"chars.{key} must be a string, got {type(value).__name__}")
    truncate = data.get("truncate")
    if truncate is not None and not isinstance(truncate, str):
        raise OptionsError(f"truncate must be a string, got {type(truncate).__name__}")


def merge_options(
    options: Mapping[str, Any] | None = None,
    defaults: Mapping[str, Any] | None = None,
) -> dict:
    """Merge user options over the defaults.

    Args:
        options: User options (snake_case or cli-table style keys)
        defaults: Base options (default: :func:`default_options`)

    Returns:
        Merged option dict

    Example:
        >>> merge_options({"style": {"head": []}})["style"]["head"]
        []
    """
    data = migrate_options(options or {})
    validate_options(data)
    base = default_options() if defaults is None else defaults
    return deep_merge(base, data)


def options_from_dict(data: Mapping[str, Any]) -> TableOptions:
    """Convert a merged option dict to TableOptions.

    Unknown keys are ignored with a warning.
    """
    valid = {f.name for f in fields(TableOptions)}
    unknown = sorted(set(data) - valid)
    if unknown:
        logger.warning(f"Ignoring unknown table options: {', '.join(unknown)}")

    kwargs: dict[str, Any] = {k: v for k, v in data.items() if k in valid}

    if isinstance(kwargs.get("chars"), Mapping):
        kwargs["chars"] = TableChars(**_known(TableChars, kwargs["chars"], "chars"))
    if isinstance(kwargs.get("style"), Mapping):
        style = _known(TableStyle, kwargs["style"], "style")
        for key in ("head", "border"):
            if key in style:
                style[key] = tuple(style[key])
        kwargs["style"] = TableStyle(**style)
    for key in ("col_widths", "row_heights", "col_aligns", "row_aligns", "head"):
        if key in kwargs:
            kwargs[key] = tuple(kwargs[key])

    return TableOptions(**kwargs)


def _known(cls: type, data: Mapping[str, Any], section: str) -> dict:
    valid = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - valid)
    if unknown:
        logger.warning(f"Ignoring unknown {section} options: {', '.join(unknown)}")
    return {k: v for k, v in data.items() if k in valid}
