"""Exceptions raised by pipy-table."""


class TableError(Exception):
    """Base class for all pipy-table errors."""

    pass


class InvalidWidthError(TableError, ValueError):
    """Raised when a target width is not a non-negative integer."""

    pass


class OptionsError(TableError, ValueError):
    """Raised when a configuration value has the wrong shape.

    Covers non-sequence values where a list is expected, unknown
    alignment names and style names that cannot be resolved.
    """

    pass


def check_width(value: object, name: str = "width") -> int:
    """Validate a target width and return it.

    Raises:
        InvalidWidthError: If value is not an int (bools rejected) or is negative.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidWidthError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise InvalidWidthError(f"{name} must be non-negative, got {value}")
    return value
