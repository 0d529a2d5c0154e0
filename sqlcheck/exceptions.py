"""Exception types raised by sqlcheck."""

from __future__ import annotations


class SQLCheckError(Exception):
    """Base class for all sqlcheck errors."""


class ConfigurationError(SQLCheckError, ValueError):
    """Raised when a configuration option is invalid.

    Attributes:
        option: Name of the offending option.
    """

    def __init__(self, option: str, message: str) -> None:
        self.option = option
        super().__init__(f"Invalid value for '{option}': {message}")
