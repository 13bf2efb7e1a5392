"""
Huescale Error Taxonomy
Base exception carrying a kind tag, a human-readable message and an optional cause.
"""
from typing import Any, Optional


class HuescaleError(Exception):
    """Base class for every error raised by the palette pipeline."""

    kind: str = "HuescaleError"

    def __init__(self, message: str, cause: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def full_message(self) -> str:
        """Message followed by every nested cause, joined with ': '."""
        return describe_error(self)


def describe_error(error: Any) -> str:
    """
    Extract a readable message from an error, including nested causes.

    Args:
        error: Exception, string or arbitrary object

    Returns:
        Message chain such as "outer: middle: inner"
    """
    if error is None:
        return "Unknown error"
    if isinstance(error, str):
        return error
    if isinstance(error, HuescaleError):
        if error.cause is not None:
            return f"{error.message}: {describe_error(error.cause)}"
        return error.message
    if isinstance(error, BaseException):
        text = str(error) or error.__class__.__name__
        if error.__cause__ is not None:
            return f"{text}: {describe_error(error.__cause__)}"
        return text
    return str(error)
