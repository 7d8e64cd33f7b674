"""Exceptions raised by structured_reader."""

from typing import Any


class Error(Exception):
    """Base exception for structured_reader errors."""
    pass


class DeclarationError(Error):
    """Raised while building a reader tree from a malformed declaration."""
    pass


class WrongTypeError(Error):
    """
    Raised when a fragment does not match the reader it was read with.

    Attributes:
        path: Rendered path of the failing fragment (e.g. ".widgets[0].price")
        reason: Short description of what was expected
        fragment: The offending fragment
    """

    def __init__(self, message: str, path: str = "", reason: str = "", fragment: Any = None):
        super().__init__(message)
        self.path = path
        self.reason = reason
        self.fragment = fragment
