"""
Exceptions raised while building Sudoku booklets.
"""

from typing import Sequence


class BookletError(Exception):
    """Base exception for booklet generation errors."""


class MissingCapability(BookletError):
    """Raised when the puzzle source cannot be found or is not callable."""

    def __init__(self, reference: str, reason: str = ""):
        self.reference = reference
        message = f"Puzzle source not available: '{reference}'"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class UnsupportedSize(BookletError, ValueError):
    """Raised for board sizes without a defined block shape."""

    def __init__(self, size):
        self.size = size
        super().__init__(f"Unsupported board size: {size}. Supported sizes: 4, 6, 9")


class InvalidGrid(BookletError, ValueError):
    """Raised when a grid does not match its board size or holds bad digits."""

    def __init__(self, message: str, errors: Sequence[str] = ()):
        self.errors = list(errors)
        super().__init__(message)


class DocumentFinalized(BookletError, RuntimeError):
    """Raised when a page is added to a document that was already finalized."""
