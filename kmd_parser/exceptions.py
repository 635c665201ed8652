"""Package-specific exception types."""

from __future__ import annotations


class InputError(ValueError):
    """Base class for errors raised while loading a document.

    Tokenizing itself never fails; these errors come from reading the input.
    """


class InputTooLargeError(InputError):
    """Raised when a document exceeds the configured maximum size.

    Args:
        size: Size of the document in bytes.
        limit: Maximum allowed size in bytes.
    """

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Input of {self.size} bytes exceeds the maximum allowed size of {self.limit} bytes"


class InvalidEncodingError(InputError):
    """Raised when a document is not valid UTF-8."""
