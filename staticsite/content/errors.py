"""Errors raised while reading site content."""

from pathlib import Path


class ContentError(Exception):
    """Raised when a content file cannot be turned into an entry."""

    def __init__(self, message: str, file_path: Path | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
            file_path: File that failed to parse.
        """
        super().__init__(message)
        self.file_path = file_path
