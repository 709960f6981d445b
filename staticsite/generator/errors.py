"""Errors raised while generating pages."""

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from staticsite.generator.page import Page


class GenerationError(Exception):
    """Base exception for generation errors."""


class NotGeneratedError(GenerationError):
    """Raised when a single page could not be rendered or written.

    Wraps the underlying failure so the generator can classify it and
    carry on with the next page.
    """

    def __init__(self, page: "Page", cause: Exception) -> None:
        """Initialize the error.

        Args:
            page: Page that failed.
            cause: Underlying exception.
        """
        self.page = page
        self.cause = cause
        super().__init__(str(cause) or type(cause).__name__)


class OutputPathError(GenerationError):
    """Raised when a page URL maps to a file outside the destination."""

    def __init__(self, url: str, path: str) -> None:
        """Initialize the error.

        Args:
            url: Page URL.
            path: Output path the URL resolved to.
        """
        self.url = url
        self.path = path
        super().__init__(f"Output path is outside the destination: {path}")
