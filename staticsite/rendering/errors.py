"""Navigation outcomes that stop a page from rendering."""

from staticsite.constants import DEFAULT_REDIRECT_STATUS


class RenderError(Exception):
    """Base exception for page rendering outcomes."""


class UrlNotFoundError(RenderError):
    """Raised when a page resolves to a 404 outcome."""

    def __init__(self, url: str) -> None:
        """Initialize the error.

        Args:
            url: URL that could not be resolved.
        """
        self.url = url
        super().__init__(f"URL not found: {url}")


class RedirectError(RenderError):
    """Raised when resolving a page produces a redirect."""

    def __init__(self, url: str, status_code: int = DEFAULT_REDIRECT_STATUS) -> None:
        """Initialize the error.

        Args:
            url: Redirect target.
            status_code: HTTP redirect status.
        """
        self.url = url
        self.status_code = status_code
        super().__init__(f"Redirect ({status_code}) to {url}")
