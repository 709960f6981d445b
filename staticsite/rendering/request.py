"""Synthetic request handed to the renderer for each page."""

from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from staticsite.config.schemas import StaticSiteConfig
from staticsite.content.urls import tidy_url


if TYPE_CHECKING:
    from staticsite.generator.page import Page


class GenerationRequest:
    """The request that would have produced a page on a live site.

    Host, scheme and root come from the configured base URL rather than
    from a real HTTP request, so generated links point at the public site.
    """

    def __init__(self, config: StaticSiteConfig, page: "Page") -> None:
        """Initialize the request.

        Args:
            config: Run-wide static site configuration.
            page: Page being generated.
        """
        self._config = config
        self._page = page
        self._root = tidy_url(config.base_url)
        self._parts = urlsplit(self._root)

    @property
    def config(self) -> StaticSiteConfig:
        """Get the static site configuration."""
        return self._config

    @property
    def page(self) -> "Page":
        """Get the page being generated."""
        return self._page

    @property
    def path(self) -> str:
        """Get the requested path."""
        return self._page.url

    @property
    def root(self) -> str:
        """Get the public site root."""
        return self._root

    @property
    def url(self) -> str:
        """Get the full public URL of the page."""
        return tidy_url(f"{self._root}/{self.path}")

    @property
    def scheme(self) -> str | None:
        """Get the URL scheme of the public site, if absolute."""
        return self._parts.scheme or None

    @property
    def host(self) -> str | None:
        """Get the host of the public site, if absolute."""
        return self._parts.netloc or None

    @property
    def is_static(self) -> bool:
        """Requests built during generation are always static."""
        return True

    def __repr__(self) -> str:
        return f"GenerationRequest(url={self.url!r})"
