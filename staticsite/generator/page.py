"""A single URL to render."""

from pathlib import Path

from staticsite.config.schemas import StaticSiteConfig
from staticsite.content.models import Content
from staticsite.content.urls import normalize_path, url_to_relative_path
from staticsite.generator.errors import NotGeneratedError, OutputPathError
from staticsite.generator.io import AtomicWriter
from staticsite.generator.models import GeneratedFile
from staticsite.rendering.renderer import PageRenderer
from staticsite.rendering.request import GenerationRequest


class Page:
    """Pairs a content record with its place in the output tree."""

    def __init__(self, config: StaticSiteConfig, content: Content) -> None:
        """Initialize the page.

        Args:
            config: Static site configuration.
            content: Entry or route backing the page.
        """
        self._config = config
        self._content = content

    @property
    def content(self) -> Content:
        """Get the underlying content."""
        return self._content

    @property
    def url(self) -> str:
        """Get the normalized page URL, empty for content without one."""
        url = self._content.url
        return normalize_path(url) if url is not None else ""

    @property
    def relative_path(self) -> str:
        """Get the output path relative to the destination."""
        return url_to_relative_path(self.url)

    @property
    def path(self) -> Path:
        """Get the absolute output path."""
        return self._config.destination / self.relative_path

    def is_generatable(self) -> bool:
        """Check whether the content wants a page (drafts do not)."""
        return self._content.is_generatable()

    def is_inside_destination(self) -> bool:
        """Check that the output path stays under the destination."""
        destination = self._config.destination.resolve()
        return self.path.resolve().is_relative_to(destination)

    def generate(
        self,
        request: GenerationRequest,
        renderer: PageRenderer,
        writer: AtomicWriter,
    ) -> GeneratedFile:
        """Render the page and write it to disk.

        Args:
            request: Synthetic request for this page.
            renderer: Renderer producing the page text.
            writer: Writer used for the output file.

        Returns:
            Information about the written file.

        Raises:
            NotGeneratedError: If the output path leaves the destination, or
                rendering or writing fails for any reason.
        """
        try:
            if not self.is_inside_destination():
                raise OutputPathError(self.url, self.relative_path)
            text = renderer.render(self._content, request)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            return writer.write(self.path, text)
        except Exception as e:
            raise NotGeneratedError(self, e) from e

    def __repr__(self) -> str:
        return f"Page(url={self.url!r})"
