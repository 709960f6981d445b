"""Static site generation orchestrator."""

import os
import shutil
import time
import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import structlog

from staticsite.config.schemas import AppConfig, StaticSiteConfig
from staticsite.constants import COMPONENT_GENERATOR
from staticsite.content.repository import EntryRepository, FileEntryRepository
from staticsite.content.router import RouteTable
from staticsite.content.urls import normalize_path, tidy_url
from staticsite.generator.errors import NotGeneratedError
from staticsite.generator.io import AtomicWriter
from staticsite.generator.metrics import GeneratorMetrics
from staticsite.generator.models import (
    GenerationManifest,
    GenerationResult,
    PageFailure,
)
from staticsite.generator.page import Page
from staticsite.generator.reporter import ConsoleReporter, Reporter
from staticsite.generator.state_machine import GenerationState, GenerationStateMachine
from staticsite.imaging.errors import ImageConfigurationError
from staticsite.rendering.errors import RedirectError, UrlNotFoundError
from staticsite.rendering.renderer import PageRenderer, TemplatePageRenderer
from staticsite.rendering.request import GenerationRequest


logger = structlog.get_logger()


def not_generated_message(error: NotGeneratedError) -> str:
    """Describe why a page was not generated.

    Args:
        error: Error raised by the page.

    Returns:
        ``Resulted in 404``, ``Resulted in a <status> redirect to <url>``,
        or the underlying error's own message.
    """
    cause = error.cause
    if isinstance(cause, UrlNotFoundError):
        return "Resulted in 404"
    if isinstance(cause, RedirectError):
        return f"Resulted in a {cause.status_code} redirect to {cause.url}"
    return str(error)


class Generator:
    """Renders every page of a site into the destination directory.

    A run binds image processing to the output tree, empties the
    destination, renders each page in order, creates symlinks, copies
    directories and finally calls the ``after`` callback. A page that fails
    is reported and skipped; misconfiguration and filesystem errors while
    preparing the destination abort the run.

    Implements the generation state machine:
        PENDING -> BINDING_IMAGES -> CLEARING -> GENERATING_PAGES
        -> LINKING -> COPYING -> DONE|FAILED
    """

    def __init__(  # noqa: PLR0913
        self,
        config: StaticSiteConfig,
        renderer: PageRenderer,
        entries: EntryRepository,
        routes: RouteTable | None = None,
        reporter: Reporter | None = None,
        metrics: GeneratorMetrics | None = None,
        run_id: str | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            config: Static site configuration.
            renderer: Renderer producing page text.
            entries: Source of content entries.
            routes: Declared routes.
            reporter: Progress reporter, console output when omitted.
            metrics: Optional metrics instance.
            run_id: Unique run identifier.
        """
        self._config = config
        self._renderer = renderer
        self._entries = entries
        self._routes = routes or RouteTable({})
        self._reporter = reporter or ConsoleReporter()
        self._metrics = metrics or GeneratorMetrics.get_instance()
        self._run_id = run_id or str(uuid.uuid4())
        self._after: Callable[[], object] | None = None

        self._state_machine = GenerationStateMachine(self._run_id)
        self._writer = AtomicWriter(config.destination, self._run_id)
        self._log = logger.bind(run_id=self._run_id, component=COMPONENT_GENERATOR)

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        reporter: Reporter | None = None,
        run_id: str | None = None,
    ) -> "Generator":
        """Build a generator with the file-based collaborators.

        Args:
            config: Loaded application configuration.
            reporter: Progress reporter.
            run_id: Unique run identifier.

        Returns:
            Generator reading entries from disk and rendering with Jinja2.
        """
        return cls(
            config=config.static_site,
            renderer=TemplatePageRenderer(config.site.templates, config.site.images),
            entries=FileEntryRepository(config.site.content),
            routes=RouteTable(config.site.routes),
            reporter=reporter,
            run_id=run_id,
        )

    @property
    def state(self) -> GenerationState:
        """Get current generation state."""
        return self._state_machine.state

    @property
    def run_id(self) -> str:
        """Get the run identifier."""
        return self._run_id

    def after(self, callback: Callable[[], object]) -> "Generator":
        """Register a callback to run once generation has finished.

        Registering again replaces the previous callback.

        Args:
            callback: Zero-argument callable.

        Returns:
            This generator, for chaining.
        """
        self._after = callback
        return self

    def generate(self) -> GenerationResult:
        """Run a full generation.

        Returns:
            GenerationResult with the manifest of the run.

        Raises:
            ImageConfigurationError: If images cannot be bound to the output.
            OSError: If the destination cannot be prepared or a symlink or
                copy fails.
        """
        start_time = time.perf_counter()
        destination = self._config.destination
        manifest = GenerationManifest(
            run_id=self._run_id,
            destination=str(destination),
            generated_at=datetime.now(UTC).isoformat(),
        )

        self._state_machine = GenerationStateMachine(self._run_id)
        self._log.info("generation_started", destination=str(destination))

        try:
            self._state_machine.transition(GenerationState.BINDING_IMAGES)
            self.bind_images()

            self._state_machine.transition(GenerationState.CLEARING)
            self.clear_directory()

            self._state_machine.transition(GenerationState.GENERATING_PAGES)
            self.create_content_files(manifest)

            self._state_machine.transition(GenerationState.LINKING)
            self.create_symlinks(manifest)

            self._state_machine.transition(GenerationState.COPYING)
            self.copy_files(manifest)

            self._state_machine.transition(GenerationState.DONE)
        except Exception as e:
            self._state_machine.transition(GenerationState.FAILED)
            self._metrics.record_run_failure()
            self._log.error(
                "generation_failed",
                error=f"{type(e).__name__}: {e}",
            )
            raise

        manifest.duration_ms = (time.perf_counter() - start_time) * 1000
        self._metrics.record_run_duration(manifest.duration_ms)

        self._log.info(
            "generation_complete",
            page_count=len(manifest.files),
            failure_count=len(manifest.failures),
            total_bytes=manifest.total_bytes,
            duration_ms=round(manifest.duration_ms, 2),
        )
        self._reporter.info(f"Static site generated into {destination}")

        if self._after is not None:
            self._after()

        return GenerationResult(success=not manifest.failures, manifest=manifest)

    def bind_images(self) -> None:
        """Send processed images into the image cache inside the destination.

        Raises:
            ImageConfigurationError: If the cache directory is not strictly
                inside the destination, or the renderer rejects the binding.
        """
        directory = self._config.glide.directory
        destination = Path(os.path.normpath(self._config.destination))
        cache_dir = Path(os.path.normpath(destination / directory))

        if cache_dir == destination or not cache_dir.is_relative_to(destination):
            raise ImageConfigurationError(
                f"Image directory must be inside the destination: {directory}"
            )

        url_root = tidy_url(f"{self._config.base_url}/{directory}")
        self._renderer.bind_images(cache_dir, url_root)

    def clear_directory(self) -> None:
        """Empty the destination directory, creating it when absent.

        A destination that is a symlink to a directory is emptied through
        the link; the link itself is kept.
        """
        destination = self._config.destination

        if destination.is_dir():
            for child in destination.iterdir():
                if child.is_dir() and not child.is_symlink():
                    shutil.rmtree(child)
                else:
                    child.unlink()

        destination.mkdir(parents=True, exist_ok=True)
        self._log.info("destination_cleared", destination=str(destination))

    def pages(self) -> list[Page]:
        """Collect the pages of a run.

        Generatable entries and non-wildcard routes, minus excluded URLs,
        de-duplicated by URL (entries win over routes) and sorted by URL
        with slashes removed.

        Returns:
            Pages in generation order.
        """
        excluded = {normalize_path(url) for url in self._config.exclude}
        seen: set[str] = set()
        pages: list[Page] = []

        for page in [*self.content(), *self.routes()]:
            if page.url in excluded or page.url in seen:
                continue
            seen.add(page.url)
            pages.append(page)

        return sorted(pages, key=lambda page: page.url.replace("/", ""))

    def content(self) -> list[Page]:
        """Build pages for every generatable entry."""
        pages = [Page(self._config, entry) for entry in self._entries.all()]
        return [page for page in pages if page.is_generatable()]

    def routes(self) -> list[Page]:
        """Build pages for every declared route without a wildcard."""
        return [Page(self._config, route) for route in self._routes.static_routes()]

    def create_content_files(self, manifest: GenerationManifest) -> None:
        """Render and write every page, reporting failures and moving on.

        Args:
            manifest: Manifest recording written files and failures.
        """
        pages = self.pages()
        self._log.info("pages_collected", page_count=len(pages))

        for page in pages:
            request = GenerationRequest(self._config, page)
            self._reporter.comment(f"Generating {page.url}...")

            try:
                file_info = page.generate(request, self._renderer, self._writer)
            except NotGeneratedError as e:
                reason = not_generated_message(e)
                manifest.add_failure(PageFailure(url=page.url, reason=reason))
                self._metrics.record_page_failed()
                self._reporter.page_failed(page.url, reason)
                self._log.warning(
                    "page_not_generated",
                    url=page.url,
                    reason=reason,
                    error_type=type(e.cause).__name__,
                )
                continue

            manifest.add_file(file_info)
            self._metrics.record_page_generated(file_info.bytes_written)
            self._reporter.page_generated(page.url)
            self._log.debug(
                "page_generated",
                url=page.url,
                path=file_info.path,
                bytes_written=file_info.bytes_written,
            )

    def create_symlinks(self, manifest: GenerationManifest) -> None:
        """Create configured symlinks, never replacing an existing path.

        Args:
            manifest: Manifest recording created and skipped links.
        """
        for source, dest in self._config.symlinks.items():
            target = self._config.destination / dest

            if target.exists() or target.is_symlink():
                manifest.symlinks_skipped.append(str(target))
                self._metrics.record_symlink(created=False)
                self._reporter.line(f"Symlink not created. {target} already exists.")
                continue

            target.parent.mkdir(parents=True, exist_ok=True)
            target.symlink_to(source, target_is_directory=Path(source).is_dir())
            manifest.symlinks_created.append(str(target))
            self._metrics.record_symlink(created=True)
            self._reporter.line(f"{source} symlinked to {target}")

    def copy_files(self, manifest: GenerationManifest) -> None:
        """Copy configured directories into the destination.

        Existing destination directories are merged into, with copied files
        overwriting files of the same name.

        Args:
            manifest: Manifest recording copied directories.
        """
        for source, dest in self._config.copy_paths.items():
            target = self._config.destination / dest

            if not Path(source).is_dir():
                self._log.warning("copy_source_missing", source=source)
                self._reporter.line(f"{source} not copied. Directory does not exist.")
                continue

            shutil.copytree(source, target, dirs_exist_ok=True)
            manifest.copied.append(str(target))
            self._metrics.record_directory_copied()
            self._reporter.line(f"{source} copied to {target}")
