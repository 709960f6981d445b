"""Tests for the generation orchestrator."""

from pathlib import Path

import pytest

from staticsite.config.schemas import GlideConfig, StaticSiteConfig
from staticsite.content.models import Entry
from staticsite.content.router import RouteTable
from staticsite.generator.errors import NotGeneratedError
from staticsite.generator.generator import Generator, not_generated_message
from staticsite.generator.metrics import GeneratorMetrics
from staticsite.generator.page import Page
from staticsite.generator.state_machine import GenerationState
from staticsite.imaging.errors import ImageConfigurationError
from staticsite.rendering.errors import RedirectError, UrlNotFoundError
from tests.helpers.doubles import ListEntryRepository, RecordingReporter, StubRenderer


def entry(url: str | None, **kwargs: object) -> Entry:
    return Entry(id=(url or "none").strip("/") or "home", url=url, **kwargs)


def make_generator(  # noqa: PLR0913
    destination: Path,
    entries: list[Entry] | None = None,
    routes: dict[str, object] | None = None,
    renderer: StubRenderer | None = None,
    reporter: RecordingReporter | None = None,
    **config: object,
) -> Generator:
    return Generator(
        config=StaticSiteConfig(destination=destination, **config),
        renderer=renderer or StubRenderer(),
        entries=ListEntryRepository(entries or []),
        routes=RouteTable(routes or {}),
        reporter=reporter or RecordingReporter(),
        run_id="test-run",
    )


def output_files(destination: Path) -> list[str]:
    return sorted(
        path.relative_to(destination).as_posix()
        for path in destination.rglob("*")
        if path.is_file()
    )


class TestNotGeneratedMessage:
    """Tests for not_generated_message."""

    @pytest.fixture
    def page(self, tmp_path: Path) -> Page:
        return Page(StaticSiteConfig(destination=tmp_path), entry("/x"))

    def test_not_found(self, page: Page) -> None:
        """404 outcomes are reported as such."""
        error = NotGeneratedError(page, UrlNotFoundError("/x"))

        assert not_generated_message(error) == "Resulted in 404"

    def test_redirect(self, page: Page) -> None:
        """Redirects report status and target."""
        error = NotGeneratedError(page, RedirectError("/target", 301))

        assert not_generated_message(error) == "Resulted in a 301 redirect to /target"

    def test_other_error(self, page: Page) -> None:
        """Other failures report their own message."""
        error = NotGeneratedError(page, ValueError("template exploded"))

        assert not_generated_message(error) == "template exploded"


class TestPages:
    """Tests for page collection."""

    def test_entries_and_routes(self, tmp_path: Path) -> None:
        """Pages are generatable entries plus non-wildcard routes."""
        generator = make_generator(
            tmp_path,
            entries=[
                entry("/about"),
                entry("/draft", published=False),
                entry(None),
            ],
            routes={"/search": "search", "/blog/{slug}": "post"},
        )

        assert [page.url for page in generator.pages()] == ["/about", "/search"]

    def test_exclusions(self, tmp_path: Path) -> None:
        """Excluded URLs are dropped, in any spelling."""
        generator = make_generator(
            tmp_path,
            entries=[entry("/"), entry("/about"), entry("/draft")],
            routes={"/search": "search"},
            exclude=["draft/", "/search"],
        )

        assert [page.url for page in generator.pages()] == ["/", "/about"]

    def test_order_ignores_slashes(self, tmp_path: Path) -> None:
        """Pages sort by URL with slashes removed."""
        generator = make_generator(
            tmp_path,
            entries=[entry("/b"), entry("/a/z"), entry("/"), entry("/ab")],
        )

        assert [page.url for page in generator.pages()] == ["/", "/ab", "/a/z", "/b"]

    def test_duplicates_first_wins(self, tmp_path: Path) -> None:
        """A URL is generated once, entries taking precedence over routes."""
        generator = make_generator(
            tmp_path,
            entries=[entry("/about", title="Entry")],
            routes={"/about": "route", "about/": "other"},
        )

        pages = generator.pages()

        assert [page.url for page in pages] == ["/about"]
        assert isinstance(pages[0].content, Entry)

    def test_unnormalized_entry_urls(self, tmp_path: Path) -> None:
        """Entry URLs are normalized before exclusion and de-duplication."""
        generator = make_generator(
            tmp_path,
            entries=[
                Entry(id="about", url="about/"),
                Entry(id="draft", url="draft//"),
            ],
            routes={"/about": "route"},
            exclude=["/draft"],
        )

        pages = generator.pages()

        assert [page.url for page in pages] == ["/about"]
        assert isinstance(pages[0].content, Entry)


class TestGenerate:
    """Tests for Generator.generate."""

    def test_writes_pages(self, tmp_path: Path) -> None:
        """Every page is written under the destination."""
        destination = tmp_path / "out"
        reporter = RecordingReporter()
        generator = make_generator(
            destination,
            entries=[entry("/"), entry("/about")],
            routes={"/feed.xml": "feed.xml"},
            reporter=reporter,
        )

        result = generator.generate()

        assert output_files(destination) == [
            "about/index.html",
            "feed.xml",
            "index.html",
        ]
        assert (destination / "about/index.html").read_text() == "<html>/about</html>"
        assert result.success
        assert [f.path for f in result.manifest.files] == [
            "index.html",
            "about/index.html",
            "feed.xml",
        ]
        assert reporter.of_kind("comment") == [
            "Generating /...",
            "Generating /about...",
            "Generating /feed.xml...",
        ]
        assert reporter.of_kind("generated") == ["/", "/about", "/feed.xml"]
        assert reporter.of_kind("info") == [f"Static site generated into {destination}"]
        assert generator.state == GenerationState.DONE

    def test_one_request_per_page(self, tmp_path: Path) -> None:
        """Each page is rendered with its own request."""
        renderer = StubRenderer()
        generator = make_generator(
            tmp_path / "out",
            entries=[entry("/"), entry("/about")],
            renderer=renderer,
            base_url="https://example.com",
        )

        generator.generate()

        assert [request.url for request in renderer.requests] == [
            "https://example.com",
            "https://example.com/about",
        ]
        assert renderer.requests[0] is not renderer.requests[1]

    def test_failures_do_not_abort(self, tmp_path: Path) -> None:
        """Failing pages are reported and later pages still render."""
        destination = tmp_path / "out"
        reporter = RecordingReporter()
        renderer = StubRenderer(
            {
                "/a": UrlNotFoundError("/a"),
                "/b": RedirectError("/target", 301),
                "/c": RuntimeError("template exploded"),
            }
        )
        generator = make_generator(
            destination,
            entries=[entry("/a"), entry("/b"), entry("/c"), entry("/d")],
            renderer=renderer,
            reporter=reporter,
        )

        result = generator.generate()

        assert output_files(destination) == ["d/index.html"]
        assert reporter.of_kind("failed") == [
            "/a (Resulted in 404)",
            "/b (Resulted in a 301 redirect to /target)",
            "/c (template exploded)",
        ]
        assert reporter.of_kind("generated") == ["/d"]
        assert not result.success
        assert [failure.url for failure in result.manifest.failures] == [
            "/a",
            "/b",
            "/c",
        ]
        assert generator.state == GenerationState.DONE

    def test_rerun_removes_stale_files(self, tmp_path: Path) -> None:
        """Each run starts from an empty destination."""
        destination = tmp_path / "out"
        destination.mkdir()
        (destination / "stale.html").write_text("old")
        (destination / "old-dir").mkdir()
        (destination / "old-dir" / "index.html").write_text("old")
        generator = make_generator(destination, entries=[entry("/")])

        generator.generate()
        first = output_files(destination)
        generator.generate()

        assert first == ["index.html"]
        assert output_files(destination) == first

    def test_symlinked_destination_is_emptied(self, tmp_path: Path) -> None:
        """A destination linked to a directory is emptied through the link."""
        real = tmp_path / "real"
        real.mkdir()
        (real / "stale.html").write_text("old")
        (real / "old-dir").mkdir()
        (real / "old-dir" / "page.html").write_text("old")
        destination = tmp_path / "out"
        destination.symlink_to(real, target_is_directory=True)
        generator = make_generator(destination, entries=[entry("/")])

        generator.generate()

        assert destination.is_symlink()
        assert output_files(real) == ["index.html"]

    def test_page_outside_destination_is_reported(self, tmp_path: Path) -> None:
        """URLs that escape the destination fail and write nothing there."""
        destination = tmp_path / "out"
        reporter = RecordingReporter()
        generator = make_generator(
            destination,
            entries=[entry("/"), Entry(id="x", url="/../escaped")],
            reporter=reporter,
        )

        result = generator.generate()

        assert not (tmp_path / "escaped").exists()
        assert output_files(destination) == ["index.html"]
        assert reporter.of_kind("generated") == ["/"]
        assert [failure.url for failure in result.manifest.failures] == [
            "/../escaped"
        ]
        assert "outside the destination" in result.manifest.failures[0].reason

    def test_binds_images_into_destination(self, tmp_path: Path) -> None:
        """Images are bound to the cache directory inside the output."""
        destination = tmp_path / "out"
        renderer = StubRenderer()
        generator = make_generator(
            destination,
            renderer=renderer,
            base_url="https://example.com/",
            glide=GlideConfig(directory="assets/img"),
        )

        generator.generate()

        assert renderer.bound == (
            destination / "assets" / "img",
            "https://example.com/assets/img",
        )

    @pytest.mark.parametrize("directory", [".", "..", "../elsewhere", "a/../.."])
    def test_image_directory_must_be_inside_destination(
        self, tmp_path: Path, directory: str
    ) -> None:
        """Image caches outside the destination abort the run."""
        destination = tmp_path / "out"
        destination.mkdir()
        (destination / "keep.html").write_text("keep")
        generator = make_generator(
            destination,
            entries=[entry("/")],
            glide=GlideConfig(directory=directory),
        )

        with pytest.raises(ImageConfigurationError):
            generator.generate()

        assert generator.state == GenerationState.FAILED
        assert (destination / "keep.html").exists()
        assert GeneratorMetrics.get_instance().runs_failed_total == 1

    def test_after_callback(self, tmp_path: Path) -> None:
        """The callback runs once after generation; the last one wins."""
        calls: list[str] = []
        generator = make_generator(tmp_path / "out", entries=[entry("/")])

        returned = generator.after(lambda: calls.append("first")).after(
            lambda: calls.append(f"second:{generator.state.name}")
        )
        generator.generate()

        assert returned is generator
        assert calls == ["second:DONE"]

    def test_callback_not_called_on_fatal_error(self, tmp_path: Path) -> None:
        """A fatal error skips the callback."""
        calls: list[str] = []
        generator = make_generator(
            tmp_path / "out", glide=GlideConfig(directory="..")
        ).after(lambda: calls.append("called"))

        with pytest.raises(ImageConfigurationError):
            generator.generate()

        assert calls == []

    def test_metrics(self, tmp_path: Path) -> None:
        """Runs update the metrics."""
        renderer = StubRenderer({"/gone": UrlNotFoundError("/gone")})
        generator = make_generator(
            tmp_path / "out",
            entries=[entry("/"), entry("/gone")],
            renderer=renderer,
        )

        generator.generate()

        metrics = GeneratorMetrics.get_instance()
        assert metrics.pages_generated_total == 1
        assert metrics.pages_failed_total == 1
        assert metrics.bytes_written_total == len("<html>/</html>")


class TestSymlinks:
    """Tests for symlink creation."""

    def test_creates_symlink(self, tmp_path: Path) -> None:
        """Links point at their source."""
        source = tmp_path / "src" / "img"
        source.mkdir(parents=True)
        (source / "logo.png").write_bytes(b"png")
        destination = tmp_path / "out"
        reporter = RecordingReporter()
        generator = make_generator(
            destination,
            reporter=reporter,
            symlinks={str(source): "static/assets"},
        )

        result = generator.generate()

        link = destination / "static" / "assets"
        assert link.is_symlink()
        assert link.resolve() == source.resolve()
        assert (link / "logo.png").read_bytes() == b"png"
        assert reporter.of_kind("line") == [f"{source} symlinked to {link}"]
        assert result.manifest.symlinks_created == [str(link)]

    def test_existing_destination_is_untouched(self, tmp_path: Path) -> None:
        """A path produced by a page is not replaced by a link."""
        source = tmp_path / "src"
        source.mkdir()
        destination = tmp_path / "out"
        reporter = RecordingReporter()
        generator = make_generator(
            destination,
            entries=[entry("/about")],
            reporter=reporter,
            symlinks={str(source): "about"},
        )

        result = generator.generate()

        target = destination / "about"
        assert not target.is_symlink()
        assert (target / "index.html").exists()
        assert reporter.of_kind("line") == [
            f"Symlink not created. {target} already exists."
        ]
        assert result.manifest.symlinks_skipped == [str(target)]
        assert GeneratorMetrics.get_instance().symlinks_skipped_total == 1

    def test_declaration_order(self, tmp_path: Path) -> None:
        """Links are created in declaration order; later duplicates skip."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        destination = tmp_path / "out"
        reporter = RecordingReporter()
        generator = make_generator(
            destination,
            reporter=reporter,
            symlinks={str(first): "shared", str(second): "shared/"},
        )

        generator.generate()

        target = destination / "shared"
        assert target.resolve() == first.resolve()
        assert reporter.of_kind("line")[1] == (
            f"Symlink not created. {target} already exists."
        )


class TestCopyFiles:
    """Tests for directory copies."""

    def test_copies_recursively(self, tmp_path: Path) -> None:
        """Directories are copied with their contents."""
        source = tmp_path / "public"
        (source / "css").mkdir(parents=True)
        (source / "css" / "site.css").write_text("body{}")
        destination = tmp_path / "out"
        reporter = RecordingReporter()
        generator = make_generator(
            destination,
            reporter=reporter,
            copy={str(source): "static"},
        )

        result = generator.generate()

        target = destination / "static"
        assert (target / "css" / "site.css").read_text() == "body{}"
        assert not target.is_symlink()
        assert reporter.of_kind("line") == [f"{source} copied to {target}"]
        assert result.manifest.copied == [str(target)]

    def test_merges_into_existing_directory(self, tmp_path: Path) -> None:
        """Copies merge into directories created by pages."""
        source = tmp_path / "public"
        source.mkdir()
        (source / "extra.txt").write_text("extra")
        destination = tmp_path / "out"
        generator = make_generator(
            destination,
            entries=[entry("/docs")],
            copy={str(source): "docs"},
        )

        generator.generate()

        assert output_files(destination) == ["docs/extra.txt", "docs/index.html"]

    def test_missing_source_is_skipped(self, tmp_path: Path) -> None:
        """Missing sources are reported and the run continues."""
        missing = tmp_path / "missing"
        present = tmp_path / "present"
        present.mkdir()
        (present / "a.txt").write_text("a")
        destination = tmp_path / "out"
        reporter = RecordingReporter()
        generator = make_generator(
            destination,
            reporter=reporter,
            copy={str(missing): "m", str(present): "p"},
        )

        generator.generate()

        assert reporter.of_kind("line") == [
            f"{missing} not copied. Directory does not exist.",
            f"{present} copied to {destination / 'p'}",
        ]
        assert output_files(destination) == ["p/a.txt"]

    def test_copies_run_after_symlinks(self, tmp_path: Path) -> None:
        """Links are made before copies."""
        linked = tmp_path / "linked"
        copied = tmp_path / "copied"
        linked.mkdir()
        copied.mkdir()
        reporter = RecordingReporter()
        generator = make_generator(
            tmp_path / "out",
            reporter=reporter,
            symlinks={str(linked): "l"},
            copy={str(copied): "c"},
        )

        generator.generate()

        lines = reporter.of_kind("line")
        assert "symlinked" in lines[0]
        assert "copied to" in lines[1]
