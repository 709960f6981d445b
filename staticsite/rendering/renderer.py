"""Page renderers: the pluggable seam between pages and templates."""

from pathlib import Path, PurePosixPath
from typing import NoReturn, Protocol

import structlog
from jinja2 import Environment, FileSystemLoader, select_autoescape

from staticsite.constants import COMPONENT_RENDERER, DEFAULT_REDIRECT_STATUS
from staticsite.content.models import Content
from staticsite.content.urls import tidy_url
from staticsite.imaging.errors import ImageConfigurationError
from staticsite.imaging.manipulator import ImageManipulator
from staticsite.imaging.url_builder import StaticUrlBuilder
from staticsite.rendering.errors import RedirectError, UrlNotFoundError
from staticsite.rendering.request import GenerationRequest


logger = structlog.get_logger()


class PageRenderer(Protocol):
    """Turns content into page text for a synthetic request."""

    def bind_images(self, cache_dir: Path, url_root: str) -> None:
        """Write processed images to cache_dir and link them under url_root."""
        ...

    def render(self, content: Content, request: GenerationRequest) -> str:
        """Render content, raising UrlNotFoundError or RedirectError."""
        ...


def template_filename(template: str) -> str:
    """Map a template name onto its file, defaulting to ``.html``."""
    if PurePosixPath(template).suffix:
        return template
    return f"{template}.html"


def _not_found(url: str | None = None) -> NoReturn:
    raise UrlNotFoundError(url or "")


def _redirect(url: str, status: int = DEFAULT_REDIRECT_STATUS) -> NoReturn:
    raise RedirectError(tidy_url(url), status)


class TemplatePageRenderer:
    """Renders pages with Jinja2 templates.

    Templates are loaded from a directory with auto-escaping enabled for
    HTML and XML. Every template receives ``page`` (the content's
    variables), ``request`` (the synthetic request) and ``site`` (the
    static site configuration), plus these globals:

    - ``glide(path, **params)``: URL of a processed image,
    - ``not_found()``: end the page with a 404 outcome,
    - ``redirect(url, status=302)``: end the page with a redirect.
    """

    def __init__(self, templates_dir: Path, image_source_dir: Path) -> None:
        """Initialize the renderer.

        Args:
            templates_dir: Directory holding the templates.
            image_source_dir: Directory original images are read from.
        """
        self._templates_dir = Path(templates_dir)
        self._manipulator = ImageManipulator(image_source_dir)
        self._url_builder: StaticUrlBuilder | None = None
        self._log = logger.bind(component=COMPONENT_RENDERER)

        self._env = Environment(
            loader=FileSystemLoader(str(self._templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._env.globals.update(
            glide=self._glide,
            not_found=_not_found,
            redirect=_redirect,
        )

    @property
    def url_builder(self) -> StaticUrlBuilder | None:
        """Get the bound image URL builder."""
        return self._url_builder

    def bind_images(self, cache_dir: Path, url_root: str) -> None:
        """Send processed images into the generated tree.

        Args:
            cache_dir: Directory processed images are written to.
            url_root: Public URL of cache_dir.

        Raises:
            ImageConfigurationError: If the image source directory is missing.
        """
        if not self._manipulator.source_dir.is_dir():
            raise ImageConfigurationError(
                f"Image source directory does not exist: {self._manipulator.source_dir}"
            )

        self._manipulator.set_cache(cache_dir)
        self._url_builder = StaticUrlBuilder(self._manipulator, url_root)
        self._log.info(
            "images_bound",
            cache_dir=str(cache_dir),
            url_root=url_root,
        )

    def render(self, content: Content, request: GenerationRequest) -> str:
        """Render content through its template.

        Args:
            content: Entry or route to render.
            request: Synthetic request for the page.

        Returns:
            Rendered page text.

        Raises:
            RedirectError: If the content redirects.
            UrlNotFoundError: If the template ends the page with a 404.
            jinja2.TemplateNotFound: If the template does not exist.
        """
        if content.redirect:
            raise RedirectError(tidy_url(content.redirect), content.redirect_status)

        template = self._env.get_template(template_filename(content.template))
        return template.render(
            page=content.to_context(),
            request=request,
            site=request.config,
        )

    def _glide(self, path: str, **params: object) -> str:
        if self._url_builder is None:
            raise ImageConfigurationError("Images are not bound to an output directory")
        return self._url_builder.build(path, params)
