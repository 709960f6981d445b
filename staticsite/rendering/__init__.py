"""Synthetic requests and page renderers."""

from staticsite.rendering.errors import RedirectError, RenderError, UrlNotFoundError
from staticsite.rendering.renderer import (
    PageRenderer,
    TemplatePageRenderer,
    template_filename,
)
from staticsite.rendering.request import GenerationRequest


__all__ = [
    "GenerationRequest",
    "PageRenderer",
    "RedirectError",
    "RenderError",
    "TemplatePageRenderer",
    "UrlNotFoundError",
    "template_filename",
]
