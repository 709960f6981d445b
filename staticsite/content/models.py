"""Content records that can be turned into pages."""

from typing import Annotated, Protocol

from pydantic import Field

from staticsite.constants import DEFAULT_REDIRECT_STATUS, DEFAULT_TEMPLATE
from staticsite.data_model import StrictBaseModel


class Content(Protocol):
    """Anything the generator can render as a page."""

    @property
    def url(self) -> str | None: ...

    @property
    def template(self) -> str: ...

    @property
    def redirect(self) -> str | None: ...

    @property
    def redirect_status(self) -> int: ...

    def is_generatable(self) -> bool: ...

    def to_context(self) -> dict[str, object]: ...


class Entry(StrictBaseModel):
    """A content entry read from the content directory.

    Attributes:
        id: Stable identifier (relative source path without suffix).
        url: Public URL, or None for entries without a page.
        title: Display title.
        template: Template name, without the ``.html`` suffix.
        published: False for drafts.
        redirect: URL the entry redirects to instead of rendering.
        redirect_status: HTTP status used for the redirect.
        data: Remaining front matter fields.
        content: Body text following the front matter.
    """

    id: Annotated[str, Field(min_length=1)]
    url: str | None = None
    title: str = ""
    template: str = DEFAULT_TEMPLATE
    published: bool = True
    redirect: str | None = None
    redirect_status: int = DEFAULT_REDIRECT_STATUS
    data: dict[str, object] = Field(default_factory=dict)
    content: str = ""

    def is_generatable(self) -> bool:
        """Published entries with a URL get a page."""
        return self.published and self.url is not None

    def to_context(self) -> dict[str, object]:
        """Template variables describing this entry."""
        return {
            **self.data,
            "id": self.id,
            "url": self.url,
            "title": self.title,
            "content": self.content,
            "published": self.published,
        }


class Route(StrictBaseModel):
    """A page synthesized from a declared route.

    Attributes:
        url: Route URL.
        template: Template name, without the ``.html`` suffix.
        redirect: URL the route redirects to instead of rendering.
        redirect_status: HTTP status used for the redirect.
        data: Extra template variables declared with the route.
    """

    url: str
    template: str = DEFAULT_TEMPLATE
    redirect: str | None = None
    redirect_status: int = DEFAULT_REDIRECT_STATUS
    data: dict[str, object] = Field(default_factory=dict)

    def is_generatable(self) -> bool:
        """Declared routes are always rendered."""
        return True

    def to_context(self) -> dict[str, object]:
        """Template variables describing this route."""
        return {**self.data, "url": self.url}
