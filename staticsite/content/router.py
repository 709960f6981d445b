"""Declared routes and their conversion into pages."""

import re
from collections.abc import Mapping

import structlog
from pydantic import ValidationError

from staticsite.constants import COMPONENT_CONTENT
from staticsite.content.errors import ContentError
from staticsite.content.models import Route
from staticsite.content.urls import normalize_path


logger = structlog.get_logger()

_WILDCARD_PATTERN = re.compile(r"\{[^}]*\}")

# Route data keys mapped onto Route fields instead of template data
_ROUTE_FIELDS = frozenset({"template", "redirect", "redirect_status"})


class RouteTable:
    """Routes declared in configuration, URL -> template name or data.

    Routes with parameter segments such as ``/blog/{slug}`` cannot be
    rendered without bound parameters and are never turned into pages.
    """

    def __init__(self, routes: Mapping[str, str | Mapping[str, object]]) -> None:
        """Initialize the route table.

        Args:
            routes: Declared routes in declaration order.
        """
        self._routes = dict(routes)

    @staticmethod
    def has_wildcard(url: str) -> bool:
        """Check whether a route URL contains a parameter segment."""
        return _WILDCARD_PATTERN.search(url) is not None

    @staticmethod
    def standardize(
        routes: Mapping[str, str | Mapping[str, object]],
    ) -> dict[str, dict[str, object]]:
        """Normalize route declarations into URL -> route data mappings.

        A bare string is shorthand for ``{"template": <string>}``.

        Args:
            routes: Declared routes.

        Returns:
            Mapping of normalized URL to route data.
        """
        standardized: dict[str, dict[str, object]] = {}
        for url, data in routes.items():
            if isinstance(data, str):
                data = {"template": data}
            standardized[normalize_path(url)] = dict(data)
        return standardized

    def static_routes(self) -> list[Route]:
        """Build routes for every declaration without a wildcard.

        Returns:
            Routes in declaration order.

        Raises:
            ContentError: If route data is malformed.
        """
        declared = {
            url: data
            for url, data in self._routes.items()
            if not self.has_wildcard(url)
        }
        skipped = len(self._routes) - len(declared)
        if skipped:
            logger.debug(
                "wildcard_routes_skipped",
                component=COMPONENT_CONTENT,
                skipped_count=skipped,
            )

        routes = []
        for url, data in self.standardize(declared).items():
            fields = {key: data[key] for key in _ROUTE_FIELDS if key in data}
            extra = {
                key: value for key, value in data.items() if key not in _ROUTE_FIELDS
            }
            try:
                routes.append(Route(url=url, data=extra, **fields))
            except ValidationError as e:
                raise ContentError(f"Invalid route {url}: {e}") from e
        return routes
