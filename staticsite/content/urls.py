"""URL helpers shared by content, imaging and the generator."""

import re
from pathlib import PurePosixPath

from staticsite.constants import INDEX_FILENAME


_SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_REPEATED_SLASHES = re.compile(r"/{2,}")


def tidy_url(url: str) -> str:
    """Collapse repeated slashes and drop the trailing slash.

    The ``//`` following a scheme is kept.
    A bare root stays ``/``.

    Args:
        url: URL or path to tidy.

    Returns:
        Tidied URL.
    """
    match = _SCHEME_PATTERN.match(url)
    prefix = match.group(0) if match else ""
    rest = _REPEATED_SLASHES.sub("/", url[len(prefix) :])

    if len(rest) > 1 or prefix:
        rest = rest.rstrip("/")

    return f"{prefix}{rest}" or "/"


def normalize_path(url: str) -> str:
    """Ensure a site-relative URL starts with a single slash."""
    return tidy_url("/" + url.lstrip("/"))


def url_to_relative_path(url: str) -> str:
    """Map a page URL onto a file path relative to the output root.

    URLs whose last segment carries an extension are written verbatim,
    everything else becomes a directory with an index file.

    Examples:
        ``/`` -> ``index.html``, ``/about`` -> ``about/index.html``,
        ``/feed.xml`` -> ``feed.xml``.

    Args:
        url: Site-relative page URL.

    Returns:
        POSIX-style relative path.
    """
    path = PurePosixPath(normalize_path(url).lstrip("/"))

    if path.suffix:
        return str(path)

    return str(path / INDEX_FILENAME)
