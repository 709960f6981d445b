"""File-backed content entries with YAML front matter."""

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

import structlog
import yaml
from pydantic import ValidationError

from staticsite.constants import COMPONENT_CONTENT, CONTENT_SUFFIXES
from staticsite.content.errors import ContentError
from staticsite.content.models import Content, Entry
from staticsite.content.urls import normalize_path


logger = structlog.get_logger()

FRONT_MATTER_DELIMITER = "---"

# Front matter keys mapped onto Entry fields instead of free-form data
_ENTRY_FIELDS = frozenset(
    {"url", "title", "template", "published", "redirect", "redirect_status"}
)


def split_front_matter(text: str) -> tuple[dict[str, object], str]:
    """Split a document into its YAML front matter and body.

    Args:
        text: Full document text.

    Returns:
        Tuple of (front matter mapping, body). Documents without front
        matter return an empty mapping and the unchanged text.

    Raises:
        yaml.YAMLError: If the front matter is not valid YAML.
        ValueError: If the front matter is not a mapping.
    """
    if not text.startswith(FRONT_MATTER_DELIMITER):
        return {}, text

    parts = text.split(FRONT_MATTER_DELIMITER, 2)
    if len(parts) < 3:
        return {}, text

    metadata = yaml.safe_load(parts[1]) or {}
    if not isinstance(metadata, dict):
        raise ValueError("front matter must be a mapping")

    return metadata, parts[2].lstrip("\n")


def url_for_path(relative_path: Path) -> str:
    """Derive an entry URL from its path inside the content directory.

    ``index.md`` -> ``/``, ``about.md`` -> ``/about``,
    ``blog/index.md`` -> ``/blog``, ``blog/post.md`` -> ``/blog/post``.
    """
    parts = list(relative_path.with_suffix("").parts)
    if parts and parts[-1] == "index":
        parts.pop()
    return normalize_path("/".join(parts))


class EntryRepository(Protocol):
    """Source of content entries."""

    def all(self) -> Sequence[Content]:
        """Return every entry, drafts included."""
        ...


class FileEntryRepository:
    """Reads entries from ``*.md`` and ``*.html`` files under a directory."""

    def __init__(self, directory: Path) -> None:
        """Initialize the repository.

        Args:
            directory: Root content directory.
        """
        self._directory = Path(directory)
        self._log = logger.bind(component=COMPONENT_CONTENT)

    @property
    def directory(self) -> Path:
        """Get the content directory."""
        return self._directory

    def all(self) -> list[Entry]:
        """Load every entry, in sorted path order.

        A missing content directory yields no entries.

        Returns:
            List of entries, drafts included.

        Raises:
            ContentError: If a file cannot be parsed.
        """
        if not self._directory.is_dir():
            self._log.warning("content_directory_missing", path=str(self._directory))
            return []

        files = sorted(
            path
            for path in self._directory.rglob("*")
            if path.is_file() and path.suffix in CONTENT_SUFFIXES
        )
        entries = [self._load(path) for path in files]

        self._log.info(
            "entries_loaded",
            path=str(self._directory),
            entry_count=len(entries),
            draft_count=sum(1 for entry in entries if not entry.published),
        )
        return entries

    def _load(self, path: Path) -> Entry:
        relative = path.relative_to(self._directory)

        try:
            metadata, body = split_front_matter(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, ValueError) as e:
            raise ContentError(f"Invalid front matter in {relative}: {e}", path) from e

        fields = {key: metadata[key] for key in _ENTRY_FIELDS if key in metadata}
        data = {
            key: value for key, value in metadata.items() if key not in _ENTRY_FIELDS
        }

        if data.pop("draft", False):
            fields["published"] = False

        if "url" not in fields:
            fields["url"] = url_for_path(relative)
        elif fields["url"] is not None:
            fields["url"] = normalize_path(str(fields["url"]))

        try:
            return Entry(
                id=relative.with_suffix("").as_posix(),
                data=data,
                content=body,
                **fields,
            )
        except ValidationError as e:
            raise ContentError(f"Invalid entry {relative}: {e}", path) from e
