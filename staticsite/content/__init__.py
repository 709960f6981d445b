"""Content entries, declared routes and URL helpers."""

from staticsite.content.errors import ContentError
from staticsite.content.models import Content, Entry, Route
from staticsite.content.repository import EntryRepository, FileEntryRepository
from staticsite.content.router import RouteTable
from staticsite.content.urls import normalize_path, tidy_url, url_to_relative_path


__all__ = [
    "Content",
    "ContentError",
    "Entry",
    "EntryRepository",
    "FileEntryRepository",
    "Route",
    "RouteTable",
    "normalize_path",
    "tidy_url",
    "url_to_relative_path",
]
