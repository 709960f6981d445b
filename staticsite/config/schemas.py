"""Configuration schemas for the static site generator."""

import hashlib
import json
from pathlib import Path
from typing import Annotated

from pydantic import ConfigDict, Field, field_validator

from staticsite.constants import DEFAULT_GLIDE_DIRECTORY
from staticsite.data_model import StrictBaseModel


RouteData = str | dict[str, object]


def _resolve(base_dir: Path, path: str | Path) -> Path:
    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return candidate
    return base_dir / candidate


class GlideConfig(StrictBaseModel):
    """Processed image settings.

    Attributes:
        directory: Image cache directory, relative to the destination.
    """

    directory: Annotated[str, Field(min_length=1)] = DEFAULT_GLIDE_DIRECTORY


class StaticSiteConfig(StrictBaseModel):
    """Settings for one static generation run.

    Attributes:
        destination: Output root directory.
        base_url: Public URL prefix the generated site is served from.
        exclude: URLs that are never rendered.
        symlinks: Source path -> destination path relative to the output root.
        copy_paths: Source directory -> destination path relative to the
            output root. Read from the ``copy`` key.
        glide: Processed image settings.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    destination: Path
    base_url: str = "/"
    exclude: list[str] = Field(default_factory=list)
    symlinks: dict[str, str] = Field(default_factory=dict)
    copy_paths: dict[str, str] = Field(default_factory=dict, alias="copy")
    glide: GlideConfig = Field(default_factory=GlideConfig)

    @field_validator("exclude", mode="before")
    @classmethod
    def _none_is_empty_list(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("symlinks", "copy_paths", mode="before")
    @classmethod
    def _none_is_empty_map(cls, value: object) -> object:
        return {} if value is None else value

    def resolve_paths(self, base_dir: Path) -> "StaticSiteConfig":
        """Return a copy with relative filesystem paths anchored at base_dir.

        Args:
            base_dir: Directory relative paths are interpreted against.

        Returns:
            New configuration with absolute destination and sources.
        """
        return self.model_copy(
            update={
                "destination": _resolve(base_dir, self.destination),
                "symlinks": {
                    str(_resolve(base_dir, source)): dest
                    for source, dest in self.symlinks.items()
                },
                "copy_paths": {
                    str(_resolve(base_dir, source)): dest
                    for source, dest in self.copy_paths.items()
                },
            }
        )


class SiteConfig(StrictBaseModel):
    """Where the site's content, templates and images live.

    Attributes:
        content: Directory holding content entries.
        templates: Directory holding Jinja2 templates.
        images: Directory original images are read from.
        routes: Declared routes, URL -> template name or route data.
    """

    content: Path = Path("content")
    templates: Path = Path("templates")
    images: Path = Path(".")
    routes: dict[str, RouteData] = Field(default_factory=dict)

    @field_validator("routes", mode="before")
    @classmethod
    def _none_is_empty_map(cls, value: object) -> object:
        return {} if value is None else value

    def resolve_paths(self, base_dir: Path) -> "SiteConfig":
        """Return a copy with relative directories anchored at base_dir."""
        return self.model_copy(
            update={
                "content": _resolve(base_dir, self.content),
                "templates": _resolve(base_dir, self.templates),
                "images": _resolve(base_dir, self.images),
            }
        )


class AppConfig(StrictBaseModel):
    """Complete configuration file contents.

    Attributes:
        static_site: Generation settings.
        site: Content, template and route settings.
    """

    static_site: StaticSiteConfig
    site: SiteConfig = Field(default_factory=SiteConfig)

    def resolve_paths(self, base_dir: Path) -> "AppConfig":
        """Return a copy with every relative path anchored at base_dir."""
        return self.model_copy(
            update={
                "static_site": self.static_site.resolve_paths(base_dir),
                "site": self.site.resolve_paths(base_dir),
            }
        )

    def compute_checksum(self) -> str:
        """Compute SHA-256 checksum of the normalized configuration.

        Returns:
            Hex-encoded SHA-256 digest.
        """
        data = self.model_dump(mode="json", by_alias=True)
        normalized = json.dumps(data, sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(normalized.encode("utf-8")).hexdigest()
