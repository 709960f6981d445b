"""Data models describing a generation run."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GeneratedFile:
    """Information about a generated file.

    Attributes:
        path: Relative path from the destination directory.
        absolute_path: Absolute path to the file.
        bytes_written: Number of bytes written.
        sha256: SHA-256 checksum of the content.
    """

    path: str
    absolute_path: str
    bytes_written: int
    sha256: str


@dataclass(frozen=True)
class PageFailure:
    """A page that was not generated.

    Attributes:
        url: Page URL.
        reason: Human-readable reason, as reported to the console.
    """

    url: str
    reason: str


@dataclass
class GenerationManifest:
    """Manifest of everything a run produced.

    Attributes:
        run_id: Run identifier.
        destination: Output root directory.
        generated_at: When the run started (ISO timestamp).
        files: Generated page files, in generation order.
        failures: Pages that were not generated.
        symlinks_created: Symlink paths created.
        symlinks_skipped: Symlink paths skipped because they already existed.
        copied: Directories copied into the destination.
        total_bytes: Total bytes written for pages.
        duration_ms: Run duration in milliseconds.
    """

    run_id: str
    destination: str
    generated_at: str
    files: list[GeneratedFile] = field(default_factory=list)
    failures: list[PageFailure] = field(default_factory=list)
    symlinks_created: list[str] = field(default_factory=list)
    symlinks_skipped: list[str] = field(default_factory=list)
    copied: list[str] = field(default_factory=list)
    total_bytes: int = 0
    duration_ms: float = 0.0

    def add_file(self, file_info: GeneratedFile) -> None:
        """Add a generated file to the manifest.

        Args:
            file_info: Information about the generated file.
        """
        self.files.append(file_info)
        self.total_bytes += file_info.bytes_written

    def add_failure(self, failure: PageFailure) -> None:
        """Record a page that was not generated."""
        self.failures.append(failure)


@dataclass
class GenerationResult:
    """Result of a generation run.

    Attributes:
        success: True when every page was generated.
        manifest: Manifest of the run.
    """

    success: bool
    manifest: GenerationManifest
