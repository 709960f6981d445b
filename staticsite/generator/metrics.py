"""Generator metrics collection."""

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class GeneratorMetrics:
    """Counters for generation runs.

    Attributes:
        pages_generated_total: Pages written.
        pages_failed_total: Pages that were not generated.
        bytes_written_total: Bytes written for pages.
        symlinks_created_total: Symlinks created.
        symlinks_skipped_total: Symlinks skipped because the path existed.
        directories_copied_total: Directories copied.
        runs_failed_total: Runs aborted by a fatal error.
        last_run_duration_ms: Duration of the last completed run.
    """

    pages_generated_total: int = 0
    pages_failed_total: int = 0
    bytes_written_total: int = 0
    symlinks_created_total: int = 0
    symlinks_skipped_total: int = 0
    directories_copied_total: int = 0
    runs_failed_total: int = 0
    last_run_duration_ms: float = 0.0

    _instance: ClassVar["GeneratorMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "GeneratorMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_page_generated(self, bytes_written: int) -> None:
        """Record a generated page.

        Args:
            bytes_written: Size of the written file.
        """
        self.pages_generated_total += 1
        self.bytes_written_total += bytes_written

    def record_page_failed(self) -> None:
        """Record a page that was not generated."""
        self.pages_failed_total += 1

    def record_symlink(self, *, created: bool) -> None:
        """Record a created or skipped symlink."""
        if created:
            self.symlinks_created_total += 1
        else:
            self.symlinks_skipped_total += 1

    def record_directory_copied(self) -> None:
        """Record a copied directory."""
        self.directories_copied_total += 1

    def record_run_failure(self) -> None:
        """Record a run aborted by a fatal error."""
        self.runs_failed_total += 1

    def record_run_duration(self, duration_ms: float) -> None:
        """Record the duration of a completed run."""
        self.last_run_duration_ms = duration_ms

    def get_summary(self) -> dict[str, object]:
        """Get metrics summary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "pages_generated_total": self.pages_generated_total,
            "pages_failed_total": self.pages_failed_total,
            "bytes_written_total": self.bytes_written_total,
            "symlinks_created_total": self.symlinks_created_total,
            "symlinks_skipped_total": self.symlinks_skipped_total,
            "directories_copied_total": self.directories_copied_total,
            "runs_failed_total": self.runs_failed_total,
            "last_run_duration_ms": self.last_run_duration_ms,
        }
