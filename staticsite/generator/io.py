"""Atomic page file writes for the generator."""

import hashlib
from pathlib import Path

import structlog

from staticsite.constants import COMPONENT_GENERATOR
from staticsite.generator.models import GeneratedFile


logger = structlog.get_logger()


class AtomicWriter:
    """Writes page files so readers never see a partial page.

    Text goes to a hidden temporary sibling tagged with the run ID, which
    then replaces the target. If either step fails the temporary file is
    removed and the error propagates.
    """

    def __init__(self, base_dir: Path, run_id: str | None = None) -> None:
        """Initialize the writer.

        Args:
            base_dir: Output root that reported paths are relative to.
            run_id: Run identifier, used in temporary names and logs.
        """
        self._base_dir = Path(base_dir)
        self._tag = run_id or "write"
        self._log = logger.bind(component=COMPONENT_GENERATOR)
        if run_id:
            self._log = self._log.bind(run_id=run_id)

    def temp_path(self, path: Path) -> Path:
        """Get the temporary sibling used while writing path."""
        return path.with_name(f".{path.name}.{self._tag}.tmp")

    def relative_path(self, path: Path) -> str:
        """Get path relative to the output root, or in full if outside it."""
        try:
            return path.relative_to(self._base_dir).as_posix()
        except ValueError:
            return str(path)

    def write(self, path: Path, content: str) -> GeneratedFile:
        """Write a page file atomically.

        The parent directory must already exist.

        Args:
            path: Absolute target path.
            content: Page text, encoded as UTF-8.

        Returns:
            GeneratedFile describing the written page.

        Raises:
            OSError: If the file cannot be written or moved into place.
        """
        data = content.encode("utf-8")
        relative = self.relative_path(path)
        temp_path = self.temp_path(path)

        try:
            temp_path.write_bytes(data)
            temp_path.replace(path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            self._log.warning("file_write_failed", path=relative, error=str(e))
            raise

        sha256 = hashlib.sha256(data).hexdigest()
        self._log.debug(
            "file_written",
            path=relative,
            bytes=len(data),
            sha256=sha256[:12],
        )

        return GeneratedFile(
            path=relative,
            absolute_path=str(path),
            bytes_written=len(data),
            sha256=sha256,
        )
