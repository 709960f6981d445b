"""Console progress reporting for generation runs."""

from typing import Protocol, TextIO

import click


# Moves the cursor up one line and clears it, replacing the progress line
ERASE_PREVIOUS_LINE = "\x1b[1A\x1b[2K"


class Reporter(Protocol):
    """Receives progress messages from the generator."""

    def info(self, message: str) -> None:
        """Report a run summary message."""
        ...

    def comment(self, message: str) -> None:
        """Report work that is about to start."""
        ...

    def line(self, message: str) -> None:
        """Report a file operation notice."""
        ...

    def page_generated(self, url: str) -> None:
        """Report a page written successfully."""
        ...

    def page_failed(self, url: str, reason: str) -> None:
        """Report a page that was not generated."""
        ...


class ConsoleReporter:
    """Line-oriented console reporter.

    On a terminal, per-page results overwrite the preceding
    ``Generating ...`` line.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize the reporter.

        Args:
            stream: Output stream, stdout when omitted.
        """
        self._stream = stream
        self._pending_comment = False

    def info(self, message: str) -> None:
        self._echo(click.style(message, fg="green"))

    def comment(self, message: str) -> None:
        self._echo(click.style(message, fg="yellow"))
        self._pending_comment = True

    def line(self, message: str) -> None:
        self._echo(message)

    def page_generated(self, url: str) -> None:
        self._echo(f"{self._erase()}{click.style('[✔]', fg='green')} {url}")

    def page_failed(self, url: str, reason: str) -> None:
        self._echo(f"{self._erase()}{click.style('[✘]', fg='red')} {url} ({reason})")

    def _erase(self) -> str:
        stream = self._stream or click.get_text_stream("stdout")
        return ERASE_PREVIOUS_LINE if self._pending_comment and stream.isatty() else ""

    def _echo(self, message: str) -> None:
        self._pending_comment = False
        click.echo(message, file=self._stream)
