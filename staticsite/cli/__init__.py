"""Command line interface."""

from staticsite.cli.main import cli


__all__ = ["cli"]
