"""CLI commands for the static site generator."""

import logging
import sys
import uuid
from pathlib import Path

import click
import structlog
import yaml
from pydantic import ValidationError

from staticsite import __version__
from staticsite.config.error_hints import format_validation_error
from staticsite.config.loader import ConfigLoader, ConfigValidationError
from staticsite.config.schemas import AppConfig
from staticsite.constants import COMPONENT_CLI
from staticsite.content.errors import ContentError
from staticsite.generator import Generator, GeneratorMetrics
from staticsite.imaging.errors import ImageConfigurationError
from staticsite.observability.logging import (
    bind_run_context,
    clear_run_context,
    configure_logging,
)
from staticsite.settings import get_settings


logger = structlog.get_logger()


def _setup_logging(run_id: str, *, json_logs: bool, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    configure_logging(level=log_level, json_format=json_logs)
    bind_run_context(run_id)
    click.get_current_context().call_on_close(clear_run_context)


def _load_configuration(config_path: Path, run_id: str) -> AppConfig:
    """Load and validate configuration, exiting with status 1 on failure.

    Args:
        config_path: Path to the YAML configuration file.
        run_id: Run identifier.

    Returns:
        Validated configuration.
    """
    loader = ConfigLoader(run_id=run_id)

    try:
        return loader.load(config_path)
    except (
        ConfigValidationError,
        ValidationError,
        FileNotFoundError,
        yaml.YAMLError,
    ):
        click.echo("Configuration validation failed:", err=True)
        for error in loader.validation_errors:
            formatted = format_validation_error(
                location=error["loc"],
                message=error["msg"],
                error_type=error.get("type", "unknown"),
                include_hint=True,
            )
            click.echo(f"  - {formatted}", err=True)
        sys.exit(1)


config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Path to the configuration file (default: $STATIC_SITE_CONFIG_PATH "
    "or static_site.yaml).",
)


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Render a whole website to static files."""


@cli.command()
@config_option
@click.option(
    "--json-logs",
    is_flag=True,
    help="Emit structured logs as JSON.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging.",
)
def generate(
    config_path: Path | None,
    json_logs: bool,
    verbose: bool,
) -> None:
    """Generate the static site into the configured destination."""
    settings = get_settings()
    run_id = str(uuid.uuid4())

    _setup_logging(
        run_id,
        json_logs=json_logs or settings.json_logs,
        verbose=verbose or settings.verbose,
    )
    log = logger.bind(run_id=run_id, component=COMPONENT_CLI, command="generate")

    config = _load_configuration(config_path or settings.config_path, run_id)
    generator = Generator.from_config(config, run_id=run_id)

    def summarize() -> None:
        metrics = GeneratorMetrics.get_instance()
        click.echo(
            f"{metrics.pages_generated_total} page(s) generated, "
            f"{metrics.pages_failed_total} not generated."
        )

    try:
        result = generator.after(summarize).generate()
    except (ImageConfigurationError, ContentError, OSError) as e:
        log.error("generate_failed", error=str(e))
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    log.info(
        "generate_complete",
        success=result.success,
        page_count=len(result.manifest.files),
        failure_count=len(result.manifest.failures),
    )


@cli.command()
@config_option
def validate(config_path: Path | None) -> None:
    """Validate the configuration file without generating anything."""
    settings = get_settings()
    run_id = str(uuid.uuid4())
    _setup_logging(run_id, json_logs=settings.json_logs, verbose=settings.verbose)

    config = _load_configuration(config_path or settings.config_path, run_id)

    click.echo("Configuration valid.")
    click.echo(f"  Destination: {config.static_site.destination}")
    click.echo(f"  Routes: {len(config.site.routes)}")
    click.echo(f"  Checksum: {config.compute_checksum()}")


@cli.command()
@config_option
def pages(config_path: Path | None) -> None:
    """List the pages a run would generate, in order."""
    settings = get_settings()
    run_id = str(uuid.uuid4())
    _setup_logging(run_id, json_logs=settings.json_logs, verbose=settings.verbose)

    config = _load_configuration(config_path or settings.config_path, run_id)
    generator = Generator.from_config(config, run_id=run_id)

    try:
        site_pages = generator.pages()
    except ContentError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for page in site_pages:
        click.echo(f"{page.url}\t{page.relative_path}")


if __name__ == "__main__":
    cli()
