"""Configuration loader with validation and state machine."""

import hashlib
import time
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from staticsite.config.schemas import AppConfig
from staticsite.config.state_machine import ConfigState, ConfigStateMachine
from staticsite.constants import COMPONENT_CONFIG


logger = structlog.get_logger()


class ConfigValidationError(Exception):
    """Raised when a configuration file is not a mapping."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: List of validation error details.
            file_path: Path to the file that failed validation.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


class ConfigLoader:
    """Loads and validates the static site configuration file.

    Implements a state machine for configuration loading:
    UNLOADED -> LOADING -> READY, or FAILED on any error.

    The loaded configuration is immutable; relative paths inside the file
    are resolved against the directory containing it.
    """

    def __init__(self, run_id: str) -> None:
        """Initialize the loader.

        Args:
            run_id: Unique identifier for the current run.
        """
        self._run_id = run_id
        self._state_machine = ConfigStateMachine()
        self._file_checksum: str | None = None
        self._validation_errors: list[dict[str, str]] = []
        self._validation_duration_ms: float = 0

    @property
    def state(self) -> ConfigState:
        """Get the current loader state."""
        return self._state_machine.state

    @property
    def file_checksum(self) -> str | None:
        """Get SHA-256 checksum of the loaded file."""
        return self._file_checksum

    @property
    def validation_errors(self) -> list[dict[str, str]]:
        """Get validation errors if any."""
        return self._validation_errors.copy()

    @property
    def validation_duration_ms(self) -> float:
        """Get validation duration in milliseconds."""
        return self._validation_duration_ms

    def load(self, config_path: Path) -> AppConfig:
        """Load and validate a configuration file.

        Args:
            config_path: Path to the YAML configuration file.

        Returns:
            Validated configuration with resolved paths.

        Raises:
            ConfigValidationError: If the file is not a YAML mapping.
            ValidationError: If the file does not match the schema.
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If YAML parsing fails.
        """
        start_time = time.perf_counter()
        self._state_machine.transition(ConfigState.LOADING)

        log = logger.bind(
            run_id=self._run_id,
            component=COMPONENT_CONFIG,
            file_path=str(config_path),
        )
        log.info("loading_config_file")

        try:
            content_bytes = config_path.read_bytes()
            self._file_checksum = hashlib.sha256(content_bytes).hexdigest()
            parsed = yaml.safe_load(content_bytes.decode("utf-8")) or {}

            if not isinstance(parsed, dict):
                self._state_machine.transition(ConfigState.FAILED)
                self._validation_errors.append(
                    {
                        "loc": "file",
                        "msg": "Configuration must be a mapping",
                        "type": "model_type",
                    }
                )
                log.error("config_not_a_mapping", phase="FAILED")
                raise ConfigValidationError(self._validation_errors, str(config_path))

            config = AppConfig.model_validate(parsed)
            config = config.resolve_paths(config_path.resolve().parent)

        except ValidationError as e:
            self._handle_validation_error(e, log)
            raise

        except FileNotFoundError as e:
            self._handle_file_error(e, log)
            raise

        except yaml.YAMLError as e:
            self._handle_yaml_error(e, log)
            raise

        self._state_machine.transition(ConfigState.READY)
        self._validation_duration_ms = (time.perf_counter() - start_time) * 1000

        log.info(
            "config_ready",
            phase="READY",
            file_sha256=self._file_checksum,
            route_count=len(config.site.routes),
            symlink_count=len(config.static_site.symlinks),
            copy_count=len(config.static_site.copy_paths),
            config_validation_duration_ms=round(self._validation_duration_ms, 2),
        )

        return config

    def _handle_validation_error(
        self,
        error: ValidationError,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        """Handle Pydantic validation error."""
        self._state_machine.transition(ConfigState.FAILED)

        for err in error.errors():
            self._validation_errors.append(
                {
                    "loc": ".".join(str(loc) for loc in err["loc"]),
                    "msg": err["msg"],
                    "type": err["type"],
                }
            )

        log.error(
            "config_validation_failed",
            phase="FAILED",
            validation_error_count=len(self._validation_errors),
            errors=self._validation_errors,
        )

    def _handle_file_error(
        self,
        error: FileNotFoundError,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        """Handle file not found error."""
        self._state_machine.transition(ConfigState.FAILED)
        self._validation_errors.append(
            {
                "loc": "file",
                "msg": str(error),
                "type": "file_not_found",
            }
        )
        log.error("config_file_not_found", phase="FAILED", error=str(error))

    def _handle_yaml_error(
        self,
        error: yaml.YAMLError,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        """Handle YAML parsing error."""
        self._state_machine.transition(ConfigState.FAILED)
        self._validation_errors.append(
            {
                "loc": "yaml",
                "msg": str(error),
                "type": "yaml_parse_error",
            }
        )
        log.error("config_yaml_parse_error", phase="FAILED", error=str(error))
