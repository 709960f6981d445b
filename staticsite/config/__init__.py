"""Configuration loading and validation."""

from staticsite.config.error_hints import format_validation_error, get_error_hint
from staticsite.config.loader import ConfigLoader, ConfigValidationError
from staticsite.config.schemas import (
    AppConfig,
    GlideConfig,
    SiteConfig,
    StaticSiteConfig,
)
from staticsite.config.state_machine import (
    ConfigState,
    ConfigStateError,
    ConfigStateMachine,
)


__all__ = [
    "AppConfig",
    "ConfigLoader",
    "ConfigState",
    "ConfigStateError",
    "ConfigStateMachine",
    "ConfigValidationError",
    "GlideConfig",
    "SiteConfig",
    "StaticSiteConfig",
    "format_validation_error",
    "get_error_hint",
]
