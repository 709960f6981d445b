"""Error hints for configuration validation errors.

Provides user-friendly hints with actionable remediation steps
for common validation errors.
"""

from typing import Final


ERROR_HINTS: Final[dict[str, str]] = {
    "missing": "This field is required. Please add it to your configuration.",
    "extra_forbidden": "Unknown key. Check for typos in the key name.",
    "string_type": "This field must be a text string.",
    "bool_type": "This field must be true or false.",
    "list_type": "This field must be a list.",
    "dict_type": "This field must be a mapping of keys to values.",
    "model_type": "This section must be a mapping of keys to values.",
    "path_type": "This field must be a filesystem path.",
    "string_too_short": "The value must not be empty.",
    "file_not_found": "The file does not exist. Check the file path.",
    "yaml_parse_error": (
        "Invalid YAML syntax. Check for proper indentation and formatting."
    ),
}

FIELD_HINTS: Final[dict[str, str]] = {
    "destination": "Directory the site is generated into (e.g., 'storage/static').",
    "base_url": "Public URL the site is served from (e.g., 'https://example.com').",
    "exclude": "Must be a list of page URLs (e.g., ['/drafts', '/admin']).",
    "symlinks": "Must map a source path to a path inside the destination.",
    "copy": "Must map a source directory to a path inside the destination.",
    "directory": "Image cache directory relative to the destination (e.g., 'img').",
    "routes": "Must map a URL to a template name or to route data.",
}


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Get a user-friendly hint for a validation error.

    Args:
        error_type: The Pydantic error type (e.g., 'missing', 'string_type').
        field_name: Optional field path (e.g., 'static_site.destination').

    Returns:
        A user-friendly hint string.
    """
    if field_name:
        simple_field = field_name.split(".")[-1]
        if simple_field in FIELD_HINTS:
            return FIELD_HINTS[simple_field]

    return ERROR_HINTS.get(
        error_type, "Check the configuration documentation for valid values."
    )


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Format a validation error with optional hint.

    Args:
        location: The error location (e.g., 'static_site.destination').
        message: The original error message.
        error_type: The error type.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    base = f"{location}: {message}"
    if include_hint:
        hint = get_error_hint(error_type, location)
        return f"{base}\n    Hint: {hint}"
    return base
