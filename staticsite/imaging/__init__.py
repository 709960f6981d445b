"""Image processing for generated sites."""

from staticsite.imaging.errors import (
    ImageConfigurationError,
    ImageError,
    ImageNotFoundError,
)
from staticsite.imaging.manipulator import ImageManipulator, normalize_params
from staticsite.imaging.url_builder import StaticUrlBuilder


__all__ = [
    "ImageConfigurationError",
    "ImageError",
    "ImageManipulator",
    "ImageNotFoundError",
    "StaticUrlBuilder",
    "normalize_params",
]
