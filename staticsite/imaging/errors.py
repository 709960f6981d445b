"""Errors raised by image processing."""


class ImageError(Exception):
    """Base exception for image processing errors."""


class ImageNotFoundError(ImageError):
    """Raised when a source image does not exist."""

    def __init__(self, path: str) -> None:
        """Initialize the error.

        Args:
            path: Requested image path, relative to the source directory.
        """
        self.path = path
        super().__init__(f"Image not found: {path}")


class ImageConfigurationError(ImageError):
    """Raised when image processing cannot be bound to the output tree.

    This is a misconfiguration and aborts the whole run.
    """
