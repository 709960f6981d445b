"""Image URL builder for statically generated sites."""

from staticsite.content.urls import tidy_url
from staticsite.imaging.manipulator import ImageManipulator


class StaticUrlBuilder:
    """Builds public URLs for processed images inside the generated tree."""

    def __init__(self, manipulator: ImageManipulator, route: str) -> None:
        """Initialize the builder.

        Args:
            manipulator: Manipulator that produces the cached files.
            route: Public URL the image cache directory is served from.
        """
        self._manipulator = manipulator
        self._route = route

    @property
    def route(self) -> str:
        """Get the public URL prefix for processed images."""
        return self._route

    def build(self, path: str, params: dict[str, object]) -> str:
        """Process an image and return its public URL.

        Args:
            path: Source image path.
            params: Manipulation parameters.

        Returns:
            URL of the processed image.
        """
        relative = self._manipulator.generate(path, params)
        return tidy_url(f"{self._route}/{relative}")
