"""Pillow-backed image manipulation with an on-disk cache."""

import hashlib
import json
from pathlib import Path, PurePosixPath

import structlog
from PIL import Image, ImageOps

from staticsite.constants import COMPONENT_IMAGING
from staticsite.imaging.errors import (
    ImageConfigurationError,
    ImageError,
    ImageNotFoundError,
)


logger = structlog.get_logger()

FIT_MODES = ("contain", "crop", "stretch")

# Output format names understood by Pillow, keyed by file extension
FORMATS: dict[str, str] = {
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "png": "PNG",
    "gif": "GIF",
    "webp": "WEBP",
}

_QUALITY_FORMATS = frozenset({"JPEG", "WEBP"})


def normalize_params(params: dict[str, object]) -> dict[str, object]:
    """Validate manipulation parameters.

    Supported keys: ``w`` and ``h`` (pixels), ``fit`` (contain, crop,
    stretch), ``q`` (quality 1-100) and ``fm`` (output format).

    Args:
        params: Raw parameters, usually template keyword arguments.

    Returns:
        Parameters with integer sizes and lowercase names.

    Raises:
        ImageError: If a parameter is unknown or out of range.
    """
    normalized: dict[str, object] = {}
    for key, value in params.items():
        if value is None:
            continue
        if key in ("w", "h", "q"):
            try:
                number = int(value)  # type: ignore[call-overload]
            except (TypeError, ValueError) as e:
                raise ImageError(f"Image parameter {key} must be a number") from e
            if number <= 0 or (key == "q" and number > 100):  # noqa: PLR2004
                raise ImageError(f"Image parameter {key} out of range: {number}")
            normalized[key] = number
        elif key == "fit":
            fit = str(value).lower()
            if fit not in FIT_MODES:
                raise ImageError(f"Unsupported fit: {value}")
            normalized[key] = fit
        elif key == "fm":
            fmt = str(value).lower()
            if fmt not in FORMATS:
                raise ImageError(f"Unsupported format: {value}")
            normalized[key] = fmt
        else:
            raise ImageError(f"Unknown image parameter: {key}")
    return normalized


class ImageManipulator:
    """Resizes and converts source images into a cache directory.

    Cached files live at ``<cache>/<image dir>/<params hash>/<file name>``,
    so identical requests reuse the same file across pages.
    """

    def __init__(self, source_dir: Path, cache_dir: Path | None = None) -> None:
        """Initialize the manipulator.

        Args:
            source_dir: Directory original images are read from.
            cache_dir: Directory processed images are written to.
        """
        self._source_dir = Path(source_dir)
        self._cache_dir = Path(cache_dir) if cache_dir is not None else None
        self._log = logger.bind(component=COMPONENT_IMAGING)

    @property
    def source_dir(self) -> Path:
        """Get the source image directory."""
        return self._source_dir

    @property
    def cache_dir(self) -> Path | None:
        """Get the bound cache directory."""
        return self._cache_dir

    def set_cache(self, cache_dir: Path) -> None:
        """Point the cache at a new directory."""
        self._cache_dir = Path(cache_dir)

    def cache_path(self, path: str, params: dict[str, object]) -> str:
        """Compute the cache-relative path for a manipulation.

        Args:
            path: Source image path, relative to the source directory.
            params: Normalized manipulation parameters.

        Returns:
            POSIX-style path relative to the cache directory.
        """
        source = PurePosixPath(path.lstrip("/"))
        signature = json.dumps(
            {"path": str(source), **params}, sort_keys=True, separators=(",", ":")
        )
        digest = hashlib.md5(signature.encode("utf-8")).hexdigest()  # noqa: S324

        name = source.name
        if "fm" in params:
            name = f"{source.stem}.{params['fm']}"

        return str(source.parent / digest / name)

    def generate(self, path: str, params: dict[str, object]) -> str:
        """Process an image, reusing a cached result when present.

        Args:
            path: Source image path, relative to the source directory.
            params: Raw manipulation parameters.

        Returns:
            Path of the processed image, relative to the cache directory.

        Raises:
            ImageConfigurationError: If no cache directory is bound.
            ImageNotFoundError: If the source image does not exist.
            ImageError: If parameters are invalid.
        """
        if self._cache_dir is None:
            raise ImageConfigurationError("Image cache directory is not bound")

        normalized = normalize_params(params)
        source = self._source_dir / path.lstrip("/")
        if not source.is_file():
            raise ImageNotFoundError(path)

        relative = self.cache_path(path, normalized)
        target = self._cache_dir / relative

        if target.exists():
            self._log.debug("image_cache_hit", path=path, cache_path=relative)
            return relative

        target.parent.mkdir(parents=True, exist_ok=True)
        self._process(source, target, normalized)

        self._log.debug("image_generated", path=path, cache_path=relative)
        return relative

    def _process(self, source: Path, target: Path, params: dict[str, object]) -> None:
        width = params.get("w")
        height = params.get("h")
        fit = params.get("fit", "contain")

        with Image.open(source) as img:
            fmt = FORMATS.get(str(params.get("fm", "")), img.format or "PNG")
            size = (int(width or img.width), int(height or img.height))

            if fit == "crop" and width and height:
                result = ImageOps.fit(img, size)
            elif fit == "stretch":
                result = img.resize(size)
            else:
                result = img.copy()
                result.thumbnail(size)

        if fmt == "JPEG" and result.mode not in ("RGB", "L"):
            result = result.convert("RGB")

        save_kwargs: dict[str, object] = {}
        if "q" in params and fmt in _QUALITY_FORMATS:
            save_kwargs["quality"] = params["q"]

        result.save(target, fmt, **save_kwargs)
