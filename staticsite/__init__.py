"""staticsite - render a whole website to static files on disk."""

__version__ = "0.1.0"
