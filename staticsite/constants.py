"""Shared constants."""

# Log component names
COMPONENT_CONFIG = "config"
COMPONENT_CLI = "cli"
COMPONENT_CONTENT = "content"
COMPONENT_IMAGING = "imaging"
COMPONENT_RENDERER = "renderer"
COMPONENT_GENERATOR = "generator"

# Default image cache directory, relative to the destination
DEFAULT_GLIDE_DIRECTORY = "img"

# Default template used by entries and routes without one
DEFAULT_TEMPLATE = "default"

# File written for URLs without an extension
INDEX_FILENAME = "index.html"

# Content file suffixes picked up by the file entry repository
CONTENT_SUFFIXES = (".md", ".html")

# Status code used when a redirect does not declare one
DEFAULT_REDIRECT_STATUS = 302
