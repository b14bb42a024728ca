from typing import Optional


class BuildError(Exception):
    """Base class for every failure that aborts a build run."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class FrontmatterParseError(BuildError):
    """The metadata header is missing, malformed or lacks a usable date."""


class MarkdownRenderError(BuildError):
    """The markdown renderer or one of its interceptors could not handle its input."""


class FileSystemError(BuildError):
    """Source documents could not be listed or read."""


class SearchIndexWriteError(BuildError):
    """search.json could not be persisted."""
