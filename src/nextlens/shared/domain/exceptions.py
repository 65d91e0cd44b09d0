"""
Domain exceptions for nextlens.

All application errors inherit from NextLensError.

Two families:
- ConfigurationError: fatal, aborts the whole run and reaches the caller
- SourceParseError: per-file, caught at the file-processing boundary
"""


class NextLensError(Exception):
    """Base class for all nextlens exceptions."""

    def __init__(self, message: str, context: dict = None):
        super().__init__(message)
        self.context = context or {}


class ConfigurationError(NextLensError):
    """Raised when the run is misconfigured and cannot produce results."""

    pass


class ProjectRootError(ConfigurationError):
    """Raised when the project root is missing, not a directory, or unreadable."""

    pass


class NoParsableSourcesError(ConfigurationError):
    """Raised when a project has analyzable files but none of them parse."""

    pass


class ProjectConfigError(ConfigurationError):
    """Raised when the project config file is invalid or corrupt."""

    pass


class SourceParseError(NextLensError):
    """Raised when a single source file cannot be parsed."""

    def __init__(self, file_path: str, message: str, context: dict = None):
        super().__init__(f"{file_path}: {message}", context)
        self.file_path = file_path
