"""Exceptions raised while fetching, parsing and caching option documentation."""


class NixDocsError(Exception):
    """Base class for all nixdocs errors."""


class FetchError(NixDocsError):
    """The external build failed and no fallback location was usable."""

    def __init__(self, message: str, stderr: str = "") -> None:
        """Initialise fetch error.

        Args:
            message: Summary of what failed.
            stderr: Diagnostic output captured from the failed build.
        """
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        message = super().__str__()
        if self.stderr.strip():
            return f"{message}\n{self.stderr.strip()}"
        return message


class BuildFailedError(FetchError):
    """The external build ran but exited with a non-zero status."""


class ParseError(NixDocsError):
    """The options document was unreadable or did not match the expected schema."""


class MissingEnvironmentError(NixDocsError):
    """A required environment variable is not set."""

    def __init__(self, variable: str) -> None:
        super().__init__(f"Environment variable {variable} must be set")
        self.variable = variable


class CacheError(NixDocsError):
    """A cached payload could not be restored."""
