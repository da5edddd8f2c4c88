"""Exceptions raised on the remote analysis path.

All of these are recovered by the analyzer, which falls back to the local
rule scan. None of them reach the caller of ``CodeAnalyzer.analyze``.
"""


class AnalysisError(Exception):
    """Base class for recoverable analysis failures."""


class RemoteAnalysisError(AnalysisError):
    """The remote model call did not produce usable text."""


class MissingCredentialError(RemoteAnalysisError):
    """No API key is available for the remote call."""


class UnauthorizedError(RemoteAnalysisError):
    """The endpoint rejected the API key (HTTP 401)."""


class RateLimitedError(RemoteAnalysisError):
    """The endpoint is rate limiting us (HTTP 429)."""


class TransportError(RemoteAnalysisError):
    """Network failure, timeout, or any other non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(RemoteAnalysisError):
    """A 2xx reply with no extractable message content."""


class NormalizationError(AnalysisError):
    """The model's text could not be turned into findings."""


class UnparsableResponseError(NormalizationError):
    """No JSON array could be extracted from the model's text."""


class InvalidFindingShapeError(NormalizationError):
    """At least one element of the array is not a valid finding."""
