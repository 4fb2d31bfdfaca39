"""
Exception hierarchy for pdfanalyzer.

Every failure the analysis pipeline can observe maps to one of these types,
so callers can branch on the failure kind and render a one-line diagnostic
without ever seeing a raw transport exception.
"""

from typing import Any, Dict, Optional

from pdfanalyzer.domain.models.ai import ModelResponse

# Longest slice of a remote response body quoted in a diagnostic.
BODY_SNIPPET_LIMIT = 500


def body_snippet(raw_body: Optional[str], limit: int = BODY_SNIPPET_LIMIT) -> str:
    """Collapses whitespace in a response body and truncates it for messages."""
    if not raw_body:
        return ""
    snippet = " ".join(raw_body.split())
    if len(snippet) > limit:
        snippet = snippet[:limit] + "..."
    return snippet


class AnalyzerError(Exception):
    """Base exception for all pdfanalyzer errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        return self.message

    def describe(self) -> str:
        """Message plus details, for log lines."""
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.cause:
            base += f" | Caused by: {type(self.cause).__name__}: {self.cause}"
        return base


class InvalidReferenceError(AnalyzerError):
    """The file reference is not a parseable URI of a supported shape."""

    def __init__(self, reference: str, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Invalid file reference '{reference}': {reason}",
            details={"reference": reference},
            cause=cause,
        )
        self.reference = reference


class FileNotAccessibleError(AnalyzerError):
    """The resolved path is missing or cannot be read."""

    def __init__(self, path: str, cause: Optional[Exception] = None):
        super().__init__(
            f"PDF file not found or not readable at: {path}",
            details={"path": path},
            cause=cause,
        )
        self.path = path


class UnreadableDocumentError(AnalyzerError):
    """The document could not be parsed as a PDF."""

    def __init__(self, path: str, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Could not extract text from PDF '{path}': {reason}",
            details={"path": path},
            cause=cause,
        )
        self.path = path


class RemoteApiError(AnalyzerError):
    """The remote endpoint answered with a non-success HTTP status."""

    def __init__(self, endpoint: str, status_code: int, raw_body: str):
        super().__init__(
            f"{endpoint} API error: {status_code} - {body_snippet(raw_body)}",
            details={"endpoint": endpoint, "status_code": status_code},
        )
        self.endpoint = endpoint
        self.status_code = status_code
        self.raw_body = raw_body
        self.response = ModelResponse.failure(status_code, raw_body)


class UnexpectedResponseShapeError(AnalyzerError):
    """Success status, but the expected answer fields are missing."""

    def __init__(self, endpoint: str, status_code: int, raw_body: str, reason: str):
        super().__init__(
            f"Unexpected response format from {endpoint}: {reason}",
            details={"endpoint": endpoint, "status_code": status_code},
        )
        self.endpoint = endpoint
        self.status_code = status_code
        self.raw_body = raw_body


class TransportFailureError(AnalyzerError):
    """Network-level failure before any HTTP status was received."""

    def __init__(self, endpoint: str, cause: Exception):
        super().__init__(
            f"Could not reach {endpoint}: {type(cause).__name__}: {cause}",
            details={"endpoint": endpoint},
            cause=cause,
        )
        self.endpoint = endpoint


class ConfigurationError(AnalyzerError):
    """Error in configuration (missing API key, invalid settings)."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message, details={"config_key": config_key} if config_key else None)
        self.config_key = config_key
