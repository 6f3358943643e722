"""Project-specific exceptions for es-docstore.

Store operations never raise these for backend failures: they return them as
error values next to a status code. ``raise_for_error`` on a result re-raises
the carried value when a caller prefers exception flow.
"""

from __future__ import annotations

from es_docstore.domain.enums import StatusCode


class DocStoreError(Exception):
    """Base exception for the project."""

    status: StatusCode = StatusCode.ERROR


class InvalidConfigError(ValueError, DocStoreError):
    """Raised when client configuration cannot be used to reach a backend."""

    status = StatusCode.INTERNAL_ERROR


class MissingOptionalDependencyError(ImportError, DocStoreError):
    """Raised when an optional dependency is not installed."""


class BackendTransportError(DocStoreError):
    """Raised by backends when no response could be obtained."""

    status = StatusCode.REQUEST_ERROR


class MissingBodyError(ValueError, DocStoreError):
    """Returned when a write operation is called without a document body."""

    status = StatusCode.INTERNAL_ERROR

    def __init__(self, operation: str) -> None:
        """Build exception payload for a write without body."""
        super().__init__(f"Document body is required for {operation}.")


class MissingIndicesError(ValueError, DocStoreError):
    """Returned when an index-level delete is called without index names."""

    status = StatusCode.INTERNAL_ERROR

    def __init__(self) -> None:
        """Build exception payload for an empty index list."""
        super().__init__("At least one index name is required to delete indices.")


class BodyEncodingError(ValueError, DocStoreError):
    """Returned when a document body cannot be serialized to JSON."""

    status = StatusCode.BAD_REQUEST

    def __init__(self, reason: str) -> None:
        """Build exception payload for a body that cannot be encoded."""
        super().__init__(f"Document body is not JSON serializable: {reason}")


class RequestFailedError(DocStoreError):
    """Returned when the transport failed before any response was received."""

    status = StatusCode.REQUEST_ERROR

    def __init__(self, operation: str, reason: str) -> None:
        """Build exception payload for a transport failure."""
        super().__init__(f"Request '{operation}' failed without a response: {reason}")


class BackendError(DocStoreError):
    """Returned when the backend answered with an error status."""

    def __init__(
        self,
        *,
        status: StatusCode,
        status_code: int,
        error_type: str | None = None,
        reason: str | None = None,
    ) -> None:
        """Build exception payload from a backend error response."""
        self.status = status
        self.status_code = status_code
        self.error_type = error_type
        self.reason = reason
        detail = ": ".join(part for part in (error_type, reason) if part)
        super().__init__(f"[{status_code}] {detail}" if detail else f"[{status_code}] backend error")


class ResponseDecodeError(DocStoreError):
    """Returned when a successful response does not have the expected shape."""

    def __init__(self, *, status: StatusCode, operation: str, reason: str) -> None:
        """Build exception payload for an undecodable response body."""
        self.status = status
        super().__init__(f"Cannot decode '{operation}' response: {reason}")


class UnsupportedResultTypeError(TypeError, DocStoreError):
    """Returned when a caller result type cannot be used to decode documents."""

    status = StatusCode.INTERNAL_ERROR

    def __init__(self, result_type: object, reason: str) -> None:
        """Build exception payload for an unusable result type."""
        super().__init__(f"Cannot decode documents into {result_type!r}: {reason}")
