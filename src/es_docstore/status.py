"""Status normalization of backend round trips.

Every store operation funnels its backend call through :func:`exchange`, which
maps the transport outcome and HTTP status to one :class:`StatusCode`:

1. no response obtained: ``REQUEST_ERROR``;
2. status 400: ``BAD_REQUEST``; 404: ``NOT_FOUND`` when the operation treats
   absence as meaningful; any other status >= 400: ``ERROR``;
3. anything else is handed back to the operation, which decodes the body and
   reports decode failures with :func:`decode_failure`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from es_docstore.domain.enums import StatusCode
from es_docstore.domain.envelopes import ErrorDetail, ErrorEnvelope
from es_docstore.errors import (
    BackendError,
    BackendTransportError,
    DocStoreError,
    RequestFailedError,
    ResponseDecodeError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from es_docstore.backend.protocols import BackendResponse

_BAD_REQUEST_STATUS = 400
_NOT_FOUND_STATUS = 404
_BODY_EXCERPT_CHARS = 200
_logger = logging.getLogger(__name__)


def error_status(status_code: int, *, not_found: bool = False) -> StatusCode:
    """Map a backend error status to a store status.

    Args:
        status_code (int): HTTP status returned by the backend, >= 400.
        not_found (bool): Whether 404 is a meaningful outcome for the call.

    Returns:
        StatusCode: Normalized status.

    """
    if status_code == _BAD_REQUEST_STATUS:
        return StatusCode.BAD_REQUEST
    if not_found and status_code == _NOT_FOUND_STATUS:
        return StatusCode.NOT_FOUND
    return StatusCode.ERROR


def _excerpt(body: bytes) -> str:
    text = body.decode("utf-8", errors="replace").strip()
    if len(text) > _BODY_EXCERPT_CHARS:
        return text[:_BODY_EXCERPT_CHARS] + "..."
    return text or "<empty>"


def backend_error(response: BackendResponse, *, not_found: bool = False) -> BackendError:
    """Build the error value for a failed backend response.

    The message comes from the structured ``error.type``/``error.reason`` of
    the body when it decodes, else from the raw body text, truncated.

    Args:
        response (BackendResponse): Failed backend response.
        not_found (bool): Whether 404 is a meaningful outcome for the call.

    Returns:
        BackendError: Error value carrying the normalized status.

    """
    status = error_status(response.status_code, not_found=not_found)
    try:
        envelope = ErrorEnvelope.model_validate_json(response.body)
    except ValidationError as exc:
        return BackendError(
            status=status,
            status_code=response.status_code,
            reason=f"unreadable error body ({exc.error_count()} validation errors): {_excerpt(response.body)}",
        )

    if isinstance(envelope.error, ErrorDetail):
        return BackendError(
            status=status,
            status_code=response.status_code,
            error_type=envelope.error.type,
            reason=envelope.error.reason,
        )
    return BackendError(status=status, status_code=response.status_code, reason=envelope.error)


def decode_failure(operation: str, exc: Exception, *, status: StatusCode) -> ResponseDecodeError:
    """Build the error value for a successful response that does not decode.

    Args:
        operation (str): Operation name, used in the message.
        exc (Exception): Decode failure.
        status (StatusCode): ``UNEXPECTED_ERROR`` for write metadata,
            ``PARSE_ERROR`` for read payloads.

    Returns:
        ResponseDecodeError: Error value.

    """
    reason = f"{exc.error_count()} validation errors" if isinstance(exc, ValidationError) else str(exc)
    error = ResponseDecodeError(status=status, operation=operation, reason=reason)
    _logger.warning("%s", error)
    return error


def exchange(
    operation: str,
    call: Callable[[], BackendResponse],
    *,
    not_found: bool = False,
) -> BackendResponse | DocStoreError:
    """Run one backend call and normalize transport and HTTP failures.

    Args:
        operation (str): Operation name, used in messages.
        call (Callable[[], BackendResponse]): Backend call to run once.
        not_found (bool): Whether 404 maps to ``NOT_FOUND`` instead of ``ERROR``.

    Returns:
        BackendResponse | DocStoreError: The successful response, or the error
        value whose ``status`` is the normalized status.

    """
    try:
        response = call()
    except BackendTransportError as exc:
        _logger.warning("Error getting response for '%s': %s", operation, exc)
        return RequestFailedError(operation, str(exc))

    if not response.is_error:
        return response

    error = backend_error(response, not_found=not_found)
    if error.status == StatusCode.NOT_FOUND:
        _logger.info("'%s' target not found: %s", operation, error)
    else:
        _logger.warning("Error during '%s': %s", operation, error)
    return error
