"""Index-level lifecycle operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from es_docstore.codec import encode_query
from es_docstore.domain.contracts import OperationResult
from es_docstore.domain.enums import StatusCode
from es_docstore.errors import (
    BackendTransportError,
    BodyEncodingError,
    DocStoreError,
    MissingIndicesError,
    RequestFailedError,
)
from es_docstore.status import exchange

if TYPE_CHECKING:
    from collections.abc import Iterable

    from es_docstore.backend.protocols import DocumentBackend
    from es_docstore.codec import Query

_logger = logging.getLogger(__name__)


def _normalized(outcome: object) -> OperationResult:
    if isinstance(outcome, DocStoreError):
        return OperationResult(status=outcome.status, error=outcome)
    return OperationResult(status=StatusCode.SUCCESS)


def ping(backend: DocumentBackend) -> OperationResult:
    """Probe backend liveness.

    Any response counts as alive; only a transport failure is reported.

    Args:
        backend (DocumentBackend): Engine backend.

    Returns:
        OperationResult: ``SUCCESS`` or ``REQUEST_ERROR``.

    """
    try:
        backend.ping()
    except BackendTransportError as exc:
        _logger.warning("Ping failed: %s", exc)
        error = RequestFailedError("ping", str(exc))
        return OperationResult(status=error.status, error=error)
    return OperationResult(status=StatusCode.SUCCESS)


def create_index_template(backend: DocumentBackend, name: str, template: Query) -> OperationResult:
    """Create or replace a named index template.

    Args:
        backend (DocumentBackend): Engine backend.
        name (str): Template name.
        template (Query): Opaque template body, as JSON text or a mapping.

    Returns:
        OperationResult: Normalized outcome, ``SUCCESS`` on success.

    """
    try:
        payload = encode_query(template)
    except BodyEncodingError as exc:
        return OperationResult(status=exc.status, error=exc)

    return _normalized(
        exchange("create_index_template", lambda: backend.put_index_template(name=name, body=payload)),
    )


def refresh(backend: DocumentBackend, indices: Iterable[str] | None = None) -> OperationResult:
    """Make recent writes visible to searches.

    Args:
        backend (DocumentBackend): Engine backend.
        indices (Iterable[str] | None): Index names. ``None`` refreshes every
            index; an explicit empty collection is forwarded as such and
            addresses ``_all``.

    Returns:
        OperationResult: Normalized outcome, ``SUCCESS`` on success.

    """
    names = None if indices is None else tuple(indices)
    return _normalized(exchange("refresh", lambda: backend.refresh(indices=names), not_found=True))


def delete_indices(backend: DocumentBackend, *indices: str) -> OperationResult:
    """Delete whole indices in one all-or-error request.

    Args:
        backend (DocumentBackend): Engine backend.
        *indices (str): Index names, at least one.

    Returns:
        OperationResult: Normalized outcome; ``INTERNAL_ERROR`` without names,
        before any request.

    """
    if not indices:
        error = MissingIndicesError()
        return OperationResult(status=error.status, error=error)

    return _normalized(
        exchange("delete_indices", lambda: backend.delete_indices(indices=indices), not_found=True),
    )
