"""Single-document lifecycle operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError

from es_docstore.codec import encode_body
from es_docstore.domain.contracts import OperationResult, SourceResult
from es_docstore.domain.enums import StatusCode
from es_docstore.domain.envelopes import WriteEnvelope
from es_docstore.errors import (
    BodyEncodingError,
    DocStoreError,
    MissingBodyError,
    UnsupportedResultTypeError,
)
from es_docstore.status import decode_failure, exchange

if TYPE_CHECKING:
    from es_docstore.backend.protocols import BackendResponse, DocumentBackend
    from es_docstore.domain.contracts import Document

_logger = logging.getLogger(__name__)


def _failed(error: DocStoreError) -> OperationResult:
    return OperationResult(status=error.status, error=error)


def _confirm_write(operation: str, response: BackendResponse, *, status: StatusCode) -> OperationResult:
    """Decode write metadata and report ``status`` when it reads.

    Args:
        operation (str): Operation name.
        response (BackendResponse): Successful backend response.
        status (StatusCode): Success status of the operation.

    Returns:
        OperationResult: ``status``, or ``UNEXPECTED_ERROR`` when the
        metadata does not decode.

    """
    try:
        envelope = WriteEnvelope.model_validate_json(response.body)
    except ValidationError as exc:
        return _failed(decode_failure(operation, exc, status=StatusCode.UNEXPECTED_ERROR))

    _logger.debug(
        "[%d] %s; version=%s; id=%s",
        response.status_code,
        envelope.result,
        envelope.version,
        envelope.id,
    )
    return OperationResult(status=status)


def create_document(backend: DocumentBackend, doc: Document) -> OperationResult:
    """Index a whole document, replacing any document with the same id.

    Args:
        backend (DocumentBackend): Engine backend.
        doc (Document): Target index, id, body and refresh policy.

    Returns:
        OperationResult: ``CREATED`` on success. ``INTERNAL_ERROR`` without a
        body and ``BAD_REQUEST`` for a body that cannot be serialized; neither
        reaches the backend.

    """
    if doc.body is None:
        return _failed(MissingBodyError("create_document"))

    try:
        payload = encode_body(doc.body)
    except BodyEncodingError as exc:
        _logger.warning("Cannot encode body of doc ID=%s: %s", doc.id, exc)
        return _failed(exc)

    outcome = exchange(
        "create_document",
        lambda: backend.index(index=doc.index, doc_id=doc.id, body=payload, refresh=doc.refresh),
    )
    if isinstance(outcome, DocStoreError):
        return _failed(outcome)
    return _confirm_write("create_document", outcome, status=StatusCode.CREATED)


def update_document(backend: DocumentBackend, doc: Document) -> OperationResult:
    """Merge the body fields into an existing document.

    Fields absent from the body keep their stored values.

    Args:
        backend (DocumentBackend): Engine backend.
        doc (Document): Target index, id, partial body and refresh policy.

    Returns:
        OperationResult: ``SUCCESS`` on success.

    """
    if doc.body is None:
        return _failed(MissingBodyError("update_document"))

    try:
        payload = encode_body({"doc": doc.body})
    except BodyEncodingError as exc:
        _logger.warning("Cannot encode body of doc ID=%s: %s", doc.id, exc)
        return _failed(exc)

    outcome = exchange(
        "update_document",
        lambda: backend.update(index=doc.index, doc_id=doc.id, body=payload, refresh=doc.refresh),
    )
    if isinstance(outcome, DocStoreError):
        return _failed(outcome)
    return _confirm_write("update_document", outcome, status=StatusCode.SUCCESS)


def remove_document(backend: DocumentBackend, doc: Document) -> OperationResult:
    """Delete one document. The body is ignored.

    Args:
        backend (DocumentBackend): Engine backend.
        doc (Document): Target index, id and refresh policy.

    Returns:
        OperationResult: ``SUCCESS``, or ``NOT_FOUND`` with an error value when
        the document does not exist.

    """
    outcome = exchange(
        "remove_document",
        lambda: backend.delete(index=doc.index, doc_id=doc.id, refresh=doc.refresh),
        not_found=True,
    )
    if isinstance(outcome, DocStoreError):
        return _failed(outcome)
    return _confirm_write("remove_document", outcome, status=StatusCode.SUCCESS)


def get_source(
    backend: DocumentBackend,
    index: str,
    doc_id: str,
    result_type: Any = dict[str, Any],
) -> SourceResult[Any]:
    """Fetch the stored body of one document and decode it.

    A missing document is an expected outcome: ``NOT_FOUND`` without error.

    Args:
        backend (DocumentBackend): Engine backend.
        index (str): Index name.
        doc_id (str): Document identifier.
        result_type (Any): Type the body is validated into.

    Returns:
        SourceResult[Any]: ``SUCCESS`` with the decoded document,
        ``NOT_FOUND``, or a failure status with its error value.

    """
    try:
        adapter: TypeAdapter[Any] = TypeAdapter(result_type)
    except PydanticSchemaGenerationError as exc:
        error = UnsupportedResultTypeError(result_type, str(exc))
        return SourceResult(status=error.status, error=error)

    outcome = exchange(
        "get_source",
        lambda: backend.get_source(index=index, doc_id=doc_id),
        not_found=True,
    )
    if isinstance(outcome, DocStoreError):
        if outcome.status == StatusCode.NOT_FOUND:
            return SourceResult(status=StatusCode.NOT_FOUND)
        return SourceResult(status=outcome.status, error=outcome)

    try:
        document = adapter.validate_json(outcome.body)
    except ValidationError as exc:
        error = decode_failure("get_source", exc, status=StatusCode.PARSE_ERROR)
        return SourceResult(status=error.status, error=error)

    return SourceResult(status=StatusCode.SUCCESS, document=document)
