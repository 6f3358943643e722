"""Query execution: search with generic decoding, and count."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError
from pydantic_core import to_json

from es_docstore.codec import encode_query
from es_docstore.domain.contracts import CountResult, HitMetadata, SearchResult
from es_docstore.domain.enums import StatusCode
from es_docstore.domain.envelopes import CountEnvelope, RawHit, SearchEnvelope
from es_docstore.errors import BodyEncodingError, DocStoreError, UnsupportedResultTypeError
from es_docstore.status import decode_failure, exchange

if TYPE_CHECKING:
    from es_docstore.backend.protocols import DocumentBackend
    from es_docstore.codec import Query

_logger = logging.getLogger(__name__)


def _hit_metadata(hit: RawHit) -> HitMetadata:
    return HitMetadata(
        index=hit.index,
        type=hit.type,
        id=hit.id,
        score=hit.score or 0.0,
        sort=list(hit.sort or ()),
    )


def search(
    backend: DocumentBackend,
    index: str,
    query: Query,
    result_type: Any = dict[str, Any],
) -> SearchResult[Any]:
    """Run a query and decode the matched documents into ``result_type``.

    The query is sent verbatim with exact total-hit tracking. Matched
    ``_source`` values are re-serialized as one array and validated in a
    single pass, so any mismatching hit fails the whole call with
    ``PARSE_ERROR`` instead of being dropped.

    Args:
        backend (DocumentBackend): Engine backend.
        index (str): Index name, empty for all indices.
        query (Query): Opaque query, as JSON text or a mapping.
        result_type (Any): Type each matched document is validated into.

    Returns:
        SearchResult[Any]: ``SUCCESS`` with hits, total and documents in
        backend order; ``NO_CONTENT`` when the response has no ``hits``
        key; ``PARSE_ERROR`` when ``hits`` is null or malformed; a failure
        status with its error value otherwise.

    """
    try:
        adapter: TypeAdapter[list[Any]] = TypeAdapter(list[result_type])
    except PydanticSchemaGenerationError as exc:
        error = UnsupportedResultTypeError(result_type, str(exc))
        return SearchResult(status=error.status, error=error)

    try:
        payload = encode_query(query)
    except BodyEncodingError as exc:
        return SearchResult(status=exc.status, error=exc)

    outcome = exchange("search", lambda: backend.search(index=index, body=payload, track_total_hits=True))
    if isinstance(outcome, DocStoreError):
        return SearchResult(status=outcome.status, error=outcome)

    try:
        envelope = SearchEnvelope.model_validate_json(outcome.body)
    except ValidationError as exc:
        error = decode_failure("search", exc, status=StatusCode.PARSE_ERROR)
        return SearchResult(status=error.status, error=error)

    if envelope.hits is None:
        if "hits" in envelope.model_fields_set:
            error = decode_failure("search", ValueError("'hits' is null"), status=StatusCode.PARSE_ERROR)
            return SearchResult(status=error.status, error=error)
        _logger.debug("Search on '%s' returned no hits object.", index)
        return SearchResult(status=StatusCode.NO_CONTENT)

    raw_hits = envelope.hits.hits
    try:
        documents = adapter.validate_json(to_json([hit.source for hit in raw_hits]))
    except ValidationError as exc:
        error = decode_failure("search", exc, status=StatusCode.PARSE_ERROR)
        return SearchResult(status=error.status, error=error)

    total = envelope.hits.total_count
    _logger.debug("Search on '%s' matched %d documents, %d returned.", index, total, len(raw_hits))
    return SearchResult(
        status=StatusCode.SUCCESS,
        hits=[_hit_metadata(hit) for hit in raw_hits],
        total=total,
        documents=documents,
    )


def count(backend: DocumentBackend, index: str, query: Query) -> CountResult:
    """Count documents matching a query.

    Args:
        backend (DocumentBackend): Engine backend.
        index (str): Index name, empty for all indices.
        query (Query): Opaque query, as JSON text or a mapping.

    Returns:
        CountResult: ``SUCCESS`` with the count; ``NO_CONTENT`` when the
        response has no ``count`` field; ``PARSE_ERROR`` when it is null or
        not an integer; a failure status otherwise.

    """
    try:
        payload = encode_query(query)
    except BodyEncodingError as exc:
        return CountResult(status=exc.status, error=exc)

    outcome = exchange("count", lambda: backend.count(index=index, body=payload))
    if isinstance(outcome, DocStoreError):
        return CountResult(status=outcome.status, error=outcome)

    try:
        envelope = CountEnvelope.model_validate_json(outcome.body)
    except ValidationError as exc:
        error = decode_failure("count", exc, status=StatusCode.PARSE_ERROR)
        return CountResult(status=error.status, error=error)

    if envelope.count is None:
        if "count" in envelope.model_fields_set:
            error = decode_failure("count", ValueError("'count' is null"), status=StatusCode.PARSE_ERROR)
            return CountResult(status=error.status, error=error)
        return CountResult(status=StatusCode.NO_CONTENT)

    _logger.debug("[%d] count on '%s': %d", outcome.status_code, index, envelope.count)
    return CountResult(status=StatusCode.SUCCESS, count=envelope.count)
