"""Domain contracts for es-docstore."""

from es_docstore.domain.contracts import (
    CountResult,
    Document,
    HitMetadata,
    OperationResult,
    SearchResult,
    SourceResult,
)
from es_docstore.domain.enums import BackendName, RefreshPolicy, StatusCode

__all__ = [
    "BackendName",
    "CountResult",
    "Document",
    "HitMetadata",
    "OperationResult",
    "RefreshPolicy",
    "SearchResult",
    "SourceResult",
    "StatusCode",
]
