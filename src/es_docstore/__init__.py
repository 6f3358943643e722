"""Normalized client over Elasticsearch/OpenSearch-compatible document stores."""

from es_docstore.config import ClientConfig
from es_docstore.domain import (
    CountResult,
    Document,
    HitMetadata,
    OperationResult,
    RefreshPolicy,
    SearchResult,
    SourceResult,
    StatusCode,
)
from es_docstore.errors import DocStoreError
from es_docstore.store import DocumentStore

__all__ = [
    "ClientConfig",
    "CountResult",
    "DocStoreError",
    "Document",
    "DocumentStore",
    "HitMetadata",
    "OperationResult",
    "RefreshPolicy",
    "SearchResult",
    "SourceResult",
    "StatusCode",
]
