"""Document store facade bound to one backend handle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from es_docstore.backend.factory import build_backend
from es_docstore.operations import admin, documents
from es_docstore.operations import query as query_ops

if TYPE_CHECKING:
    from collections.abc import Iterable

    from es_docstore.backend.protocols import DocumentBackend
    from es_docstore.codec import Query
    from es_docstore.config import ClientConfig
    from es_docstore.domain.contracts import CountResult, Document, OperationResult, SearchResult, SourceResult


@dataclass(frozen=True, slots=True)
class DocumentStore:
    """Normalized document-store client.

    The store keeps no state between calls; it can be shared across threads
    as long as the backend can.
    """

    backend: DocumentBackend

    @classmethod
    def from_config(cls, config: ClientConfig | None = None) -> DocumentStore:
        """Build a store over the backend selected by the configuration.

        Args:
            config (ClientConfig | None): Connection settings; read from the
                environment when omitted.

        Returns:
            DocumentStore: Configured store.

        """
        return cls(backend=build_backend(config=config))

    def close(self) -> None:
        """Release the backend connections, when the backend holds any."""
        close = getattr(self.backend, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> DocumentStore:
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def ping(self) -> OperationResult:
        """Probe backend liveness."""
        return admin.ping(self.backend)

    def refresh(self, *indices: str) -> OperationResult:
        """Refresh the given indices, or every index when called without names."""
        return admin.refresh(self.backend, indices or None)

    def refresh_indices(self, indices: Iterable[str] | None) -> OperationResult:
        """Refresh an explicit collection of indices; ``None`` means all."""
        return admin.refresh(self.backend, indices)

    def create_index_template(self, name: str, template: Query) -> OperationResult:
        """Create or replace a named index template."""
        return admin.create_index_template(self.backend, name, template)

    def delete_indices(self, *indices: str) -> OperationResult:
        """Delete whole indices in one request."""
        return admin.delete_indices(self.backend, *indices)

    def create_document(self, doc: Document) -> OperationResult:
        """Index a whole document."""
        return documents.create_document(self.backend, doc)

    def update_document(self, doc: Document) -> OperationResult:
        """Merge the document body into the stored document."""
        return documents.update_document(self.backend, doc)

    def remove_document(self, doc: Document) -> OperationResult:
        """Delete one document."""
        return documents.remove_document(self.backend, doc)

    def get_source(self, index: str, doc_id: str, result_type: Any = dict[str, Any]) -> SourceResult[Any]:
        """Fetch and decode the stored body of one document."""
        return documents.get_source(self.backend, index, doc_id, result_type)

    def search(self, index: str, query: Query, result_type: Any = dict[str, Any]) -> SearchResult[Any]:
        """Run a query and decode matched documents into ``result_type``."""
        return query_ops.search(self.backend, index, query, result_type)

    def count(self, index: str, query: Query) -> CountResult:
        """Count documents matching a query."""
        return query_ops.count(self.backend, index, query)
