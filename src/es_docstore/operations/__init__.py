"""Store operations, each one backend round trip."""

from es_docstore.operations.admin import create_index_template, delete_indices, ping, refresh
from es_docstore.operations.documents import create_document, get_source, remove_document, update_document
from es_docstore.operations.query import count, search

__all__ = [
    "count",
    "create_document",
    "create_index_template",
    "delete_indices",
    "get_source",
    "ping",
    "refresh",
    "remove_document",
    "search",
    "update_document",
]
