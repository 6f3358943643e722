"""Engine backend interfaces and adapters."""

from es_docstore.backend.adapters import ElasticClientAdapter, OpenSearchClientAdapter
from es_docstore.backend.factory import build_backend
from es_docstore.backend.http import HttpBackend
from es_docstore.backend.protocols import BackendResponse, DocumentBackend

__all__ = [
    "BackendResponse",
    "DocumentBackend",
    "ElasticClientAdapter",
    "HttpBackend",
    "OpenSearchClientAdapter",
    "build_backend",
]
