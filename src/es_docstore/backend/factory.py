"""Factory helpers to instantiate the configured backend."""

from __future__ import annotations

from typing import TYPE_CHECKING

from es_docstore.backend.adapters import ElasticClientAdapter, OpenSearchClientAdapter
from es_docstore.backend.http import HttpBackend
from es_docstore.config import ClientConfig
from es_docstore.domain.enums import BackendName

if TYPE_CHECKING:
    from es_docstore.backend.protocols import DocumentBackend


def build_backend(
    *,
    config: ClientConfig | None = None,
    client: object | None = None,
) -> DocumentBackend:
    """Build the backend adapter selected by ``config.backend``.

    Args:
        config (ClientConfig | None): Connection settings; read from
            ``ES_DOCSTORE_*`` environment variables when omitted.
        client (object | None): Optional pre-configured client of the selected
            backend: an ``Elasticsearch``, an ``OpenSearch``, or an
            ``httpx.Client`` whose ``base_url`` is the node address.

    Raises:
        InvalidConfigError: If no usable settings are found.
        MissingOptionalDependencyError: If the selected client library is not
            installed.

    Returns:
        DocumentBackend: Backend adapter.

    """
    resolved = config if config is not None else ClientConfig.from_env()

    if resolved.backend is BackendName.HTTP:
        if client is not None:
            return HttpBackend(client=client)
        return HttpBackend.from_config(resolved)

    if resolved.backend is BackendName.OPENSEARCH:
        if client is not None:
            return OpenSearchClientAdapter(client=client)
        return OpenSearchClientAdapter.from_config(resolved)

    if client is not None:
        return ElasticClientAdapter(client=client)
    return ElasticClientAdapter.from_config(resolved)
