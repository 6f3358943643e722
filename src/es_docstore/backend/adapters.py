"""Adapters implementing DocumentBackend over the official engine clients."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import import_module
from typing import TYPE_CHECKING, Any

from pydantic_core import to_json

from es_docstore.backend.protocols import BackendResponse
from es_docstore.backend.rest import RestRoutes
from es_docstore.domain.enums import BackendName
from es_docstore.errors import BackendTransportError, MissingOptionalDependencyError

if TYPE_CHECKING:
    from types import ModuleType

    from es_docstore.config import ClientConfig

_ELASTIC_MISSING_DEP_MSG = "Install the optional dependency group 'elasticsearch' to use this backend."
_OPENSEARCH_MISSING_DEP_MSG = "Install the optional dependency group 'opensearch' to use this backend."
_ACCEPT_HEADERS = {"accept": "application/json"}
_JSON_HEADERS = {"accept": "application/json", "content-type": "application/json"}
_SUCCESS_STATUS = 200
_NOT_FOUND_STATUS = 404
_logger = logging.getLogger(__name__)


def _import(module_name: str, missing_msg: str) -> ModuleType:
    try:
        return import_module(module_name)
    except ImportError as exc:
        raise MissingOptionalDependencyError(missing_msg) from exc


def _payload(body: Any) -> bytes:
    """Return a client-decoded response body as JSON bytes."""
    if body is None or isinstance(body, bool):
        return b""
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    return to_json(body)


def _transport_failure(exc: Exception) -> BackendTransportError:
    return BackendTransportError(f"{exc.__class__.__name__}: {exc}")


@dataclass(frozen=True, slots=True)
class ElasticClientAdapter(RestRoutes):
    """Thin adapter around the Elasticsearch Python client.

    The client resolves cloud ids, authenticates with the API key and picks
    nodes from its pool; each call is sent with ``perform_request``.
    """

    client: Any
    backend_name: str = BackendName.ELASTICSEARCH.value

    @classmethod
    def from_config(cls, config: ClientConfig) -> ElasticClientAdapter:
        """Build an adapter from connection settings.

        Args:
            config (ClientConfig): Connection settings.

        Raises:
            MissingOptionalDependencyError: If `elasticsearch` is not installed.

        Returns:
            ElasticClientAdapter: Configured adapter.

        """
        module = _import("elasticsearch", _ELASTIC_MISSING_DEP_MSG)
        elasticsearch_class = module.Elasticsearch
        client = elasticsearch_class(
            hosts=list(config.addresses) or None,
            cloud_id=config.cloud_id,
            api_key=config.api_key,
            request_timeout=config.timeout_s,
            verify_certs=config.verify_certs,
        )
        return cls(client=client)

    def close(self) -> None:
        """Close the client connection pool."""
        self.client.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: bytes | None = None,
    ) -> BackendResponse:
        """Send one request through the client and capture status and body.

        Args:
            method (str): HTTP method.
            path (str): Encoded request path.
            params (dict[str, Any] | None): Query string parameters.
            body (bytes | None): JSON payload.

        Raises:
            BackendTransportError: If no response was received.

        Returns:
            BackendResponse: Raw response; error statuses are returned, not raised.

        """
        api_error = _import("elasticsearch", _ELASTIC_MISSING_DEP_MSG).ApiError
        transport_error = _import("elastic_transport", _ELASTIC_MISSING_DEP_MSG).TransportError
        try:
            response = self.client.perform_request(
                method,
                path,
                params=params,
                headers=_JSON_HEADERS if body is not None else _ACCEPT_HEADERS,
                body=body,
            )
        except api_error as exc:
            _logger.debug("%s %s -> %d", method, path, exc.meta.status)
            return BackendResponse(status_code=exc.meta.status, body=_payload(exc.body))
        except transport_error as exc:
            raise _transport_failure(exc) from exc

        _logger.debug("%s %s -> %d", method, path, response.meta.status)
        return BackendResponse(status_code=response.meta.status, body=_payload(response.body))


@dataclass(frozen=True, slots=True)
class OpenSearchClientAdapter(RestRoutes):
    """Thin adapter around the OpenSearch Python client.

    The client transport returns decoded bodies without the HTTP status, so
    successful calls are reported as 200 and a ``HEAD`` answered ``False`` as
    404.
    """

    client: Any
    backend_name: str = BackendName.OPENSEARCH.value

    @classmethod
    def from_config(cls, config: ClientConfig) -> OpenSearchClientAdapter:
        """Build an adapter from connection settings.

        Args:
            config (ClientConfig): Connection settings.

        Raises:
            MissingOptionalDependencyError: If `opensearch-py` is not installed.

        Returns:
            OpenSearchClientAdapter: Configured adapter.

        """
        module = _import("opensearchpy", _OPENSEARCH_MISSING_DEP_MSG)
        opensearch_class = module.OpenSearch
        client = opensearch_class(
            hosts=list(config.addresses),
            timeout=config.timeout_s,
            use_ssl=any(address.startswith("https://") for address in config.addresses),
            verify_certs=config.verify_certs,
        )
        return cls(client=client)

    def close(self) -> None:
        """Close the client connection pool."""
        self.client.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: bytes | None = None,
    ) -> BackendResponse:
        """Send one request through the client transport.

        Args:
            method (str): HTTP method.
            path (str): Encoded request path.
            params (dict[str, Any] | None): Query string parameters.
            body (bytes | None): JSON payload.

        Raises:
            BackendTransportError: If no response was received.

        Returns:
            BackendResponse: Raw response; error statuses are returned, not raised.

        """
        module = _import("opensearchpy", _OPENSEARCH_MISSING_DEP_MSG)
        try:
            data = self.client.transport.perform_request(
                method,
                path,
                params=params,
                headers=_JSON_HEADERS if body is not None else _ACCEPT_HEADERS,
                body=body,
            )
        except module.TransportError as exc:
            # Connection failures carry the string "N/A" instead of a status.
            if not isinstance(exc.status_code, int):
                raise _transport_failure(exc) from exc
            _logger.debug("%s %s -> %d", method, path, exc.status_code)
            return BackendResponse(status_code=exc.status_code, body=_payload(exc.info))
        except module.SerializationError as exc:
            raise _transport_failure(exc) from exc

        if isinstance(data, bool):
            return BackendResponse(status_code=_SUCCESS_STATUS if data else _NOT_FOUND_STATUS)
        return BackendResponse(status_code=_SUCCESS_STATUS, body=_payload(data))
