"""HTTP backend speaking the engine REST API to one node through httpx."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from es_docstore.backend.protocols import BackendResponse
from es_docstore.backend.rest import RestRoutes
from es_docstore.domain.enums import BackendName
from es_docstore.errors import BackendTransportError, InvalidConfigError

if TYPE_CHECKING:
    from es_docstore.config import ClientConfig

_JSON_HEADERS = {"Content-Type": "application/json"}
_WRONG_BACKEND_MSG = "HttpBackend needs a configuration with backend 'http', got '{backend}'."
_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HttpBackend(RestRoutes):
    """Engine backend issuing one HTTP request per call to a single node.

    The wrapped ``httpx.Client`` carries the node as ``base_url`` and owns the
    connection pool. Clusters, cloud ids and API keys go through
    :class:`~es_docstore.backend.adapters.ElasticClientAdapter` instead.
    """

    client: httpx.Client
    backend_name: str = BackendName.HTTP.value

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> HttpBackend:
        """Build a backend from client settings.

        Args:
            config (ClientConfig): Connection settings for the ``http`` backend.
            transport (httpx.BaseTransport | None): Optional transport override.

        Raises:
            InvalidConfigError: If the settings target another backend.

        Returns:
            HttpBackend: Configured backend.

        """
        if config.backend is not BackendName.HTTP:
            raise InvalidConfigError(_WRONG_BACKEND_MSG.format(backend=config.backend))

        client = httpx.Client(
            base_url=config.addresses[0],
            headers={"Accept": "application/json"},
            timeout=config.timeout_s,
            verify=config.verify_certs,
            transport=transport,
        )
        return cls(client=client)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()

    def __enter__(self) -> HttpBackend:
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: bytes | None = None,
    ) -> BackendResponse:
        """Send one request and capture status and body.

        Args:
            method (str): HTTP method.
            path (str): Encoded request path.
            params (dict[str, Any] | None): Query string parameters.
            body (bytes | None): JSON payload.

        Raises:
            BackendTransportError: If no usable response was received.

        Returns:
            BackendResponse: Raw response.

        """
        try:
            response = self.client.request(
                method,
                path,
                params=params,
                content=body,
                headers=_JSON_HEADERS if body is not None else None,
            )
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise BackendTransportError(f"{exc.__class__.__name__}: {exc}") from exc

        _logger.debug("%s %s -> %d", method, response.url, response.status_code)
        return BackendResponse(status_code=response.status_code, body=response.content)
