"""REST routes of the engine capability, shared by every backend."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

if TYPE_CHECKING:
    from collections.abc import Sequence

    from es_docstore.backend.protocols import BackendResponse
    from es_docstore.domain.enums import RefreshPolicy

_ALL_INDICES = "_all"


def _segment(value: str) -> str:
    return quote(value, safe="")


def _indices_segment(indices: Sequence[str]) -> str:
    return ",".join(_segment(name) for name in indices)


def _path(*segments: str) -> str:
    """Join already-encoded path segments, skipping empty ones."""
    return "/" + "/".join(segment for segment in segments if segment)


def _refresh_params(refresh: RefreshPolicy | None) -> dict[str, str] | None:
    return None if refresh is None else {"refresh": str(refresh)}


class RestRoutes:
    """Map each ``DocumentBackend`` method onto one engine REST call.

    Subclasses send the request through their client by implementing
    ``_request``; they return error statuses as responses and raise
    ``BackendTransportError`` only when no response was obtained.
    """

    __slots__ = ()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: bytes | None = None,
    ) -> BackendResponse:
        raise NotImplementedError

    def ping(self) -> BackendResponse:
        return self._request("HEAD", "/")

    def put_index_template(self, *, name: str, body: bytes) -> BackendResponse:
        return self._request("PUT", _path("_index_template", _segment(name)), body=body)

    def index(
        self,
        *,
        index: str,
        doc_id: str,
        body: bytes,
        refresh: RefreshPolicy | None = None,
    ) -> BackendResponse:
        return self._request(
            "PUT",
            _path(_segment(index), "_doc", _segment(doc_id)),
            params=_refresh_params(refresh),
            body=body,
        )

    def update(
        self,
        *,
        index: str,
        doc_id: str,
        body: bytes,
        refresh: RefreshPolicy | None = None,
    ) -> BackendResponse:
        return self._request(
            "POST",
            _path(_segment(index), "_update", _segment(doc_id)),
            params=_refresh_params(refresh),
            body=body,
        )

    def delete(
        self,
        *,
        index: str,
        doc_id: str,
        refresh: RefreshPolicy | None = None,
    ) -> BackendResponse:
        return self._request(
            "DELETE",
            _path(_segment(index), "_doc", _segment(doc_id)),
            params=_refresh_params(refresh),
        )

    def search(self, *, index: str, body: bytes, track_total_hits: bool = True) -> BackendResponse:
        params = {"track_total_hits": "true"} if track_total_hits else None
        return self._request("POST", _path(_segment(index), "_search"), params=params, body=body)

    def count(self, *, index: str, body: bytes) -> BackendResponse:
        return self._request("POST", _path(_segment(index), "_count"), body=body)

    def get_source(self, *, index: str, doc_id: str) -> BackendResponse:
        return self._request("GET", _path(_segment(index), "_source", _segment(doc_id)))

    def refresh(self, *, indices: Sequence[str] | None = None) -> BackendResponse:
        if indices is None:
            return self._request("POST", "/_refresh")
        target = _indices_segment(indices) or _ALL_INDICES
        return self._request("POST", _path(target, "_refresh"))

    def delete_indices(self, *, indices: Sequence[str]) -> BackendResponse:
        return self._request("DELETE", _path(_indices_segment(indices)))
