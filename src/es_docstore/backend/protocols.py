"""Protocols for the engine capability consumed by store operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from es_docstore.domain.enums import RefreshPolicy

_ERROR_STATUS_FLOOR = 400


@dataclass(frozen=True, slots=True)
class BackendResponse:
    """Raw response of one backend call: HTTP status and undecoded body."""

    status_code: int
    body: bytes = b""

    @property
    def is_error(self) -> bool:
        """Return whether the backend reported a failure status."""
        return self.status_code >= _ERROR_STATUS_FLOOR


class DocumentBackend(Protocol):
    """Define the thin engine interface used by the store.

    Each method performs exactly one request and raises
    ``BackendTransportError`` when no response was obtained.
    """

    def ping(self) -> BackendResponse:
        """Probe backend liveness.

        Returns:
            BackendResponse: Raw backend response.

        """

    def put_index_template(self, *, name: str, body: bytes) -> BackendResponse:
        """Create or replace a composable index template.

        Args:
            name (str): Template name.
            body (bytes): Opaque template payload.

        Returns:
            BackendResponse: Raw backend response.

        """

    def index(
        self,
        *,
        index: str,
        doc_id: str,
        body: bytes,
        refresh: RefreshPolicy | None = None,
    ) -> BackendResponse:
        """Write a whole document, replacing any existing one.

        Args:
            index (str): Target index name.
            doc_id (str): Document identifier.
            body (bytes): JSON document.
            refresh (RefreshPolicy | None): Optional visibility policy.

        Returns:
            BackendResponse: Raw backend response.

        """

    def update(
        self,
        *,
        index: str,
        doc_id: str,
        body: bytes,
        refresh: RefreshPolicy | None = None,
    ) -> BackendResponse:
        """Apply a partial update.

        Args:
            index (str): Target index name.
            doc_id (str): Document identifier.
            body (bytes): JSON update request, ``{"doc": ...}``.
            refresh (RefreshPolicy | None): Optional visibility policy.

        Returns:
            BackendResponse: Raw backend response.

        """

    def delete(
        self,
        *,
        index: str,
        doc_id: str,
        refresh: RefreshPolicy | None = None,
    ) -> BackendResponse:
        """Delete one document.

        Args:
            index (str): Target index name.
            doc_id (str): Document identifier.
            refresh (RefreshPolicy | None): Optional visibility policy.

        Returns:
            BackendResponse: Raw backend response.

        """

    def search(self, *, index: str, body: bytes, track_total_hits: bool = True) -> BackendResponse:
        """Run a search query.

        Args:
            index (str): Target index name, empty for all indices.
            body (bytes): Opaque query payload.
            track_total_hits (bool): Whether the exact total must be counted.

        Returns:
            BackendResponse: Raw backend response.

        """

    def count(self, *, index: str, body: bytes) -> BackendResponse:
        """Count documents matching a query.

        Args:
            index (str): Target index name, empty for all indices.
            body (bytes): Opaque query payload.

        Returns:
            BackendResponse: Raw backend response.

        """

    def get_source(self, *, index: str, doc_id: str) -> BackendResponse:
        """Fetch the stored body of one document.

        Args:
            index (str): Target index name.
            doc_id (str): Document identifier.

        Returns:
            BackendResponse: Raw backend response.

        """

    def refresh(self, *, indices: Sequence[str] | None = None) -> BackendResponse:
        """Make recent writes visible to searches.

        Args:
            indices (Sequence[str] | None): Index names. ``None`` targets every
                index; an empty sequence targets ``_all`` explicitly.

        Returns:
            BackendResponse: Raw backend response.

        """

    def delete_indices(self, *, indices: Sequence[str]) -> BackendResponse:
        """Delete whole indices in one request.

        Args:
            indices (Sequence[str]): Index names.

        Returns:
            BackendResponse: Raw backend response.

        """
