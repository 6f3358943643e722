"""Typed enumerations shared by store operations."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class StatusCode(IntEnum):
    """Represent the closed set of outcomes a store operation can report."""

    SUCCESS = 200
    CREATED = 201
    NO_CONTENT = 204
    BAD_REQUEST = 400
    NOT_FOUND = 404
    REQUEST_ERROR = 499
    INTERNAL_ERROR = 500
    UNEXPECTED_ERROR = 520
    PARSE_ERROR = 521
    ERROR = 599

    @property
    def is_success(self) -> bool:
        """Return whether the code reports a successful round trip."""
        return self < StatusCode.BAD_REQUEST


class RefreshPolicy(StrEnum):
    """Represent write visibility policies accepted by the backend.

    ``TRUE`` forces a refresh of the written shards, ``WAIT_FOR`` holds the
    write until the next scheduled refresh, ``FALSE`` gives no guarantee.
    """

    TRUE = "true"
    FALSE = "false"
    WAIT_FOR = "wait_for"


class BackendName(StrEnum):
    """Represent supported engine backends.

    ``ELASTICSEARCH`` and ``OPENSEARCH`` use the official clients; ``HTTP``
    speaks REST to a single node through httpx.
    """

    ELASTICSEARCH = "elasticsearch"
    OPENSEARCH = "opensearch"
    HTTP = "http"
