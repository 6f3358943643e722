"""Pydantic models of the backend response shapes the store reads.

Each model is a checked projection of the loosely typed JSON the backend
returns: a shape mismatch surfaces as a ``ValidationError`` that operations
translate into a decode status.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Envelope(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class ErrorDetail(_Envelope):
    """Structured ``error`` object of a failed request."""

    type: str | None = None
    reason: str | None = None


class ErrorEnvelope(_Envelope):
    """Body of a failed request. Older engines send ``error`` as a string."""

    error: ErrorDetail | str | None = None
    status: int | None = None


class WriteEnvelope(_Envelope):
    """Metadata returned by index, update and delete calls."""

    result: str | None = None
    version: int | None = Field(default=None, alias="_version")
    id: str | None = Field(default=None, alias="_id")


class TotalHits(_Envelope):
    """Exact total returned when total-hit tracking is requested."""

    value: int
    relation: str = "eq"


class RawHit(_Envelope):
    """One entry of ``hits.hits``."""

    index: str = Field(alias="_index")
    type: str = Field(default="", alias="_type")
    id: str = Field(alias="_id")
    score: float | None = Field(default=None, alias="_score")
    sort: list[Any] | None = None
    source: Any = Field(default=None, alias="_source")


class HitsEnvelope(_Envelope):
    """The ``hits`` object of a search response."""

    total: TotalHits | int | None = None
    hits: list[RawHit]

    @property
    def total_count(self) -> int:
        """Return the total number of matches, 0 when not reported."""
        if self.total is None:
            return 0
        if isinstance(self.total, TotalHits):
            return self.total.value
        return self.total


class SearchEnvelope(_Envelope):
    """Search response. ``hits`` is ``None`` when the backend omitted it."""

    hits: HitsEnvelope | None = None


class CountEnvelope(_Envelope):
    """Count response."""

    count: int | None = None
