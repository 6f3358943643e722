"""Domain contracts exchanged between callers and store operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from es_docstore.domain.enums import RefreshPolicy, StatusCode

if TYPE_CHECKING:
    from collections.abc import Iterator

    from es_docstore.errors import DocStoreError

T = TypeVar("T")


class Document(BaseModel):
    """Represent one document addressed by a write or delete call.

    Args:
        index: Target index name.
        id: Document identifier inside the index.
        body: Opaque document payload, serialized as-is. Required for writes.
        refresh: Optional write visibility policy.

    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    index: str
    id: str
    body: Any = None
    refresh: RefreshPolicy | None = None


class HitMetadata(BaseModel):
    """Represent per-hit metadata returned by a search, in response order."""

    model_config = ConfigDict(frozen=True)

    index: str
    type: str = ""
    id: str
    score: float = 0.0
    sort: list[Any] = Field(default_factory=list)


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of a call that returns no payload."""

    status: StatusCode
    error: DocStoreError | None = None

    @property
    def ok(self) -> bool:
        """Return whether the call completed without an error value."""
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the carried error, if any.

        Raises:
            DocStoreError: The error value reported by the call.

        """
        if self.error is not None:
            raise self.error


@dataclass(frozen=True, slots=True)
class CountResult:
    """Outcome of a count call."""

    status: StatusCode
    count: int = 0
    error: DocStoreError | None = None

    @property
    def ok(self) -> bool:
        """Return whether the call completed without an error value."""
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the carried error, if any.

        Raises:
            DocStoreError: The error value reported by the call.

        """
        if self.error is not None:
            raise self.error


@dataclass(frozen=True, slots=True)
class SourceResult(Generic[T]):
    """Outcome of a source lookup. ``document`` is ``None`` unless found."""

    status: StatusCode
    document: T | None = None
    error: DocStoreError | None = None

    @property
    def ok(self) -> bool:
        """Return whether the call completed without an error value."""
        return self.error is None

    @property
    def found(self) -> bool:
        """Return whether the document exists."""
        return self.status == StatusCode.SUCCESS

    def raise_for_error(self) -> None:
        """Raise the carried error, if any.

        Raises:
            DocStoreError: The error value reported by the call.

        """
        if self.error is not None:
            raise self.error


@dataclass(frozen=True, slots=True)
class SearchResult(Generic[T]):
    """Outcome of a search call.

    ``hits[i]`` and ``documents[i]`` always describe the same matched
    document. ``total`` is the exact number of matches, which may exceed the
    size of the returned page.
    """

    status: StatusCode
    hits: list[HitMetadata] = field(default_factory=list)
    total: int = 0
    documents: list[T] = field(default_factory=list)
    error: DocStoreError | None = None

    @property
    def ok(self) -> bool:
        """Return whether the call completed without an error value."""
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the carried error, if any.

        Raises:
            DocStoreError: The error value reported by the call.

        """
        if self.error is not None:
            raise self.error

    def __iter__(self) -> Iterator[tuple[HitMetadata, T]]:
        """Yield ``(hit, document)`` pairs in backend order."""
        return iter(zip(self.hits, self.documents, strict=True))
