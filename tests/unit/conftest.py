from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from es_docstore.backend.protocols import BackendResponse


@dataclass
class BackendStub:
    response: BackendResponse = field(default_factory=lambda: BackendResponse(status_code=200, body=b"{}"))
    error: Exception | None = None
    calls: list[tuple[str, dict[str, object]]] = field(default_factory=list)

    def _answer(self, operation: str, **kwargs: object) -> BackendResponse:
        self.calls.append((operation, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def ping(self) -> BackendResponse:
        return self._answer("ping")

    def put_index_template(self, **kwargs: object) -> BackendResponse:
        return self._answer("put_index_template", **kwargs)

    def index(self, **kwargs: object) -> BackendResponse:
        return self._answer("index", **kwargs)

    def update(self, **kwargs: object) -> BackendResponse:
        return self._answer("update", **kwargs)

    def delete(self, **kwargs: object) -> BackendResponse:
        return self._answer("delete", **kwargs)

    def search(self, **kwargs: object) -> BackendResponse:
        return self._answer("search", **kwargs)

    def count(self, **kwargs: object) -> BackendResponse:
        return self._answer("count", **kwargs)

    def get_source(self, **kwargs: object) -> BackendResponse:
        return self._answer("get_source", **kwargs)

    def refresh(self, **kwargs: object) -> BackendResponse:
        return self._answer("refresh", **kwargs)

    def delete_indices(self, **kwargs: object) -> BackendResponse:
        return self._answer("delete_indices", **kwargs)


@pytest.fixture
def backend() -> BackendStub:
    return BackendStub()
