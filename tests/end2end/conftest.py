from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import unquote

import httpx
import pytest

from es_docstore import ClientConfig, DocumentStore
from es_docstore.backend import HttpBackend

_ADDRESS = "http://engine.test:9200"
_VISIBLE_ON_WRITE = frozenset({"true", "wait_for", ""})


def _json(status_code: int, payload: object) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


def _error(status_code: int, error_type: str, reason: str) -> httpx.Response:
    return _json(status_code, {"error": {"type": error_type, "reason": reason}, "status": status_code})


class _EngineError(Exception):
    def __init__(self, status_code: int, error_type: str, reason: str) -> None:
        super().__init__(reason)
        self.response = _error(status_code, error_type, reason)


@dataclass
class _StoredDoc:
    source: dict[str, Any]
    version: int = 1
    visible: bool = False


def _matches(query: dict[str, Any], source: dict[str, Any]) -> bool:
    if not query or "match_all" in query:
        return True
    if "term" in query or "match" in query:
        ((name, expected),) = (query.get("term") or query["match"]).items()
        if isinstance(expected, dict):
            expected = expected.get("value", expected.get("query"))
        return source.get(name) == expected
    if "terms" in query:
        ((name, accepted),) = query["terms"].items()
        return source.get(name) in accepted
    raise _EngineError(400, "parsing_exception", f"unknown query [{next(iter(query))}]")


def _sort_keys(sort: list[Any]) -> list[tuple[str, bool]]:
    keys = []
    for entry in sort:
        if isinstance(entry, str):
            keys.append((entry, False))
            continue
        ((name, order),) = entry.items()
        if isinstance(order, dict):
            order = order.get("order", "asc")
        keys.append((name, order == "desc"))
    return keys


@dataclass
class FakeEngine:
    """In-memory engine answering the REST subset the store uses.

    Writes are pending until a refresh makes them visible to search and
    count; ``_source`` reads are realtime.
    """

    indices: dict[str, dict[str, _StoredDoc]] = field(default_factory=dict)
    templates: dict[str, Any] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        segments = [unquote(part) for part in request.url.raw_path.split(b"?")[0].decode("ascii").split("/") if part]
        try:
            return self._route(request, segments)
        except _EngineError as exc:
            return exc.response

    def _route(self, request: httpx.Request, segments: list[str]) -> httpx.Response:
        method = request.method
        if not segments:
            return httpx.Response(200)
        if segments[0] == "_index_template":
            self.templates[segments[1]] = self._object_body(request)
            return _json(200, {"acknowledged": True})
        if segments[-1] == "_refresh":
            return self._refresh(segments[:-1])
        if segments[-1] in {"_search", "_count"}:
            return self._query(segments[:-1], segments[-1], request)
        if len(segments) == 1 and method == "DELETE":
            return self._delete_indices(segments[0].split(","))
        if len(segments) == 3:
            index, action, doc_id = segments
            return self._document(request, index, action, doc_id)
        if segments[0] in {"_doc", "_update", "_source"}:
            raise _EngineError(400, "invalid_index_name_exception", "index name must not be empty")
        raise _EngineError(400, "illegal_argument_exception", f"no handler for {method} {request.url.path}")

    @staticmethod
    def _object_body(request: httpx.Request) -> dict[str, Any]:
        try:
            body = json.loads(request.content or b"{}")
        except json.JSONDecodeError as exc:
            raise _EngineError(400, "parse_exception", str(exc)) from exc
        if not isinstance(body, dict):
            raise _EngineError(400, "mapper_parsing_exception", "failed to parse, document is empty")
        return body

    def _existing(self, names: list[str]) -> list[str]:
        for name in names:
            if name not in self.indices:
                raise _EngineError(404, "index_not_found_exception", f"no such index [{name}]")
        return names

    def _refresh(self, target: list[str]) -> httpx.Response:
        names = list(self.indices) if not target or target == ["_all"] else self._existing(target[0].split(","))
        for name in names:
            for doc in self.indices[name].values():
                doc.visible = True
        return _json(200, {"_shards": {"total": len(names), "successful": len(names), "failed": 0}})

    def _delete_indices(self, names: list[str]) -> httpx.Response:
        for name in self._existing(names):
            del self.indices[name]
        return _json(200, {"acknowledged": True})

    def _document(self, request: httpx.Request, index: str, action: str, doc_id: str) -> httpx.Response:
        if index.startswith("_"):
            raise _EngineError(400, "invalid_index_name_exception", f"Invalid index name [{index}]")
        visible = request.url.params.get("refresh") in _VISIBLE_ON_WRITE

        if action == "_doc" and request.method == "PUT":
            body = self._object_body(request)
            docs = self.indices.setdefault(index, {})
            previous = docs.get(doc_id)
            version = previous.version + 1 if previous else 1
            docs[doc_id] = _StoredDoc(source=body, version=version, visible=visible)
            result = "updated" if previous else "created"
            return _json(201 if previous is None else 200, {"result": result, "_version": version, "_id": doc_id})

        stored = self.indices.get(index, {}).get(doc_id)
        if action == "_source" and request.method == "GET":
            if stored is None:
                raise _EngineError(404, "resource_not_found_exception", f"Document not found [{index}]/[{doc_id}]")
            return _json(200, stored.source)
        if stored is None:
            if action == "_doc":
                return _json(404, {"result": "not_found", "_id": doc_id, "_index": index})
            raise _EngineError(404, "document_missing_exception", f"[{doc_id}]: document missing")

        if action == "_update":
            partial = self._object_body(request).get("doc", {})
            stored.source = {**stored.source, **partial}
            result = "updated"
        else:
            del self.indices[index][doc_id]
            result = "deleted"
        stored.version += 1
        stored.visible = stored.visible or visible
        return _json(200, {"result": result, "_version": stored.version, "_id": doc_id})

    def _query(self, target: list[str], action: str, request: httpx.Request) -> httpx.Response:
        body = self._object_body(request)
        names = self._existing(target[0].split(",")) if target else list(self.indices)
        matched = [
            (name, doc_id, doc.source)
            for name in names
            for doc_id, doc in self.indices[name].items()
            if doc.visible and _matches(body.get("query", {}), doc.source)
        ]
        if action == "_count":
            return _json(200, {"count": len(matched)})

        keys = _sort_keys(body.get("sort", []))
        for name, descending in reversed(keys):
            matched.sort(key=lambda item, field_name=name: item[2].get(field_name), reverse=descending)
        size = body.get("size", 10)
        hits = [
            {
                "_index": name,
                "_type": "_doc",
                "_id": doc_id,
                "_score": None if keys else 1.0,
                "_source": source,
                **({"sort": [source.get(key) for key, _ in keys]} if keys else {}),
            }
            for name, doc_id, source in matched[:size]
        ]
        return _json(200, {"hits": {"total": {"value": len(matched), "relation": "eq"}, "hits": hits}})


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def store(engine: FakeEngine):
    backend = HttpBackend.from_config(
        ClientConfig(backend="http", addresses=[_ADDRESS]),
        transport=httpx.MockTransport(engine.handle),
    )
    with DocumentStore(backend=backend) as opened:
        yield opened
