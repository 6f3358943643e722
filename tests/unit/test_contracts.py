from __future__ import annotations

import json
from dataclasses import dataclass

import pytest
from pydantic import BaseModel, ValidationError

from es_docstore.codec import encode_body, encode_query
from es_docstore.domain import (
    CountResult,
    Document,
    HitMetadata,
    OperationResult,
    RefreshPolicy,
    SearchResult,
    SourceResult,
    StatusCode,
)
from es_docstore.errors import BodyEncodingError, MissingBodyError


@dataclass
class _Point:
    x: int
    y: int


class _Doc(BaseModel):
    name: str


def test_status_codes_keep_their_numeric_values() -> None:
    assert [int(code) for code in StatusCode] == [200, 201, 204, 400, 404, 499, 500, 520, 521, 599]
    assert StatusCode.CREATED.is_success
    assert StatusCode.NO_CONTENT.is_success
    assert not StatusCode.NOT_FOUND.is_success
    assert not StatusCode.PARSE_ERROR.is_success


def test_refresh_policy_values_match_backend_parameter() -> None:
    assert [str(policy) for policy in RefreshPolicy] == ["true", "false", "wait_for"]


def test_document_coerces_refresh_policy_strings() -> None:
    doc = Document(index="docs", id="a", body={"k": 1}, refresh="wait_for")

    assert doc.refresh is RefreshPolicy.WAIT_FOR

    with pytest.raises(ValidationError):
        Document(index="docs", id="a", refresh="sometimes")


def test_hit_metadata_defaults() -> None:
    hit = HitMetadata(index="docs", id="a")

    assert hit.type == ""
    assert hit.score == 0.0
    assert hit.sort == []


def test_results_report_ok_and_raise_carried_errors() -> None:
    error = MissingBodyError("create_document")
    failed = OperationResult(status=error.status, error=error)

    assert OperationResult(status=StatusCode.SUCCESS).ok
    assert CountResult(status=StatusCode.SUCCESS, count=3).ok
    assert not failed.ok
    with pytest.raises(MissingBodyError, match="create_document"):
        failed.raise_for_error()
    SourceResult(status=StatusCode.NOT_FOUND).raise_for_error()


def test_search_result_iterates_hit_document_pairs() -> None:
    hits = [HitMetadata(index="docs", id="a"), HitMetadata(index="docs", id="b")]
    result = SearchResult(status=StatusCode.SUCCESS, hits=hits, total=2, documents=["A", "B"])

    assert list(result) == [(hits[0], "A"), (hits[1], "B")]


def test_encode_body_supports_models_and_dataclasses() -> None:
    assert json.loads(encode_body(_Doc(name="n"))) == {"name": "n"}
    assert json.loads(encode_body({"p": _Point(x=1, y=2)})) == {"p": {"x": 1, "y": 2}}


def test_encode_body_rejects_unknown_types() -> None:
    with pytest.raises(BodyEncodingError, match="not JSON serializable"):
        encode_body(object())


@pytest.mark.parametrize("value", [float("nan"), float("inf"), {"nested": [1.0, float("-inf")]}])
def test_encode_body_rejects_non_finite_numbers(value: object) -> None:
    with pytest.raises(BodyEncodingError, match="not a valid JSON value"):
        encode_body(value)


def test_encode_query_rejects_non_finite_numbers_in_mappings() -> None:
    with pytest.raises(BodyEncodingError):
        encode_query({"query": {"range": {"i": {"gt": float("nan")}}}})


def test_encode_query_forwards_text_verbatim() -> None:
    raw = '{ "query" : { "match_all" : {} } }'

    assert encode_query(raw) == raw.encode("utf-8")
    assert encode_query(raw.encode("utf-8")) == raw.encode("utf-8")
    assert json.loads(encode_query({"size": 1})) == {"size": 1}
