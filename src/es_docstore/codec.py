"""JSON encoding of outgoing payloads."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, NoReturn

from pydantic_core import PydanticSerializationError, to_json

from es_docstore.errors import BodyEncodingError

Query = str | bytes | Mapping[str, Any]


def _reject_constant(name: str) -> NoReturn:
    msg = f"{name} is not a valid JSON value"
    raise ValueError(msg)


def encode_body(value: Any) -> bytes:
    """Serialize a document body to strict JSON bytes.

    Dicts, lists, scalars, pydantic models and dataclasses are supported.
    Non-finite floats are rejected: ``to_json`` writes them as the bare
    ``NaN``/``Infinity`` constants, which the backend cannot parse.

    Args:
        value (Any): Document body.

    Raises:
        BodyEncodingError: If the value cannot be represented as JSON.

    Returns:
        bytes: JSON payload.

    """
    try:
        payload = to_json(value)
        json.loads(payload, parse_constant=_reject_constant)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise BodyEncodingError(str(exc)) from exc
    return payload


def encode_query(query: Query) -> bytes:
    """Turn an opaque query or template into request bytes.

    Text is forwarded verbatim; mappings are serialized once and never
    inspected.

    Args:
        query (Query): Raw JSON text or a mapping.

    Raises:
        BodyEncodingError: If a mapping cannot be represented as JSON.

    Returns:
        bytes: Request payload.

    """
    if isinstance(query, bytes):
        return query
    if isinstance(query, str):
        return query.encode("utf-8")
    return encode_body(dict(query))
