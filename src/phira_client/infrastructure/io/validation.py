"""Pydantic-based validation helpers for inbound IO payloads."""

from __future__ import annotations

from pydantic import TypeAdapter, ValidationError


class IncomingDataError(ValueError):
    """Raised when inbound data fails validation."""


def validate_as[SchemaT](schema: type[SchemaT], payload: object) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_python(payload)
    except ValidationError as exc:
        message = f"Invalid payload for {schema}."
        raise IncomingDataError(message) from exc


def validate_json_as[SchemaT](schema: type[SchemaT], payload: str | bytes | bytearray) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_json(payload)
    except ValidationError as exc:
        message = f"Invalid JSON payload for {schema}."
        raise IncomingDataError(message) from exc


def describe_schema(schema: object) -> str:
    """Return a short human-readable name for a validation target."""
    name = getattr(schema, "__name__", None)
    if isinstance(name, str) and not getattr(schema, "__args__", None):
        return name
    return str(schema)
