"""Public validation helpers for inbound payloads."""

from .infrastructure.io.validation import (
    IncomingDataError,
    describe_schema,
    validate_as,
    validate_json_as,
)

__all__ = ["IncomingDataError", "describe_schema", "validate_as", "validate_json_as"]
