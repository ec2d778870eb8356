"""Response pipeline: send a prepared call and classify the outcome."""

from __future__ import annotations

import requests

from ..exceptions import DeserializationError, RequestFailedError, TransportError
from ..observability import get_logger
from .io.validation import IncomingDataError, describe_schema, validate_json_as
from .transport import PreparedCall

logger = get_logger("phira_client.infrastructure.pipeline")


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def error_detail(text: str) -> str:
    """Return the `detail` string of a JSON error body, else the raw text."""
    try:
        payload = validate_json_as(dict[str, object], text)
    except IncomingDataError:
        return text
    detail = payload.get("detail")
    if isinstance(detail, str):
        return detail
    return text


def is_null_body(content: bytes) -> bool:
    return content.strip() == b"null"


def execute(call: PreparedCall) -> requests.Response:
    """Send `call` and return the response if its status is 2xx.

    Raises:
        TransportError: If the request could not be delivered.
        RequestFailedError: For any non-success status.
    """
    logger.debug("%s %s", call.method, call.path)
    try:
        response = call.send()
    except requests.RequestException as exc:
        logger.warning("Request %s %s could not be sent: %s", call.method, call.path, exc)
        raise TransportError(f"{call.method} {call.path}: {exc}") from exc

    if is_success(response.status_code):
        return response

    detail = error_detail(response.text)
    logger.warning(
        "Request %s %s failed with status %s", call.method, call.path, response.status_code
    )
    raise RequestFailedError(detail, response.status_code)


def decode[SchemaT](path: str, content: bytes, schema: type[SchemaT]) -> SchemaT:
    """Validate a JSON response body received from `path` as `schema`."""
    try:
        return validate_json_as(schema, content)
    except IncomingDataError as exc:
        raise DeserializationError(path, describe_schema(schema)) from exc


def receive[SchemaT](call: PreparedCall, schema: type[SchemaT]) -> SchemaT:
    """Execute `call` and validate its JSON body as `schema`.

    Raises:
        DeserializationError: If the body does not match `schema`.
    """
    response = execute(call)
    return decode(call.path, response.content, schema)
