"""Fluent builder for filtered, paginated list queries.

Usage example:
    charts, total = Client.query(Chart).order("-rating").flag("ranked").page(0).send()
"""

from __future__ import annotations

from typing import Generic, Self

from .infrastructure.pipeline import receive
from .infrastructure.transport import Transport
from .models import PagedResult, ResourceT
from .observability import get_logger

logger = get_logger("phira_client.query")


class QueryBuilder(Generic[ResourceT]):
    """Accumulates filters for one resource type and issues the list request.

    Pages are zero-based here and one-based on the wire. Results are never
    cached implicitly; pass them to `ObjectStore.cache_objects` to memoize.
    """

    def __init__(self, resource_type: type[ResourceT], *, transport: Transport) -> None:
        self.resource_type = resource_type
        self._transport = transport
        self._queries: dict[str, str] = {}
        self._page: int | None = None

    @property
    def filters(self) -> dict[str, str]:
        return dict(self._queries)

    def query(self, key: str, value: str) -> Self:
        self._queries[key] = value
        return self

    def order(self, order: str) -> Self:
        return self.query("order", order)

    def flag(self, flag: str) -> Self:
        return self.query(flag, "1")

    def page_num(self, page_num: int) -> Self:
        return self.query("page_num", str(page_num))

    def page(self, page: int) -> Self:
        if page < 0:
            raise ValueError("page must be zero or positive")
        self._page = page
        return self

    def wire_params(self) -> dict[str, str]:
        """Return the query string parameters `send` will use."""
        params = dict(self._queries)
        params["page"] = str((self._page or 0) + 1)
        return params

    def send(self) -> tuple[list[ResourceT], int]:
        """Issue the list request and return `(results, total_count)`."""
        path = f"/{self.resource_type.QUERY_PATH}"
        params = self.wire_params()
        logger.debug("Listing %s with %s", path, params)
        result = receive(
            self._transport.get(path, params=params),
            PagedResult[self.resource_type],
        )
        return result.results, result.count
