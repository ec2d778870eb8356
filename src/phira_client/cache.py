"""Per-resource-type object cache and the process-wide type registry.

Every concrete `Resource` subclass gets exactly one `ObjectCache`, created on
first use and kept for the life of the registry. Entries are never evicted;
a later fetch or `cache_objects` for the same id replaces the entry.

Locking: each cache's lock covers only the dict lookup or insert, never the
network round trip. Two threads fetching the same id may both hit the network;
the cache keeps whichever instance was inserted last and earlier callers keep a
valid, possibly superseded instance.

Usage example:
    store = ObjectStore(transport=transport)
    chart = store.load(Chart, 42)
    assert store.load(Chart, 42) is chart
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from typing import Any, Generic, cast

from .exceptions import CacheRegistryError, NotFoundError, RequestFailedError
from .infrastructure.pipeline import decode, execute, is_null_body
from .infrastructure.transport import Transport
from .models import Resource, ResourceT
from .observability import get_logger

logger = get_logger("phira_client.cache")


class ObjectCache(Generic[ResourceT]):
    """Thread-safe id -> instance mapping for one resource type."""

    def __init__(self, resource_type: type[ResourceT]) -> None:
        self.resource_type = resource_type
        self._entries: dict[int, ResourceT] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, object_id: object) -> bool:
        with self._lock:
            return object_id in self._entries

    def get(self, object_id: int) -> ResourceT | None:
        with self._lock:
            return self._entries.get(object_id)

    def put(self, object_id: int, obj: ResourceT) -> ResourceT:
        with self._lock:
            self._entries[object_id] = obj
        return obj

    def put_many(self, objects: Sequence[ResourceT]) -> None:
        with self._lock:
            for obj in objects:
                self._entries[obj.id] = obj


class CacheRegistry:
    """Maps each resource type to its single `ObjectCache`."""

    def __init__(self) -> None:
        self._caches: dict[type[Resource], ObjectCache[Any]] = {}
        self._lock = threading.Lock()

    def __contains__(self, resource_type: object) -> bool:
        with self._lock:
            return resource_type in self._caches

    def cache_for(self, resource_type: type[ResourceT]) -> ObjectCache[ResourceT]:
        with self._lock:
            cache = self._caches.get(resource_type)
            if cache is None:
                cache = ObjectCache(resource_type)
                self._caches[resource_type] = cache
                logger.debug("Created object cache for %s", resource_type.__name__)
        if cache.resource_type is not resource_type:
            raise CacheRegistryError(resource_type.__name__, cache.resource_type.__name__)
        return cast(ObjectCache[ResourceT], cache)


DEFAULT_REGISTRY = CacheRegistry()


class ObjectStore:
    """Memoized by-id lookups of remote resources."""

    def __init__(self, *, transport: Transport, registry: CacheRegistry | None = None) -> None:
        self._transport = transport
        self._registry = DEFAULT_REGISTRY if registry is None else registry

    @property
    def registry(self) -> CacheRegistry:
        return self._registry

    def cached(self, resource_type: type[ResourceT], object_id: int) -> ResourceT | None:
        """Return the cached instance for `object_id` without any network I/O."""
        return self._registry.cache_for(resource_type).get(object_id)

    def load(self, resource_type: type[ResourceT], object_id: int) -> ResourceT:
        """Return the cached instance for `object_id`, fetching it on a miss."""
        value = self.cached(resource_type, object_id)
        if value is not None:
            logger.debug("Cache hit for %s %s", resource_type.QUERY_PATH, object_id)
            return value
        logger.debug("Cache miss for %s %s", resource_type.QUERY_PATH, object_id)
        return self.fetch(resource_type, object_id)

    def fetch(self, resource_type: type[ResourceT], object_id: int) -> ResourceT:
        """Fetch `object_id` from the server and store it in the cache.

        Raises:
            NotFoundError: If the server reports the entity as absent.
            RequestFailedError: For any other non-success status.
            TransportError: If the request could not be delivered.
            DeserializationError: If the body is not a `resource_type`.
        """
        path = f"/{resource_type.QUERY_PATH}/{object_id}"
        try:
            response = execute(self._transport.get(path))
        except RequestFailedError as exc:
            if exc.status_code == 404:
                raise NotFoundError(resource_type.QUERY_PATH, object_id) from exc
            raise
        if is_null_body(response.content):
            raise NotFoundError(resource_type.QUERY_PATH, object_id)
        value = decode(path, response.content, resource_type)
        logger.debug("Caching %s %s", resource_type.QUERY_PATH, object_id)
        return self._registry.cache_for(resource_type).put(object_id, value)

    def cache_objects(self, objects: Sequence[ResourceT]) -> None:
        """Store already-fetched instances, keyed by their own ids."""
        if not objects:
            return
        resource_type = type(objects[0])
        for obj in objects:
            if type(obj) is not resource_type:
                raise TypeError(
                    f"cache_objects expects one resource type, got {resource_type.__name__} "
                    f"and {type(obj).__name__}"
                )
        self._registry.cache_for(resource_type).put_many(objects)
        logger.debug("Cached %s %s objects", len(objects), resource_type.QUERY_PATH)
