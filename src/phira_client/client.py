"""Client facade tying together transport, cache, queries and session.

Usage example:
    from phira_client.composition import build_client
    from phira_client.config import ClientConfig
    from phira_client.models import Chart
    from phira_client.session import PasswordLogin

    client = build_client(ClientConfig.from_env())
    client.login(PasswordLogin(email="me@example.com", password="secret"))
    charts, total = client.query(Chart).order("-rating").send()
    client.cache_objects(charts)
"""

from __future__ import annotations

from collections.abc import Sequence

from .cache import CacheRegistry, ObjectStore
from .infrastructure.transport import Transport
from .models import ResourceT, SimpleRecord, User
from .protocols import SettingsStore
from .query import QueryBuilder
from .session import LoginParams, LoginResponse, SessionManager


class Client:
    """Single entry point for talking to the Phira API."""

    def __init__(
        self,
        *,
        transport: Transport,
        settings: SettingsStore,
        registry: CacheRegistry | None = None,
    ) -> None:
        self.transport = transport
        self.settings = settings
        self.objects = ObjectStore(transport=transport, registry=registry)
        self.session = SessionManager(transport=transport, settings=settings)

    def set_access_token(self, token: str | None) -> None:
        self.transport.set_credentials(token)

    def close(self) -> None:
        self.transport.close()

    def load(self, resource_type: type[ResourceT], object_id: int) -> ResourceT:
        return self.objects.load(resource_type, object_id)

    def fetch(self, resource_type: type[ResourceT], object_id: int) -> ResourceT:
        return self.objects.fetch(resource_type, object_id)

    def cached(self, resource_type: type[ResourceT], object_id: int) -> ResourceT | None:
        return self.objects.cached(resource_type, object_id)

    def cache_objects(self, objects: Sequence[ResourceT]) -> None:
        self.objects.cache_objects(objects)

    def query(self, resource_type: type[ResourceT]) -> QueryBuilder[ResourceT]:
        return QueryBuilder(resource_type, transport=self.transport)

    def restore_session(self) -> bool:
        return self.session.restore()

    def register(self, email: str, username: str, password: str) -> None:
        self.session.register(email, username, password)

    def login(self, params: LoginParams) -> LoginResponse:
        return self.session.login(params)

    def get_me(self) -> User:
        return self.session.get_me()

    def best_record(self, chart_id: int) -> SimpleRecord:
        return self.session.best_record(chart_id)
