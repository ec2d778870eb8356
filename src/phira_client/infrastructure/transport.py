"""Transport: the currently active, pre-configured HTTP session.

Usage example:
    from pathlib import Path

    from phira_client.infrastructure import JsonSettingsStore, LocalFileSystem, Transport

    settings = JsonSettingsStore(path=Path("data/settings.json"), fs=LocalFileSystem())
    transport = Transport(
        api_url="https://api.phira.cn:2925",
        settings=settings,
        ca_bundle_path="certs/phira.pem",
    )
    call = transport.get("/me")
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Self

import requests
from requests.exceptions import InvalidHeader
from requests.utils import check_header_validity

from ..exceptions import TransportError
from ..l10n import resolve_locale
from ..observability import get_logger
from ..protocols import SettingsStore

logger = get_logger("phira_client.infrastructure.transport")

SessionFactory = Callable[[], requests.Session]


@dataclass(frozen=True)
class PreparedCall:
    """A request bound to the session that was active when it was built."""

    session: requests.Session
    request: requests.PreparedRequest
    path: str

    @property
    def method(self) -> str:
        return self.request.method or ""

    @property
    def url(self) -> str:
        return self.request.url or ""

    def send(self) -> requests.Response:
        return self.session.send(self.request)


class Transport:
    """Builds requests against the API using a hot-swappable session.

    The active `(session, token)` pair is replaced wholesale by
    `set_credentials`; a single attribute rebind is the only synchronisation
    readers see, so building a request never waits on a writer. Writers
    serialise on a lock. Calls built before a swap keep their original session.

    HTTPS connections trust only the configured CA bundle.
    """

    def __init__(
        self,
        *,
        api_url: str,
        settings: SettingsStore,
        ca_bundle_path: str = "",
        user_agent: str = "",
        session_factory: SessionFactory = requests.Session,
        token: str | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._settings = settings
        self._ca_bundle_path = _pinned_ca_bundle(self._api_url, ca_bundle_path)
        self._user_agent = user_agent
        self._session_factory = session_factory
        self._swap_lock = threading.Lock()
        self._active: tuple[requests.Session, str | None] = (self._build_session(token), token)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def session(self) -> requests.Session:
        return self._active[0]

    @property
    def authenticated(self) -> bool:
        return self._active[1] is not None

    def _build_headers(self, token: str | None) -> dict[str, str]:
        headers = {"Accept-Language": resolve_locale(self._settings.language())}
        if self._user_agent:
            headers["User-Agent"] = self._user_agent
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"
        for name, value in headers.items():
            _check_header(name, value)
        return headers

    def _build_session(self, token: str | None) -> requests.Session:
        headers = self._build_headers(token)
        session = self._session_factory()
        session.headers.update(headers)
        if self._ca_bundle_path:
            session.verify = self._ca_bundle_path
        return session

    def _install(self, token: str | None) -> None:
        # Superseded sessions stay open: calls built from them may still be sent.
        self._active = (self._build_session(token), token)
        logger.debug("Installed %s session", "authenticated" if token else "anonymous")

    def set_credentials(self, token: str | None) -> None:
        """Install `token` (or drop authentication with None) for new requests."""
        with self._swap_lock:
            self._install(token)

    def refresh_locale(self) -> None:
        """Rebuild the active session so a changed locale setting applies."""
        with self._swap_lock:
            self._install(self._active[1])

    def close(self) -> None:
        """Release the connection pool of the active session."""
        self._active[0].close()

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        json: object | None = None,
    ) -> PreparedCall:
        session = self._active[0]
        raw = requests.Request(
            method=method,
            url=self._api_url + path,
            params=dict(params) if params is not None else None,
            json=json,
        )
        try:
            prepared = session.prepare_request(raw)
        except (requests.RequestException, ValueError) as exc:
            raise TransportError(f"could not build {method} {path}: {exc}") from exc
        return PreparedCall(session=session, request=prepared, path=path)

    def get(self, path: str, params: Mapping[str, str] | None = None) -> PreparedCall:
        return self.request("GET", path, params=params)

    def post(self, path: str, body: object) -> PreparedCall:
        return self.request("POST", path, json=body)


def _pinned_ca_bundle(api_url: str, ca_bundle_path: str) -> str:
    if not api_url.startswith("https://"):
        return ca_bundle_path
    if not ca_bundle_path:
        raise TransportError.for_missing_ca_bundle(api_url)
    if not Path(ca_bundle_path).is_file():
        raise TransportError.for_unreadable_ca_bundle(ca_bundle_path)
    return ca_bundle_path


def _check_header(name: str, value: str) -> None:
    try:
        check_header_validity((name, value))
        value.encode("latin-1")
    except (InvalidHeader, UnicodeEncodeError) as exc:
        raise TransportError.for_invalid_header(name) from exc
