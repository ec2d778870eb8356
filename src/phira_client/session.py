"""Session manager: registration, login and per-user typed lookups."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from .infrastructure.pipeline import execute, receive
from .infrastructure.transport import Transport
from .models import SimpleRecord, User
from .observability import get_logger
from .protocols import SettingsStore

logger = get_logger("phira_client.session")


@dataclass(frozen=True)
class PasswordLogin:
    """Log in with account email and password."""

    email: str
    password: str

    def to_payload(self) -> dict[str, str]:
        return {"email": self.email, "password": self.password}


@dataclass(frozen=True)
class RefreshTokenLogin:
    """Log in again with a refresh token from an earlier login."""

    token: str

    def to_payload(self) -> dict[str, str]:
        return {"refreshToken": self.token}


type LoginParams = PasswordLogin | RefreshTokenLogin


class RegisterRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str
    name: str
    password: str


class LoginResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    token: str
    refresh_token: str = Field(alias="refreshToken")


class SessionManager:
    """Authenticates against the API and keeps the Transport's token current."""

    def __init__(self, *, transport: Transport, settings: SettingsStore) -> None:
        self._transport = transport
        self._settings = settings

    def restore(self) -> bool:
        """Install the stored access token, if any. Returns True when one was found."""
        tokens = self._settings.tokens()
        if tokens is None:
            return False
        self._transport.set_credentials(tokens[0])
        logger.debug("Restored stored session")
        return True

    def register(self, email: str, username: str, password: str) -> None:
        body = RegisterRequest(email=email, name=username, password=password)
        execute(self._transport.post("/register", body.model_dump()))
        logger.info("Registered account %s", username)

    def login(self, params: LoginParams) -> LoginResponse:
        match params:
            case PasswordLogin():
                method = "password"
            case RefreshTokenLogin():
                method = "refresh token"
            case _:
                raise TypeError(f"unsupported login parameters: {type(params).__name__}")
        resp = receive(self._transport.post("/login", params.to_payload()), LoginResponse)
        self._transport.set_credentials(resp.token)
        self._settings.save_tokens(resp.token, resp.refresh_token)
        logger.info("Logged in with %s", method)
        return resp

    def get_me(self) -> User:
        return receive(self._transport.get("/me"), User)

    def best_record(self, chart_id: int) -> SimpleRecord:
        return receive(self._transport.get(f"/record/best/{chart_id}"), SimpleRecord)
