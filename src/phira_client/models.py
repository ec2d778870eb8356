"""Typed resource models returned by the Phira API.

Wire payloads use camelCase keys; models expose snake_case attributes and
ignore keys they do not know about. Instances are frozen because the object
cache hands the same instance to every caller.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
    frozen=True,
)


class WireModel(BaseModel):
    """Base model for camelCase wire payloads."""

    model_config = _WIRE_CONFIG


class Resource(WireModel):
    """A remote entity with a collection path and an integer id.

    Subclasses set `QUERY_PATH` to the collection segment used for
    `GET /{QUERY_PATH}/{id}` and list queries.
    """

    QUERY_PATH: ClassVar[str]

    id: int

    @classmethod
    def resource_name(cls) -> str:
        return cls.QUERY_PATH


class User(Resource):
    QUERY_PATH: ClassVar[str] = "user"

    name: str
    avatar: str | None = None
    badges: list[str] = Field(default_factory=list)
    language: str = ""
    bio: str | None = None
    exp: int = 0
    rks: float = 0.0
    joined: datetime | None = None
    last_login: datetime | None = None
    roles: int = 0
    banned: bool = False
    login_banned: bool = False
    follower_count: int = 0
    following_count: int = 0


class Chart(Resource):
    QUERY_PATH: ClassVar[str] = "chart"

    name: str
    level: str = ""
    difficulty: float = 0.0
    charter: str = ""
    composer: str = ""
    illustrator: str = ""
    description: str | None = None
    ranked: bool = False
    reviewed: bool = False
    stable: bool = False
    stable_request: bool = False
    illustration: str = ""
    preview: str = ""
    file: str = ""
    uploader: int | None = None
    rating: float | None = None
    rating_count: int = 0
    tags: list[str] = Field(default_factory=list)
    created: datetime | None = None
    updated: datetime | None = None
    chart_updated: datetime | None = None


class Record(Resource):
    QUERY_PATH: ClassVar[str] = "record"

    player: int
    chart: int
    score: int
    accuracy: float
    perfect: int = 0
    good: int = 0
    bad: int = 0
    miss: int = 0
    speed: float = 1.0
    max_combo: int = 0
    best: bool = False
    best_std: bool = False
    mods: int = 0
    full_combo: bool = False
    std: float | None = None
    std_score: float | None = None
    time: datetime | None = None


class SimpleRecord(WireModel):
    """Compact record returned by the best-record endpoint."""

    id: int
    player: int
    score: int
    accuracy: float
    full_combo: bool = False


ResourceT = TypeVar("ResourceT", bound=Resource)


class PagedResult(WireModel, Generic[ResourceT]):
    """Envelope for list queries: one page of results plus the total count."""

    count: int
    results: list[ResourceT]


RESOURCE_TYPES: dict[str, type[Resource]] = {
    model.QUERY_PATH: model for model in (User, Chart, Record)
}
