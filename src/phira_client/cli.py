"""CLI for the Phira API client.

Commands:
- login: Log in with email/password or a refresh token
- register: Create a new account
- me: Show the logged-in user
- show: Fetch one user, chart or record by id
- list: Run a filtered, paginated list query
- best-record: Show the caller's best record on a chart
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from pydantic import BaseModel
from rich import print as rprint
from rich.table import Table

from . import __version__
from .client import Client
from .config import ClientConfig
from .config_file import load_client_config_file
from .exceptions import PhiraClientError
from .infrastructure import LocalFileSystem
from .models import RESOURCE_TYPES, Resource
from .session import LoginParams, PasswordLogin, RefreshTokenLogin


class ClientBuilder(Protocol):
    """Protocol for constructing the client used by CLI commands."""

    def __call__(self, config: ClientConfig) -> Client:
        """Build a client for the given configuration."""
        ...


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: ClientConfig
    client_builder: ClientBuilder

    def build_client(self) -> Client:
        """Return a client with any stored session restored."""
        try:
            client = self.client_builder(self.config)
            client.restore_session()
        except PhiraClientError as exc:
            raise _fail(exc) from exc
        return client


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the phira entry point.")


class UnknownResourceError(typer.BadParameter):
    """Raised when a resource name is not one of the known collections."""

    def __init__(self, name: str) -> None:
        known = ", ".join(sorted(RESOURCE_TYPES))
        super().__init__(f"Unknown resource {name!r}; expected one of: {known}.")


class FilterFormatError(typer.BadParameter):
    """Raised when a --filter value is not KEY=VALUE."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Filters must look like key=value (got {value!r}).")


class LoginOptionsError(typer.BadParameter):
    """Raised when login options do not select exactly one method."""

    def __init__(self) -> None:
        super().__init__("Use either --email/--password or --refresh-token.")


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _resource_type(name: str) -> type[Resource]:
    resource_type = RESOURCE_TYPES.get(name.strip().lower())
    if resource_type is None:
        raise UnknownResourceError(name)
    return resource_type


def _parse_filters(values: list[str] | None) -> list[tuple[str, str]]:
    parsed: list[tuple[str, str]] = []
    for value in values or []:
        key, sep, rest = value.partition("=")
        if not sep or not key.strip():
            raise FilterFormatError(value)
        parsed.append((key.strip(), rest))
    return parsed


def _login_params(
    email: str | None, password: str | None, refresh_token: str | None
) -> LoginParams:
    if refresh_token is not None:
        if email is not None or password is not None:
            raise LoginOptionsError()
        return RefreshTokenLogin(token=refresh_token)
    if email is None or password is None:
        raise LoginOptionsError()
    return PasswordLogin(email=email, password=password)


def _print_model(model: BaseModel) -> None:
    table = Table(show_header=False)
    for key, value in model.model_dump(mode="json").items():
        table.add_row(key, "" if value is None else str(value))
    rprint(table)


def _version_callback(value: bool) -> None:
    if value:
        rprint(__version__)
        raise typer.Exit()


def _fail(exc: PhiraClientError) -> typer.Exit:
    rprint(f"[red]✗ {exc}[/red]")
    return typer.Exit(code=1)


def create_app(client_builder: ClientBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided client builder."""
    app = typer.Typer(add_completion=False, help="Command line access to the Phira API.")

    @app.callback()
    def main(
        ctx: typer.Context,
        config_path: Annotated[
            Path | None,
            typer.Option("--config", help="TOML config file overriding environment values"),
        ] = None,
        api_url: Annotated[
            str | None,
            typer.Option("--api-url", help="Override the API base URL"),
        ] = None,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the package version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        _ = version
        try:
            config = ClientConfig.from_env()
            if config_path is not None:
                file_config = load_client_config_file(path=config_path, fs=LocalFileSystem())
                config = config.with_file_overrides(file_config)
            config = config.with_overrides(api_url=api_url)
        except PhiraClientError as exc:
            raise _fail(exc) from exc
        ctx.obj = CliContext(config=config, client_builder=client_builder)

    @app.command()
    def login(
        ctx: typer.Context,
        email: Annotated[str | None, typer.Option("--email", "-e")] = None,
        password: Annotated[str | None, typer.Option("--password", "-p")] = None,
        refresh_token: Annotated[str | None, typer.Option("--refresh-token")] = None,
    ) -> None:
        """Log in and store the token pair."""
        params = _login_params(email, password, refresh_token)
        client = _get_context(ctx).build_client()
        try:
            client.login(params)
        except PhiraClientError as exc:
            raise _fail(exc) from exc
        rprint("[green]✓ Logged in[/green]")

    @app.command()
    def register(
        ctx: typer.Context,
        email: Annotated[str, typer.Option("--email", "-e")],
        username: Annotated[str, typer.Option("--username", "-u")],
        password: Annotated[str, typer.Option("--password", "-p")],
    ) -> None:
        """Register a new account."""
        client = _get_context(ctx).build_client()
        try:
            client.register(email, username, password)
        except PhiraClientError as exc:
            raise _fail(exc) from exc
        rprint(f"[green]✓ Registered:[/green] {username}")

    @app.command()
    def me(ctx: typer.Context) -> None:
        """Show the logged-in user."""
        client = _get_context(ctx).build_client()
        try:
            user = client.get_me()
        except PhiraClientError as exc:
            raise _fail(exc) from exc
        _print_model(user)

    @app.command()
    def show(
        ctx: typer.Context,
        resource: Annotated[str, typer.Argument(help="user, chart or record")],
        object_id: Annotated[int, typer.Argument(help="Numeric id")],
    ) -> None:
        """Fetch one resource by id."""
        resource_type = _resource_type(resource)
        client = _get_context(ctx).build_client()
        try:
            obj = client.load(resource_type, object_id)
        except PhiraClientError as exc:
            raise _fail(exc) from exc
        _print_model(obj)

    @app.command(name="list")
    def list_resources(
        ctx: typer.Context,
        resource: Annotated[str, typer.Argument(help="user, chart or record")],
        order: Annotated[str | None, typer.Option("--order", help="Sort order")] = None,
        flag: Annotated[
            list[str] | None,
            typer.Option("--flag", help="Boolean filter set to 1 (repeatable)"),
        ] = None,
        filters: Annotated[
            list[str] | None,
            typer.Option("--filter", help="key=value filter (repeatable)"),
        ] = None,
        page: Annotated[int, typer.Option("--page", min=0, help="Zero-based page")] = 0,
        page_num: Annotated[
            int | None, typer.Option("--page-num", min=1, help="Results per page")
        ] = None,
    ) -> None:
        """Run a filtered, paginated list query."""
        resource_type = _resource_type(resource)
        parsed_filters = _parse_filters(filters)
        client = _get_context(ctx).build_client()
        builder = client.query(resource_type).page(page)
        if order is not None:
            builder = builder.order(order)
        for name in flag or []:
            builder = builder.flag(name)
        for key, value in parsed_filters:
            builder = builder.query(key, value)
        if page_num is not None:
            builder = builder.page_num(page_num)
        try:
            results, count = builder.send()
        except PhiraClientError as exc:
            raise _fail(exc) from exc
        client.cache_objects(results)

        table = Table("id", "name")
        for obj in results:
            table.add_row(str(obj.id), str(getattr(obj, "name", "")))
        rprint(table)
        rprint(f"  {len(results):,} shown of {count:,} total")

    @app.command(name="best-record")
    def best_record(
        ctx: typer.Context,
        chart_id: Annotated[int, typer.Argument(help="Chart id")],
    ) -> None:
        """Show the best record on a chart."""
        client = _get_context(ctx).build_client()
        try:
            record = client.best_record(chart_id)
        except PhiraClientError as exc:
            raise _fail(exc) from exc
        _print_model(record)

    return app
