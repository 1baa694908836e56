"""userdir CLI application using Typer.

This module provides command-line access to a user directory. The
directory is built from application settings unless one is passed in
through the Click context object (as the tests do).
"""

from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table

from userdir.exceptions import UserDirectoryError, UserDoesNotExistError
from userdir.logging_config import configure_logging
from userdir.persistence.memory import InMemoryUserDirectory
from userdir.persistence.sqlalchemy import UserDirectorySQLAlchemy
from userdir.repositories import UserDirectory
from userdir.schemas import Authentication
from userdir_config import Settings, get_settings

app = typer.Typer(
    name="userdir",
    help="userdir - user directory administration CLI",
    no_args_is_help=True,
)
console = Console()


def build_directory(settings: Settings) -> UserDirectory:
    """Create the directory backend selected in the settings."""
    if settings.backend == "memory":
        return InMemoryUserDirectory()
    return UserDirectorySQLAlchemy(settings.database_url_object)


@app.callback()
def main(ctx: typer.Context) -> None:
    """Connect to the configured user directory."""
    if ctx.obj is not None:
        return
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        ctx.obj = build_directory(settings)
    except UserDirectoryError as e:
        _fail(e)


def _fail(error: UserDirectoryError) -> NoReturn:
    console.print(f"[red]Error:[/red] {error.message}")
    raise typer.Exit(code=1)


def _require_user(directory: UserDirectory, username: str) -> None:
    if not directory.has_user(username):
        raise UserDoesNotExistError(username)


@app.command("ping")
def ping(ctx: typer.Context) -> None:
    """Check that the directory is reachable."""
    directory: UserDirectory = ctx.obj
    if isinstance(directory, UserDirectorySQLAlchemy) and not directory.test_connection():
        console.print("[red]Database is not reachable[/red]")
        raise typer.Exit(code=1)
    console.print("[green]OK[/green]")


@app.command("add")
def add_user(
    ctx: typer.Context,
    username: str,
    email: str = typer.Option(..., "--email", "-e"),
    screen_name: str = typer.Option(..., "--screen-name", "-s"),
    password: str = typer.Option(
        ...,
        "--password",
        "-p",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
    ),
) -> None:
    """Add a new user."""
    try:
        ctx.obj.add_user(username, email, screen_name, password)
    except UserDirectoryError as e:
        _fail(e)
    console.print(f"[green]Added user[/green] {username}")


@app.command("remove")
def remove_user(ctx: typer.Context, username: str) -> None:
    """Remove a user and its credential."""
    try:
        removed = ctx.obj.remove_user(username)
    except UserDirectoryError as e:
        _fail(e)
    if not removed:
        _fail(UserDoesNotExistError(username))
    console.print(f"[green]Removed user[/green] {username}")


@app.command("list")
def list_users(ctx: typer.Context) -> None:
    """List all usernames."""
    try:
        usernames = sorted(ctx.obj.list_users())
    except UserDirectoryError as e:
        _fail(e)
    for username in usernames:
        console.print(username)
    console.print(f"[dim]{len(usernames)} user(s)[/dim]")


@app.command("show")
def show_user(ctx: typer.Context, username: str) -> None:
    """Show a user's profile."""
    try:
        data = ctx.obj.get_user_data(username)
        if data is None:
            raise UserDoesNotExistError(username)
    except UserDirectoryError as e:
        _fail(e)

    table = Table(show_header=False)
    table.add_row("Username", data.username)
    table.add_row("Email", data.email or "")
    table.add_row("Screen name", data.screen_name)
    console.print(table)


@app.command("auth")
def authenticate(
    ctx: typer.Context,
    username: str,
    password: str = typer.Option(..., "--password", "-p", prompt=True, hide_input=True),
) -> None:
    """Check a username/password pair."""
    try:
        result = ctx.obj.authenticate_detailed(username, password)
    except UserDirectoryError as e:
        _fail(e)

    if result is Authentication.AUTHENTICATED:
        console.print("[green]Authenticated[/green]")
        return
    if result is Authentication.UNKNOWN_USER:
        console.print(f"[red]Unknown user[/red] {username}")
    else:
        console.print("[red]Wrong password[/red]")
    raise typer.Exit(code=1)


@app.command("rename")
def rename_user(ctx: typer.Context, username: str, new_username: str) -> None:
    """Change a user's username."""
    try:
        _require_user(ctx.obj, username)
        ctx.obj.update_username(username, new_username)
    except UserDirectoryError as e:
        _fail(e)
    console.print(f"[green]Renamed[/green] {username} -> {new_username}")


@app.command("set-email")
def set_email(ctx: typer.Context, username: str, email: str) -> None:
    """Change a user's email."""
    try:
        _require_user(ctx.obj, username)
        ctx.obj.update_email(username, email)
    except UserDirectoryError as e:
        _fail(e)
    console.print(f"[green]Updated email of[/green] {username}")


@app.command("set-screen-name")
def set_screen_name(ctx: typer.Context, username: str, screen_name: str) -> None:
    """Change a user's screen name."""
    try:
        _require_user(ctx.obj, username)
        ctx.obj.update_screen_name(username, screen_name)
    except UserDirectoryError as e:
        _fail(e)
    console.print(f"[green]Updated screen name of[/green] {username}")


@app.command("set-password")
def set_password(
    ctx: typer.Context,
    username: str,
    password: str = typer.Option(
        ...,
        "--password",
        "-p",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
    ),
) -> None:
    """Change a user's password."""
    try:
        _require_user(ctx.obj, username)
        ctx.obj.update_password(username, password)
    except UserDirectoryError as e:
        _fail(e)
    console.print(f"[green]Updated password of[/green] {username}")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
