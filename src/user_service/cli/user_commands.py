"""User management CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from src.user_service.core.exceptions import DomainConflictError, UserServiceError
from src.user_service.core.services import (
    DbManageService,
    DbSessionService,
    UserService,
)
from src.user_service.entities.core.user import User, UserRepository
from src.user_service.runtime.context import get_config

console = Console()

users_app = typer.Typer(help="Manage users in the configured database")


@contextmanager
def user_service_scope() -> Iterator[UserService]:
    """Yield a UserService bound to a session on the configured database."""
    database_service = DbSessionService()
    if get_config().database.create_tables:
        DbManageService(database_service.engine).create_all()
    try:
        with database_service.session_scope() as session:
            yield UserService(UserRepository(session))
    finally:
        database_service.dispose()


def _print_user(user: User) -> None:
    table = Table(title=f"User {user.id}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("ID", str(user.id))
    table.add_row("Username", user.username)
    table.add_row("Email", user.email)
    table.add_row("Created", user.created_at.isoformat())
    table.add_row("Updated", user.updated_at.isoformat())
    console.print(table)


@users_app.command("list")
def list_users() -> None:
    """List all users."""
    try:
        with user_service_scope() as user_service:
            users = user_service.get_all_users()
    except UserServiceError as e:
        console.print(f"[red]❌ Failed to list users: {e}[/red]")
        raise typer.Exit(code=1) from e

    if not users:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(title="Users")
    table.add_column("ID", style="cyan")
    table.add_column("Username", style="green")
    table.add_column("Email", style="blue")
    for user in users:
        table.add_row(str(user.id), user.username, user.email)

    console.print(table)
    console.print(f"\n[green]Found {len(users)} users[/green]")


@users_app.command("add")
def add_user(
    username: str = typer.Argument(..., help="Username for the new user"),
    email: str = typer.Option(..., "--email", "-e", help="Email address"),
    password: str = typer.Option(
        ..., "--password", "-p", help="Password", prompt=True, hide_input=True
    ),
) -> None:
    """Add a new user."""
    try:
        with user_service_scope() as user_service:
            user = user_service.create_user(
                User(username=username, email=email, password=password)
            )
    except DomainConflictError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1) from e
    except UserServiceError as e:
        console.print(f"[red]❌ Failed to create user: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Created user '{user.username}' with id {user.id}[/green]")


@users_app.command("show")
def show_user(
    user_id: int = typer.Argument(..., help="ID of the user"),
) -> None:
    """Show a single user."""
    try:
        with user_service_scope() as user_service:
            user = user_service.get_user_by_id(user_id)
    except UserServiceError as e:
        console.print(f"[red]❌ Failed to load user: {e}[/red]")
        raise typer.Exit(code=1) from e

    if user is None:
        console.print(f"[red]❌ User {user_id} not found[/red]")
        raise typer.Exit(code=1)

    _print_user(user)


@users_app.command("delete")
def delete_user(
    user_id: int = typer.Argument(..., help="ID of the user to delete"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
) -> None:
    """Delete a user."""
    if not force and not Confirm.ask(f"Are you sure you want to delete user {user_id}?"):
        console.print("[yellow]Deletion cancelled[/yellow]")
        return

    try:
        with user_service_scope() as user_service:
            deleted = user_service.delete_user(user_id)
    except UserServiceError as e:
        console.print(f"[red]❌ Failed to delete user: {e}[/red]")
        raise typer.Exit(code=1) from e

    if not deleted:
        console.print(f"[red]❌ User {user_id} not found[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✅ Deleted user {user_id}[/green]")
