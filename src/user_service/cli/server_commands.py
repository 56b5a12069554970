"""Server and database CLI commands."""

import typer
from rich.console import Console
from rich.panel import Panel

from src.user_service.runtime.context import get_config
from src.user_service.runtime.init_db import init_db

console = Console()


def serve(
    host: str = typer.Option(None, help="Host to bind the server to (defaults to app.host)"),
    port: int = typer.Option(None, help="Port to bind the server to (defaults to app.port)"),
    reload: bool = typer.Option(False, help="Enable auto-reload on code changes"),
) -> None:
    """Start the HTTP API server."""
    import uvicorn

    config = get_config()
    host = host or config.app.host
    port = port or config.app.port

    console.print(
        Panel.fit(
            "[bold green]Starting user service[/bold green]",
            border_style="green",
        )
    )
    console.print(f"[blue]Server will be available at:[/blue] http://{host}:{port}")
    console.print("[dim]Press Ctrl+C to stop the server[/dim]")

    uvicorn.run(
        "src.user_service.api.http.app:app",
        host=host,
        port=port,
        reload=reload,
        access_log=False,  # We handle access logging in middleware
    )


def init_db_command(
    drop: bool = typer.Option(False, "--drop", help="Drop existing tables first"),
) -> None:
    """Create the database tables."""
    try:
        init_db(drop=drop)
    except Exception as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(code=1) from e
    console.print("[green]✅ Database initialized[/green]")
