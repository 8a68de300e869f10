"""Command-line interface for running and inspecting the Books API."""

import typer
from rich.console import Console
from rich.table import Table

from books_api.core.services import BookRecordService, DbSessionService
from books_api.runtime.context import get_config
from books_api.runtime.init_db import init_db

# Initialize Rich console for colored output
console = Console()

app = typer.Typer(
    name="books-api",
    help="Books API - serve the API and manage its database",
    rich_markup_mode="rich",
)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (config app.host)"),
    port: int | None = typer.Option(None, "--port", help="Bind port (config app.port)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "books_api.api.http.app:app",
        host=host or config.app.host,
        port=port or config.app.port,
        reload=reload,
        access_log=False,  # The request middleware logs every request
    )


@app.command("init-db")
def init_db_command(
    seed: bool = typer.Option(True, "--seed/--no-seed", help="Insert the starter books"),
) -> None:
    """Create the tables and seed the starter books into an empty store."""
    database_service = DbSessionService()
    try:
        seeded = init_db(database_service, seed=seed)
    finally:
        database_service.dispose()

    console.print("[green]✓[/green] Database tables ready")
    if seed:
        if seeded:
            console.print(f"[green]✓[/green] Seeded {seeded} books")
        else:
            console.print("[yellow]Books already present; nothing seeded[/yellow]")


@app.command("list")
def list_command(
    sort_by: str = typer.Option(
        "title", "--sort-by", help="Sort by 'title', 'author' or 'price'"
    ),
) -> None:
    """Print every book in a table."""
    database_service = DbSessionService()
    try:
        with database_service.session_scope() as session:
            books = BookRecordService(session).list_books(sort_by)
    finally:
        database_service.dispose()

    if not books:
        console.print("[yellow]No books found[/yellow]")
        return

    table = Table(title="Books")
    table.add_column("Id", justify="right", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Price", justify="right", style="green")
    for book in books:
        table.add_row(str(book.id), book.title, book.author, f"{book.price:.2f}")
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
