"""Tresor management CLI."""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from tresor.cli import __version__
from tresor.core.auth.password_hasher import PasswordHasher
from tresor.core.auth.password_policy import PasswordPolicy
from tresor.core.config import get_settings
from tresor.core.errors import InvalidInputError, PolicyViolationError

app = typer.Typer(
    name="tresor",
    help="Tresor CLI - run the server and work with password hashes offline",
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
    pretty_exceptions_enable=False,
)

console = Console()


def version_callback(value: bool):
    """Display version and exit."""
    if value:
        console.print(f"Tresor CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """
    Tresor Management CLI
    """


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port"),
    reload: Optional[bool] = typer.Option(
        None, "--reload/--no-reload", help="Reload on code changes"
    ),
):
    """
    Run the HTTP API server.

    Example:
        tresor serve --port 8080
    """
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "tresor.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=settings.is_development if reload is None else reload,
        log_level=settings.log_level.lower(),
    )


@app.command("check-password")
def check_password(
    password: str = typer.Option(
        ..., "--password", prompt=True, hide_input=True, help="Password to check"
    ),
):
    """
    Check a password against the strength rules.

    Exits with status 1 when the password is rejected.
    """
    result = PasswordPolicy().validate(password)

    if result.is_valid:
        console.print("[green]✓[/green] Password meets all requirements")
        return

    table = Table(title="Password rejected", show_header=True, header_style="bold red")
    table.add_column("#", justify="right")
    table.add_column("Violation")
    for index, error in enumerate(result.errors, start=1):
        table.add_row(str(index), error)
    console.print(table)
    raise typer.Exit(1)


@app.command("hash-password")
def hash_password(
    password: str = typer.Option(
        ...,
        "--password",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Password to hash",
    ),
    rounds: Optional[int] = typer.Option(
        None, "--rounds", "-r", min=4, max=31, help="bcrypt cost factor"
    ),
):
    """
    Hash a password that satisfies the strength rules.

    Example:
        tresor hash-password --rounds 12
    """
    try:
        PasswordPolicy().enforce(password)
        hasher = PasswordHasher(rounds=rounds or get_settings().bcrypt_rounds)
        console.print(hasher.hash_password(password), highlight=False, soft_wrap=True)
    except PolicyViolationError as e:
        for error in e.errors:
            console.print(f"[red]✗[/red] {error}")
        raise typer.Exit(1)
    except InvalidInputError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(1)


@app.command("verify-password")
def verify_password(
    password_hash: str = typer.Argument(..., metavar="HASH", help="Stored bcrypt hash"),
    password: str = typer.Option(
        ..., "--password", prompt=True, hide_input=True, help="Candidate password"
    ),
):
    """
    Verify a password against a stored hash.

    Exits with status 1 when the password does not match.
    """
    hasher = PasswordHasher(rounds=get_settings().bcrypt_rounds)

    if not hasher.verify_password(password, password_hash):
        console.print("[red]✗[/red] Password does not match")
        raise typer.Exit(1)

    console.print("[green]✓[/green] Password matches")
    if hasher.needs_rehash(password_hash):
        console.print("[yellow]![/yellow] Hash uses an outdated cost factor")


if __name__ == "__main__":
    app()
