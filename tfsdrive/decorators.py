"""Decorators for tfsdrive commands."""

import functools
import logging
from typing import Any, Callable

import typer
from rich.console import Console
from rich.markup import escape

from tfsdrive.errors import (
    ConnectionError,
    DriveError,
    InvalidConnectionIdentityError,
    InvalidPathRootError,
    MalformedTokenError,
    PathNotFoundError,
    RemoteQueryError,
)

logger = logging.getLogger(__name__)
console = Console()


def handle_drive_errors(func: Callable) -> Callable:
    """
    Decorator to report drive errors from a CLI command.

    Each failing call prints exactly one error and exits non-zero:
    - Path errors: bad root, bad token, unknown segment
    - Remote errors: connection refused, credential rejected, bad query
    - General exceptions: unexpected errors, logged with traceback
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except (InvalidPathRootError, MalformedTokenError, InvalidConnectionIdentityError) as e:
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
            tip = escape("Tip: use NAME:\\path for a configured drive, or a [encoded-uri]\\path root")
            console.print(f"[yellow]{tip}[/yellow]")
            raise typer.Exit(code=1)
        except PathNotFoundError as e:
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
            raise typer.Exit(code=1)
        except ConnectionError as e:
            console.print(f"[bold red]Connection failed:[/bold red] {escape(str(e))}")
            if e.status_code in (401, 403):
                console.print("[yellow]Tip: pass --username, or set TFSDRIVE_PASSWORD[/yellow]")
            raise typer.Exit(code=1)
        except RemoteQueryError as e:
            console.print(f"[bold red]Query failed:[/bold red] {escape(str(e))}")
            raise typer.Exit(code=1)
        except DriveError as e:
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
            raise typer.Exit(code=1)
        except KeyboardInterrupt:
            console.print("\n[yellow]Operation cancelled by user[/yellow]")
            raise typer.Exit(code=130)
        except typer.Exit:
            raise
        except Exception as e:
            logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
            console.print(f"[bold red]Unexpected error:[/bold red] {escape(str(e))}")
            raise typer.Exit(code=1)

    return wrapper
