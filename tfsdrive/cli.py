import logging
import os
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.traceback import install

from .config import PASSWORD_ENV, DriveConfig, get_config_path, load_config, save_config, update_config
from . import decorators
from .decorators import handle_drive_errors
from .display import node_table
from .drive import Drive, drive_for_path, drive_root, expand_path
from .models import Credential
from .vfs import codec
from .vfs.base import FileNode
from .vfs.session import ResolutionSession

# Initialize Rich Traceback for better error messages
install(show_locals=False)

console = Console()

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)]
)
logger = logging.getLogger(__name__)

# Main app
app = typer.Typer(help="Browse a configuration server as a virtual drive")

drive_app = typer.Typer(help="Manage mounted drives")
app.add_typer(drive_app, name="drive")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose mode"),
):
    """
    tfsdrive - navigate a remote configuration server like a filesystem.

    Paths are either NAME:\\sub\\path for a drive added with
    `tfsdrive drive add`, or a raw [encoded-uri]\\sub\\path root.
    """
    cfg = load_config()
    if verbose or cfg.cli.verbose:
        logging.getLogger("tfsdrive").setLevel(logging.DEBUG)
    if not cfg.cli.color:
        console.no_color = True
        decorators.console.no_color = True


def _session_credential(username: Optional[str]) -> Optional[Credential]:
    """Credential for this command, prompting for the password if needed."""
    if not username:
        return None
    password = os.environ.get(PASSWORD_ENV)
    if password is None:
        password = typer.prompt(f"Password for {username}", hide_input=True, default="",
                                show_default=False)
    return Credential(username, password)


def open_session(path: str, username: Optional[str] = None) -> ResolutionSession:
    """Open a resolution session for a CLI path argument."""
    config = load_config()
    drive = drive_for_path(path, config)
    drive_credential = Drive.from_config(drive, config).credential if drive else None

    return ResolutionSession(
        expand_path(path, config),
        session_credential=_session_credential(username),
        drive_credential=drive_credential,
        connection=config.connection,
        resolver=config.resolver,
    )


# ============================================================================
# Navigation Commands
# ============================================================================

@app.command()
@handle_drive_errors
def ls(
    path: str = typer.Argument(..., help="Drive path, e.g. work:\\Configuration"),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Connect as this user"),
    plain: bool = typer.Option(False, "--plain", help="Tab-separated output for scripts"),
):
    """List the children of a path (a leaf lists as itself)."""
    with open_session(path, username) as session:
        nodes = session.list()
        table, lines = node_table(nodes)

    if plain:
        for line in lines:
            typer.echo(line)
    elif nodes:
        console.print(table)
    else:
        console.print("[dim]empty[/dim]")


@app.command()
@handle_drive_errors
def cat(
    path: str = typer.Argument(..., help="Path to a registry entry"),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Connect as this user"),
):
    """Print the value of a leaf node."""
    with open_session(path, username) as session:
        node = session.resolve()
        if not isinstance(node, FileNode):
            console.print(f"[red]cat: {escape(path)}: Is a directory[/red]")
            raise typer.Exit(code=1)
        typer.echo(node.read_content())


@app.command()
@handle_drive_errors
def info(
    path: str = typer.Argument(..., help="Drive path"),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Connect as this user"),
):
    """Show details about the node at a path."""
    with open_session(path, username) as session:
        details = session.resolve().get_info()

    table = Table(show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")
    for key, value in details.items():
        table.add_row(key, escape(str(value)))
    console.print(table)


@app.command()
def encode(uri: str = typer.Argument(..., help="Service URI")):
    """Print the drive root for a URI."""
    typer.echo(drive_root(uri))


@app.command()
@handle_drive_errors
def decode(token: str = typer.Argument(..., help="Token, with or without brackets")):
    """Decode a connection token back to its URI."""
    typer.echo(codec.decode(token.strip().lstrip("[").rstrip("\\").rstrip("]")))


@app.command()
@handle_drive_errors
def shell(
    name: str = typer.Argument(..., help="Name of a configured drive"),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Connect as this user"),
):
    """
    Launch an interactive shell on a drive.

    Commands:
        cd, pwd, ls    - Navigate the drive
        cat, info      - Read entries
        help           - Show help
        exit           - Leave the shell
    """
    from .repl import DriveShell

    config = load_config()
    if name not in config.drives:
        console.print(f"[red]No drive named '{escape(name)}'[/red]")
        raise typer.Exit(code=1)

    drive = Drive.from_config(config.drives[name], config)
    DriveShell(
        drive, credential=_session_credential(username), color=config.cli.color
    ).run()


@app.command()
def config(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Seconds to wait on each remote call"),
    verify_ssl: Optional[bool] = typer.Option(None, "--verify-ssl/--no-verify-ssl", help="Verify TLS certificates"),
    entry_query: Optional[str] = typer.Option(None, "--entry-query", help="Registry wildcard read for the tree"),
    case_sensitive: Optional[bool] = typer.Option(
        None, "--case-sensitive/--case-insensitive", help="How path segments are matched"
    ),
    show_collections: Optional[bool] = typer.Option(
        None, "--show-collections/--hide-collections", help="Mount project collections under _collections"
    ),
    verbose: Optional[bool] = typer.Option(None, "--cli-verbose/--no-cli-verbose", help="Verbose output by default"),
    color: Optional[bool] = typer.Option(None, "--color/--no-color", help="Colored output"),
):
    """
    View or edit tfsdrive configuration.

    Configuration is stored at ~/.config/tfsdrive/config.json (or ~/.tfsdrive/config.json).

    Examples:
        # Show current configuration
        tfsdrive config --show

        # Slow server
        tfsdrive config --timeout 120

        # Match path segments ignoring case
        tfsdrive config --case-insensitive

        # Plain output
        tfsdrive config --no-color
    """
    settings = dict(
        timeout=timeout,
        verify_ssl=verify_ssl,
        entry_query=entry_query,
        case_sensitive=case_sensitive,
        show_collections=show_collections,
        verbose=verbose,
        color=color,
    )
    changes = {key: value for key, value in settings.items() if value is not None}

    if show or not changes:
        cfg = load_config()
        console.print("\n[bold]tfsdrive Configuration[/bold]")
        console.print(f"[dim]Location: {get_config_path()}[/dim]\n")

        console.print("[bold cyan]Connection Settings:[/bold cyan]")
        console.print(f"  Timeout:          {cfg.connection.timeout}")
        console.print(f"  Verify SSL:       {cfg.connection.verify_ssl}")
        console.print(f"  Entry query:      {escape(cfg.connection.entry_query)}")

        console.print("\n[bold cyan]Resolver Settings:[/bold cyan]")
        console.print(f"  Case sensitive:   {cfg.resolver.case_sensitive}")
        console.print(f"  Show collections: {cfg.resolver.show_collections}")

        console.print("\n[bold cyan]CLI Settings:[/bold cyan]")
        console.print(f"  Verbose:          {cfg.cli.verbose}")
        console.print(f"  Color:            {cfg.cli.color}")

        console.print(f"\n[bold cyan]Drives:[/bold cyan] {len(cfg.drives)}")
        return

    update_config(**changes)
    console.print("[green]Configuration updated:[/green]")
    for key, value in changes.items():
        console.print(f"  {key}: {value}")


# ============================================================================
# Drive Commands
# ============================================================================

@drive_app.command("add")
@handle_drive_errors
def drive_add(
    name: str = typer.Argument(..., help="Drive name"),
    uri: str = typer.Argument(..., help="Configuration server URI"),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="User to connect as"),
    description: str = typer.Option("", "--description", "-d", help="Free text"),
    force: bool = typer.Option(False, "--force", "-f", help="Replace an existing drive"),
):
    """Mount a configuration server as a named drive."""
    from .vfs.locator import validate_uri

    validate_uri(uri)
    cfg = load_config()
    if name in cfg.drives and not force:
        console.print(f"[red]Drive '{escape(name)}' already exists (use --force to replace)[/red]")
        raise typer.Exit(code=1)

    cfg.drives[name] = DriveConfig(name=name, uri=uri, username=username, description=description)
    save_config(cfg)
    console.print(f"[green]✓ Mounted {escape(name)}: on {escape(uri)}[/green]")
    console.print(f"  Root: {escape(drive_root(uri))}")


@drive_app.command("list")
def drive_list():
    """List mounted drives."""
    cfg = load_config()
    if not cfg.drives:
        console.print("[dim]No drives mounted. Add one with: tfsdrive drive add NAME URI[/dim]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan")
    table.add_column("URI", style="white")
    table.add_column("User", style="white")
    table.add_column("Description", style="dim")
    for drive in cfg.drives.values():
        table.add_row(
            escape(drive.name),
            escape(drive.uri),
            escape(drive.username or "-"),
            escape(drive.description),
        )
    console.print(table)


@drive_app.command("remove")
def drive_remove(name: str = typer.Argument(..., help="Drive name")):
    """Unmount a drive."""
    cfg = load_config()
    if name not in cfg.drives:
        console.print(f"[red]No drive named '{escape(name)}'[/red]")
        raise typer.Exit(code=1)

    del cfg.drives[name]
    save_config(cfg)
    console.print(f"[green]✓ Removed {escape(name)}:[/green]")


@drive_app.command("root")
def drive_root_command(name: str = typer.Argument(..., help="Drive name")):
    """Print the root path of a drive."""
    cfg = load_config()
    if name not in cfg.drives:
        console.print(f"[red]No drive named '{escape(name)}'[/red]")
        raise typer.Exit(code=1)
    typer.echo(drive_root(cfg.drives[name].uri))


if __name__ == "__main__":
    app()
