"""Interactive REPL shell for navigating a drive."""

from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from prompt_toolkit.styles import Style
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tfsdrive.config import get_config_path
from tfsdrive.display import node_table
from tfsdrive.drive import Drive
from tfsdrive.errors import DriveError
from tfsdrive.models import Credential
from tfsdrive.vfs.base import SEPARATOR, DirectoryNode, FileNode


class DriveShell:
    """Interactive shell for navigating a mounted drive.

    Provides a small shell interface with commands:
    - cd, pwd, ls: Navigate the drive
    - cat: Print an entry's value
    - info: Show node details
    - help, ?: Show help
    - exit, quit: Exit the shell

    Paths use '\\' as separator. A leading '\\' starts from the drive
    root, '..' goes up one level. Every command resolves its path in a
    fresh session, so nothing is cached between commands.
    """

    def __init__(
        self, drive: Drive, credential: Optional[Credential] = None, color: bool = True
    ):
        """Initialize the REPL shell.

        Args:
            drive: Drive to navigate
            credential: Credential to use instead of the drive's own
            color: Colored output (NO_COLOR in the environment still applies)
        """
        self.drive = drive
        self.credential = credential
        self.console = Console() if color else Console(no_color=True)
        self.running = True
        self.cwd: List[str] = []

        self.commands = {
            "cd": self.cmd_cd,
            "pwd": self.cmd_pwd,
            "ls": self.cmd_ls,
            "cat": self.cmd_cat,
            "info": self.cmd_info,
            "help": self.cmd_help,
            "?": self.cmd_help,
            "exit": self.cmd_exit,
            "quit": self.cmd_exit,
        }

    def get_prompt(self) -> str:
        """Generate prompt showing current path.

        Returns:
            Prompt string like "work:\\Configuration $ "
        """
        return f"{self.drive.name}:{self.pwd()} $ "

    def pwd(self) -> str:
        return SEPARATOR + SEPARATOR.join(self.cwd)

    def run(self):
        """Run the shell main loop."""
        history_file = get_config_path().parent / "history"
        history_file.parent.mkdir(parents=True, exist_ok=True)
        session = PromptSession(
            history=FileHistory(str(history_file)),
            style=Style.from_dict({"prompt": "ansicyan bold"}),
        )

        self.console.print(
            "[bold cyan]tfsdrive shell[/bold cyan] - Interactive drive navigation", style="bold"
        )
        self.console.print(f"Drive: {escape(self.drive.name)}: on {escape(self.drive.uri)}")
        self.console.print("Type 'help' for available commands, 'exit' to quit.\n")

        while self.running:
            try:
                line = session.prompt(self.get_prompt()).strip()
                if not line:
                    continue
                self.execute(line)
            except KeyboardInterrupt:
                self.console.print("\nUse 'exit' or 'quit' to exit the shell.")
                continue
            except EOFError:
                break

    def execute(self, line: str) -> Optional[str]:
        """Parse and execute a command line.

        Arguments are not shell-quoted: everything after the command
        name is one path, backslashes and spaces included.
        """
        parts = line.split(None, 1)
        if not parts:
            return None

        cmd = parts[0]
        args = [parts[1].strip()] if len(parts) > 1 else []

        if cmd not in self.commands:
            self.console.print(
                f"[red]Unknown command:[/red] {escape(cmd)}. Type 'help' for available commands."
            )
            return None

        try:
            return self.commands[cmd](args)
        except DriveError as e:
            self.console.print(f"[red]{escape(cmd)}: {escape(str(e))}[/red]")
            return None

    def target(self, path: Optional[str]) -> List[str]:
        """Segments of a path argument, relative to the current directory."""
        if not path:
            return list(self.cwd)

        segments = [] if path.startswith(SEPARATOR) else list(self.cwd)
        for part in path.split(SEPARATOR):
            if part in ("", "."):
                continue
            if part == "..":
                if segments:
                    segments.pop()
            else:
                segments.append(part)
        return segments

    # Command implementations

    def cmd_cd(self, args: List[str]) -> Optional[str]:
        """Change directory.

        Usage: cd [path]
        """
        segments = self.target(args[0]) if args else []
        with self.drive.session(SEPARATOR.join(segments), self.credential) as session:
            node = session.resolve()
            if not isinstance(node, DirectoryNode):
                self.console.print(f"[red]cd: {escape(args[0])}: Not a directory[/red]")
                return None
            self.cwd = [part for part in node.get_path().split(SEPARATOR) if part]
        return None

    def cmd_pwd(self, args: List[str]) -> Optional[str]:
        """Print working directory.

        Usage: pwd
        """
        path = self.pwd()
        self.console.print(escape(path))
        return path

    def cmd_ls(self, args: List[str]) -> Optional[str]:
        """List directory contents.

        Usage: ls [path]
        """
        segments = self.target(args[0] if args else None)
        with self.drive.session(SEPARATOR.join(segments), self.credential) as session:
            nodes = session.list()
            table, lines = node_table(nodes)

        if nodes:
            self.console.print(table)
        return "\n".join(lines) if lines else None

    def cmd_cat(self, args: List[str]) -> Optional[str]:
        """Print the value of an entry.

        Usage: cat <path>
        """
        if not args:
            self.console.print("[red]cat: missing path argument[/red]")
            return None

        with self.drive.session(SEPARATOR.join(self.target(args[0])), self.credential) as session:
            node = session.resolve()
            if not isinstance(node, FileNode):
                self.console.print(f"[red]cat: {escape(args[0])}: Is a directory[/red]")
                return None
            content = node.read_content()

        self.console.print(escape(content))
        return content

    def cmd_info(self, args: List[str]) -> Optional[str]:
        """Show node details.

        Usage: info [path]
        """
        segments = self.target(args[0] if args else None)
        with self.drive.session(SEPARATOR.join(segments), self.credential) as session:
            details = session.resolve().get_info()

        table = Table(show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="white")
        for key, value in details.items():
            table.add_row(key, escape(str(value)))
        self.console.print(table)
        return "\n".join(f"{key}\t{value}" for key, value in details.items())

    def cmd_help(self, args: List[str]) -> Optional[str]:
        """Show help information.

        Usage: help [command]
        """
        if args:
            cmd = args[0]
            if cmd in self.commands:
                self.console.print(f"[bold]{escape(cmd)}[/bold]")
                self.console.print(self.commands[cmd].__doc__ or "No documentation available.")
            else:
                self.console.print(f"[red]Unknown command:[/red] {escape(cmd)}")
            return None

        self.console.print("[bold cyan]Available Commands:[/bold cyan]\n")

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Command", style="cyan")
        table.add_column("Description", style="white")

        table.add_row("cd [path]", "Change directory (no path: drive root)")
        table.add_row("pwd", "Print working directory")
        table.add_row("ls [path]", "List directory contents")
        table.add_row("cat <path>", "Print an entry's value")
        table.add_row("info [path]", "Show node details")
        table.add_row("help [cmd]", "Show help")
        table.add_row("exit, quit", "Exit the shell")

        self.console.print(table)
        self.console.print("\n[bold cyan]Paths:[/bold cyan]")
        self.console.print("  Separator is \\, registry entries are named by their full registry path")
        self.console.print("  Example: cat \\Configuration\\Settings\\/Configuration/Settings/Timeout")
        return None

    def cmd_exit(self, args: List[str]) -> Optional[str]:
        """Exit the shell.

        Usage: exit
        """
        self.running = False
        return None
