"""Interactive shell for tfsdrive."""

from tfsdrive.repl.shell import DriveShell

__all__ = ["DriveShell"]
