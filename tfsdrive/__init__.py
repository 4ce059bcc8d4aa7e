"""
tfsdrive - browse a remote configuration server as a virtual drive.

Main API:
    from tfsdrive import Drive

    # Mount a server
    drive = Drive("work", "http://tfs:8080/tfs")
    drive.root          # '[http%3A%2F%2Ftfs%3A8080%2Ftfs]'

    # Resolve a path; the connection lives as long as the session
    with drive.session(r"Configuration\\Settings") as session:
        for node in session.list():
            print(node.name)

    # Or resolve a raw drive path
    from tfsdrive import ResolutionSession
    with ResolutionSession(drive.full_path("Configuration")) as session:
        node = session.resolve()
"""

from .drive import Drive, drive_root
from .models import Credential, FlatEntry
from .vfs.session import ResolutionSession

__version__ = "0.1.0"
__all__ = ["Drive", "drive_root", "Credential", "FlatEntry", "ResolutionSession"]
