"""Shared fixtures: an in-memory configuration server."""

from typing import List, Optional

import pytest

from tfsdrive.models import Credential, FlatEntry, ProjectCollection

SERVER_URI = "http://tfs.example.com:8080/tfs"


class FakeHandle:
    """Stands in for client.ConnectionHandle and counts remote calls."""

    def __init__(self, uri: str, credential: Optional[Credential], entries: List[FlatEntry],
                 collections: List[ProjectCollection], name: str = "TFS-PROD"):
        self.uri = uri
        self.credential = credential
        self.name = name
        self._entries = entries
        self._collections = collections
        self.read_calls = 0
        self.collection_calls = 0
        self.closed = False

    def read_entries(self, query: str = "/**") -> List[FlatEntry]:
        self.read_calls += 1
        return list(self._entries)

    def list_project_collections(self) -> List[ProjectCollection]:
        self.collection_calls += 1
        return list(self._collections)

    def close(self) -> None:
        self.closed = True


class FakeServer:
    """Connector callable: (uri, credential) -> FakeHandle."""

    def __init__(self, entries=None, collections=None, error: Optional[Exception] = None):
        self.entries = entries if entries is not None else []
        self.collections = collections if collections is not None else []
        self.error = error
        self.handles: List[FakeHandle] = []

    @property
    def connect_calls(self) -> int:
        return len(self.handles)

    @property
    def read_calls(self) -> int:
        return sum(handle.read_calls for handle in self.handles)

    def __call__(self, uri: str, credential: Optional[Credential] = None, **kwargs) -> FakeHandle:
        if self.error is not None:
            raise self.error
        handle = FakeHandle(uri, credential, self.entries, self.collections)
        self.handles.append(handle)
        return handle


@pytest.fixture
def registry_entries():
    """A small registry listing, deliberately out of order.

    Tree:
        Configuration/
        ├── Settings/
        │   ├── /Configuration/Settings/Timeout
        │   └── /Configuration/Settings/Owner
        └── Jobs/
            └── /Configuration/Jobs/Nightly
        proj/
        └── widgets/
            └── /proj/widgets/build
    """
    return [
        FlatEntry("/Configuration/Settings/Timeout", 30),
        FlatEntry("/proj/widgets/build", {"agent": "linux", "enabled": True}),
        FlatEntry("/Configuration/Jobs/Nightly", "on"),
        FlatEntry("/Configuration/Settings/Owner", "ops"),
    ]


@pytest.fixture
def fake_server(registry_entries):
    return FakeServer(
        entries=registry_entries,
        collections=[
            ProjectCollection(id="c1", name="DefaultCollection", url="http://tfs/c1", state="Started"),
            ProjectCollection(id="c2", name="Archive", state="Stopped"),
        ],
    )
