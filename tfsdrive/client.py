"""HTTP client for the remote configuration server.

The server is expected to speak a small JSON API:

    GET {uri}/_apis/connectionData          -> {"instanceName": ..., ...}
    GET {uri}/_apis/registry?query=/**      -> [{"path": ..., "value": ...}]
    GET {uri}/_apis/projectCollections      -> [{"id": ..., "name": ...}]

List responses may also come wrapped as {"count": n, "value": [...]}.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse, urlunparse

import requests
from requests.auth import HTTPBasicAuth

from tfsdrive.errors import ConnectionError, RemoteQueryError
from tfsdrive.models import Credential, FlatEntry, ProjectCollection

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

CONNECTION_DATA = "_apis/connectionData"
REGISTRY = "_apis/registry"
PROJECT_COLLECTIONS = "_apis/projectCollections"


def redact(uri: str) -> str:
    """URI with any user:password@ part removed, for logs and messages."""
    parsed = urlparse(uri)
    if "@" not in parsed.netloc:
        return uri
    return urlunparse(parsed._replace(netloc=parsed.netloc.rpartition("@")[2]))


def _unwrap_list(payload: Any) -> List[Any]:
    if isinstance(payload, dict) and "value" in payload:
        payload = payload["value"]
    if not isinstance(payload, list):
        raise ValueError(f"expected a list, got {type(payload).__name__}")
    return payload


class ConnectionHandle:
    """A live, authenticated connection to one configuration server.

    The (uri, credential) pair is fixed for the lifetime of the handle.
    Use connect() to create one.
    """

    def __init__(
        self,
        uri: str,
        session: requests.Session,
        info: Dict[str, Any],
        credential: Optional[Credential] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.uri = uri.rstrip("/")
        self.session = session
        self.info = info
        self.credential = credential
        self.timeout = timeout

    @property
    def name(self) -> str:
        """Display name reported by the server."""
        return (
            self.info.get("instanceName")
            or self.info.get("name")
            or urlparse(self.uri).hostname
            or self.uri
        )

    def _get(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> Any:
        url = f"{self.uri}/{endpoint}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise RemoteQueryError(
                f"Query {endpoint} failed", self.uri, detail=str(e), status_code=status
            ) from e
        except requests.RequestException as e:
            raise RemoteQueryError(f"Query {endpoint} failed", self.uri, detail=str(e)) from e
        except ValueError as e:
            raise RemoteQueryError(
                f"Query {endpoint} returned invalid JSON", self.uri, detail=str(e)
            ) from e

    def read_entries(self, query: str = "/**") -> List[FlatEntry]:
        """Read every registry entry matching a wildcard query.

        Args:
            query: Registry wildcard, "/**" for everything

        Returns:
            Flat entries in the order the server sent them

        Raises:
            RemoteQueryError: If the request or the payload is bad
        """
        payload = self._get(REGISTRY, params={"query": query})
        try:
            entries = [
                FlatEntry(path=item["path"], value=item.get("value"))
                for item in _unwrap_list(payload)
            ]
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise RemoteQueryError(
                "Unexpected registry payload", self.uri, detail=str(e)
            ) from e

        logger.debug(f"Read {len(entries)} registry entries from {redact(self.uri)}")
        return entries

    def list_project_collections(self) -> List[ProjectCollection]:
        """List the project collections hosted by this server.

        Raises:
            RemoteQueryError: If the request or the payload is bad
        """
        payload = self._get(PROJECT_COLLECTIONS)
        try:
            collections = [
                ProjectCollection(
                    id=str(item["id"]),
                    name=item["name"],
                    url=item.get("url"),
                    state=item.get("state"),
                )
                for item in _unwrap_list(payload)
            ]
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise RemoteQueryError(
                "Unexpected project collection payload", self.uri, detail=str(e)
            ) from e

        logger.debug(f"Found {len(collections)} project collections on {redact(self.uri)}")
        return collections

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> 'ConnectionHandle':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"ConnectionHandle(uri='{self.uri}')"


def connect(
    uri: str,
    credential: Optional[Credential] = None,
    timeout: float = DEFAULT_TIMEOUT,
    verify: bool = True,
) -> ConnectionHandle:
    """Connect and authenticate to a configuration server.

    Args:
        uri: Server base URI
        credential: Credential to authenticate with, None for anonymous
        timeout: Seconds to wait on each HTTP call
        verify: Verify TLS certificates

    Returns:
        A connection handle

    Raises:
        ConnectionError: Server unreachable, credential rejected or
            handshake not understood
    """
    base = uri.rstrip("/")
    shown = redact(base)
    session = requests.Session()
    session.verify = verify
    session.headers["Accept"] = "application/json"
    if credential is not None and not credential.is_empty:
        session.auth = HTTPBasicAuth(credential.username, credential.password)

    logger.debug(f"Connecting to {shown}")
    try:
        response = session.get(f"{base}/{CONNECTION_DATA}", timeout=timeout)
        if response.status_code in (401, 403):
            raise ConnectionError(
                f"Credential rejected by {shown}",
                base,
                detail=response.reason,
                status_code=response.status_code,
            )
        response.raise_for_status()
        info = response.json()
        if not isinstance(info, dict):
            raise ValueError("connection data is not an object")
    except ConnectionError:
        session.close()
        logger.warning(f"Authentication to {shown} failed")
        raise
    except requests.HTTPError as e:
        session.close()
        logger.warning(f"Connection to {shown} failed: {e}")
        raise ConnectionError(
            f"Cannot connect to {shown}",
            base,
            detail=str(e),
            status_code=e.response.status_code if e.response is not None else None,
        ) from e
    except requests.RequestException as e:
        session.close()
        logger.warning(f"Connection to {shown} failed: {e}")
        raise ConnectionError(f"Cannot connect to {shown}", base, detail=str(e)) from e
    except ValueError as e:
        session.close()
        raise ConnectionError(
            f"Unexpected handshake from {shown}", base, detail=str(e)
        ) from e

    handle = ConnectionHandle(base, session, info, credential=credential, timeout=timeout)
    logger.debug(f"Connected to '{handle.name}'")
    return handle
