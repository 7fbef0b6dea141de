"""
Remote Object-Storage Persistence

HTTP client for the file-object API and a storage backend that mirrors
the tree onto it.

API surface (relative to the configured base URL):
    GET    /files?path=<dir>        -> {"files": [record, ...]}
    POST   /files/upload            multipart: file, path -> {"file": record}
    GET    /files/{id}/content      -> {"content": "..."}
    PUT    /files/{id}/content      {"content": "..."} -> {"file": record}
    DELETE /files/{id}              -> {"message": "..."}
    POST   /files/folder            {"name", "path"} -> {"folder": record}

Error bodies carry "error" or "message".

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, List

import httpx

from .base import StorageBackend
from weavefs.filesystem.nodes import FileNode, FolderNode, Node
from weavefs.filesystem.path_resolver import PathResolver, ROOT
from weavefs.exceptions import RemoteStorageError, StorageLoadError
from weavefs.logger import Logger


def _parse_timestamp(value: Any) -> datetime:
    """Parse an API timestamp; missing or unreadable values mean now."""
    if isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
        except ValueError:
            pass
    return datetime.now(timezone.utc)


@dataclass
class RemoteRecord:
    """One file or folder as the object-storage API describes it."""
    id: str
    name: str
    is_directory: bool
    size: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    path: str = ROOT
    parent: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'RemoteRecord':
        record_id = data.get('id') or data.get('_id')
        name = data.get('name') or data.get('originalName') or data.get('filename')
        if not record_id or not name:
            raise StorageLoadError(
                f"Malformed record from remote storage: {data!r}",
                backend="remote"
            )
        return cls(
            id=str(record_id),
            name=name,
            is_directory=bool(data.get('isDirectory', False)),
            size=int(data.get('size') or 0),
            created_at=data.get('createdAt'),
            updated_at=data.get('updatedAt'),
            path=data.get('path') or ROOT,
            parent=data.get('parent'),
        )


def _error_message(response: httpx.Response) -> str:
    """Extract the error text from an API error response."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text or f"HTTP {response.status_code} error"

    if isinstance(body, dict):
        if body.get('error'):
            return str(body['error'])
        if body.get('message'):
            return str(body['message'])
    return f"HTTP {response.status_code} error"


def _raise_for_status(response: httpx.Response) -> None:
    """Raise RemoteStorageError for non-2xx responses."""
    if response.is_success:
        return
    raise RemoteStorageError(
        _error_message(response),
        status_code=response.status_code,
        url=str(response.request.url) if response.request else None
    )


class ObjectStorageClient:
    """
    Synchronous client for the file-object API.

    Example:
        >>> client = ObjectStorageClient("http://localhost:5000/api", token="...")
        >>> [r.name for r in client.list("/")]
        ['Desktop', 'Documents']
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Args:
            base_url: API root, e.g. "http://localhost:5000/api"
            token: Bearer token sent with every request
            timeout: Request timeout in seconds
            transport: Custom transport (e.g. httpx.MockTransport for tests)
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

        headers = {'Accept': 'application/json'}
        if token:
            headers['Authorization'] = f"Bearer {token}"

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> 'ObjectStorageClient':
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise RemoteStorageError(
                f"Request to {url} timed out",
                url=url,
                context={'timeout': self.timeout}
            ) from e
        except httpx.HTTPError as e:
            raise RemoteStorageError(
                f"Cannot reach remote storage: {e}",
                url=url
            ) from e

        _raise_for_status(response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteStorageError(
                "Remote storage returned invalid JSON",
                status_code=response.status_code,
                url=url
            ) from e

    @staticmethod
    def _record(body: Any, *keys: str) -> RemoteRecord:
        if isinstance(body, dict):
            for key in keys:
                if isinstance(body.get(key), dict):
                    return RemoteRecord.from_dict(body[key])
            return RemoteRecord.from_dict(body)
        raise StorageLoadError(
            f"Unexpected response from remote storage: {body!r}",
            backend="remote"
        )

    def list(self, path: str = ROOT) -> List[RemoteRecord]:
        """List the entries directly inside a directory."""
        body = self._request('GET', '/files', params={'path': path})
        files = body.get('files', []) if isinstance(body, dict) else []
        return [RemoteRecord.from_dict(item) for item in files]

    def upload(self, name: str, content: str, path: str = ROOT) -> RemoteRecord:
        """Upload a text file into a directory."""
        body = self._request(
            'POST',
            '/files/upload',
            files={'file': (name, content.encode('utf-8'), 'text/plain')},
            data={'path': path},
        )
        return self._record(body, 'file')

    def get_content(self, record_id: str) -> str:
        """Fetch the text content of a file."""
        body = self._request('GET', f'/files/{record_id}/content')
        if isinstance(body, dict):
            return body.get('content') or ''
        return ''

    def update_content(self, record_id: str, content: str) -> RemoteRecord:
        """Replace the content of a file."""
        body = self._request(
            'PUT',
            f'/files/{record_id}/content',
            json={'content': content}
        )
        return self._record(body, 'file')

    def delete(self, record_id: str) -> None:
        """Delete a file or folder."""
        self._request('DELETE', f'/files/{record_id}')

    def create_folder(self, name: str, path: str = ROOT) -> RemoteRecord:
        """Create a folder inside a directory."""
        body = self._request(
            'POST',
            '/files/folder',
            json={'name': name, 'path': path}
        )
        return self._record(body, 'folder', 'file')


class RemoteStorageBackend(StorageBackend):
    """
    Mirrors the tree onto the object-storage API.

    save() reconciles the remote listing against the tree, folder by
    folder: missing entries are created, vanished ones deleted, and file
    content pushed when it differs from what was last synced. load()
    rebuilds the tree from the listing. Timestamps come from the server,
    so only structure and content round-trip exactly.
    """

    name = "remote"

    def __init__(
        self,
        client: ObjectStorageClient,
        logger: Optional[Logger] = None
    ):
        super().__init__(logger)
        self._client = client
        self._synced_content: dict[str, str] = {}

    @property
    def client(self) -> ObjectStorageClient:
        return self._client

    def save(self, root: FolderNode) -> None:
        self._sync_folder(root, ROOT)
        self._logger.debug("Tree mirrored to remote storage")

    def _sync_folder(self, folder: FolderNode, path: str) -> None:
        remote = {record.name: record for record in self._client.list(path)}

        for child in folder.children:
            record = remote.pop(child.name, None)
            child_path = PathResolver.join(path, child.name)

            if isinstance(child, FolderNode):
                if record is not None and not record.is_directory:
                    self._delete(record)
                    record = None
                if record is None:
                    self._client.create_folder(child.name, path)
                self._sync_folder(child, child_path)

            elif isinstance(child, FileNode):
                if record is not None and record.is_directory:
                    self._delete(record)
                    record = None
                if record is None:
                    record = self._client.upload(child.name, child.content, path)
                    self._synced_content[record.id] = child.content
                elif self._synced_content.get(record.id) != child.content:
                    self._client.update_content(record.id, child.content)
                    self._synced_content[record.id] = child.content

        for record in remote.values():
            self._delete(record)

    def _delete(self, record: RemoteRecord) -> None:
        self._client.delete(record.id)
        self._synced_content.pop(record.id, None)

    def load(self) -> Optional[FolderNode]:
        children = self._load_children(ROOT)
        if not children:
            return None
        return FolderNode(name=ROOT, children=children)

    def _load_children(self, path: str) -> List[Node]:
        children: List[Node] = []
        for record in self._client.list(path):
            created = _parse_timestamp(record.created_at)
            modified = _parse_timestamp(record.updated_at or record.created_at)
            if record.is_directory:
                children.append(FolderNode(
                    name=record.name,
                    children=self._load_children(PathResolver.join(path, record.name)),
                    created=created,
                    modified=modified,
                ))
            else:
                content = self._client.get_content(record.id)
                self._synced_content[record.id] = content
                children.append(FileNode(
                    name=record.name,
                    content=content,
                    created=created,
                    modified=modified,
                ))
        return children

    def close(self) -> None:
        self._client.close()

    def __repr__(self) -> str:
        return f"RemoteStorageBackend(base_url={self._client.base_url!r})"
