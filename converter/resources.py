"""Resource resolution for bodies referenced by `bodyFromFile`.

The converter never consults global state to find files; callers pass a
resolver explicitly (by default one rooted at the contract file's folder).
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from errors import ResourceNotFoundError


class ResourceResolver(Protocol):
    """Reads resources by path relative to some root."""

    def read_bytes(self, relative_path: str) -> bytes:
        ...

    def read_text(self, relative_path: str) -> str:
        ...


class FileSystemResourceResolver:
    """Resolves resources against a directory on disk."""

    def __init__(self, root: Union[str, Path], encoding: str = "utf-8"):
        """Initialize the resolver.

        Args:
            root: Directory that relative paths are resolved against
            encoding: Text encoding used by read_text
        """
        self.root = Path(root)
        self.encoding = encoding

    def _resolve(self, relative_path: str) -> Path:
        path = self.root / relative_path
        if not path.is_file():
            raise ResourceNotFoundError(relative_path, str(self.root))
        return path

    def read_bytes(self, relative_path: str) -> bytes:
        return self._resolve(relative_path).read_bytes()

    def read_text(self, relative_path: str) -> str:
        return self._resolve(relative_path).read_text(encoding=self.encoding)


class InMemoryResourceResolver:
    """Resolves resources from a dict; handy for documents built in code."""

    def __init__(self, files: Optional[Dict[str, Union[str, bytes]]] = None):
        self.files = dict(files or {})

    def read_bytes(self, relative_path: str) -> bytes:
        if relative_path not in self.files:
            raise ResourceNotFoundError(relative_path)
        content = self.files[relative_path]
        return content.encode("utf-8") if isinstance(content, str) else content

    def read_text(self, relative_path: str) -> str:
        return self.read_bytes(relative_path).decode("utf-8")
