"""
Document Store Module

Key-value document storage for drafts, published snapshots and staff
accounts. Documents are plain JSON-compatible dicts addressed by
(collection, key), e.g. ("drafts", "schedule"). Every write replaces the
whole document.
"""

import copy
import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from infrastructure.logger import get_logger

logger = get_logger("DocumentStore")


class StoreError(Exception):
    """Raised when a document cannot be read or written."""

    def __init__(self, collection: str, key: str, message: str = None):
        self.collection = collection
        self.key = key
        self.message = message or f"Store operation failed for {collection}/{key}"
        super().__init__(self.message)


class DocumentStore(ABC):
    """Abstract key-value document store."""

    @abstractmethod
    def put_document(self, collection: str, key: str, value: Dict[str, Any]) -> None:
        """
        Write a whole document, replacing any previous one.

        Raises:
            StoreError: If the document cannot be written
        """
        pass

    @abstractmethod
    def get_document(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        """
        Read a document.

        Returns:
            The document, or None if absent

        Raises:
            StoreError: If the document exists but cannot be read
        """
        pass


class InMemoryDocumentStore(DocumentStore):
    """Document store kept in a dict. Values are deep-copied in and out."""

    def __init__(self):
        self._documents: Dict[tuple, Dict[str, Any]] = {}

    def put_document(self, collection: str, key: str, value: Dict[str, Any]) -> None:
        self._documents[(collection, key)] = copy.deepcopy(value)

    def get_document(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        document = self._documents.get((collection, key))
        return copy.deepcopy(document) if document is not None else None


class JsonFileDocumentStore(DocumentStore):
    """
    Document store backed by JSON files: <root>/<collection>/<key>.json

    Writes go to a temporary file that is renamed over the target, so a
    failed write leaves the previous document in place.
    """

    def __init__(self, root_dir: Path):
        self.root_dir = Path(root_dir)

    def _path(self, collection: str, key: str) -> Path:
        """
        Raises:
            StoreError: If collection or key is not a plain file name
        """
        for part in (collection, key):
            if not part or part in (".", "..") or "/" in part or "\\" in part or "\0" in part:
                raise StoreError(collection, key, f"Invalid document address {collection!r}/{key!r}")
        return self.root_dir / collection / f"{key}.json"

    def put_document(self, collection: str, key: str, value: Dict[str, Any]) -> None:
        path = self._path(collection, key)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(value, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write {path}: {e}")
            raise StoreError(collection, key, f"Cannot write {collection}/{key}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
        logger.debug(f"Wrote document {collection}/{key}")

    def get_document(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
        path = self._path(collection, key)
        if not path.exists():
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read {path}: {e}")
            raise StoreError(collection, key, f"Cannot read {collection}/{key}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(collection, key, f"Document {collection}/{key} is not an object")
        return data
