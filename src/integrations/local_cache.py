"""Local fallback cache for stores and orders."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import structlog

from src.config import settings
from src.exceptions import LocalCacheError

logger = structlog.get_logger()


class LocalCache:
    """
    Keyed collections of records, each stored as one JSON array.

    Every write rewrites the whole array (read-modify-write). With a
    directory the arrays live in ``<directory>/<key>.json``; without one
    they are kept in process memory, still JSON-encoded.
    """

    def __init__(self, directory: str | Path | None = None, namespace: str = "payment_links"):
        """
        Initialize the cache.

        Args:
            directory: Where to keep the arrays (None for in-memory)
            namespace: Prefix for the collection keys
        """
        self.directory = Path(directory) if directory else None
        self.namespace = namespace
        self._memory: dict[str, str] = {}

    def key_for(self, collection: str) -> str:
        """Fixed key of a collection, e.g. ``payment_links_orders_db``."""
        return f"{self.namespace}_{collection}_db"

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def _load_raw(self, key: str) -> str | None:
        if self.directory is None:
            return self._memory.get(key)
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise LocalCacheError(f"Cannot read {path}: {e}") from e

    def read(self, collection: str) -> list[dict[str, Any]]:
        """
        Read a collection.

        Missing or corrupt data reads as an empty collection.
        """
        key = self.key_for(collection)
        raw = self._load_raw(key)
        if raw is None:
            return []
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("local_cache_corrupt", key=key, error=str(e))
            return []
        if not isinstance(items, list):
            logger.warning("local_cache_corrupt", key=key, error="not a list")
            return []
        return items

    def write(self, collection: str, items: list[dict[str, Any]]) -> None:
        """Replace a collection with ``items``."""
        key = self.key_for(collection)
        payload = json.dumps(items, default=str)
        if self.directory is None:
            self._memory[key] = payload
            return
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(".json.tmp")
            tmp.write_text(payload, encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            raise LocalCacheError(f"Cannot write {path}: {e}") from e

        logger.debug("local_cache_written", key=key, count=len(items))

    def clear(self, collection: str) -> None:
        """Drop a collection."""
        key = self.key_for(collection)
        if self.directory is None:
            self._memory.pop(key, None)
            return
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise LocalCacheError(f"Cannot remove {self._path(key)}: {e}") from e


@lru_cache
def get_local_cache() -> LocalCache:
    """Get the configured local cache."""
    return LocalCache(
        directory=settings.local_cache_dir or None,
        namespace=settings.local_cache_namespace,
    )
