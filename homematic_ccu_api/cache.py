"""
Local cache for responses fetched from the CCU.
"""

import json
import os
import threading
import time
from typing import Any, Callable, Dict, Optional

from .logging import get_logger
from .exceptions import CCUCacheError, CCUInvalidArgumentError

logger = get_logger(__name__)

RESERVED_KEY_CHARACTERS = "{}()/\\@:"
MAX_KEY_LENGTH = 64

_MISSING = object()


def validate_key(key: Any) -> str:
    """
    Check that ``key`` can be used as a cache key.

    Raises:
        CCUInvalidArgumentError: If the key is not a non-empty string of at most
            64 characters free of ``{}()/\\@:``.
    """
    if not isinstance(key, str) or not key:
        raise CCUInvalidArgumentError(f"Cache key must be a non-empty string, got {key!r}")
    if len(key) > MAX_KEY_LENGTH:
        raise CCUInvalidArgumentError(
            f"Cache key exceeds {MAX_KEY_LENGTH} characters: {key!r}")
    bad = sorted({c for c in key if c in RESERVED_KEY_CHARACTERS})
    if bad:
        raise CCUInvalidArgumentError(
            f"Cache key {key!r} contains reserved characters: {''.join(bad)}")
    return key


def _is_valid_entry(entry: Any) -> bool:
    if not isinstance(entry, dict) or "value" not in entry:
        return False
    stored_at = entry.get("stored_at", 0)
    return isinstance(stored_at, (int, float)) and not isinstance(stored_at, bool)


class DataCache:
    """
    Key/value store for JSON-serializable values with a time-to-live.

    Entries older than ``ttl`` seconds are reported as missing; they stay in
    storage until overwritten, deleted or cleared. When ``path`` is given the
    entries are loaded from that JSON file on first access and written back
    after each change.
    """

    def __init__(self, ttl: float = 60, path: Optional[str] = None):
        if ttl < 0:
            raise ValueError("ttl must not be negative")
        self.ttl = ttl
        self.path = path
        self._entries: Optional[Dict[str, Dict[str, Any]]] = None
        self._lock = threading.RLock()

    def _load(self) -> Dict[str, Dict[str, Any]]:
        if self._entries is not None:
            return self._entries

        entries = {}
        if self.path is not None and os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf-8") as file:
                    entries = json.load(file)
            except (json.JSONDecodeError, OSError) as e:
                error_msg = f"Failed to load cache from {self.path}: {e}"
                logger.error(error_msg)
                raise CCUCacheError(error_msg) from e
            if not isinstance(entries, dict):
                error_msg = f"Cache file {self.path} does not contain an object"
                logger.error(error_msg)
                raise CCUCacheError(error_msg)
            for key, entry in entries.items():
                if not _is_valid_entry(entry):
                    error_msg = f"Cache file {self.path} holds a malformed entry for {key!r}"
                    logger.error(error_msg)
                    raise CCUCacheError(error_msg)
            logger.debug(f"Loaded {len(entries)} cache entries from {self.path}")

        self._entries = entries
        return entries

    def _save(self, entries: Dict[str, Dict[str, Any]]) -> None:
        """Persist ``entries`` and make them the current contents."""
        if self.path is None:
            self._entries = entries
            return
        tmp_path = f"{self.path}.tmp"
        try:
            payload = json.dumps(entries)
            with open(tmp_path, "w", encoding="utf-8") as file:
                file.write(payload)
            os.replace(tmp_path, self.path)
        except (TypeError, ValueError, OSError) as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            error_msg = f"Failed to write cache to {self.path}: {e}"
            logger.error(error_msg)
            raise CCUCacheError(error_msg) from e
        self._entries = entries

    def _is_fresh(self, entry: Dict[str, Any]) -> bool:
        if self.ttl == 0:
            return True
        return time.time() - entry.get("stored_at", 0) < self.ttl

    def get(self, key: str, default: Any = None) -> Any:
        """Return the fresh value stored under ``key``, or ``default``."""
        validate_key(key)
        with self._lock:
            entry = self._load().get(key)
            if entry is None or not self._is_fresh(entry):
                return default
            return entry["value"]

    def has(self, key: str) -> bool:
        """Indicate whether a fresh value is stored under ``key``."""
        return self.get(key, _MISSING) is not _MISSING

    def set(self, key: str, value: Any) -> None:
        """
        Store ``value`` under ``key``.

        Raises:
            CCUCacheError: If the cache file cannot be written. The cache keeps
                its previous contents.
        """
        validate_key(key)
        with self._lock:
            entries = dict(self._load())
            entries[key] = {"value": value, "stored_at": time.time()}
            self._save(entries)

    def delete(self, key: str) -> bool:
        """
        Remove ``key`` from the cache.

        Returns:
            True if an entry was removed.
        """
        validate_key(key)
        with self._lock:
            entries = dict(self._load())
            removed = entries.pop(key, None) is not None
            if removed:
                self._save(entries)
            return removed

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._save({})
        logger.debug("Cache cleared")

    def get_or_load(self, key: str, loader: Callable[[], Any]) -> Any:
        """
        Return the fresh value for ``key``, calling ``loader`` on a miss.

        The loaded value is stored before it is returned. Errors raised by
        ``loader`` propagate and leave the cache untouched.
        """
        value = self.get(key, _MISSING)
        if value is not _MISSING:
            logger.debug(f"Cache hit for {key}")
            return value

        logger.debug(f"Cache miss for {key}")
        value = loader()
        self.set(key, value)
        return value
