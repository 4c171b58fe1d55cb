"""
Parsed signing key cache.

Parsing a PEM private key is the most expensive step of producing a signed
URL, so parsed signers are kept per process and shared between callers.
"""

from __future__ import annotations

import hashlib
import threading
from typing import Any, Callable


class KeyCache:
    """Thread-safe, in-process cache of parsed keys keyed by a hash of the raw key material."""

    _instance: KeyCache | None = None
    _cache: dict[str, Any]
    _lock: threading.Lock

    def __new__(cls) -> KeyCache:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._cache = {}
            cls._instance._lock = threading.Lock()
        return cls._instance

    @staticmethod
    def _make_key(key_material: bytes) -> str:
        """Produce a deterministic cache key without retaining the raw key as a dict key."""
        return hashlib.sha256(key_material).hexdigest()

    def get_or_create(self, key_material: bytes, parser: Callable[[bytes], Any]) -> Any:
        """Return the cached parsed key or parse it via *parser*.

        Args:
            key_material: Raw key bytes (e.g. a PEM document).
            parser: Callable(key_material) returning the parsed key. Errors
                it raises propagate and nothing is cached.

        Returns:
            The cached (or newly-parsed) key object.
        """
        key = self._make_key(key_material)
        with self._lock:
            if key not in self._cache:
                self._cache[key] = parser(key_material)
            return self._cache[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def clear(self) -> None:
        """Drop all cached keys."""
        with self._lock:
            self._cache.clear()
