import time
import threading
from typing import Any, Callable, Dict, Optional, Tuple


class TTLCache:
    """
    In-memory key/value cache with per-entry expiry.

    One instance is created when the application is assembled and handed to
    the services that need it, so tests can swap in their own.
    Entries expire lazily on `get` and in bulk on `cleanup`.
    """

    def __init__(self, default_ttl: float = 300, clock: Callable[[], float] = time.monotonic):
        self.default_ttl = default_ttl
        self._clock = clock
        self._store: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            item = self._store.get(key)
            if item is None:
                return None

            value, expires_at = item
            if self._clock() > expires_at:
                del self._store[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None):
        ttl = self.default_ttl if ttl_seconds is None else ttl_seconds
        with self._lock:
            self._store[key] = (value, self._clock() + ttl)

    def delete(self, key: str):
        with self._lock:
            self._store.pop(key, None)

    def clear(self):
        with self._lock:
            self._store.clear()

    def cleanup(self) -> int:
        """Drops every expired entry. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [k for k, (_, exp) in self._store.items() if now > exp]
            for key in expired:
                del self._store[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
