"""
In-process cache client with the subset of the redis-py API used by CacheService.

Used when CACHE_BACKEND=memory (local runs without Redis, tests). Values are
stored as bytes like Redis returns them; expiry is checked lazily on access.
"""
import fnmatch
import threading
import time
from typing import Callable, Dict, Iterator, Optional, Tuple, Union

Value = Union[bytes, str, int, float]


class MemoryCacheClient:
    """Потокобезопасное хранилище ключ/значение с TTL."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._data: Dict[str, Tuple[bytes, Optional[float]]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _encode(value: Value) -> bytes:
        if isinstance(value, bytes):
            return value
        return str(value).encode("utf-8")

    def _alive(self, key: str) -> Optional[bytes]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    def ping(self) -> bool:
        return True

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            return self._alive(key)

    def setex(self, key: str, ttl: int, value: Value) -> bool:
        if ttl <= 0:
            raise ValueError("invalid expire time in 'setex' command")
        with self._lock:
            self._data[key] = (self._encode(value), self._clock() + ttl)
        return True

    def incr(self, key: str) -> int:
        with self._lock:
            current = self._alive(key)
            expires_at = self._data[key][1] if current is not None else None
            number = int(current) + 1 if current is not None else 1
            self._data[key] = (str(number).encode("utf-8"), expires_at)
            return number

    def delete(self, *keys: str) -> int:
        removed = 0
        with self._lock:
            for key in keys:
                if self._alive(key) is not None:
                    del self._data[key]
                    removed += 1
        return removed

    def scan_iter(self, match: Optional[str] = None, count: Optional[int] = None) -> Iterator[str]:
        with self._lock:
            keys = [key for key in list(self._data) if self._alive(key) is not None]
        for key in keys:
            if match is None or fnmatch.fnmatchcase(key, match):
                yield key
