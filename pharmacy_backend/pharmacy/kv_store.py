from __future__ import annotations

from typing import Protocol

import redis

from .config import DEFAULT_CACHE_CONFIG, CacheConfig


class KeyValueStore(Protocol):
    """Namespaced string store: one hash per namespace, one field per key."""

    def get(self, namespace: str, key: str) -> str | None: ...

    def set(self, namespace: str, key: str, value: str) -> None: ...

    def delete(self, namespace: str, key: str) -> None: ...

    def entries(self, namespace: str) -> dict[str, str]: ...


class InMemoryKeyValueStore:
    def __init__(self) -> None:
        self._data: dict[str, dict[str, str]] = {}

    def get(self, namespace: str, key: str) -> str | None:
        return self._data.get(namespace, {}).get(key)

    def set(self, namespace: str, key: str, value: str) -> None:
        self._data.setdefault(namespace, {})[key] = value

    def delete(self, namespace: str, key: str) -> None:
        self._data.get(namespace, {}).pop(key, None)

    def entries(self, namespace: str) -> dict[str, str]:
        return dict(self._data.get(namespace, {}))


class RedisKeyValueStore:
    """Maps each namespace onto a Redis hash."""

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisKeyValueStore":
        return cls(redis.Redis.from_url(url, decode_responses=True))

    def get(self, namespace: str, key: str) -> str | None:
        return self._client.hget(namespace, key)

    def set(self, namespace: str, key: str, value: str) -> None:
        self._client.hset(namespace, key, value)

    def delete(self, namespace: str, key: str) -> None:
        self._client.hdel(namespace, key)

    def entries(self, namespace: str) -> dict[str, str]:
        return self._client.hgetall(namespace)


def build_key_value_store(config: CacheConfig = DEFAULT_CACHE_CONFIG) -> KeyValueStore:
    """Redis when ``REDIS_URL`` is configured, otherwise a process-local dict."""
    url = (config.redis_url or "").strip()
    if url:
        return RedisKeyValueStore.from_url(url)
    return InMemoryKeyValueStore()
