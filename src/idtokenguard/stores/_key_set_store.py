from __future__ import annotations

import json
import logging
import time
from os import environ
from typing import Any

import redis

logger = logging.getLogger(__name__)


class KeySetStore:
    """
    Caches issuers' JSON Web Key Sets in Redis with an expiry.
    Use a dedicated Redis DB or prefix.
    """

    def __init__(
        self,
        redis_url: str | None = None,
        prefix: str = "jwks:",
        redis_client: redis.Redis | None = None,
    ) -> None:
        self._redis = redis_client or redis.from_url(  # type: ignore
            redis_url or environ.get("REDIS_URL", "redis://localhost:6379/0")
        )
        self._prefix = prefix

    def _key(self, issuer: str) -> str:
        return f"{self._prefix}{issuer}"

    def get(self, issuer: str) -> dict[str, Any] | None:
        raw = self._redis.get(self._key(issuer))
        if raw is None:
            return None
        try:
            key_set = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unreadable cached key set for %s", issuer)
            return None
        return key_set if isinstance(key_set, dict) else None

    def put(self, issuer: str, key_set: dict[str, Any], ttl_seconds: int) -> None:
        self._redis.set(self._key(issuer), json.dumps(key_set), ex=max(1, ttl_seconds))

    def evict(self, issuer: str) -> None:
        self._redis.delete(self._key(issuer))


class InMemoryKeySetStore:
    """Process-local key set cache with the same interface as KeySetStore."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[float, dict[str, Any]]] = {}

    def get(self, issuer: str) -> dict[str, Any] | None:
        entry = self._entries.get(issuer)
        if entry is None:
            return None
        expires_at, key_set = entry
        if time.monotonic() >= expires_at:
            del self._entries[issuer]
            return None
        return key_set

    def put(self, issuer: str, key_set: dict[str, Any], ttl_seconds: int) -> None:
        self._entries[issuer] = (time.monotonic() + max(1, ttl_seconds), key_set)

    def evict(self, issuer: str) -> None:
        self._entries.pop(issuer, None)
