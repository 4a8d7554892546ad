from __future__ import annotations

import logging
import time
from typing import Any

from jwt import PyJWK, PyJWKClient, PyJWKSet, PyJWTError, get_unverified_header

from idtokenguard.exceptions import SignatureInvalidError
from idtokenguard.stores import InMemoryKeySetStore, KeySetStore

logger = logging.getLogger(__name__)


def jwks_uri_for(issuer: str) -> str:
    """Well-known key set location published by an issuer."""
    return f"{issuer.rstrip('/')}/.well-known/jwks.json"


class KeySetManager:
    """
    Resolves an issuer's public signing keys by `kid` from its published key set.

    Key sets are read from the store first and fetched from the issuer when
    missing. A `kid` absent from a cached key set forces a refetch so that
    rotated keys are picked up, at most once per `min_refetch_interval` seconds.
    """

    def __init__(
        self,
        issuer: str,
        store: KeySetStore | InMemoryKeySetStore | None = None,
        cache_ttl: int = 600,
        timeout: int = 30,
        jwks_client: PyJWKClient | None = None,
        min_refetch_interval: float = 30.0,
    ) -> None:
        self.issuer = issuer
        self.jwks_uri = jwks_uri_for(issuer)
        self._store = store or InMemoryKeySetStore()
        self._cache_ttl = cache_ttl
        self._min_refetch_interval = min_refetch_interval
        self._fetched_at: float | None = None
        self._jwks_client = jwks_client or PyJWKClient(
            self.jwks_uri,
            cache_jwk_set=False,
            timeout=timeout,
        )

    def get_signing_key(self, raw_token: str) -> PyJWK:
        """Return the key named by the token's `kid` header."""
        try:
            kid = get_unverified_header(raw_token).get("kid")
        except PyJWTError as error:
            raise SignatureInvalidError(f"Invalid header: {error}") from error
        if not kid:
            raise SignatureInvalidError("ID token header is missing the key id (kid).")

        key_set, fetched = self._load_key_set()
        key = self._find_key(key_set, kid)
        if key is None and not fetched:
            if self._may_refetch():
                logger.debug("Key %s not in cached key set for %s, refetching", kid, self.issuer)
                key = self._find_key(self._fetch_key_set(), kid)
            else:
                logger.debug("Key %s not in key set for %s, refetch throttled", kid, self.issuer)
        if key is None:
            raise SignatureInvalidError(f"Unknown key id '{kid}' for issuer {self.issuer}.")
        return key

    def _may_refetch(self) -> bool:
        if self._fetched_at is None:
            return True
        return time.monotonic() - self._fetched_at >= self._min_refetch_interval

    def _load_key_set(self) -> tuple[dict[str, Any], bool]:
        cached = self._store.get(self.issuer)
        if cached is not None:
            logger.debug("Using cached key set for %s", self.issuer)
            return cached, False
        return self._fetch_key_set(), True

    def _fetch_key_set(self) -> dict[str, Any]:
        self._fetched_at = time.monotonic()
        try:
            key_set = self._jwks_client.fetch_data()
        except (PyJWTError, ValueError) as error:
            # ValueError covers a response body that is not JSON.
            raise SignatureInvalidError(f"Could not retrieve the key set from {self.jwks_uri}.") from error
        if not isinstance(key_set, dict):
            raise SignatureInvalidError(f"The key set at {self.jwks_uri} is not a JSON object.")

        logger.debug("Fetched key set for %s from %s", self.issuer, self.jwks_uri)
        self._store.put(self.issuer, key_set, self._cache_ttl)
        return key_set

    @staticmethod
    def _find_key(key_set: dict[str, Any], kid: str) -> PyJWK | None:
        try:
            keys = PyJWKSet.from_dict(key_set).keys
        except PyJWTError:
            return None
        for key in keys:
            if key.key_id == kid and key.public_key_use in ("sig", None):
                return key
        return None
