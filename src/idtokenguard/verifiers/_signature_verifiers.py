from __future__ import annotations

from typing import Protocol

from jwt import InvalidTokenError, PyJWS

from idtokenguard.exceptions import SignatureInvalidError
from idtokenguard.managers import KeySetManager
from idtokenguard.stores import InMemoryKeySetStore, KeySetStore

LEGACY_SYMMETRIC_ALGORITHM = "HS256"


class SignatureVerifier(Protocol):
    def verify_signature(self, raw_token: str) -> None:
        """Return when the signature is valid; raise otherwise."""


def requires_signature_verification(algorithm: str | None, symmetric_shortcut: bool = True) -> bool:
    """
    Whether a token declaring `algorithm` must have its signature verified.

    Only HS256 tokens may skip verification, and only while the symmetric
    shortcut is enabled for clients that check their shared secret elsewhere.
    """
    return not (symmetric_shortcut and algorithm == LEGACY_SYMMETRIC_ALGORITHM)


class TrustedSignatureVerifier:
    """Accepts every token; the signature is trusted to be checked upstream."""

    def verify_signature(self, raw_token: str) -> None:
        return None


class SymmetricSignatureVerifier:
    """Verifies HMAC signed tokens with a pre-shared client secret."""

    def __init__(self, secret: str, algorithms: tuple[str, ...] = (LEGACY_SYMMETRIC_ALGORITHM,)) -> None:
        self._secret = secret
        self.algorithms = algorithms

    def verify_signature(self, raw_token: str) -> None:
        try:
            PyJWS().decode_complete(raw_token, key=self._secret, algorithms=list(self.algorithms))
        except InvalidTokenError as error:
            raise SignatureInvalidError(f"Invalid ID token signature: {error}") from error


class AsymmetricSignatureVerifier:
    """Verifies tokens against the public keys the issuer publishes."""

    def __init__(self, key_set_manager: KeySetManager, algorithms: tuple[str, ...] = ("RS256",)) -> None:
        self.key_set_manager = key_set_manager
        self.algorithms = algorithms

    @classmethod
    def for_issuer(
        cls,
        issuer: str,
        key_set_store: KeySetStore | InMemoryKeySetStore | None = None,
        cache_ttl: int = 600,
        timeout: int = 30,
        algorithms: tuple[str, ...] = ("RS256",),
        min_refetch_interval: float = 30.0,
    ) -> AsymmetricSignatureVerifier:
        manager = KeySetManager(
            issuer,
            store=key_set_store,
            cache_ttl=cache_ttl,
            timeout=timeout,
            min_refetch_interval=min_refetch_interval,
        )
        return cls(manager, algorithms=algorithms)

    def verify_signature(self, raw_token: str) -> None:
        signing_key = self.key_set_manager.get_signing_key(raw_token)
        try:
            PyJWS().decode_complete(raw_token, key=signing_key.key, algorithms=list(self.algorithms))
        except InvalidTokenError as error:
            raise SignatureInvalidError(f"Invalid ID token signature: {error}") from error
