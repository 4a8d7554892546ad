from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from jwt import PyJWTError

from idtokenguard.config import IdTokenRequirements
from idtokenguard.exceptions import (
    IdTokenValidationError,
    MissingTokenError,
    SignatureInvalidError,
)
from idtokenguard.settings import Settings
from idtokenguard.stores import InMemoryKeySetStore, KeySetStore
from idtokenguard.verifiers import (
    LEGACY_SYMMETRIC_ALGORITHM,
    AsymmetricSignatureVerifier,
    SignatureVerifier,
    SymmetricSignatureVerifier,
    requires_signature_verification,
)

from ._claims_assertion import assert_claims
from ._token_decoder import decode_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of `IdTokenValidator.validate`; `error` is set exactly when `valid` is False."""

    valid: bool
    error: IdTokenValidationError | None = None


class IdTokenValidator:
    """
    Validates raw ID tokens: decodes them, verifies the signature when the
    declared algorithm requires it, then asserts the claims.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        key_set_store: KeySetStore | InMemoryKeySetStore | None = None,
    ) -> None:
        self.settings = settings
        self.key_set_store = key_set_store or self._default_key_set_store(settings)
        # One verifier per issuer keeps key set refetch throttling across calls.
        self._asymmetric_verifiers: dict[str, AsymmetricSignatureVerifier] = {}

    @staticmethod
    def _default_key_set_store(settings: Settings | None) -> KeySetStore | InMemoryKeySetStore:
        if settings is not None and settings.redis_url:
            return KeySetStore(redis_url=settings.redis_url)
        return InMemoryKeySetStore()

    @staticmethod
    def _current_time() -> datetime:
        return datetime.now(timezone.utc)

    @property
    def symmetric_shortcut(self) -> bool:
        return self.settings.allow_unverified_hs256 if self.settings is not None else True

    def assert_token_meets_requirements(
        self,
        requirements: IdTokenRequirements,
        raw_token: str | None,
        point_in_time: datetime | None = None,
        signature_verifier: SignatureVerifier | None = None,
    ) -> None:
        """
        Assert that a raw ID token meets the requirements.

        `point_in_time` acts as "now" so static tokens can be tested; it defaults
        to the current UTC time. `signature_verifier` replaces the verifier
        resolved for the issuer when the signature has to be checked.
        Raises an IdTokenValidationError subclass describing the first failure.
        """
        if raw_token is None or not raw_token.strip():
            raise MissingTokenError()

        token = decode_token(raw_token)

        if requires_signature_verification(token.signature_algorithm, self.symmetric_shortcut):
            verifier = signature_verifier or self._signature_verifier_for(
                requirements.issuer,
                token.signature_algorithm,
            )
            logger.debug(
                "Verifying %s signature of ID token from %s with %s",
                token.signature_algorithm,
                requirements.issuer,
                type(verifier).__name__,
            )
            self._verify_signature(verifier, raw_token)
        else:
            logger.warning(
                "Skipping signature verification of %s ID token from %s",
                LEGACY_SYMMETRIC_ALGORITHM,
                requirements.issuer,
            )

        assert_claims(requirements, token, point_in_time or self._current_time())

    def validate(
        self,
        requirements: IdTokenRequirements,
        raw_token: str | None,
        point_in_time: datetime | None = None,
        signature_verifier: SignatureVerifier | None = None,
    ) -> ValidationResult:
        """Same checks as `assert_token_meets_requirements`, reported as a ValidationResult."""
        try:
            self.assert_token_meets_requirements(
                requirements,
                raw_token,
                point_in_time=point_in_time,
                signature_verifier=signature_verifier,
            )
        except IdTokenValidationError as error:
            logger.info("ID token validation failed: %s", error.message)
            return ValidationResult(valid=False, error=error)
        return ValidationResult(valid=True)

    def _signature_verifier_for(self, issuer: str, algorithm: str | None) -> SignatureVerifier:
        settings = self.settings
        if settings is not None and algorithm == LEGACY_SYMMETRIC_ALGORITHM and settings.client_secret:
            return SymmetricSignatureVerifier(settings.client_secret)
        return self._asymmetric_verifier_for(issuer)

    def _asymmetric_verifier_for(self, issuer: str) -> AsymmetricSignatureVerifier:
        verifier = self._asymmetric_verifiers.get(issuer)
        if verifier is not None:
            return verifier

        settings = self.settings
        if settings is None:
            verifier = AsymmetricSignatureVerifier.for_issuer(issuer, key_set_store=self.key_set_store)
        else:
            verifier = AsymmetricSignatureVerifier.for_issuer(
                issuer,
                key_set_store=self.key_set_store,
                cache_ttl=settings.jwks_cache_ttl,
                timeout=settings.jwks_timeout,
                algorithms=settings.signature_algorithms,
                min_refetch_interval=settings.jwks_refetch_interval,
            )
        self._asymmetric_verifiers[issuer] = verifier
        return verifier

    @staticmethod
    def _verify_signature(verifier: SignatureVerifier, raw_token: str) -> None:
        try:
            verifier.verify_signature(raw_token)
        except IdTokenValidationError:
            raise
        except PyJWTError as error:
            raise SignatureInvalidError(f"Invalid ID token signature: {error}") from error
