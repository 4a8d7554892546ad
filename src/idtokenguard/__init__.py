from idtokenguard.exceptions import (
    AuthTimeExceededError,
    ClaimMismatchError,
    ClaimMissingError,
    IdTokenValidationError,
    InvalidTokenError,
    MissingTokenError,
    SignatureInvalidError,
    TokenConfigurationError,
    TokenDecodeError,
    TokenExpiredError,
)
from idtokenguard.schema import ClaimNames, DecodedToken
from idtokenguard.config import IdTokenRequirements
from idtokenguard.settings import Settings
from idtokenguard.stores import InMemoryKeySetStore, KeySetStore
from idtokenguard.managers import KeySetManager
from idtokenguard.verifiers import (
    AsymmetricSignatureVerifier,
    SignatureVerifier,
    SymmetricSignatureVerifier,
    TrustedSignatureVerifier,
)
from idtokenguard.services import IdTokenValidator, ValidationResult, assert_claims, decode_token

__all__ = [
    "AsymmetricSignatureVerifier",
    "AuthTimeExceededError",
    "ClaimMismatchError",
    "ClaimMissingError",
    "ClaimNames",
    "DecodedToken",
    "IdTokenRequirements",
    "IdTokenValidationError",
    "IdTokenValidator",
    "InMemoryKeySetStore",
    "InvalidTokenError",
    "KeySetManager",
    "KeySetStore",
    "MissingTokenError",
    "Settings",
    "SignatureInvalidError",
    "SignatureVerifier",
    "SymmetricSignatureVerifier",
    "TokenConfigurationError",
    "TokenDecodeError",
    "TokenExpiredError",
    "TrustedSignatureVerifier",
    "ValidationResult",
    "assert_claims",
    "decode_token",
]
