from jwt import InvalidTokenError
from ._id_token_validation_error import (
    AuthTimeExceededError,
    ClaimMismatchError,
    ClaimMissingError,
    IdTokenValidationError,
    MissingTokenError,
    SignatureInvalidError,
    TokenDecodeError,
    TokenExpiredError,
)
from ._token_configuration_error import TokenConfigurationError

__all__ = [
    "InvalidTokenError",
    "IdTokenValidationError",
    "MissingTokenError",
    "TokenDecodeError",
    "SignatureInvalidError",
    "ClaimMissingError",
    "ClaimMismatchError",
    "TokenExpiredError",
    "AuthTimeExceededError",
    "TokenConfigurationError",
]
