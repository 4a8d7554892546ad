from __future__ import annotations

from jwt import InvalidTokenError


class IdTokenValidationError(InvalidTokenError):
    """
    Base error for an ID token that does not meet its requirements.

    Attributes:
        claim (str | None): Wire name of the offending claim, when one applies.
    """

    def __init__(self, message: str, claim: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.claim = claim


class MissingTokenError(IdTokenValidationError):
    def __init__(self) -> None:
        super().__init__("ID token is required but missing.")


class TokenDecodeError(IdTokenValidationError):
    """The raw token is not a structurally valid JWT; see `__cause__`."""

    def __init__(self) -> None:
        super().__init__("ID token could not be decoded.")


class SignatureInvalidError(IdTokenValidationError):
    """Signature verification or key resolution failed."""


class ClaimMissingError(IdTokenValidationError):
    """A required claim is absent or not of the expected primitive type."""

    def __init__(self, claim: str, message: str) -> None:
        super().__init__(message, claim=claim)


class ClaimMismatchError(IdTokenValidationError):
    """A claim is present but does not equal or contain the required value."""

    def __init__(
        self,
        claim: str,
        message: str,
        expected: str,
        actual: str | list[str],
    ) -> None:
        super().__init__(message, claim=claim)
        self.expected = expected
        self.actual = actual


class TokenExpiredError(IdTokenValidationError):
    def __init__(self, now: int, expiration: int) -> None:
        super().__init__(
            "Expiration Time (exp) claim error in the ID token; "
            f"current time ({now}) is after expiration time ({expiration}).",
            claim="exp",
        )
        self.now = now
        self.expiration = expiration


class AuthTimeExceededError(IdTokenValidationError):
    def __init__(self, now: int, valid_until: int) -> None:
        super().__init__(
            "Authentication Time (auth_time) claim in the ID token indicates that "
            "too much time has passed since the last end-user authentication. "
            f"Current time ({now}) is after last auth at {valid_until}.",
            claim="auth_time",
        )
        self.now = now
        self.valid_until = valid_until
