from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from idtokenguard.exceptions import TokenConfigurationError


@dataclass(frozen=True)
class IdTokenRequirements:
    """
    Requirements an ID token must meet to be trusted.

    Attributes:
        issuer (str): Expected `iss` claim, compared exactly.
        audience (str): Client identifier that must appear in the `aud` claim.
        nonce (str | None): Expected `nonce` claim; not checked when None.
        leeway (timedelta): Clock skew tolerance for time-based claims (default: 5 minutes).
        max_age (timedelta | None): Maximum time since the end-user authenticated;
            requires an `auth_time` claim when set.
        organization (str | None): Expected organization; an `org_` prefixed value is
            matched against `org_id`, anything else against `org_name`.

    Example:
    ```
        requirements = IdTokenRequirements(
            issuer="https://tenant.example.com/",
            audience="my-client-id",
            nonce="a-random-nonce",
            leeway=timedelta(seconds=30),
        )
    ```
    """

    issuer: str
    audience: str
    nonce: str | None = None
    leeway: timedelta = timedelta(minutes=5)
    max_age: timedelta | None = None
    organization: str | None = None

    def __post_init__(self) -> None:
        if not self.issuer or not self.issuer.strip():
            raise TokenConfigurationError("Requirements issuer must be a non-empty string.")
        if not self.audience or not self.audience.strip():
            raise TokenConfigurationError("Requirements audience must be a non-empty string.")
        if self.leeway < timedelta(0):
            raise TokenConfigurationError(f"Requirements leeway must not be negative, got {self.leeway}.")
        if self.max_age is not None and self.max_age < timedelta(0):
            raise TokenConfigurationError(f"Requirements max_age must not be negative, got {self.max_age}.")
