from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from os import environ

from idtokenguard.config import IdTokenRequirements
from idtokenguard.exceptions import TokenConfigurationError

_UNSET = object()
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """
    Settings for ID token validation.

    Attributes:
        issuer (str): The identity provider expected in the `iss` claim.
        audience (str): The client identifier expected in the `aud` claim.
        leeway (timedelta): Allowed clock skew (default: 5 minutes).
        max_age (timedelta | None): Default maximum authentication age.
        organization (str | None): Default expected organization id or name.
        allow_unverified_hs256 (bool): Skip signature verification for HS256 tokens,
            kept for clients that validate their shared secret elsewhere (default: True).
        client_secret (str | None): Shared secret used to verify HS256 tokens when
            the unverified shortcut is disabled.
        signature_algorithms (tuple[str, ...]): Asymmetric algorithms accepted from
            the issuer's key set (default: RS256).
        jwks_cache_ttl (int): Seconds a fetched key set stays cached (default: 600).
        jwks_timeout (int): Seconds to wait for the key set endpoint (default: 30).
        jwks_refetch_interval (int): Minimum seconds between key set refetches triggered
            by an unknown `kid` (default: 30).
        redis_url (str | None): Redis URL for a shared key set cache; in-process when None.

    Example:
    ```
        settings = Settings(
            issuer="https://tenant.example.com/",
            audience="my-client-id",
            leeway=timedelta(seconds=60),
            allow_unverified_hs256=False,
        )
    ```
    """

    issuer: str
    audience: str
    leeway: timedelta = timedelta(minutes=5)
    max_age: timedelta | None = None
    organization: str | None = None
    allow_unverified_hs256: bool = True
    client_secret: str | None = None
    signature_algorithms: tuple[str, ...] = ("RS256",)
    jwks_cache_ttl: int = 600
    jwks_timeout: int = 30
    jwks_refetch_interval: int = 30
    redis_url: str | None = None

    def __post_init__(self) -> None:
        if not self.issuer or not self.audience:
            raise TokenConfigurationError("Settings issuer and audience must be non-empty strings.")
        if self.leeway < timedelta(0):
            raise TokenConfigurationError(f"Settings leeway must not be negative, got {self.leeway}.")
        if self.max_age is not None and self.max_age < timedelta(0):
            raise TokenConfigurationError(f"Settings max_age must not be negative, got {self.max_age}.")
        if self.jwks_cache_ttl < 1 or self.jwks_timeout < 1:
            raise TokenConfigurationError("Settings jwks_cache_ttl and jwks_timeout must be positive.")
        if self.jwks_refetch_interval < 0:
            raise TokenConfigurationError("Settings jwks_refetch_interval must not be negative.")

    @classmethod
    def from_environ(cls) -> Settings:
        """
        Example environment:
        - IDTOKEN_ISSUER = "https://tenant.example.com/"
        - IDTOKEN_AUDIENCE = "my-client-id"
        - IDTOKEN_LEEWAY_SECONDS = "60"
        - IDTOKEN_ALLOW_UNVERIFIED_HS256 = "false"
        - IDTOKEN_SIGNATURE_ALGORITHMS = "RS256,ES256"
        - REDIS_URL = "redis://localhost:6379/0"
        """
        issuer = environ.get("IDTOKEN_ISSUER")
        audience = environ.get("IDTOKEN_AUDIENCE")
        if not issuer or not audience:
            raise TokenConfigurationError(
                "The IDTOKEN_ISSUER and IDTOKEN_AUDIENCE environment variables are required. "
                "Set them to your identity provider and client identifier, for example:\n\n"
                "    IDTOKEN_ISSUER = 'https://tenant.example.com/'\n"
                "    IDTOKEN_AUDIENCE = 'my-client-id'"
            )

        max_age = _int_from_environ("IDTOKEN_MAX_AGE_SECONDS")
        algorithms = environ.get("IDTOKEN_SIGNATURE_ALGORITHMS")
        return cls(
            issuer=issuer,
            audience=audience,
            leeway=timedelta(seconds=_int_from_environ("IDTOKEN_LEEWAY_SECONDS", 300)),
            max_age=timedelta(seconds=max_age) if max_age is not None else None,
            organization=environ.get("IDTOKEN_ORGANIZATION") or None,
            allow_unverified_hs256=_bool_from_environ("IDTOKEN_ALLOW_UNVERIFIED_HS256", True),
            client_secret=environ.get("IDTOKEN_CLIENT_SECRET") or None,
            signature_algorithms=(
                tuple(name.strip() for name in algorithms.split(",") if name.strip())
                if algorithms
                else ("RS256",)
            ),
            jwks_cache_ttl=_int_from_environ("IDTOKEN_JWKS_CACHE_TTL", 600),
            jwks_timeout=_int_from_environ("IDTOKEN_JWKS_TIMEOUT", 30),
            jwks_refetch_interval=_int_from_environ("IDTOKEN_JWKS_REFETCH_INTERVAL", 30),
            redis_url=environ.get("REDIS_URL") or None,
        )

    def requirements(
        self,
        nonce: str | None = None,
        max_age: timedelta | None | object = _UNSET,
        organization: str | None | object = _UNSET,
    ) -> IdTokenRequirements:
        """Build the requirements for one validation call, overriding the defaults when given."""
        return IdTokenRequirements(
            issuer=self.issuer,
            audience=self.audience,
            nonce=nonce,
            leeway=self.leeway,
            max_age=self.max_age if max_age is _UNSET else max_age,  # type: ignore[arg-type]
            organization=self.organization if organization is _UNSET else organization,  # type: ignore[arg-type]
        )


def _int_from_environ(name: str, default: int | None = None) -> int | None:
    value = environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise TokenConfigurationError(f"{name} must be a whole number of seconds, got '{value}'.") from None


def _bool_from_environ(name: str, default: bool) -> bool:
    value = environ.get(name)
    if value is None or not value.strip():
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise TokenConfigurationError(f"{name} must be a boolean (true/false), got '{value}'.")
