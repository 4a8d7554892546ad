from datetime import timedelta

from pytest import MonkeyPatch, fixture, mark, raises

from idtokenguard.exceptions import TokenConfigurationError
from idtokenguard.settings import Settings

ENV_NAMES = [
    "IDTOKEN_ISSUER",
    "IDTOKEN_AUDIENCE",
    "IDTOKEN_LEEWAY_SECONDS",
    "IDTOKEN_MAX_AGE_SECONDS",
    "IDTOKEN_ORGANIZATION",
    "IDTOKEN_CLIENT_SECRET",
    "IDTOKEN_ALLOW_UNVERIFIED_HS256",
    "IDTOKEN_SIGNATURE_ALGORITHMS",
    "IDTOKEN_JWKS_CACHE_TTL",
    "IDTOKEN_JWKS_TIMEOUT",
    "IDTOKEN_JWKS_REFETCH_INTERVAL",
    "REDIS_URL",
]


@fixture
def environ(monkeypatch: MonkeyPatch) -> MonkeyPatch:
    """Environment with only the required variables set."""
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("IDTOKEN_ISSUER", "https://idp.example/")
    monkeypatch.setenv("IDTOKEN_AUDIENCE", "client1")
    return monkeypatch


def test_defaults_from_environ(environ: MonkeyPatch) -> None:
    settings = Settings.from_environ()

    assert settings == Settings(issuer="https://idp.example/", audience="client1")
    assert settings.leeway == timedelta(minutes=5)
    assert settings.allow_unverified_hs256 is True
    assert settings.signature_algorithms == ("RS256",)


def test_all_values_from_environ(environ: MonkeyPatch) -> None:
    environ.setenv("IDTOKEN_LEEWAY_SECONDS", "30")
    environ.setenv("IDTOKEN_MAX_AGE_SECONDS", "3600")
    environ.setenv("IDTOKEN_ORGANIZATION", "org_123")
    environ.setenv("IDTOKEN_CLIENT_SECRET", "s3cret")
    environ.setenv("IDTOKEN_ALLOW_UNVERIFIED_HS256", "false")
    environ.setenv("IDTOKEN_SIGNATURE_ALGORITHMS", "RS256, ES256")
    environ.setenv("IDTOKEN_JWKS_CACHE_TTL", "120")
    environ.setenv("IDTOKEN_JWKS_TIMEOUT", "5")
    environ.setenv("IDTOKEN_JWKS_REFETCH_INTERVAL", "60")
    environ.setenv("REDIS_URL", "redis://cache:6379/1")

    settings = Settings.from_environ()

    assert settings.leeway == timedelta(seconds=30)
    assert settings.max_age == timedelta(hours=1)
    assert settings.organization == "org_123"
    assert settings.client_secret == "s3cret"
    assert settings.allow_unverified_hs256 is False
    assert settings.signature_algorithms == ("RS256", "ES256")
    assert settings.jwks_cache_ttl == 120
    assert settings.jwks_timeout == 5
    assert settings.jwks_refetch_interval == 60
    assert settings.redis_url == "redis://cache:6379/1"


def test_missing_issuer(environ: MonkeyPatch) -> None:
    environ.delenv("IDTOKEN_ISSUER")

    with raises(TokenConfigurationError) as error:
        Settings.from_environ()

    assert "IDTOKEN_ISSUER" in str(error.value)


def test_malformed_number(environ: MonkeyPatch) -> None:
    environ.setenv("IDTOKEN_LEEWAY_SECONDS", "five minutes")

    with raises(TokenConfigurationError):
        Settings.from_environ()


def test_malformed_boolean(environ: MonkeyPatch) -> None:
    environ.setenv("IDTOKEN_ALLOW_UNVERIFIED_HS256", "maybe")

    with raises(TokenConfigurationError):
        Settings.from_environ()


def test_requirements_use_settings_defaults() -> None:
    settings = Settings(
        issuer="https://idp.example/",
        audience="client1",
        leeway=timedelta(seconds=10),
        max_age=timedelta(minutes=15),
        organization="acme",
    )

    requirements = settings.requirements(nonce="n-1")

    assert requirements.issuer == "https://idp.example/"
    assert requirements.audience == "client1"
    assert requirements.nonce == "n-1"
    assert requirements.leeway == timedelta(seconds=10)
    assert requirements.max_age == timedelta(minutes=15)
    assert requirements.organization == "acme"


def test_requirements_overrides_can_clear_defaults() -> None:
    settings = Settings(issuer="https://idp.example/", audience="client1", max_age=timedelta(minutes=15))

    requirements = settings.requirements(max_age=None, organization="org_9")

    assert requirements.max_age is None
    assert requirements.organization == "org_9"
    assert requirements.nonce is None


@mark.parametrize("name", ["IDTOKEN_LEEWAY_SECONDS", "IDTOKEN_MAX_AGE_SECONDS"])
def test_negative_durations_rejected_at_load(environ: MonkeyPatch, name: str) -> None:
    """A negative duration fails when settings load, not on first validation."""
    environ.setenv(name, "-5")

    with raises(TokenConfigurationError):
        Settings.from_environ()


def test_malformed_number_hides_parse_error(environ: MonkeyPatch) -> None:
    environ.setenv("IDTOKEN_JWKS_CACHE_TTL", "ten")

    with raises(TokenConfigurationError) as error:
        Settings.from_environ()

    assert error.value.__cause__ is None
    assert error.value.__suppress_context__ is True


def test_settings_invariants() -> None:
    with raises(TokenConfigurationError):
        Settings(issuer="https://idp.example/", audience="client1", leeway=timedelta(seconds=-1))
    with raises(TokenConfigurationError):
        Settings(issuer="https://idp.example/", audience="client1", max_age=timedelta(seconds=-1))
    with raises(TokenConfigurationError):
        Settings(issuer="https://idp.example/", audience="client1", jwks_cache_ttl=0)
    with raises(TokenConfigurationError):
        Settings(issuer="", audience="client1")
