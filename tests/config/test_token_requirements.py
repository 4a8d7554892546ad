from datetime import timedelta

from pytest import mark, raises

from idtokenguard.config import IdTokenRequirements
from idtokenguard.exceptions import TokenConfigurationError


def test_defaults() -> None:
    requirements = IdTokenRequirements(issuer="https://idp.example/", audience="client1")

    assert requirements.nonce is None
    assert requirements.leeway == timedelta(minutes=5)
    assert requirements.max_age is None
    assert requirements.organization is None


@mark.parametrize("issuer, audience", [("", "client1"), ("   ", "client1"), ("https://idp.example/", "")])
def test_issuer_and_audience_are_required(issuer: str, audience: str) -> None:
    with raises(TokenConfigurationError):
        IdTokenRequirements(issuer=issuer, audience=audience)


def test_negative_leeway_is_rejected() -> None:
    with raises(TokenConfigurationError):
        IdTokenRequirements(issuer="https://idp.example/", audience="client1", leeway=timedelta(seconds=-1))


def test_negative_max_age_is_rejected() -> None:
    with raises(TokenConfigurationError):
        IdTokenRequirements(issuer="https://idp.example/", audience="client1", max_age=timedelta(seconds=-1))


def test_requirements_are_immutable() -> None:
    requirements = IdTokenRequirements(issuer="https://idp.example/", audience="client1")

    with raises(AttributeError):
        requirements.issuer = "https://evil.example/"  # type: ignore[misc]
