from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import jwt
from jwt.algorithms import RSAAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa
from dotenv import load_dotenv
from pytest import fixture

from idtokenguard.config import IdTokenRequirements
from idtokenguard.schema import DecodedToken
from idtokenguard.services import decode_token

# Load all env variables.
load_dotenv()

ISSUER = "https://idp.example/"
AUDIENCE = "client1"
KEY_ID = "test-key-1"
CLIENT_SECRET = "a-shared-client-secret-of-32-bytes!"
NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
EPOCH_NOW = int(NOW.timestamp())


def valid_claims(**overrides: Any) -> dict[str, Any]:
    """Claims that satisfy the default requirements at NOW."""
    claims: dict[str, Any] = {
        "iss": ISSUER,
        "sub": "auth0|123456",
        "aud": AUDIENCE,
        "exp": EPOCH_NOW + 3600,
        "iat": EPOCH_NOW,
    }
    claims.update(overrides)
    return {name: value for name, value in claims.items() if value is not None}


def hs256_token(claims: dict[str, Any], secret: str = CLIENT_SECRET) -> str:
    return jwt.encode(claims, secret, algorithm="HS256")


@fixture(scope="session")
def private_key() -> rsa.RSAPrivateKey:
    """RSA key the test identity provider signs with."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@fixture(scope="session")
def other_private_key() -> rsa.RSAPrivateKey:
    """RSA key unknown to the identity provider's key set."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@fixture(scope="session")
def key_set(private_key: rsa.RSAPrivateKey) -> dict[str, Any]:
    """Published key set of the test identity provider."""
    jwk: dict[str, Any] = RSAAlgorithm.to_jwk(private_key.public_key(), as_dict=True)
    jwk.update({"kid": KEY_ID, "use": "sig", "alg": "RS256"})
    return {"keys": [jwk]}


@fixture
def sign_rs256(private_key: rsa.RSAPrivateKey) -> Callable[..., str]:
    """Sign claims with the identity provider's RSA key."""

    def sign(claims: dict[str, Any], key: Any = None, kid: str = KEY_ID) -> str:
        return jwt.encode(claims, key or private_key, algorithm="RS256", headers={"kid": kid})

    return sign


@fixture
def requirements() -> IdTokenRequirements:
    return IdTokenRequirements(issuer=ISSUER, audience=AUDIENCE, leeway=timedelta(0))


@fixture
def decoded() -> Callable[..., DecodedToken]:
    """Decode a token built from `valid_claims` with the given overrides."""

    def build(**overrides: Any) -> DecodedToken:
        return decode_token(hs256_token(valid_claims(**overrides)))

    return build
