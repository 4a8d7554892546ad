from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable

from idtokenguard.config import IdTokenRequirements
from idtokenguard.exceptions import (
    AuthTimeExceededError,
    ClaimMismatchError,
    ClaimMissingError,
    TokenExpiredError,
)
from idtokenguard.schema import ClaimNames, DecodedToken

ClaimEntries = Iterable[tuple[str, str]]

# Largest epoch a signed 64-bit timestamp can hold.
MAX_EPOCH = 2**63 - 1


def assert_claims(
    requirements: IdTokenRequirements,
    token: DecodedToken,
    point_in_time: datetime,
) -> None:
    """
    Assert that the claims of a decoded ID token meet the requirements at a given time.

    Checks run in a fixed order and the first failing one is raised as an
    IdTokenValidationError subclass; nothing is aggregated. Neither argument
    is mutated.
    """
    epoch_now = to_epoch(point_in_time)
    leeway_seconds = int(requirements.leeway.total_seconds())

    # Issuer
    if _is_blank(token.issuer):
        raise ClaimMissingError(
            ClaimNames.ISSUER,
            "Issuer (iss) claim must be a string present in the ID token.",
        )
    if token.issuer != requirements.issuer:
        raise ClaimMismatchError(
            ClaimNames.ISSUER,
            "Issuer (iss) claim mismatch in the ID token; "
            f'expected "{requirements.issuer}", found "{token.issuer}".',
            expected=requirements.issuer,
            actual=token.issuer,
        )

    # Subject
    if _is_blank(token.subject):
        raise ClaimMissingError(
            ClaimNames.SUBJECT,
            "Subject (sub) claim must be a string present in the ID token.",
        )

    # Audience
    audience_count = len(token.audiences)
    if audience_count == 0:
        raise ClaimMissingError(
            ClaimNames.AUDIENCE,
            "Audience (aud) claim must be a string or array of strings present in the ID token.",
        )
    if requirements.audience not in token.audiences:
        raise ClaimMismatchError(
            ClaimNames.AUDIENCE,
            "Audience (aud) claim mismatch in the ID token; "
            f'expected "{requirements.audience}" but was not one of "{", ".join(token.audiences)}".',
            expected=requirements.audience,
            actual=list(token.audiences),
        )

    # Expires at
    exp = get_epoch(token.claims, ClaimNames.EXPIRATION)
    if exp is None:
        raise ClaimMissingError(
            ClaimNames.EXPIRATION,
            "Expiration Time (exp) claim must be an integer present in the ID token.",
        )
    if epoch_now >= exp + leeway_seconds:
        raise TokenExpiredError(now=epoch_now, expiration=exp)

    # Issued at
    if get_epoch(token.claims, ClaimNames.ISSUED_AT) is None:
        raise ClaimMissingError(
            ClaimNames.ISSUED_AT,
            "Issued At (iat) claim must be an integer present in the ID token.",
        )

    # Nonce
    if requirements.nonce is not None:
        if _is_blank(token.nonce):
            raise ClaimMissingError(
                ClaimNames.NONCE,
                "Nonce (nonce) claim must be a string present in the ID token.",
            )
        if token.nonce != requirements.nonce:
            raise ClaimMismatchError(
                ClaimNames.NONCE,
                "Nonce (nonce) claim mismatch in the ID token; "
                f'expected "{requirements.nonce}", found "{token.nonce}".',
                expected=requirements.nonce,
                actual=token.nonce,
            )

    # Authorized party
    if audience_count > 1:
        if _is_blank(token.authorized_party):
            raise ClaimMissingError(
                ClaimNames.AUTHORIZED_PARTY,
                "Authorized Party (azp) claim must be a string present in the ID token "
                "when Audiences (aud) claim has multiple values.",
            )
        if token.authorized_party != requirements.audience:
            raise ClaimMismatchError(
                ClaimNames.AUTHORIZED_PARTY,
                "Authorized Party (azp) claim mismatch in the ID token; "
                f'expected "{requirements.audience}", found "{token.authorized_party}".',
                expected=requirements.audience,
                actual=token.authorized_party,
            )

    # Authentication time
    if requirements.max_age is not None:
        auth_time = get_epoch(token.claims, ClaimNames.AUTH_TIME)
        if auth_time is None:
            raise ClaimMissingError(
                ClaimNames.AUTH_TIME,
                "Authentication Time (auth_time) claim must be an integer present "
                "in the ID token when max_age is specified.",
            )
        auth_valid_until = auth_time + int(requirements.max_age.total_seconds()) + leeway_seconds
        # Strictly after, unlike the inclusive expiration boundary above.
        if epoch_now > auth_valid_until:
            raise AuthTimeExceededError(now=epoch_now, valid_until=auth_valid_until)

    # Organization
    if not _is_blank(requirements.organization):
        organization = requirements.organization
        if organization.startswith("org_"):
            organization_claim = ClaimNames.ORGANIZATION_ID
            expected_organization = organization
        else:
            organization_claim = ClaimNames.ORGANIZATION_NAME
            expected_organization = organization.lower()

        organization_value = get_claim_value(token.claims, organization_claim)
        if _is_blank(organization_value):
            raise ClaimMissingError(
                organization_claim,
                f"Organization ({organization_claim}) claim must be a string present in the ID token.",
            )
        if organization_value != expected_organization:
            raise ClaimMismatchError(
                organization_claim,
                f"Organization ({organization_claim}) claim mismatch in the ID token; "
                f'expected "{expected_organization}", found "{organization_value}".',
                expected=expected_organization,
                actual=organization_value,
            )


def to_epoch(point_in_time: datetime) -> int:
    """Whole seconds since the Unix epoch; naive datetimes are read as local time."""
    return int(point_in_time.timestamp())


def get_epoch(claims: ClaimEntries, claim_name: str) -> int | None:
    """
    Epoch seconds of the first `claim_name` entry, truncated toward zero.
    Returns None when the claim is absent or not a decimal number.
    """
    for name, value in claims:
        if name == claim_name:
            return parse_epoch(value)
    return None


def parse_epoch(value: str) -> int | None:
    """Decimal string to whole epoch seconds; None when unparsable or beyond MAX_EPOCH."""
    try:
        number = Decimal(value.strip())
    except InvalidOperation:
        return None
    if not number.is_finite() or not -MAX_EPOCH <= number <= MAX_EPOCH:
        return None
    return int(number)


def get_claim_value(claims: ClaimEntries, claim_name: str) -> str | None:
    """The value of `claim_name` when it occurs exactly once, otherwise None."""
    values = [value for name, value in claims if name == claim_name]
    if len(values) != 1:
        return None
    return values[0]


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()
