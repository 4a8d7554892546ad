from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DecodedToken:
    """
    Structural view of a JWT ID token whose signature has not been checked yet.

    `claims` holds `(name, value)` pairs with every value rendered as a string.
    An array-valued claim contributes one pair per element, so a name can
    appear more than once.
    """

    issuer: str | None
    subject: str | None
    audiences: tuple[str, ...]
    claims: tuple[tuple[str, str], ...]
    signature_algorithm: str | None
    nonce: str | None = None
    authorized_party: str | None = None
    header: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)
    payload: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)
