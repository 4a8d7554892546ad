from __future__ import annotations

import json
from typing import Any, Iterator

from jwt import DecodeError, InvalidTokenError, PyJWS

from idtokenguard.exceptions import TokenDecodeError
from idtokenguard.schema import ClaimNames, DecodedToken


def decode_token(raw_token: str) -> DecodedToken:
    """
    Split a compact JWT into its header and claims without checking the signature.
    Raises TokenDecodeError, chained to the PyJWT error, on malformed input.
    """
    try:
        complete = PyJWS().decode_complete(
            raw_token,
            options={"verify_signature": False},
        )
        payload = _load_payload(complete["payload"])
    except (InvalidTokenError, UnicodeError) as error:
        raise TokenDecodeError() from error

    header: dict[str, Any] = complete["header"]
    return DecodedToken(
        issuer=_string_claim(payload, ClaimNames.ISSUER),
        subject=_string_claim(payload, ClaimNames.SUBJECT),
        audiences=_audiences(payload.get(ClaimNames.AUDIENCE)),
        claims=tuple(_claim_entries(payload)),
        signature_algorithm=header.get("alg"),
        nonce=_string_claim(payload, ClaimNames.NONCE),
        authorized_party=_string_claim(payload, ClaimNames.AUTHORIZED_PARTY),
        header=header,
        payload=payload,
    )


def _load_payload(data: bytes) -> dict[str, Any]:
    try:
        payload = json.loads(data)
    except ValueError as error:
        raise DecodeError(f"Invalid payload string: {error}") from error
    if not isinstance(payload, dict):
        raise DecodeError("Invalid payload string: must be a json object")
    return payload


def _string_claim(payload: dict[str, Any], name: str) -> str | None:
    value = payload.get(name)
    return value if isinstance(value, str) else None


def _audiences(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,) if value else ()
    if isinstance(value, list):
        # De-duplicate while keeping token order for error messages.
        return tuple(dict.fromkeys(item for item in value if isinstance(item, str) and item))
    return ()


def _claim_entries(payload: dict[str, Any]) -> Iterator[tuple[str, str]]:
    for name, value in payload.items():
        for item in value if isinstance(value, list) else [value]:
            if item is not None:
                yield name, _as_claim_string(item)


def _as_claim_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return repr(value)
    return json.dumps(value, separators=(",", ":"))
