from ._claims_assertion import assert_claims, get_claim_value, get_epoch, parse_epoch, to_epoch
from ._id_token_validator import IdTokenValidator, ValidationResult
from ._token_decoder import decode_token

__all__ = [
    "IdTokenValidator",
    "ValidationResult",
    "assert_claims",
    "decode_token",
    "get_claim_value",
    "get_epoch",
    "parse_epoch",
    "to_epoch",
]
