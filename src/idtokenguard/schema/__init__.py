from ._claim_names import ClaimNames
from ._decoded_token import DecodedToken

__all__ = ["ClaimNames", "DecodedToken"]
