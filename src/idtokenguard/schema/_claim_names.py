class ClaimNames:
    """Wire names of the claims inspected during ID token validation."""

    ISSUER = "iss"
    SUBJECT = "sub"
    AUDIENCE = "aud"
    EXPIRATION = "exp"
    ISSUED_AT = "iat"
    NONCE = "nonce"
    AUTHORIZED_PARTY = "azp"
    AUTH_TIME = "auth_time"
    ORGANIZATION_ID = "org_id"
    ORGANIZATION_NAME = "org_name"
