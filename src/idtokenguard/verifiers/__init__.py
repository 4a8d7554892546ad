from ._signature_verifiers import (
    LEGACY_SYMMETRIC_ALGORITHM,
    AsymmetricSignatureVerifier,
    SignatureVerifier,
    SymmetricSignatureVerifier,
    TrustedSignatureVerifier,
    requires_signature_verification,
)

__all__ = [
    "LEGACY_SYMMETRIC_ALGORITHM",
    "AsymmetricSignatureVerifier",
    "SignatureVerifier",
    "SymmetricSignatureVerifier",
    "TrustedSignatureVerifier",
    "requires_signature_verification",
]
