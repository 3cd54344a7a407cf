"""
FIDOKEY Core Package
====================
Credential public keys for WebAuthn / FIDO2 relying parties.

Provides:
- COSE key record parsing, validation and canonical CBOR serialization
- Closed resolution of COSE algorithm/curve identifiers to primitives
- Signature verification for EC2, RSA and OKP (Ed25519) keys
- Import of credential keys from X.509 certificates
"""

from .constants import Algorithm, EllipticCurve, KeyType
from .credential import CredentialPublicKey
from .errors import (
    CredentialKeyError,
    InvalidKeyMaterial,
    MalformedParameters,
    UnrecognizedKeyAlgorithmIdentifier,
    UnsupportedAlgorithm,
    UnsupportedAlgorithmForKeyType,
    UnsupportedCurve,
    UnsupportedKeyType,
)

__all__ = [
    "Algorithm",
    "EllipticCurve",
    "KeyType",
    "CredentialPublicKey",
    "CredentialKeyError",
    "InvalidKeyMaterial",
    "MalformedParameters",
    "UnrecognizedKeyAlgorithmIdentifier",
    "UnsupportedAlgorithm",
    "UnsupportedAlgorithmForKeyType",
    "UnsupportedCurve",
    "UnsupportedKeyType",
]
