from __future__ import annotations


class CredentialKeyError(ValueError):
    """Base class for structural or configuration failures of a credential key.

    Signature mismatch is never raised; verification returns False instead.
    """


class UnsupportedKeyType(CredentialKeyError):
    pass


class UnsupportedAlgorithm(CredentialKeyError):
    pass


class UnsupportedAlgorithmForKeyType(CredentialKeyError):
    pass


class UnsupportedCurve(CredentialKeyError):
    pass


class UnrecognizedKeyAlgorithmIdentifier(CredentialKeyError):
    pass


class MalformedParameters(CredentialKeyError):
    pass


class InvalidKeyMaterial(CredentialKeyError):
    """The primitive rejected the key numbers (e.g. point not on curve)."""
