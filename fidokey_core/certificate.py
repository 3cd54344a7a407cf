# fidokey_core/certificate.py
"""
Import of credential public keys from certificates.

The importer only needs three things from a certificate, captured by
CertificateKeyAccessor. X509KeyAccessor provides them for a
cryptography.x509.Certificate.
"""

from __future__ import annotations
from typing import Dict, Protocol, Tuple

from cryptography import exceptions, x509
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from .constants import (
    OID_EC_PUBLIC_KEY,
    OID_RSA_ENCRYPTION,
    EllipticCurve,
    KeyType,
    KeyTypeParameter,
)
from .errors import InvalidKeyMaterial, UnrecognizedKeyAlgorithmIdentifier, UnsupportedCurve
from .utils import field_size, int2bytes

KEY_TYPE_FROM_OID: Dict[str, KeyType] = {
    OID_EC_PUBLIC_KEY: KeyType.EC2,
    OID_RSA_ENCRYPTION: KeyType.RSA,
}

CURVE_FROM_NAME: Dict[str, EllipticCurve] = {
    "secp256r1": EllipticCurve.P256,
    "p-256": EllipticCurve.P256,
    "secp256k1": EllipticCurve.P256K,
    "secp384r1": EllipticCurve.P384,
    "p-384": EllipticCurve.P384,
    "secp521r1": EllipticCurve.P521,
    "p-521": EllipticCurve.P521,
}


class CertificateKeyAccessor(Protocol):
    def public_key_algorithm_identifier(self) -> str: ...
    def rsa_public_key_parameters(self) -> Tuple[bytes, bytes]: ...
    def ec_public_key_parameters(self) -> Tuple[str, bytes, bytes]: ...


class X509KeyAccessor:
    """Exposes the public-key material of a parsed X.509 certificate."""

    def __init__(self, cert: x509.Certificate):
        self.cert = cert

    def public_key_algorithm_identifier(self) -> str:
        return self.cert.public_key_algorithm_oid.dotted_string

    def _public_key(self, error):
        try:
            return self.cert.public_key()
        except (ValueError, exceptions.UnsupportedAlgorithm) as exc:
            raise error(f"Unloadable certificate public key: {exc}") from exc

    def rsa_public_key_parameters(self) -> Tuple[bytes, bytes]:
        pk = self._public_key(InvalidKeyMaterial)
        if not isinstance(pk, rsa.RSAPublicKey):
            raise UnrecognizedKeyAlgorithmIdentifier("Certificate does not carry an RSA key")
        pn = pk.public_numbers()
        return int2bytes(pn.n), int2bytes(pn.e)

    def ec_public_key_parameters(self) -> Tuple[str, bytes, bytes]:
        # explicit or unnamed curves cannot be loaded
        pk = self._public_key(UnsupportedCurve)
        if not isinstance(pk, ec.EllipticCurvePublicKey):
            raise UnrecognizedKeyAlgorithmIdentifier("Certificate does not carry an EC key")
        pn = pk.public_numbers()
        size = field_size(pk.curve.key_size)
        return pk.curve.name, int2bytes(pn.x, size), int2bytes(pn.y, size)


def load_certificate(data: bytes) -> x509.Certificate:
    """Parse a PEM or DER encoded certificate."""
    if data.lstrip().startswith(b"-----BEGIN"):
        return x509.load_pem_x509_certificate(data)
    return x509.load_der_x509_certificate(data)


def key_type_for_oid(oid: str) -> KeyType:
    try:
        return KEY_TYPE_FROM_OID[oid]
    except KeyError:
        raise UnrecognizedKeyAlgorithmIdentifier(f"Unrecognized key algorithm {oid}") from None


def curve_for_name(name: str) -> EllipticCurve:
    try:
        return CURVE_FROM_NAME[name.lower()]
    except KeyError:
        raise UnsupportedCurve(f"Unrecognized curve {name}") from None


def import_parameters(accessor: CertificateKeyAccessor) -> Tuple[KeyType, Dict[int, object]]:
    """Return (key type, key-type parameters) taken verbatim from the certificate."""
    kty = key_type_for_oid(accessor.public_key_algorithm_identifier())

    if kty == KeyType.RSA:
        n, e = accessor.rsa_public_key_parameters()
        return kty, {KeyTypeParameter.N: n, KeyTypeParameter.E: e}

    curve_name, x, y = accessor.ec_public_key_parameters()
    return kty, {
        KeyTypeParameter.CRV: curve_for_name(curve_name),
        KeyTypeParameter.X: x,
        KeyTypeParameter.Y: y,
    }
