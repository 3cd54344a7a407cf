"""
fidokey_core.crypto
-------------------
Signature verification for resolved credential key configurations:

- EC2: ECDSA over P-256 / P-384 / P-521, raw (r || s) or DER signatures
- RSA: PSS or PKCS#1 v1.5 with the algorithm's hash
- OKP: Ed25519 over SHA-512(message)

A signature that does not match returns False. Configuration problems and
key material the primitive rejects raise.
"""

from __future__ import annotations
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature

from .config import Settings
from .errors import InvalidKeyMaterial, UnsupportedKeyType
from .logger import get_logger
from .resolver import EC2Config, OKPConfig, PKCS1V15, PSS, PrimitiveConfig, RSAConfig
from .utils import bytes2int, field_size, sha512

log = get_logger("fidokey.crypto")


# --------- EC2 (ECDSA) ----------
def ec_signature_to_der(signature: bytes, curve: ec.EllipticCurve) -> Optional[bytes]:
    """Convert a raw r || s signature to DER. Returns None if the length is wrong."""
    size = field_size(curve.key_size)
    if len(signature) != 2 * size:
        return None
    r = bytes2int(signature[:size])
    s = bytes2int(signature[size:])
    return encode_dss_signature(r, s)


def ec2_public_key(config: EC2Config) -> ec.EllipticCurvePublicKey:
    try:
        return ec.EllipticCurvePublicNumbers(
            bytes2int(config.x), bytes2int(config.y), config.curve
        ).public_key()
    except ValueError as exc:
        raise InvalidKeyMaterial(f"Invalid {config.curve.name} public point: {exc}") from exc


def ec2_verify(config: EC2Config, data: bytes, sig: bytes, encoding: str = "raw") -> bool:
    pk = ec2_public_key(config)
    if encoding == "der":
        der = sig
    else:
        der = ec_signature_to_der(sig, config.curve)
        if der is None:
            log.debug(f"EC2 signature length {len(sig)} does not match {config.curve.name}")
            return False
    try:
        pk.verify(der, data, ec.ECDSA(config.hash_algorithm))
        return True
    except InvalidSignature:
        return False


# --------- RSA ----------
def rsa_public_key(config: RSAConfig) -> rsa.RSAPublicKey:
    try:
        return rsa.RSAPublicNumbers(bytes2int(config.e), bytes2int(config.n)).public_key()
    except ValueError as exc:
        raise InvalidKeyMaterial(f"Invalid RSA public numbers: {exc}") from exc


def rsa_padding(config: RSAConfig) -> padding.AsymmetricPadding:
    if config.padding_scheme == PSS:
        return padding.PSS(
            mgf=padding.MGF1(config.hash_algorithm),
            salt_length=padding.PSS.DIGEST_LENGTH,
        )
    if config.padding_scheme == PKCS1V15:
        return padding.PKCS1v15()
    raise InvalidKeyMaterial(f"Unknown RSA padding {config.padding_scheme!r}")


def rsa_verify(config: RSAConfig, data: bytes, sig: bytes) -> bool:
    pk = rsa_public_key(config)
    try:
        pk.verify(sig, data, rsa_padding(config), config.hash_algorithm)
        return True
    except InvalidSignature:
        return False


# --------- OKP (Ed25519) ----------
def ed25519_public_key(config: OKPConfig) -> ed25519.Ed25519PublicKey:
    try:
        return ed25519.Ed25519PublicKey.from_public_bytes(config.public_key)
    except ValueError as exc:
        raise InvalidKeyMaterial(f"Invalid Ed25519 public key: {exc}") from exc


def ed25519_verify(config: OKPConfig, data: bytes, sig: bytes) -> bool:
    """Ed25519 over SHA-512(data); producers sign the digest, not the message."""
    pk = ed25519_public_key(config)
    try:
        pk.verify(sig, sha512(data))
        return True
    except InvalidSignature:
        return False


# --------- Dispatch ----------
def verify_signature(
    config: PrimitiveConfig, data: bytes, sig: bytes, settings: Optional[Settings] = None
) -> bool:
    # raw r || s unless the caller passes settings
    settings = settings or Settings()
    if isinstance(config, EC2Config):
        return ec2_verify(config, data, sig, settings.ec_signature_encoding)
    if isinstance(config, RSAConfig):
        return rsa_verify(config, data, sig)
    if isinstance(config, OKPConfig):
        return ed25519_verify(config, data, sig)
    raise UnsupportedKeyType(f"Missing or unknown key configuration {type(config).__name__}")
