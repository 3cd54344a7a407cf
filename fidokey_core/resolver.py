"""
fidokey_core.resolver
---------------------
Maps a credential key's (key type, algorithm, curve) to the exact primitive
configuration used for verification.

Every mapping below is closed: a combination that is not listed raises.
There is no default curve, padding or hash.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Tuple, Type, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from .constants import Algorithm, EllipticCurve, KeyType, KeyTypeParameter
from .errors import (
    UnsupportedAlgorithmForKeyType,
    UnsupportedCurve,
    UnsupportedKeyType,
)
from .logger import get_logger

log = get_logger("fidokey.resolver")

PSS = "pss"
PKCS1V15 = "pkcs1v15"

_HASHES: Mapping[Algorithm, Type[hashes.HashAlgorithm]] = {
    Algorithm.ES256: hashes.SHA256,
    Algorithm.ES384: hashes.SHA384,
    Algorithm.ES512: hashes.SHA512,
    Algorithm.PS256: hashes.SHA256,
    Algorithm.PS384: hashes.SHA384,
    Algorithm.PS512: hashes.SHA512,
    Algorithm.RS1: hashes.SHA1,
    Algorithm.RS256: hashes.SHA256,
    Algorithm.RS384: hashes.SHA384,
    Algorithm.RS512: hashes.SHA512,
}

# algorithm -> (permitted curve ids, named curve)
_EC2_CURVES: Mapping[Algorithm, Tuple[frozenset, Type[ec.EllipticCurve]]] = {
    Algorithm.ES256: (frozenset({EllipticCurve.P256, EllipticCurve.P256K}), ec.SECP256R1),
    Algorithm.ES384: (frozenset({EllipticCurve.P384}), ec.SECP384R1),
    Algorithm.ES512: (frozenset({EllipticCurve.P521}), ec.SECP521R1),
}

_RSA_PADDING: Mapping[Algorithm, str] = {
    Algorithm.PS256: PSS,
    Algorithm.PS384: PSS,
    Algorithm.PS512: PSS,
    Algorithm.RS1: PKCS1V15,
    Algorithm.RS256: PKCS1V15,
    Algorithm.RS384: PKCS1V15,
    Algorithm.RS512: PKCS1V15,
}

_OKP_CURVES: Mapping[Algorithm, frozenset] = {
    Algorithm.EdDSA: frozenset({EllipticCurve.Ed25519}),
}


@dataclass(frozen=True)
class EC2Config:
    curve: ec.EllipticCurve
    hash_algorithm: hashes.HashAlgorithm
    x: bytes
    y: bytes


@dataclass(frozen=True)
class RSAConfig:
    padding_scheme: str  # pss | pkcs1v15
    hash_algorithm: hashes.HashAlgorithm
    n: bytes
    e: bytes


@dataclass(frozen=True)
class OKPConfig:
    curve: EllipticCurve
    public_key: bytes


PrimitiveConfig = Union[EC2Config, RSAConfig, OKPConfig]


def _curve_id(crv: int) -> EllipticCurve:
    try:
        return EllipticCurve(crv)
    except ValueError:
        raise UnsupportedCurve(f"Missing or unknown crv {crv}") from None


def hash_for_algorithm(alg: Algorithm) -> hashes.HashAlgorithm:
    """Hash implied by a signature algorithm. EdDSA has none and raises."""
    try:
        return _HASHES[alg]()
    except KeyError:
        raise UnsupportedAlgorithmForKeyType(f"No hash defined for alg {alg!r}") from None


def curve_for(alg: Algorithm, crv: int) -> ec.EllipticCurve:
    """Named curve for an EC2 (alg, crv) pair."""
    if alg not in _EC2_CURVES:
        raise UnsupportedAlgorithmForKeyType(f"Missing or unknown alg {alg!r} for EC2 key")
    permitted, named = _EC2_CURVES[alg]
    curve = _curve_id(crv)
    if curve not in permitted:
        raise UnsupportedCurve(f"Missing or unknown crv {curve!r} for alg {alg!r}")
    return named()


def padding_for_algorithm(alg: Algorithm) -> str:
    try:
        return _RSA_PADDING[alg]
    except KeyError:
        raise UnsupportedAlgorithmForKeyType(f"Missing or unknown alg {alg!r} for RSA key") from None


def okp_curve_for(alg: Algorithm, crv: int) -> EllipticCurve:
    if alg not in _OKP_CURVES:
        raise UnsupportedAlgorithmForKeyType(f"Missing or unknown alg {alg!r} for OKP key")
    curve = _curve_id(crv)
    if curve not in _OKP_CURVES[alg]:
        raise UnsupportedCurve(f"Missing or unknown crv {curve!r} for alg {alg!r}")
    return curve


def resolve_parameters(
    key_type: KeyType, alg: Algorithm, parameters: Mapping[int, object]
) -> PrimitiveConfig:
    """Derive the primitive configuration from raw record fields.

    `parameters` must already carry the labels required by `key_type`;
    the record validates that at construction.
    """
    try:
        if key_type == KeyType.EC2:
            curve = curve_for(alg, parameters[KeyTypeParameter.CRV])
            return EC2Config(
                curve=curve,
                hash_algorithm=hash_for_algorithm(alg),
                x=parameters[KeyTypeParameter.X],
                y=parameters[KeyTypeParameter.Y],
            )
        if key_type == KeyType.RSA:
            return RSAConfig(
                padding_scheme=padding_for_algorithm(alg),
                hash_algorithm=hash_for_algorithm(alg),
                n=parameters[KeyTypeParameter.N],
                e=parameters[KeyTypeParameter.E],
            )
        if key_type == KeyType.OKP:
            return OKPConfig(
                curve=okp_curve_for(alg, parameters[KeyTypeParameter.CRV]),
                public_key=parameters[KeyTypeParameter.X],
            )
    except (UnsupportedAlgorithmForKeyType, UnsupportedCurve) as exc:
        log.warning(f"RESOLVE FAILED kty={key_type!r} alg={alg!r}: {exc}")
        raise

    raise UnsupportedKeyType(f"Missing or unknown kty {key_type!r}")


def resolve(record) -> PrimitiveConfig:
    """Resolve a CredentialPublicKey (or anything exposing key_type/algorithm/parameters)."""
    return resolve_parameters(record.key_type, record.algorithm, record.parameters)
