"""
fidokey_core.credential
-----------------------
Defines CredentialPublicKey — the canonical public key record of a
WebAuthn / FIDO2 credential, stored as a COSE key map.

Key features:
- Validated, immutable record (key type, algorithm, key-type parameters)
- CBOR round trip that preserves label order and value types
- Lazily resolved primitive configuration and signature verification
- Import from X.509 certificates
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, BinaryIO, Dict, Mapping, Optional, Union

from cryptography import x509

from . import codec
from .certificate import CertificateKeyAccessor, X509KeyAccessor, import_parameters, load_certificate
from .config import Settings
from .constants import (
    OPTIONAL_COMMON_LABELS,
    Algorithm,
    KeyCommonParameter,
    KeyType,
    KeyTypeParameter,
)
from .crypto import verify_signature
from .errors import MalformedParameters, UnsupportedAlgorithm, UnsupportedKeyType
from .logger import get_logger
from .resolver import PrimitiveConfig, resolve
from .utils import diagnostic, fingerprint

log = get_logger("fidokey.credential")

# Required key-type labels and the value type each must carry
_REQUIRED_LABELS: Dict[KeyType, Dict[int, type]] = {
    KeyType.RSA: {KeyTypeParameter.N: bytes, KeyTypeParameter.E: bytes},
    KeyType.EC2: {KeyTypeParameter.CRV: int, KeyTypeParameter.X: bytes, KeyTypeParameter.Y: bytes},
    KeyType.OKP: {KeyTypeParameter.CRV: int, KeyTypeParameter.X: bytes},
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _plain(value: Any) -> Any:
    # Strip IntEnum / bytearray subclasses so the codec sees plain CBOR types
    if _is_int(value):
        return int(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return value


def _check_parameters(kty: KeyType, parameters: Mapping[int, Any]) -> None:
    required = _REQUIRED_LABELS[kty]
    for label, expected in required.items():
        if label not in parameters:
            raise MalformedParameters(f"{kty.name} key is missing label {int(label)}")
        value = parameters[label]
        ok = _is_int(value) if expected is int else isinstance(value, expected)
        if not ok:
            raise MalformedParameters(
                f"{kty.name} key label {int(label)} must be {expected.__name__}, "
                f"got {type(value).__name__}"
            )
    extra = [
        label for label in parameters
        if label not in required and label not in OPTIONAL_COMMON_LABELS
    ]
    if extra:
        raise MalformedParameters(f"{kty.name} key has unexpected labels {sorted(extra)}")


@dataclass(frozen=True)
class CredentialPublicKey:
    key_type: KeyType
    algorithm: Algorithm
    parameters: Mapping[int, Any]

    def __post_init__(self):
        try:
            kty = KeyType(self.key_type)
        except ValueError:
            raise UnsupportedKeyType(f"Missing or unknown kty {self.key_type}") from None
        try:
            alg = Algorithm(self.algorithm)
        except ValueError:
            raise UnsupportedAlgorithm(f"Missing or unknown alg {self.algorithm}") from None

        if not all(_is_int(label) for label in self.parameters):
            raise MalformedParameters("COSE key labels must be integers")
        params = {int(k): _plain(v) for k, v in self.parameters.items()}
        for label in (KeyCommonParameter.KEY_TYPE, KeyCommonParameter.ALG):
            if label in params:
                raise MalformedParameters(f"Label {int(label)} belongs outside parameters")
        _check_parameters(kty, params)

        object.__setattr__(self, "key_type", kty)
        object.__setattr__(self, "algorithm", alg)
        object.__setattr__(self, "parameters", MappingProxyType(params))

    def __hash__(self):
        return hash((self.key_type, self.algorithm, frozenset(self.parameters.items())))

    # ---------- construction ----------
    @classmethod
    def from_cose(cls, cose: Mapping[int, Any]) -> "CredentialPublicKey":
        """Build from a decoded COSE key map (kty and alg included)."""
        kty = cose.get(KeyCommonParameter.KEY_TYPE)
        alg = cose.get(KeyCommonParameter.ALG)
        if not _is_int(kty):
            raise MalformedParameters("COSE key type (label 1) missing or not an integer")
        if not _is_int(alg):
            raise MalformedParameters("COSE algorithm (label 3) missing or not an integer")
        params = {
            k: v for k, v in cose.items()
            if k not in (KeyCommonParameter.KEY_TYPE, KeyCommonParameter.ALG)
        }
        return cls(key_type=kty, algorithm=alg, parameters=params)

    @classmethod
    def from_bytes(cls, data: bytes) -> "CredentialPublicKey":
        return cls.from_cose(codec.decode(data))

    @classmethod
    def from_stream(cls, fp: BinaryIO) -> "CredentialPublicKey":
        return cls.from_cose(codec.read(fp))

    @classmethod
    def from_certificate(
        cls, accessor: CertificateKeyAccessor, alg: Union[Algorithm, int]
    ) -> "CredentialPublicKey":
        """Build from certificate key material. The algorithm is never inferred."""
        kty, params = import_parameters(accessor)
        key = cls(key_type=kty, algorithm=alg, parameters=params)
        log.debug(f"IMPORTED {key.key_type.name}/{key.algorithm.name} key {key.fingerprint()}")
        return key

    @classmethod
    def from_x509(cls, cert: x509.Certificate, alg: Union[Algorithm, int]) -> "CredentialPublicKey":
        return cls.from_certificate(X509KeyAccessor(cert), alg)

    @classmethod
    def from_pem_certificate(cls, data: bytes, alg: Union[Algorithm, int]) -> "CredentialPublicKey":
        return cls.from_x509(load_certificate(data), alg)

    # ---------- serialization ----------
    @property
    def cose(self) -> Dict[int, Any]:
        """The full COSE key map, kty and alg first."""
        cose = {
            int(KeyCommonParameter.KEY_TYPE): int(self.key_type),
            int(KeyCommonParameter.ALG): int(self.algorithm),
        }
        cose.update(self.parameters)
        return cose

    def to_bytes(self) -> bytes:
        return codec.encode(self.cose)

    def fingerprint(self) -> str:
        return fingerprint(self.to_bytes())

    def __str__(self) -> str:
        return diagnostic(self.cose)

    # ---------- verification ----------
    def algorithm_equals(self, alg: Union[Algorithm, int]) -> bool:
        return self.algorithm == alg

    def resolve(self) -> PrimitiveConfig:
        return resolve(self)

    def verify(self, data: bytes, signature: bytes, settings: Optional[Settings] = None) -> bool:
        """Verify `signature` over `data`.

        Returns False on mismatch; raises CredentialKeyError subclasses when
        the key cannot be resolved or its material is rejected.
        """
        ok = verify_signature(self.resolve(), data, signature, settings)
        log.debug(f"VERIFY {self.algorithm.name} key {self.fingerprint()} -> {ok}")
        return ok
