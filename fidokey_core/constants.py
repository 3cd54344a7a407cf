# fidokey_core/constants.py
"""
COSE registry values used by credential public keys.
See https://www.iana.org/assignments/cose/cose.xhtml
"""

from __future__ import annotations
from enum import IntEnum


class KeyType(IntEnum):
    OKP = 1
    EC2 = 2
    RSA = 3


class Algorithm(IntEnum):
    ES256 = -7
    EdDSA = -8
    ES384 = -35
    ES512 = -36
    PS256 = -37
    PS384 = -38
    PS512 = -39
    RS256 = -257
    RS384 = -258
    RS512 = -259
    RS1 = -65535


class EllipticCurve(IntEnum):
    P256 = 1
    P384 = 2
    P521 = 3
    X25519 = 4
    X448 = 5
    Ed25519 = 6
    Ed448 = 7
    P256K = 8


class KeyCommonParameter(IntEnum):
    KEY_TYPE = 1
    KID = 2
    ALG = 3
    KEY_OPS = 4
    BASE_IV = 5


class KeyTypeParameter(IntEnum):
    # EC2 / OKP
    CRV = -1
    X = -2
    Y = -3
    # RSA (labels overlap with the curve labels above)
    N = -1
    E = -2


# Common labels tolerated alongside the key-type labels
OPTIONAL_COMMON_LABELS = frozenset(
    {KeyCommonParameter.KID, KeyCommonParameter.KEY_OPS, KeyCommonParameter.BASE_IV}
)

OID_EC_PUBLIC_KEY = "1.2.840.10045.2.1"
OID_RSA_ENCRYPTION = "1.2.840.113549.1.1.1"

EC_SIGNATURE_ENCODINGS = ("raw", "der")
