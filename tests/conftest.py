import datetime

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature
from cryptography.x509.oid import NameOID

from fidokey_core import Algorithm, CredentialPublicKey, EllipticCurve, KeyType
from fidokey_core.utils import field_size, int2bytes, sha512

MESSAGE = b"authenticatorData || SHA-256(clientDataJSON)"


def raw_ecdsa_sign(sk: ec.EllipticCurvePrivateKey, data: bytes, hash_alg) -> bytes:
    r, s = decode_dss_signature(sk.sign(data, ec.ECDSA(hash_alg)))
    size = field_size(sk.curve.key_size)
    return int2bytes(r, size) + int2bytes(s, size)


def ec2_record(sk: ec.EllipticCurvePrivateKey, alg: Algorithm, crv: EllipticCurve) -> CredentialPublicKey:
    pn = sk.public_key().public_numbers()
    size = field_size(sk.curve.key_size)
    return CredentialPublicKey(
        key_type=KeyType.EC2,
        algorithm=alg,
        parameters={-1: int(crv), -2: int2bytes(pn.x, size), -3: int2bytes(pn.y, size)},
    )


def rsa_record(sk: rsa.RSAPrivateKey, alg: Algorithm) -> CredentialPublicKey:
    pn = sk.public_key().public_numbers()
    return CredentialPublicKey(
        key_type=KeyType.RSA,
        algorithm=alg,
        parameters={-1: int2bytes(pn.n), -2: int2bytes(pn.e)},
    )


def okp_record(sk: ed25519.Ed25519PrivateKey, alg=Algorithm.EdDSA, crv=EllipticCurve.Ed25519) -> CredentialPublicKey:
    return CredentialPublicKey(
        key_type=KeyType.OKP,
        algorithm=alg,
        parameters={-1: int(crv), -2: sk.public_key().public_bytes_raw()},
    )


def ed25519_prehash_sign(sk: ed25519.Ed25519PrivateKey, data: bytes) -> bytes:
    return sk.sign(sha512(data))


def self_signed(sk, hash_alg=hashes.SHA256()) -> x509.Certificate:
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "fidokey test")])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(sk.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=30))
        .sign(sk, hash_alg)
    )


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def p256_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def p384_key():
    return ec.generate_private_key(ec.SECP384R1())


@pytest.fixture(scope="session")
def p521_key():
    return ec.generate_private_key(ec.SECP521R1())


@pytest.fixture(scope="session")
def ed_key():
    return ed25519.Ed25519PrivateKey.generate()
