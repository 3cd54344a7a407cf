import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from fidokey_core import (
    Algorithm,
    CredentialPublicKey,
    EllipticCurve,
    KeyType,
    UnsupportedAlgorithmForKeyType,
    UnsupportedCurve,
    UnsupportedKeyType,
)
from fidokey_core.resolver import (
    PKCS1V15,
    PSS,
    EC2Config,
    OKPConfig,
    RSAConfig,
    curve_for,
    hash_for_algorithm,
    padding_for_algorithm,
    resolve,
    resolve_parameters,
)

X = b"\x01" * 32
Y = b"\x02" * 32

EC2_TABLE = {
    (Algorithm.ES256, EllipticCurve.P256): ec.SECP256R1,
    (Algorithm.ES256, EllipticCurve.P256K): ec.SECP256R1,
    (Algorithm.ES384, EllipticCurve.P384): ec.SECP384R1,
    (Algorithm.ES512, EllipticCurve.P521): ec.SECP521R1,
}


def ec2(alg, crv):
    return CredentialPublicKey(KeyType.EC2, alg, {-1: int(crv), -2: X, -3: Y})


@pytest.mark.parametrize("pair,named", EC2_TABLE.items())
def test_ec2_table_resolves_named_curve(pair, named):
    alg, crv = pair
    config = ec2(alg, crv).resolve()
    assert isinstance(config, EC2Config)
    assert isinstance(config.curve, named)
    assert config.x == X and config.y == Y


@pytest.mark.parametrize(
    "alg,crv",
    [
        (alg, crv)
        for alg in (Algorithm.ES256, Algorithm.ES384, Algorithm.ES512)
        for crv in EllipticCurve
        if (alg, crv) not in EC2_TABLE
    ],
)
def test_ec2_pairs_outside_table_fail(alg, crv):
    with pytest.raises(UnsupportedCurve):
        ec2(alg, crv).resolve()


def test_ec2_unknown_curve_id_fails():
    with pytest.raises(UnsupportedCurve):
        curve_for(Algorithm.ES256, 42)


def test_es256_with_p521_is_unsupported_curve():
    with pytest.raises(UnsupportedCurve):
        ec2(Algorithm.ES256, EllipticCurve.P521).resolve()


@pytest.mark.parametrize("alg", [Algorithm.EdDSA, Algorithm.RS256, Algorithm.PS384, Algorithm.RS1])
def test_ec2_with_non_ecdsa_algorithm_fails(alg):
    with pytest.raises(UnsupportedAlgorithmForKeyType):
        ec2(alg, EllipticCurve.P256).resolve()


@pytest.mark.parametrize(
    "alg,scheme,hash_cls",
    [
        (Algorithm.PS256, PSS, hashes.SHA256),
        (Algorithm.PS384, PSS, hashes.SHA384),
        (Algorithm.PS512, PSS, hashes.SHA512),
        (Algorithm.RS1, PKCS1V15, hashes.SHA1),
        (Algorithm.RS256, PKCS1V15, hashes.SHA256),
        (Algorithm.RS384, PKCS1V15, hashes.SHA384),
        (Algorithm.RS512, PKCS1V15, hashes.SHA512),
    ],
)
def test_rsa_padding_and_hash(alg, scheme, hash_cls):
    key = CredentialPublicKey(KeyType.RSA, alg, {-1: b"\xc5" * 256, -2: b"\x01\x00\x01"})
    config = key.resolve()
    assert isinstance(config, RSAConfig)
    assert config.padding_scheme == scheme
    assert isinstance(config.hash_algorithm, hash_cls)
    # hash follows the numeric suffix of the algorithm name
    suffix = alg.name[2:]
    assert config.hash_algorithm.name == ("sha1" if suffix == "1" else f"sha{suffix}")


@pytest.mark.parametrize("alg", [Algorithm.ES256, Algorithm.ES512, Algorithm.EdDSA])
def test_rsa_with_non_rsa_algorithm_fails(alg):
    key = CredentialPublicKey(KeyType.RSA, alg, {-1: b"\xc5" * 256, -2: b"\x01\x00\x01"})
    with pytest.raises(UnsupportedAlgorithmForKeyType):
        key.resolve()


def test_okp_eddsa_ed25519_resolves():
    key = CredentialPublicKey(KeyType.OKP, Algorithm.EdDSA, {-1: 6, -2: X})
    config = key.resolve()
    assert config == OKPConfig(curve=EllipticCurve.Ed25519, public_key=X)


@pytest.mark.parametrize("crv", [c for c in EllipticCurve if c != EllipticCurve.Ed25519])
def test_okp_other_curves_fail(crv):
    key = CredentialPublicKey(KeyType.OKP, Algorithm.EdDSA, {-1: int(crv), -2: X})
    with pytest.raises(UnsupportedCurve):
        key.resolve()


@pytest.mark.parametrize("alg", [a for a in Algorithm if a != Algorithm.EdDSA])
def test_okp_other_algorithms_fail(alg):
    key = CredentialPublicKey(KeyType.OKP, alg, {-1: 6, -2: X})
    with pytest.raises(UnsupportedAlgorithmForKeyType):
        key.resolve()


def test_unknown_key_type_has_no_fallback():
    with pytest.raises(UnsupportedKeyType):
        resolve_parameters(4, Algorithm.ES256, {-1: 1, -2: X, -3: Y})


def test_lookup_helpers_are_closed():
    assert padding_for_algorithm(Algorithm.RS256) == PKCS1V15
    with pytest.raises(UnsupportedAlgorithmForKeyType):
        padding_for_algorithm(Algorithm.ES256)
    with pytest.raises(UnsupportedAlgorithmForKeyType):
        hash_for_algorithm(Algorithm.EdDSA)


def test_resolution_failure_is_logged(caplog):
    with pytest.raises(UnsupportedCurve):
        resolve(ec2(Algorithm.ES384, EllipticCurve.P256))
    assert "RESOLVE FAILED" in caplog.text
