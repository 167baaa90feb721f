import random

import pytest

from qubitcrypt.base import AlgorithmNotImplemented, InvalidPrivateKey, SerializationFailed
from qubitcrypt.dsa_type import DsaType
from qubitcrypt.rsa_dsa import RsaDsaManager

MESSAGE = b"Hello, world! \n        This is a test message for the DSA algorithm."

RSA_TYPES = [
    DsaType.RSA2048_PKCS15_SHA256,
    DsaType.RSA2048_PSS_SHA256,
    DsaType.RSA3072_PKCS15_SHA512,
    DsaType.RSA3072_PSS_SHA512,
]


def _check_dsa(dsa):
    pk, sk = dsa.key_gen()
    assert dsa.get_public_key(sk) == pk
    info = dsa.dsa_info()
    if info.pk_byte_len is not None:
        assert len(pk) == info.pk_byte_len
    if info.sk_byte_len is not None:
        assert len(sk) == info.sk_byte_len
    signature = dsa.sign(sk, MESSAGE)
    if info.sig_byte_len is not None:
        assert len(signature) == info.sig_byte_len
    assert dsa.verify(pk, MESSAGE, signature) is True


@pytest.mark.parametrize("dsa_type", RSA_TYPES)
def test_rsa_dsa(dsa_type):
    _check_dsa(RsaDsaManager(dsa_type))


@pytest.fixture(scope="module")
def pss_keys():
    dsa = RsaDsaManager(DsaType.RSA2048_PSS_SHA256)
    return dsa, dsa.key_gen()


def test_tampered_message_fails(pss_keys):
    dsa, (pk, sk) = pss_keys
    signature = dsa.sign(sk, MESSAGE)
    assert dsa.verify(pk, MESSAGE + b"!", signature) is False


def test_tampered_signature_fails(pss_keys):
    dsa, (pk, sk) = pss_keys
    signature = bytearray(dsa.sign(sk, MESSAGE))
    signature[10] ^= 0x01
    assert dsa.verify(pk, MESSAGE, bytes(signature)) is False


def test_key_gen_with_rng_is_deterministic():
    dsa = RsaDsaManager(DsaType.RSA2048_PKCS15_SHA256)
    first = dsa.key_gen_with_rng(random.Random(7))
    second = dsa.key_gen_with_rng(random.Random(7))
    assert first == second
    pk, sk = first
    assert len(pk) == dsa.dsa_info().pk_byte_len
    assert dsa.get_public_key(sk) == pk
    assert dsa.verify(pk, MESSAGE, dsa.sign(sk, MESSAGE)) is True


def test_pkcs15_signature_is_deterministic(pss_keys):
    _, (pk, sk) = pss_keys
    dsa = RsaDsaManager(DsaType.RSA2048_PKCS15_SHA256)
    first = dsa.sign(sk, MESSAGE)
    second = dsa.sign(sk, MESSAGE)
    assert len(first) == 256
    assert first == second
    assert dsa.verify(pk, MESSAGE, first) is True


def test_sign_with_bad_key():
    dsa = RsaDsaManager(DsaType.RSA2048_PSS_SHA256)
    with pytest.raises(SerializationFailed):
        dsa.sign(b"not a key", MESSAGE)


def test_verify_with_bad_key():
    dsa = RsaDsaManager(DsaType.RSA2048_PSS_SHA256)
    with pytest.raises(SerializationFailed):
        dsa.verify(b"not a key", MESSAGE, b"\x00" * 256)


def test_get_public_key_with_bad_key():
    dsa = RsaDsaManager(DsaType.RSA2048_PSS_SHA256)
    with pytest.raises(InvalidPrivateKey):
        dsa.get_public_key(b"not a key")


def test_non_rsa_type_key_gen():
    dsa = RsaDsaManager(DsaType.ECDSA_P256_SHA256)
    with pytest.raises(AlgorithmNotImplemented):
        dsa.key_gen()


def test_non_rsa_type_sign(pss_keys):
    _, (_, sk) = pss_keys
    dsa = RsaDsaManager(DsaType.ML_DSA_44)
    with pytest.raises(AlgorithmNotImplemented):
        dsa.sign(sk, MESSAGE)