import random

import pytest

from qubitcrypt.base import (
    AlgorithmNotImplemented,
    InvalidPrivateKey,
    InvalidPublicKey,
    InvalidSignature,
)
from qubitcrypt.dsa_type import DsaType
from qubitcrypt.ml_dsa import MlDsaManager

MESSAGE = b"Hello, world! \n        This is a test message for the DSA algorithm."

ML_TYPES = [DsaType.ML_DSA_44, DsaType.ML_DSA_65, DsaType.ML_DSA_87]


def _run_dsa_checks(dsa):
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


def test_ml_dsa_44():
    _run_dsa_checks(MlDsaManager(DsaType.ML_DSA_44))


def test_ml_dsa_65():
    _run_dsa_checks(MlDsaManager(DsaType.ML_DSA_65))


def test_ml_dsa_87():
    _run_dsa_checks(MlDsaManager(DsaType.ML_DSA_87))


@pytest.mark.parametrize(
    "dsa_type, pk_len, sk_len, sig_len",
    [
        (DsaType.ML_DSA_44, 1312, 2560, 2420),
        (DsaType.ML_DSA_65, 1952, 4032, 3309),
        (DsaType.ML_DSA_87, 2592, 4896, 4627),
    ],
)
def test_sizes_match_standard(dsa_type, pk_len, sk_len, sig_len):
    dsa = MlDsaManager(dsa_type)
    pk, sk = dsa.key_gen()
    assert len(pk) == pk_len
    assert len(sk) == sk_len
    assert len(dsa.sign(sk, b"abc")) == sig_len


@pytest.mark.parametrize("dsa_type", ML_TYPES)
def test_tampered_message_is_rejected(dsa_type):
    dsa = MlDsaManager(dsa_type)
    pk, sk = dsa.key_gen()
    signature = dsa.sign(sk, MESSAGE)
    assert dsa.verify(pk, MESSAGE + b"!", signature) is False


def test_tampered_signature_is_rejected():
    dsa = MlDsaManager(DsaType.ML_DSA_44)
    pk, sk = dsa.key_gen()
    signature = bytearray(dsa.sign(sk, MESSAGE))
    signature[100] ^= 0x01
    assert dsa.verify(pk, MESSAGE, bytes(signature)) is False


def test_signature_from_other_key_is_rejected():
    dsa = MlDsaManager(DsaType.ML_DSA_44)
    pk1, _ = dsa.key_gen()
    _, sk2 = dsa.key_gen()
    signature = dsa.sign(sk2, MESSAGE)
    assert dsa.verify(pk1, MESSAGE, signature) is False


def test_malformed_hint_is_rejected():
    dsa = MlDsaManager(DsaType.ML_DSA_44)
    pk, sk = dsa.key_gen()
    signature = bytearray(dsa.sign(sk, MESSAGE))
    # The last k bytes hold hint counts; a count above omega is invalid.
    signature[-1] = 0xFF
    assert dsa.verify(pk, MESSAGE, bytes(signature)) is False


def test_hedged_signatures_differ_but_both_verify():
    dsa = MlDsaManager(DsaType.ML_DSA_44)
    pk, sk = dsa.key_gen()
    first = dsa.sign(sk, MESSAGE)
    second = dsa.sign(sk, MESSAGE)
    assert first != second
    assert dsa.verify(pk, MESSAGE, first) is True
    assert dsa.verify(pk, MESSAGE, second) is True


def test_key_gen_with_rng_is_deterministic():
    dsa = MlDsaManager(DsaType.ML_DSA_44)
    pk1, sk1 = dsa.key_gen_with_rng(random.Random(7))
    pk2, sk2 = dsa.key_gen_with_rng(random.Random(7))
    assert (pk1, sk1) == (pk2, sk2)
    assert dsa.get_public_key(sk1) == pk1
    signature = dsa.sign(sk1, b"seeded")
    assert dsa.verify(pk1, b"seeded", signature) is True


def test_key_gen_with_rng_depends_on_seed():
    dsa = MlDsaManager(DsaType.ML_DSA_65)
    pk1, _ = dsa.key_gen_with_rng(random.Random(1))
    pk2, _ = dsa.key_gen_with_rng(random.Random(2))
    assert pk1 != pk2
    assert len(pk1) == len(pk2) == 1952


def test_sign_rejects_wrong_key_length():
    dsa = MlDsaManager(DsaType.ML_DSA_44)
    with pytest.raises(InvalidPrivateKey):
        dsa.sign(b"\x00" * 10, MESSAGE)


def test_get_public_key_rejects_wrong_key_length():
    dsa = MlDsaManager(DsaType.ML_DSA_65)
    with pytest.raises(InvalidPrivateKey):
        dsa.get_public_key(b"\x00" * 2560)


def test_verify_rejects_wrong_public_key_length():
    dsa = MlDsaManager(DsaType.ML_DSA_44)
    _, sk = dsa.key_gen()
    signature = dsa.sign(sk, MESSAGE)
    with pytest.raises(InvalidPublicKey):
        dsa.verify(b"\x00" * 100, MESSAGE, signature)


def test_verify_rejects_wrong_signature_length():
    dsa = MlDsaManager(DsaType.ML_DSA_44)
    pk, _ = dsa.key_gen()
    with pytest.raises(InvalidSignature):
        dsa.verify(pk, MESSAGE, b"\x00" * 2419)


def test_non_ml_type_is_not_implemented():
    dsa = MlDsaManager(DsaType.ED25519_SHA512)
    with pytest.raises(AlgorithmNotImplemented):
        dsa.key_gen()
    with pytest.raises(AlgorithmNotImplemented):
        dsa.sign(b"\x00" * 32, MESSAGE)


def test_dsa_info_reports_type():
    dsa = MlDsaManager(DsaType.ML_DSA_87)
    info = dsa.dsa_info()
    assert info.dsa_type is DsaType.ML_DSA_87
    assert info.oid == "2.16.840.1.101.3.4.3.19"