import pytest

from qubitcrypt.base import AlgorithmNotImplemented, InvalidOid
from qubitcrypt.dsa_manager import (
    EC_DSA_TYPES,
    ML_DSA_TYPES,
    RSA_DSA_TYPES,
    SLH_DSA_TYPES,
    create_dsa,
    create_dsa_from_oid,
)
from qubitcrypt.dsa_type import DsaType
from qubitcrypt.ec_dsa import EcDsaManager
from qubitcrypt.ml_dsa import MlDsaManager
from qubitcrypt.rsa_dsa import RsaDsaManager
from qubitcrypt.slh_dsa import SlhDsaManager

_EXPECTED_CLASS = {
    **{t: MlDsaManager for t in ML_DSA_TYPES},
    **{t: RsaDsaManager for t in RSA_DSA_TYPES},
    **{t: EcDsaManager for t in EC_DSA_TYPES},
    **{t: SlhDsaManager for t in SLH_DSA_TYPES},
}

_COMPOSITE = [t for t in DsaType if t not in _EXPECTED_CLASS]


@pytest.mark.parametrize("dsa_type", list(_EXPECTED_CLASS), ids=lambda t: t.name)
def test_manager_created_for_every_supported_type(dsa_type):
    dsa = create_dsa(dsa_type)
    assert type(dsa) is _EXPECTED_CLASS[dsa_type]
    assert dsa.dsa_type == dsa_type


def test_families_cover_all_non_composite_types():
    all_types = DsaType.all()
    assert len(all_types) == 40
    assert len(_EXPECTED_CLASS) == 27
    composite = [t for t in all_types if t not in _EXPECTED_CLASS]
    assert len(composite) == 13
    assert all(t.is_composite() for t in composite)


@pytest.mark.parametrize("dsa_type", _COMPOSITE, ids=lambda t: t.name)
def test_composite_types_have_no_implementation(dsa_type):
    with pytest.raises(AlgorithmNotImplemented):
        create_dsa(dsa_type)


def test_from_oid_ml_dsa_44():
    dsa = create_dsa_from_oid("2.16.840.1.101.3.4.3.17")
    assert isinstance(dsa, MlDsaManager)
    assert dsa.dsa_type == DsaType.ML_DSA_44


def test_from_oid_shared_pss_oid_picks_first_declared():
    dsa = create_dsa_from_oid("1.2.840.113549.1.1.10")
    assert isinstance(dsa, RsaDsaManager)
    assert dsa.dsa_type == DsaType.RSA2048_PSS_SHA256


def test_from_oid_shared_ecdsa_oid_picks_first_declared():
    dsa = create_dsa_from_oid("1.2.840.10045.4.3.4")
    assert isinstance(dsa, EcDsaManager)
    assert dsa.dsa_type == DsaType.ECDSA_P256_SHA512


def test_from_oid_slh_dsa():
    dsa = create_dsa_from_oid("2.16.840.1.101.3.4.3.31")
    assert isinstance(dsa, SlhDsaManager)
    assert dsa.dsa_type == DsaType.SLH_DSA_SHAKE_256F


def test_from_unknown_oid_raises():
    with pytest.raises(InvalidOid):
        create_dsa_from_oid("1.2.3.4")


def test_from_composite_oid_raises_not_implemented():
    with pytest.raises(AlgorithmNotImplemented):
        create_dsa_from_oid("2.16.840.1.114027.80.8.1.1")


def test_created_manager_signs_and_verifies():
    dsa = create_dsa(DsaType.ED25519_SHA512)
    pk, sk = dsa.key_gen()
    assert len(pk) == 32
    msg = b"Hello, world!"
    sig = dsa.sign(sk, msg)
    assert len(sig) == 64
    assert dsa.verify(pk, msg, sig) is True
    assert dsa.verify(pk, b"other message", sig) is False