import pytest

from qubitcrypt.algorithm import DsaAlgorithm
from qubitcrypt.dsa_type import DsaType


def test_all_lists_members_in_order():
    assert DsaAlgorithm.all() == list(DsaAlgorithm)


@pytest.mark.parametrize("algorithm", list(DsaAlgorithm))
def test_dsa_type_has_same_name(algorithm):
    dsa_type = algorithm.dsa_type()
    assert dsa_type.name == algorithm.name
    assert dsa_type is DsaType.from_oid(algorithm.oid())


@pytest.mark.parametrize("algorithm", list(DsaAlgorithm))
def test_oid_matches_dsa_type(algorithm):
    assert algorithm.oid() == algorithm.dsa_type().oid()
    assert DsaType.from_oid(algorithm.oid()) is algorithm.dsa_type()


@pytest.mark.parametrize("algorithm", list(DsaAlgorithm))
def test_from_oid_round_trip(algorithm):
    assert DsaAlgorithm.from_oid(algorithm.oid()) is algorithm


def test_from_oid_known_value():
    assert DsaAlgorithm.from_oid("2.16.840.1.101.3.4.3.17") is DsaAlgorithm.ML_DSA_44


def test_from_oid_of_plain_rsa_is_absent():
    assert DsaAlgorithm.from_oid("1.2.840.113549.1.1.10") is None


def test_from_oid_unknown():
    assert DsaAlgorithm.from_oid("") is None


@pytest.mark.parametrize(
    "algorithm",
    [DsaAlgorithm.ML_DSA_44, DsaAlgorithm.ML_DSA_65, DsaAlgorithm.ML_DSA_87],
)
def test_pure_algorithms_are_not_composite(algorithm):
    assert algorithm.is_composite() is False


@pytest.mark.parametrize(
    "algorithm",
    [
        DsaAlgorithm.ML_DSA_44_RSA2048_PSS_SHA256,
        DsaAlgorithm.ML_DSA_87_ED448_SHA512,
        DsaAlgorithm.SLH_DSA_SHAKE_256F,
    ],
)
def test_other_algorithms_are_composite(algorithm):
    assert algorithm.is_composite() is True


@pytest.mark.parametrize("algorithm", list(DsaAlgorithm))
def test_is_composite_agrees_with_dsa_type(algorithm):
    assert algorithm.is_composite() == DsaType.from_oid(algorithm.oid()).is_composite()