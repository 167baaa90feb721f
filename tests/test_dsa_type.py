import pytest

from qubitcrypt.dsa_type import DsaType


def test_all_preserves_declaration_order():
    types = DsaType.all()
    assert types[0] is DsaType.RSA2048_PSS_SHA256
    assert types[-1] is DsaType.SLH_DSA_SHAKE_256F
    assert len(types) == 40


@pytest.mark.parametrize(
    "dsa_type, oid",
    [
        (DsaType.ML_DSA_44, "2.16.840.1.101.3.4.3.17"),
        (DsaType.ML_DSA_65, "2.16.840.1.101.3.4.3.18"),
        (DsaType.ML_DSA_87, "2.16.840.1.101.3.4.3.19"),
        (DsaType.ED25519_SHA512, "1.3.101.112"),
        (DsaType.ED448_SHA512, "1.3.101.113"),
        (DsaType.RSA2048_PKCS15_SHA256, "1.2.840.113549.1.1.11"),
        (DsaType.RSA3072_PKCS15_SHA512, "1.2.840.113549.1.1.13"),
        (DsaType.ML_DSA_44_RSA2048_PSS_SHA256, "2.16.840.1.114027.80.8.1.1"),
        (DsaType.ML_DSA_87_ED448_SHA512, "2.16.840.1.114027.80.8.1.13"),
        (DsaType.SLH_DSA_SHA2_128S, "2.16.840.1.101.3.4.3.20"),
        (DsaType.SLH_DSA_SHAKE_256F, "2.16.840.1.101.3.4.3.31"),
    ],
)
def test_oid_values(dsa_type, oid):
    assert dsa_type.oid() == oid


def test_shared_oids():
    assert DsaType.RSA2048_PSS_SHA256.oid() == DsaType.RSA3072_PSS_SHA512.oid()
    assert DsaType.ECDSA_P256_SHA256.oid() == DsaType.ECDSA_BRAINPOOL_P256R1_SHA256.oid()
    assert DsaType.ECDSA_P384_SHA512.oid() == "1.2.840.10045.4.3.4"


def test_from_oid_returns_first_match_for_shared_oid():
    assert DsaType.from_oid("1.2.840.113549.1.1.10") is DsaType.RSA2048_PSS_SHA256
    assert DsaType.from_oid("1.2.840.10045.4.3.2") is DsaType.ECDSA_P256_SHA256
    assert DsaType.from_oid("1.2.840.10045.4.3.4") is DsaType.ECDSA_P256_SHA512


def test_from_oid_round_trip_for_unique_oids():
    for dsa_type in DsaType.all():
        same = [t for t in DsaType.all() if t.oid() == dsa_type.oid()]
        if len(same) == 1:
            assert DsaType.from_oid(dsa_type.oid()) is dsa_type


def test_from_oid_unknown():
    assert DsaType.from_oid("1.2.3.4") is None


def test_ml_dsa_lengths():
    assert (DsaType.ML_DSA_44.pk_len(), DsaType.ML_DSA_44.sk_len(), DsaType.ML_DSA_44.sig_len()) == (
        1312,
        2560,
        2420,
    )
    assert DsaType.ML_DSA_65.pk_len() == 1952
    assert DsaType.ML_DSA_87.sig_len() == 4627


def test_unfixed_lengths_are_none():
    assert DsaType.RSA2048_PSS_SHA256.sk_len() is None
    assert DsaType.ECDSA_P256_SHA256.sig_len() is None
    assert DsaType.ML_DSA_44_ECDSA_P256_SHA256.sig_len() is None
    assert DsaType.ML_DSA_65_RSA3072_PSS_SHA512.sk_len() is None


def test_fixed_traditional_lengths():
    assert DsaType.ED25519_SHA512.pk_len() == 32
    assert DsaType.ED448_SHA512.sig_len() == 114
    assert DsaType.RSA3072_PSS_SHA512.pk_len() == 398


def test_composite_lengths_exceed_pure_component():
    assert DsaType.ML_DSA_44_ED25519_SHA512.pk_len() > DsaType.ML_DSA_44.pk_len()
    assert DsaType.ML_DSA_65_ED25519_SHA512.sig_len() > DsaType.ML_DSA_65.sig_len()
    assert DsaType.ML_DSA_87_ED448_SHA512.sk_len() > DsaType.ML_DSA_87.sk_len()


def test_slh_sha2_and_shake_share_sizes():
    assert DsaType.SLH_DSA_SHA2_128S.sig_len() == DsaType.SLH_DSA_SHAKE_128S.sig_len() == 7856
    assert DsaType.SLH_DSA_SHA2_256F.sig_len() == 49856
    assert DsaType.SLH_DSA_SHA2_192S.sk_len() == 2 * DsaType.SLH_DSA_SHA2_192S.pk_len()


def test_is_composite():
    assert not DsaType.ML_DSA_44.is_composite()
    assert not DsaType.ML_DSA_87.is_composite()
    assert DsaType.ML_DSA_44_ED25519_SHA512.is_composite()
    assert DsaType.RSA2048_PSS_SHA256.is_composite()
    assert sum(not t.is_composite() for t in DsaType.all()) == 3