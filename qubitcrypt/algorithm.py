"""Signature algorithms offered to users of the package."""

from __future__ import annotations

from enum import Enum

from qubitcrypt.dsa_type import DsaType


class DsaAlgorithm(Enum):
    """The signature algorithms that may be used for keys and certificates."""

    # ML-DSA
    ML_DSA_44 = DsaType.ML_DSA_44
    ML_DSA_65 = DsaType.ML_DSA_65
    ML_DSA_87 = DsaType.ML_DSA_87

    # Composite
    ML_DSA_44_RSA2048_PSS_SHA256 = DsaType.ML_DSA_44_RSA2048_PSS_SHA256
    ML_DSA_44_RSA2048_PKCS15_SHA256 = DsaType.ML_DSA_44_RSA2048_PKCS15_SHA256
    ML_DSA_44_ED25519_SHA512 = DsaType.ML_DSA_44_ED25519_SHA512
    ML_DSA_44_ECDSA_P256_SHA256 = DsaType.ML_DSA_44_ECDSA_P256_SHA256
    ML_DSA_44_ECDSA_BRAINPOOL_P256R1_SHA256 = DsaType.ML_DSA_44_ECDSA_BRAINPOOL_P256R1_SHA256
    ML_DSA_65_RSA3072_PSS_SHA512 = DsaType.ML_DSA_65_RSA3072_PSS_SHA512
    ML_DSA_65_RSA3072_PKCS15_SHA512 = DsaType.ML_DSA_65_RSA3072_PKCS15_SHA512
    ML_DSA_65_ECDSA_P256_SHA512 = DsaType.ML_DSA_65_ECDSA_P256_SHA512
    ML_DSA_65_ECDSA_BRAINPOOL_P256R1_SHA512 = DsaType.ML_DSA_65_ECDSA_BRAINPOOL_P256R1_SHA512
    ML_DSA_65_ED25519_SHA512 = DsaType.ML_DSA_65_ED25519_SHA512
    ML_DSA_87_ECDSA_P384_SHA512 = DsaType.ML_DSA_87_ECDSA_P384_SHA512
    ML_DSA_87_ECDSA_BRAINPOOL_P384R1_SHA512 = DsaType.ML_DSA_87_ECDSA_BRAINPOOL_P384R1_SHA512
    ML_DSA_87_ED448_SHA512 = DsaType.ML_DSA_87_ED448_SHA512

    # SLH-DSA
    SLH_DSA_SHA2_128S = DsaType.SLH_DSA_SHA2_128S
    SLH_DSA_SHA2_128F = DsaType.SLH_DSA_SHA2_128F
    SLH_DSA_SHA2_192S = DsaType.SLH_DSA_SHA2_192S
    SLH_DSA_SHA2_192F = DsaType.SLH_DSA_SHA2_192F
    SLH_DSA_SHA2_256S = DsaType.SLH_DSA_SHA2_256S
    SLH_DSA_SHA2_256F = DsaType.SLH_DSA_SHA2_256F
    SLH_DSA_SHAKE_128S = DsaType.SLH_DSA_SHAKE_128S
    SLH_DSA_SHAKE_128F = DsaType.SLH_DSA_SHAKE_128F
    SLH_DSA_SHAKE_192S = DsaType.SLH_DSA_SHAKE_192S
    SLH_DSA_SHAKE_192F = DsaType.SLH_DSA_SHAKE_192F
    SLH_DSA_SHAKE_256S = DsaType.SLH_DSA_SHAKE_256S
    SLH_DSA_SHAKE_256F = DsaType.SLH_DSA_SHAKE_256F

    @classmethod
    def all(cls) -> list[DsaAlgorithm]:
        """Return every algorithm in declaration order."""
        return list(cls)

    def dsa_type(self) -> DsaType:
        """The underlying signature type."""
        return self.value

    def is_composite(self) -> bool:
        """True for everything except the pure ML-DSA parameter sets."""
        return self not in (DsaAlgorithm.ML_DSA_44, DsaAlgorithm.ML_DSA_65, DsaAlgorithm.ML_DSA_87)

    def oid(self) -> str:
        """The dotted OID of this algorithm."""
        return self.value.oid()

    @classmethod
    def from_oid(cls, oid: str) -> DsaAlgorithm | None:
        """Return the algorithm whose OID is ``oid``, or ``None``."""
        return next((algorithm for algorithm in cls if algorithm.oid() == oid), None)