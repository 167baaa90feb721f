"""Digital signature algorithm identifiers and their fixed parameters."""

from __future__ import annotations

from enum import Enum

_RSA_PSS = "1.2.840.113549.1.1.10"
_RSA_PKCS15_SHA256 = "1.2.840.113549.1.1.11"
_RSA_PKCS15_SHA512 = "1.2.840.113549.1.1.13"
_ECDSA_SHA256 = "1.2.840.10045.4.3.2"
_ECDSA_SHA512 = "1.2.840.10045.4.3.4"
_ML_DSA = "2.16.840.1.101.3.4.3."
_COMPOSITE = "2.16.840.1.114027.80.8.1."


class DsaType(Enum):
    """A signature algorithm together with its OID and key/signature sizes.

    Each member carries a label, its OID, and the byte lengths of the public
    key, secret key and signature (``None`` where the length is not fixed).
    """

    # RSA
    RSA2048_PSS_SHA256 = ("rsa2048-pss-sha256", _RSA_PSS, 270, None, 256)
    RSA2048_PKCS15_SHA256 = ("rsa2048-pkcs15-sha256", _RSA_PKCS15_SHA256, 270, None, 256)
    RSA3072_PSS_SHA512 = ("rsa3072-pss-sha512", _RSA_PSS, 398, None, 384)
    RSA3072_PKCS15_SHA512 = ("rsa3072-pkcs15-sha512", _RSA_PKCS15_SHA512, 398, None, 384)

    # ECDSA / EdDSA
    ECDSA_P256_SHA256 = ("ecdsa-p256-sha256", _ECDSA_SHA256, 65, 32, None)
    ECDSA_P256_SHA512 = ("ecdsa-p256-sha512", _ECDSA_SHA512, 65, 32, None)
    ECDSA_P384_SHA512 = ("ecdsa-p384-sha512", _ECDSA_SHA512, 97, 48, None)
    ECDSA_BRAINPOOL_P256R1_SHA512 = ("ecdsa-brainpoolp256r1-sha512", _ECDSA_SHA512, 65, 32, None)
    ECDSA_BRAINPOOL_P256R1_SHA256 = ("ecdsa-brainpoolp256r1-sha256", _ECDSA_SHA256, 65, 32, None)
    ECDSA_BRAINPOOL_P384R1_SHA512 = ("ecdsa-brainpoolp384r1-sha512", _ECDSA_SHA512, 97, 48, None)
    ED25519_SHA512 = ("ed25519-sha512", "1.3.101.112", 32, 32, 64)
    ED448_SHA512 = ("ed448-sha512", "1.3.101.113", 57, 57, 114)

    # ML-DSA
    ML_DSA_44 = ("ml-dsa-44", _ML_DSA + "17", 1312, 2560, 2420)
    ML_DSA_65 = ("ml-dsa-65", _ML_DSA + "18", 1952, 4032, 3309)
    ML_DSA_87 = ("ml-dsa-87", _ML_DSA + "19", 2592, 4896, 4627)

    # Composite: pq + traditional + encoding overhead
    ML_DSA_44_RSA2048_PSS_SHA256 = (
        "ml-dsa-44-rsa2048-pss-sha256", _COMPOSITE + "1",
        1312 + 270 + 14, None, 2420 + 256 + 14,
    )
    ML_DSA_44_RSA2048_PKCS15_SHA256 = (
        "ml-dsa-44-rsa2048-pkcs15-sha256", _COMPOSITE + "2",
        1312 + 270 + 14, None, 2420 + 256 + 14,
    )
    ML_DSA_44_ED25519_SHA512 = (
        "ml-dsa-44-ed25519-sha512", _COMPOSITE + "3",
        1312 + 32 + 12, 2560 + 32 + 24 + 14 + 4, 2420 + 64 + 12,
    )
    ML_DSA_44_ECDSA_P256_SHA256 = (
        "ml-dsa-44-ecdsa-p256-sha256", _COMPOSITE + "4",
        1312 + 65 + 12, 2560 + 32 + 24 + 19 + 4, None,
    )
    ML_DSA_44_ECDSA_BRAINPOOL_P256R1_SHA256 = (
        "ml-dsa-44-ecdsa-brainpoolp256r1-sha256", _COMPOSITE + "5",
        1312 + 65 + 12, 2560 + 32 + 24 + 19 + 4, None,
    )
    ML_DSA_65_RSA3072_PSS_SHA512 = (
        "ml-dsa-65-rsa3072-pss-sha512", _COMPOSITE + "6",
        1952 + 398 + 14, None, 3309 + 384 + 14,
    )
    ML_DSA_65_RSA3072_PKCS15_SHA512 = (
        "ml-dsa-65-rsa3072-pkcs15-sha512", _COMPOSITE + "7",
        1952 + 398 + 14, None, 3309 + 384 + 14,
    )
    ML_DSA_65_ECDSA_P256_SHA512 = (
        "ml-dsa-65-ecdsa-p256-sha512", _COMPOSITE + "8",
        1952 + 65 + 12, 4032 + 32 + 24 + 19 + 4, None,
    )
    ML_DSA_65_ECDSA_BRAINPOOL_P256R1_SHA512 = (
        "ml-dsa-65-ecdsa-brainpoolp256r1-sha512", _COMPOSITE + "9",
        1952 + 65 + 12, 4032 + 32 + 24 + 19 + 4, None,
    )
    ML_DSA_65_ED25519_SHA512 = (
        "ml-dsa-65-ed25519-sha512", _COMPOSITE + "10",
        1952 + 32 + 12, 4032 + 32 + 24 + 14 + 4, 3309 + 64 + 12,
    )
    ML_DSA_87_ECDSA_P384_SHA512 = (
        "ml-dsa-87-ecdsa-p384-sha512", _COMPOSITE + "11",
        2592 + 97 + 12, 4896 + 48 + 24 + 19 + 4, None,
    )
    ML_DSA_87_ECDSA_BRAINPOOL_P384R1_SHA512 = (
        "ml-dsa-87-ecdsa-brainpoolp384r1-sha512", _COMPOSITE + "12",
        2592 + 97 + 12, 4896 + 48 + 24 + 19 + 4, None,
    )
    ML_DSA_87_ED448_SHA512 = (
        "ml-dsa-87-ed448-sha512", _COMPOSITE + "13",
        2592 + 57 + 12, 4896 + 57 + 24 + 14 + 4, 4627 + 114 + 12,
    )

    # SLH-DSA
    SLH_DSA_SHA2_128S = ("slh-dsa-sha2-128s", _ML_DSA + "20", 32, 32 * 2, 7856)
    SLH_DSA_SHA2_128F = ("slh-dsa-sha2-128f", _ML_DSA + "21", 32, 32 * 2, 17088)
    SLH_DSA_SHA2_192S = ("slh-dsa-sha2-192s", _ML_DSA + "22", 48, 48 * 2, 16224)
    SLH_DSA_SHA2_192F = ("slh-dsa-sha2-192f", _ML_DSA + "23", 48, 48 * 2, 35664)
    SLH_DSA_SHA2_256S = ("slh-dsa-sha2-256s", _ML_DSA + "24", 64, 64 * 2, 29792)
    SLH_DSA_SHA2_256F = ("slh-dsa-sha2-256f", _ML_DSA + "25", 64, 64 * 2, 49856)
    SLH_DSA_SHAKE_128S = ("slh-dsa-shake-128s", _ML_DSA + "26", 32, 32 * 2, 7856)
    SLH_DSA_SHAKE_128F = ("slh-dsa-shake-128f", _ML_DSA + "27", 32, 32 * 2, 17088)
    SLH_DSA_SHAKE_192S = ("slh-dsa-shake-192s", _ML_DSA + "28", 48, 48 * 2, 16224)
    SLH_DSA_SHAKE_192F = ("slh-dsa-shake-192f", _ML_DSA + "29", 48, 48 * 2, 35664)
    SLH_DSA_SHAKE_256S = ("slh-dsa-shake-256s", _ML_DSA + "30", 64, 64 * 2, 29792)
    SLH_DSA_SHAKE_256F = ("slh-dsa-shake-256f", _ML_DSA + "31", 64, 64 * 2, 49856)

    def __new__(cls, label, oid, pk_len, sk_len, sig_len):
        member = object.__new__(cls)
        member._value_ = label
        member._oid = oid
        member._pk_len = pk_len
        member._sk_len = sk_len
        member._sig_len = sig_len
        return member

    @classmethod
    def all(cls) -> list[DsaType]:
        """Return every signature type in declaration order."""
        return list(cls)

    @classmethod
    def from_oid(cls, oid: str) -> DsaType | None:
        """Return the first type whose OID equals ``oid``, or ``None``."""
        return next((dsa_type for dsa_type in cls if dsa_type.oid() == oid), None)

    def oid(self) -> str:
        """The dotted OID of this algorithm."""
        return self._oid

    def pk_len(self) -> int | None:
        """Public key length in bytes, or ``None`` if not fixed."""
        return self._pk_len

    def sk_len(self) -> int | None:
        """Secret key length in bytes, or ``None`` if not fixed."""
        return self._sk_len

    def sig_len(self) -> int | None:
        """Signature length in bytes, or ``None`` if not fixed."""
        return self._sig_len

    def is_composite(self) -> bool:
        """True for everything except the pure ML-DSA parameter sets."""
        return self not in (DsaType.ML_DSA_44, DsaType.ML_DSA_65, DsaType.ML_DSA_87)