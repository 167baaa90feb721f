"""Selection of the signature implementation that handles a given algorithm."""

from __future__ import annotations

from qubitcrypt.base import AlgorithmNotImplemented, Dsa, InvalidOid
from qubitcrypt.dsa_type import DsaType
from qubitcrypt.ec_dsa import EcDsaManager
from qubitcrypt.ml_dsa import MlDsaManager
from qubitcrypt.rsa_dsa import RsaDsaManager
from qubitcrypt.slh_dsa import SlhDsaManager

ML_DSA_TYPES = (DsaType.ML_DSA_44, DsaType.ML_DSA_65, DsaType.ML_DSA_87)

RSA_DSA_TYPES = (
    DsaType.RSA2048_PKCS15_SHA256,
    DsaType.RSA2048_PSS_SHA256,
    DsaType.RSA3072_PKCS15_SHA512,
    DsaType.RSA3072_PSS_SHA512,
)

EC_DSA_TYPES = (
    DsaType.ECDSA_P256_SHA256,
    DsaType.ECDSA_P256_SHA512,
    DsaType.ECDSA_P384_SHA512,
    DsaType.ECDSA_BRAINPOOL_P256R1_SHA512,
    DsaType.ECDSA_BRAINPOOL_P256R1_SHA256,
    DsaType.ECDSA_BRAINPOOL_P384R1_SHA512,
    DsaType.ED25519_SHA512,
    DsaType.ED448_SHA512,
)

SLH_DSA_TYPES = (
    DsaType.SLH_DSA_SHA2_128S,
    DsaType.SLH_DSA_SHA2_128F,
    DsaType.SLH_DSA_SHA2_192S,
    DsaType.SLH_DSA_SHA2_192F,
    DsaType.SLH_DSA_SHA2_256S,
    DsaType.SLH_DSA_SHA2_256F,
    DsaType.SLH_DSA_SHAKE_128S,
    DsaType.SLH_DSA_SHAKE_128F,
    DsaType.SLH_DSA_SHAKE_192S,
    DsaType.SLH_DSA_SHAKE_192F,
    DsaType.SLH_DSA_SHAKE_256S,
    DsaType.SLH_DSA_SHAKE_256F,
)

_FAMILIES: tuple[tuple[tuple[DsaType, ...], type[Dsa]], ...] = (
    (ML_DSA_TYPES, MlDsaManager),
    (RSA_DSA_TYPES, RsaDsaManager),
    (SLH_DSA_TYPES, SlhDsaManager),
    (EC_DSA_TYPES, EcDsaManager),
)


def create_dsa(dsa_type: DsaType) -> Dsa:
    """Return a signature implementation for ``dsa_type``.

    Raises ``AlgorithmNotImplemented`` for types no implementation handles.
    """
    for members, manager_cls in _FAMILIES:
        if dsa_type in members:
            return manager_cls(dsa_type)
    raise AlgorithmNotImplemented(f"no signature implementation for {dsa_type.name}")


def create_dsa_from_oid(oid: str) -> Dsa:
    """Return the implementation for the first signature type whose OID is ``oid``.

    Raises ``InvalidOid`` when no signature type has that OID.
    """
    dsa_type = DsaType.from_oid(oid)
    if dsa_type is None:
        raise InvalidOid(f"unknown signature OID: {oid}")
    return create_dsa(dsa_type)