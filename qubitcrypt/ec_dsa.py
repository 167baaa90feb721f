"""ECDSA and EdDSA signatures."""

from __future__ import annotations

from typing import Any

from cryptography.exceptions import InvalidSignature as _BadSignature
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed448, ed25519

from qubitcrypt.base import (
    AlgorithmNotImplemented,
    Dsa,
    InvalidPrivateKey,
    KeyPairGenerationFailed,
    SignatureFailed,
    SignatureVerificationFailed,
)
from qubitcrypt.dsa_type import DsaType

_P256 = ec.SECP256R1
_P384 = ec.SECP384R1
_BP256 = ec.BrainpoolP256R1
_BP384 = ec.BrainpoolP384R1

_CURVES: dict[DsaType, tuple[type[ec.EllipticCurve], type[hashes.HashAlgorithm]]] = {
    DsaType.ECDSA_P256_SHA256: (_P256, hashes.SHA256),
    DsaType.ECDSA_P256_SHA512: (_P256, hashes.SHA512),
    DsaType.ECDSA_P384_SHA512: (_P384, hashes.SHA512),
    DsaType.ECDSA_BRAINPOOL_P256R1_SHA256: (_BP256, hashes.SHA256),
    DsaType.ECDSA_BRAINPOOL_P256R1_SHA512: (_BP256, hashes.SHA512),
    DsaType.ECDSA_BRAINPOOL_P384R1_SHA512: (_BP384, hashes.SHA512),
}

_CURVE_ORDERS: dict[type[ec.EllipticCurve], int] = {
    _P256: int("FFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551", 16),
    _P384: int(
        "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFC7634D81F4372DDF"
        "581A0DB248B0A77AECEC196ACCC52973",
        16,
    ),
    _BP256: int("A9FB57DBA1EEA9BC3E660A909D838D718C397AA3B561A6F7901E0E82974856A7", 16),
    _BP384: int(
        "8CB91E82A3386D280F5D6F7E50E641DF152F7109ED5456B31F166E6CAC0425A7"
        "CF3AB6AF6B7FC3103B883202E9046565",
        16,
    ),
}

# private key class, public key class, raw key length
_EDWARDS = {
    DsaType.ED25519_SHA512: (ed25519.Ed25519PrivateKey, ed25519.Ed25519PublicKey, 32),
    DsaType.ED448_SHA512: (ed448.Ed448PrivateKey, ed448.Ed448PublicKey, 57),
}

_DECODE_ERRORS = (ValueError, TypeError, UnsupportedAlgorithm)


class EcDsaManager(Dsa):
    """Elliptic-curve signatures.

    ECDSA keys are a big-endian private scalar and an uncompressed public
    point, with DER-encoded signatures; Ed25519 and Ed448 use raw keys.
    """

    def __init__(self, dsa_type: DsaType) -> None:
        if dsa_type not in _CURVES and dsa_type not in _EDWARDS:
            raise AlgorithmNotImplemented(f"not an EC signature type: {dsa_type.name}")
        super().__init__(dsa_type)
        curve_params = _CURVES.get(dsa_type)
        self._curve = curve_params[0]() if curve_params else None
        self._hash = curve_params[1] if curve_params else hashes.SHA512
        self._edwards = _EDWARDS.get(dsa_type)

    def _scalar_len(self) -> int:
        return (self._curve.key_size + 7) // 8

    def _ec_pair(self, key: ec.EllipticCurvePrivateKey) -> tuple[bytes, bytes]:
        sk = key.private_numbers().private_value.to_bytes(self._scalar_len(), "big")
        return self._ec_public(key), sk

    @staticmethod
    def _ec_public(key: ec.EllipticCurvePrivateKey) -> bytes:
        return key.public_key().public_bytes(
            serialization.Encoding.X962, serialization.PublicFormat.UncompressedPoint
        )

    @staticmethod
    def _ed_pair(key: Any) -> tuple[bytes, bytes]:
        sk = key.private_bytes(
            serialization.Encoding.Raw,
            serialization.PrivateFormat.Raw,
            serialization.NoEncryption(),
        )
        return EcDsaManager._ed_public(key), sk

    @staticmethod
    def _ed_public(key: Any) -> bytes:
        return key.public_key().public_bytes(
            serialization.Encoding.Raw, serialization.PublicFormat.Raw
        )

    def _load_ec_private(self, sk: bytes) -> ec.EllipticCurvePrivateKey:
        return ec.derive_private_key(int.from_bytes(bytes(sk), "big"), self._curve)

    def key_gen(self) -> tuple[bytes, bytes]:
        try:
            if self._curve is not None:
                return self._ec_pair(ec.generate_private_key(self._curve))
            return self._ed_pair(self._edwards[0].generate())
        except _DECODE_ERRORS as exc:
            raise KeyPairGenerationFailed(str(exc)) from exc

    def key_gen_with_rng(self, rng: Any) -> tuple[bytes, bytes]:
        """Generate a key pair from ``rng``, a ``random.Random``-compatible generator."""
        try:
            if self._curve is not None:
                order = _CURVE_ORDERS[type(self._curve)]
                scalar = rng.randrange(1, order)
                return self._ec_pair(ec.derive_private_key(scalar, self._curve))
            private_cls, _, key_len = self._edwards
            return self._ed_pair(private_cls.from_private_bytes(rng.randbytes(key_len)))
        except _DECODE_ERRORS as exc:
            raise KeyPairGenerationFailed(str(exc)) from exc

    def sign(self, sk: bytes, msg: bytes) -> bytes:
        try:
            if self._curve is not None:
                key = self._load_ec_private(sk)
                return key.sign(bytes(msg), ec.ECDSA(self._hash()))
            return self._edwards[0].from_private_bytes(bytes(sk)).sign(bytes(msg))
        except _DECODE_ERRORS as exc:
            raise SignatureFailed(str(exc)) from exc

    def verify(self, pk: bytes, msg: bytes, signature: bytes) -> bool:
        try:
            if self._curve is not None:
                public = ec.EllipticCurvePublicKey.from_encoded_point(self._curve, bytes(pk))
                public.verify(bytes(signature), bytes(msg), ec.ECDSA(self._hash()))
            else:
                public = self._edwards[1].from_public_bytes(bytes(pk))
                public.verify(bytes(signature), bytes(msg))
        except _BadSignature:
            return False
        except _DECODE_ERRORS as exc:
            raise SignatureVerificationFailed(str(exc)) from exc
        return True

    def get_public_key(self, sk: bytes) -> bytes:
        try:
            if self._curve is not None:
                return self._ec_public(self._load_ec_private(sk))
            return self._ed_public(self._edwards[0].from_private_bytes(bytes(sk)))
        except _DECODE_ERRORS as exc:
            raise InvalidPrivateKey(str(exc)) from exc