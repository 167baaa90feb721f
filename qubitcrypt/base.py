"""Errors and the common interface of signature algorithm managers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from qubitcrypt.dsa_info import DsaInfo
from qubitcrypt.dsa_type import DsaType


class QubitCryptError(Exception):
    """Base class for all errors raised by this package."""


class AlgorithmNotImplemented(QubitCryptError, NotImplementedError):
    """The requested algorithm is not supported by this manager."""


class InvalidOid(QubitCryptError, ValueError):
    """No algorithm is known for the given OID."""


class KeyPairGenerationFailed(QubitCryptError):
    """A key pair could not be generated."""


class SignatureFailed(QubitCryptError):
    """A message could not be signed."""


class SignatureVerificationFailed(QubitCryptError):
    """A signature could not be checked."""


class InvalidPrivateKey(QubitCryptError, ValueError):
    """The private key is malformed or has the wrong size."""


class InvalidPublicKey(QubitCryptError, ValueError):
    """The public key is malformed or has the wrong size."""


class InvalidSignature(QubitCryptError, ValueError):
    """The signature is malformed or has the wrong size."""


class SerializationFailed(QubitCryptError):
    """A key could not be encoded or decoded."""


class Dsa(ABC):
    """Common interface of digital signature algorithm managers.

    Keys and signatures are raw ``bytes``; ``key_gen`` returns ``(pk, sk)``.
    """

    def __init__(self, dsa_type: DsaType) -> None:
        self.dsa_type = dsa_type
        self._info = DsaInfo.from_type(dsa_type)

    @classmethod
    def from_oid(cls, oid: str) -> Dsa:
        """Create a manager for the first algorithm whose OID is ``oid``."""
        dsa_type = DsaType.from_oid(oid)
        if dsa_type is None:
            raise InvalidOid(f"unknown signature algorithm OID: {oid}")
        return cls(dsa_type)

    def dsa_info(self) -> DsaInfo:
        """Return metadata such as key and signature lengths."""
        return self._info

    @abstractmethod
    def key_gen(self) -> tuple[bytes, bytes]:
        """Generate a key pair ``(pk, sk)`` with the default randomness source."""

    @abstractmethod
    def key_gen_with_rng(self, rng: Any) -> tuple[bytes, bytes]:
        """Generate a key pair ``(pk, sk)`` using ``rng`` as randomness source."""

    @abstractmethod
    def sign(self, sk: bytes, msg: bytes) -> bytes:
        """Sign ``msg`` with secret key ``sk``."""

    @abstractmethod
    def verify(self, pk: bytes, msg: bytes, signature: bytes) -> bool:
        """Return whether ``signature`` is valid for ``msg`` under ``pk``."""

    @abstractmethod
    def get_public_key(self, sk: bytes) -> bytes:
        """Derive the public key belonging to ``sk``."""