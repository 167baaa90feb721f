"""Metadata describing a signature algorithm."""

from __future__ import annotations

from dataclasses import dataclass

from qubitcrypt.dsa_type import DsaType


@dataclass(frozen=True)
class DsaInfo:
    """Key and signature lengths and OID of a signature algorithm."""

    dsa_type: DsaType
    pk_byte_len: int | None
    sk_byte_len: int | None
    sig_byte_len: int | None
    oid: str

    @classmethod
    def from_type(cls, dsa_type: DsaType) -> DsaInfo:
        """Build the metadata for ``dsa_type``."""
        return cls(
            dsa_type=dsa_type,
            pk_byte_len=dsa_type.pk_len(),
            sk_byte_len=dsa_type.sk_len(),
            sig_byte_len=dsa_type.sig_len(),
            oid=dsa_type.oid(),
        )