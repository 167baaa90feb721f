"""DER encoding of composite signature values."""

from __future__ import annotations

from dataclasses import dataclass

from qubitcrypt.base import InvalidSignature

_TAG_SEQUENCE = 0x30
_TAG_BIT_STRING = 0x03


def _encode_length(length: int) -> bytes:
    if length < 0x80:
        return bytes([length])
    encoded = length.to_bytes((length.bit_length() + 7) // 8, "big")
    return bytes([0x80 | len(encoded)]) + encoded


def _encode_tlv(tag: int, content: bytes) -> bytes:
    return bytes([tag]) + _encode_length(len(content)) + content


def _read_tlv(data: bytes, offset: int) -> tuple[int, bytes, int]:
    """Read one tag-length-value item; return ``(tag, content, next_offset)``."""
    if offset + 2 > len(data):
        raise InvalidSignature("truncated DER item")
    tag = data[offset]
    first = data[offset + 1]
    offset += 2
    if first < 0x80:
        length = first
    else:
        count = first & 0x7F
        if count == 0 or count > 4 or offset + count > len(data):
            raise InvalidSignature("unsupported DER length")
        length = int.from_bytes(data[offset:offset + count], "big")
        if length < 0x80 or data[offset] == 0:
            raise InvalidSignature("non-minimal DER length")
        offset += count
    end = offset + length
    if end > len(data):
        raise InvalidSignature("DER content runs past the end of the data")
    return tag, data[offset:end], end


def _decode_bit_string(content: bytes) -> bytes:
    if not content:
        raise InvalidSignature("empty BIT STRING")
    if content[0] != 0:
        raise InvalidSignature("BIT STRING with unused bits")
    return content[1:]


@dataclass(frozen=True)
class CompositeSignatureValue:
    """A pair of signatures: ``SEQUENCE { pqSig BIT STRING, tradSig BIT STRING }``."""

    pq_sig: bytes
    trad_sig: bytes

    def to_der(self) -> bytes:
        """Encode the value as DER."""
        body = _encode_tlv(_TAG_BIT_STRING, b"\x00" + bytes(self.pq_sig)) + _encode_tlv(
            _TAG_BIT_STRING, b"\x00" + bytes(self.trad_sig)
        )
        return _encode_tlv(_TAG_SEQUENCE, body)

    @classmethod
    def from_der(cls, data: bytes) -> CompositeSignatureValue:
        """Decode a DER-encoded composite signature value."""
        data = bytes(data)
        tag, body, end = _read_tlv(data, 0)
        if tag != _TAG_SEQUENCE:
            raise InvalidSignature("composite signature must be a SEQUENCE")
        if end != len(data):
            raise InvalidSignature("trailing data after composite signature")
        parts = []
        offset = 0
        while offset < len(body):
            tag, content, offset = _read_tlv(body, offset)
            if tag != _TAG_BIT_STRING:
                raise InvalidSignature("composite signature component must be a BIT STRING")
            parts.append(_decode_bit_string(content))
        if len(parts) != 2:
            raise InvalidSignature("composite signature must hold exactly two components")
        return cls(pq_sig=parts[0], trad_sig=parts[1])