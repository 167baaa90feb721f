"""RSA signatures with PKCS#1 v1.5 or PSS padding."""

from __future__ import annotations

import math
from typing import Any

from cryptography.exceptions import InvalidSignature as _BadSignature
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from qubitcrypt.base import (
    AlgorithmNotImplemented,
    Dsa,
    InvalidPrivateKey,
    KeyPairGenerationFailed,
    SerializationFailed,
    SignatureFailed,
    SignatureVerificationFailed,
)
from qubitcrypt.dsa_type import DsaType

_PUBLIC_EXPONENT = 65537

# modulus bits, hash, whether PSS padding is used
_PARAMETERS: dict[DsaType, tuple[int, type[hashes.HashAlgorithm], bool]] = {
    DsaType.RSA2048_PKCS15_SHA256: (2048, hashes.SHA256, False),
    DsaType.RSA2048_PSS_SHA256: (2048, hashes.SHA256, True),
    DsaType.RSA3072_PKCS15_SHA512: (3072, hashes.SHA512, False),
    DsaType.RSA3072_PSS_SHA512: (3072, hashes.SHA512, True),
}

_SMALL_PRIMES = tuple(
    p for p in range(3, 2000, 2) if all(p % d for d in range(3, math.isqrt(p) + 1, 2))
)


def _is_probable_prime(n: int, rng: Any, rounds: int = 40) -> bool:
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    for p in _SMALL_PRIMES:
        if n % p == 0:
            return n == p
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for _ in range(rounds):
        x = pow(rng.randrange(2, n - 1), d, n)
        if x in (1, n - 1):
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def _generate_prime(bits: int, rng: Any) -> int:
    while True:
        candidate = rng.getrandbits(bits) | (0b11 << (bits - 2)) | 1
        if math.gcd(_PUBLIC_EXPONENT, candidate - 1) != 1:
            continue
        if _is_probable_prime(candidate, rng):
            return candidate


def _private_key_from_rng(bits: int, rng: Any) -> rsa.RSAPrivateKey:
    half = bits // 2
    p = _generate_prime(bits - half, rng)
    q = _generate_prime(half, rng)
    while q == p:
        q = _generate_prime(half, rng)
    if p < q:
        p, q = q, p
    d = pow(_PUBLIC_EXPONENT, -1, math.lcm(p - 1, q - 1))
    numbers = rsa.RSAPrivateNumbers(
        p=p,
        q=q,
        d=d,
        dmp1=rsa.rsa_crt_dmp1(d, p),
        dmq1=rsa.rsa_crt_dmq1(d, q),
        iqmp=rsa.rsa_crt_iqmp(p, q),
        public_numbers=rsa.RSAPublicNumbers(_PUBLIC_EXPONENT, p * q),
    )
    return numbers.private_key()


def _public_der(key: rsa.RSAPublicKey) -> bytes:
    return key.public_bytes(serialization.Encoding.DER, serialization.PublicFormat.PKCS1)


def _key_pair(key: rsa.RSAPrivateKey) -> tuple[bytes, bytes]:
    sk = key.private_bytes(
        serialization.Encoding.DER,
        serialization.PrivateFormat.TraditionalOpenSSL,
        serialization.NoEncryption(),
    )
    return _public_der(key.public_key()), sk


def _load_private(sk: bytes) -> rsa.RSAPrivateKey | None:
    try:
        key = serialization.load_der_private_key(bytes(sk), None)
    except (ValueError, TypeError, UnsupportedAlgorithm):
        return None
    return key if isinstance(key, rsa.RSAPrivateKey) else None


class RsaDsaManager(Dsa):
    """RSA signing; keys are PKCS#1 DER, PSS uses MGF1 and a digest-length salt."""

    def _parameters(self) -> tuple[int, type[hashes.HashAlgorithm], bool]:
        try:
            return _PARAMETERS[self.dsa_type]
        except KeyError:
            raise AlgorithmNotImplemented(f"not an RSA signature type: {self.dsa_type.name}") from None

    def _padding(self) -> padding.AsymmetricPadding:
        _, hash_cls, pss = self._parameters()
        if pss:
            return padding.PSS(mgf=padding.MGF1(hash_cls()), salt_length=padding.PSS.DIGEST_LENGTH)
        return padding.PKCS1v15()

    def key_gen(self) -> tuple[bytes, bytes]:
        bits, _, _ = self._parameters()
        try:
            key = rsa.generate_private_key(public_exponent=_PUBLIC_EXPONENT, key_size=bits)
        except ValueError as exc:
            raise KeyPairGenerationFailed(str(exc)) from exc
        return _key_pair(key)

    def key_gen_with_rng(self, rng: Any) -> tuple[bytes, bytes]:
        """Generate a key pair from ``rng``, a ``random.Random``-compatible generator."""
        bits, _, _ = self._parameters()
        try:
            key = _private_key_from_rng(bits, rng)
        except ValueError as exc:
            raise KeyPairGenerationFailed(str(exc)) from exc
        return _key_pair(key)

    def sign(self, sk: bytes, msg: bytes) -> bytes:
        key = _load_private(sk)
        if key is None:
            raise SerializationFailed("cannot decode RSA private key")
        _, hash_cls, _ = self._parameters()
        try:
            return key.sign(bytes(msg), self._padding(), hash_cls())
        except (ValueError, TypeError) as exc:
            raise SignatureFailed(str(exc)) from exc

    def verify(self, pk: bytes, msg: bytes, signature: bytes) -> bool:
        try:
            key = serialization.load_der_public_key(bytes(pk))
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise SerializationFailed("cannot decode RSA public key") from exc
        if not isinstance(key, rsa.RSAPublicKey):
            raise SerializationFailed("not an RSA public key")
        _, hash_cls, _ = self._parameters()
        try:
            key.verify(bytes(signature), bytes(msg), self._padding(), hash_cls())
        except _BadSignature:
            return False
        except (ValueError, TypeError) as exc:
            raise SignatureVerificationFailed(str(exc)) from exc
        return True

    def get_public_key(self, sk: bytes) -> bytes:
        key = _load_private(sk)
        if key is None:
            raise InvalidPrivateKey("cannot decode RSA private key")
        return _public_der(key.public_key())