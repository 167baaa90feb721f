"""ML-DSA (FIPS 204) signatures with an empty context string."""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass
from typing import Any, Callable, Iterator

from qubitcrypt.base import (
    AlgorithmNotImplemented,
    Dsa,
    InvalidPrivateKey,
    InvalidPublicKey,
    InvalidSignature,
    KeyPairGenerationFailed,
    SignatureFailed,
)
from qubitcrypt.dsa_type import DsaType

_Q = 8380417
_N = 256
_D = 13
_T1_BITS = 10  # bitlen(q - 1) - d


def _bitrev8(value: int) -> int:
    return int(f"{value:08b}"[::-1], 2)


_ZETAS = [pow(1753, _bitrev8(k), _Q) for k in range(_N)]
_N_INV = pow(_N, -1, _Q)

Poly = list[int]


@dataclass(frozen=True)
class _Params:
    k: int
    l: int
    eta: int
    tau: int
    lam: int
    gamma1: int
    gamma2: int
    omega: int

    @property
    def beta(self) -> int:
        return self.tau * self.eta

    @property
    def eta_bits(self) -> int:
        return (2 * self.eta).bit_length()

    @property
    def z_bits(self) -> int:
        return (2 * self.gamma1 - 1).bit_length()

    @property
    def w1_bits(self) -> int:
        return ((_Q - 1) // (2 * self.gamma2) - 1).bit_length()

    @property
    def c_tilde_len(self) -> int:
        return self.lam // 4

    @property
    def pk_len(self) -> int:
        return 32 + 32 * self.k * _T1_BITS

    @property
    def sk_len(self) -> int:
        return 128 + 32 * (self.k + self.l) * self.eta_bits + 32 * _D * self.k

    @property
    def sig_len(self) -> int:
        return self.c_tilde_len + 32 * self.l * self.z_bits + self.omega + self.k


_PARAMS: dict[DsaType, _Params] = {
    DsaType.ML_DSA_44: _Params(4, 4, 2, 39, 128, 1 << 17, (_Q - 1) // 88, 80),
    DsaType.ML_DSA_65: _Params(6, 5, 4, 49, 192, 1 << 19, (_Q - 1) // 32, 55),
    DsaType.ML_DSA_87: _Params(8, 7, 2, 60, 256, 1 << 19, (_Q - 1) // 32, 75),
}


class _MalformedKey(ValueError):
    """A decoded key component is out of range."""


# ---------------------------------------------------------------- hashing

def _shake256(data: bytes, length: int) -> bytes:
    return hashlib.shake_256(data).digest(length)


def _xof_stream(factory: Callable[[bytes], Any], seed: bytes, start: int) -> Iterator[int]:
    """Yield the output bytes of an extendable-output function one at a time."""
    produced = 0
    length = start
    while True:
        out = factory(seed).digest(length)
        yield from out[produced:]
        produced = length
        length *= 2


# ------------------------------------------------------------ arithmetic

def _mod_pm(value: int, alpha: int) -> int:
    r = value % alpha
    return r - alpha if r > alpha // 2 else r


def _center(poly: Poly) -> Poly:
    return [_mod_pm(c, _Q) for c in poly]


def _ntt(poly: Poly) -> Poly:
    w = [c % _Q for c in poly]
    m = 0
    length = 128
    while length >= 1:
        for start in range(0, _N, 2 * length):
            m += 1
            zeta = _ZETAS[m]
            for j in range(start, start + length):
                t = zeta * w[j + length] % _Q
                w[j + length] = (w[j] - t) % _Q
                w[j] = (w[j] + t) % _Q
        length //= 2
    return w


def _intt(poly: Poly) -> Poly:
    w = list(poly)
    m = _N
    length = 1
    while length < _N:
        for start in range(0, _N, 2 * length):
            m -= 1
            zeta = _Q - _ZETAS[m]
            for j in range(start, start + length):
                t = w[j]
                w[j] = (t + w[j + length]) % _Q
                w[j + length] = zeta * (t - w[j + length]) % _Q
        length *= 2
    return [c * _N_INV % _Q for c in w]


def _pointwise(a: Poly, b: Poly) -> Poly:
    return [x * y % _Q for x, y in zip(a, b)]


def _mat_vec(a_hat: list[list[Poly]], v_hat: list[Poly]) -> list[Poly]:
    result = []
    for row in a_hat:
        acc = [0] * _N
        for a, v in zip(row, v_hat):
            acc = [(s + x * y) % _Q for s, x, y in zip(acc, a, v)]
        result.append(acc)
    return result


def _inf_norm(vector: list[Poly]) -> int:
    return max(abs(c) for poly in vector for c in poly)


def _power2round(value: int) -> tuple[int, int]:
    r_plus = value % _Q
    r0 = _mod_pm(r_plus, 1 << _D)
    return (r_plus - r0) >> _D, r0


def _decompose(value: int, gamma2: int) -> tuple[int, int]:
    r_plus = value % _Q
    r0 = _mod_pm(r_plus, 2 * gamma2)
    if r_plus - r0 == _Q - 1:
        return 0, r0 - 1
    return (r_plus - r0) // (2 * gamma2), r0


def _use_hint(hint: int, value: int, gamma2: int) -> int:
    m = (_Q - 1) // (2 * gamma2)
    r1, r0 = _decompose(value, gamma2)
    if hint:
        return (r1 + 1) % m if r0 > 0 else (r1 - 1) % m
    return r1


# --------------------------------------------------------------- packing

def _pack(coeffs: Poly, bits: int) -> bytes:
    value = 0
    for i, c in enumerate(coeffs):
        value |= c << (i * bits)
    return value.to_bytes(32 * bits, "little")


def _unpack(data: bytes, bits: int) -> Poly:
    value = int.from_bytes(data, "little")
    mask = (1 << bits) - 1
    return [(value >> (i * bits)) & mask for i in range(_N)]


def _bit_pack(coeffs: Poly, a: int, b: int) -> bytes:
    return _pack([b - c for c in coeffs], (a + b).bit_length())


def _bit_unpack(data: bytes, a: int, b: int) -> Poly:
    return [b - x for x in _unpack(data, (a + b).bit_length())]


def _chunks(data: bytes, size: int, count: int) -> list[bytes]:
    return [data[i * size:(i + 1) * size] for i in range(count)]


def _pk_encode(rho: bytes, t1: list[Poly]) -> bytes:
    return rho + b"".join(_pack(poly, _T1_BITS) for poly in t1)


def _pk_decode(pk: bytes, p: _Params) -> tuple[bytes, list[Poly]]:
    size = 32 * _T1_BITS
    return pk[:32], [_unpack(chunk, _T1_BITS) for chunk in _chunks(pk[32:], size, p.k)]


def _sk_encode(rho, key, tr, s1, s2, t0, p: _Params) -> bytes:
    half = 1 << (_D - 1)
    return b"".join(
        [rho, key, tr]
        + [_bit_pack(poly, p.eta, p.eta) for poly in s1]
        + [_bit_pack(poly, p.eta, p.eta) for poly in s2]
        + [_bit_pack(poly, half - 1, half) for poly in t0]
    )


def _sk_decode(sk: bytes, p: _Params):
    rho, key, tr = sk[:32], sk[32:64], sk[64:128]
    eta_size = 32 * p.eta_bits
    offset = 128
    s_polys = [
        _bit_unpack(chunk, p.eta, p.eta)
        for chunk in _chunks(sk[offset:], eta_size, p.l + p.k)
    ]
    if any(abs(c) > p.eta for poly in s_polys for c in poly):
        raise _MalformedKey("secret vector coefficient out of range")
    offset += eta_size * (p.l + p.k)
    half = 1 << (_D - 1)
    t0 = [_bit_unpack(chunk, half - 1, half) for chunk in _chunks(sk[offset:], 32 * _D, p.k)]
    return rho, key, tr, s_polys[:p.l], s_polys[p.l:], t0


def _w1_encode(w1: list[Poly], p: _Params) -> bytes:
    return b"".join(_pack(poly, p.w1_bits) for poly in w1)


def _hint_pack(h: list[Poly], p: _Params) -> bytes:
    positions = bytearray(p.omega)
    counts = bytearray()
    index = 0
    for row in h:
        for j, bit in enumerate(row):
            if bit:
                positions[index] = j
                index += 1
        counts.append(index)
    return bytes(positions) + bytes(counts)


def _hint_unpack(data: bytes, p: _Params) -> list[Poly] | None:
    h = [[0] * _N for _ in range(p.k)]
    index = 0
    for row, end in zip(h, data[p.omega:]):
        if end < index or end > p.omega:
            return None
        first = index
        while index < end:
            if index > first and data[index - 1] >= data[index]:
                return None
            row[data[index]] = 1
            index += 1
    if any(data[index:p.omega]):
        return None
    return h


def _sig_encode(c_tilde: bytes, z: list[Poly], h: list[Poly], p: _Params) -> bytes:
    return (
        c_tilde
        + b"".join(_bit_pack(poly, p.gamma1 - 1, p.gamma1) for poly in z)
        + _hint_pack(h, p)
    )


def _sig_decode(sig: bytes, p: _Params):
    c_tilde = sig[:p.c_tilde_len]
    z_size = 32 * p.z_bits
    z_bytes = sig[p.c_tilde_len:p.c_tilde_len + z_size * p.l]
    z = [_bit_unpack(chunk, p.gamma1 - 1, p.gamma1) for chunk in _chunks(z_bytes, z_size, p.l)]
    h = _hint_unpack(sig[p.c_tilde_len + z_size * p.l:], p)
    return c_tilde, z, h


# -------------------------------------------------------------- sampling

def _rej_ntt_poly(seed: bytes) -> Poly:
    stream = _xof_stream(hashlib.shake_128, seed, 840)
    coeffs: Poly = []
    while len(coeffs) < _N:
        b0, b1, b2 = next(stream), next(stream), next(stream)
        z = ((b2 & 0x7F) << 16) | (b1 << 8) | b0
        if z < _Q:
            coeffs.append(z)
    return coeffs


def _coeff_from_half_byte(b: int, eta: int) -> int | None:
    if eta == 2 and b < 15:
        return 2 - b % 5
    if eta == 4 and b < 9:
        return 4 - b
    return None


def _rej_bounded_poly(seed: bytes, eta: int) -> Poly:
    coeffs: Poly = []
    for byte in _xof_stream(hashlib.shake_256, seed, 272):
        for half in (byte & 0x0F, byte >> 4):
            value = _coeff_from_half_byte(half, eta)
            if value is not None:
                coeffs.append(value)
                if len(coeffs) == _N:
                    return coeffs
    raise AssertionError("unreachable")


def _expand_a(rho: bytes, p: _Params) -> list[list[Poly]]:
    return [
        [_rej_ntt_poly(rho + bytes([s, r])) for s in range(p.l)]
        for r in range(p.k)
    ]


def _expand_s(rho_prime: bytes, p: _Params) -> tuple[list[Poly], list[Poly]]:
    polys = [
        _rej_bounded_poly(rho_prime + r.to_bytes(2, "little"), p.eta)
        for r in range(p.l + p.k)
    ]
    return polys[:p.l], polys[p.l:]


def _expand_mask(rho: bytes, kappa: int, p: _Params) -> list[Poly]:
    return [
        _bit_unpack(
            _shake256(rho + (kappa + r).to_bytes(2, "little"), 32 * p.z_bits),
            p.gamma1 - 1,
            p.gamma1,
        )
        for r in range(p.l)
    ]


def _sample_in_ball(seed: bytes, tau: int) -> Poly:
    stream = _xof_stream(hashlib.shake_256, seed, 136)
    signs = int.from_bytes(bytes(next(stream) for _ in range(8)), "little")
    c = [0] * _N
    for i in range(_N - tau, _N):
        j = next(stream)
        while j > i:
            j = next(stream)
        c[i] = c[j]
        c[j] = -1 if (signs >> (i + tau - _N)) & 1 else 1
    return c


# ------------------------------------------------------------- algorithms

def _public_from_seed(rho: bytes, s1: list[Poly], s2: list[Poly], p: _Params):
    a_hat = _expand_a(rho, p)
    as1 = _mat_vec(a_hat, [_ntt(poly) for poly in s1])
    t = [
        [(x + y) % _Q for x, y in zip(_intt(poly), s2_poly)]
        for poly, s2_poly in zip(as1, s2)
    ]
    split = [[_power2round(c) for c in poly] for poly in t]
    t1 = [[hi for hi, _ in poly] for poly in split]
    t0 = [[lo for _, lo in poly] for poly in split]
    return _pk_encode(rho, t1), t0


def _key_gen_internal(xi: bytes, p: _Params) -> tuple[bytes, bytes]:
    seed = _shake256(xi + bytes([p.k, p.l]), 128)
    rho, rho_prime, key = seed[:32], seed[32:96], seed[96:]
    s1, s2 = _expand_s(rho_prime, p)
    pk, t0 = _public_from_seed(rho, s1, s2, p)
    tr = _shake256(pk, 64)
    return pk, _sk_encode(rho, key, tr, s1, s2, t0, p)


def _message_prime(msg: bytes, ctx: bytes = b"") -> bytes:
    return bytes([0, len(ctx)]) + ctx + msg


def _sign_internal(sk: bytes, m_prime: bytes, rnd: bytes, p: _Params) -> bytes:
    rho, key, tr, s1, s2, t0 = _sk_decode(sk, p)
    s1_hat = [_ntt(poly) for poly in s1]
    s2_hat = [_ntt(poly) for poly in s2]
    t0_hat = [_ntt(poly) for poly in t0]
    a_hat = _expand_a(rho, p)
    mu = _shake256(tr + m_prime, 64)
    rho_pp = _shake256(key + rnd + mu, 64)
    kappa = 0
    while True:
        y = _expand_mask(rho_pp, kappa, p)
        kappa += p.l
        w = [_center(_intt(poly)) for poly in _mat_vec(a_hat, [_ntt(poly) for poly in y])]
        w1 = [[_decompose(c, p.gamma2)[0] for c in poly] for poly in w]
        c_tilde = _shake256(mu + _w1_encode(w1, p), p.c_tilde_len)
        c_hat = _ntt(_sample_in_ball(c_tilde, p.tau))
        cs1 = [_center(_intt(_pointwise(c_hat, s))) for s in s1_hat]
        cs2 = [_center(_intt(_pointwise(c_hat, s))) for s in s2_hat]
        z = [[_mod_pm(a + b, _Q) for a, b in zip(yp, cp)] for yp, cp in zip(y, cs1)]
        w_minus = [[_mod_pm(a - b, _Q) for a, b in zip(wp, cp)] for wp, cp in zip(w, cs2)]
        r0 = [[_decompose(c, p.gamma2)[1] for c in poly] for poly in w_minus]
        if _inf_norm(z) >= p.gamma1 - p.beta or _inf_norm(r0) >= p.gamma2 - p.beta:
            continue
        ct0 = [_center(_intt(_pointwise(c_hat, t))) for t in t0_hat]
        h = [
            [
                int(_decompose(wc + tc, p.gamma2)[0] != _decompose(wc, p.gamma2)[0])
                for wc, tc in zip(wp, tp)
            ]
            for wp, tp in zip(w_minus, ct0)
        ]
        if _inf_norm(ct0) >= p.gamma2 or sum(map(sum, h)) > p.omega:
            continue
        return _sig_encode(c_tilde, z, h, p)


def _verify_internal(pk: bytes, m_prime: bytes, sig: bytes, p: _Params) -> bool:
    rho, t1 = _pk_decode(pk, p)
    c_tilde, z, h = _sig_decode(sig, p)
    if h is None:
        return False
    a_hat = _expand_a(rho, p)
    tr = _shake256(pk, 64)
    mu = _shake256(tr + m_prime, 64)
    c_hat = _ntt(_sample_in_ball(c_tilde, p.tau))
    az = _mat_vec(a_hat, [_ntt(poly) for poly in z])
    ct1 = [_pointwise(c_hat, _ntt([c << _D for c in poly])) for poly in t1]
    w_approx = [
        _intt([(a - b) % _Q for a, b in zip(az_poly, ct_poly)])
        for az_poly, ct_poly in zip(az, ct1)
    ]
    w1 = [
        [_use_hint(hb, wc, p.gamma2) for hb, wc in zip(h_row, w_poly)]
        for h_row, w_poly in zip(h, w_approx)
    ]
    c_tilde_check = _shake256(mu + _w1_encode(w1, p), p.c_tilde_len)
    return _inf_norm(z) < p.gamma1 - p.beta and c_tilde == c_tilde_check


# ---------------------------------------------------------------- manager

class MlDsaManager(Dsa):
    """ML-DSA-44/65/87 using hedged signing and an empty context."""

    def _params(self) -> _Params:
        try:
            return _PARAMS[self.dsa_type]
        except KeyError:
            raise AlgorithmNotImplemented(
                f"not an ML-DSA signature type: {self.dsa_type.name}"
            ) from None

    def key_gen(self) -> tuple[bytes, bytes]:
        return _key_gen_internal(os.urandom(32), self._params())

    def key_gen_with_rng(self, rng: Any) -> tuple[bytes, bytes]:
        """Generate a key pair from ``rng``, a ``random.Random``-compatible generator."""
        params = self._params()
        try:
            seed = bytes(rng.randbytes(32))
        except (AttributeError, TypeError, ValueError) as exc:
            raise KeyPairGenerationFailed(str(exc)) from exc
        return _key_gen_internal(seed, params)

    def sign(self, sk: bytes, msg: bytes) -> bytes:
        params = self._params()
        sk = bytes(sk)
        if len(sk) != params.sk_len:
            raise InvalidPrivateKey(f"ML-DSA private key must be {params.sk_len} bytes")
        try:
            return _sign_internal(sk, _message_prime(bytes(msg)), os.urandom(32), params)
        except _MalformedKey as exc:
            raise SignatureFailed(str(exc)) from exc

    def verify(self, pk: bytes, msg: bytes, signature: bytes) -> bool:
        params = self._params()
        pk = bytes(pk)
        signature = bytes(signature)
        if len(pk) != params.pk_len:
            raise InvalidPublicKey(f"ML-DSA public key must be {params.pk_len} bytes")
        if len(signature) != params.sig_len:
            raise InvalidSignature(f"ML-DSA signature must be {params.sig_len} bytes")
        return _verify_internal(pk, _message_prime(bytes(msg)), signature, params)

    def get_public_key(self, sk: bytes) -> bytes:
        params = self._params()
        sk = bytes(sk)
        if len(sk) != params.sk_len:
            raise InvalidPrivateKey(f"ML-DSA private key must be {params.sk_len} bytes")
        try:
            rho, _, _, s1, s2, _ = _sk_decode(sk, params)
        except _MalformedKey as exc:
            raise InvalidPrivateKey(str(exc)) from exc
        pk, _ = _public_from_seed(rho, s1, s2, params)
        return pk