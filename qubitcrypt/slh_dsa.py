"""SLH-DSA (FIPS 205) stateless hash-based signatures with an empty context string."""

from __future__ import annotations

import hashlib
import hmac
import os
import struct
from dataclasses import dataclass
from typing import Any

from qubitcrypt.base import (
    AlgorithmNotImplemented,
    Dsa,
    InvalidPrivateKey,
    InvalidPublicKey,
    InvalidSignature,
    KeyPairGenerationFailed,
)
from qubitcrypt.dsa_type import DsaType

# Address types
_WOTS_HASH = 0
_WOTS_PK = 1
_TREE = 2
_FORS_TREE = 3
_FORS_ROOTS = 4
_WOTS_PRF = 5
_FORS_PRF = 6

_LG_W = 4
_W = 1 << _LG_W
_HASH_INDEX = [j.to_bytes(4, "big") for j in range(_W)]


@dataclass(frozen=True)
class _Params:
    n: int
    h: int
    d: int
    a: int
    k: int
    m: int
    sha2: bool

    @property
    def hp(self) -> int:
        return self.h // self.d

    @property
    def len1(self) -> int:
        return 8 * self.n // _LG_W

    @property
    def len2(self) -> int:
        return (self.len1 * (_W - 1)).bit_length() - 1 >> 2 if False else (
            ((self.len1 * (_W - 1)).bit_length() - 1) // _LG_W + 1
        )

    @property
    def length(self) -> int:
        return self.len1 + self.len2

    @property
    def pk_len(self) -> int:
        return 2 * self.n

    @property
    def sk_len(self) -> int:
        return 4 * self.n

    @property
    def sig_len(self) -> int:
        return self.n * (1 + self.k * (1 + self.a) + self.h + self.d * self.length)


_PARAMS: dict[DsaType, _Params] = {
    DsaType.SLH_DSA_SHA2_128S: _Params(16, 63, 7, 12, 14, 30, True),
    DsaType.SLH_DSA_SHA2_128F: _Params(16, 66, 22, 6, 33, 34, True),
    DsaType.SLH_DSA_SHA2_192S: _Params(24, 63, 7, 14, 17, 39, True),
    DsaType.SLH_DSA_SHA2_192F: _Params(24, 66, 22, 8, 33, 42, True),
    DsaType.SLH_DSA_SHA2_256S: _Params(32, 64, 8, 14, 22, 47, True),
    DsaType.SLH_DSA_SHA2_256F: _Params(32, 68, 17, 9, 35, 49, True),
    DsaType.SLH_DSA_SHAKE_128S: _Params(16, 63, 7, 12, 14, 30, False),
    DsaType.SLH_DSA_SHAKE_128F: _Params(16, 66, 22, 6, 33, 34, False),
    DsaType.SLH_DSA_SHAKE_192S: _Params(24, 63, 7, 14, 17, 39, False),
    DsaType.SLH_DSA_SHAKE_192F: _Params(24, 66, 22, 8, 33, 42, False),
    DsaType.SLH_DSA_SHAKE_256S: _Params(32, 64, 8, 14, 22, 47, False),
    DsaType.SLH_DSA_SHAKE_256F: _Params(32, 68, 17, 9, 35, 49, False),
}


def _base_2b(data: bytes, b: int, out_len: int) -> list[int]:
    """Split ``data`` into ``out_len`` integers of ``b`` bits, most significant first."""
    value = int.from_bytes(data, "big")
    total = len(data) * 8
    mask = (1 << b) - 1
    return [(value >> (total - (i + 1) * b)) & mask for i in range(out_len)]


# ---------------------------------------------------------------- hashing

class _ShakeHashes:
    """Tweakable hash functions of the SHAKE instances."""

    def __init__(self, n: int, pk_seed: bytes) -> None:
        self._n = n
        self._base = hashlib.shake_256(pk_seed)

    @staticmethod
    def addr(layer: int, tree: int, typ: int, w1: int, w2: int, w3: int) -> bytes:
        return struct.pack(">IIQIIII", layer, 0, tree, typ, w1, w2, w3)

    def f(self, adrs: bytes, data: bytes) -> bytes:
        state = self._base.copy()
        state.update(adrs + data)
        return state.digest(self._n)

    h = f
    t = f
    prf = f


class _Sha2Hashes:
    """Tweakable hash functions of the SHA2 instances, using compressed addresses."""

    def __init__(self, n: int, pk_seed: bytes) -> None:
        self._n = n
        self._f_base = hashlib.sha256(pk_seed + bytes(64 - n))
        if n == 16:
            self._h_base = self._f_base
        else:
            self._h_base = hashlib.sha512(pk_seed + bytes(128 - n))

    @staticmethod
    def addr(layer: int, tree: int, typ: int, w1: int, w2: int, w3: int) -> bytes:
        return struct.pack(">BQBIII", layer, tree, typ, w1, w2, w3)

    def f(self, adrs: bytes, data: bytes) -> bytes:
        state = self._f_base.copy()
        state.update(adrs + data)
        return state.digest()[: self._n]

    def h(self, adrs: bytes, data: bytes) -> bytes:
        state = self._h_base.copy()
        state.update(adrs + data)
        return state.digest()[: self._n]

    t = h
    prf = f


def _message_hash_function(p: _Params):
    return hashlib.sha256 if p.n == 16 else hashlib.sha512


def _mgf1(hash_function, seed: bytes, length: int) -> bytes:
    out = bytearray()
    counter = 0
    while len(out) < length:
        out += hash_function(seed + counter.to_bytes(4, "big")).digest()
        counter += 1
    return bytes(out[:length])


def _h_msg(p: _Params, r: bytes, pk_seed: bytes, pk_root: bytes, msg: bytes) -> bytes:
    if not p.sha2:
        return hashlib.shake_256(r + pk_seed + pk_root + msg).digest(p.m)
    hash_function = _message_hash_function(p)
    inner = hash_function(r + pk_seed + pk_root + msg).digest()
    return _mgf1(hash_function, r + pk_seed + inner, p.m)


def _prf_msg(p: _Params, sk_prf: bytes, opt_rand: bytes, msg: bytes) -> bytes:
    if not p.sha2:
        return hashlib.shake_256(sk_prf + opt_rand + msg).digest(p.n)
    return hmac.new(sk_prf, opt_rand + msg, _message_hash_function(p)).digest()[: p.n]


def _split_digest(p: _Params, digest: bytes) -> tuple[bytes, int, int]:
    md_len = (p.k * p.a + 7) // 8
    tree_bits = p.h - p.hp
    tree_len = (tree_bits + 7) // 8
    leaf_len = (p.hp + 7) // 8
    md = digest[:md_len]
    tree_bytes = digest[md_len:md_len + tree_len]
    leaf_bytes = digest[md_len + tree_len:md_len + tree_len + leaf_len]
    idx_tree = int.from_bytes(tree_bytes, "big") & ((1 << tree_bits) - 1)
    idx_leaf = int.from_bytes(leaf_bytes, "big") & ((1 << p.hp) - 1)
    return md, idx_tree, idx_leaf


# ------------------------------------------------------------- structures

class _Trees:
    """WOTS+, XMSS, hypertree and FORS operations for one key."""

    def __init__(self, p: _Params, pk_seed: bytes, sk_seed: bytes = b"") -> None:
        self.p = p
        self.sk_seed = sk_seed
        self.hs = _Sha2Hashes(p.n, pk_seed) if p.sha2 else _ShakeHashes(p.n, pk_seed)

    # WOTS+

    def _chain(self, x: bytes, start: int, steps: int, layer: int, tree: int, kp: int, i: int) -> bytes:
        if not steps:
            return x
        f = self.hs.f
        head = self.hs.addr(layer, tree, _WOTS_HASH, kp, i, 0)[:-4]
        for j in range(start, start + steps):
            x = f(head + _HASH_INDEX[j], x)
        return x

    def _digits(self, msg: bytes) -> list[int]:
        p = self.p
        digits = _base_2b(msg, _LG_W, p.len1)
        checksum = sum(_W - 1 - digit for digit in digits)
        checksum <<= (8 - (p.len2 * _LG_W) % 8) % 8
        checksum_bytes = checksum.to_bytes((p.len2 * _LG_W + 7) // 8, "big")
        return digits + _base_2b(checksum_bytes, _LG_W, p.len2)

    def _wots_sk(self, layer: int, tree: int, kp: int, i: int) -> bytes:
        return self.hs.prf(self.hs.addr(layer, tree, _WOTS_PRF, kp, i, 0), self.sk_seed)

    def _wots_compress(self, layer: int, tree: int, kp: int, ends: list[bytes]) -> bytes:
        return self.hs.t(self.hs.addr(layer, tree, _WOTS_PK, kp, 0, 0), b"".join(ends))

    def wots_pkgen(self, layer: int, tree: int, kp: int) -> bytes:
        ends = [
            self._chain(self._wots_sk(layer, tree, kp, i), 0, _W - 1, layer, tree, kp, i)
            for i in range(self.p.length)
        ]
        return self._wots_compress(layer, tree, kp, ends)

    def wots_sign(self, msg: bytes, layer: int, tree: int, kp: int) -> bytes:
        return b"".join(
            self._chain(self._wots_sk(layer, tree, kp, i), 0, digit, layer, tree, kp, i)
            for i, digit in enumerate(self._digits(msg))
        )

    def wots_pk_from_sig(self, sig: bytes, msg: bytes, layer: int, tree: int, kp: int) -> bytes:
        n = self.p.n
        ends = [
            self._chain(sig[i * n:(i + 1) * n], digit, _W - 1 - digit, layer, tree, kp, i)
            for i, digit in enumerate(self._digits(msg))
        ]
        return self._wots_compress(layer, tree, kp, ends)

    # XMSS

    def xmss_node(self, i: int, z: int, layer: int, tree: int) -> bytes:
        if z == 0:
            return self.wots_pkgen(layer, tree, i)
        left = self.xmss_node(2 * i, z - 1, layer, tree)
        right = self.xmss_node(2 * i + 1, z - 1, layer, tree)
        return self.hs.h(self.hs.addr(layer, tree, _TREE, 0, z, i), left + right)

    def xmss_sign(self, msg: bytes, idx: int, layer: int, tree: int) -> bytes:
        auth = b"".join(
            self.xmss_node((idx >> j) ^ 1, j, layer, tree) for j in range(self.p.hp)
        )
        return self.wots_sign(msg, layer, tree, idx) + auth

    def xmss_pk_from_sig(self, idx: int, sig: bytes, msg: bytes, layer: int, tree: int) -> bytes:
        n = self.p.n
        wots_len = self.p.length * n
        node = self.wots_pk_from_sig(sig[:wots_len], msg, layer, tree, idx)
        auth = sig[wots_len:]
        for k in range(self.p.hp):
            sibling = auth[k * n:(k + 1) * n]
            adrs = self.hs.addr(layer, tree, _TREE, 0, k + 1, idx >> (k + 1))
            if (idx >> k) & 1:
                node = self.hs.h(adrs, sibling + node)
            else:
                node = self.hs.h(adrs, node + sibling)
        return node

    # Hypertree

    def ht_sign(self, msg: bytes, idx_tree: int, idx_leaf: int) -> bytes:
        p = self.p
        leaf_mask = (1 << p.hp) - 1
        sig = self.xmss_sign(msg, idx_leaf, 0, idx_tree)
        parts = [sig]
        root = self.xmss_pk_from_sig(idx_leaf, sig, msg, 0, idx_tree)
        for layer in range(1, p.d):
            idx_leaf = idx_tree & leaf_mask
            idx_tree >>= p.hp
            sig = self.xmss_sign(root, idx_leaf, layer, idx_tree)
            parts.append(sig)
            if layer < p.d - 1:
                root = self.xmss_pk_from_sig(idx_leaf, sig, root, layer, idx_tree)
        return b"".join(parts)

    def ht_verify(self, msg: bytes, sig: bytes, idx_tree: int, idx_leaf: int, pk_root: bytes) -> bool:
        p = self.p
        leaf_mask = (1 << p.hp) - 1
        xmss_len = (p.length + p.hp) * p.n
        node = self.xmss_pk_from_sig(idx_leaf, sig[:xmss_len], msg, 0, idx_tree)
        for layer in range(1, p.d):
            idx_leaf = idx_tree & leaf_mask
            idx_tree >>= p.hp
            part = sig[layer * xmss_len:(layer + 1) * xmss_len]
            node = self.xmss_pk_from_sig(idx_leaf, part, node, layer, idx_tree)
        return hmac.compare_digest(node, pk_root)

    # FORS

    def _fors_sk(self, idx_tree: int, kp: int, i: int) -> bytes:
        return self.hs.prf(self.hs.addr(0, idx_tree, _FORS_PRF, kp, 0, i), self.sk_seed)

    def _fors_node(self, i: int, z: int, idx_tree: int, kp: int) -> bytes:
        adrs = self.hs.addr(0, idx_tree, _FORS_TREE, kp, z, i)
        if z == 0:
            return self.hs.f(adrs, self._fors_sk(idx_tree, kp, i))
        left = self._fors_node(2 * i, z - 1, idx_tree, kp)
        right = self._fors_node(2 * i + 1, z - 1, idx_tree, kp)
        return self.hs.h(adrs, left + right)

    def fors_sign(self, md: bytes, idx_tree: int, kp: int) -> bytes:
        p = self.p
        parts = []
        for i, index in enumerate(_base_2b(md, p.a, p.k)):
            parts.append(self._fors_sk(idx_tree, kp, (i << p.a) + index))
            parts.extend(
                self._fors_node((i << (p.a - j)) + ((index >> j) ^ 1), j, idx_tree, kp)
                for j in range(p.a)
            )
        return b"".join(parts)

    def fors_pk_from_sig(self, sig: bytes, md: bytes, idx_tree: int, kp: int) -> bytes:
        p = self.p
        n = p.n
        roots = []
        for i, index in enumerate(_base_2b(md, p.a, p.k)):
            offset = i * (p.a + 1) * n
            secret = sig[offset:offset + n]
            auth = sig[offset + n:offset + (p.a + 1) * n]
            leaf = (i << p.a) + index
            node = self.hs.f(self.hs.addr(0, idx_tree, _FORS_TREE, kp, 0, leaf), secret)
            for j in range(p.a):
                sibling = auth[j * n:(j + 1) * n]
                adrs = self.hs.addr(0, idx_tree, _FORS_TREE, kp, j + 1, leaf >> (j + 1))
                if (index >> j) & 1:
                    node = self.hs.h(adrs, sibling + node)
                else:
                    node = self.hs.h(adrs, node + sibling)
            roots.append(node)
        return self.hs.t(self.hs.addr(0, idx_tree, _FORS_ROOTS, kp, 0, 0), b"".join(roots))


# ------------------------------------------------------------- algorithms

def _key_gen_internal(p: _Params, sk_seed: bytes, sk_prf: bytes, pk_seed: bytes) -> tuple[bytes, bytes]:
    root = _Trees(p, pk_seed, sk_seed).xmss_node(0, p.hp, p.d - 1, 0)
    return pk_seed + root, sk_seed + sk_prf + pk_seed + root


def _message_prime(msg: bytes, ctx: bytes = b"") -> bytes:
    return bytes([0, len(ctx)]) + ctx + msg


def _sign_internal(p: _Params, m_prime: bytes, sk: bytes, addrnd: bytes) -> bytes:
    n = p.n
    sk_seed, sk_prf, pk_seed, pk_root = (sk[i * n:(i + 1) * n] for i in range(4))
    r = _prf_msg(p, sk_prf, addrnd, m_prime)
    md, idx_tree, idx_leaf = _split_digest(p, _h_msg(p, r, pk_seed, pk_root, m_prime))
    trees = _Trees(p, pk_seed, sk_seed)
    sig_fors = trees.fors_sign(md, idx_tree, idx_leaf)
    pk_fors = trees.fors_pk_from_sig(sig_fors, md, idx_tree, idx_leaf)
    return r + sig_fors + trees.ht_sign(pk_fors, idx_tree, idx_leaf)


def _verify_internal(p: _Params, m_prime: bytes, sig: bytes, pk: bytes) -> bool:
    n = p.n
    pk_seed, pk_root = pk[:n], pk[n:]
    fors_len = p.k * (p.a + 1) * n
    r = sig[:n]
    sig_fors = sig[n:n + fors_len]
    sig_ht = sig[n + fors_len:]
    md, idx_tree, idx_leaf = _split_digest(p, _h_msg(p, r, pk_seed, pk_root, m_prime))
    trees = _Trees(p, pk_seed)
    pk_fors = trees.fors_pk_from_sig(sig_fors, md, idx_tree, idx_leaf)
    return trees.ht_verify(pk_fors, sig_ht, idx_tree, idx_leaf, pk_root)


# ---------------------------------------------------------------- manager

class SlhDsaManager(Dsa):
    """SLH-DSA with the SHA2 and SHAKE parameter sets, hedged signing and empty context."""

    def _params(self) -> _Params:
        try:
            return _PARAMS[self.dsa_type]
        except KeyError:
            raise AlgorithmNotImplemented(
                f"not an SLH-DSA signature type: {self.dsa_type.name}"
            ) from None

    def key_gen(self) -> tuple[bytes, bytes]:
        params = self._params()
        n = params.n
        seeds = os.urandom(3 * n)
        return _key_gen_internal(params, seeds[:n], seeds[n:2 * n], seeds[2 * n:])

    def key_gen_with_rng(self, rng: Any) -> tuple[bytes, bytes]:
        """Generate a key pair from ``rng``, a ``random.Random``-compatible generator."""
        params = self._params()
        try:
            sk_seed, sk_prf, pk_seed = (bytes(rng.randbytes(params.n)) for _ in range(3))
        except (AttributeError, TypeError, ValueError) as exc:
            raise KeyPairGenerationFailed(str(exc)) from exc
        return _key_gen_internal(params, sk_seed, sk_prf, pk_seed)

    def sign(self, sk: bytes, msg: bytes) -> bytes:
        params = self._params()
        sk = bytes(sk)
        if len(sk) != params.sk_len:
            raise InvalidPrivateKey(f"SLH-DSA private key must be {params.sk_len} bytes")
        return _sign_internal(params, _message_prime(bytes(msg)), sk, os.urandom(params.n))

    def verify(self, pk: bytes, msg: bytes, signature: bytes) -> bool:
        params = self._params()
        pk = bytes(pk)
        signature = bytes(signature)
        if len(pk) != params.pk_len:
            raise InvalidPublicKey(f"SLH-DSA public key must be {params.pk_len} bytes")
        if len(signature) != params.sig_len:
            raise InvalidSignature(f"SLH-DSA signature must be {params.sig_len} bytes")
        return _verify_internal(params, _message_prime(bytes(msg)), signature, pk)

    def get_public_key(self, sk: bytes) -> bytes:
        params = self._params()
        sk = bytes(sk)
        if len(sk) != params.sk_len:
            raise InvalidPrivateKey(f"SLH-DSA private key must be {params.sk_len} bytes")
        return sk[2 * params.n:]