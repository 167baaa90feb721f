# qubitcrypt

One interface over classical and post-quantum digital signature algorithms.
Every supported algorithm can generate key pairs, sign messages, verify
signatures and recover a public key from a private key.

Supported families:

- **RSA**: 2048-bit and 3072-bit keys, PKCS#1 v1.5 or PSS padding
  (MGF1 with the same hash, salt as long as the digest). Keys are PKCS#1 DER.
- **ECDSA**: P-256, P-384, brainpoolP256r1 and brainpoolP384r1, with SHA-256
  or SHA-512. The private key is the big-endian scalar, the public key the
  uncompressed point, signatures are DER.
- **EdDSA**: Ed25519 and Ed448, with raw keys.
- **ML-DSA**: ML-DSA-44, ML-DSA-65 and ML-DSA-87 (hedged signing, empty
  context string).
- **SLH-DSA**: the SHA2 and SHAKE variants at 128, 192 and 256 bits, in both
  the small (`s`) and fast (`f`) forms (hedged signing, empty context string).

ML-DSA and SLH-DSA are implemented in pure Python; SLH-DSA in particular is
slow, especially the `s` parameter sets.

## Installation

```
pip install qubitcrypt
```

With the test dependencies:

```
pip install "qubitcrypt[test]"
```

## Usage

### Sign and verify

Get a signer with `create_dsa`, then generate keys, sign and verify. Keys and
signatures are `bytes`; `key_gen` returns `(pk, sk)`.

```python
from qubitcrypt.dsa_manager import create_dsa
from qubitcrypt.dsa_type import DsaType

dsa = create_dsa(DsaType.ML_DSA_44)
pk, sk = dsa.key_gen()

msg = b"Hello, world!"
signature = dsa.sign(sk, msg)
assert dsa.verify(pk, msg, signature)

# The public key can be derived from the private key.
assert dsa.get_public_key(sk) == pk
```

`key_gen_with_rng(rng)` generates a key pair from a
`random.Random`-compatible generator instead of the system's randomness,
which makes key generation reproducible:

```python
import random

pk, sk = create_dsa(DsaType.ED25519_SHA512).key_gen_with_rng(random.Random(1))
```

The signers can also be built directly: `RsaDsaManager`, `EcDsaManager`,
`MlDsaManager` and `SlhDsaManager` (in `qubitcrypt.rsa_dsa`,
`qubitcrypt.ec_dsa`, `qubitcrypt.ml_dsa` and `qubitcrypt.slh_dsa`) all take a
`DsaType`, and all share the abstract base `qubitcrypt.base.Dsa`.

### Choose an algorithm by OID

```python
from qubitcrypt.dsa_manager import create_dsa_from_oid

dsa = create_dsa_from_oid("1.3.101.112")  # Ed25519
```

Some OIDs are shared by several types (for example the RSA-PSS OID); the
first type in declaration order is chosen. `create_dsa_from_oid` raises
`qubitcrypt.base.InvalidOid` if no type has that OID. Each signer class also
has a `from_oid` class method that does the same for its own class.

### Algorithm metadata

Each `DsaType` knows its OID and, where they are fixed, the byte lengths of
its keys and signatures. A length that is not fixed is `None`.

```python
from qubitcrypt.dsa_type import DsaType

t = DsaType.ML_DSA_65
t.oid()           # "2.16.840.1.101.3.4.3.18"
t.pk_len()        # 1952
t.sk_len()        # 4032
t.sig_len()       # 3309
t.is_composite()  # False

DsaType.from_oid("2.16.840.1.101.3.4.3.19")  # DsaType.ML_DSA_87
```

A signer's `dsa_info()` returns the same values as a frozen `DsaInfo`
record (`qubitcrypt.dsa_info`), which can also be built with
`DsaInfo.from_type(dsa_type)`.

`DsaAlgorithm` (`qubitcrypt.algorithm`) lists the ML-DSA, composite and
SLH-DSA algorithms, with `all()`, `dsa_type()`, `oid()`, `is_composite()`
and `from_oid()`.

### Composite signature encoding

`qubitcrypt.composite_signature.CompositeSignatureValue` holds a pair of
signatures (`pq_sig`, `trad_sig`) and converts it to and from its DER form,
`SEQUENCE { BIT STRING, BIT STRING }`:

```python
from qubitcrypt.composite_signature import CompositeSignatureValue

der = CompositeSignatureValue(pq_sig=b"\x01\x02", trad_sig=b"\x03").to_der()
value = CompositeSignatureValue.from_der(der)
```

### Errors

Errors are subclasses of `qubitcrypt.base.QubitCryptError`:

- `AlgorithmNotImplemented`
- `InvalidOid`
- `KeyPairGenerationFailed`
- `SignatureFailed`
- `SignatureVerificationFailed`
- `InvalidPrivateKey`
- `InvalidPublicKey`
- `InvalidSignature`
- `SerializationFailed`

A signature that is well formed but does not match makes `verify` return
`False`. Keys or signatures of the wrong length or format raise one of the
errors above.

## What it does not do

- **No composite signing.** The composite ML-DSA + classical types exist in
  `DsaType` and `DsaAlgorithm` with their OIDs and sizes, and their signature
  values can be encoded with `CompositeSignatureValue`, but no signer handles
  them: `create_dsa` and `create_dsa_from_oid` raise
  `AlgorithmNotImplemented` for them.
- No certificates, key files, PEM/PKCS#8 wrapping or command-line tool; keys
  are plain `bytes` in the formats listed above.