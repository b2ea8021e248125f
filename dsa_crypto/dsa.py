# Copyright (c) 2026 Signer — MIT License

"""Digital Signature Algorithm (FIPS 186) over caller-supplied parameters.

Domain parameters (p, g, q) are taken as given: q is a prime dividing p - 1
and g generates the order-q subgroup mod p. Nothing here generates or
validates them beyond basic shape checks.

Public API:
    generate_private(params)                  -> x in [1, q-1]
    calculate_public(params, x)               -> y = g^x mod p
    generate_keypair(params)                  -> KeyPair
    sign_with(k, private_key, hash_alg, msg)  -> Signature or None
    sign(private_key, hash_alg, msg)          -> Signature
    verify(hash_alg, public_key, sig, msg)    -> bool

Signing equations:
    r = (g^k mod p) mod q
    s = k^-1 * (H(m) + x*r) mod q
Verification:
    w = s^-1 mod q,  u1 = H(m)*w mod q,  u2 = r*w mod q
    v = ((g^u1 * y^u2) mod p) mod q,  accept iff v == r

H(m) is the leftmost min(N, outlen) bits of the digest, N = bitlen(q).

Secret exponentiations (g^x, g^k) use the Montgomery ladder in modarith.
Nonces live in a locked, wiped-on-exit SecretNumber for the duration of a
signing attempt. sign() verifies its own output before returning it.
"""

import hmac
import logging
import secrets
from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from .hashes import resolve_hash
from .modarith import exp_fast, exp_safe, inverse
from .secmem import SecretNumber

_log = logging.getLogger(__name__)

PublicNumber = int
PrivateNumber = int

# Upper bound on nonce draws in sign(). A degenerate (r or s == 0) attempt
# has probability about 2/q, so this is never reached with sane parameters.
SIGN_MAX_ATTEMPTS = 64


# ── Domain Model ───────────────────────────────────────────────

def _check_positive_int(name, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"DSA {name} must be an int, got {type(value).__name__}")
    if value <= 0:
        raise ValueError(f"DSA {name} must be positive")


@dataclass(frozen=True)
class Params:
    """DSA domain parameters: prime p, generator g, subgroup order q."""

    p: int
    g: int
    q: int

    def __post_init__(self):
        _check_positive_int("p", self.p)
        _check_positive_int("g", self.g)
        _check_positive_int("q", self.q)
        if self.q >= self.p:
            raise ValueError("DSA q must be smaller than p")
        if self.g >= self.p:
            raise ValueError("DSA g must be smaller than p")


class Signature(NamedTuple):
    r: int
    s: int


@dataclass(frozen=True)
class PublicKey:
    params: Params
    y: PublicNumber


@dataclass(frozen=True)
class PrivateKey:
    """Only x is secret; params are shared with the verifying side."""

    params: Params
    x: PrivateNumber = field(repr=False)


@dataclass(frozen=True)
class KeyPair:
    params: Params
    y: PublicNumber
    x: PrivateNumber = field(repr=False)

    def to_public_key(self):
        return PublicKey(self.params, self.y)

    def to_private_key(self):
        return PrivateKey(self.params, self.x)


def to_public_key(keypair):
    """Public half of a key pair (shares the pair's Params object)."""
    return keypair.to_public_key()


def to_private_key(keypair):
    """Private half of a key pair (shares the pair's Params object)."""
    return keypair.to_private_key()


# ── Hash-to-Field Reduction ────────────────────────────────────

def _shift_right(data, nbits):
    """Shift a big-endian byte string right by nbits.

    Whole bytes shifted out fall off the end; the remaining sub-byte shift
    carries the low bits of each byte into the high bits of the next.
    The output is nbits // 8 bytes shorter than the input.
    """
    nbytes, rbits = divmod(nbits, 8)
    kept = data[:len(data) - nbytes]
    if rbits == 0:
        return bytes(kept)

    out = bytearray(len(kept))
    prev = 0
    for i, w in enumerate(kept):
        out[i] = ((prev << (8 - rbits)) & 0xFF) | (w >> rbits)
        prev = w
    return bytes(out)


def reduce_digest(q, digest):
    """Convert a raw digest into the integer H(m) used with modulus q.

    Keeps the leftmost bitlen(q) bits of the digest when it is wider than
    q, otherwise uses the whole digest. The result is not reduced mod q.
    """
    digest = bytes(digest)
    q_bits = q.bit_length()
    excess = len(digest) * 8 - q_bits

    if excess <= 0:
        return int.from_bytes(digest, "big")

    if excess % 8 == 0:
        # digest is whole bytes, so q_bits is byte-aligned here too
        return int.from_bytes(digest[:q_bits // 8], "big")

    return int.from_bytes(_shift_right(digest, excess), "big")


def dsa_hash(q, hash_alg, message):
    """H(m) for modulus q: hash the message, then truncate to bitlen(q)."""
    return reduce_digest(q, resolve_hash(hash_alg).digest(message))


# ── Key Generation ─────────────────────────────────────────────

def generate_private(params, randbelow=None):
    """Draw a private number x uniformly from [1, q-1].

    Args:
        params: DSA domain parameters.
        randbelow: Callable returning a uniform int in [0, bound).
                   Defaults to secrets.randbelow.
    """
    randbelow = randbelow or secrets.randbelow
    return 1 + randbelow(params.q - 1)


def calculate_public(params, x):
    """y = g^x mod p (ladder exponentiation, x is secret)."""
    return exp_safe(params.g, x, params.p)


def generate_keypair(params, randbelow=None):
    """Generate a fresh key pair sharing the given params."""
    x = generate_private(params, randbelow)
    return KeyPair(params, calculate_public(params, x), x)


# ── Signing ────────────────────────────────────────────────────

def sign_with(k, private_key, hash_alg, message) -> Optional[Signature]:
    """Sign with an explicit nonce k.

    Deterministic for a fixed (k, private_key, hash_alg, message).

    Returns:
        Signature, or None when the attempt is degenerate (r == 0 or
        s == 0). Such a pair must never be used; pick another k.

    Raises:
        ValueError: If k has no inverse modulo q (k == 0 mod q, or q is
                    not prime). This is a caller fault, not retried.
    """
    params = private_key.params
    p, g, q = params.p, params.g, params.q

    k_inv = inverse(k, q)
    if k_inv is None:
        raise ValueError("DSA nonce k is not invertible modulo q")

    hm = dsa_hash(q, hash_alg, message)
    r = exp_safe(g, k, p) % q
    s = (k_inv * (hm + private_key.x * r)) % q

    if r == 0 or s == 0:
        return None
    return Signature(r, s)


def sign(private_key, hash_alg, message, randbelow=None,
         max_attempts=SIGN_MAX_ATTEMPTS):
    """Sign a message with a freshly drawn nonce.

    Degenerate attempts are retried with a new nonce, up to max_attempts.

    Fault injection countermeasure: verifies the signature before returning.

    Args:
        private_key: PrivateKey to sign with.
        hash_alg: HashAlgorithm member or hashlib name.
        message: Arbitrary-length message bytes.
        randbelow: Nonce source, see generate_private().
        max_attempts: Bound on nonce draws.

    Returns:
        Signature with 0 < r, s < q.

    Raises:
        RuntimeError: If every attempt was degenerate, or if
                      verify-after-sign detects a fault.
    """
    hash_alg = resolve_hash(hash_alg)
    params = private_key.params

    for attempt in range(max_attempts):
        with SecretNumber(generate_private(params, randbelow)) as k:
            sig = sign_with(k.value, private_key, hash_alg, message)
        if sig is None:
            _log.debug("DSA attempt %d produced a degenerate signature, redrawing k",
                       attempt + 1)
            continue

        # Verify-after-sign (fault injection countermeasure)
        public_key = PublicKey(params, calculate_public(params, private_key.x))
        if not verify(hash_alg, public_key, sig, message):
            raise RuntimeError("DSA verify-after-sign failed (fault detected)")
        return sig

    raise RuntimeError(
        f"DSA signing failed after {max_attempts} degenerate attempts"
    )


# ── Verification ───────────────────────────────────────────────

def verify(hash_alg, public_key, signature, message):
    """Verify a DSA signature.

    Components outside (0, q) are rejected before any arithmetic.

    Returns:
        True if the signature is valid, False otherwise.
    """
    params = public_key.params
    p, g, q = params.p, params.g, params.q
    r, s = signature

    if r <= 0 or r >= q or s <= 0 or s >= q:
        _log.debug("DSA signature rejected: component outside (0, q)")
        return False

    hm = dsa_hash(q, hash_alg, message)
    w = inverse(s, q)
    if w is None:
        raise ValueError("DSA s is not invertible modulo q (q is not prime)")
    u1 = (hm * w) % q
    u2 = (r * w) % q
    v = ((exp_fast(g, u1, p) * exp_fast(public_key.y, u2, p)) % p) % q

    width = (q.bit_length() + 7) // 8
    return hmac.compare_digest(v.to_bytes(width, "big"), r.to_bytes(width, "big"))
