# Copyright (c) 2026 Signer — MIT License

"""DSA (FIPS 186) signatures over caller-supplied domain parameters.

    Params(p, g, q)                  domain parameters (not generated here)
    generate_keypair / generate_private / calculate_public
    sign / sign_with / verify        signature primitives

Hashing: HashAlgorithm (SHA-1, SHA-2, SHA-3, BLAKE2), digest truncated to
bitlen(q) per FIPS 186.

Secret memory: PyNaCl (libsodium) locks and wipes nonce buffers.
"""

from .dsa import (
    Params, PublicKey, PrivateKey, KeyPair, Signature,
    PublicNumber, PrivateNumber,
    SIGN_MAX_ATTEMPTS,
    generate_private, calculate_public, generate_keypair,
    sign, sign_with, verify,
    to_public_key, to_private_key,
    dsa_hash, reduce_digest,
)
from .hashes import HashAlgorithm, resolve_hash
from .modarith import exp_fast, exp_safe, inverse
from .secmem import SecretNumber

__all__ = [
    # Domain model
    "Params", "PublicKey", "PrivateKey", "KeyPair", "Signature",
    "PublicNumber", "PrivateNumber",
    # Configuration
    "SIGN_MAX_ATTEMPTS",
    # Keys
    "generate_private", "calculate_public", "generate_keypair",
    "to_public_key", "to_private_key",
    # Signatures
    "sign", "sign_with", "verify",
    # Hash-to-field
    "dsa_hash", "reduce_digest",
    # Collaborators
    "HashAlgorithm", "resolve_hash",
    "exp_fast", "exp_safe", "inverse",
    "SecretNumber",
]
