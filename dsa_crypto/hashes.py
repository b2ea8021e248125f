# Copyright (c) 2026 Signer — MIT License

"""Hash functions usable with DSA.

A fixed set of hashlib algorithms guaranteed to be present on every CPython
build. Each member exposes digest(message) and its output width.
"""

import enum
import hashlib


class HashAlgorithm(enum.Enum):
    SHA1 = "sha1"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    SHA3_224 = "sha3_224"
    SHA3_256 = "sha3_256"
    SHA3_384 = "sha3_384"
    SHA3_512 = "sha3_512"
    BLAKE2B = "blake2b"
    BLAKE2S = "blake2s"

    def digest(self, message):
        return hashlib.new(self.value, bytes(message)).digest()

    @property
    def digest_size(self):
        """Output length in bytes."""
        return hashlib.new(self.value).digest_size

    @property
    def digest_bits(self):
        return self.digest_size * 8


def resolve_hash(hash_alg):
    """Accept a HashAlgorithm member or its hashlib name ("sha256", "SHA-256")."""
    if isinstance(hash_alg, HashAlgorithm):
        return hash_alg
    if isinstance(hash_alg, str):
        name = hash_alg.lower().replace("-", "")
        # hashlib spells SHA3 with an underscore: "sha3_256"
        if name.startswith("sha3") and name[4:] in ("224", "256", "384", "512"):
            name = "sha3_" + name[4:]
        try:
            return HashAlgorithm(name)
        except ValueError:
            pass
    raise ValueError(f"Unsupported hash algorithm: {hash_alg!r}")
