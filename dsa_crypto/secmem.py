# Copyright (c) 2026 Signer — MIT License

"""Secret memory handling for private numbers and nonces (libsodium-backed).

sodium_memzero:  Compiler-resistant secure zeroing.
sodium_mlock:    Locks pages to prevent swapping secrets to disk.
sodium_munlock:  Unlocks + zeros the pages on release.

PyNaCl builds that do not export the sodium memory functions through cffi
still zero buffers via ffi.memmove; page locking is skipped on those builds.

Python integers are immutable and cannot be wiped in place, so secrets that
live longer than a single expression are parked in a locked bytearray and
reconstructed on demand. SecretNumber gives that buffer a scoped lifetime:

    with SecretNumber(k) as nonce:
        sig = sign_with(nonce.value, ...)
    # buffer is zeroed and unlocked here
"""

from nacl._sodium import ffi as _ffi, lib as _lib

_HAS_MEMZERO = hasattr(_lib, "sodium_memzero")
_HAS_MLOCK = hasattr(_lib, "sodium_mlock") and hasattr(_lib, "sodium_munlock")


def _secure_zero(buf):
    """Securely wipe a mutable buffer (bytearray / memoryview)."""
    if not isinstance(buf, (bytearray, memoryview)):
        return
    n = len(buf)
    if n == 0:
        return
    if _HAS_MEMZERO:
        _lib.sodium_memzero(_ffi.from_buffer(buf), n)
    else:
        _ffi.memmove(_ffi.from_buffer(buf), bytes(n), n)


def _mlock(buf):
    """Lock memory pages to prevent swapping to disk."""
    if _HAS_MLOCK and isinstance(buf, (bytearray, memoryview)) and len(buf):
        _lib.sodium_mlock(_ffi.from_buffer(buf), len(buf))


def _munlock(buf):
    """Unlock memory pages (also zeros the region)."""
    if _HAS_MLOCK and isinstance(buf, (bytearray, memoryview)) and len(buf):
        _lib.sodium_munlock(_ffi.from_buffer(buf), len(buf))


class SecretNumber:
    """Non-negative integer held in locked memory, wiped on release."""

    __slots__ = ("_buf",)

    def __init__(self, value):
        if value < 0:
            raise ValueError("secret number must be non-negative")
        size = max(1, (value.bit_length() + 7) // 8)
        self._buf = bytearray(value.to_bytes(size, "big"))
        _mlock(self._buf)

    @property
    def value(self):
        if self._buf is None:
            raise ValueError("secret number has been wiped")
        return int.from_bytes(self._buf, "big")

    @property
    def wiped(self):
        return self._buf is None

    def wipe(self):
        """Zero and unlock the backing buffer. Safe to call twice."""
        buf = self._buf
        if buf is None:
            return
        self._buf = None
        _munlock(buf)
        _secure_zero(buf)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.wipe()
        return False

    def __repr__(self):
        return "SecretNumber(<wiped>)" if self._buf is None else "SecretNumber(<redacted>)"
