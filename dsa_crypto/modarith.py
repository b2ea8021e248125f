# Copyright (c) 2026 Signer — MIT License

"""Modular arithmetic over arbitrary-precision integers.

    exp_fast(b, e, m)  -> b^e mod m   (variable time, public operands only)
    exp_safe(b, e, m)  -> b^e mod m   (Montgomery ladder, for secret exponents)
    inverse(a, m)      -> a^-1 mod m  or None when gcd(a, m) != 1

exp_safe is best-effort constant-time in the same sense as the curve code:
the ladder always runs a fixed number of steps (the wider of the modulus and
the exponent), performs one multiply and one square per step, and selects
operands with a branchless XOR-mask swap instead of an if on the exponent
bit. CPython bignum arithmetic itself is not constant-time.
"""

from typing import Optional


def exp_fast(base, exp, modulus):
    """Variable-time modular exponentiation. Never use with secret exponents."""
    return pow(base, exp, modulus)


def _ct_cswap(a, b, swap, mask_all):
    """Constant-time conditional swap of two integers. swap must be 0 or 1."""
    mask = -(swap & 1) & mask_all
    t = mask & (a ^ b)
    return a ^ t, b ^ t


def exp_safe(base, exp, modulus):
    """Side-channel resistant modular exponentiation via Montgomery ladder.

    Invariant at every step: r1 == r0 * base (mod modulus).
    """
    if modulus <= 0:
        raise ValueError("modulus must be positive")
    if exp < 0:
        raise ValueError("exponent must be non-negative")
    if modulus == 1:
        return 0

    nbits = max(modulus.bit_length(), exp.bit_length())
    mask_all = (1 << modulus.bit_length()) - 1

    r0 = 1
    r1 = base % modulus
    for i in range(nbits - 1, -1, -1):
        bit = (exp >> i) & 1
        r0, r1 = _ct_cswap(r0, r1, bit, mask_all)
        r1 = (r0 * r1) % modulus
        r0 = (r0 * r0) % modulus
        r0, r1 = _ct_cswap(r0, r1, bit, mask_all)

    return r0


def inverse(a, modulus) -> Optional[int]:
    """Modular inverse, or None if a is not invertible modulo modulus."""
    try:
        return pow(a, -1, modulus)
    except ValueError:
        return None
