# rsa_utils.py
import math
import secrets
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from factoring import INT64_MAX, is_prime

# ---- Textbook RSA arithmetic (two primes, no padding, 64-bit moduli) ----

MIN_PRIME_BITS = 8
MAX_PRIME_BITS = 31
MAX_KEY_ATTEMPTS = 1000


class ExponentNotInvertible(ValueError):
    """e shares a factor with phi(n), so no decryption exponent exists."""


def egcd(a: int, b: int) -> Tuple[int, int, int]:
    """Extended Euclid: returns (g, x, y) with a*x + b*y == g == gcd(a, b)."""
    if b == 0:
        return a, 1, 0
    g, x, y = egcd(b, a % b)
    return g, y, x - (a // b) * y


def modinv(a: int, m: int) -> int:
    g, x, _ = egcd(a, m)
    if g != 1:
        raise ExponentNotInvertible(
            f"e and phi(n) are not relatively prime (gcd({a}, {m}) = {g})."
        )
    return x % m


def modpow(base: int, exponent: int, modulus: int) -> int:
    """
    base**exponent mod modulus by recursive squaring.

    Every product is reduced, so nothing grows beyond modulus**2.
    exponent == 0 yields 1 for any modulus, including 1.
    """
    if exponent < 0:
        raise ValueError("exponent must be non-negative")
    if modulus < 1:
        raise ValueError("modulus must be >= 1")
    if exponent == 0:
        return 1
    base %= modulus
    rest = modpow(base * base % modulus, exponent // 2, modulus)
    if exponent % 2 == 1:
        rest = rest * base % modulus
    return rest


@dataclass
class RSAKeys:
    n: int
    e: int
    d: int
    p: int
    q: int


def _rng(seed: Optional[int]) -> np.random.Generator:
    if seed is None:
        seed = int.from_bytes(secrets.token_bytes(8), "big")
    return np.random.default_rng(seed)


def _gen_prime(bits: int, rng: np.random.Generator) -> int:
    """Random prime with exactly `bits` bits."""
    while True:
        n = int(rng.integers(0, 1 << bits)) | (1 << (bits - 1)) | 1
        if is_prime(n):
            return n


def generate_keys(bits_per_prime: int = 16, e: int = 65537, seed: Optional[int] = None) -> RSAKeys:
    """
    Generate a toy RSA keypair whose modulus stays within 63 bits.
    bits_per_prime=16 => n ~ 32 bits, factored instantly by the wheel search.
    """
    if not MIN_PRIME_BITS <= bits_per_prime <= MAX_PRIME_BITS:
        raise ValueError(
            f"bits_per_prime must be in [{MIN_PRIME_BITS}, {MAX_PRIME_BITS}], got {bits_per_prime}"
        )
    if e < 3 or e % 2 == 0:
        raise ValueError(f"e must be an odd integer >= 3, got {e}")
    if e >= 1 << (2 * bits_per_prime - 2):
        raise ValueError(f"e={e} is too large for {bits_per_prime}-bit primes")
    rng = _rng(seed)
    for _ in range(MAX_KEY_ATTEMPTS):
        p = _gen_prime(bits_per_prime, rng)
        q = _gen_prime(bits_per_prime, rng)
        if p == q:
            continue
        phi = (p - 1) * (q - 1)
        if e >= phi or math.gcd(e, phi) != 1:
            continue
        n = p * q
        if n > INT64_MAX:
            raise ValueError(f"n={n} does not fit in 63 bits")
        d = modinv(e, phi)
        return RSAKeys(n=n, e=e, d=d, p=min(p, q), q=max(p, q))
    raise ValueError(f"no {bits_per_prime}-bit key found for e={e} after {MAX_KEY_ATTEMPTS} attempts")


def rsa_encrypt(m: int, n: int, e: int) -> int:
    if m < 0 or m >= n:
        raise ValueError("Message integer must satisfy 0 <= m < n")
    return modpow(m, e, n)


def rsa_decrypt(c: int, n: int, d: int) -> int:
    return modpow(c, d, n)
