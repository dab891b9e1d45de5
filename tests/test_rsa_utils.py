import math

import pytest

from rsa_utils import (
    ExponentNotInvertible,
    egcd,
    generate_keys,
    modinv,
    modpow,
    rsa_decrypt,
    rsa_encrypt,
)


@pytest.mark.parametrize(
    "a, b",
    [(78157, 2870451096), (17, 3120), (240, 46), (0, 5), (7, 0), (1, 1), (12, 18)],
)
def test_egcd_identity(a, b):
    g, x, y = egcd(a, b)
    assert g == math.gcd(a, b)
    assert a * x + b * y == g


def test_modinv():
    assert modinv(17, 3120) == 2753
    assert modinv(78157, 2870451096) == 755432125


def test_modinv_not_invertible():
    with pytest.raises(ExponentNotInvertible):
        modinv(6, 3120)


def test_modpow_exponent_zero_and_one():
    for m in (1, 2, 7, 3233):
        assert modpow(12345, 0, m) == 1
        assert modpow(12345, 1, m) == 12345 % m


def test_modpow_matches_repeated_multiplication():
    for base in (0, 2, 3, 65, 3232):
        for exp in range(0, 40):
            acc = 1
            for _ in range(exp):
                acc = acc * base % 3233
            assert modpow(base, exp, 3233) == acc


def test_modpow_large_modulus():
    n = 2**63 - 25
    assert modpow(n - 1, 2, n) == 1
    assert modpow(3, 10**12, n) == pow(3, 10**12, n)


def test_modpow_rejects_bad_arguments():
    with pytest.raises(ValueError):
        modpow(2, -1, 7)
    with pytest.raises(ValueError):
        modpow(2, 3, 0)


def test_textbook_example():
    c = rsa_encrypt(65, 3233, 17)
    assert c == 2790
    assert rsa_decrypt(c, 3233, 2753) == 65


def test_rsa_encrypt_range():
    with pytest.raises(ValueError):
        rsa_encrypt(3233, 3233, 17)


def test_generate_keys_is_reproducible():
    a = generate_keys(bits_per_prime=16, seed=7)
    b = generate_keys(bits_per_prime=16, seed=7)
    assert a == b
    assert a.p < a.q
    assert a.n == a.p * a.q
    assert a.d * a.e % ((a.p - 1) * (a.q - 1)) == 1


def test_generate_keys_rejects_tiny_primes():
    with pytest.raises(ValueError):
        generate_keys(bits_per_prime=8)


@pytest.mark.parametrize(
    "bits, e",
    [(4, 3), (3, 3), (7, 3), (32, 65537), (16, 4), (16, 1)],
)
def test_generate_keys_rejects_unusable_arguments(bits, e):
    with pytest.raises(ValueError):
        generate_keys(bits_per_prime=bits, e=e, seed=0)


def test_generate_keys_smallest_prime_size():
    keys = generate_keys(bits_per_prime=8, e=3, seed=0)
    assert 128 <= keys.p < keys.q < 256
    assert keys.d * 3 % ((keys.p - 1) * (keys.q - 1)) == 1


def test_generate_keys_largest_prime_size_fits_63_bits():
    keys = generate_keys(bits_per_prime=31, seed=0)
    assert keys.n <= 2**63 - 1
