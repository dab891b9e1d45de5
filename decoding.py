# decoding.py
import enum
import logging
from dataclasses import dataclass
from typing import Optional

from factoring import INT64_MAX, FactoringFailed, factor
from rsa_utils import egcd, modpow

log = logging.getLogger(__name__)


class DecodeError(enum.Enum):
    INVALID_INPUT = "invalid_input"
    FACTORING_FAILED = "factoring_failed"
    EXPONENT_NOT_INVERTIBLE = "exponent_not_invertible"


@dataclass
class DecodeResult:
    n: int
    e: int
    c: int

    p: Optional[int] = None
    q: Optional[int] = None
    phi: Optional[int] = None

    # both set on success, both None otherwise
    d: Optional[int] = None
    m: Optional[int] = None

    error: Optional[DecodeError] = None
    reason: str = ""

    @property
    def aborted(self) -> bool:
        return self.error is not None

    @property
    def ok(self) -> bool:
        return self.error is None


def _check_inputs(n: int, e: int, c: int) -> str:
    if not 4 <= n <= INT64_MAX:
        return f"N must satisfy 4 <= N <= {INT64_MAX}."
    if not 2 <= e <= INT64_MAX:
        return f"e must satisfy 2 <= e <= {INT64_MAX}."
    if not 0 <= c < n:
        return "The cryptogram c must satisfy 0 <= c < N."
    return ""


def decode(n: int, e: int, c: int, timeout: Optional[float] = None) -> DecodeResult:
    """
    Recover the decoding key of a textbook RSA public key (n, e) and decrypt c.

    Failures come back in `error`/`reason` instead of being raised; d and m
    are only filled in when the whole pipeline succeeded.

    Args:
        n: public modulus, product of two primes
        e: public encryption exponent
        c: cryptogram, 0 <= c < n
        timeout: optional wall-clock budget (seconds) for factoring n
    """
    res = DecodeResult(n=n, e=e, c=c)

    problem = _check_inputs(n, e, c)
    if problem:
        return _abort(res, DecodeError.INVALID_INPUT, problem)

    # 1) Factor n
    try:
        p = factor(n, timeout=timeout)
    except FactoringFailed as ex:
        return _abort(res, DecodeError.FACTORING_FAILED, str(ex))
    res.p, res.q = p, n // p
    res.phi = (res.p - 1) * (res.q - 1)
    log.info("factored n=%d: p=%d, q=%d", n, res.p, res.q)

    # 2) Invert e modulo phi(n)
    g, x, _ = egcd(e, res.phi)
    if g != 1:
        return _abort(
            res,
            DecodeError.EXPONENT_NOT_INVERTIBLE,
            f"e and phi(n) are not relatively prime (gcd = {g}).",
        )
    d = (x % res.phi + res.phi) % res.phi

    # 3) Decrypt
    res.d = d
    res.m = modpow(c, d, n)
    log.info("decoding key d=%d, plain text m=%d", res.d, res.m)
    return res


def _abort(res: DecodeResult, error: DecodeError, reason: str) -> DecodeResult:
    log.warning("decode aborted (%s): %s", error.value, reason)
    res.error = error
    res.reason = reason
    return res
