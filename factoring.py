# factoring.py
import logging
import math
import time
from typing import Optional

import numpy as np

# ---- Trial division on the mod-30 wheel (64-bit moduli only) ----

log = logging.getLogger(__name__)

INT64_MAX = 2**63 - 1

# Residues coprime to 30; 31 stands in for 1 so that i = 0 never tests 1.
WHEEL = np.array([7, 11, 13, 17, 19, 23, 29, 31], dtype=np.int64)

# Rows of the wheel (values of i) tested per numpy batch.
BLOCK_ROWS = 4096


class FactoringFailed(ValueError):
    """No proper factor was found within the trial-division bound."""


class FactoringTimeout(FactoringFailed):
    """The wall-clock budget for the search ran out."""


def _search_limit(n: int) -> int:
    # largest i with i*i*900 <= n
    return math.isqrt(n // 900)


def factor(n: int, timeout: Optional[float] = None) -> int:
    """
    Return the smallest prime factor of a composite n (4 <= n < 2**63).

    2, 3 and 5 are tried first, then every 30*i + r for r in WHEEL while
    i*i*900 <= n. Raises FactoringFailed when n has no proper factor in that
    range (i.e. n is prime) and FactoringTimeout when `timeout` seconds pass.
    """
    if n < 4 or n > INT64_MAX:
        raise ValueError(f"n must satisfy 4 <= n <= {INT64_MAX}, got {n}")

    for p in (2, 3, 5):
        if n % p == 0 and p < n:
            return p

    deadline = None if timeout is None else time.monotonic() + timeout
    limit = _search_limit(n)
    target = np.int64(n)
    log.debug("wheel search for n=%d over i in [0, %d]", n, limit)

    for start in range(0, limit + 1, BLOCK_ROWS):
        stop = min(start + BLOCK_ROWS, limit + 1)
        rows = np.arange(start, stop, dtype=np.int64)
        # row-major ravel keeps the candidates in increasing order
        candidates = (30 * rows[:, None] + WHEEL).ravel()
        hits = np.flatnonzero((target % candidates == 0) & (candidates < target))
        if hits.size:
            p = int(candidates[hits[0]])
            row = start + int(hits[0]) // len(WHEEL)
            log.debug("found factor %d of n=%d at i=%d", p, n, row)
            return p
        if deadline is not None and time.monotonic() > deadline:
            raise FactoringTimeout(
                f"Factoring of {n} exceeded {timeout}s (searched up to {30 * stop + 1})."
            )

    raise FactoringFailed(f"Factoring of {n} failed: no factor up to sqrt(n) (is n prime?).")


def is_prime(n: int) -> bool:
    """Deterministic primality check on the same wheel."""
    if n < 4:
        return n in (2, 3)
    try:
        factor(n)
    except FactoringFailed:
        return True
    return False
