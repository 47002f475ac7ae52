"""
Integer arithmetic helpers for the polynomial factorization engine.

Polynomial factoring needs a handful of integer services:

1. Prime selection: Berlekamp-Zassenhaus walks the primes looking for one
   that keeps the polynomial square-free modulo p (iter_primes, is_prime).
2. Divisor enumeration: Kronecker's method needs every divisor of the
   values f(a) at its interpolation points (divisors, factor_integer).
3. Primality of field sizes: PrimeField(p) validates p with is_prime.

Algorithms:
- Miller-Rabin with the deterministic 64-bit base set (memoized)
- Trial division over a NumPy sieve of small primes
- Brent's variant of Pollard Rho for the cofactor left by trial division

All functions are pure; memoization caches can be dropped with clear_caches().
"""
import math
import random
from functools import lru_cache

import numpy as np

# Primes below this bound come from a sieve instead of Miller-Rabin
_SMALL_PRIMES_LIMIT = 10000

# Fixed seed for Pollard Rho so that repeated runs pick the same sequences
_RHO_SEED = 0x9E3779B9

_MR_BASES = (2, 325, 9375, 28178, 450775, 9780504, 1795265022)


def _sieve(limit: int) -> np.ndarray:
    """Sieve of Eratosthenes, returning the primes <= limit as int64."""
    if limit < 2:
        return np.zeros(0, dtype=np.int64)
    sieve = np.ones(limit + 1, dtype=np.uint8)
    sieve[0] = sieve[1] = 0
    sieve[4::2] = 0
    for i in range(3, math.isqrt(limit) + 1, 2):
        if sieve[i]:
            sieve[i * i::2 * i] = 0
    return np.nonzero(sieve)[0].astype(np.int64)


@lru_cache(maxsize=1)
def get_small_primes() -> tuple[int, ...]:
    """Primes up to _SMALL_PRIMES_LIMIT (memoized)."""
    return tuple(int(p) for p in _sieve(_SMALL_PRIMES_LIMIT))


def clear_caches():
    """Clear all memoization caches."""
    is_prime.cache_clear()
    get_small_primes.cache_clear()
    _factor_integer_cached.cache_clear()


# Miller-Rabin primality test (memoized)
@lru_cache(maxsize=1024)
def is_prime(n: int) -> bool:
    if n < 2:
        return False
    for p in (2, 3, 5, 7, 11, 13, 17, 19, 23):
        if n == p:
            return True
        if n % p == 0:
            return False

    # n - 1 = d * 2^s
    d: int = n - 1
    s: int = 0
    while (d & 1) == 0:
        d >>= 1
        s += 1

    for a in _MR_BASES:
        a %= n
        if a == 0:
            continue
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def iter_primes(start: int = 2, stop: int | None = None):
    """
    Yield the primes p with start <= p < stop in increasing order.

    Small primes come from the sieve; beyond it candidates are tested with
    Miller-Rabin. With stop=None the iterator is infinite.
    """
    for p in get_small_primes():
        if stop is not None and p >= stop:
            return
        if p >= start:
            yield p
    n = max(start, _SMALL_PRIMES_LIMIT + 1) | 1
    while stop is None or n < stop:
        if is_prime(n):
            yield n
        n += 2


def trial_division(n: int, bound: int = _SMALL_PRIMES_LIMIT) -> tuple[list[int], int]:
    """
    Strip prime factors up to bound.

    Returns:
        (prime factors found with repetition, remaining cofactor)
    """
    if n < 1:
        raise ValueError(f"trial division needs a positive integer, got {n}")
    factors: list[int] = []
    while n > 1 and (n & 1) == 0:
        factors.append(2)
        n >>= 1
    if bound <= _SMALL_PRIMES_LIMIT:
        primes = get_small_primes()
    else:
        primes = tuple(int(p) for p in _sieve(bound))
    for p in primes:
        if n == 1 or p > bound:
            break
        if p == 2:
            continue
        while n % p == 0:
            factors.append(p)
            n //= p
    return factors, n


def pollard_rho_brent(n: int, rng: random.Random | None = None) -> int:
    """
    Brent's variant of Pollard Rho.

    Args:
        n: Odd composite to split
        rng: Source of the random starting point and polynomial constant

    Returns:
        A nontrivial factor of n, or n itself if this sequence failed
    """
    if (n & 1) == 0:
        return 2
    if n % 3 == 0:
        return 3
    rng = rng if rng is not None else random.Random(_RHO_SEED)

    y: int = rng.randrange(1, n - 1)
    c: int = rng.randrange(1, n - 1)
    m: int = 128
    g: int = 1
    r: int = 1
    q: int = 1
    x = ys = y

    while g == 1:
        x = y
        for _ in range(r):
            y = (y * y + c) % n
        k = 0
        # batch gcd
        while k < r and g == 1:
            ys = y
            for _ in range(min(m, r - k)):
                y = (y * y + c) % n
                q = (q * abs(x - y)) % n
            g = math.gcd(q, n)
            k += m
        r *= 2

    if g == n:
        # backtrack one step at a time
        while True:
            ys = (ys * ys + c) % n
            g = math.gcd(abs(x - ys), n)
            if g > 1:
                break
    return g


def _split_composite(n: int, rng: random.Random) -> list[int]:
    """Prime factors of n > 1 with no small factors left."""
    if n == 1:
        return []
    if is_prime(n):
        return [n]
    r = math.isqrt(n)
    if r * r == n:
        return _split_composite(r, rng) * 2
    d = n
    while d == n:
        d = pollard_rho_brent(n, rng)
    return _split_composite(d, rng) + _split_composite(n // d, rng)


@lru_cache(maxsize=256)
def _factor_integer_cached(n: int) -> tuple[tuple[int, int], ...]:
    small, rest = trial_division(n)
    primes = small + _split_composite(rest, random.Random(_RHO_SEED))
    counts: dict[int, int] = {}
    for p in primes:
        counts[p] = counts.get(p, 0) + 1
    return tuple(sorted(counts.items()))


def factor_integer(n: int) -> dict[int, int]:
    """
    Prime factorization of |n| as {prime: exponent}.

    factor_integer(1) == {}; factor_integer(0) raises ValueError.
    """
    n = abs(n)
    if n == 0:
        raise ValueError("0 has no prime factorization")
    return dict(_factor_integer_cached(n))


def divisors(n: int) -> list[int]:
    """All positive divisors of |n| in increasing order."""
    result = [1]
    for p, e in factor_integer(n).items():
        result = [d * p ** k for d in result for k in range(e + 1)]
    return sorted(result)
