"""
Factorization over finite fields F_q (prime fields and GF(p^k)).

Pipeline for a square-free monic f:

1. Distinct-degree factorization: gcd(f, x^(q^i) - x) collects the product
   of all irreducible factors of degree i.
2. Equal-degree splitting (Cantor-Zassenhaus): random a, then
   gcd(f, a^((q^d - 1)/2) - 1) for odd q, or gcd(f, Tr(a)) for q = 2^k.

Berlekamp's algorithm is the deterministic-for-small-q alternative: the null
space of Q - I, where row i of Q holds x^(iq) mod f, is spanned by
polynomials v with v^q = v mod f, and gcd(f, v - s) splits f.

Randomness always comes from an explicit random.Random; the default is a
fresh generator seeded with DEFAULT_SEED, so repeated calls agree.
"""
import logging
import random

import numpy as np

from algebra_structures import Capability, PrimeField, require
from errors import DegenerateInputError
from poly_gcd import gcd
from polynomials import _SIMD_MAX_MODULUS, Factorization, Polynomial
from simd_operations import _nullspace_mod_p_simd
from squarefree import is_square_free, square_free_decomposition

logger = logging.getLogger(__name__)

DEFAULT_SEED = 0x5EED

# Berlekamp splits by trying every field element while q is at most this
BERLEKAMP_ENUMERATION_LIMIT = 1024

METHODS = ("cantor_zassenhaus", "berlekamp")


def _rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else random.Random(DEFAULT_SEED)


def _require_finite(f: Polynomial, operation: str) -> None:
    require(f.structure, Capability.FINITE_FIELD, operation=operation)


def _extension_degree(q: int, p: int) -> int:
    k = 0
    while q > 1:
        q //= p
        k += 1
    return k


def _random_polynomial(S, degree_bound: int, rng: random.Random) -> Polynomial:
    return Polynomial._make([S.random_element(rng) for _ in range(degree_bound)], S)


def _splitting_polynomial(a: Polynomial, f: Polynomial, d: int) -> Polynomial:
    """a^((q^d-1)/2) - 1 for odd q, Tr(a) = a + a^2 + ... + a^(2^(kd-1)) for q = 2^k."""
    S = f.structure
    q = S.order
    if S.characteristic != 2:
        return a.powmod((q ** d - 1) // 2, f) - Polynomial.one(S)
    t = a % f
    total = t
    for _ in range(_extension_degree(q, 2) * d - 1):
        t = (t * t) % f
        total = total + t
    return total


def distinct_degree_factorization(f: Polynomial) -> list[tuple[Polynomial, int]]:
    """
    Split a square-free polynomial by the degree of its irreducible factors.

    Returns:
        [(g_d, d), ...] where g_d is the monic product of all irreducible
        factors of degree d
    """
    _require_finite(f, "distinct-degree factorization")
    if f.is_zero():
        raise DegenerateInputError("distinct-degree factorization of the zero polynomial")
    S = f.structure
    q = S.order
    rest = f.monic()
    x = Polynomial.x(S)
    h = x % rest if rest.degree > 0 else x
    result = []
    i = 1
    while 2 * i <= rest.degree:
        h = h.powmod(q, rest)
        g = gcd(rest, h - x)
        if g.degree > 0:
            result.append((g, i))
            rest = rest.exact_quotient(g)
            h = h % rest
        i += 1
    if rest.degree > 0:
        result.append((rest, rest.degree))
    return result


def equal_degree_factorization(f: Polynomial, d: int, rng: random.Random | None = None) -> list[Polynomial]:
    """
    Cantor-Zassenhaus splitting of f, a product of distinct irreducibles of degree d.

    Returns:
        The monic irreducible factors
    """
    _require_finite(f, "equal-degree factorization")
    f = f.monic()
    if f.degree % d:
        raise DegenerateInputError(f"degree {f.degree} is not a multiple of {d}")
    rng = _rng(rng)
    S = f.structure
    pending = [f]
    result = []
    while pending:
        u = pending.pop()
        if u.degree == d:
            result.append(u)
            continue
        while True:
            a = _random_polynomial(S, u.degree, rng)
            if a.degree <= 0:
                continue
            g = gcd(u, a)
            if g.degree <= 0:
                g = gcd(u, _splitting_polynomial(a, u, d))
            if 0 < g.degree < u.degree:
                pending.append(g)
                pending.append(u.exact_quotient(g))
                break
    return result


def _nullspace(rows: list[list], S) -> list[list]:
    """Basis of the right null space of a square matrix over S."""
    if isinstance(S, PrimeField) and S.p < _SIMD_MAX_MODULUS:
        basis = _nullspace_mod_p_simd(np.array(rows, dtype=np.int64).reshape(len(rows), -1), S.p)
        return [[int(c) for c in row] for row in basis]

    A = [list(row) for row in rows]
    n_rows = len(A)
    n_cols = len(A[0]) if A else 0
    pivot_cols = []
    r = 0
    for c in range(n_cols):
        pivot = next((i for i in range(r, n_rows) if not S.is_zero(A[i][c])), None)
        if pivot is None:
            continue
        A[r], A[pivot] = A[pivot], A[r]
        inv = S.inv(A[r][c])
        A[r] = [S.mul(inv, v) for v in A[r]]
        for i in range(n_rows):
            if i != r and not S.is_zero(A[i][c]):
                factor = A[i][c]
                A[i] = [S.sub(A[i][j], S.mul(factor, A[r][j])) for j in range(n_cols)]
        pivot_cols.append(c)
        r += 1
        if r == n_rows:
            break

    basis = []
    for free in range(n_cols):
        if free in pivot_cols:
            continue
        v = [S.zero()] * n_cols
        v[free] = S.one()
        for i, c in enumerate(pivot_cols):
            v[c] = S.neg(A[i][free])
        basis.append(v)
    return basis


def berlekamp_kernel(f: Polynomial) -> list[Polynomial]:
    """
    Basis of the Berlekamp subalgebra {v : v^q = v mod f}.

    Its dimension is the number of irreducible factors of the square-free f.
    """
    _require_finite(f, "Berlekamp")
    S = f.structure
    n = f.degree
    xq = Polynomial.x(S).powmod(S.order, f)
    rows = []
    r = Polynomial.one(S)
    for _ in range(n):
        rows.append([r[j] for j in range(n)])
        r = (r * xq) % f
    # (Q - I) transposed: v (Q - I) = 0  <=>  (Q - I)^T v^T = 0
    matrix = [[S.sub(rows[i][j], S.one() if i == j else S.zero()) for i in range(n)] for j in range(n)]
    return [Polynomial._make(v, S) for v in _nullspace(matrix, S)]


def berlekamp(f: Polynomial, rng: random.Random | None = None) -> list[Polynomial]:
    """
    Berlekamp factorization of a square-free polynomial.

    Small fields split deterministically by trying every s in F_q against
    every kernel vector; larger fields use random kernel combinations.

    Returns:
        The monic irreducible factors
    """
    _require_finite(f, "Berlekamp")
    f = f.monic()
    if f.degree <= 1:
        return [f]
    S = f.structure
    kernel = berlekamp_kernel(f)
    count = len(kernel)
    logger.debug("Berlekamp: degree %d, %d irreducible factors", f.degree, count)
    if count == 1:
        return [f]

    factors = [f]
    if S.order <= BERLEKAMP_ENUMERATION_LIMIT:
        for v in kernel:
            if v.degree <= 0:
                continue
            for u in list(factors):
                if u.degree <= 1:
                    continue
                for s in S.elements():
                    h = gcd(u, v - Polynomial._make((s,), S))
                    if 0 < h.degree < u.degree:
                        factors.remove(u)
                        u = u.exact_quotient(h)
                        factors.extend([u, h])
                    if len(factors) == count:
                        return factors
        return factors

    rng = _rng(rng)
    while len(factors) < count:
        a = Polynomial.zero(S)
        for v in kernel:
            a = a + v.scale(S.random_element(rng))
        if a.degree <= 0:
            continue
        for u in list(factors):
            if u.degree <= 1:
                continue
            h = gcd(u, _splitting_polynomial(a % u, u, 1))
            if 0 < h.degree < u.degree:
                factors.remove(u)
                factors.extend([h, u.exact_quotient(h)])
    return factors


def factor_square_free_finite_field(f: Polynomial, method: str = "cantor_zassenhaus",
                                    rng: random.Random | None = None) -> list[Polynomial]:
    """Monic irreducible factors of a square-free polynomial."""
    if method not in METHODS:
        raise ValueError(f"unknown finite field method {method!r}, expected one of {METHODS}")
    f = f.monic()
    if f.degree <= 1:
        return [f]
    if method == "berlekamp":
        return berlekamp(f, rng)
    rng = _rng(rng)
    factors = []
    for g, d in distinct_degree_factorization(f):
        factors.extend(equal_degree_factorization(g, d, rng))
    return factors


def factor_finite_field(f: Polynomial, method: str = "cantor_zassenhaus",
                        rng: random.Random | None = None) -> Factorization:
    """
    Complete factorization over a finite field.

    Args:
        f: Nonzero polynomial over a finite field
        method: "cantor_zassenhaus" (default) or "berlekamp"
        rng: Random source for the splitting steps

    Returns:
        Factorization with the leading coefficient as unit and monic
        irreducible factors in canonical order
    """
    _require_finite(f, "finite field factorization")
    rng = _rng(rng)
    sqf = square_free_decomposition(f)
    factors = []
    for g, m in sqf:
        for irreducible in factor_square_free_finite_field(g, method, rng):
            factors.append((irreducible, m))
    return Factorization(sqf.unit, factors, f.structure).sorted()


def is_irreducible_finite_field(f: Polynomial) -> bool:
    """Irreducibility over F_q via square-freeness and distinct-degree factorization."""
    _require_finite(f, "irreducibility test")
    if f.is_zero() or f.degree < 1:
        return False
    if f.degree == 1:
        return True
    if not is_square_free(f):
        return False
    ddf = distinct_degree_factorization(f)
    return len(ddf) == 1 and ddf[0][1] == f.degree
