"""
Berlekamp-Zassenhaus factorization over Z.

For a primitive, square-free f in Z[x] with positive leading coefficient:

1. Pick a prime p not dividing lc(f) such that f mod p stays square-free,
   preferring the candidate with the fewest modular factors.
2. Factor f mod p over F_p.
3. Hensel-lift the modular factorization to p^l with p^l > 2 * B, where B
   is the Mignotte bound on the coefficients of any factor of f.
4. Recombine: try products of lifted factors, smallest subsets first, and
   keep those that divide f over Z.

Polynomials over Z are reduced modulo m into the symmetric range
(-m/2, m/2] throughout, so true factors appear with their real signs.
"""
import itertools
import logging
import math

from algebra_structures import IntegerRing, PrimeField
from errors import AlgorithmExhaustedError, CapabilityError, DegenerateInputError, NotDivisibleError
from finite_field_factor import factor_square_free_finite_field
from integer_factorization import iter_primes
from poly_gcd import extended_gcd
from polynomials import Polynomial
from squarefree import is_square_free

logger = logging.getLogger(__name__)

# Primes below this bound are tried before giving up
PRIME_SEARCH_LIMIT = 2000
# Number of good primes compared before picking the one with fewest factors
PRIME_CANDIDATES = 5


def _symmetric(c: int, m: int) -> int:
    c %= m
    return c - m if c > m // 2 else c


def _trunc(f: Polynomial, m: int) -> Polynomial:
    """Coefficients of f reduced modulo m into the symmetric range."""
    return Polynomial._make([_symmetric(c, m) for c in f.coeffs], f.structure)


def _to_integers(f: Polynomial) -> Polynomial:
    """Lift a polynomial over F_p to Z with symmetric coefficients."""
    S = f.structure
    return Polynomial._make([S.symmetric(c) for c in f.coeffs], IntegerRing())


def _require_integers(f: Polynomial, operation: str) -> None:
    if not isinstance(f.structure, IntegerRing):
        raise CapabilityError(f"{operation} works over the integers, not {f.structure!r}")


def mignotte_bound(f: Polynomial) -> int:
    """
    Upper bound on the coefficients of any factor of f over Z.

    sqrt(n + 1) * 2^n * max|a_i| * |lc(f)|, with the square root rounded up.
    """
    _require_integers(f, "Mignotte bound")
    if f.is_zero():
        raise DegenerateInputError("Mignotte bound of the zero polynomial")
    n = f.degree
    a = max(abs(c) for c in f.coeffs)
    b = abs(f.leading_coefficient)
    return (math.isqrt(n + 1) + 1) * 2 ** n * a * b


def hensel_step(m: int, f: Polynomial, g: Polynomial, h: Polynomial,
                s: Polynomial, t: Polynomial):
    """
    One quadratic Hensel step from modulus m to m^2.

    Args:
        m: Current modulus
        f: Polynomial over Z with f = g*h (mod m)
        g, h: Factors with h monic
        s, t: Bezout coefficients with s*g + t*h = 1 (mod m)

    Returns:
        (G, H, S, T) with f = G*H and S*G + T*H = 1 modulo m^2,
        G = g and H = h modulo m, H monic
    """
    M = m ** 2
    e = _trunc(f - g * h, M)
    q, r = divmod(s * e, h)
    q, r = _trunc(q, M), _trunc(r, M)
    G = _trunc(g + t * e + q * g, M)
    H = _trunc(h + r, M)

    b = _trunc(s * G + t * H - Polynomial.one(f.structure), M)
    c, d = divmod(s * b, H)
    c, d = _trunc(c, M), _trunc(d, M)
    S = _trunc(s - d, M)
    T = _trunc(t - t * b - c * G, M)
    return G, H, S, T


def hensel_lift(p: int, f: Polynomial, modular_factors: list[Polynomial], l: int) -> list[Polynomial]:
    """
    Multifactor Hensel lifting.

    Args:
        p: Prime not dividing lc(f)
        f: Polynomial over Z, square-free modulo p
        modular_factors: Monic pairwise coprime factors over Z whose product
            is f / lc(f) modulo p
        l: Target exponent

    Returns:
        Monic polynomials over Z, one per modular factor, whose product
        times lc(f) is f modulo p^l
    """
    r = len(modular_factors)
    lc = f.leading_coefficient
    pl = p ** l
    if r == 1:
        return [_trunc(f.scale(pow(lc, -1, pl)), pl)]

    Fp = PrimeField(p)
    k = r // 2
    d = (l - 1).bit_length()

    g = Polynomial.constant(lc, Fp)
    for factor in modular_factors[:k]:
        g = g * factor.map_coefficients(Fp)
    h = Polynomial.one(Fp)
    for factor in modular_factors[k:]:
        h = h * factor.map_coefficients(Fp)
    _, s, t = extended_gcd(g, h)

    g, h, s, t = (_to_integers(u) for u in (g, h, s, t))
    m = p
    for _ in range(d):
        g, h, s, t = hensel_step(m, f, g, h, s, t)
        m = m ** 2

    return hensel_lift(p, g, modular_factors[:k], l) + hensel_lift(p, h, modular_factors[k:], l)


def recombine(f: Polynomial, lifted: list[Polynomial], modulus: int) -> list[Polynomial]:
    """
    Zassenhaus recombination of lifted factors into true factors over Z.

    Subsets are tried by increasing size; a candidate lc(f) * prod(subset),
    reduced modulo `modulus` and made primitive, is accepted when it divides
    f exactly. Candidates whose constant term does not divide f(0) are
    skipped without a trial division.

    Returns:
        Irreducible primitive factors with positive leading coefficients
    """
    factors = []
    remaining = list(range(len(lifted)))
    size = 1
    while 2 * size <= len(remaining):
        for subset in itertools.combinations(remaining, size):
            b = f.leading_coefficient
            G = Polynomial.constant(b, f.structure)
            for i in subset:
                G = G * lifted[i]
            G = _trunc(G, modulus).primitive()[1]
            if G[0] and f[0] % G[0]:
                continue
            try:
                quotient = f.exact_quotient(G)
            except NotDivisibleError:
                continue
            factors.append(G)
            f = quotient
            remaining = [i for i in remaining if i not in subset]
            break
        else:
            size += 1
    factors.append(f)
    return factors


def zassenhaus(f: Polynomial, prime_limit: int = PRIME_SEARCH_LIMIT,
               candidates: int = PRIME_CANDIDATES, rng=None) -> list[Polynomial]:
    """
    Irreducible factors of a primitive square-free polynomial over Z.

    Args:
        f: Primitive, square-free, positive leading coefficient, degree >= 1
        prime_limit: Primes below this bound are considered
        candidates: Good primes compared before choosing
        rng: Random source for the modular factorizations

    Returns:
        Irreducible factors with positive leading coefficients

    Raises:
        AlgorithmExhaustedError: no usable prime below prime_limit
    """
    _require_integers(f, "Zassenhaus factorization")
    if f.is_zero() or f.degree < 1:
        raise DegenerateInputError("Zassenhaus factorization needs a nonconstant polynomial")
    if f.degree == 1:
        return [f]

    lc = f.leading_coefficient
    found = []
    for p in iter_primes(3, prime_limit):
        if lc % p == 0:
            continue
        fp = f.map_coefficients(PrimeField(p))
        if not is_square_free(fp):
            continue
        modular = factor_square_free_finite_field(fp, rng=rng)
        logger.debug("prime %d: %d modular factors", p, len(modular))
        if len(modular) == 1:
            return [f]
        found.append((p, modular))
        if len(found) >= candidates:
            break
    if not found:
        raise AlgorithmExhaustedError(
            f"no prime below {prime_limit} keeps the polynomial square-free"
        )

    p, modular = min(found, key=lambda pm: len(pm[1]))
    bound = 2 * mignotte_bound(f)
    l = 1
    while p ** l <= bound:
        l += 1
    logger.debug("lifting %d factors modulo %d^%d", len(modular), p, l)

    lifted = hensel_lift(p, f, [_to_integers(g) for g in modular], l)
    factors = recombine(f, lifted, p ** l)
    logger.debug("recombination gave %d factors", len(factors))
    return factors
