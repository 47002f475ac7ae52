"""
Kronecker's factorization method.

If g divides f over Z then g(a) divides f(a) for every integer a. For each
candidate degree d <= deg(f)/2, pick d+1 points, run through every choice
of divisors of the values f(a_i), interpolate, and test the interpolant by
exact division. Exponential in the degree, so it is only a fallback for
small inputs and for UFDs without a modular method.
"""
import itertools
import logging

from errors import AlgorithmExhaustedError, CapabilityError, DegenerateInputError, NotDivisibleError
from polynomials import Polynomial, interpolate

logger = logging.getLogger(__name__)

KRONECKER_DEGREE_LIMIT = 12
# Interpolations tried per polynomial before giving up
KRONECKER_CANDIDATE_LIMIT = 200000


def _points(S, count: int):
    """0, 1, -1, 2, -2, ... as elements of S."""
    points = []
    k = 0
    while len(points) < count:
        points.append(S.from_int(k))
        if k > 0 and len(points) < count:
            points.append(S.from_int(-k))
        k += 1
    return points


def _signed_divisors(S, value, positive_only: bool) -> list:
    divisors = [S.from_int(d) for d in S.divisors(value)]
    if positive_only:
        return divisors
    return divisors + [S.neg(d) for d in divisors]


def _to_ring(h: Polynomial, S):
    try:
        return h.map_coefficients(S)
    except TypeError:
        return None


def _find_factor(f: Polynomial, candidate_limit: int):
    """A nontrivial factor of f, or None when f is irreducible."""
    S = f.structure
    Q = S.fraction_field()
    n = f.degree
    points = _points(S, n // 2 + 1)
    values = []
    for a in points:
        v = f.evaluate(a)
        if S.is_zero(v):
            return Polynomial._make((S.neg(a), S.one()), S)
        values.append(v)

    tried = 0
    for d in range(1, n // 2 + 1):
        # the sign of the factor is free, so the first value is taken positive
        choices = [
            _signed_divisors(S, v, positive_only=(i == 0)) for i, v in enumerate(values[:d + 1])
        ]
        for combo in itertools.product(*choices):
            tried += 1
            if tried > candidate_limit:
                raise AlgorithmExhaustedError(
                    f"Kronecker search exceeded {candidate_limit} candidates at degree {d}"
                )
            h = interpolate(points[:d + 1], combo, Q)
            if h.degree != d:
                continue
            g = _to_ring(h, S)
            if g is None:
                continue
            try:
                f.exact_quotient(g)
            except NotDivisibleError:
                continue
            logger.debug("Kronecker: degree %d factor after %d candidates", d, tried)
            return g
    return None


def kronecker(f: Polynomial, degree_limit: int = KRONECKER_DEGREE_LIMIT,
              candidate_limit: int = KRONECKER_CANDIDATE_LIMIT) -> list[Polynomial]:
    """
    Irreducible factors of a primitive polynomial by Kronecker's method.

    Args:
        f: Primitive polynomial of degree >= 1 over a UFD exposing
            divisors() and fraction_field() (e.g. IntegerRing)
        degree_limit: Largest accepted degree
        candidate_limit: Largest number of interpolations per factor search

    Returns:
        Irreducible factors in canonical form, with repetition

    Raises:
        AlgorithmExhaustedError: degree or candidate limit exceeded
    """
    S = f.structure
    if not (hasattr(S, "divisors") and hasattr(S, "fraction_field")):
        raise CapabilityError(f"Kronecker's method needs divisor enumeration in {S!r}")
    if f.is_zero() or f.degree < 1:
        raise DegenerateInputError("Kronecker's method needs a nonconstant polynomial")
    if f.degree > degree_limit:
        raise AlgorithmExhaustedError(
            f"degree {f.degree} is above the Kronecker limit {degree_limit}"
        )

    factors = []
    pending = [f.unit_normal()[1]]
    while pending:
        g = pending.pop()
        h = _find_factor(g, candidate_limit) if g.degree > 1 else None
        if h is None:
            factors.append(g)
            continue
        h = h.primitive()[1]
        pending.extend([h, g.exact_quotient(h)])
    return factors
