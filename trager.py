"""
Trager's factorization over algebraic number fields K = Q(alpha).

For f in K[x] the norm N(f) = Res_y(m(y), f(x, y)), where f(x, y) is f with
alpha replaced by y, is the product of the conjugates of f and has rational
coefficients. If N(f) is square-free, every irreducible factor n_i of N(f)
over Q gives the irreducible factor gcd(f, n_i) of f over K. When it is not,
f is replaced by f(x - s*alpha) for s = 1, 2, ... until the norm becomes
square-free, and the factors are shifted back at the end.

The bivariate resultant is taken over PolynomialRing(Q): a polynomial in y
whose coefficients are polynomials in x.
"""
import logging

from algebra_structures import RationalField
from errors import AlgorithmExhaustedError, CapabilityError, DegenerateInputError
from extension_fields import ExtensionField
from poly_gcd import gcd, resultant
from polynomials import Polynomial, PolynomialRing
from squarefree import is_square_free

logger = logging.getLogger(__name__)

# Shifts tried before the norm is declared never square-free
SHIFT_LIMIT = 64


def _require_number_field(f: Polynomial) -> ExtensionField:
    K = f.structure
    if not (isinstance(K, ExtensionField) and isinstance(K.base, RationalField)):
        raise CapabilityError(f"Trager's algorithm needs a number field, not {K!r}")
    return K


def norm(f: Polynomial) -> Polynomial:
    """
    Norm of f in K[x] down to Q[x].

    Returns:
        Res_y(m(y), f(x, y)) as a polynomial over Q, of degree deg(m) * deg(f)
    """
    K = _require_number_field(f)
    Q = K.base
    R = PolynomialRing(Q)
    # coefficient of y^j is sum_i f_i[j] x^i
    columns = [
        Polynomial._make([c[j] for c in f.coeffs], Q) for j in range(K.degree)
    ]
    bivariate = Polynomial._make(columns, R)
    m = Polynomial._make([Polynomial._make((c,), Q) for c in K.modulus.coeffs], R)
    return resultant(m, bivariate)


def square_free_norm(f: Polynomial, shift_limit: int = SHIFT_LIMIT):
    """
    Find s such that the norm of f(x - s*alpha) is square-free.

    Args:
        f: Square-free polynomial over a number field
        shift_limit: Largest shift tried

    Returns:
        (s, f(x - s*alpha), N) with N the square-free norm

    Raises:
        AlgorithmExhaustedError: no shift up to shift_limit works, which
            happens when f is not square-free
    """
    K = _require_number_field(f)
    if f.is_zero() or f.degree < 1:
        raise DegenerateInputError("the norm is only defined for nonconstant polynomials")
    alpha = K.generator()
    g = f
    for s in range(shift_limit + 1):
        if s:
            g = f.shift(K.neg(K.mul(K.from_int(s), alpha)))
        N = norm(g)
        if is_square_free(N):
            logger.debug("square-free norm of degree %d at shift %d", N.degree, s)
            return s, g, N
    raise AlgorithmExhaustedError(f"no square-free norm for shifts up to {shift_limit}")


def trager_factor(f: Polynomial, shift_limit: int = SHIFT_LIMIT) -> list[Polynomial]:
    """
    Monic irreducible factors of a square-free polynomial over Q(alpha).

    Args:
        f: Square-free nonconstant polynomial over a number field
        shift_limit: Passed on to square_free_norm

    Returns:
        The monic irreducible factors of f
    """
    from poly_factorization import factor

    K = _require_number_field(f)
    if f.degree == 1:
        return [f.monic()]
    s, g, N = square_free_norm(f, shift_limit)
    rational = factor(N)
    if len(rational) == 1:
        return [f.monic()]

    back = K.mul(K.from_int(s), K.generator())
    factors = []
    for n_i, _ in rational:
        h = gcd(g, n_i.map_coefficients(K))
        factors.append(h.shift(back) if s else h)
    logger.debug("Trager: %d factors over %r", len(factors), K)
    return factors
