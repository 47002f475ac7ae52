"""
Factorization dispatcher.

factor(f) inspects the capabilities of the coefficient structure and picks
the algorithm:

    finite field            square-free decomposition, then distinct-degree
                            factorization + Cantor-Zassenhaus, or Berlekamp
    integers                content to the unit, square-free decomposition,
                            Berlekamp-Zassenhaus (or Kronecker on request)
    rationals               clear denominators and factor over Z
    number field Q(alpha)   square-free decomposition, then Trager
    other UFD with divisors Kronecker's method

The zero polynomial raises DegenerateInputError; a constant factors as
itself with no irreducible factors.
"""
import logging
import math

from algebra_structures import Capability, IntegerRing, RationalField
from errors import CapabilityError, DegenerateInputError
from extension_fields import ExtensionField
from finite_field_factor import METHODS as FINITE_FIELD_METHODS
from finite_field_factor import factor_finite_field, is_irreducible_finite_field
from hensel import zassenhaus
from kronecker import kronecker
from polynomials import Factorization, Polynomial
from squarefree import square_free_decomposition
from trager import trager_factor

__all__ = ["Factorization", "factor", "factor_list", "is_irreducible"]

logger = logging.getLogger(__name__)

INTEGER_METHODS = ("zassenhaus", "kronecker")


def factor(f: Polynomial, method: str | None = None, rng=None) -> Factorization:
    """
    Factor f into irreducibles over its coefficient structure.

    Args:
        f: Nonzero polynomial
        method: "cantor_zassenhaus" or "berlekamp" over finite fields,
            "zassenhaus" or "kronecker" over Z and Q; None picks the default
        rng: random.Random for the randomized finite field steps

    Returns:
        Factorization whose expand() is f, with factors in canonical order

    Raises:
        DegenerateInputError: f is zero
        CapabilityError: no factorization algorithm applies to the structure
    """
    S = f.structure
    if f.is_zero():
        raise DegenerateInputError("the zero polynomial has no factorization")
    if f.degree == 0:
        return Factorization(f.leading_coefficient, [], S)

    if S.has(Capability.FINITE_FIELD):
        method = method or "cantor_zassenhaus"
        _check_method(method, FINITE_FIELD_METHODS)
        logger.debug("factor over %r with %s", S, method)
        return factor_finite_field(f, method, rng)
    if isinstance(S, IntegerRing):
        return _factor_integers(f, method, rng)
    if isinstance(S, RationalField):
        return _factor_rationals(f, method, rng)
    if isinstance(S, ExtensionField) and isinstance(S.base, RationalField):
        return _factor_number_field(f)
    if S.has(Capability.INTEGRAL_DOMAIN, Capability.UFD) and hasattr(S, "divisors"):
        return _factor_by_parts(f, kronecker)
    raise CapabilityError(f"no factorization algorithm for polynomials over {S!r}")


def _check_method(method: str, allowed) -> None:
    if method not in allowed:
        raise ValueError(f"unknown method {method!r}, expected one of {allowed}")


def _factor_by_parts(f: Polynomial, factor_part) -> Factorization:
    sqf = square_free_decomposition(f)
    factors = []
    for g, m in sqf:
        for h in factor_part(g):
            factors.append((h, m))
    return Factorization(sqf.unit, factors, f.structure).sorted()


def _factor_integers(f: Polynomial, method: str | None, rng) -> Factorization:
    method = method or "zassenhaus"
    _check_method(method, INTEGER_METHODS)
    logger.debug("factor degree %d over Z with %s", f.degree, method)

    def factor_part(g):
        x = []
        if g[0] == 0:
            # square-free, so x divides g at most once
            x = [Polynomial.x(g.structure)]
            g = Polynomial._make(g.coeffs[1:], g.structure)
        if g.degree < 1:
            return x
        if g.degree == 1:
            return x + [g]
        if method == "kronecker":
            return x + kronecker(g)
        return x + zassenhaus(g, rng=rng)

    return _factor_by_parts(f, factor_part)


def _factor_rationals(f: Polynomial, method: str | None, rng) -> Factorization:
    Q = f.structure
    Z = IntegerRing()
    denominator = 1
    for c in f.coeffs:
        denominator = denominator * c.denominator // math.gcd(denominator, c.denominator)
    integral = Polynomial._make([int(c * denominator) for c in f.coeffs], Z)
    over_z = _factor_integers(integral, method, rng)
    factors = [(g.map_coefficients(Q).monic(), m) for g, m in over_z]
    return Factorization(f.leading_coefficient, factors, Q).sorted()


def _factor_number_field(f: Polynomial) -> Factorization:
    logger.debug("factor degree %d over %r with Trager", f.degree, f.structure)
    return _factor_by_parts(f, trager_factor)


def factor_list(f: Polynomial, method: str | None = None, rng=None) -> tuple:
    """factor(f) as a plain (unit, [(factor, multiplicity), ...]) tuple."""
    result = factor(f, method, rng)
    return result.unit, list(result.factors)


def is_irreducible(f: Polynomial) -> bool:
    """
    True when f is irreducible over its coefficient structure.

    Constants and the zero polynomial are not irreducible. Over Z a
    nonunit content makes f reducible (2x + 2 = 2 * (x + 1)).
    """
    if f.is_zero() or f.degree < 1:
        return False
    S = f.structure
    if S.has(Capability.FINITE_FIELD):
        return is_irreducible_finite_field(f)
    result = factor(f)
    return len(result) == 1 and result.factors[0][1] == 1 and S.is_unit(result.unit)
