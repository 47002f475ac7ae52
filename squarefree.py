"""
Square-free decomposition.

f = unit * prod(g_i ** m_i) with g_i square-free, pairwise coprime and
m_i distinct. Characteristic zero uses Yun's algorithm; finite fields use
Musser's variant, which takes p-th roots when the derivative vanishes.
"""
import logging

from algebra_structures import Capability
from errors import CapabilityError, DegenerateInputError
from poly_gcd import cofactors, gcd
from polynomials import Factorization, Polynomial

logger = logging.getLogger(__name__)


def square_free_decomposition(f: Polynomial) -> Factorization:
    """
    Decompose f into square-free parts with multiplicities.

    The unit is the leading coefficient over a field and the signed content
    over a UFD. Parts are monic (field) or primitive with canonical leading
    coefficient (UFD), ordered by multiplicity.

    Raises:
        DegenerateInputError: f is the zero polynomial
        CapabilityError: positive characteristic outside a finite field
    """
    if f.is_zero():
        raise DegenerateInputError("square-free decomposition of the zero polynomial")
    S = f.structure
    if not (S.has(Capability.FIELD) or S.has(Capability.INTEGRAL_DOMAIN, Capability.UFD)):
        raise CapabilityError(f"square-free decomposition over {S!r} needs a field or a UFD")
    unit, g = f.primitive()
    if g.degree == 0:
        return Factorization(unit, [], S)
    if S.characteristic == 0:
        parts = _yun(g)
    elif S.has(Capability.FINITE_FIELD):
        parts = _musser(g)
    else:
        raise CapabilityError(
            f"square-free decomposition in characteristic {S.characteristic} "
            "is only supported over finite fields"
        )
    parts.sort(key=lambda gm: gm[1])
    logger.debug("square-free decomposition of degree %s: multiplicities %s",
                 f.degree, [m for _, m in parts])
    return Factorization(unit, parts, S)


def _yun(f: Polynomial) -> list[tuple[Polynomial, int]]:
    result = []
    _, p, q = cofactors(f, f.derivative())
    i = 1
    while True:
        h = q - p.derivative()
        if h.is_zero():
            if p.degree > 0:
                result.append((p, i))
            break
        g, p, q = cofactors(p, h)
        if g.degree > 0:
            result.append((g, i))
        i += 1
    return result


def _pth_root(f: Polynomial) -> Polynomial:
    S = f.structure
    p = S.characteristic
    return Polynomial._make([S.pth_root(c) for c in f.coeffs[::p]], S)


def _musser(f: Polynomial) -> list[tuple[Polynomial, int]]:
    S = f.structure
    p = S.characteristic
    factors = []
    n = 1
    while True:
        done = False
        df = f.derivative()
        if not df.is_zero():
            g = gcd(f, df)
            h = f.exact_quotient(g)
            i = 1
            while h.degree > 0:
                G = gcd(g, h)
                H = h.exact_quotient(G)
                if H.degree > 0:
                    factors.append((H, i * n))
                g, h, i = g.exact_quotient(G), G, i + 1
            if g.degree == 0:
                done = True
            else:
                f = g
        if done:
            break
        # every exponent of f is now a multiple of p
        f = _pth_root(f)
        n *= p
    return _merge(factors)


def _merge(factors):
    # parts found in different rounds can share a multiplicity
    merged: dict[int, Polynomial] = {}
    for g, m in factors:
        merged[m] = merged[m] * g if m in merged else g
    return [(g, m) for m, g in merged.items()]


def square_free_part(f: Polynomial) -> Polynomial:
    """Product of the distinct irreducible factors of f, in canonical form."""
    sqf = square_free_decomposition(f)
    result = Polynomial.one(f.structure)
    for g, _ in sqf:
        result = result * g
    return result


def is_square_free(f: Polynomial) -> bool:
    """True when f has no repeated factor. The zero polynomial is not square-free."""
    if f.is_zero():
        return False
    if f.degree == 0:
        return True
    df = f.derivative()
    if df.is_zero():
        return False
    return gcd(f, df).degree == 0
