"""
Polynomial GCD engine.

The algorithm follows the capabilities of the coefficient structure:

1. Field coefficients: classical Euclidean algorithm, monic result.
2. Integral domain + UFD without inverses (Z, Q[x], ...): subresultant
   pseudo-remainder sequence on the primitive parts. The subresultant
   scalars are divided out at every step, so coefficients grow only
   polynomially and no fractions are introduced.

Anything else is a capability violation.

Also here: extended GCD (fields), resultants and discriminants, which the
square-free norm of Trager's algorithm is built on.
"""
from algebra_structures import Capability, require
from errors import CapabilityError, DegenerateInputError
from polynomials import Polynomial


def _check_pair(f: Polynomial, g: Polynomial) -> None:
    f._check(g)


def gcd(f: Polynomial, g: Polynomial) -> Polynomial:
    """
    Greatest common divisor in canonical form.

    Over a field the result is monic; over a UFD it has canonical leading
    coefficient (positive over Z). gcd(0, g) is the canonical associate of g
    and gcd(0, 0) is 0.

    Raises:
        CapabilityError: the structure is neither a field nor a UFD domain
    """
    _check_pair(f, g)
    S = f.structure
    if f.is_zero() and g.is_zero():
        return f
    if S.has(Capability.FIELD):
        return _euclidean_gcd(f, g)
    if S.has(Capability.INTEGRAL_DOMAIN, Capability.UFD):
        return _subresultant_gcd(f, g)
    raise CapabilityError(f"gcd over {S!r} needs a field or a unique factorization domain")


def _euclidean_gcd(f: Polynomial, g: Polynomial) -> Polynomial:
    while not g.is_zero():
        f, g = g, f % g
    return f.monic()


def _subresultant_gcd(f: Polynomial, g: Polynomial) -> Polynomial:
    if f.is_zero():
        return g.unit_normal()[1]
    if g.is_zero():
        return f.unit_normal()[1]
    S = f.structure
    c = S.gcd(f.content(), g.content())
    F, G = f.primitive_part(), g.primitive_part()
    if F.degree == 0 or G.degree == 0:
        h = Polynomial.one(S)
    else:
        remainders, _ = subresultant_prs(F, G)
        h = remainders[-1].primitive_part()
    return h.scale(c).unit_normal()[1]


def cofactors(f: Polynomial, g: Polynomial) -> tuple[Polynomial, Polynomial, Polynomial]:
    """Return (h, f / h, g / h) with h = gcd(f, g)."""
    h = gcd(f, g)
    if h.is_zero():
        return h, f, g
    return h, f.exact_quotient(h), g.exact_quotient(h)


def lcm(f: Polynomial, g: Polynomial) -> Polynomial:
    """Least common multiple in canonical form."""
    _check_pair(f, g)
    if f.is_zero() or g.is_zero():
        return Polynomial.zero(f.structure)
    h = gcd(f, g)
    return (f.exact_quotient(h) * g).unit_normal()[1]


def extended_gcd(f: Polynomial, g: Polynomial) -> tuple[Polynomial, Polynomial, Polynomial]:
    """
    Extended Euclidean algorithm over a field.

    Returns:
        (h, u, v) with u*f + v*g == h and h = gcd(f, g) monic.
        extended_gcd(0, 0) == (0, 0, 0).

    Raises:
        CapabilityError: coefficients are not a field. Over Z embed into Q
        first with map_coefficients(RationalField()).
    """
    _check_pair(f, g)
    S = f.structure
    require(S, Capability.FIELD, operation="extended gcd")
    zero, one = Polynomial.zero(S), Polynomial.one(S)
    if f.is_zero() and g.is_zero():
        return zero, zero, zero
    r0, r1 = f, g
    s0, s1 = one, zero
    t0, t1 = zero, one
    while not r1.is_zero():
        q, r = divmod(r0, r1)
        r0, r1 = r1, r
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    inv = S.inv(r0.leading_coefficient)
    return r0.scale(inv), s0.scale(inv), t0.scale(inv)


def _exquo_scalar(f: Polynomial, c) -> Polynomial:
    S = f.structure
    return Polynomial._make([S.exact_div(a, c) for a in f.coeffs], S)


def subresultant_prs(f: Polynomial, g: Polynomial) -> tuple[list[Polynomial], list]:
    """
    Subresultant pseudo-remainder sequence (Brown-Collins).

    Returns:
        (remainders, scalars): the polynomial remainder sequence starting
        with f, g (higher degree first) and the principal subresultant
        coefficients, the last of which is the resultant when the sequence
        ends in a constant.
    """
    _check_pair(f, g)
    S = f.structure
    require(S, Capability.INTEGRAL_DOMAIN, operation="subresultant PRS")
    if f.degree < g.degree:
        f, g = g, f
    if f.is_zero():
        return [], []
    if g.is_zero():
        return [f], [S.one()]

    remainders = [f, g]
    m = g.degree
    d = f.degree - m
    b = S.from_int(-1 if d % 2 == 0 else 1)
    h = f.pseudo_remainder(g).scale(b)
    lc = g.leading_coefficient
    c = S.pow(lc, d)
    scalars = [S.one(), c]
    c = S.neg(c)

    while not h.is_zero():
        k = h.degree
        remainders.append(h)
        f, g, d, m = g, h, m - k, k
        b = S.mul(S.neg(lc), S.pow(c, d))
        h = _exquo_scalar(f.pseudo_remainder(g), b)
        lc = g.leading_coefficient
        if d > 1:
            # abnormal step
            c = S.exact_div(S.pow(S.neg(lc), d), S.pow(c, d - 1))
        else:
            c = S.neg(lc)
        scalars.append(S.neg(c))
    return remainders, scalars


def resultant(f: Polynomial, g: Polynomial):
    """
    Resultant Res(f, g) as a structure element.

    Res(f, 0) == 0. For constant g = c with deg f = n, Res(f, c) = c^n.
    """
    _check_pair(f, g)
    S = f.structure
    if f.is_zero() or g.is_zero():
        return S.zero()
    n, m = f.degree, g.degree
    if n < m:
        r = resultant(g, f)
        return S.neg(r) if (n * m) % 2 else r
    if m == 0:
        return S.pow(g.leading_coefficient, n)
    remainders, scalars = subresultant_prs(f, g)
    if remainders[-1].degree > 0:
        return S.zero()
    return scalars[-1]


def discriminant(f: Polynomial):
    """
    Discriminant (-1)^(n(n-1)/2) * Res(f, f') / lc(f).

    Raises:
        DegenerateInputError: f is constant
    """
    if f.is_zero() or f.degree < 1:
        raise DegenerateInputError("discriminant needs a polynomial of degree >= 1")
    S = f.structure
    n = f.degree
    r = S.exact_div(resultant(f, f.derivative()), f.leading_coefficient)
    return S.neg(r) if (n * (n - 1) // 2) % 2 else r
