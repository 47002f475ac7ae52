"""
Dense univariate polynomials over a coefficient structure.

A Polynomial is an immutable tuple of coefficients (index = exponent) with
no trailing zeros, plus the structure handle that does the coefficient
arithmetic. All operations return new polynomials in canonical form.

Multiplication goes through multiply_coefficients, a single convolution
primitive. For word-size prime fields above _SIMD_MIN_LENGTH it hands the
work to the Numba kernel in simd_operations; any faster product (Karatsuba,
FFT) can be dropped in there.
"""
import math

import numpy as np

from algebra_structures import (
    Capability,
    DOMAIN,
    EUCLIDEAN_UFD,
    PrimeField,
    Structure,
    require,
)
from errors import CapabilityError, DegenerateInputError, NotDivisibleError, StructureMismatchError
from simd_operations import _poly_divmod_mod_simd, _poly_mul_mod_simd

# Degree of the zero polynomial
ZERO_DEGREE = -math.inf

# Kernel dispatch: only worth the array conversion above this length
_SIMD_MIN_LENGTH = 32
# Products of two residues must fit in int64
_SIMD_MAX_MODULUS = 2 ** 31


def _simd_eligible(structure: Structure, *lengths: int) -> bool:
    return (
        isinstance(structure, PrimeField)
        and structure.p < _SIMD_MAX_MODULUS
        and min(lengths) >= _SIMD_MIN_LENGTH
    )


def _strip(coeffs, structure: Structure) -> tuple:
    end = len(coeffs)
    while end and structure.is_zero(coeffs[end - 1]):
        end -= 1
    return tuple(coeffs[:end])


def multiply_coefficients(a, b, structure: Structure) -> list:
    """
    Convolution of two coefficient sequences.

    Args:
        a, b: Coefficient sequences (index = exponent)
        structure: Structure that owns the coefficients

    Returns:
        Coefficients of the product (possibly with trailing zeros)
    """
    if not a or not b:
        return []
    if _simd_eligible(structure, len(a), len(b)):
        out = _poly_mul_mod_simd(
            np.asarray(a, dtype=np.int64), np.asarray(b, dtype=np.int64), structure.p
        )
        return [int(c) for c in out]
    S = structure
    out = [S.zero()] * (len(a) + len(b) - 1)
    for i, ai in enumerate(a):
        if S.is_zero(ai):
            continue
        for j, bj in enumerate(b):
            out[i + j] = S.add(out[i + j], S.mul(ai, bj))
    return out


class Polynomial:
    """Immutable dense polynomial over a coefficient structure."""

    __slots__ = ("structure", "coeffs", "_hash")

    def __init__(self, coeffs=(), structure: Structure | None = None):
        if structure is None:
            raise TypeError("a coefficient structure is required")
        self.structure = structure
        self.coeffs = _strip([structure.element(c) for c in coeffs], structure)
        self._hash = None

    @classmethod
    def _make(cls, coeffs, structure: Structure) -> "Polynomial":
        # coefficients are already elements of structure
        poly = cls.__new__(cls)
        poly.structure = structure
        poly.coeffs = _strip(coeffs, structure)
        poly._hash = None
        return poly

    # Construction

    @classmethod
    def zero(cls, structure: Structure) -> "Polynomial":
        return cls._make((), structure)

    @classmethod
    def one(cls, structure: Structure) -> "Polynomial":
        return cls._make((structure.one(),), structure)

    @classmethod
    def constant(cls, c, structure: Structure) -> "Polynomial":
        return cls._make((structure.element(c),), structure)

    @classmethod
    def monomial(cls, c, n: int, structure: Structure) -> "Polynomial":
        if n < 0:
            raise ValueError(f"negative exponent {n}")
        return cls._make([structure.zero()] * n + [structure.element(c)], structure)

    @classmethod
    def x(cls, structure: Structure) -> "Polynomial":
        return cls._make((structure.zero(), structure.one()), structure)

    @classmethod
    def from_terms(cls, terms, structure: Structure) -> "Polynomial":
        """
        Build a polynomial from sparse (coefficient, exponent) pairs.

        Repeated exponents are summed.
        """
        terms = [(structure.element(c), e) for c, e in terms]
        if any(e < 0 for _, e in terms):
            raise ValueError("exponents must be non-negative")
        size = max((e for _, e in terms), default=-1) + 1
        coeffs = [structure.zero()] * size
        for c, e in terms:
            coeffs[e] = structure.add(coeffs[e], c)
        return cls._make(coeffs, structure)

    # Inspection

    @property
    def degree(self):
        """Degree, or ZERO_DEGREE (-inf) for the zero polynomial."""
        return len(self.coeffs) - 1 if self.coeffs else ZERO_DEGREE

    @property
    def leading_coefficient(self):
        return self.coeffs[-1] if self.coeffs else self.structure.zero()

    def is_zero(self) -> bool:
        return not self.coeffs

    def is_constant(self) -> bool:
        return len(self.coeffs) <= 1

    def is_one(self) -> bool:
        return len(self.coeffs) == 1 and self.structure.is_one(self.coeffs[0])

    def is_monic(self) -> bool:
        return bool(self.coeffs) and self.structure.is_one(self.coeffs[-1])

    def __getitem__(self, i: int):
        if 0 <= i < len(self.coeffs):
            return self.coeffs[i]
        return self.structure.zero()

    def __bool__(self):
        return bool(self.coeffs)

    def __eq__(self, other):
        return (
            isinstance(other, Polynomial)
            and self.structure == other.structure
            and self.coeffs == other.coeffs
        )

    def __hash__(self):
        if self._hash is None:
            self._hash = hash((self.structure, self.coeffs))
        return self._hash

    def __repr__(self):
        return f"Polynomial({list(self.coeffs)!r}, {self.structure!r})"

    def __str__(self):
        if not self.coeffs:
            return "0"
        terms = []
        for i in range(len(self.coeffs) - 1, -1, -1):
            c = self.coeffs[i]
            if self.structure.is_zero(c):
                continue
            if i == 0:
                terms.append(f"({c})" if isinstance(c, Polynomial) else str(c))
                continue
            power = "x" if i == 1 else f"x^{i}"
            if self.structure.is_one(c):
                terms.append(power)
            elif isinstance(c, Polynomial):
                terms.append(f"({c})*{power}")
            else:
                terms.append(f"{c}*{power}")
        return " + ".join(terms)

    def sort_key(self) -> tuple:
        """Total order: by degree, then coefficients from the top down."""
        key = self.structure.sort_key
        return (len(self.coeffs), tuple(key(c) for c in reversed(self.coeffs)))

    # Arithmetic

    def _check(self, other) -> None:
        if not isinstance(other, Polynomial):
            raise TypeError(f"expected a Polynomial, got {type(other).__name__}")
        if other.structure != self.structure:
            raise StructureMismatchError(
                f"{self.structure!r} and {other.structure!r} differ; embed one explicitly"
            )

    def __add__(self, other):
        self._check(other)
        S = self.structure
        a, b = self.coeffs, other.coeffs
        if len(a) < len(b):
            a, b = b, a
        out = list(a)
        for i, c in enumerate(b):
            out[i] = S.add(out[i], c)
        return Polynomial._make(out, S)

    def __neg__(self):
        S = self.structure
        return Polynomial._make([S.neg(c) for c in self.coeffs], S)

    def __sub__(self, other):
        self._check(other)
        return self + (-other)

    def __mul__(self, other):
        self._check(other)
        return Polynomial._make(
            multiply_coefficients(self.coeffs, other.coeffs, self.structure), self.structure
        )

    def __pow__(self, n: int):
        if n < 0:
            raise ValueError("negative powers of polynomials are not defined")
        result = Polynomial.one(self.structure)
        base = self
        while n:
            if n & 1:
                result = result * base
            n >>= 1
            if n:
                base = base * base
        return result

    def scale(self, c) -> "Polynomial":
        """Multiply every coefficient by the structure element c."""
        S = self.structure
        return Polynomial._make([S.mul(c, a) for a in self.coeffs], S)

    def shift_degree(self, n: int) -> "Polynomial":
        """Multiply by x^n."""
        if not self.coeffs:
            return self
        return Polynomial._make([self.structure.zero()] * n + list(self.coeffs), self.structure)

    def evaluate(self, point):
        """Horner evaluation at a structure element."""
        S = self.structure
        result = S.zero()
        for c in reversed(self.coeffs):
            result = S.add(S.mul(result, point), c)
        return result

    def __call__(self, point):
        return self.evaluate(self.structure.element(point))

    def derivative(self) -> "Polynomial":
        S = self.structure
        return Polynomial._make(
            [S.mul(S.from_int(i), c) for i, c in enumerate(self.coeffs)][1:], S
        )

    def compose(self, inner: "Polynomial") -> "Polynomial":
        """self(inner(x))."""
        self._check(inner)
        result = Polynomial.zero(self.structure)
        for c in reversed(self.coeffs):
            result = result * inner + Polynomial._make((c,), self.structure)
        return result

    def shift(self, a) -> "Polynomial":
        """Taylor shift f(x + a)."""
        S = self.structure
        return self.compose(Polynomial._make((S.element(a), S.one()), S))

    def map_coefficients(self, structure: Structure, fn=None) -> "Polynomial":
        """
        Explicit embedding into another structure.

        Every coefficient goes through fn (identity by default) and then
        structure.element.
        """
        if fn is None:
            return Polynomial(self.coeffs, structure)
        return Polynomial([fn(c) for c in self.coeffs], structure)

    # Division

    def _leading_inverse(self):
        S = self.structure
        lc = self.leading_coefficient
        if S.has(Capability.FIELD):
            return S.inv(lc)
        if S.has(Capability.INTEGRAL_DOMAIN) and S.is_unit(lc):
            return S.exact_div(S.one(), lc)
        raise CapabilityError(
            f"division with remainder over {S!r} needs a field or a unit leading coefficient"
        )

    def __divmod__(self, other):
        self._check(other)
        if other.is_zero():
            raise ZeroDivisionError("polynomial division by zero")
        S = self.structure
        inv_lc = other._leading_inverse()
        n, m = len(self.coeffs), len(other.coeffs)
        if n < m:
            return Polynomial.zero(S), self
        if _simd_eligible(S, m):
            q, r = _poly_divmod_mod_simd(
                np.asarray(self.coeffs, dtype=np.int64),
                np.asarray(other.coeffs, dtype=np.int64),
                S.p,
            )
            return Polynomial._make([int(c) for c in q], S), Polynomial._make([int(c) for c in r], S)
        r = list(self.coeffs)
        q = [S.zero()] * (n - m + 1)
        b = other.coeffs
        for k in range(n - m, -1, -1):
            c = S.mul(r[k + m - 1], inv_lc)
            q[k] = c
            if S.is_zero(c):
                continue
            for j in range(m):
                r[k + j] = S.sub(r[k + j], S.mul(c, b[j]))
        return Polynomial._make(q, S), Polynomial._make(r[:m - 1], S)

    def __floordiv__(self, other):
        return divmod(self, other)[0]

    def __mod__(self, other):
        return divmod(self, other)[1]

    def pseudo_divmod(self, other: "Polynomial") -> tuple["Polynomial", "Polynomial"]:
        """
        Pseudo-division: lc(g)^(deg f - deg g + 1) * f = q * g + r.

        Works over any commutative ring; no inverses are taken.
        """
        self._check(other)
        if other.is_zero():
            raise ZeroDivisionError("polynomial pseudo-division by zero")
        S = self.structure
        n, m = len(self.coeffs), len(other.coeffs)
        if n < m:
            return Polynomial.zero(S), self
        lc = other.leading_coefficient
        N = n - m + 1
        q = Polynomial.zero(S)
        r = self
        while not r.is_zero() and r.degree >= other.degree:
            j = r.degree - other.degree
            N -= 1
            term = Polynomial.monomial(r.leading_coefficient, j, S)
            q = q.scale(lc) + term
            r = r.scale(lc) - other * term
        factor = S.pow(lc, N)
        return q.scale(factor), r.scale(factor)

    def pseudo_remainder(self, other: "Polynomial") -> "Polynomial":
        return self.pseudo_divmod(other)[1]

    def exact_quotient(self, other: "Polynomial") -> "Polynomial":
        """
        Quotient of an exact division over an integral domain.

        Raises:
            NotDivisibleError: other does not divide self
        """
        self._check(other)
        S = self.structure
        require(S, Capability.INTEGRAL_DOMAIN, operation="exact polynomial division")
        if other.is_zero():
            raise ZeroDivisionError("polynomial division by zero")
        n, m = len(self.coeffs), len(other.coeffs)
        if n < m:
            if n == 0:
                return self
            raise NotDivisibleError("divisor has larger degree than dividend")
        if S.has(Capability.FIELD):
            q, r = divmod(self, other)
            if not r.is_zero():
                raise NotDivisibleError("nonzero remainder")
            return q
        r = list(self.coeffs)
        q = [S.zero()] * (n - m + 1)
        b = other.coeffs
        lc = b[-1]
        for k in range(n - m, -1, -1):
            c = S.exact_div(r[k + m - 1], lc)
            q[k] = c
            if S.is_zero(c):
                continue
            for j in range(m):
                r[k + j] = S.sub(r[k + j], S.mul(c, b[j]))
        if any(not S.is_zero(c) for c in r[:m - 1]):
            raise NotDivisibleError("nonzero remainder")
        return Polynomial._make(q, S)

    def divides(self, other: "Polynomial") -> bool:
        """True when self divides other exactly."""
        try:
            other.exact_quotient(self)
        except NotDivisibleError:
            return False
        return True

    def powmod(self, e: int, modulus: "Polynomial") -> "Polynomial":
        """self^e mod modulus by square-and-multiply."""
        result = Polynomial.one(self.structure) % modulus
        base = self % modulus
        while e:
            if e & 1:
                result = (result * base) % modulus
            e >>= 1
            if e:
                base = (base * base) % modulus
        return result

    # Normal forms

    def monic(self) -> "Polynomial":
        require(self.structure, Capability.FIELD, operation="monic")
        if self.is_zero():
            raise DegenerateInputError("the zero polynomial has no monic associate")
        return self.scale(self.structure.inv(self.leading_coefficient))

    def content(self):
        """gcd of the coefficients (zero for the zero polynomial)."""
        S = self.structure
        require(S, Capability.UFD, operation="content")
        g = S.zero()
        for c in self.coeffs:
            g = S.gcd(g, c)
            if S.is_one(g):
                break
        return g

    def primitive_part(self) -> "Polynomial":
        """self divided by its content, sign of the leading coefficient kept."""
        if self.is_zero():
            return self
        S = self.structure
        c = self.content()
        return Polynomial._make([S.exact_div(a, c) for a in self.coeffs], S)

    def unit_normal(self) -> tuple:
        """Split self = u * g with u a unit and g the canonical associate."""
        S = self.structure
        if self.is_zero():
            return S.one(), self
        if S.has(Capability.FIELD):
            return self.leading_coefficient, self.monic()
        u, _ = S.unit_normal(self.leading_coefficient)
        if S.is_one(u):
            return u, self
        return u, self.scale(S.exact_div(S.one(), u))

    def primitive(self) -> tuple:
        """
        Split self = c * g with g canonical.

        Over a field c is the leading coefficient and g is monic. Over a UFD
        c is the content times a unit, and g is primitive with a canonical
        (e.g. positive) leading coefficient.
        """
        S = self.structure
        if self.is_zero():
            return S.zero(), self
        if S.has(Capability.FIELD):
            return self.leading_coefficient, self.monic()
        c = self.content()
        u, g = self.primitive_part().unit_normal()
        return S.mul(c, u), g


class PolynomialRing(Structure):
    """
    Structure whose elements are polynomials over a base structure.

    Used to build coefficient towers, e.g. polynomials in y with coefficients
    in Q[x] for bivariate resultants. The base is shared by reference.
    """

    def __init__(self, base: Structure):
        self.base = base
        self.characteristic = base.characteristic
        if base.has(Capability.FIELD):
            self.capabilities = EUCLIDEAN_UFD
        elif base.has(Capability.UFD, Capability.INTEGRAL_DOMAIN):
            self.capabilities = DOMAIN | Capability.UFD
        elif base.has(Capability.INTEGRAL_DOMAIN):
            self.capabilities = DOMAIN
        else:
            self.capabilities = Capability.RING | Capability.COMMUTATIVE_RING

    def _key(self) -> tuple:
        return ("PolynomialRing", self.base)

    def __repr__(self):
        return f"PolynomialRing({self.base!r})"

    def zero(self):
        return Polynomial.zero(self.base)

    def one(self):
        return Polynomial.one(self.base)

    def element(self, value):
        if isinstance(value, Polynomial):
            if value.structure != self.base:
                raise StructureMismatchError(f"{value!r} is not over {self.base!r}")
            return value
        if isinstance(value, (list, tuple)):
            return Polynomial(value, self.base)
        return Polynomial.constant(value, self.base)

    def is_zero(self, a) -> bool:
        return a.is_zero()

    def is_one(self, a) -> bool:
        return a.is_one()

    def is_unit(self, a) -> bool:
        return a.degree == 0 and self.base.is_unit(a.coeffs[0])

    def pow(self, a, n: int):
        return a ** n

    def sort_key(self, a):
        return a.sort_key()

    def exact_div(self, a, b):
        return a.exact_quotient(b)

    def divmod(self, a, b):
        require(self, Capability.EUCLIDEAN_DOMAIN, operation="division with remainder")
        return divmod(a, b)

    def gcd(self, a, b):
        from poly_gcd import gcd
        return gcd(a, b)

    def unit_normal(self, a):
        u, g = a.unit_normal()
        return Polynomial.constant(u, self.base), g


def interpolate(points, values, field: Structure) -> Polynomial:
    """
    Newton interpolation through (points[i], values[i]) over a field.

    Points must be pairwise distinct.
    """
    require(field, Capability.FIELD, operation="interpolation")
    points = [field.element(a) for a in points]
    coeffs = [field.element(v) for v in values]
    n = len(points)
    # divided differences in place
    for j in range(1, n):
        for i in range(n - 1, j - 1, -1):
            num = field.sub(coeffs[i], coeffs[i - 1])
            den = field.sub(points[i], points[i - j])
            coeffs[i] = field.exact_div(num, den)
    result = Polynomial.zero(field)
    for i in range(n - 1, -1, -1):
        linear = Polynomial._make((field.neg(points[i]), field.one()), field)
        result = result * linear + Polynomial._make((coeffs[i],), field)
    return result


class Factorization:
    """
    unit * prod(factor ** multiplicity).

    Returned by factor() (irreducible factors) and by
    square_free_decomposition() (square-free, pairwise coprime parts).
    """

    __slots__ = ("unit", "factors", "structure")

    def __init__(self, unit, factors, structure: Structure):
        self.unit = unit
        self.factors = list(factors)
        self.structure = structure

    def expand(self) -> Polynomial:
        """Multiply the factorization back out."""
        result = Polynomial.constant(self.unit, self.structure)
        for f, m in self.factors:
            result = result * f ** m
        return result

    def sorted(self) -> "Factorization":
        """Copy with factors in canonical order (degree, then coefficients)."""
        factors = sorted(self.factors, key=lambda fm: (fm[0].sort_key(), fm[1]))
        return Factorization(self.unit, factors, self.structure)

    def multiplicities(self) -> list[int]:
        return [m for _, m in self.factors]

    def __iter__(self):
        return iter(self.factors)

    def __len__(self):
        return len(self.factors)

    def __eq__(self, other):
        return (
            isinstance(other, Factorization)
            and self.structure == other.structure
            and self.unit == other.unit
            and self.factors == other.factors
        )

    def __repr__(self):
        inner = ", ".join(f"({f}, {m})" for f, m in self.factors)
        return f"Factorization({self.unit}, [{inner}])"
