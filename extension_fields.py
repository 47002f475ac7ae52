"""
Simple algebraic extensions K = base[alpha] / (m(alpha)).

Elements are polynomials over the base field of degree below deg m, reduced
modulo m. Over a prime field this gives GF(p^k); over Q it gives an
algebraic number field.

Construction is one-way: the defining polynomial must already exist over
the base structure, so a field can never appear in its own definition.
The base structure and the modulus are shared by reference between all
elements.
"""
import itertools

from algebra_structures import (
    FIELD,
    FINITE_FIELD,
    Capability,
    FieldMixin,
    PrimeField,
    RationalField,
    Structure,
    require,
)
from errors import DegenerateInputError, StructureMismatchError
from polynomials import Polynomial


class ExtensionField(FieldMixin, Structure):
    """
    Field extension of `base` by a root of the irreducible `modulus`.

    Irreducibility of the modulus is a caller guarantee; a reducible modulus
    is detected only when an inversion hits a zero divisor.
    """

    def __init__(self, modulus: Polynomial, name: str = "alpha"):
        if not isinstance(modulus, Polynomial):
            raise TypeError("the defining polynomial must be a Polynomial over the base field")
        base = modulus.structure
        require(base, Capability.FIELD, operation="field extension")
        if modulus.is_zero() or modulus.degree < 1:
            raise DegenerateInputError("the defining polynomial must have degree >= 1")
        self.base = base
        self.modulus = modulus.monic()
        self.name = name
        self.characteristic = base.characteristic
        self.capabilities = FINITE_FIELD if base.has(Capability.FINITE_FIELD) else FIELD

    def _key(self) -> tuple:
        return ("ExtensionField", self.modulus)

    def __repr__(self):
        return f"ExtensionField({self.modulus!r})"

    @property
    def degree(self) -> int:
        return self.modulus.degree

    def zero(self):
        return Polynomial.zero(self.base)

    def one(self):
        return Polynomial.one(self.base)

    def element(self, value):
        if isinstance(value, Polynomial):
            if value.structure != self.base:
                raise StructureMismatchError(f"{value!r} is not over {self.base!r}")
            return value % self.modulus
        if isinstance(value, (list, tuple)):
            return Polynomial(value, self.base) % self.modulus
        return Polynomial.constant(value, self.base)

    def generator(self):
        """The class of x, a root of the modulus."""
        return Polynomial.x(self.base) % self.modulus

    def is_zero(self, a) -> bool:
        return a.is_zero()

    def is_one(self, a) -> bool:
        return a.is_one()

    def sort_key(self, a):
        return a.sort_key()

    def add(self, a, b):
        return a + b

    def sub(self, a, b):
        return a - b

    def neg(self, a):
        return -a

    def mul(self, a, b):
        return (a * b) % self.modulus

    def inv(self, a):
        from poly_gcd import extended_gcd

        if a.is_zero():
            raise ZeroDivisionError("inverse of zero")
        h, u, _ = extended_gcd(a, self.modulus)
        if h.degree > 0:
            raise DegenerateInputError(f"{self.modulus} is reducible: {h} divides it")
        return u % self.modulus

    def norm(self, a):
        """N(a) = Res(m, a), the product of the conjugates of a."""
        from poly_gcd import resultant

        return resultant(self.modulus, a)

    def trace(self, a):
        """Trace of multiplication by a on the power basis."""
        S = self.base
        total = S.zero()
        basis = self.one()
        alpha = self.generator()
        for i in range(self.degree):
            total = S.add(total, self.mul(a, basis)[i])
            basis = self.mul(basis, alpha)
        return total

    # Finite fields

    @property
    def order(self) -> int:
        require(self, Capability.FINITE_FIELD, operation="order")
        return self.base.order ** self.degree

    def elements(self):
        require(self, Capability.FINITE_FIELD, operation="element enumeration")
        for coeffs in itertools.product(self.base.elements(), repeat=self.degree):
            yield Polynomial._make(coeffs, self.base)

    def random_element(self, rng):
        require(self, Capability.FINITE_FIELD, operation="random sampling")
        return Polynomial._make(
            [self.base.random_element(rng) for _ in range(self.degree)], self.base
        )


def number_field(coeffs, name: str = "alpha") -> ExtensionField:
    """Q(alpha) where alpha is a root of the polynomial with rational coeffs."""
    return ExtensionField(Polynomial(coeffs, RationalField()), name=name)


def galois_field(p: int, k: int = 1, modulus=None) -> Structure:
    """
    GF(p^k).

    Without an explicit modulus the first irreducible monic polynomial of
    degree k in lexicographic order is used. k == 1 gives PrimeField(p).
    """
    base = PrimeField(p)
    if modulus is not None:
        return ExtensionField(Polynomial(modulus, base))
    if k == 1:
        return base
    if k < 1:
        raise ValueError(f"extension degree must be >= 1, got {k}")
    return ExtensionField(_first_irreducible(base, k))


def _first_irreducible(base: PrimeField, k: int) -> Polynomial:
    from finite_field_factor import is_irreducible_finite_field

    p = base.p
    for n in range(p ** k):
        tail = []
        for _ in range(k):
            n, digit = divmod(n, p)
            tail.append(digit)
        if tail[0] == 0:
            continue
        candidate = Polynomial._make(tail + [1], base)
        if is_irreducible_finite_field(candidate):
            return candidate
    raise DegenerateInputError(f"no irreducible polynomial of degree {k} over F_{p}")
