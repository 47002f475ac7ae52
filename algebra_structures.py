"""
Coefficient structures and the capability system.

A structure is a small immutable handle that knows how to do arithmetic on
its elements and which algebraic capabilities it provides. Polynomials carry
their structure; algorithms ask the structure what it can do and pick a
variant accordingly (Euclid over a field, subresultants over a domain, ...).

Structures defined here:

- IntegerRing   Z, elements are Python ints
- RationalField Q, elements are fractions.Fraction
- PrimeField    F_p, elements are ints in [0, p)

Extension fields and polynomial rings live in extension_fields.py and
polynomials.py since their elements are polynomials.
"""
import enum
import math
import numbers
from fractions import Fraction

from errors import CapabilityError, DegenerateInputError, NotDivisibleError
from integer_factorization import divisors, is_prime


class Capability(enum.Flag):
    RING = enum.auto()
    COMMUTATIVE_RING = enum.auto()
    INTEGRAL_DOMAIN = enum.auto()
    EUCLIDEAN_DOMAIN = enum.auto()
    UFD = enum.auto()
    FIELD = enum.auto()
    FINITE_FIELD = enum.auto()


DOMAIN = Capability.RING | Capability.COMMUTATIVE_RING | Capability.INTEGRAL_DOMAIN
EUCLIDEAN_UFD = DOMAIN | Capability.EUCLIDEAN_DOMAIN | Capability.UFD
FIELD = EUCLIDEAN_UFD | Capability.FIELD
FINITE_FIELD = FIELD | Capability.FINITE_FIELD


def require(structure: "Structure", *capabilities: Capability, operation: str | None = None) -> None:
    """
    Raise CapabilityError unless the structure provides every capability.

    Args:
        structure: Coefficient structure to check
        capabilities: Capabilities the caller needs
        operation: Name of the operation, used in the error message
    """
    missing = [c for c in capabilities if not structure.has(c)]
    if missing:
        names = ", ".join(c.name for c in missing)
        prefix = f"{operation} requires" if operation else "requires"
        raise CapabilityError(f"{prefix} {names}, which {structure!r} does not provide")


class Structure:
    """Base class for coefficient structures."""

    capabilities = Capability(0)
    characteristic = 0

    def has(self, *capabilities: Capability) -> bool:
        wanted = Capability(0)
        for c in capabilities:
            wanted |= c
        return (self.capabilities & wanted) == wanted

    def _key(self) -> tuple:
        return (type(self).__name__,)

    def __eq__(self, other):
        return isinstance(other, Structure) and self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return f"{type(self).__name__}()"

    # Ring operations

    def zero(self):
        raise NotImplementedError

    def one(self):
        raise NotImplementedError

    def element(self, value):
        """Convert a Python literal (or an own element) into an element."""
        raise NotImplementedError

    def from_int(self, n: int):
        return self.element(n)

    def add(self, a, b):
        return a + b

    def sub(self, a, b):
        return a - b

    def neg(self, a):
        return -a

    def mul(self, a, b):
        return a * b

    def pow(self, a, n: int):
        if n < 0:
            return self.pow(self.inv(a), -n)
        result = self.one()
        while n:
            if n & 1:
                result = self.mul(result, a)
            n >>= 1
            if n:
                a = self.mul(a, a)
        return result

    def is_zero(self, a) -> bool:
        return a == self.zero()

    def is_one(self, a) -> bool:
        return a == self.one()

    def is_unit(self, a) -> bool:
        return self.is_one(a) or self.is_one(self.neg(a))

    def sort_key(self, a):
        return a

    # Capability-gated operations

    def exact_div(self, a, b):
        require(self, Capability.INTEGRAL_DOMAIN, operation="exact division")
        raise NotImplementedError

    def divmod(self, a, b):
        require(self, Capability.EUCLIDEAN_DOMAIN, operation="division with remainder")
        raise NotImplementedError

    def gcd(self, a, b):
        require(self, Capability.UFD, operation="gcd")
        raise NotImplementedError

    def unit_normal(self, a):
        """Return (u, n) with a = u * n, u a unit and n the canonical associate."""
        require(self, Capability.UFD, operation="unit normalization")
        raise NotImplementedError

    def inv(self, a):
        require(self, Capability.FIELD, operation="inversion")
        raise NotImplementedError

    # Finite fields

    @property
    def order(self) -> int:
        require(self, Capability.FINITE_FIELD, operation="order")
        raise NotImplementedError

    def elements(self):
        require(self, Capability.FINITE_FIELD, operation="element enumeration")
        raise NotImplementedError

    def random_element(self, rng):
        require(self, Capability.FINITE_FIELD, operation="random sampling")
        raise NotImplementedError

    def pth_root(self, a):
        """Inverse of the Frobenius map a -> a^p."""
        require(self, Capability.FINITE_FIELD, operation="p-th root")
        return self.pow(a, self.order // self.characteristic)


class FieldMixin:
    """Division operations every field gets for free from `inv`."""

    def exact_div(self, a, b):
        return self.mul(a, self.inv(b))

    def divmod(self, a, b):
        return self.exact_div(a, b), self.zero()

    def gcd(self, a, b):
        if self.is_zero(a) and self.is_zero(b):
            return self.zero()
        return self.one()

    def unit_normal(self, a):
        if self.is_zero(a):
            return self.one(), a
        return a, self.one()

    def is_unit(self, a) -> bool:
        return not self.is_zero(a)


class IntegerRing(Structure):
    """The integers as a Euclidean UFD."""

    capabilities = EUCLIDEAN_UFD

    def zero(self):
        return 0

    def one(self):
        return 1

    def element(self, value):
        if isinstance(value, Fraction) and value.denominator == 1:
            return int(value)
        if isinstance(value, numbers.Integral):
            return int(value)
        raise TypeError(f"cannot use {value!r} as an integer")

    def is_zero(self, a) -> bool:
        return a == 0

    def is_unit(self, a) -> bool:
        return a == 1 or a == -1

    def exact_div(self, a, b):
        if b == 0:
            raise ZeroDivisionError("integer division by zero")
        q, r = divmod(a, b)
        if r:
            raise NotDivisibleError(f"{b} does not divide {a}")
        return q

    def divmod(self, a, b):
        return divmod(a, b)

    def gcd(self, a, b):
        return math.gcd(a, b)

    def unit_normal(self, a):
        return (-1, -a) if a < 0 else (1, a)

    def divisors(self, a: int) -> list[int]:
        """Positive divisors of a nonzero integer."""
        if a == 0:
            raise DegenerateInputError("zero has infinitely many divisors")
        return divisors(abs(a))

    def fraction_field(self) -> "RationalField":
        return RationalField()


class RationalField(FieldMixin, Structure):
    """The rationals, with exact fractions.Fraction arithmetic."""

    capabilities = FIELD

    def zero(self):
        return Fraction(0)

    def one(self):
        return Fraction(1)

    def element(self, value):
        if isinstance(value, (Fraction, numbers.Integral)):
            return Fraction(value)
        raise TypeError(f"cannot use {value!r} as an exact rational")

    def is_zero(self, a) -> bool:
        return a == 0

    def inv(self, a):
        if a == 0:
            raise ZeroDivisionError("inverse of zero")
        return 1 / a


class PrimeField(FieldMixin, Structure):
    """The field of integers modulo a prime p."""

    capabilities = FINITE_FIELD

    def __init__(self, p: int):
        if not isinstance(p, int) or not is_prime(p):
            raise ValueError(f"p must be a prime, got {p!r}")
        self.p = p
        self.characteristic = p

    def _key(self) -> tuple:
        return ("PrimeField", self.p)

    def __repr__(self):
        return f"PrimeField({self.p})"

    def zero(self):
        return 0

    def one(self):
        return 1

    def element(self, value):
        if isinstance(value, Fraction):
            return value.numerator * self.inv(value.denominator % self.p) % self.p
        if isinstance(value, numbers.Integral):
            return int(value) % self.p
        raise TypeError(f"cannot use {value!r} as an element of F_{self.p}")

    def add(self, a, b):
        return (a + b) % self.p

    def sub(self, a, b):
        return (a - b) % self.p

    def neg(self, a):
        return -a % self.p

    def mul(self, a, b):
        return a * b % self.p

    def pow(self, a, n: int):
        if n < 0:
            return pow(self.inv(a), -n, self.p)
        return pow(a, n, self.p)

    def is_zero(self, a) -> bool:
        return a == 0

    def inv(self, a):
        if a % self.p == 0:
            raise ZeroDivisionError(f"0 has no inverse in F_{self.p}")
        return pow(a, -1, self.p)

    @property
    def order(self) -> int:
        return self.p

    def elements(self):
        return range(self.p)

    def random_element(self, rng):
        return rng.randrange(self.p)

    def pth_root(self, a):
        return a

    def symmetric(self, a: int) -> int:
        """Representative of a in the symmetric range (-p/2, p/2]."""
        a %= self.p
        return a - self.p if a > self.p // 2 else a
