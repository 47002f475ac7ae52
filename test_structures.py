import unittest
from fractions import Fraction

from algebra_structures import (
    Capability, IntegerRing, RationalField, PrimeField, require
)
from errors import CapabilityError, DegenerateInputError, NotDivisibleError, PolyFactorError
from extension_fields import ExtensionField, galois_field, number_field
from polynomials import Polynomial


class TestCapabilities(unittest.TestCase):
    """Test capability queries and enforcement"""

    def test_integer_capabilities(self):
        Z = IntegerRing()
        self.assertTrue(Z.has(Capability.UFD, Capability.EUCLIDEAN_DOMAIN))
        self.assertFalse(Z.has(Capability.FIELD))

    def test_field_capabilities(self):
        self.assertTrue(RationalField().has(Capability.FIELD))
        self.assertFalse(RationalField().has(Capability.FINITE_FIELD))
        self.assertTrue(PrimeField(5).has(Capability.FIELD, Capability.FINITE_FIELD))

    def test_require_names_missing_capability(self):
        with self.assertRaises(CapabilityError) as ctx:
            require(IntegerRing(), Capability.FIELD, operation="inversion")
        self.assertIn("FIELD", str(ctx.exception))
        self.assertIn("inversion", str(ctx.exception))

    def test_gated_operation_raises(self):
        """Inversion over Z is a capability violation"""
        with self.assertRaises(CapabilityError):
            IntegerRing().inv(2)

    def test_error_hierarchy(self):
        """Library errors are catchable by kind and by builtin base"""
        self.assertTrue(issubclass(CapabilityError, TypeError))
        self.assertTrue(issubclass(DegenerateInputError, ValueError))
        self.assertTrue(issubclass(NotDivisibleError, PolyFactorError))


class TestScalarStructures(unittest.TestCase):
    """Test Z, Q and F_p arithmetic"""

    def test_equality_and_hash(self):
        self.assertEqual(IntegerRing(), IntegerRing())
        self.assertEqual(hash(PrimeField(7)), hash(PrimeField(7)))
        self.assertNotEqual(PrimeField(5), PrimeField(7))
        self.assertNotEqual(IntegerRing(), RationalField())

    def test_integer_exact_division(self):
        Z = IntegerRing()
        self.assertEqual(Z.exact_div(6, -3), -2)
        with self.assertRaises(NotDivisibleError):
            Z.exact_div(7, 2)

    def test_integer_unit_normal(self):
        self.assertEqual(IntegerRing().unit_normal(-6), (-1, 6))
        self.assertEqual(IntegerRing().unit_normal(6), (1, 6))

    def test_integer_element(self):
        Z = IntegerRing()
        self.assertEqual(Z.element(Fraction(4, 2)), 2)
        with self.assertRaises(TypeError):
            Z.element(Fraction(1, 2))
        with self.assertRaises(TypeError):
            Z.element(1.0)

    def test_integer_divisors(self):
        self.assertEqual(IntegerRing().divisors(-12), [1, 2, 3, 4, 6, 12])
        with self.assertRaises(DegenerateInputError):
            IntegerRing().divisors(0)

    def test_rational_rejects_floats(self):
        with self.assertRaises(TypeError):
            RationalField().element(0.5)

    def test_rational_inverse(self):
        Q = RationalField()
        self.assertEqual(Q.inv(Fraction(2, 3)), Fraction(3, 2))
        with self.assertRaises(ZeroDivisionError):
            Q.inv(Q.zero())

    def test_prime_field_validation(self):
        with self.assertRaises(ValueError):
            PrimeField(4)
        with self.assertRaises(ValueError):
            PrimeField(1)

    def test_prime_field_arithmetic(self):
        F = PrimeField(7)
        self.assertEqual(F.element(-1), 6)
        self.assertEqual(F.element(Fraction(1, 2)), 4)
        self.assertEqual(F.inv(3), 5)
        self.assertEqual(F.pow(3, -1), 5)
        self.assertEqual(F.symmetric(6), -1)
        with self.assertRaises(ZeroDivisionError):
            F.inv(0)

    def test_prime_field_gcd_and_units(self):
        F = PrimeField(7)
        self.assertEqual(F.gcd(3, 0), 1)
        self.assertEqual(F.gcd(0, 0), 0)
        self.assertTrue(F.is_unit(3))
        self.assertFalse(F.is_unit(0))


class TestGaloisFields(unittest.TestCase):
    """Test GF(p^k) built as an extension of F_p"""

    def setUp(self):
        self.K = galois_field(3, 2)

    def test_prime_degree_is_prime_field(self):
        self.assertEqual(galois_field(2, 1), PrimeField(2))

    def test_first_irreducible_modulus(self):
        """x^2 + 1 is the first monic irreducible quadratic over F_3"""
        self.assertEqual(self.K.modulus, Polynomial([1, 0, 1], PrimeField(3)))
        self.assertEqual(self.K.order, 9)
        self.assertTrue(self.K.has(Capability.FINITE_FIELD))

    def test_elements(self):
        elements = list(self.K.elements())
        self.assertEqual(len(elements), 9)
        self.assertEqual(len(set(elements)), 9)

    def test_generator_squares_to_minus_one(self):
        alpha = self.K.generator()
        self.assertEqual(self.K.mul(alpha, alpha), self.K.element(-1))

    def test_multiplicative_group(self):
        """a^(q-1) = 1 for every nonzero a"""
        K = self.K
        for a in K.elements():
            if K.is_zero(a):
                continue
            self.assertTrue(K.is_one(K.pow(a, 8)))
            self.assertTrue(K.is_one(K.mul(a, K.inv(a))))

    def test_pth_root_inverts_frobenius(self):
        K = self.K
        for a in K.elements():
            self.assertEqual(K.pth_root(K.pow(a, 3)), a)

    def test_inverse_of_zero(self):
        with self.assertRaises(ZeroDivisionError):
            self.K.inv(self.K.zero())

    def test_reducible_modulus_detected(self):
        """x^2 - 1 is reducible, so x - 1 has no inverse"""
        F = PrimeField(5)
        K = ExtensionField(Polynomial([-1, 0, 1], F))
        with self.assertRaises(DegenerateInputError):
            K.inv(K.element([-1, 1]))

    def test_explicit_modulus(self):
        K = galois_field(2, modulus=[1, 1, 1])
        self.assertEqual(K.order, 4)
        self.assertEqual(K.degree, 2)

    def test_invalid_degree(self):
        with self.assertRaises(ValueError):
            galois_field(3, 0)


class TestNumberFields(unittest.TestCase):
    """Test Q(alpha)"""

    def setUp(self):
        self.K = number_field([-2, 0, 1])

    def test_capabilities(self):
        self.assertTrue(self.K.has(Capability.FIELD))
        self.assertFalse(self.K.has(Capability.FINITE_FIELD))
        with self.assertRaises(CapabilityError):
            self.K.order

    def test_sqrt_two(self):
        alpha = self.K.generator()
        self.assertEqual(self.K.mul(alpha, alpha), self.K.element(2))

    def test_inverse(self):
        """(1 + sqrt2)^-1 = sqrt2 - 1"""
        K = self.K
        a = K.element([1, 1])
        self.assertEqual(K.inv(a), K.element([-1, 1]))

    def test_norm_and_trace(self):
        K = self.K
        alpha = K.generator()
        self.assertEqual(K.norm(alpha), -2)
        self.assertEqual(K.norm(K.element([1, 1])), -1)
        self.assertEqual(K.trace(alpha), 0)
        self.assertEqual(K.trace(K.one()), 2)

    def test_modulus_must_be_over_field(self):
        with self.assertRaises(CapabilityError):
            ExtensionField(Polynomial([-2, 0, 1], IntegerRing()))

    def test_constant_modulus_rejected(self):
        with self.assertRaises(DegenerateInputError):
            number_field([3])


if __name__ == '__main__':
    unittest.main(verbosity=2)
