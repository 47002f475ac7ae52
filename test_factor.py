import unittest
import random
from fractions import Fraction

from algebra_structures import IntegerRing, RationalField
from errors import CapabilityError, DegenerateInputError
from poly_factorization import factor, factor_list, is_irreducible
from polynomials import Polynomial, PolynomialRing

Z = IntegerRing()
Q = RationalField()


def zpoly(*coeffs):
    return Polynomial(coeffs, Z)


def qpoly(*coeffs):
    return Polynomial(coeffs, Q)


def assert_irreducible_factors(test, result):
    """Every factor is irreducible and no two factors are associates"""
    seen = set()
    for g, m in result:
        test.assertGreaterEqual(m, 1)
        test.assertTrue(is_irreducible(g), f"{g} should be irreducible")
        normal = g.unit_normal()[1]
        test.assertNotIn(normal, seen)
        seen.add(normal)


class TestFactorIntegers(unittest.TestCase):
    """Berlekamp-Zassenhaus over Z"""

    def test_quadratic(self):
        """x^2 - 5x + 6 = (x - 2)(x - 3)"""
        result = factor(zpoly(6, -5, 1))
        self.assertEqual(result.unit, 1)
        self.assertEqual(list(result), [(zpoly(-3, 1), 1), (zpoly(-2, 1), 1)])

    def test_x15_minus_1(self):
        f = zpoly(-1, *([0] * 14), 1)
        result = factor(f)
        self.assertEqual(result.unit, 1)
        expected = [
            zpoly(-1, 1),
            zpoly(1, 1, 1),
            zpoly(1, 1, 1, 1, 1),
            zpoly(1, -1, 0, 1, -1, 1, 0, -1, 1),
        ]
        self.assertEqual([g for g, _ in result], expected)
        self.assertEqual(result.multiplicities(), [1, 1, 1, 1])
        self.assertEqual(result.expand(), f)

    def test_factor_zero_raises(self):
        with self.assertRaises(DegenerateInputError):
            factor(Polynomial.zero(Z))

    def test_constant(self):
        result = factor(zpoly(-6))
        self.assertEqual(result.unit, -6)
        self.assertEqual(len(result), 0)

    def test_content_and_sign_in_unit(self):
        result = factor(zpoly(2, 0, -2))
        self.assertEqual(result.unit, -2)
        self.assertEqual(list(result), [(zpoly(-1, 1), 1), (zpoly(1, 1), 1)])
        self.assertEqual(result.expand(), zpoly(2, 0, -2))

    def test_non_monic_factors(self):
        result = factor(zpoly(2, 1) * zpoly(-1, 3))
        self.assertEqual(list(result), [(zpoly(2, 1), 1), (zpoly(-1, 3), 1)])

    def test_power_of_x(self):
        result = factor(zpoly(0, 0, 1, 1))
        self.assertEqual(list(result), [(zpoly(0, 1), 2), (zpoly(1, 1), 1)])

    def test_repeated_factors(self):
        f = zpoly(-1, 1) ** 2 * zpoly(1, 0, 1) ** 3
        result = factor(f)
        self.assertEqual(list(result), [(zpoly(-1, 1), 2), (zpoly(1, 0, 1), 3)])

    def test_x4_plus_1_is_irreducible(self):
        """Reducible modulo every prime, irreducible over Z"""
        f = zpoly(1, 0, 0, 0, 1)
        self.assertEqual(list(factor(f)), [(f, 1)])

    def test_swinnerton_dyer(self):
        f = zpoly(1, 0, -10, 0, 1)
        self.assertEqual(list(factor(f)), [(f, 1)])

    def test_large_coefficients(self):
        a = zpoly(-123456789, 0, 1)
        b = zpoly(987654321, 1000, 0, 1)
        result = factor(a * b)
        self.assertEqual(list(result), [(a, 1), (b, 1)])

    def test_round_trip(self):
        """unit * prod(factor^m) reproduces f"""
        rng = random.Random(2024)
        for _ in range(12):
            f = Polynomial.one(Z)
            for _ in range(rng.randint(1, 3)):
                g = zpoly(*[rng.randint(-4, 4) for _ in range(rng.randint(2, 3))], rng.randint(1, 3))
                f = f * g ** rng.randint(1, 2)
            result = factor(f)
            self.assertEqual(result.expand(), f)
            assert_irreducible_factors(self, result)

    def test_factor_list(self):
        unit, factors = factor_list(zpoly(6, -5, 1))
        self.assertEqual(unit, 1)
        self.assertEqual(factors, [(zpoly(-3, 1), 1), (zpoly(-2, 1), 1)])


class TestKroneckerMethod(unittest.TestCase):
    """Kronecker's method through the dispatcher"""

    def test_same_result_as_zassenhaus(self):
        f = zpoly(6, -5, 1)
        self.assertEqual(factor(f, method="kronecker"), factor(f))

    def test_sophie_germain(self):
        """x^4 + 4 = (x^2 - 2x + 2)(x^2 + 2x + 2)"""
        result = factor(zpoly(4, 0, 0, 0, 1), method="kronecker")
        self.assertEqual(list(result), [(zpoly(2, -2, 1), 1), (zpoly(2, 2, 1), 1)])

    def test_unknown_method(self):
        with self.assertRaises(ValueError):
            factor(zpoly(6, -5, 1), method="berlekamp")


class TestFactorRationals(unittest.TestCase):

    def test_monic_factors(self):
        f = qpoly(Fraction(-1, 2), 0, Fraction(1, 2))
        result = factor(f)
        self.assertEqual(result.unit, Fraction(1, 2))
        self.assertEqual(list(result), [(qpoly(-1, 1), 1), (qpoly(1, 1), 1)])
        self.assertEqual(result.expand(), f)

    def test_rational_roots(self):
        f = qpoly(Fraction(1, 3), 1) * qpoly(Fraction(-3, 2), 1)
        result = factor(f)
        self.assertEqual(list(result), [(qpoly(Fraction(-3, 2), 1), 1), (qpoly(Fraction(1, 3), 1), 1)])


class TestIsIrreducible(unittest.TestCase):

    def test_integers(self):
        self.assertTrue(is_irreducible(zpoly(1, 0, 1)))
        self.assertTrue(is_irreducible(zpoly(-1, 2)))
        self.assertFalse(is_irreducible(zpoly(-1, 0, 1)))
        self.assertFalse(is_irreducible(zpoly(2, 2)))

    def test_constants_and_zero(self):
        self.assertFalse(is_irreducible(zpoly(5)))
        self.assertFalse(is_irreducible(Polynomial.zero(Z)))

    def test_rationals(self):
        self.assertTrue(is_irreducible(qpoly(2, 2)))
        self.assertFalse(is_irreducible(qpoly(-4, 0, 1)))


class TestDispatch(unittest.TestCase):

    def test_no_algorithm_for_structure(self):
        """Polynomials over Z[y] have no factorization route"""
        R = PolynomialRing(Z)
        f = Polynomial([zpoly(0, 1), 1], R)
        with self.assertRaises(CapabilityError):
            factor(f)


if __name__ == '__main__':
    unittest.main(verbosity=2)
