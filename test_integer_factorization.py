import unittest
import random

from integer_factorization import (
    is_prime, trial_division, pollard_rho_brent, factor_integer, divisors,
    iter_primes, clear_caches, get_small_primes
)


class TestPrimalityTesting(unittest.TestCase):
    """Test the Miller-Rabin primality test"""

    def test_small_primes(self):
        """Test known small primes"""
        small_primes = [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47]
        for p in small_primes:
            self.assertTrue(is_prime(p), f"{p} should be prime")

    def test_small_composites(self):
        """Test known small composites"""
        composites = [4, 6, 8, 9, 10, 12, 14, 15, 16, 18, 20, 21, 22, 24, 25]
        for c in composites:
            self.assertFalse(is_prime(c), f"{c} should be composite")

    def test_edge_cases(self):
        """Test edge cases"""
        self.assertFalse(is_prime(0))
        self.assertFalse(is_prime(1))
        self.assertFalse(is_prime(-5))
        self.assertTrue(is_prime(2))

    def test_large_primes(self):
        """Test some larger known primes"""
        large_primes = [
            104729,  # 10,000th prime
            1299709,  # 100,000th prime
            2147483647,  # 2^31 - 1
            2305843009213693951,  # 2^61 - 1
        ]
        for p in large_primes:
            self.assertTrue(is_prime(p), f"{p} should be prime")

    def test_carmichael_numbers(self):
        """Carmichael numbers fool the Fermat test but not Miller-Rabin"""
        for c in [561, 1105, 1729, 2465, 2821, 6601, 8911]:
            self.assertFalse(is_prime(c), f"{c} is a Carmichael number")


class TestPrimeIteration(unittest.TestCase):
    """Test prime enumeration used by the modular prime search"""

    def test_range_inside_sieve(self):
        self.assertEqual(list(iter_primes(3, 20)), [3, 5, 7, 11, 13, 17, 19])

    def test_range_crossing_sieve_limit(self):
        """Primes above the sieve come from Miller-Rabin"""
        self.assertEqual(list(iter_primes(9990, 10040)), [10007, 10009, 10037, 10039])

    def test_empty_range(self):
        self.assertEqual(list(iter_primes(3, 3)), [])

    def test_unbounded(self):
        primes = iter_primes(100)
        self.assertEqual([next(primes) for _ in range(3)], [101, 103, 107])


class TestTrialDivision(unittest.TestCase):
    """Test trial division"""

    def test_small_number(self):
        """360 = 2^3 * 3^2 * 5"""
        factors, remainder = trial_division(360, bound=10000)
        self.assertEqual(remainder, 1)
        self.assertEqual(sorted(factors), [2, 2, 2, 3, 3, 5])

    def test_large_prime_beyond_bound(self):
        """A prime above the bound is left as the cofactor"""
        factors, remainder = trial_division(100003, bound=1000)
        self.assertEqual(factors, [])
        self.assertEqual(remainder, 100003)

    def test_rejects_nonpositive(self):
        with self.assertRaises(ValueError):
            trial_division(0)


class TestPollardRho(unittest.TestCase):
    """Test Brent's variant of Pollard Rho"""

    def test_finds_factor(self):
        """The returned value always divides n"""
        for n in [8051, 10403, 1000000016000000063]:
            d = pollard_rho_brent(n)
            self.assertEqual(n % d, 0)

    def test_even_and_multiple_of_three(self):
        self.assertEqual(pollard_rho_brent(1000), 2)
        self.assertEqual(pollard_rho_brent(999), 3)

    def test_explicit_rng(self):
        """Same seed, same factor"""
        n = 10403
        self.assertEqual(pollard_rho_brent(n, random.Random(7)), pollard_rho_brent(n, random.Random(7)))


class TestFactorInteger(unittest.TestCase):
    """Test complete integer factorization"""

    def test_factor_one(self):
        self.assertEqual(factor_integer(1), {})

    def test_factor_zero_raises(self):
        with self.assertRaises(ValueError):
            factor_integer(0)

    def test_factor_small_composite(self):
        self.assertEqual(factor_integer(360), {2: 3, 3: 2, 5: 1})

    def test_factor_negative(self):
        """Sign is dropped"""
        self.assertEqual(factor_integer(-12), {2: 2, 3: 1})

    def test_factor_semiprime_beyond_trial_division(self):
        n = 1000000007 * 998244353
        self.assertEqual(factor_integer(n), {998244353: 1, 1000000007: 1})

    def test_factor_perfect_square(self):
        self.assertEqual(factor_integer(10007 ** 2), {10007: 2})

    def test_random_composites(self):
        """Product of the factorization reproduces n"""
        rng = random.Random(42)
        for _ in range(50):
            n = rng.randrange(2, 10 ** 12)
            product = 1
            for p, e in factor_integer(n).items():
                self.assertTrue(is_prime(p))
                product *= p ** e
            self.assertEqual(product, n)


class TestDivisors(unittest.TestCase):
    """Test divisor enumeration used by Kronecker's method"""

    def test_divisors(self):
        self.assertEqual(divisors(12), [1, 2, 3, 4, 6, 12])
        self.assertEqual(divisors(1), [1])
        self.assertEqual(divisors(-6), [1, 2, 3, 6])

    def test_prime_power(self):
        self.assertEqual(divisors(32), [1, 2, 4, 8, 16, 32])


class TestOptimizations(unittest.TestCase):
    """Test caching behaviour"""

    def test_small_primes_cache(self):
        """Small primes are computed once"""
        clear_caches()
        primes = get_small_primes()
        self.assertGreater(len(primes), 1000)
        self.assertEqual(primes[0], 2)
        self.assertLessEqual(primes[-1], 10000)
        self.assertIs(primes, get_small_primes())

    def test_cache_clearing(self):
        """Test cache clearing functionality"""
        for n in [12, 143, 1024, 1073]:
            factor_integer(n)
            is_prime(n)
        self.assertGreater(is_prime.cache_info().currsize, 0)
        clear_caches()
        self.assertEqual(is_prime.cache_info().currsize, 0)


if __name__ == '__main__':
    unittest.main(verbosity=2)
