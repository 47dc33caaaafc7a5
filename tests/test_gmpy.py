import unittest
from clhe import gmpy


class Arithmetic(unittest.TestCase):

    def test_basic(self):
        self.assertFalse(gmpy.is_prime(1))
        self.assertTrue(gmpy.is_prime(2))
        self.assertTrue(gmpy.is_prime(101))
        self.assertFalse(gmpy.is_prime(561))
        self.assertTrue(gmpy.is_prime(2**16+1))
        self.assertFalse(gmpy.is_prime(41041))

        self.assertEqual(gmpy.next_prime(1), 2)
        self.assertEqual(gmpy.next_prime(2), 3)
        self.assertEqual(gmpy.next_prime(256), 257)

        self.assertEqual(gmpy.powmod(3, 256, 257), 1)
        self.assertEqual(gmpy.powmod(-623, 1, 3), 1)

        self.assertEqual(gmpy.gcdext(3, 257), (1, 86, -1))
        self.assertEqual(gmpy.gcdext(1234, 257), (1, -126, 605))
        self.assertEqual(gmpy.gcdext(-1234*3, -257*3), (3, 126, -605))

        self.assertEqual(gmpy.invert(3, 257), 86)
        self.assertEqual(gmpy.invert(5, 7), 3)
        self.assertRaises(ZeroDivisionError, gmpy.invert, 2, 0)
        self.assertRaises(ZeroDivisionError, gmpy.invert, 2, 4)

        self.assertEqual(gmpy.isqrt(0), 0)
        self.assertEqual(gmpy.isqrt(1225), 35)

        self.assertTrue(gmpy.iroot(0, 10)[1])
        self.assertFalse(gmpy.iroot(1226, 2)[1])
        self.assertEqual(gmpy.iroot(1226, 2)[0], 35)
        self.assertEqual(gmpy.iroot(3**10 + 42, 10)[0], 3)
        self.assertEqual(gmpy.iroot(30527//4, 4)[0], 9)

    def test_symbols(self):
        self.assertEqual(gmpy.jacobi(2, 15), 1)
        self.assertEqual(gmpy.jacobi(7, 89), -1)
        self.assertEqual(gmpy.jacobi(7, 29), 1)

        self.assertEqual(gmpy.kronecker(-623, 3), 1)
        self.assertEqual(gmpy.kronecker(-623, 7), 0)
        self.assertEqual(gmpy.kronecker(-23, 7), -1)

    def test_exports(self):
        self.assertEqual(sorted(gmpy.__all__),
                         sorted(['gcdext', 'invert', 'iroot', 'is_prime', 'isqrt', 'jacobi',
                                 'kronecker', 'next_prime', 'powmod', 'prev_prime']))
        for name in gmpy.__all__:
            self.assertTrue(callable(getattr(gmpy, name)))

    def test_prev_prime(self):
        self.assertEqual(gmpy.prev_prime(3), 2)
        self.assertEqual(gmpy.prev_prime(7), 5)
        self.assertEqual(gmpy.prev_prime(8), 7)
        self.assertEqual(gmpy.prev_prime(1000), 997)
        self.assertEqual(gmpy.prev_prime(2**16), 65521)
        self.assertRaises(ValueError, gmpy.prev_prime, 2)
        self.assertRaises(ValueError, gmpy.prev_prime, 0)


if __name__ == "__main__":
    unittest.main()
