import unittest
from unittest.mock import patch
from clhe.clgroups import CLGroup
from clhe import encryption as enc
from clhe.encryption import Ciphertext, DecryptionError


class Arithmetic(unittest.TestCase):

    def setUp(self):
        self.CL = CLGroup(p=7, l=10)

    def test_keygen(self):
        CL = self.CL
        x, h = enc.keygen(CL)
        self.assertTrue(0 <= x < CL.bound)
        self.assertNotEqual(h, CL.identity)
        self.assertEqual(h, CL.generator^x)
        self.assertEqual(enc.public_key(CL, x), h)

    def test_toy(self):
        CL = self.CL
        x, h = enc.keygen(CL)
        c = enc.encrypt(h, 3)
        self.assertIsInstance(c, Ciphertext)
        self.assertEqual(enc.decrypt(x, c), 3)
        c = enc.add(enc.encrypt(h, 3), enc.encrypt(h, 5))
        self.assertEqual(enc.decrypt(x, c), 1)
        c = enc.scalar_mul(enc.encrypt(h, 2), 4)
        self.assertEqual(enc.decrypt(x, c), 1)

    def test_correctness(self):
        CL = self.CL
        x, h = enc.keygen(CL)
        for m in range(7):
            for r in (0, 1, 2, 12345, CL.bound - 1):
                c = enc.encrypt(h, m, r)
                self.assertEqual(c.c1, CL.generator^r)
                self.assertEqual(enc.decrypt(x, c), m)
        self.assertEqual(enc.decrypt(x, enc.encrypt(h, -1)), 6)
        self.assertEqual(enc.decrypt(x, enc.encrypt(h, 2**70 + 3)), (2**70 + 3) % 7)
        c = enc.encrypt(h, 0, 0)
        self.assertEqual(c, Ciphertext(CL.identity, CL.identity))
        self.assertEqual(enc.decrypt(x, c), 0)

    def test_homomorphism(self):
        CL = self.CL
        x, h = enc.keygen(CL)
        C = [enc.encrypt(h, m) for m in range(7)]
        for m1 in range(7):
            for m2 in range(7):
                self.assertEqual(enc.decrypt(x, enc.add(C[m1], C[m2])), (m1 + m2) % 7)
            for k in (-8, -1, 0, 1, 3, 2**64 + 1):
                self.assertEqual(enc.decrypt(x, enc.scalar_mul(C[m1], k)), (k * m1) % 7)
        c = C[4]
        self.assertEqual(enc.decrypt(x, enc.add(c, c)), 1)
        d = enc.rerandomize(h, c)
        self.assertEqual(enc.decrypt(x, d), 4)
        self.assertEqual(enc.rerandomize(h, c, 0), c)

    def test_errors(self):
        CL = self.CL
        h = enc.public_key(CL, 1)
        c = enc.encrypt(h, 3, r=1)
        self.assertEqual(enc.decrypt(1, c), 3)
        self.assertRaises(DecryptionError, enc.decrypt, 2, c)
        self.assertRaises(ValueError, enc.decrypt, 2, c)
        c = Ciphertext(c.c1, c.c2 @ CL.generator)
        self.assertRaises(DecryptionError, enc.decrypt, 1, c)

    def test_inconsistent_log(self):
        CL = self.CL
        x, h = enc.keygen(CL)
        c = enc.encrypt(h, 3)
        with patch('clhe.trapdoor.discrete_log_f', return_value=4) as discrete_log_f:
            with self.assertLogs(level='ERROR') as cm:
                self.assertRaises(DecryptionError, enc.decrypt, x, c)
            discrete_log_f.assert_called_once_with(CL.kernel_generator, CL.encode(3))
        self.assertIn('Inconsistent discrete log 4', cm.output[0])
        self.assertEqual(enc.decrypt(x, c), 3)

    def test_secp256k1(self):
        CL = CLGroup(l=1827)
        p = CL.conductor
        x, h = enc.keygen(CL)
        m1 = 2**255 + 12345
        m2 = p - 12344
        c1 = enc.encrypt(h, m1)
        c2 = enc.encrypt(h, m2)
        self.assertEqual(enc.decrypt(x, c1), m1)
        self.assertEqual(enc.decrypt(x, enc.add(c1, c2)), (m1 + m2) % p)
        self.assertEqual(enc.decrypt(x, enc.scalar_mul(c2, 3)), (3 * m2) % p)
        self.assertRaises(DecryptionError, enc.decrypt, x + 1, c1)


if __name__ == "__main__":
    unittest.main()
