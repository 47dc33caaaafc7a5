import unittest
from clhe.classgroups import ClassGroup, _class_number, reduced_forms
from clhe import orders


class Arithmetic(unittest.TestCase):

    def setUp(self):
        self.Cl = orders.NonMaximalClassGroup(-623, 7)  # -623 = -7 * 89

    def test_group(self):
        Cl = self.Cl
        self.assertIs(orders.NonMaximalClassGroup(-623, 7), Cl)
        self.assertEqual(Cl.discriminant, -30527)
        self.assertEqual(Cl.fundamental_discriminant, -623)
        self.assertEqual(Cl.conductor, 7)
        self.assertIs(Cl.maximal, ClassGroup(-623))
        self.assertEqual(Cl.maximal.order, 22)
        self.assertEqual(Cl.kernel_order, 7)
        self.assertEqual(Cl.order, 154)
        self.assertEqual(Cl.order, _class_number(Cl.discriminant))
        self.assertEqual(Cl.identity.value, (1, 1, 7632))
        self.assertEqual(Cl.project(Cl.generator), Cl.maximal.generator)

        Cl23 = orders.NonMaximalClassGroup(-23, 7)  # 7 inert
        self.assertEqual(Cl23.kernel_order, 8)
        self.assertEqual(Cl23.order, 24)
        self.assertEqual(Cl23.order, _class_number(-23 * 49))

        Cl3 = orders.NonMaximalClassGroup(-3, 5)
        self.assertEqual(Cl3.kernel_order, 6)
        self.assertEqual(Cl3.order, 2)
        self.assertEqual(Cl3.order, _class_number(-75))

        self.assertRaises(ValueError, orders.NonMaximalClassGroup, -13, 7)
        self.assertRaises(ValueError, orders.NonMaximalClassGroup, 23, 7)
        self.assertRaises(ValueError, orders.NonMaximalClassGroup, -623, 9)
        self.assertRaises(ValueError, orders.NonMaximalClassGroup, -623, 2)

    def test_prime_to(self):
        Cl = self.Cl
        p = Cl.conductor
        D = Cl.discriminant
        self.assertEqual(orders.prime_to((49, 7, 156), 7), (156, -7, 49))
        self.assertEqual(orders.prime_to((2, 1, 3), 7), (2, 1, 3))
        self.assertEqual(orders.prime_to((7, 7, 7), 7), (21, 21, 7))
        for f in reduced_forms(D):
            a, b, c = orders.prime_to(f, p)
            self.assertNotEqual(a % p, 0)
            self.assertEqual(b**2 - 4*a*c, D)
            self.assertEqual(Cl.reduce((a, b, c)), f)

    def test_lift_project(self):
        Cl = self.Cl
        Cl_K = Cl.maximal
        G_K = [Cl_K(f) for f in reduced_forms(Cl_K.discriminant)]
        for A in G_K:
            B = Cl.lift(A)
            self.assertIsInstance(B, Cl)
            self.assertEqual(Cl.project(B), A)
        self.assertEqual(Cl.lift(Cl_K.identity), Cl.identity)

        G = [Cl(f) for f in reduced_forms(Cl.discriminant)]
        self.assertEqual(len(G), Cl.order)
        kernel = [B for B in G if Cl.project(B) == Cl_K.identity]
        self.assertEqual(len(kernel), Cl.kernel_order)
        self.assertEqual({Cl.project(B) for B in G}, set(G_K))
        for B1 in G[::5]:
            for B2 in G[::3]:
                self.assertEqual(Cl.project(B1 @ B2), Cl.project(B1) @ Cl.project(B2))
            self.assertEqual(Cl.project(B1^3), Cl.project(B1)^3)
            self.assertEqual(Cl.project(~B1), ~Cl.project(B1))

    def test_errors(self):
        Cl = self.Cl
        Cl23 = ClassGroup(-23)
        self.assertRaises(TypeError, Cl.lift, Cl23.generator)
        self.assertRaises(TypeError, Cl.lift, Cl.generator)
        self.assertRaises(TypeError, Cl.project, Cl.maximal.generator)
        self.assertRaises(TypeError, Cl.project, orders.NonMaximalClassGroup(-23, 7).generator)


if __name__ == "__main__":
    unittest.main()
