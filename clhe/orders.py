"""This module supports class groups of non-maximal imaginary quadratic orders.

For a fundamental discriminant Delta_K < 0 and an odd prime conductor p,
the order of discriminant Delta_p = p^2 Delta_K is contained in the maximal order
of discriminant Delta_K. Ideals prime to p are mapped back and forth between these
two orders, which induces a surjective homomorphism from Cl(Delta_p) onto Cl(Delta_K).
The kernel of this homomorphism has order p - (Delta_K/p), and is cyclic of order p
if p divides Delta_K.

The maps are computed on binary quadratic forms as in Hühnlein, Jacobson, Paulus,
and Takagi, "A Cryptosystem Based on Non-maximal Imaginary Quadratic Orders with
Fast Decryption", EUROCRYPT 1998 (algorithms GoToNonMaxOrder and GoToMaxOrder).
"""

import logging
import functools
from clhe.gmpy import is_prime, invert, kronecker
from clhe.classgroups import ClassGroupForm, ClassGroup


def prime_to(f, n):
    """Return a form equivalent to f=(a,b,c) with first coefficient prime to n.

    Prime n is assumed, and f is assumed to be primitive. The form returned need not be reduced.
    """
    a, b, c = f
    if a % n:
        return a, b, c

    if c % n:
        return c, -b, a  # (x,y) -> (-y,x)

    return a + b + c, b + 2*c, c  # (x,y) -> (x,x+y), n divides neither b nor a+b+c


class NonMaximalClassGroupForm(ClassGroupForm):
    """Common base class for class groups of orders of conductor p.

    The group type carries the conductor p, the fundamental discriminant Delta_K,
    and the class group type of the maximal order as attribute maximal.
    """

    __slots__ = ()

    fundamental_discriminant: int
    conductor: int
    maximal = None
    kernel_order = None

    @classmethod
    def lift(cls, A):
        """Map class A of the maximal order to the order of conductor p."""
        if not isinstance(A, cls.maximal):
            raise TypeError(f'element of {cls.maximal.__name__} required')

        p = cls.conductor
        a, b, c = prime_to(A.value, p)
        return cls(cls.reduce((a, b * p, c * p**2)), check=False)

    @classmethod
    def project(cls, B):
        """Map class B to the maximal order, omitting the conductor p."""
        if not isinstance(B, cls):
            raise TypeError(f'element of {cls.__name__} required')

        p = cls.conductor
        a, b, _ = prime_to(B.value, p)
        a2 = 2*a
        b = int(b * invert(p, a2) % a2)
        c = (b**2 - cls.fundamental_discriminant) // (2*a2)
        return cls.maximal(cls.reduce((a, b, c)), check=False)


def NonMaximalClassGroup(Delta_K, p):
    """Create type for class group of discriminant p^2 Delta_K.

    The following conditions are imposed on Delta_K and p:

        - Delta_K < 0 and Delta_K = 1 (mod 4)
        - p is an odd prime

    Delta_K is not tested to be fundamental, which is left to the caller.
    """
    if Delta_K >= 0 or Delta_K%4 != 1:
        raise ValueError('negative discriminant Delta_K = 1 modulo 4 required')

    if p%2 == 0 or not is_prime(p):
        raise ValueError('odd prime conductor required')

    return _NonMaximalClassGroup(int(Delta_K), int(p))


@functools.cache
def _NonMaximalClassGroup(Delta_K, p):
    Cl_K = ClassGroup(Delta_K)
    Delta = p**2 * Delta_K
    l = Delta.bit_length()
    name = f'Cl{l}({Delta_K},{p})'
    Cl = type(name, (NonMaximalClassGroupForm,), {'__slots__': ()})
    Cl.discriminant = Delta
    Cl.bit_length = l
    Cl.fundamental_discriminant = Delta_K
    Cl.conductor = p
    Cl.maximal = Cl_K
    Cl.kernel_order = p - int(kronecker(Delta_K, p))
    if Cl_K.order is None:
        Cl.order = None
    else:
        w = 3 if Delta_K == -3 else 1  # index of unit groups
        Cl.order = Cl_K.order * Cl.kernel_order // w
    Cl.identity = Cl()
    Cl.generator = Cl.lift(Cl_K.generator)
    Cl.is_cyclic = True  # We use the (sub)group generated by g.
    logging.debug(f'Class group of conductor {p} over discriminant {Delta_K} of bit length {l}')
    globals()[name] = Cl
    return Cl
