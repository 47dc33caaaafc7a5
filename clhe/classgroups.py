"""This module supports class groups of imaginary quadratic orders.

A class group is represented by the reduced primitive positive definite binary
quadratic forms (a,b,c) of a fixed discriminant D=b^2-4ac<0. Each form class has
a unique reduced representative, hence reduced forms can be compared directly.

The default Python operators to manipulate group elements are the (binary)
operator @ for the group operation, the (unary) operator ~ for inversion of
group elements, and the (binary) operator ^ for repeated application of
the group operation. Multiplicative notation can be used as well:

    - default:         a @ b,    ~a,    a^n    (a^-1 = ~a)
    - multiplicative:  a * b,   1/a,    a**n   (a**-1 = 1/a)

for arbitrary group elements a, b, and integer n.

Function ClassGroup creates the type for the class group of a given discriminant,
which need not be fundamental. Class group types for the orders used in CL-type
cryptosystems are found in modules clhe.orders and clhe.clgroups.
"""

import math
import functools
from clhe.gmpy import gcdext, next_prime, isqrt, iroot


class FiniteGroupElement:
    """Abstract base class for finite groups.

    Overview Python operators for group operation, inverse, and repeated operation:

        - default notation: @, ~, ^ (matmul, invert, xor).
        - multiplicative notation: *, 1/ (or, **-1), ** (mul, truediv (or, pow), pow)
    """

    __slots__ = 'value'
    value: object  # for detection by pylint

    order = None
    identity = None
    is_abelian = None
    is_cyclic = None
    generator = None  # generates large subgroup, preferably the entire group

    def __matmul__(self, other):  # overload @
        group = type(self)
        if self is other:
            return group.operation2(self)

        if isinstance(other, group):
            return group.operation(self, other)

        return NotImplemented

    def __invert__(self):  # overload ~
        group = type(self)
        return group.inversion(self)

    def __xor__(self, other):  # overload ^
        if isinstance(other, int):
            group = type(self)
            return group.repeat(self, other)

        return NotImplemented

    def __mul__(self, other):
        group = type(self)
        return group.__matmul__(self, other)

    def __truediv__(self, other):
        group = type(self)
        if not isinstance(other, group):
            return NotImplemented

        return group.__matmul__(self, group.__invert__(other))

    def __rtruediv__(self, other):
        group = type(self)
        if other != 1:
            raise TypeError('only 1/. supported')

        return group.__invert__(self)

    def __pow__(self, other):
        group = type(self)
        return group.__xor__(self, other)

    def __eq__(self, other):
        group = type(self)
        if not isinstance(other, group):
            return NotImplemented

        return group.equality(self, other)

    def __hash__(self):
        """Make finite group elements hashable (e.g., for LRU caching).

        Equal elements of a group and its subgroup types hash alike.
        """
        return hash(self.value)

    def __repr__(self):
        return repr(self.value)

    @classmethod
    def operation(cls, a, b, /):
        """Return a @ b."""
        raise NotImplementedError

    @classmethod
    def operation2(cls, a, /):
        """Return a @ a."""
        return cls.operation(a, a)

    @classmethod
    def inversion(cls, a, /):
        """Return @-inverse of a (written ~a)."""
        raise NotImplementedError

    def inverse(self):
        """For convenience."""
        return type(self).inversion(self)

    @classmethod
    def equality(cls, a, b, /):
        """Return a == b."""
        raise NotImplementedError

    @staticmethod
    def repeat(a, n):
        """Return nth @-power of a (written a^n), for any integer n.

        The exponent n is used as is: the order of a need not be known.
        """
        cls = type(a)
        if n < 0:
            a = cls.inversion(a)
            n = -n
        d = a
        c = cls.identity
        for i in range(n.bit_length() - 1):
            # d = a^(2^i) holds
            if (n >> i) & 1:
                c = cls.operation(c, d)
            d = cls.operation2(d)
        if n:
            c = cls.operation(c, d)
        return c


class ClassGroupForm(FiniteGroupElement):
    """Common base class for class groups of imaginary quadratic orders.

    Represented by primitive positive definite forms (a,b,c) of discriminant D<0.
    That is, all forms (a,b,c) with D=b^2-4ac<0 satisfying gcd(a,b,c)=1 and a>0.
    """

    __slots__ = ()

    is_abelian = True
    discriminant: int
    bit_length = None
    order = None

    def __init__(self, value=None, check=True):
        """Create a binary quadratic form (a,b,c).

        Invariant: form (a,b,c) is reduced.
        """
        if value is None:  # set principal form = identity
            k = self.discriminant%2
            value = (1, k, (k**2 - self.discriminant) // 4)
            check = False
        elif isinstance(value, list):
            value = tuple(value)
        if len(value) == 2:
            a, b = value
            c = (b**2 - self.discriminant) // (4*a)
            value = (a, b, c)
            check = True
        if check:
            a, b, c = value
            if b**2 - 4*a * c != self.discriminant:
                raise ValueError('wrong discriminant')

            if a <= 0:
                raise ValueError('positive definite form required')

            if math.gcd(a, b, c) != 1:
                raise ValueError('primitive form required')

            value = ClassGroupForm.reduce((a, b, c))
        self.value = value

    def __getitem__(self, key):  # NB: no __setitem__ to prevent mutability
        return self.value[key]

    # See Henri Cohen's book "A Course in Computational Algebraic Number Theory", Chapter 5.
    @staticmethod
    def reduce(f):  # Cohen: Algorithm 5.4.2
        """Return the reduced form equivalent to positive definite form f."""
        a, b, c = f
        # normalize
        r = (a - b) // (2*a)
        b, c = b + 2*r*a, a*r**2 + b*r + c
        while not (-a < b <= a <= c and (a != c or b >= 0)):  # check reduced
            # reduce
            s = (c + b) // (2*c)
            a, b, c = c, -b + 2*s*c, c*s**2 - b*s + a
        return a, b, c

    @staticmethod
    def is_reduced(f):
        """Test if form f is reduced."""
        a, b, c = f
        return -a < b <= a <= c and (a != c or b >= 0)

    @staticmethod
    def compose(f1, f2):  # Cohen: Algorithm 5.4.7 (Shanks)
        """Return composition of forms f1 and f2 of equal discriminant.

        The result is in general not reduced. Unlike NUCOMP, the size of the
        intermediate numbers is not controlled, so composition of reduced forms
        by this classical algorithm is slower.
        """
        a1, b1, c1 = f1
        a2, b2, c2 = f2
        D = b1**2 - 4*a1 * c1
        if b2**2 - 4*a2 * c2 != D:
            raise ValueError('forms of equal discriminant required')

        s = (b1 + b2) // 2
        d, _, y1 = gcdext(a1, a2)
        d, x2, y2 = gcdext(s, d)
        v1 = a1 // d
        v2 = a2 // d
        r = (y1 * y2 * (s - b2) - x2 * c2) % v1
        a3 = v1 * v2
        b3 = b2 + 2*v2 * r
        c3 = (b3**2 - D) // (4*a3)
        return int(a3), int(b3), int(c3)  # NB: convert from gmpy2.mpz

    @classmethod
    def operation(cls, f1, f2, /):  # Cohen: Algorithm 5.4.9 (NUCOMP)
        if f1[0] < f2[0]:
            f1, f2 = f2, f1
        a1, b1, c1 = f1
        a2, b2, c2 = f2
        s = (b1 + b2) // 2
        n = b2 - s

        d, u, v = gcdext(a2, a1)
        if d == 1:
            A = -u * n
            d1 = d
        elif s % d == 0:
            A = -u * n
            d1 = d
            a1 //= d1
            a2 //= d1
            s //= d1
        else:
            d1, u1, _ = gcdext(s, d)
            if d1 > 1:
                a1 //= d1
                a2 //= d1
                s //= d1
                d //= d1
            l = (-u1 * (u * (c1 % d) + v * (c2 % d))) % d
            A = -u * (n // d) + l * (a1 // d)
        A = A % a1
        A1 = a1 - A
        if A1 < A:
            A = - A1

        d, v3 = a1, A
        v2, v = 1, 0
        z = 0
        L = iroot(-cls.discriminant//4, 4)[0]
        while abs(v3) > L:  # partial Euclid
            d, (q, v3) = v3, divmod(d, v3)
            v, v2, = v2, v - q * v2
            z += 1
        if z%2:
            v2, v3 = -v2, -v3

        if z == 0:
            Q1 = a2 * v3
            f = (Q1 + n) // d
            g = (v3 * s + c2) // d
            a3 = d * a2
            b3 = 2*Q1 + b2
            c3 = v3 * f + g * d1  # erratum Cohen (step 6)
        else:
            b = (a2 * d + n * v) // a1
            Q1 = b * v3
            Q2 = Q1 + n
            f = Q2 // d
            e = (s * d + c2 * v) // a1
            Q3 = e * v2
            Q4 = Q3 - s
            g = Q4 // v
            a3 = d * b + d1 * e * v
            b3 = Q1 + Q2 + d1 * (Q3 + Q4)
            c3 = v3 * f + d1 * g * v2
        f3 = int(a3), int(b3), int(c3)  # NB: convert from gmpy2.mpz, if gmpy2 is used for gcdext()
        return cls(cls.reduce(f3), check=False)

    @classmethod
    def operation2(cls, f, /):  # Cohen: Algorithm 5.4.8 (NUDUPL)
        a, b, c = f
        d1, u, _ = gcdext(b, a)  # NB: d1 > 1 possible if discriminant is not squarefree
        A = a // d1
        B = b // d1
        C = (-c * u) % A
        C1 = A - C
        if C1 < C:
            C = -C1

        d, v3 = A, C
        v2, v = 1, 0
        z = 0
        L = iroot(-cls.discriminant//4, 4)[0]
        while abs(v3) > L:  # partial Euclid
            d, (q, v3) = v3, divmod(d, v3)
            v, v2, = v2, v - q * v2
            z += 1
        if z%2:
            v2, v3 = -v2, -v3

        if z == 0:
            g = (B * v3 + c) // d
            a2 = d**2
            b2 = b + 2*d * v3
            c2 = v3**2 + g * d1
        else:
            e = (c * v + B * d) // A
            h = e * v2
            g = (h - B) // v
            a2 = d**2 + d1 * e * v
            b2 = d1 * (h + v * g) + 2*d * v3
            c2 = v3**2 + d1 * g * v2
        f2 = int(a2), int(b2), int(c2)  # NB: convert from gmpy2.mpz, if gmpy2 is used for gcdext()
        return cls(cls.reduce(f2), check=False)

    @classmethod
    def inversion(cls, f, /):
        a, b, c = f
        return cls(cls.reduce((a, -b, c)), check=False)

    @classmethod
    def equality(cls, f1, f2, /):
        return f1.value == f2.value

    def is_principal(self):
        """Test if form represents the trivial class.

        The principal form is the only reduced form with a=1.
        """
        return self.value[0] == 1


def _class_number(D):  # Cohen: Algorithm 5.3.5
    """Compute the class number h(D) for discriminant D < 0.

    Only primitive reduced forms are counted, hence D need not be fundamental.
    """
    h = 0
    b = D%2
    B = isqrt(-D // 3)
    while b <= B:
        q = (b**2 - D) // 4
        a = max(b, 1)
        while a**2 <= q:
            if q % a == 0:
                c = q // a
                if math.gcd(a, b, c) == 1:
                    h += 1 if a == b or a == c or b == 0 else 2
            a += 1
        b += 2
    return h


def reduced_forms(D):
    """Return list of all reduced primitive forms of discriminant D < 0, for small |D|."""
    F = []
    for a in range(1, isqrt(-D // 3) + 1):
        for b in range(-a + 1, a + 1):
            if (b**2 - D) % (4*a) == 0:
                c = (b**2 - D) // (4*a)
                if ClassGroupForm.is_reduced((a, b, c)) and math.gcd(a, b, c) == 1:
                    F.append((a, b, c))
    return F


def ClassGroup(Delta=None, l=None):
    """Create type for class group, given (bit length l of) discriminant Delta.

    The following conditions are imposed on discriminant Delta:

        - Delta < 0, only supporting class groups of imaginary quadratic orders
        - Delta = 0 or 1 (mod 4)

    If only bit length l is given, Delta will be a fundamental discriminant
    with -Delta prime, Delta = 1 (mod 8) if possible.
    """
    if l is not None:
        if Delta is None:
            # find fundamental discriminant Delta of bit length l >= 2
            p = next_prime(1 << l-1)
            while p != 3 and p != 11 and p%8 != 7:
                p = next_prime(p)
            Delta = int(-p)  # D = 1 mod 4, and even D = 1 mod 8 if possible (and -D is prime)
    elif Delta is None:
        Delta = -3
    if Delta%4 not in (0, 1):
        raise ValueError('discriminant required to be 0 or 1 modulo 4')

    if Delta >= 0:
        raise ValueError('negative discriminant required')

    return _ClassGroup(int(Delta))


@functools.cache
def _ClassGroup(Delta):
    l = Delta.bit_length()
    name = f'Cl{l}({Delta})'
    Cl = type(name, (ClassGroupForm,), {'__slots__': ()})
    Cl.discriminant = Delta
    Cl.bit_length = l
    if l <= 24:
        Cl.order = _class_number(Delta)
    else:
        Cl.order = None  # NB: leave order as "unknown"
    Cl.identity = Cl()

    # Class groups likely to have large cyclic subgroups, see Conjecture 5.10.1 in Cohen.
    if Delta%8 == 1:
        # Use the following generator from the Chia VDF competition,
        # see https://www.chia.net/2018/11/07/chia-vdf-competition-guide.en.html:
        g = Cl((2, 1, (1 - Delta) // 8))  # order of g around sqrt(-D/4) if -D is prime
    else:
        g = Cl.identity  # trivial generator
    Cl.generator = g
    Cl.is_cyclic = True  # We use the (sub)group generated by g.
    globals()[name] = Cl  # NB: exploit (almost?) unique name dynamic Cl type
    return Cl

