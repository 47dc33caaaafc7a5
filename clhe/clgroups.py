"""This module sets up the class groups for the CL cryptosystem.

A CL group is the class group of discriminant Delta_p = p^2 Delta_K, where p is
the (prime) message modulus, and Delta_K = -p q~ for a prime q~ > 4p with p q~ = 3 (mod 4)
and (p/q~) = -1. Two cyclic subgroups are used: the kernel <f> of order p, in which
discrete logarithms are computed efficiently by the trapdoor map phi_p, and the group
<g> of unknown order, which contains <f>.

Following Castagnos and Laguillaumie, "Linearly Homomorphic Encryption from DDH",
CT-RSA 2015, Figure 2, generator g is set to [lift(r^2)]^p f^k for a small prime ideal r
of the maximal order and random k in [1, p). Exponents are sampled below bound
S = s~ p 2^k, with s~ an upper bound for the class number h(Delta_K) and k the
statistical security parameter.

By default, p is the order of the group of the secp256k1 elliptic curve, and Delta_K is
taken from two fixed parameter sets, labeled by the bit length 1827 and 3072.
"""

import math
import logging
import secrets
import functools
from clhe import options
from clhe.gmpy import is_prime, next_prime, prev_prime, powmod, jacobi, kronecker, isqrt
from clhe.orders import NonMaximalClassGroupForm, NonMaximalClassGroup
from clhe import trapdoor

SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# Fundamental discriminants Delta_K = -p q~ with p the order of secp256k1.
SECP256K1_DISCRIMINANTS = {
    1827: -5612960460354297586496608465355436736175385121665162536528003724349027131555226649274328061478036486426974235182817460231858406454328229705097433539599357659030732986212902896965288623752937699627896244889952350312271535460213196686033784826094098560791044370859682930856242386198578254852455887200105136848768296981731378965699234956909793269449142655809687632817484368532297652832818925682445449730939672558315001010323704348812542103398759340104715127787089082447127193712577594846384285770469931817870736146192486488946997648500323172668328291265422577316785106221217309556660122713505680384876843920057653776862871100907889289236674725514431,
    3072: -4059187479482350050615628258855828167626431824732199036597668525464616895922000411261718516567731632732286800934600249406393974357768444047141581621951155803795734117021495676831593033172450357785597776576612281305223919414836213766354372816990863555296830253123574199460146205334642841425167146191511265843560519935132843345652241452096808325636749679870044168299284188041110855817763388520168386219623910310164928704787483081634387756726626535065281682599731277374016734081858737636466840542887162979503417512544889504232167650829937659939952944676065304893114687576168003023224828141758525768773373824222139881461335520424806873120226629820060875152488085708505799289587546695067879685280385374856021956449469249646800629229020371797593504643496190406594392765693007499422572180546825466666141075563827212225011483631613617098804995744522667871405671831585120704467080787250858292339350012462220525281878018038188111302643,
}


class CLGroupForm(NonMaximalClassGroupForm):
    """Common base class for CL groups.

    Class attribute generator is g, kernel_generator is f, and bound is S.
    """

    __slots__ = ()

    kernel_generator = None
    bound = None
    sec_param = None

    @classmethod
    def encode(cls, m):
        """Return f^m for message m, using the trapdoor map."""
        return trapdoor.phi_p_inverse(cls, m)

    @classmethod
    def decode(cls, M):
        """Return message m in range(p) for M = f^m."""
        return trapdoor.phi_p(M)


def _check_parameters(p, Delta_K):
    if p%2 == 0 or not is_prime(p):
        raise ValueError('odd prime p required')

    if Delta_K >= 0 or Delta_K%4 != 1:
        raise ValueError('negative discriminant Delta_K = 1 modulo 4 required')

    if Delta_K % p:
        raise ValueError('p must divide Delta_K')

    q = -Delta_K // p
    if q == p or not is_prime(q):
        raise ValueError('-Delta_K/p must be a prime different from p')

    if jacobi(p, q) != -1:
        raise ValueError('p must be a quadratic nonresidue modulo -Delta_K/p')

    if q <= 4*p:
        raise ValueError('-Delta_K/p must exceed 4p')


def find_discriminant(p, l):
    """Return fundamental discriminant Delta_K = -p q of bit length around l for prime p.

    Prime q is the least prime above 2^(l-1)/p with p q = 3 (mod 4) and (p/q) = -1.
    """
    q = next_prime((1 << l-1) // p)
    while (p * q) % 4 != 3 or jacobi(p, q) != -1:
        q = next_prime(q)
    if q <= 4*p:
        raise ValueError(f'bit length {l} too small for p')

    return int(-p * q)


def _split_primes(Delta_K):
    """Generate the primes r = 3 (mod 4) that split in the maximal order, in increasing order."""
    r = 3
    while True:
        if kronecker(Delta_K, r) == 1:
            yield int(r)

        r = next_prime(r)
        while r%4 != 3:
            r = next_prime(r)


def _prime_ideal(Cl_K, r):
    """Return class of prime ideal of norm r in the maximal order, for split prime r = 3 (mod 4)."""
    Delta_K = Cl_K.discriminant
    b = int(powmod(Delta_K, (r+1)//4, r))  # square root of Delta_K modulo r
    b = r - b if Delta_K%2 != b%2 else b
    c = (b**2 - Delta_K) // (4*r)
    return Cl_K((r, b, c))


def _generator_ideal(Cl):
    """Return prime ideal R of the maximal order with lift(R^2)^p outside the kernel.

    Prime norms are tried up to Bach's bound 12 ln^2|Delta_K|.
    """
    p = Cl.conductor
    r_max = 12 * math.log(-Cl.fundamental_discriminant)**2
    for r in _split_primes(Cl.fundamental_discriminant):
        if r > r_max:
            raise ValueError('no prime ideal r with [r^2]^p outside the kernel found for Delta_K')

        R = _prime_ideal(Cl.maximal, r)
        if not Cl.project(Cl.lift(R @ R)^p).is_principal():
            logging.debug(f'Using prime ideal of norm {r} for generator')
            return R


def bound(Delta_K, p, k):
    """Return bound S = s~ p 2^k for exponents.

    Here, s~ = ceil(ln|Delta_K| sqrt|Delta_K| / pi) is an upper bound for h(Delta_K),
    using ln 2 / pi < 0.2207.
    """
    l = Delta_K.bit_length()
    s = (isqrt(-Delta_K) + 1) * l * 2207 // 10000 + 1
    return int(s * p << k)


def CLGroup(p=None, Delta_K=None, l=None, n=None):
    """Create type for CL group, given prime p and discriminant Delta_K.

    If p is not given, p is the largest n-bit prime if n is given, and the order of
    secp256k1 otherwise. If Delta_K is not given, Delta_K is taken from the fixed parameter
    sets for secp256k1 if available for bit length l, and otherwise searched for
    with find_discriminant(). Bit length l defaults to command line option -L.
    """
    if p is None:
        if n is None:
            p = SECP256K1_ORDER
        else:
            p = prev_prime(1 << n)
    if Delta_K is None:
        if l is None:
            l = options.bit_length
        if p == SECP256K1_ORDER and l in SECP256K1_DISCRIMINANTS:
            Delta_K = SECP256K1_DISCRIMINANTS[l]
        else:
            Delta_K = find_discriminant(p, l)
    p = int(p)
    Delta_K = int(Delta_K)
    _check_parameters(p, Delta_K)
    return _CLGroup(p, Delta_K, options.sec_param)


@functools.cache
def _CLGroup(p, Delta_K, k):
    Cl = NonMaximalClassGroup(Delta_K, p)
    R = _generator_ideal(Cl)
    name = f'CL{Cl.bit_length}({Delta_K},{p})'
    CL = type(name, (CLGroupForm, Cl), {'__slots__': ()})
    CL.identity = CL()
    CL.sec_param = k
    CL.bound = bound(Delta_K, p, k)

    f = trapdoor.kernel_generator(CL)
    assert f != CL.identity
    assert f^p == CL.identity
    assert CL.project(f).is_principal()
    CL.kernel_generator = f

    k_f = 1 + secrets.randbelow(p - 1)
    CL.generator = (CL.lift(R @ R)^p) @ CL.encode(k_f)
    assert not trapdoor.in_kernel(CL.generator)
    logging.debug(f'CL group of bit length {CL.bit_length}')
    logging.debug(f'Bound S for exponents of bit length {CL.bound.bit_length()}')
    globals()[name] = CL
    return CL
