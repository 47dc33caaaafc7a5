"""This module provides the CL linearly homomorphic encryption scheme.

A key pair consists of a private key x, sampled uniformly below bound S, and a public key
h=g^x, where g is the generator of a CL group. Message m modulo p is encrypted as

    c = (g^r, f^m h^r),

for random r below S, where f generates the kernel of order p. Ciphertexts are
multiplied componentwise to add their messages, and raised to a power k to multiply
their messages by k. Decryption computes f^m = c2 c1^-x, and recovers m using the
trapdoor map phi_p.

We apply the default notation for finite groups, writing @ for the group operation,
~ for group inversion, and ^ for the repeated group operation.
"""

import logging
import secrets
import collections
from clhe import trapdoor

Ciphertext = collections.namedtuple('Ciphertext', ('c1', 'c2'))


class DecryptionError(ValueError):
    """Ciphertext does not decrypt to a message for the given private key."""


def keygen(group):
    """CL key generation."""
    while True:
        x = secrets.randbelow(group.bound)
        h = public_key(group, x)
        if h != group.identity:
            # NB: this branch will always be followed unless S is artificially small
            return x, h


def public_key(group, x):
    """Return public key h=g^x for private key x."""
    return group.generator^x


def encrypt(h, m, r=None):
    """CL encryption of message m (modulo p) under public key h."""
    group = type(h)
    if r is None:
        r = secrets.randbelow(group.bound)
    c1 = group.generator^r
    c2 = group.encode(m) @ (h^r)
    return Ciphertext(c1, c2)


def decrypt(x, c):
    """CL decryption of ciphertext c using private key x.

    Raises DecryptionError if c2 c1^-x is not a power of f.
    """
    c1, c2 = c
    group = type(c1)
    M = (c1^-x) @ c2
    if not trapdoor.in_kernel(M):
        raise DecryptionError('decryption failed, wrong key or corrupted ciphertext')

    f = group.kernel_generator
    m = trapdoor.discrete_log_f(f, M)
    if f^m != M:
        logging.error(f'Inconsistent discrete log {m} for kernel of order {group.conductor}')
        raise DecryptionError('decryption failed, inconsistent discrete log')

    return m


def add(c, d):
    """Return ciphertext for the sum of the messages of ciphertexts c and d."""
    return Ciphertext(c.c1 @ d.c1, c.c2 @ d.c2)


def scalar_mul(c, k):
    """Return ciphertext for k times the message of ciphertext c, for any integer k."""
    return Ciphertext(c.c1^k, c.c2^k)


def rerandomize(h, c, r=None):
    """Return fresh ciphertext for the message of ciphertext c under public key h."""
    return add(c, encrypt(h, 0, r))
