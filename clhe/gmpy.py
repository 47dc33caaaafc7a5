"""This module collects all gmpy2 functions used by clhe.

Next to these, a function for finding the previous prime is provided, which
not all gmpy2 versions offer.
"""

import logging
from gmpy2 import (version, is_prime, next_prime, powmod, gcdext, invert,
                   jacobi, kronecker, isqrt, iroot)

logging.debug(f'Load gmpy2 version {version()}')

__all__ = ['is_prime', 'next_prime', 'prev_prime', 'powmod', 'gcdext', 'invert',
           'jacobi', 'kronecker', 'isqrt', 'iroot']


def prev_prime(x):
    """Return the greatest probable prime number < x, if any."""
    if x <= 2:
        raise ValueError('no smaller prime')

    if x == 3:
        return 2

    x -= 1 + x%2
    while not is_prime(x):
        x -= 2
    return x
