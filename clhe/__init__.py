"""clhe is a Python package for linearly homomorphic encryption from class groups.

The package implements the CL cryptosystem due to Castagnos and Laguillaumie
("Linearly Homomorphic Encryption from DDH", CT-RSA 2015), which works in the
class group of an imaginary quadratic order of discriminant Delta_p = p^2 Delta_K.
The class group contains a subgroup of known order p in which discrete logarithms
are easy, given the conductor p, while the rest of the group has unknown order.

Class group arithmetic is provided for arbitrary negative discriminants, using
reduced binary quadratic forms with NUCOMP and NUDUPL for composition and squaring.
Class group elements support Python's operator overloading, writing @ for the
group operation, ~ for inversion, and ^ for repeated application of the group
operation (or, alternatively, *, 1/, and **).

The extension modules are: classgroups (forms and class groups), orders (maps
between the maximal order and an order of conductor p), trapdoor (discrete logs
in the subgroup of order p), clgroups (setup of CL groups), and encryption
(key generation, encryption, decryption, and homomorphic operations).
"""

__version__ = '0.3.1'
__license__ = 'MIT License'

import os
import sys
import argparse
import logging


def get_arg_parser():
    """Return parser for command line arguments passed to clhe."""
    parser = argparse.ArgumentParser(add_help=False)

    group = parser.add_argument_group('clhe configuration')
    group.add_argument('-H', '--HELP', action='store_true', default=False,
                       help='show this help message for clhe and exit')

    group = parser.add_argument_group('clhe parameters')
    group.add_argument('-L', '--bit-length', type=int, metavar='l',
                       help='default bit length l for generated discriminants Delta_K')
    group.add_argument('-K', '--sec-param', type=int, metavar='k',
                       help='security parameter k, statistical distance 2**-k for exponents')
    group.add_argument('--log-level', type=str, metavar='ll',
                       help='logging level ll=debug/info(default)/warning/error')
    group.add_argument('--no-log', action='store_true',
                       help='disable logging messages')

    parser.set_defaults(bit_length=1827, sec_param=40, log_level='info')
    return parser


parser = get_arg_parser()
options, args = parser.parse_known_args()
if options.HELP:
    parser.print_help()
    sys.exit()

sys.argv = [sys.argv[0]] + args  # leave remaining args to the program using clhe
del parser, args
if os.getenv('READTHEDOCS') != 'True':
    # Set logging level as early as possible.
    if options.no_log:
        logging.basicConfig(level=logging.WARNING)
    else:
        ch = options.log_level[0].upper()
        ch = {'N': '0', 'D': '1', 'I': '2', 'W': '3', 'E': '4', 'C': '5'}.get(ch, ch)
        ch = ch if '0' <= ch <= '5' else '0'  # default to '0'
        level = int(ch)
        level = (logging.NOTSET, logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR,
                 logging.CRITICAL)[level]
        if sys.flags.dev_mode:
            # Switch to debug mode, just like asyncio does in development mode.
            level = logging.DEBUG
        logging.basicConfig(format='{asctime} {message}', style='{', level=level, stream=sys.stdout)
        logging.debug(f'Set logging level to {level}: {logging.getLevelName(level)}')
        del ch, level
    logging.debug(f'Security parameter set to {options.sec_param}')
