"""Demo CL Cryptosystem.

This demo shows the use of CL groups in clhe, using the order of the secp256k1 elliptic
curve group as message modulus p by default.

A key pair is generated for the CL cryptosystem, consisting of a private key x and
a public key h=g^x, where g is the generator of the CL group.

The demo runs a boardroom election, where each voter enters a (random) bit v representing
a (random) yes/no vote. Each voter encrypts its vote v using linearly homomorphic encryption,
hence puts c = (g^r, f^v h^r) as ciphertext for a random nonce r, where f generates the
subgroup of order p. The ciphertexts are multiplied together to obtain a ciphertext
representing the sum of the votes. Finally, the sum is decrypted, and the total number
of "yes" votes is obtained. Unlike for ElGamal, no exhaustive search is needed to obtain
the sum from f^sum, as discrete logarithms to the base f are easy given the trapdoor.

In this demo we apply the default notation for finite groups in clhe, writing @ for
the group operation, ~ for group inversion, and ^ for the repeated group operation.
"""

import random
import argparse
import logging
from clhe.clgroups import CLGroup
from clhe import encryption


def election(group, voters):
    """Boardroom election with homomorphic tallying."""
    # Create CL key pair:
    x, h = encryption.keygen(group)

    # Each voter encrypts a random vote:
    votes = [random.randint(0, 1) for _ in range(voters)]
    print(f'Votes: {votes}')
    c = [encryption.encrypt(h, v) for v in votes]

    # Accumulate all votes:
    C = c[0]
    for c_i in c[1:]:
        C = encryption.add(C, c_i)

    # Decrypt the tally:
    t = encryption.decrypt(x, C)
    print(f'Referendum result: {t} "yes" / {voters - t} "no"')
    assert t == sum(votes)


def crypt_cycle(group, x, h, m):
    """Encrypt/decrypt cycle for message m, including homomorphic operations."""
    c = encryption.encrypt(h, m)
    m1 = encryption.decrypt(x, c)
    c2 = encryption.scalar_mul(encryption.add(c, c), -1)  # ciphertext for -2m
    m2 = encryption.decrypt(x, c2)
    return m1, m2


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('-v', '--voters', type=int, metavar='V',
                        help='number of voters V, V>=1')
    parser.add_argument('-n', '--prime-length', type=int, metavar='N',
                        help='use largest N-bit prime as message modulus (default secp256k1)')
    parser.add_argument('-b', '--batch-size', type=int, metavar='B',
                        help='number of messages B in batch, B>=1')
    parser.add_argument('-o', '--offset', type=int, metavar='O',
                        help='offset O for batch of messages, O>=0')
    parser.set_defaults(voters=7, prime_length=None, batch_size=1, offset=0)
    args = parser.parse_args()

    group = CLGroup(n=args.prime_length)
    logging.info(f'Using CL group of bit length {group.bit_length}')
    p = group.conductor

    print('Boardroom election')
    print('------------------')
    election(group, args.voters)
    print()

    print('Encryption/decryption tests')
    print('---------------------------')
    x, h = encryption.keygen(group)
    for m in range(args.batch_size):
        m += 1 + args.offset
        print(f'Plaintext sent: {m}')
        m1, m2 = crypt_cycle(group, x, h, m)
        print(f'Plaintext received: {m1}, and {m2} for -2m mod p')
        assert m == m1, (m, m1)
        assert m2 == -2*m % p, (m, m2)


if __name__ == '__main__':
    main()
