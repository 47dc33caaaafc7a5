"""This module provides the trapdoor for discrete logarithms in the kernel of order p.

Let p be an odd prime dividing fundamental discriminant Delta_K < 0 with |Delta_K| > 4p^2.
Then the kernel of the projection from Cl(p^2 Delta_K) onto Cl(Delta_K) is cyclic
of order p, generated by f = [(p^2, p)]. The reduced forms in this kernel are known
explicitly, see Castagnos and Laguillaumie, "Linearly Homomorphic Encryption from DDH",
CT-RSA 2015, Proposition 1:

    Red(f^m) = (p^2, L(m) p, (L(m)^2 - Delta_K)/4), for m != 0 (mod p),

where L(m) is the odd integer in [-p, p] with L(m) = 1/m (mod p).
Hence, the map phi_p sending f^m to m is an isomorphism from the kernel to (Z/pZ, +),
which is computed by a single modular inversion.
"""

from clhe.gmpy import invert


def _check_group(group):
    p = group.conductor
    Delta_K = group.fundamental_discriminant
    if Delta_K % p:
        raise ValueError('conductor p must divide fundamental discriminant')

    if -Delta_K <= 4 * p**2:
        raise ValueError('fundamental discriminant too small for conductor p')

    return p, Delta_K


def in_kernel(B):
    """Test if class B is in the kernel of order p."""
    p = type(B).conductor
    a, b, _ = B.value
    return a == 1 or (a == p**2 and b % p == 0)


def phi_p(B):
    """Return m in range(p) such that B = f^m, for f = [(p^2, p)]."""
    group = type(B)
    p, _ = _check_group(group)
    if not in_kernel(B):
        raise ValueError('class not in kernel of order p')

    if B.is_principal():
        return 0

    L = B[1] // p
    return int(invert(L % p, p))


def phi_p_inverse(group, m):
    """Return f^m, for f = [(p^2, p)], without any exponentiation."""
    p, Delta_K = _check_group(group)
    m %= p
    if m == 0:
        return group.identity

    L = int(invert(m, p))
    if L%2 == 0:
        L -= p
    f = (p**2, L * p, (L**2 - Delta_K) // 4)
    return group(group.reduce(f), check=False)


def kernel_generator(group):
    """Return f = [(p^2, p)], which generates the kernel of order p."""
    return phi_p_inverse(group, 1)


def discrete_log_f(f, Y):
    """Return m in range(p) such that Y = f^m, for any generator f of the kernel."""
    group = type(f)
    if not isinstance(Y, group):
        raise TypeError('f and Y from same group required')

    p = group.conductor
    t = phi_p(f)
    if t == 0:
        raise ValueError('f does not generate kernel of order p')

    return phi_p(Y) * int(invert(t, p)) % p
