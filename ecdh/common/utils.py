"""Helper signatures: is_prime, int_to_be."""

# The first twelve primes as Miller-Rabin witnesses decide every n < 3.3 * 10^24,
# which covers all 64-bit moduli.
WITNESSES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def is_prime(n: int) -> bool:
    """Deterministic Miller-Rabin for anything that fits a machine word."""
    if n < 2:
        return False
    for q in WITNESSES:
        if n % q == 0:
            return n == q

    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1

    for a in WITNESSES:
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = x * x % n
            if x == n - 1:
                break
        else:
            return False
    return True


def int_to_be(n: int) -> bytes:
    """Minimal big-endian bytes of a non-negative integer (at least one byte)."""
    return n.to_bytes((n.bit_length() + 7) // 8 or 1, "big")
