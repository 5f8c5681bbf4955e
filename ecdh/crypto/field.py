"""
Prime field helpers: add, sub, mul, pow, inverse, sqrt modulo p.
Every result is reduced into [0, p-1].
"""
from typing import Optional

from ecdh.common.errors import ConfigurationError, DomainError


class PrimeField:
    """Arithmetic in F_p. Elements are plain ints."""

    def __init__(self, p: int):
        if p < 2:
            raise ConfigurationError(f"field modulus must be >= 2, got {p}")
        self.p = p

    def __repr__(self):
        return f"PrimeField(p={self.p})"

    def __eq__(self, other):
        return isinstance(other, PrimeField) and other.p == self.p

    def __hash__(self):
        return hash(self.p)

    # -------------------- Ring operations -------------------- #

    def normalize(self, a: int) -> int:
        return a % self.p

    def add(self, a: int, b: int) -> int:
        return (a + b) % self.p

    def sub(self, a: int, b: int) -> int:
        return (a - b) % self.p

    def mul(self, a: int, b: int) -> int:
        return (a * b) % self.p

    def neg(self, a: int) -> int:
        return -a % self.p

    def pow(self, base: int, exponent: int) -> int:
        """Exponentiation by repeated squaring."""
        if exponent < 0:
            raise ValueError("exponent must be non-negative")
        result = 1 % self.p
        base %= self.p
        while exponent:
            if exponent & 1:
                result = (result * base) % self.p
            base = (base * base) % self.p
            exponent >>= 1
        return result

    # -------------------- Division -------------------- #

    def inverse(self, a: int) -> int:
        """Fermat inverse a^(p-2). Zero has no inverse."""
        a %= self.p
        if a == 0:
            raise DomainError(f"0 has no inverse modulo {self.p}")
        return self.pow(a, self.p - 2)

    def div(self, a: int, b: int) -> int:
        return self.mul(a, self.inverse(b))

    # -------------------- Square roots -------------------- #

    def sqrt(self, a: int) -> Optional[int]:
        """
        Square root for p = 3 (mod 4): r = a^((p+1)/4).
        Returns None when a is a quadratic non-residue.
        """
        if self.p % 4 != 3:
            raise ConfigurationError(f"closed-form sqrt needs p = 3 (mod 4), got p = {self.p}")
        a %= self.p
        r = self.pow(a, (self.p + 1) // 4)
        if self.mul(r, r) != a:
            return None
        return r

    def is_square(self, a: int) -> bool:
        return self.sqrt(a) is not None
