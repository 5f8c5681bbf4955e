"""Error taxonomy: configuration, domain, invalid point, shared-secret mismatch."""


class ConfigurationError(ValueError):
    """Prime or curve parameters are unusable. Raised before any exchange runs."""


class DomainError(ArithmeticError):
    """Modular inverse of zero was requested."""


class InvalidPointError(ValueError):
    """A point does not satisfy the curve equation (or has no finite order)."""


class SharedSecretMismatch(AssertionError):
    """The two parties derived different shared secrets. Always a bug."""
