"""jwt-verify configuration — algorithm constants and the claims policy dataclass."""

from dataclasses import dataclass

RSA_ALGORITHMS = frozenset({"RS256", "RS384", "RS512"})
EC_ALGORITHMS = frozenset({"ES256"})
SUPPORTED_ALGORITHMS = RSA_ALGORITHMS | EC_ALGORITHMS

# ES256 signatures are r || s, each a 32-byte big-endian P-256 scalar.
ES256_SIGNATURE_LENGTH = 64


@dataclass(frozen=True, slots=True)
class ClaimsPolicy:
    """Caller-side claim checks applied by ``check_claims``.

    ``verify`` never consults this; signature verification and claim policy
    are separate steps.

    Example:
        ClaimsPolicy()                                  # Only exp is checked
        ClaimsPolicy(issuers=("https://issuer",))       # Restrict issuer
        ClaimsPolicy(audiences=("api",), leeway_seconds=30)
    """

    issuers: tuple[str, ...] = ()
    audiences: tuple[str, ...] = ()
    leeway_seconds: int = 0
    require_exp: bool = False

    def __post_init__(self) -> None:
        """Normalise single strings and validate the leeway."""
        for field_name in ("issuers", "audiences"):
            value = getattr(self, field_name)
            if isinstance(value, str):
                object.__setattr__(self, field_name, (value,))
            else:
                object.__setattr__(self, field_name, tuple(value))
        if self.leeway_seconds < 0:
            raise ValueError(f"leeway_seconds must be >= 0, got {self.leeway_seconds}")
