"""jwt-verify — JWT parsing and signature verification against PEM or JWKS keys."""

__version__ = "0.1.0"

from jwt_verify.claims import check_claims
from jwt_verify.config import ClaimsPolicy
from jwt_verify.keys import (
    ECPublicKeyEntry,
    KeySet,
    KeySourceFormat,
    PublicKeyEntry,
    RejectedKey,
    RSAPublicKeyEntry,
    load_keys,
    load_keys_from_jwks,
    load_keys_from_pem,
)
from jwt_verify.status import Status, TokenVerificationError
from jwt_verify.tokens import Token, parse_token
from jwt_verify.verifier import VerificationResult, verify

__all__ = [
    "ClaimsPolicy",
    "ECPublicKeyEntry",
    "KeySet",
    "KeySourceFormat",
    "PublicKeyEntry",
    "RSAPublicKeyEntry",
    "RejectedKey",
    "Status",
    "Token",
    "TokenVerificationError",
    "VerificationResult",
    "check_claims",
    "load_keys",
    "load_keys_from_jwks",
    "load_keys_from_pem",
    "parse_token",
    "verify",
]
