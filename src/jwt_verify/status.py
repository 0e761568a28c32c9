"""Verification status taxonomy shared by the token, key and verifier modules."""

from enum import Enum


class Status(str, Enum):
    """Terminal outcome of parsing a token, loading keys, or verifying.

    The value is a stable code suitable for logs and metrics labels.
    """

    OK = "OK"

    # Token structure
    BAD_FORMAT = "JWT_BAD_FORMAT"
    HEADER_PARSE_ERROR = "JWT_HEADER_PARSE_ERROR"
    HEADER_NO_ALG = "JWT_HEADER_NO_ALG"
    HEADER_BAD_ALG = "JWT_HEADER_BAD_ALG"
    HEADER_BAD_KID = "JWT_HEADER_BAD_KID"
    PAYLOAD_PARSE_ERROR = "JWT_PAYLOAD_PARSE_ERROR"
    SIGNATURE_PARSE_ERROR = "JWT_SIGNATURE_PARSE_ERROR"
    ALG_NOT_IMPLEMENTED = "ALG_NOT_IMPLEMENTED"

    # Key material
    PEM_PUBKEY_BAD_BASE64 = "PEM_PUBKEY_BAD_BASE64"
    PEM_PUBKEY_PARSE_ERROR = "PEM_PUBKEY_PARSE_ERROR"
    JWK_PARSE_ERROR = "JWK_PARSE_ERROR"
    JWK_NO_KEYS = "JWK_NO_KEYS"
    JWK_BAD_KEYS = "JWK_BAD_KEYS"
    JWK_NO_VALID_PUBKEY = "JWK_NO_VALID_PUBKEY"
    JWK_RSA_PUBKEY_PARSE_ERROR = "JWK_RSA_PUBKEY_PARSE_ERROR"
    JWK_EC_PUBKEY_PARSE_ERROR = "JWK_EC_PUBKEY_PARSE_ERROR"
    FAILED_CREATE_EC_KEY = "FAILED_CREATE_EC_KEY"
    FAILED_CREATE_ECDSA_SIGNATURE = "FAILED_CREATE_ECDSA_SIGNATURE"

    # Verification
    INVALID_SIGNATURE = "JWT_INVALID_SIGNATURE"
    KID_ALG_UNMATCHED = "KID_ALG_UNMATCH"

    # Claims policy
    JWT_EXPIRED = "JWT_EXPIRED"
    JWT_UNKNOWN_ISSUER = "JWT_UNKNOWN_ISSUER"
    AUDIENCE_NOT_ALLOWED = "AUDIENCE_NOT_ALLOWED"

    @property
    def message(self) -> str:
        """Human-readable description of the status."""
        return _MESSAGES.get(self, self.value)

    @property
    def ok(self) -> bool:
        return self is Status.OK


_MESSAGES: dict[Status, str] = {
    Status.OK: "OK",
    Status.BAD_FORMAT: "JWT must have exactly three dot-separated segments",
    Status.HEADER_PARSE_ERROR: "JWT header is not a base64url-encoded JSON object",
    Status.HEADER_NO_ALG: "JWT header has no alg",
    Status.HEADER_BAD_ALG: "JWT header alg is not a string",
    Status.HEADER_BAD_KID: "JWT header kid is not a string",
    Status.PAYLOAD_PARSE_ERROR: "JWT payload is not a valid base64url-encoded JSON object",
    Status.SIGNATURE_PARSE_ERROR: "JWT signature is not valid base64url",
    Status.ALG_NOT_IMPLEMENTED: "JWT alg is not supported",
    Status.PEM_PUBKEY_BAD_BASE64: "PEM public key is not valid base64",
    Status.PEM_PUBKEY_PARSE_ERROR: "PEM public key is not an RSA public key",
    Status.JWK_PARSE_ERROR: "JWKS is not a JSON object",
    Status.JWK_NO_KEYS: "JWKS has no keys",
    Status.JWK_BAD_KEYS: "JWKS keys is not an array of objects",
    Status.JWK_NO_VALID_PUBKEY: "JWKS has no usable public key",
    Status.JWK_RSA_PUBKEY_PARSE_ERROR: "JWK RSA public key could not be parsed",
    Status.JWK_EC_PUBKEY_PARSE_ERROR: "JWK EC public key could not be parsed",
    Status.FAILED_CREATE_EC_KEY: "Failed to create EC key",
    Status.FAILED_CREATE_ECDSA_SIGNATURE: "Failed to create ECDSA signature",
    Status.INVALID_SIGNATURE: "JWT signature is invalid",
    Status.KID_ALG_UNMATCHED: "No key matches the JWT kid and alg",
    Status.JWT_EXPIRED: "JWT is expired",
    Status.JWT_UNKNOWN_ISSUER: "Unknown issuer",
    Status.AUDIENCE_NOT_ALLOWED: "Audience doesn't match",
}


class TokenVerificationError(Exception):
    """Raised by the ``raise_for_status()`` helpers when a status is not OK."""

    def __init__(self, message: str, code: str):
        self.message = message
        self.code = code
        super().__init__(message)

    @classmethod
    def from_status(cls, status: Status) -> "TokenVerificationError":
        return cls(status.message, status.value)


def raise_for_status(status: Status) -> None:
    """Raise :class:`TokenVerificationError` unless ``status`` is OK."""
    if status is not Status.OK:
        raise TokenVerificationError.from_status(status)
