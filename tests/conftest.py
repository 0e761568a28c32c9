"""Test fixtures for jwt-verify tests.

All tests are offline — they generate RSA and EC keys, sign JWTs with PyJWT,
and hand the PEM / JWKS text straight to the loaders.
"""

import json
import time
import uuid

import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from jwt_verify import base64url


def _rsa_pair() -> tuple[str, str]:
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")
    return private_pem, public_pem


@pytest.fixture(scope="session")
def rsa_key_pair():
    """Generate a test RSA key pair as (private_pem, public_pem)."""
    return _rsa_pair()


@pytest.fixture(scope="session")
def other_rsa_key_pair():
    """A second, unrelated RSA key pair."""
    return _rsa_pair()


@pytest.fixture(scope="session")
def ec_key_pair():
    """Generate a test P-256 key pair as (private_pem, public_key)."""
    private_key = ec.generate_private_key(ec.SECP256R1())
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")
    return private_pem, private_key.public_key()


@pytest.fixture
def test_kid():
    return f"test-key-{uuid.uuid4().hex[:8]}"


def rsa_jwk(public_pem: str, kid: str | None = None, alg: str | None = "RS256") -> dict:
    """Convert a PEM RSA public key to JWK format."""
    public_key = serialization.load_pem_public_key(public_pem.encode("utf-8"))
    numbers = public_key.public_numbers()

    def _int_to_b64url(value: int) -> str:
        byte_length = (value.bit_length() + 7) // 8
        return base64url.encode(value.to_bytes(byte_length, byteorder="big"))

    jwk = {"kty": "RSA", "use": "sig", "n": _int_to_b64url(numbers.n), "e": _int_to_b64url(numbers.e)}
    if kid is not None:
        jwk["kid"] = kid
    if alg is not None:
        jwk["alg"] = alg
    return jwk


def ec_jwk(public_key: ec.EllipticCurvePublicKey, kid: str | None = None, alg: str | None = "ES256") -> dict:
    """Convert a P-256 public key to JWK format."""
    numbers = public_key.public_numbers()
    jwk = {
        "kty": "EC",
        "crv": "P-256",
        "x": base64url.encode(numbers.x.to_bytes(32, byteorder="big")),
        "y": base64url.encode(numbers.y.to_bytes(32, byteorder="big")),
    }
    if kid is not None:
        jwk["kid"] = kid
    if alg is not None:
        jwk["alg"] = alg
    return jwk


def jwks_text(*jwks: dict) -> str:
    return json.dumps({"keys": list(jwks)})


def create_test_token(
    private_key_pem: str,
    kid: str | None = None,
    *,
    algorithm: str = "RS256",
    subject: str = "user-123",
    issuer: str = "https://issuer.example.com",
    audience: str | list[str] | None = "api",
    expires_in: int = 900,
    extra: dict | None = None,
) -> str:
    """Create a test JWT signed with the given private key."""
    now = int(time.time())
    payload = {
        "sub": subject,
        "iss": issuer,
        "iat": now,
        "exp": now + expires_in,
        **(extra or {}),
    }
    if audience is not None:
        payload["aud"] = audience
    headers = {"kid": kid} if kid is not None else None
    return jwt.encode(payload, private_key_pem, algorithm=algorithm, headers=headers)


def make_compact(header, payload, signature: bytes = b"sig") -> str:
    """Assemble a compact JWT from raw header/payload values without signing."""

    def _segment(value) -> str:
        if isinstance(value, (bytes, str)):
            return base64url.encode(value)
        return base64url.encode(json.dumps(value))

    return ".".join([_segment(header), _segment(payload), base64url.encode(signature)])
