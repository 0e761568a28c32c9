"""Public key material — PEM and JWKS parsing into verification-ready key entries."""

import abc
import base64
import binascii
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Iterator

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature
from jwt.utils import to_base64url_uint

from jwt_verify import base64url
from jwt_verify.config import EC_ALGORITHMS, ES256_SIGNATURE_LENGTH, RSA_ALGORITHMS
from jwt_verify.status import Status, raise_for_status

logger = logging.getLogger("jwt_verify.keys")

_RSA_DIGESTS: dict[str, type[hashes.HashAlgorithm]] = {
    "RS384": hashes.SHA384,
    "RS512": hashes.SHA512,
}


class KeySourceFormat(str, Enum):
    """Encoding of the key source text handed to ``load_keys``."""

    PEM = "pem"
    JWKS = "jwks"


@dataclass(frozen=True, slots=True, kw_only=True)
class PublicKeyEntry(abc.ABC):
    """Abstract base for one verification key plus its declared ``kid``/``alg``.

    ``None`` means the constraint was not declared and matches any token.
    Subclasses implement ``verify_signature()`` and ``to_jwk()``.
    """

    key_type: ClassVar[str]

    key_id: str | None = None
    algorithm: str | None = None

    @abc.abstractmethod
    def verify_signature(self, algorithm: str, signed_data: bytes, signature: bytes) -> bool:
        """Return True if ``signature`` over ``signed_data`` is valid for this key."""

    @abc.abstractmethod
    def to_jwk(self) -> dict[str, str]:
        """Export the public key as a JWK dict."""

    def _declared(self) -> dict[str, str]:
        declared = {}
        if self.key_id is not None:
            declared["kid"] = self.key_id
        if self.algorithm is not None:
            declared["alg"] = self.algorithm
        return declared


@dataclass(frozen=True, slots=True, kw_only=True)
class RSAPublicKeyEntry(PublicKeyEntry):
    """RSA key from a PEM source or an ``RSA`` JWK; verifies RS256/384/512."""

    key_type: ClassVar[str] = "RSA"

    public_key: rsa.RSAPublicKey
    pem_format: bool = False

    def verify_signature(self, algorithm: str, signed_data: bytes, signature: bytes) -> bool:
        digest = _RSA_DIGESTS.get(algorithm, hashes.SHA256)()
        try:
            self.public_key.verify(signature, signed_data, padding.PKCS1v15(), digest)
        except InvalidSignature:
            return False
        return True

    def to_jwk(self) -> dict[str, str]:
        numbers = self.public_key.public_numbers()
        return {
            "kty": self.key_type,
            **self._declared(),
            "n": to_base64url_uint(numbers.n).decode("ascii"),
            "e": to_base64url_uint(numbers.e).decode("ascii"),
        }


@dataclass(frozen=True, slots=True, kw_only=True)
class ECPublicKeyEntry(PublicKeyEntry):
    """P-256 key from an ``EC`` JWK; verifies ES256 (ECDSA over SHA-256)."""

    key_type: ClassVar[str] = "EC"

    public_key: ec.EllipticCurvePublicKey

    def verify_signature(self, algorithm: str, signed_data: bytes, signature: bytes) -> bool:
        if len(signature) != ES256_SIGNATURE_LENGTH:
            return False
        half = ES256_SIGNATURE_LENGTH // 2
        r = int.from_bytes(signature[:half], byteorder="big")
        s = int.from_bytes(signature[half:], byteorder="big")
        try:
            self.public_key.verify(
                encode_dss_signature(r, s), signed_data, ec.ECDSA(hashes.SHA256()),
            )
        except InvalidSignature:
            return False
        return True

    def to_jwk(self) -> dict[str, str]:
        numbers = self.public_key.public_numbers()
        size = ES256_SIGNATURE_LENGTH // 2
        return {
            "kty": self.key_type,
            **self._declared(),
            "crv": "P-256",
            "x": base64url.encode(numbers.x.to_bytes(size, byteorder="big")),
            "y": base64url.encode(numbers.y.to_bytes(size, byteorder="big")),
        }


@dataclass(frozen=True, slots=True)
class RejectedKey:
    """A JWKS element that was skipped, kept for diagnostics."""

    index: int
    status: Status
    reason: str


@dataclass(frozen=True, slots=True)
class KeySet:
    """Ordered key entries parsed from one key source.

    ``status`` is OK only when at least one entry is usable.
    """

    status: Status
    keys: tuple[PublicKeyEntry, ...] = ()
    rejected: tuple[RejectedKey, ...] = ()

    def __iter__(self) -> Iterator[PublicKeyEntry]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def raise_for_status(self) -> None:
        raise_for_status(self.status)


# ---------------------------------------------------------------------------
# PEM
# ---------------------------------------------------------------------------


def _pem_body(pem: str) -> str:
    lines = [line.strip() for line in pem.splitlines()]
    return "".join(line for line in lines if line and not line.startswith("-----"))


def load_keys_from_pem(pem: str) -> KeySet:
    """Load a single RSA public key from PEM text.

    Accepts armored PEM or the bare base64 body, wrapping either a
    SubjectPublicKeyInfo or a PKCS#1 ``RSAPublicKey``.
    """
    if isinstance(pem, bytes):
        pem = pem.decode("ascii", errors="replace")
    try:
        der = base64.b64decode(_pem_body(pem), validate=True)
    except (binascii.Error, ValueError):
        der = b""
    if not der:
        logger.debug("PEM public key rejected: bad base64")
        return KeySet(status=Status.PEM_PUBKEY_BAD_BASE64)

    try:
        public_key = serialization.load_der_public_key(der)
    except (ValueError, UnsupportedAlgorithm):
        public_key = None
    if not isinstance(public_key, rsa.RSAPublicKey):
        logger.debug("PEM public key rejected: not an RSA public key")
        return KeySet(status=Status.PEM_PUBKEY_PARSE_ERROR)

    return KeySet(
        status=Status.OK,
        keys=(RSAPublicKeyEntry(public_key=public_key, pem_format=True),),
    )


# ---------------------------------------------------------------------------
# JWKS
# ---------------------------------------------------------------------------


class _SkipKey(Exception):
    def __init__(self, status: Status, reason: str):
        self.status = status
        self.reason = reason
        super().__init__(reason)


def _optional_string(jwk: dict[str, Any], name: str, status: Status) -> str | None:
    if name not in jwk:
        return None
    value = jwk[name]
    if not isinstance(value, str):
        raise _SkipKey(status, f"{name} is not a string")
    return value


def _declared_constraints(
    jwk: dict[str, Any], allowed_algorithms: frozenset[str], status: Status,
) -> tuple[str | None, str | None]:
    kid = _optional_string(jwk, "kid", status)
    alg = _optional_string(jwk, "alg", status)
    if alg is not None and alg not in allowed_algorithms:
        raise _SkipKey(status, f"alg {alg!r} not allowed for kty {jwk['kty']}")
    return kid, alg


def _required_uint(jwk: dict[str, Any], name: str, status: Status) -> int:
    value = jwk.get(name)
    if not isinstance(value, str):
        raise _SkipKey(status, f"{name} is missing or not a string")
    number = base64url.decode_uint(value)
    if number is None:
        raise _SkipKey(status, f"{name} is not valid base64url")
    return number


def _rsa_entry(jwk: dict[str, Any]) -> RSAPublicKeyEntry:
    status = Status.JWK_RSA_PUBKEY_PARSE_ERROR
    kid, alg = _declared_constraints(jwk, RSA_ALGORITHMS, status)
    n = _required_uint(jwk, "n", status)
    e = _required_uint(jwk, "e", status)
    try:
        public_key = rsa.RSAPublicNumbers(e, n).public_key()
    except ValueError as exc:
        raise _SkipKey(status, f"invalid RSA public numbers: {exc}") from None
    return RSAPublicKeyEntry(key_id=kid, algorithm=alg, public_key=public_key)


def _ec_entry(jwk: dict[str, Any]) -> ECPublicKeyEntry:
    status = Status.JWK_EC_PUBKEY_PARSE_ERROR
    kid, alg = _declared_constraints(jwk, EC_ALGORITHMS, status)
    x = _required_uint(jwk, "x", status)
    y = _required_uint(jwk, "y", status)
    try:
        public_key = ec.EllipticCurvePublicNumbers(x, y, ec.SECP256R1()).public_key()
    except UnsupportedAlgorithm:
        raise _SkipKey(Status.FAILED_CREATE_EC_KEY, "P-256 is not available") from None
    except ValueError:
        raise _SkipKey(status, "point is not on P-256") from None
    return ECPublicKeyEntry(key_id=kid, algorithm=alg, public_key=public_key)


_ENTRY_BUILDERS = {
    "RSA": _rsa_entry,
    "EC": _ec_entry,
}


def _jwk_entry(jwk: dict[str, Any]) -> PublicKeyEntry:
    kty = jwk.get("kty")
    if not isinstance(kty, str):
        raise _SkipKey(Status.JWK_PARSE_ERROR, "kty is missing or not a string")
    builder = _ENTRY_BUILDERS.get(kty)
    if builder is None:
        raise _SkipKey(Status.JWK_PARSE_ERROR, f"unsupported kty {kty!r}")
    return builder(jwk)


def load_keys_from_jwks(text: str) -> KeySet:
    """Load every usable RSA and EC key from a JWKS document.

    Malformed elements are skipped and listed in ``KeySet.rejected``; the
    set fails only when no element yields a key.
    """
    try:
        document = json.loads(text)
    except (ValueError, TypeError, RecursionError):
        document = None
    if not isinstance(document, dict):
        logger.debug("JWKS rejected: not a JSON object")
        return KeySet(status=Status.JWK_PARSE_ERROR)

    if "keys" not in document:
        return KeySet(status=Status.JWK_NO_KEYS)
    elements = document["keys"]
    if not isinstance(elements, list) or not all(isinstance(jwk, dict) for jwk in elements):
        return KeySet(status=Status.JWK_BAD_KEYS)

    keys: list[PublicKeyEntry] = []
    rejected: list[RejectedKey] = []
    for index, jwk in enumerate(elements):
        try:
            keys.append(_jwk_entry(jwk))
        except _SkipKey as exc:
            logger.debug("Skipping JWK #%d (kid=%r): %s", index, jwk.get("kid"), exc.reason)
            rejected.append(RejectedKey(index=index, status=exc.status, reason=exc.reason))

    if not keys:
        return KeySet(status=Status.JWK_NO_VALID_PUBKEY, rejected=tuple(rejected))
    logger.debug("JWKS loaded: %d keys, %d skipped", len(keys), len(rejected))
    return KeySet(status=Status.OK, keys=tuple(keys), rejected=tuple(rejected))


def load_keys(text: str, fmt: KeySourceFormat | str) -> KeySet:
    """Load keys from ``text`` encoded as ``fmt`` (``"pem"`` or ``"jwks"``)."""
    fmt = KeySourceFormat(fmt)
    if fmt is KeySourceFormat.PEM:
        return load_keys_from_pem(text)
    return load_keys_from_jwks(text)
