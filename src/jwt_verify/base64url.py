"""Base64url codec for JWT segments and JWK integers.

Decoding is strict: anything that is not the unpadded URL-safe alphabet
(optionally with correct trailing padding) decodes to ``b""``. No legitimate
JWT segment or JWK field decodes to empty bytes, so callers treat an empty
result as a decode failure.
"""

import base64
import binascii
import string

from jwt.utils import base64url_encode

_ALPHABET = frozenset(string.ascii_letters + string.digits + "-_")
_TO_STANDARD = str.maketrans("-_", "+/")
_PADDING = {0: "", 2: "==", 3: "="}


def decode(value: str | bytes) -> bytes:
    """Decode base64url ``value``, returning ``b""`` on any error."""
    if isinstance(value, bytes):
        try:
            value = value.decode("ascii")
        except UnicodeDecodeError:
            return b""

    # At most two "=" are tolerated, and only on an already padded input.
    if value and len(value) % 4 == 0 and value.endswith("="):
        value = value[:-1]
        if value.endswith("="):
            value = value[:-1]

    if any(c not in _ALPHABET for c in value):
        return b""

    padding = _PADDING.get(len(value) % 4)
    if padding is None:
        return b""

    try:
        return base64.b64decode(value.translate(_TO_STANDARD) + padding, validate=True)
    except (binascii.Error, ValueError):
        return b""


def decode_uint(value: str) -> int | None:
    """Decode a base64url big-endian unsigned integer, or ``None`` on error."""
    raw = decode(value)
    if not raw:
        return None
    return int.from_bytes(raw, byteorder="big")


def encode(data: bytes | str) -> str:
    """Encode ``data`` as unpadded base64url text."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64url_encode(data).decode("ascii")
