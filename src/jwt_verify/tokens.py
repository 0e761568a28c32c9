"""Compact JWT parsing — structure and claims only, no signature checks."""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from jwt_verify import base64url
from jwt_verify.config import SUPPORTED_ALGORITHMS
from jwt_verify.status import Status, raise_for_status

logger = logging.getLogger("jwt_verify.tokens")

_UINT64_MAX = 2**64 - 1


@dataclass(frozen=True, slots=True)
class Token:
    """A parsed compact JWT.

    ``status`` is the first error hit while parsing, or ``Status.OK``. Fields
    after the failing step keep their defaults. A status-OK token has not
    been verified yet; pass it to ``verify``.

    ``header`` and ``payload`` are read-only views of the decoded JSON
    objects and take no part in equality or hashing.
    """

    status: Status
    header_raw: str = ""
    payload_raw: str = ""
    header_text: str = ""
    payload_text: str = ""
    header: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), compare=False)
    payload: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}), compare=False)
    algorithm: str = ""
    key_id: str = ""
    issuer: str = ""
    subject: str = ""
    audience: tuple[str, ...] = ()
    expiration: int = 0
    signature: bytes = b""

    @property
    def signed_data(self) -> bytes:
        """The exact bytes the signature covers: ``header_raw.payload_raw``."""
        return f"{self.header_raw}.{self.payload_raw}".encode("utf-8")

    def raise_for_status(self) -> None:
        raise_for_status(self.status)


class _ParseFailure(Exception):
    def __init__(self, status: Status):
        self.status = status
        super().__init__(status.value)


def _decode_json_object(segment: str, status: Status) -> tuple[str, dict[str, Any]]:
    raw = base64url.decode(segment)
    try:
        text = raw.decode("utf-8")
        value = json.loads(text)
    except (ValueError, RecursionError):
        raise _ParseFailure(status) from None
    if not isinstance(value, dict):
        raise _ParseFailure(status)
    return text, value


def _string_claim(payload: dict[str, Any], name: str) -> str:
    value = payload.get(name)
    return value if isinstance(value, str) else ""


def _exp_claim(payload: dict[str, Any]) -> int:
    value = payload.get("exp")
    # bool is an int subclass; JSON true/false is not a timestamp.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    # NaN fails both comparisons.
    if not 0 <= value <= _UINT64_MAX:
        return 0
    return int(value)


def _audience_claim(payload: dict[str, Any]) -> tuple[str, ...]:
    if "aud" not in payload:
        return ()
    value = payload["aud"]
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return tuple(value)
    raise _ParseFailure(Status.PAYLOAD_PARSE_ERROR)


def parse_token(compact: str) -> Token:
    """Parse a compact ``header.payload.signature`` JWT.

    Never raises for malformed input; inspect ``Token.status`` instead.
    """
    fields: dict[str, Any] = {}
    try:
        _parse_into(compact, fields)
    except _ParseFailure as exc:
        logger.debug("JWT rejected: %s", exc.status.value)
        return Token(status=exc.status, **fields)
    return Token(status=Status.OK, **fields)


def _parse_into(compact: str, fields: dict[str, Any]) -> None:
    if not isinstance(compact, str) or compact.count(".") != 2:
        raise _ParseFailure(Status.BAD_FORMAT)
    segments = compact.split(".")
    if len(segments) != 3:
        raise _ParseFailure(Status.BAD_FORMAT)
    header_raw, payload_raw, signature_raw = segments

    fields["header_raw"] = header_raw
    header_text, header = _decode_json_object(header_raw, Status.HEADER_PARSE_ERROR)
    fields["header_text"] = header_text
    fields["header"] = MappingProxyType(header)

    if "alg" not in header:
        raise _ParseFailure(Status.HEADER_NO_ALG)
    alg = header["alg"]
    if not isinstance(alg, str):
        raise _ParseFailure(Status.HEADER_BAD_ALG)
    if alg not in SUPPORTED_ALGORITHMS:
        raise _ParseFailure(Status.ALG_NOT_IMPLEMENTED)
    fields["algorithm"] = alg

    kid = header.get("kid", "")
    if not isinstance(kid, str):
        raise _ParseFailure(Status.HEADER_BAD_KID)
    fields["key_id"] = kid

    fields["payload_raw"] = payload_raw
    payload_text, payload = _decode_json_object(payload_raw, Status.PAYLOAD_PARSE_ERROR)
    fields["payload_text"] = payload_text
    fields["payload"] = MappingProxyType(payload)

    fields["issuer"] = _string_claim(payload, "iss")
    fields["subject"] = _string_claim(payload, "sub")
    fields["expiration"] = _exp_claim(payload)
    fields["audience"] = _audience_claim(payload)

    signature = base64url.decode(signature_raw)
    if not signature:
        raise _ParseFailure(Status.SIGNATURE_PARSE_ERROR)
    fields["signature"] = signature
