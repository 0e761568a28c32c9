"""JWT signature verification against a parsed key set — local, no I/O."""

import logging
from dataclasses import dataclass

from jwt_verify.keys import KeySet, PublicKeyEntry
from jwt_verify.status import Status, raise_for_status
from jwt_verify.tokens import Token

logger = logging.getLogger("jwt_verify.verifier")


@dataclass(frozen=True, slots=True)
class VerificationResult:
    """Outcome of ``verify``. Truthy only when the signature verified.

    ``key`` is the first key entry that verified the signature.
    """

    verified: bool
    status: Status
    key: PublicKeyEntry | None = None

    def __bool__(self) -> bool:
        return self.verified

    def raise_for_status(self) -> None:
        raise_for_status(self.status)


def _matches(token: Token, entry: PublicKeyEntry) -> bool:
    """Apply the kid/alg selection rules for one key entry.

    A token without ``kid`` may be verified by any key; a key without a
    declared ``kid`` or ``alg`` matches any token value.
    """
    if token.key_id and entry.key_id is not None and entry.key_id != token.key_id:
        return False
    if entry.algorithm is not None and entry.algorithm != token.algorithm:
        return False
    return True


def verify(token: Token, key_set: KeySet) -> VerificationResult:
    """Verify ``token``'s signature against the keys in ``key_set``.

    Keys are tried in document order; the first one that verifies wins.
    Expiration, issuer and audience are not checked here; see
    ``jwt_verify.claims.check_claims``.
    """
    if token.status is not Status.OK:
        return VerificationResult(verified=False, status=token.status)
    if key_set.status is not Status.OK:
        return VerificationResult(verified=False, status=key_set.status)

    signed_data = token.signed_data
    candidates = 0
    for index, entry in enumerate(key_set.keys):
        if not _matches(token, entry):
            continue
        candidates += 1
        if entry.verify_signature(token.algorithm, signed_data, token.signature):
            logger.debug(
                "JWT verified with key #%d (kty=%s, kid=%r)", index, entry.key_type, entry.key_id,
            )
            return VerificationResult(verified=True, status=Status.OK, key=entry)

    status = Status.INVALID_SIGNATURE if candidates else Status.KID_ALG_UNMATCHED
    logger.debug(
        "JWT verification failed: %s (alg=%s, kid=%r, %d candidate keys)",
        status.value, token.algorithm, token.key_id, candidates,
    )
    return VerificationResult(verified=False, status=status)
