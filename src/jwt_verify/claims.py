"""Caller-side claim checks — expiration, issuer and audience policy."""

import time

from jwt_verify.config import ClaimsPolicy
from jwt_verify.status import Status
from jwt_verify.tokens import Token


def check_claims(token: Token, policy: ClaimsPolicy, now: float | None = None) -> Status:
    """Check ``token``'s claims against ``policy``.

    Run this after ``verify`` succeeds; it does not look at the signature.
    An ``exp`` of 0 means the claim was absent or unusable and only fails
    when ``policy.require_exp`` is set.
    """
    if token.status is not Status.OK:
        return token.status

    if now is None:
        now = time.time()
    if token.expiration == 0:
        if policy.require_exp:
            return Status.JWT_EXPIRED
    elif token.expiration + policy.leeway_seconds < now:
        return Status.JWT_EXPIRED

    if policy.issuers and token.issuer not in policy.issuers:
        return Status.JWT_UNKNOWN_ISSUER

    if policy.audiences and not set(token.audience) & set(policy.audiences):
        return Status.AUDIENCE_NOT_ALLOWED

    return Status.OK
