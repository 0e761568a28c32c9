"""Vulture whitelist — public API that is used by consumers, not internally."""

# ---------------------------------------------------------------------------
# Token / KeySet / result accessors (read by callers after verification)
# ---------------------------------------------------------------------------
from jwt_verify.keys import KeySet, PublicKeyEntry
from jwt_verify.status import Status
from jwt_verify.tokens import Token
from jwt_verify.verifier import VerificationResult

Token.raise_for_status
KeySet.raise_for_status
VerificationResult.raise_for_status
PublicKeyEntry.to_jwk
Status.ok

# ---------------------------------------------------------------------------
# Dataclass fields (exposed as data)
# ---------------------------------------------------------------------------
_.header_text
_.payload_text
_.subject
_.rejected
_.reason
