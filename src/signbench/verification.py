# Copyright (c) Syntropy Systems
"""Post-hoc signature verification gate."""
from __future__ import annotations

from typing import TYPE_CHECKING

from signbench.errors import describe_error
from signbench.models.results import VerificationResult

if TYPE_CHECKING:
    from signbench.services import SignatureVerifier

VERIFICATION_FAILED = "Signature verification failed"


def verify_signature(
    verifier: SignatureVerifier,
    message: str,
    signature: str,
    address: str,
) -> VerificationResult:
    """Check a signature that has already been timed.

    Never raises: a verifier error is reported as an invalid signature with
    the error as its diagnostic.
    """
    try:
        result = VerificationResult.model_validate(
            verifier.verify(message, signature, address)
        )
    except Exception as exc:  # noqa: BLE001
        return VerificationResult(valid=False, error=describe_error(exc))

    if not result.valid and not result.error:
        return VerificationResult(valid=False, error=VERIFICATION_FAILED)
    return result
