# Copyright (c) Syntropy Systems
"""Pydantic models for signbench records."""

from .base import SignbenchBaseModel
from .chain import Chain, ChainSelection
from .results import (
    BatchResult,
    ChainResult,
    IterationOutcome,
    ServiceFailure,
    ServiceResult,
    SignatureResult,
    SigningFailure,
    SigningSuccess,
    VerificationResult,
)
from .stats import ChainStats, ServiceRanking, ServiceStats

__all__ = [
    "BatchResult",
    "Chain",
    "ChainResult",
    "ChainSelection",
    "ChainStats",
    "IterationOutcome",
    "ServiceFailure",
    "ServiceRanking",
    "ServiceResult",
    "ServiceStats",
    "SignatureResult",
    "SignbenchBaseModel",
    "SigningFailure",
    "SigningSuccess",
    "VerificationResult",
]
