# Copyright (c) Syntropy Systems
"""Pydantic models for reduced latency statistics and rankings."""

from __future__ import annotations

from pydantic import Field

from .base import SignbenchBaseModel
from .chain import Chain


class ChainStats(SignbenchBaseModel):
    """Latency statistics for one chain, or for both chains combined.

    ``chain`` is None for consolidated statistics.
    """

    chain: Chain | None
    service_name: str
    iterations: int = 0
    mean: float = 0.0
    median: float = 0.0
    min: float = 0.0
    max: float = 0.0
    p95: float = 0.0
    p99: float = 0.0
    standard_deviation: float = 0.0
    variance: float = 0.0
    total_latency: float = 0.0
    success_count: int = 0
    error_count: int = 0
    success_rate: float = Field(default=0.0, ge=0, le=100)
    ordered_latencies: tuple[float, ...] = ()
    verified_count: int = 0
    verification_failures: int = 0

    @property
    def is_consolidated(self) -> bool:
        return self.chain is None


class ServiceStats(SignbenchBaseModel):
    """Statistics for one service across the chains it was run on."""

    service_name: str
    ethereum: ChainStats | None = None
    solana: ChainStats | None = None
    consolidated: ChainStats | None = None

    def for_chain(self, chain: Chain) -> ChainStats | None:
        """Return the stats for ``chain`` if that chain was run."""
        return self.ethereum if chain is Chain.ETHEREUM else self.solana


class ServiceRanking(SignbenchBaseModel):
    """Position of one service in a per-chain latency ranking."""

    service_name: str
    chain: Chain
    rank: int = Field(ge=1)
    median: float
    mean: float
    p95: float
    success_rate: float
