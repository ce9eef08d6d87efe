# Copyright (c) Syntropy Systems
"""Latency statistics for benchmark results.

Every statistic shown or ranked comes from here, so all services are
reduced the same way.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING

from signbench.models.results import SigningSuccess
from signbench.models.stats import ChainStats, ServiceStats

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from signbench.models.chain import Chain
    from signbench.models.results import ChainResult, IterationOutcome, ServiceResult


def extract_latencies(results: Iterable[IterationOutcome]) -> list[float]:
    """Return latencies of successful outcomes, in iteration order."""
    return [r.api_latency_ms for r in results if isinstance(r, SigningSuccess)]


def count_verifications(results: Iterable[IterationOutcome]) -> tuple[int, int]:
    """Return (verified_count, verification_failures).

    Outcomes that were never verified count towards neither.
    """
    verified = 0
    failures = 0
    for r in results:
        if not isinstance(r, SigningSuccess):
            continue
        if r.verified is True:
            verified += 1
        elif r.verified is False:
            failures += 1
    return verified, failures


def percentile(sorted_values: Sequence[float], pct: float) -> float:
    """Linearly interpolated percentile of an ascending sequence.

    The value sits at index ``pct/100 * (n-1)``; when that falls between two
    samples they are weighted by the fractional part. Returns 0 for an
    empty sequence.
    """
    if not sorted_values:
        return 0.0

    index = (pct / 100) * (len(sorted_values) - 1)
    lower = math.floor(index)
    upper = math.ceil(index)

    if lower == upper:
        return float(sorted_values[lower])

    weight = index - lower
    low = float(sorted_values[lower])
    high = float(sorted_values[upper])
    return low + (high - low) * weight


def compute_stats(
    latencies: Sequence[float],
    success_count: int,
    error_count: int,
    verified_count: int = 0,
    verification_failures: int = 0,
    *,
    chain: Chain | None,
    service_name: str,
) -> ChainStats:
    """Reduce latency samples and counters into a ChainStats record.

    Variance is the population variance. With no samples every latency
    field is zero and the success rate is zero.
    """
    iterations = success_count + error_count

    if not latencies:
        return ChainStats(
            chain=chain,
            service_name=service_name,
            iterations=iterations,
            success_count=success_count,
            error_count=error_count,
            verified_count=verified_count,
            verification_failures=verification_failures,
        )

    ordered = sorted(latencies)
    n = len(ordered)
    total = math.fsum(ordered)
    mean = total / n
    variance = math.fsum((lat - mean) ** 2 for lat in ordered) / n
    success_rate = (success_count / iterations) * 100 if iterations > 0 else 0.0

    return ChainStats(
        chain=chain,
        service_name=service_name,
        iterations=iterations,
        mean=mean,
        median=percentile(ordered, 50),
        min=ordered[0],
        max=ordered[-1],
        p95=percentile(ordered, 95),
        p99=percentile(ordered, 99),
        standard_deviation=math.sqrt(variance),
        variance=variance,
        total_latency=total,
        success_count=success_count,
        error_count=error_count,
        success_rate=success_rate,
        ordered_latencies=tuple(ordered),
        verified_count=verified_count,
        verification_failures=verification_failures,
    )


def calculate_chain_stats(result: ChainResult) -> ChainStats:
    """Statistics for a single chain run."""
    verified, failures = count_verifications(result.results)
    return compute_stats(
        extract_latencies(result.results),
        result.success_count,
        result.error_count,
        verified,
        failures,
        chain=result.chain,
        service_name=result.service_name,
    )


def calculate_consolidated_stats(
    ethereum: ChainResult, solana: ChainResult, service_name: str
) -> ChainStats:
    """Statistics over the union of both chains' samples."""
    combined = [*ethereum.results, *solana.results]
    verified, failures = count_verifications(combined)
    return compute_stats(
        extract_latencies(combined),
        ethereum.success_count + solana.success_count,
        ethereum.error_count + solana.error_count,
        verified,
        failures,
        chain=None,
        service_name=service_name,
    )


def calculate_service_stats(result: ServiceResult) -> ServiceStats:
    """Statistics for every chain a service ran, plus consolidated stats."""
    ethereum = calculate_chain_stats(result.ethereum) if result.ethereum else None
    solana = calculate_chain_stats(result.solana) if result.solana else None

    consolidated = None
    if result.ethereum is not None and result.solana is not None:
        consolidated = calculate_consolidated_stats(
            result.ethereum, result.solana, result.service_name
        )

    return ServiceStats(
        service_name=result.service_name,
        ethereum=ethereum,
        solana=solana,
        consolidated=consolidated,
    )


def calculate_all_stats(results: Iterable[ServiceResult]) -> list[ServiceStats]:
    """Statistics for each service, in input order."""
    return [calculate_service_stats(r) for r in results]
