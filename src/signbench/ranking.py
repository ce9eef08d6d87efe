# Copyright (c) Syntropy Systems
"""Rank services by median signing latency."""
from __future__ import annotations

from typing import TYPE_CHECKING

from signbench.models.stats import ServiceRanking

if TYPE_CHECKING:
    from collections.abc import Iterable

    from signbench.models.chain import Chain, ChainSelection
    from signbench.models.stats import ServiceStats


def rank_services_by_chain(
    stats: Iterable[ServiceStats], chain: Chain
) -> list[ServiceRanking]:
    """Rank services on ``chain``, lowest median first.

    Services without stats for the chain, or without a single successful
    iteration, are left out. Equal medians keep their input order, so the
    same inputs always produce the same ranks.
    """
    candidates = [
        chain_stats
        for chain_stats in (s.for_chain(chain) for s in stats)
        if chain_stats is not None and chain_stats.success_rate > 0
    ]

    # sorted() is stable
    ordered = sorted(candidates, key=lambda s: s.median)

    return [
        ServiceRanking(
            service_name=s.service_name,
            chain=chain,
            rank=rank_idx,
            median=s.median,
            mean=s.mean,
            p95=s.p95,
            success_rate=s.success_rate,
        )
        for rank_idx, s in enumerate(ordered, 1)
    ]


def rank_all_chains(
    stats: Iterable[ServiceStats], selection: ChainSelection
) -> dict[Chain, list[ServiceRanking]]:
    """Rankings for every chain in ``selection``."""
    stats_list = list(stats)
    return {
        chain: rank_services_by_chain(stats_list, chain) for chain in selection.chains()
    }
