# Copyright (c) Syntropy Systems
"""Console presentation of benchmark statistics and rankings."""
from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table

from signbench.ranking import rank_all_chains

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

    from signbench.models.chain import Chain, ChainSelection
    from signbench.models.stats import ChainStats, ServiceRanking, ServiceStats

MEDALS = ("🥇", "🥈", "🥉")


def medal_for(rank: int) -> str:
    """Medal for the podium, ``#n`` for everyone else."""
    if 1 <= rank <= len(MEDALS):
        return MEDALS[rank - 1]
    return f"#{rank}"


def format_chain_stats(stats: ChainStats) -> str:
    """Format one stats block as plain text."""
    if stats.chain is None:
        title = "Consolidated (Both Chains)"
    else:
        title = stats.chain.display_name
    lines = [
        f"{title}:",
        f"  Iterations: {stats.iterations} "
        f"({stats.success_count} success, {stats.error_count} errors)",
        f"  Success Rate: {stats.success_rate:.1f}%",
        f"  Verified: {stats.verified_count}/{stats.success_count}",
    ]
    if stats.verification_failures > 0:
        lines.append(f"  ⚠️  Verification failures: {stats.verification_failures}")
    lines.extend(
        [
            f"  Mean: {stats.mean:.2f}ms",
            f"  Median: {stats.median:.2f}ms",
            f"  P95: {stats.p95:.2f}ms",
            f"  P99: {stats.p99:.2f}ms",
            f"  Range: {stats.min:.2f}ms - {stats.max:.2f}ms",
            f"  Std Dev: {stats.standard_deviation:.2f}ms",
        ]
    )
    return "\n".join(lines)


def format_service_stats(stats: ServiceStats) -> str:
    """Format every stats block of a service, consolidated last."""
    blocks = [
        format_chain_stats(s)
        for s in (stats.ethereum, stats.solana, stats.consolidated)
        if s is not None
    ]
    return "\n\n".join(blocks)


def render_rankings(
    console: Console, rankings: Sequence[ServiceRanking], chain: Chain
) -> None:
    """Print a ranking table for one chain. Prints nothing when empty."""
    if not rankings:
        return

    table = Table(title=f"🏆 {chain.value.upper()} RANKINGS")
    table.add_column("Rank", style="dim")
    table.add_column("Service")
    table.add_column("Median", justify="right")
    table.add_column("Mean", justify="right")
    table.add_column("P95", justify="right")
    table.add_column("Success", justify="right")

    for ranking in rankings:
        style = "green" if ranking.rank == 1 else ""
        median = f"{ranking.median:.2f}ms"
        table.add_row(
            medal_for(ranking.rank),
            ranking.service_name.capitalize(),
            median if not style else f"[{style}]{median}[/{style}]",
            f"{ranking.mean:.2f}ms",
            f"{ranking.p95:.2f}ms",
            f"{ranking.success_rate:.1f}%",
        )

    console.print(table)


def render_service_stats(console: Console, stats: ServiceStats) -> None:
    """Print the detailed statistics of one service."""
    console.print(f"[bold]{stats.service_name.capitalize()}:[/bold]\n")
    console.print(format_service_stats(stats), markup=False, highlight=False)


def render_report(
    console: Console, all_stats: Sequence[ServiceStats], selection: ChainSelection
) -> None:
    """Print the full benchmark report.

    A single service gets only its detailed view; several services get the
    per-chain rankings first.
    """
    console.print("=" * 60)
    console.print("📊 BENCHMARK RESULTS")
    console.print("=" * 60)

    if not all_stats:
        console.print("[yellow]No services completed a benchmark.[/yellow]")
        return

    if len(all_stats) == 1:
        console.print()
        render_service_stats(console, all_stats[0])
        return

    for chain, rankings in rank_all_chains(all_stats, selection).items():
        console.print()
        render_rankings(console, rankings, chain)

    console.print("\n📈 DETAILED STATISTICS:\n")
    for index, stats in enumerate(all_stats):
        if index > 0:
            console.print()
        render_service_stats(console, stats)
