# Copyright (c) Syntropy Systems
"""Chain identifiers shared by every signbench component."""

from __future__ import annotations

from enum import Enum


class Chain(str, Enum):
    """A blockchain whose message signing can be benchmarked."""

    ETHEREUM = "ethereum"
    SOLANA = "solana"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class ChainSelection(str, Enum):
    """Which chain(s) a benchmark run covers."""

    ETHEREUM = "ethereum"
    SOLANA = "solana"
    BOTH = "both"

    def chains(self) -> tuple[Chain, ...]:
        """Expand the selection into concrete chains, ethereum first."""
        if self is ChainSelection.BOTH:
            return (Chain.ETHEREUM, Chain.SOLANA)
        return (Chain(self.value),)
