# Copyright (c) Syntropy Systems
"""Configuration management for signbench."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

import yaml

from signbench.models.chain import Chain, ChainSelection
from signbench.services import STANDARD_MESSAGES

# Cap on automatically derived warmup iterations
MAX_DEFAULT_WARMUP = 3

_CHAIN_VALUES = frozenset(c.value for c in Chain)


def default_warmup_iterations(iterations: int) -> int:
    """Warmup count used when none is configured: a fifth of the run, at most 3."""
    return min(MAX_DEFAULT_WARMUP, iterations // 5)


@dataclass
class BenchmarkConfig:
    """Configuration for a benchmark run."""

    # Which chain(s) to benchmark
    chain: ChainSelection = ChainSelection.BOTH

    # Measured signing iterations per chain
    iterations: int = 20

    # Iterations run before measurement and discarded; None derives it
    warmup_iterations: int | None = None

    # Pause between consecutive requests (milliseconds)
    delay_ms: float = 100.0

    # Message each chain signs
    messages: dict[Chain, str] = field(default_factory=lambda: dict(STANDARD_MESSAGES))

    def __post_init__(self) -> None:
        self.chain = ChainSelection(self.chain)
        if self.iterations < 1:
            msg = f"iterations must be a positive number, got {self.iterations}"
            raise ValueError(msg)
        if self.warmup_iterations is None:
            self.warmup_iterations = default_warmup_iterations(self.iterations)
        if self.warmup_iterations < 0:
            msg = f"warmup_iterations must not be negative, got {self.warmup_iterations}"
            raise ValueError(msg)
        if self.delay_ms < 0:
            msg = f"delay_ms must not be negative, got {self.delay_ms}"
            raise ValueError(msg)
        self.messages = {Chain(k): v for k, v in self.messages.items()}

    @property
    def warmup(self) -> int:
        """Resolved warmup iteration count."""
        return self.warmup_iterations or 0

    def message_for(self, chain: Chain) -> str:
        """Return the message signed on ``chain``."""
        return self.messages.get(chain, STANDARD_MESSAGES[chain])


def load_config(path: Path | None = None) -> BenchmarkConfig:
    """Load configuration from a YAML file or defaults.

    Unknown keys and values of the wrong type are ignored; values of the
    right type that are out of range raise ValueError.
    """
    if path is None or not path.exists():
        return BenchmarkConfig()

    with path.open() as f:
        try:
            loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {path}: {e}"
            raise ValueError(msg) from e

    if loaded is None:
        return BenchmarkConfig()
    if not isinstance(loaded, dict):
        msg = f"Config file {path} must contain a mapping"
        raise ValueError(msg)
    data = cast("dict[str, object]", loaded)

    kwargs: dict[str, object] = {}

    chain = data.get("chain")
    if isinstance(chain, str):
        try:
            kwargs["chain"] = ChainSelection(chain.lower())
        except ValueError as e:
            msg = 'chain must be "ethereum", "solana", or "both"'
            raise ValueError(msg) from e
    iterations = data.get("iterations")
    if isinstance(iterations, int) and not isinstance(iterations, bool):
        kwargs["iterations"] = iterations
    warmup = data.get("warmup_iterations")
    if isinstance(warmup, int) and not isinstance(warmup, bool):
        kwargs["warmup_iterations"] = warmup
    delay_ms = data.get("delay_ms")
    if isinstance(delay_ms, (int, float)) and not isinstance(delay_ms, bool):
        kwargs["delay_ms"] = float(delay_ms)

    messages = data.get("messages")
    if isinstance(messages, dict):
        resolved = dict(STANDARD_MESSAGES)
        for key, value in cast("dict[object, object]", messages).items():
            if isinstance(key, str) and key in _CHAIN_VALUES and isinstance(value, str):
                resolved[Chain(key)] = value
        kwargs["messages"] = resolved

    return BenchmarkConfig(**kwargs)  # type: ignore[arg-type]
