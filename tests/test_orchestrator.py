# Copyright (c) Syntropy Systems
"""Tests for service and batch orchestration.

Services are benchmarked one after another, never concurrently, so every
provider sees the same request cadence and system load.
"""

from __future__ import annotations

import pytest
from fakes import FakeMultiChainService, FakeVerifier, FakeWalletService, RecordingSleep

from signbench.config import BenchmarkConfig
from signbench.errors import ServiceInitializationError
from signbench.models.chain import Chain, ChainSelection
from signbench.orchestrator import run_benchmarks, run_service_benchmark
from signbench.ranking import rank_services_by_chain
from signbench.services import (
    STANDARD_ETHEREUM_MESSAGE,
    STANDARD_SOLANA_MESSAGE,
    ServiceRegistry,
)
from signbench.statistics import calculate_all_stats


def _config(
    chain: ChainSelection = ChainSelection.BOTH, **kwargs: object
) -> BenchmarkConfig:
    defaults: dict[str, object] = {"iterations": 3, "warmup_iterations": 1, "delay_ms": 0}
    defaults.update(kwargs)
    return BenchmarkConfig(chain=chain, **defaults)  # type: ignore[arg-type]


class TestRunServiceBenchmark:
    """Tests for benchmarking one service."""

    def test_both_chains(
        self, verifiers: dict[Chain, FakeVerifier], sleep: RecordingSleep
    ) -> None:
        """Test that a multi-chain service produces both chain results."""
        service = FakeMultiChainService()
        result = run_service_benchmark(service, "privy", _config(), verifiers, sleep)

        assert result.service_name == "privy"
        assert result.ethereum is not None
        assert result.solana is not None
        assert len(result.ethereum.results) == 3
        assert len(result.solana.results) == 3
        assert service.init_calls == 1
        # ethereum runs first, each with its own standard message
        assert service.messages[:4] == [STANDARD_ETHEREUM_MESSAGE] * 4
        assert service.messages[4:] == [STANDARD_SOLANA_MESSAGE] * 4

    def test_unsupported_chain_is_skipped(
        self, verifiers: dict[Chain, FakeVerifier], sleep: RecordingSleep
    ) -> None:
        """Test that an ethereum-only service run on both chains still succeeds."""
        service = FakeWalletService()
        result = run_service_benchmark(service, "magic", _config(), verifiers, sleep)

        assert result.ethereum is not None
        assert result.solana is None
        assert verifiers[Chain.SOLANA].calls == []

    def test_solana_only_selection(
        self, verifiers: dict[Chain, FakeVerifier], sleep: RecordingSleep
    ) -> None:
        """Test that only the selected chain runs."""
        service = FakeMultiChainService()
        result = run_service_benchmark(
            service, "privy", _config(ChainSelection.SOLANA), verifiers, sleep
        )

        assert result.ethereum is None
        assert result.solana is not None

    def test_initialization_failure_runs_nothing(
        self, verifiers: dict[Chain, FakeVerifier], sleep: RecordingSleep
    ) -> None:
        """Test that a failed initialize aborts every chain for the service."""
        service = FakeMultiChainService(fail_init=True)

        with pytest.raises(ServiceInitializationError) as excinfo:
            run_service_benchmark(service, "turnkey", _config(), verifiers, sleep)

        assert excinfo.value.service_name == "turnkey"
        assert "Missing required env vars" in excinfo.value.reason
        assert isinstance(excinfo.value.__cause__, RuntimeError)
        assert service.init_calls == 1
        assert service.messages == []

    def test_uses_configured_message(
        self, verifiers: dict[Chain, FakeVerifier], sleep: RecordingSleep
    ) -> None:
        """Test that a custom message reaches the service and verifier."""
        service = FakeWalletService()
        config = _config(
            ChainSelection.ETHEREUM,
            iterations=1,
            warmup_iterations=0,
            messages={Chain.ETHEREUM: "gm"},
        )
        _ = run_service_benchmark(service, "privy", config, verifiers, sleep)

        assert service.messages == ["gm"]
        assert verifiers[Chain.ETHEREUM].calls[0][0] == "gm"

    def test_no_supported_chain_is_an_error(
        self, verifiers: dict[Chain, FakeVerifier], sleep: RecordingSleep
    ) -> None:
        """Test that an ethereum-only service asked for solana raises."""
        service = FakeWalletService()

        with pytest.raises(ServiceInitializationError) as excinfo:
            run_service_benchmark(
                service, "magic", _config(ChainSelection.SOLANA), verifiers, sleep
            )

        assert excinfo.value.service_name == "magic"
        assert "supports none of the requested chains" in excinfo.value.reason
        assert service.init_calls == 0
        assert service.messages == []

    def test_missing_verifier_checked_before_initialize(
        self, sleep: RecordingSleep
    ) -> None:
        """Test that a missing verifier fails fast without touching the service."""
        service = FakeMultiChainService()

        with pytest.raises(ValueError, match="No verifier configured for: solana"):
            run_service_benchmark(
                service, "privy", _config(), {Chain.ETHEREUM: FakeVerifier()}, sleep
            )

        assert service.init_calls == 0


class TestRunBenchmarks:
    """Tests for benchmarking a batch of services."""

    def test_failed_service_is_excluded(
        self, verifiers: dict[Chain, FakeVerifier], sleep: RecordingSleep
    ) -> None:
        """Test that A, failing B, C yields A and C in order."""
        services = {
            "a": FakeWalletService(),
            "b": FakeWalletService(fail_init=True),
            "c": FakeWalletService(),
        }
        batch = run_benchmarks(services, _config(), verifiers, sleep)

        assert batch.service_names == ["a", "c"]
        assert len(batch.failures) == 1
        assert batch.failures[0].service_name == "b"
        assert "Missing required env vars" in batch.failures[0].error

    def test_accepts_registry(
        self, verifiers: dict[Chain, FakeVerifier], sleep: RecordingSleep
    ) -> None:
        """Test that a ServiceRegistry keeps registration order."""
        registry = ServiceRegistry()
        registry.register("zeta", FakeWalletService())
        registry.register("alpha", FakeWalletService())

        batch = run_benchmarks(registry, _config(), verifiers, sleep)

        assert batch.service_names == ["zeta", "alpha"]
        assert batch.failures == ()

    def test_services_run_sequentially(
        self, verifiers: dict[Chain, FakeVerifier], sleep: RecordingSleep
    ) -> None:
        """Test that one service finishes before the next one starts."""
        events: list[str] = []

        class Tracing(FakeWalletService):
            def __init__(self, name: str) -> None:
                super().__init__()
                self.name = name

            def initialize(self) -> None:
                events.append(f"{self.name}:init")

            def sign_message_ethereum(self, message: str):  # type: ignore[override]
                events.append(f"{self.name}:sign")
                return super().sign_message_ethereum(message)

        config = _config(ChainSelection.ETHEREUM, iterations=2, warmup_iterations=0)
        _ = run_benchmarks(
            {"a": Tracing("a"), "b": Tracing("b")}, config, verifiers, sleep
        )

        assert events == ["a:init", "a:sign", "a:sign", "b:init", "b:sign", "b:sign"]

    def test_missing_verifier_is_rejected(self, sleep: RecordingSleep) -> None:
        """Test that every requested chain needs a verifier."""
        with pytest.raises(ValueError, match="solana"):
            run_benchmarks(
                {"a": FakeWalletService()},
                _config(),
                {Chain.ETHEREUM: FakeVerifier()},
                sleep,
            )

    def test_service_without_requested_chain_is_a_failure(
        self, verifiers: dict[Chain, FakeVerifier], sleep: RecordingSleep
    ) -> None:
        """Test that a service with none of the requested chains lands in failures."""
        services = {"magic": FakeWalletService(), "privy": FakeMultiChainService()}
        batch = run_benchmarks(services, _config(ChainSelection.SOLANA), verifiers, sleep)

        assert batch.service_names == ["privy"]
        assert len(batch.failures) == 1
        assert batch.failures[0].service_name == "magic"
        assert batch.failures[0].error == "supports none of the requested chains"
        assert calculate_all_stats(batch.results)[0].service_name == "privy"

    def test_empty_batch(
        self, verifiers: dict[Chain, FakeVerifier], sleep: RecordingSleep
    ) -> None:
        """Test that no services gives an empty result."""
        batch = run_benchmarks({}, _config(), verifiers, sleep)
        assert batch.results == ()
        assert batch.failures == ()

    def test_ethereum_only_service_absent_from_solana_ranking(
        self, verifiers: dict[Chain, FakeVerifier], sleep: RecordingSleep
    ) -> None:
        """Test that a service without Solana contributes no Solana ranking."""
        services = {
            "magic": FakeWalletService([10.0, 10.0, 10.0, 10.0]),
            "privy": FakeMultiChainService([20.0] * 8),
        }
        batch = run_benchmarks(services, _config(), verifiers, sleep)
        stats = calculate_all_stats(batch.results)

        solana = rank_services_by_chain(stats, Chain.SOLANA)
        ethereum = rank_services_by_chain(stats, Chain.ETHEREUM)

        assert [r.service_name for r in solana] == ["privy"]
        assert [r.service_name for r in ethereum] == ["magic", "privy"]
