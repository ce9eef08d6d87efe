# Copyright (c) Syntropy Systems
"""Run chain benchmarks for one service and for a batch of services."""
from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Union

from signbench.errors import ServiceInitializationError, describe_error
from signbench.models.chain import Chain
from signbench.models.results import BatchResult, ServiceFailure, ServiceResult
from signbench.runner import SleepFunction, run_chain_benchmark
from signbench.services import ServiceRegistry

if TYPE_CHECKING:
    from collections.abc import Mapping

    from signbench.config import BenchmarkConfig
    from signbench.models.results import ChainResult
    from signbench.services import SignatureVerifier, WalletService

logger = logging.getLogger(__name__)

ServiceCollection = Union[ServiceRegistry, "Mapping[str, WalletService]"]


def require_verifiers(
    config: BenchmarkConfig, verifiers: Mapping[Chain, SignatureVerifier]
) -> None:
    """Raise ValueError unless every requested chain has a verifier."""
    missing = [c.value for c in config.chain.chains() if c not in verifiers]
    if missing:
        msg = f"No verifier configured for: {', '.join(missing)}"
        raise ValueError(msg)


def run_service_benchmark(
    service: WalletService,
    service_name: str,
    config: BenchmarkConfig,
    verifiers: Mapping[Chain, SignatureVerifier],
    sleep: SleepFunction = time.sleep,
) -> ServiceResult:
    """Benchmark every requested chain the service supports.

    Raises:
        ServiceInitializationError: if ``service.initialize()`` fails, or the
            service supports none of the requested chains. No chain is run
            in either case.
        ValueError: if a requested chain has no verifier.

    """
    require_verifiers(config, verifiers)
    display_name = service_name.capitalize()
    logger.info("Benchmarking %s...", display_name)

    chains: list[Chain] = []
    for chain in config.chain.chains():
        if service.supports(chain):
            chains.append(chain)
        else:
            logger.info(
                "%s does not support %s, skipping", display_name, chain.display_name
            )
    if not chains:
        raise ServiceInitializationError(
            service_name, "supports none of the requested chains"
        )

    try:
        service.initialize()
    except Exception as exc:
        raise ServiceInitializationError(service_name, describe_error(exc)) from exc
    logger.info("%s initialized", display_name)

    chain_results: dict[Chain, ChainResult] = {}
    for chain in chains:
        logger.info("Running %s benchmark for %s...", chain.display_name, display_name)
        chain_results[chain] = run_chain_benchmark(
            service_name,
            chain,
            service.signer_for(chain),
            verifiers[chain],
            config.message_for(chain),
            iterations=config.iterations,
            warmup_iterations=config.warmup,
            delay_ms=config.delay_ms,
            sleep=sleep,
        )

    return ServiceResult(
        service_name=service_name,
        ethereum=chain_results.get(Chain.ETHEREUM),
        solana=chain_results.get(Chain.SOLANA),
    )


def run_benchmarks(
    services: ServiceCollection,
    config: BenchmarkConfig,
    verifiers: Mapping[Chain, SignatureVerifier],
    sleep: SleepFunction = time.sleep,
) -> BatchResult:
    """Benchmark each service in order, one at a time.

    A service that fails to initialize is recorded in ``failures`` and the
    batch continues with the next one.
    """
    require_verifiers(config, verifiers)

    registry = (
        services if isinstance(services, ServiceRegistry) else ServiceRegistry(services)
    )

    results: list[ServiceResult] = []
    failures: list[ServiceFailure] = []
    for service_name, service in registry.items():
        try:
            results.append(
                run_service_benchmark(service, service_name, config, verifiers, sleep)
            )
        except ServiceInitializationError as e:
            logger.warning("%s benchmark failed: %s, skipping", service_name, e.reason)
            failures.append(ServiceFailure(service_name=service_name, error=e.reason))

    return BatchResult(results=tuple(results), failures=tuple(failures))
