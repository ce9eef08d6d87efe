# Copyright (c) Syntropy Systems
"""Warmup and measured signing iterations for one service and chain.

Iterations run strictly one after another. Firing requests at a provider
concurrently would add queueing effects of our own making and break the
equal-cadence comparison between providers.
"""
from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Callable

from pydantic import ValidationError

from signbench.errors import describe_error
from signbench.models.results import (
    ChainResult,
    SignatureResult,
    SigningFailure,
    SigningSuccess,
)
from signbench.verification import verify_signature

if TYPE_CHECKING:
    from signbench.models.chain import Chain
    from signbench.models.results import IterationOutcome
    from signbench.services import SignatureVerifier, SignFunction

logger = logging.getLogger(__name__)

SleepFunction = Callable[[float], None]


def _describe_malformed(exc: ValidationError) -> str:
    fields = ", ".join(
        ".".join(str(part) for part in err["loc"]) or "response" for err in exc.errors()
    )
    return f"Malformed signing response ({fields})"


def execute_iteration(sign: SignFunction, message: str) -> IterationOutcome:
    """Call ``sign`` once and capture the outcome.

    The latency is whatever the service reported; nothing is timed here.
    Errors from the call, or a response that does not validate, become a
    SigningFailure instead of propagating.
    """
    try:
        response = SignatureResult.model_validate(sign(message))
    except ValidationError as exc:
        return SigningFailure(error=_describe_malformed(exc))
    except Exception as exc:  # noqa: BLE001
        return SigningFailure(error=describe_error(exc))

    return SigningSuccess(
        signature=response.signature,
        api_latency_ms=response.api_latency_ms,
        wallet_address=response.wallet_address,
    )


class ChainRunner:
    """Runs the iteration sequence for one (service, chain) pair.

    Warmups run first and are thrown away; measured iterations are
    verified and recorded. A failed iteration never stops the run.
    """

    service_name: str
    chain: Chain
    message: str
    warmup_iterations: int
    iterations: int
    delay_ms: float
    _sign: SignFunction
    _verifier: SignatureVerifier
    _sleep: SleepFunction

    def __init__(
        self,
        service_name: str,
        chain: Chain,
        sign: SignFunction,
        verifier: SignatureVerifier,
        message: str,
        *,
        iterations: int,
        warmup_iterations: int = 0,
        delay_ms: float = 0.0,
        sleep: SleepFunction = time.sleep,
    ) -> None:
        """Initialize a chain runner.

        Args:
            service_name: Name the results are reported under
            chain: Chain being signed on
            sign: The service's signing callable for ``chain``
            verifier: Signature check for ``chain``
            message: Message signed on every iteration
            iterations: Measured iterations
            warmup_iterations: Discarded iterations run first
            delay_ms: Pause between consecutive iterations
            sleep: Sleep function, in seconds

        """
        if iterations < 0 or warmup_iterations < 0:
            msg = "Iteration counts must not be negative"
            raise ValueError(msg)
        if delay_ms < 0:
            msg = "delay_ms must not be negative"
            raise ValueError(msg)
        self.service_name = service_name
        self.chain = chain
        self.message = message
        self.warmup_iterations = warmup_iterations
        self.iterations = iterations
        self.delay_ms = delay_ms
        self._sign = sign
        self._verifier = verifier
        self._sleep = sleep

    @property
    def total_iterations(self) -> int:
        return self.warmup_iterations + self.iterations

    def run(self) -> ChainResult:
        """Execute all iterations and return the measured results."""
        recorded: list[IterationOutcome] = []

        for i in range(self.total_iterations):
            is_warmup = i < self.warmup_iterations
            label = (
                f"Warmup W{i + 1}"
                if is_warmup
                else f"Iteration {i - self.warmup_iterations + 1}"
            )

            outcome = execute_iteration(self._sign, self.message)

            if isinstance(outcome, SigningFailure):
                logger.warning("  %s: failed: %s", label, outcome.error)
            else:
                logger.info("  %s: %.2fms", label, outcome.api_latency_ms)

            if not is_warmup:
                recorded.append(self._verify(outcome))

            if self.delay_ms > 0 and i < self.total_iterations - 1:
                self._sleep(self.delay_ms / 1000)

        return ChainResult(
            chain=self.chain,
            service_name=self.service_name,
            results=tuple(recorded),
        )

    def _verify(self, outcome: IterationOutcome) -> IterationOutcome:
        """Attach the verification verdict to a measured success."""
        if not isinstance(outcome, SigningSuccess):
            return outcome

        verdict = verify_signature(
            self._verifier, self.message, outcome.signature, outcome.wallet_address
        )
        if not verdict.valid:
            logger.warning("  Signature verification failed: %s", verdict.error)
        return outcome.model_copy(update={"verified": verdict.valid})


def run_chain_benchmark(
    service_name: str,
    chain: Chain,
    sign: SignFunction,
    verifier: SignatureVerifier,
    message: str,
    *,
    iterations: int,
    warmup_iterations: int = 0,
    delay_ms: float = 0.0,
    sleep: SleepFunction = time.sleep,
) -> ChainResult:
    """Run one chain benchmark; see ChainRunner."""
    return ChainRunner(
        service_name,
        chain,
        sign,
        verifier,
        message,
        iterations=iterations,
        warmup_iterations=warmup_iterations,
        delay_ms=delay_ms,
        sleep=sleep,
    ).run()
