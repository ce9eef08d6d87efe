# Copyright (c) Syntropy Systems
"""Pydantic models for signing outcomes and benchmark results."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field, computed_field, model_validator
from typing_extensions import Self, TypeAlias

from .base import SignbenchBaseModel
from .chain import Chain


class SignatureResult(SignbenchBaseModel):
    """What a wallet service returns from one signing call.

    ``api_latency_ms`` is measured by the service around its own API call.
    """

    signature: str
    api_latency_ms: float = Field(ge=0, allow_inf_nan=False)
    wallet_address: str


class VerificationResult(SignbenchBaseModel):
    """Outcome of checking a signature against the claimed signer."""

    valid: bool
    error: str | None = None


class SigningSuccess(SignbenchBaseModel):
    """A measured signing call that returned a signature."""

    status: Literal["success"] = "success"
    signature: str
    api_latency_ms: float = Field(ge=0, allow_inf_nan=False)
    wallet_address: str
    # None until the signature has been through verification
    verified: bool | None = None


class SigningFailure(SignbenchBaseModel):
    """A signing call that raised or returned something unusable."""

    status: Literal["failure"] = "failure"
    error: str


IterationOutcome: TypeAlias = Annotated[
    Union[SigningSuccess, SigningFailure],
    Field(discriminator="status"),
]


class ChainResult(SignbenchBaseModel):
    """Measured outcomes for one (service, chain) pair.

    Warmup iterations never appear here.
    """

    chain: Chain
    service_name: str
    results: tuple[IterationOutcome, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if isinstance(r, SigningSuccess))

    @computed_field  # type: ignore[prop-decorator]
    @property
    def error_count(self) -> int:
        return sum(1 for r in self.results if isinstance(r, SigningFailure))


class ServiceResult(SignbenchBaseModel):
    """All chain results for one benchmarked service."""

    service_name: str
    ethereum: ChainResult | None = None
    solana: ChainResult | None = None

    @model_validator(mode="after")
    def _require_a_chain(self) -> Self:
        if self.ethereum is None and self.solana is None:
            msg = f"{self.service_name} has no chain results"
            raise ValueError(msg)
        return self

    def for_chain(self, chain: Chain) -> ChainResult | None:
        """Return the result for ``chain`` if that chain was run."""
        return self.ethereum if chain is Chain.ETHEREUM else self.solana

    def chain_results(self) -> list[ChainResult]:
        """Return the chain results that exist, ethereum first."""
        return [r for r in (self.ethereum, self.solana) if r is not None]


class ServiceFailure(SignbenchBaseModel):
    """A service that could not be benchmarked at all."""

    service_name: str
    error: str


class BatchResult(SignbenchBaseModel):
    """Results of benchmarking a collection of services, in input order."""

    results: tuple[ServiceResult, ...] = ()
    failures: tuple[ServiceFailure, ...] = ()

    @property
    def service_names(self) -> list[str]:
        return [r.service_name for r in self.results]
