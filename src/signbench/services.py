# Copyright (c) Syntropy Systems
"""Capability interfaces the benchmark core consumes.

Wallet providers subclass ``WalletService``; chain verifiers satisfy
``SignatureVerifier``. The core only calls these interfaces and never
talks to a provider SDK directly. Concrete providers are constructed by
an external loader and handed over in a ``ServiceRegistry``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, ClassVar, Protocol, Union

from signbench.models.chain import Chain

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from signbench.models.results import SignatureResult, VerificationResult

# Every service signs exactly these messages so results stay comparable.
STANDARD_ETHEREUM_MESSAGE = "Hello, Ethereum"
STANDARD_SOLANA_MESSAGE = "Hello, Solana"

STANDARD_MESSAGES: dict[Chain, str] = {
    Chain.ETHEREUM: STANDARD_ETHEREUM_MESSAGE,
    Chain.SOLANA: STANDARD_SOLANA_MESSAGE,
}

# A signing call may hand back a model or a plain mapping.
SignResponse = Union["SignatureResult", "Mapping[str, object]"]
SignFunction = Callable[[str], SignResponse]


class WalletService(ABC):
    """A wallet provider exposing message signing.

    Implementations time only their own API call and report it as
    ``api_latency_ms``. Services that can sign Solana messages add
    ``Chain.SOLANA`` to ``supported_chains`` and override
    ``sign_message_solana``.
    """

    supported_chains: ClassVar[frozenset[Chain]] = frozenset({Chain.ETHEREUM})

    @abstractmethod
    def initialize(self) -> None:
        """Perform one-time setup. Raise to have the service skipped."""

    @abstractmethod
    def sign_message_ethereum(self, message: str) -> SignResponse:
        """Sign ``message`` with the service's Ethereum wallet."""

    def sign_message_solana(self, message: str) -> SignResponse:
        """Sign ``message`` with the service's Solana wallet."""
        msg = f"{type(self).__name__} does not support Solana signing"
        raise NotImplementedError(msg)

    def supports(self, chain: Chain) -> bool:
        """Return True if the service advertises signing on ``chain``."""
        return chain in self.supported_chains

    def signer_for(self, chain: Chain) -> SignFunction:
        """Return the signing callable for ``chain``."""
        if not self.supports(chain):
            msg = f"{type(self).__name__} does not support {chain.value}"
            raise ValueError(msg)
        if chain is Chain.ETHEREUM:
            return self.sign_message_ethereum
        return self.sign_message_solana


class SignatureVerifier(Protocol):
    """Chain-specific check that a signature was made by an address."""

    def verify(
        self, message: str, signature: str, address: str
    ) -> VerificationResult:
        ...


class ServiceRegistry:
    """Explicit mapping from service name to a constructed service.

    Iteration order is registration order.
    """

    _items: dict[str, WalletService]

    def __init__(self, services: Mapping[str, WalletService] | None = None) -> None:
        self._items = {}
        if services:
            for name, service in services.items():
                self.register(name, service)

    def register(self, name: str, service: WalletService) -> None:
        """Add a service under ``name``."""
        if name in self._items:
            msg = f"Service '{name}' is already registered"
            raise ValueError(msg)
        self._items[name] = service

    def get(self, name: str) -> WalletService:
        """Return the service registered under ``name``."""
        return self._items[name]

    def names(self) -> list[str]:
        return list(self._items)

    def select(self, name_filter: str | None = None) -> ServiceRegistry:
        """Return a registry narrowed to ``name_filter``.

        Matching is case-insensitive; ``None`` or ``"all"`` keeps every
        service. An unknown name yields an empty registry.
        """
        if name_filter is None or name_filter.lower() == "all":
            return ServiceRegistry(self._items)
        wanted = name_filter.lower()
        return ServiceRegistry(
            {name: svc for name, svc in self._items.items() if name.lower() == wanted}
        )

    def items(self) -> Iterator[tuple[str, WalletService]]:
        return iter(self._items.items())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return name in self._items
