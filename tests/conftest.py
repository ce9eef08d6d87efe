# Copyright (c) Syntropy Systems
"""Pytest fixtures for signbench tests."""

from __future__ import annotations

import pytest
from fakes import FakeVerifier, RecordingSleep

from signbench.models.chain import Chain


@pytest.fixture
def sleep() -> RecordingSleep:
    """A sleep function that returns immediately."""
    return RecordingSleep()


@pytest.fixture
def verifiers() -> dict[Chain, FakeVerifier]:
    """Accepting verifiers for both chains."""
    return {Chain.ETHEREUM: FakeVerifier(), Chain.SOLANA: FakeVerifier()}
