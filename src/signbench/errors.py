# Copyright (c) Syntropy Systems
"""Exceptions raised by the signbench core."""

from __future__ import annotations


class SignbenchError(Exception):
    """Base class for signbench errors."""


class ServiceInitializationError(SignbenchError):
    """A wallet service failed its one-time setup.

    Fatal for that service only: none of its chains are run, and the batch
    moves on to the next service.
    """

    service_name: str
    reason: str

    def __init__(self, service_name: str, reason: str) -> None:
        self.service_name = service_name
        self.reason = reason
        super().__init__(f"{service_name} initialization failed: {reason}")


def describe_error(exc: BaseException) -> str:
    """Return a human-readable diagnostic for ``exc``."""
    message = str(exc).strip()
    return message or type(exc).__name__
