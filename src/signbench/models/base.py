# Copyright (c) Syntropy Systems
"""Shared Pydantic model helpers for signbench."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class SignbenchBaseModel(BaseModel):
    """Base model with shared config for signbench records.

    Records are value objects: once a component hands one to the next it
    must not change, so every model is frozen.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )
