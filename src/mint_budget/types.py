# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Budget policy models.

All models are frozen Pydantic v2 models. JSON field names are camelCase;
snake_case names are accepted as well when constructing from Python.
"""

from __future__ import annotations

import math
from typing import Final, Literal

from pydantic import BaseModel, Field

from mint_budget.address import NodeAddress
from mint_budget.interval import Interval

# ─── Interval length ──────────────────────────────────────────────────────────

IntervalLength = Literal["WEEKLY"]

WEEKLY: Final[IntervalLength] = "WEEKLY"

SUPPORTED_INTERVAL_LENGTHS = frozenset({WEEKLY})

# Budget resolved for an interval that no period covers.
NO_LIMIT: Final = math.inf


# ─── Policy ───────────────────────────────────────────────────────────────────


class BudgetPeriod(BaseModel, frozen=True):
    """
    From ``start_time_ms`` onward, until superseded by a later period, at most
    ``budget`` weight may be minted per interval by matching nodes.
    """

    start_time_ms: float = Field(..., alias="startTimeMs")
    budget: float = Field(..., ge=0.0, description="Maximum weight per interval.")

    model_config = {"populate_by_name": True}


class BudgetEntry(BaseModel, frozen=True):
    """The budget periods that apply to every node under one address prefix."""

    prefix: NodeAddress
    periods: tuple[BudgetPeriod, ...] = ()


class Budget(BaseModel, frozen=True):
    """
    A complete minting policy.

    ``interval_length`` is deliberately a plain string so that unsupported
    values reach the applier and fail there with a typed error.
    """

    interval_length: str = Field(default=WEEKLY, alias="intervalLength")
    entries: tuple[BudgetEntry, ...] = ()

    model_config = {"populate_by_name": True}


# ─── Computation records ──────────────────────────────────────────────────────


class AddressWeight(BaseModel, frozen=True):
    """A node address and its current effective weight."""

    address: NodeAddress
    weight: float


class Reweight(BaseModel, frozen=True):
    """A scale factor to multiply into an address's existing weight."""

    address: NodeAddress
    weight: float


class BudgetWorkUnit(BaseModel, frozen=True):
    """
    One budget entry applied to one interval.

    Units never share addresses: entry prefixes are disjoint and each node
    belongs to exactly one interval, so units can be evaluated in any order.
    """

    entry_index: int
    prefix: NodeAddress
    interval: Interval
    budget: float
    address_weights: tuple[AddressWeight, ...] = ()
