# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field


class BudgetApplierConfig(BaseModel, frozen=True):
    """
    Configuration for :func:`mint_budget.applier.apply_budget`.

    Attributes:
        max_workers: Number of threads used to evaluate entry × interval work
            units. ``1`` evaluates them sequentially in the calling thread.
        log_reweights: When True, every interval whose weights are scaled is
            logged at DEBUG level to the ``mint_budget.applier`` logger.
    """

    max_workers: Annotated[int, Field(ge=1)] = 1
    log_reweights: bool = False
