# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from typing import Sequence

from mint_budget.address import NodeAddress
from mint_budget.types import NO_LIMIT, AddressWeight, BudgetPeriod


def find_prefix_conflict(addresses: Sequence[NodeAddress]) -> tuple[int, int] | None:
    """
    Find the first pair of addresses where one is a prefix of the other.

    Runs in O(n²), which is fine for the handful of entries a human-authored
    budget holds (roughly one per plugin).

    Args:
        addresses: Entry prefixes, in entry order.

    Returns:
        Indices ``(i, j)`` with ``i < j`` of the first conflicting pair, or
        None when all prefixes are disjoint. Duplicated addresses conflict.
    """
    for i in range(len(addresses)):
        for j in range(i + 1, len(addresses)):
            # The prefix relation is not symmetric; check both directions.
            if addresses[i].has_prefix(addresses[j]) or addresses[j].has_prefix(addresses[i]):
                return (i, j)
    return None


def any_common_prefixes(addresses: Sequence[NodeAddress]) -> bool:
    """Return True if any address is a prefix of another. Order does not matter."""
    return find_prefix_conflict(addresses) is not None


def first_out_of_order_period(periods: Sequence[BudgetPeriod]) -> int | None:
    """
    Return the index of the first period that starts before its predecessor.

    Equal start times are in order. Returns None for a sorted sequence.
    """
    for index in range(1, len(periods)):
        if periods[index].start_time_ms < periods[index - 1].start_time_ms:
            return index
    return None


def find_current_budget(periods: Sequence[BudgetPeriod], timestamp_ms: float) -> float:
    """
    Resolve the budget in force at ``timestamp_ms``.

    Picks the last period whose start is at or before the timestamp, so of
    several periods sharing a start time the later one wins. ``periods`` must
    already be sorted by start time.

    Returns:
        The period's budget, or :data:`~mint_budget.types.NO_LIMIT` when no
        period has started yet (including when there are no periods).
    """
    current_budget = NO_LIMIT
    for period in periods:
        if period.start_time_ms > timestamp_ms:
            break
        current_budget = period.budget
    return current_budget


def compute_weight_normalizer(address_weights: Sequence[AddressWeight], budget: float) -> float:
    """
    Coefficient that scales ``address_weights`` to fit within ``budget``.

    Returns exactly 1 when the total already fits (always the case for
    ``NO_LIMIT``); otherwise ``budget / total``, so 0 when the budget is 0.
    """
    total_weight = sum(address_weight.weight for address_weight in address_weights)
    if total_weight <= budget:
        return 1.0
    return budget / total_weight
