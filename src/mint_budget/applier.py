# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Imposing a minting budget on a weighted graph.

A budget caps how much weight nodes under an address prefix may mint per
interval. Since every plugin writes nodes under a distinct prefix, this can
express plugin-level budgets, and the same mechanism works for finer-grained
prefixes such as a single node type.

Budgets are enforced independently per interval: unused budget never rolls
over, and an entry with no periods never constrains anything.

Design contract
---------------
- Validation runs in full before any weight is computed. A rejected budget
  leaves every input untouched.
- Inputs are never mutated. The result shares the input ``Graph`` but owns a
  fresh ``Weights`` table.
- Nested budgets (a tighter prefix inside a looser one) are rejected rather
  than approximated.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import NoReturn, Sequence

from mint_budget.config import BudgetApplierConfig
from mint_budget.errors import (
    MintBudgetError,
    PeriodsOutOfOrderError,
    PrefixConflictError,
    UnsupportedIntervalLengthError,
)
from mint_budget.graph import WeightedGraph, node_weight_evaluator
from mint_budget.interval import partition_graph
from mint_budget.policy import (
    compute_weight_normalizer,
    find_current_budget,
    find_prefix_conflict,
    first_out_of_order_period,
)
from mint_budget.types import (
    SUPPORTED_INTERVAL_LENGTHS,
    AddressWeight,
    Budget,
    BudgetWorkUnit,
    Reweight,
)

logger = logging.getLogger("mint_budget.applier")


# ─── Validation ───────────────────────────────────────────────────────────────


def _reject(error: MintBudgetError) -> NoReturn:
    logger.warning("budget_rejected", extra={"code": error.code, "detail": error.message})
    raise error


def validate_budget(budget: Budget) -> None:
    """
    Check a budget before it is applied.

    Raises:
        PrefixConflictError: If any entry's prefix is a prefix of another
            entry's (duplicates included).
        UnsupportedIntervalLengthError: If the interval length is not WEEKLY.
        PeriodsOutOfOrderError: If an entry's periods are not sorted by
            start time.
    """
    # Overlapping budgets would need joint constraint solving; only disjoint
    # prefixes are supported.
    prefixes = [entry.prefix for entry in budget.entries]
    conflict = find_prefix_conflict(prefixes)
    if conflict is not None:
        _reject(PrefixConflictError(prefixes, conflict))

    if budget.interval_length not in SUPPORTED_INTERVAL_LENGTHS:
        _reject(UnsupportedIntervalLengthError(budget.interval_length))

    for entry in budget.entries:
        period_index = first_out_of_order_period(entry.periods)
        if period_index is not None:
            _reject(PeriodsOutOfOrderError(entry.prefix, period_index))


# ─── Computation ──────────────────────────────────────────────────────────────


def plan_work_units(weighted_graph: WeightedGraph, budget: Budget) -> list[BudgetWorkUnit]:
    """
    Build one work unit per (entry, weekly interval) pair.

    The budget must already have passed :func:`validate_budget`; the period
    resolver relies on sorted periods.
    """
    evaluator = node_weight_evaluator(weighted_graph.weights)
    partition = partition_graph(weighted_graph.graph)

    units: list[BudgetWorkUnit] = []
    for entry_index, entry in enumerate(budget.entries):
        for graph_interval in partition:
            address_weights = tuple(
                AddressWeight(address=node.address, weight=evaluator(node.address))
                for node in graph_interval.nodes
                if node.address.has_prefix(entry.prefix)
            )
            units.append(
                BudgetWorkUnit(
                    entry_index=entry_index,
                    prefix=entry.prefix,
                    interval=graph_interval.interval,
                    budget=find_current_budget(entry.periods, graph_interval.interval.start_time_ms),
                    address_weights=address_weights,
                )
            )
    return units


def evaluate_work_unit(unit: BudgetWorkUnit) -> list[Reweight]:
    """
    Return the reweights that bring one unit within its budget.

    Every matching address is scaled by the same coefficient; an interval
    already within budget yields no reweights.
    """
    normalizer = compute_weight_normalizer(unit.address_weights, unit.budget)
    if normalizer == 1.0:
        return []
    return [
        Reweight(address=address_weight.address, weight=normalizer)
        for address_weight in unit.address_weights
    ]


def compute_reweighting(
    weighted_graph: WeightedGraph,
    budget: Budget,
    config: BudgetApplierConfig | None = None,
) -> list[Reweight]:
    """
    Validate ``budget`` and compute every reweight it requires.

    Results are ordered by entry, then by interval, regardless of how many
    worker threads evaluated them.
    """
    config = config or BudgetApplierConfig()
    validate_budget(budget)

    units = plan_work_units(weighted_graph, budget)
    if config.max_workers > 1 and len(units) > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
            results = list(executor.map(evaluate_work_unit, units))
    else:
        results = [evaluate_work_unit(unit) for unit in units]

    reweighting: list[Reweight] = []
    for unit, reweights in zip(units, results):
        if reweights and config.log_reweights:
            logger.debug(
                "interval_scaled",
                extra={
                    "prefix": str(unit.prefix),
                    "interval_start_ms": unit.interval.start_time_ms,
                    "budget": unit.budget,
                    "normalizer": reweights[0].weight,
                    "node_count": len(reweights),
                },
            )
        reweighting.extend(reweights)

    logger.info(
        "reweighting_computed",
        extra={
            "entries": len(budget.entries),
            "work_units": len(units),
            "reweights": len(reweighting),
        },
    )
    return reweighting


# ─── Materialization ──────────────────────────────────────────────────────────


def apply_reweighting(weighted_graph: WeightedGraph, reweighting: Sequence[Reweight]) -> WeightedGraph:
    """
    Return a new weighted graph with each reweight multiplied into a copy of
    the weight table. Scale factors apply to the original weight, defaulting
    to 1 for addresses with no explicit weight.
    """
    original = weighted_graph.weights
    new_weights = original.copy()
    for reweight in reweighting:
        existing_weight = original.get(reweight.address, 1.0)
        new_weights.set(reweight.address, existing_weight * reweight.weight)
    return WeightedGraph(graph=weighted_graph.graph, weights=new_weights)


def apply_budget(
    weighted_graph: WeightedGraph,
    budget: Budget,
    config: BudgetApplierConfig | None = None,
) -> WeightedGraph:
    """
    Return a weighted graph that satisfies ``budget``.

    Weights are reduced proportionally, as needed, so that the total weight
    minted by each entry's nodes in each interval does not exceed the budget
    in force for that interval.

    Args:
        weighted_graph: The graph to constrain. Not modified.
        budget: The minting policy.
        config: Optional applier configuration.

    Returns:
        A new :class:`~mint_budget.graph.WeightedGraph` sharing the input graph.

    Raises:
        PrefixConflictError: If entry prefixes overlap.
        UnsupportedIntervalLengthError: If the interval length is not WEEKLY.
        PeriodsOutOfOrderError: If an entry's periods are not sorted.
    """
    reweighting = compute_reweighting(weighted_graph, budget, config)
    result = apply_reweighting(weighted_graph, reweighting)
    logger.info("budget_applied", extra={"reweighted_addresses": len(reweighting)})
    return result
