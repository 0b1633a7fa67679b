# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
mint-budget: cap the weight each address prefix may mint per week.

Quick start::

    from mint_budget import Budget, BudgetEntry, BudgetPeriod, NodeAddress, apply_budget

    budget = Budget(
        interval_length="WEEKLY",
        entries=[
            BudgetEntry(
                prefix=NodeAddress.from_parts(["github"]),
                periods=[BudgetPeriod(start_time_ms=0, budget=100.0)],
            )
        ],
    )
    budgeted = apply_budget(weighted_graph, budget)
"""

from mint_budget.address import NodeAddress
from mint_budget.applier import (
    apply_budget,
    apply_reweighting,
    compute_reweighting,
    evaluate_work_unit,
    plan_work_units,
    validate_budget,
)
from mint_budget.config import BudgetApplierConfig
from mint_budget.errors import (
    MintBudgetError,
    OutputWriteError,
    PeriodsOutOfOrderError,
    PolicyLoadError,
    PrefixConflictError,
    UnsupportedIntervalLengthError,
)
from mint_budget.graph import (
    Graph,
    Node,
    NodeWeightEvaluator,
    WeightedGraph,
    Weights,
    node_weight_evaluator,
)
from mint_budget.interval import (
    WEEK_MS,
    GraphInterval,
    Interval,
    partition_graph,
    week_floor,
    week_intervals,
)
from mint_budget.policy import (
    any_common_prefixes,
    compute_weight_normalizer,
    find_current_budget,
    find_prefix_conflict,
    first_out_of_order_period,
)
from mint_budget.serialization import (
    dump_weighted_graph,
    load_budget,
    load_weighted_graph,
    parse_budget,
    parse_weighted_graph,
    save_weighted_graph,
)
from mint_budget.types import (
    NO_LIMIT,
    SUPPORTED_INTERVAL_LENGTHS,
    WEEKLY,
    AddressWeight,
    Budget,
    BudgetEntry,
    BudgetPeriod,
    BudgetWorkUnit,
    IntervalLength,
    Reweight,
)

__all__ = [
    # Core operation
    "apply_budget",
    "validate_budget",
    "plan_work_units",
    "evaluate_work_unit",
    "compute_reweighting",
    "apply_reweighting",
    # Policy helpers
    "any_common_prefixes",
    "find_prefix_conflict",
    "first_out_of_order_period",
    "find_current_budget",
    "compute_weight_normalizer",
    # Types
    "NodeAddress",
    "IntervalLength",
    "WEEKLY",
    "SUPPORTED_INTERVAL_LENGTHS",
    "NO_LIMIT",
    "BudgetPeriod",
    "BudgetEntry",
    "Budget",
    "AddressWeight",
    "Reweight",
    "BudgetWorkUnit",
    "BudgetApplierConfig",
    # Graph
    "Node",
    "Graph",
    "Weights",
    "WeightedGraph",
    "NodeWeightEvaluator",
    "node_weight_evaluator",
    "Interval",
    "GraphInterval",
    "WEEK_MS",
    "week_floor",
    "week_intervals",
    "partition_graph",
    # Serialization
    "parse_budget",
    "load_budget",
    "parse_weighted_graph",
    "load_weighted_graph",
    "dump_weighted_graph",
    "save_weighted_graph",
    # Errors
    "MintBudgetError",
    "PrefixConflictError",
    "UnsupportedIntervalLengthError",
    "PeriodsOutOfOrderError",
    "PolicyLoadError",
    "OutputWriteError",
]
