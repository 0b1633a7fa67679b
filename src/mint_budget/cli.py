# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Command-line entry point: apply a minting budget to a stored weighted graph.

Usage::

    mint-budget --graph output/graph.json --budget config/budget.json --output output/budgeted.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from mint_budget.applier import apply_budget
from mint_budget.config import BudgetApplierConfig
from mint_budget.errors import MintBudgetError
from mint_budget.serialization import (
    dump_weighted_graph,
    load_budget,
    load_weighted_graph,
    save_weighted_graph,
)

logger = logging.getLogger("mint_budget.cli")


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mint-budget",
        description="Scale down node weights so every prefix stays within its weekly minting budget.",
    )
    parser.add_argument("--graph", required=True, help="Weighted graph JSON file to read.")
    parser.add_argument("--budget", required=True, help="Budget policy JSON file to read.")
    parser.add_argument(
        "--output",
        default=None,
        help="Write the budgeted graph to this file path (default: stdout).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Threads used to evaluate entry/interval work units (default: 1).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    arguments = _build_argument_parser().parse_args(argv)
    logging.basicConfig(
        level=arguments.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )

    if arguments.workers < 1:
        print("fatal: --workers must be at least 1", file=sys.stderr)
        return 1

    config = BudgetApplierConfig(
        max_workers=arguments.workers,
        log_reweights=arguments.log_level == "DEBUG",
    )
    try:
        weighted_graph = load_weighted_graph(arguments.graph)
        budget = load_budget(arguments.budget)
        result = apply_budget(weighted_graph, budget, config)
        if arguments.output:
            save_weighted_graph(result, arguments.output)
            logger.info("graph_written", extra={"path": arguments.output})
        else:
            print(dump_weighted_graph(result))
    except MintBudgetError as exc:
        print(f"fatal: {exc.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
