# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Minimal weighted-graph model consumed by the budget applier.

Only the parts the applier reads are modelled here: nodes (address, label,
timestamp) and a mutable table of node weights keyed by address prefix.
A node's effective weight, the quantity budgets are enforced against, is the
product of every table weight whose key is a prefix of the node's address.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Iterator, Mapping, Optional

from pydantic import BaseModel, Field

from mint_budget.address import NodeAddress

NodeWeightEvaluator = Callable[[NodeAddress], float]


# ─── Nodes ────────────────────────────────────────────────────────────────────


class Node(BaseModel, frozen=True):
    """A graph node. Nodes without a timestamp are never assigned to an interval."""

    address: NodeAddress
    description: str = ""
    timestamp_ms: Optional[int] = Field(default=None, alias="timestampMs")

    model_config = {"populate_by_name": True}


class Graph:
    """
    Registry of nodes keyed by address.

    Edges carry no information the budget stage needs, so they are not
    modelled.
    """

    def __init__(self) -> None:
        self._nodes: dict[NodeAddress, Node] = {}

    def add_node(self, node: Node) -> Graph:
        """
        Add a node. Re-adding an identical node is a no-op.

        Raises:
            ValueError: If a different node already uses the same address.
        """
        existing = self._nodes.get(node.address)
        if existing is not None and existing != node:
            raise ValueError(f"conflict between new node {node!r} and existing {existing!r}")
        self._nodes[node.address] = node
        return self

    def has_node(self, address: NodeAddress) -> bool:
        return address in self._nodes

    def node(self, address: NodeAddress) -> Node | None:
        return self._nodes.get(address)

    def nodes(self, prefix: NodeAddress | None = None) -> Iterator[Node]:
        """Iterate nodes in insertion order, optionally restricted to a prefix."""
        for node in self._nodes.values():
            if prefix is None or node.address.has_prefix(prefix):
                yield node

    def __len__(self) -> int:
        return len(self._nodes)


# ─── Weights ──────────────────────────────────────────────────────────────────


class Weights:
    """
    Mutable table of node weights.

    A key applies to every node it is a prefix of; unset addresses weigh 1.
    """

    def __init__(self, node_weights: Mapping[NodeAddress, float] | None = None) -> None:
        self.node_weights: dict[NodeAddress, float] = {}
        for address, weight in (node_weights or {}).items():
            self.set(address, weight)

    def set(self, address: NodeAddress, weight: float) -> None:
        if not math.isfinite(weight) or weight < 0:
            raise ValueError(f"node weight must be >= 0 and finite; got {weight} for {address}")
        self.node_weights[address] = weight

    def get(self, address: NodeAddress, default: float = 1.0) -> float:
        return self.node_weights.get(address, default)

    def copy(self) -> Weights:
        """Return an independent copy; mutating it never affects this table."""
        return Weights(self.node_weights)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Weights):
            return NotImplemented
        return self.node_weights == other.node_weights

    def __repr__(self) -> str:
        return f"Weights(node_weights={self.node_weights!r})"


def node_weight_evaluator(weights: Weights) -> NodeWeightEvaluator:
    """
    Build a function returning a node's effective weight.

    The effective weight is the product of every weight whose key is a prefix
    of the address, so an address with no matching key weighs 1. The table is
    snapshotted; later mutations of ``weights`` are not observed.
    """
    by_parts = {address.parts: weight for address, weight in weights.node_weights.items()}

    def evaluate(address: NodeAddress) -> float:
        parts = address.parts
        weight = 1.0
        for length in range(len(parts) + 1):
            prefix_weight = by_parts.get(parts[:length])
            if prefix_weight is not None:
                weight *= prefix_weight
        return weight

    return evaluate


# ─── Weighted graph ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class WeightedGraph:
    """A graph paired with the weight table used for downstream scoring."""

    graph: Graph
    weights: Weights

    @classmethod
    def empty(cls) -> WeightedGraph:
        return cls(graph=Graph(), weights=Weights())
