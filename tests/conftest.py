# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""Shared fixtures for mint-budget tests."""

from __future__ import annotations

import pytest

from mint_budget.address import NodeAddress
from mint_budget.graph import Graph, Node, WeightedGraph, Weights
from mint_budget.interval import WEEK_MS, week_floor


class GraphBuilder:
    """Builds a weighted graph of single-token nodes with explicit mint weights."""

    def __init__(self) -> None:
        self.graph = Graph()
        self.weights = Weights()

    @staticmethod
    def address_for(node_id: int | str) -> NodeAddress:
        return NodeAddress.from_parts([str(node_id)])

    def add_node(self, node_id: int | str, timestamp_ms: int | None, mint: float) -> GraphBuilder:
        address = self.address_for(node_id)
        self.weights.set(address, mint)
        self.graph.add_node(Node(address=address, description=str(node_id), timestamp_ms=timestamp_ms))
        return self

    @property
    def weighted_graph(self) -> WeightedGraph:
        return WeightedGraph(graph=self.graph, weights=self.weights)


@pytest.fixture
def builder() -> GraphBuilder:
    """An empty graph builder."""
    return GraphBuilder()


@pytest.fixture
def weeks() -> list[int]:
    """Start times of four consecutive UTC weeks, the first containing the epoch."""
    first = week_floor(0)
    return [first + index * WEEK_MS for index in range(4)]
