# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
JSON documents for budget policies and weighted graphs.

Budget policy::

    {
      "intervalLength": "WEEKLY",
      "entries": [
        {"prefix": ["github"], "periods": [{"startTimeMs": 0, "budget": 100}]}
      ]
    }

Weighted graph::

    {
      "nodes": [{"address": ["github", "pr", "1"], "description": "#1", "timestampMs": 0}],
      "nodeWeights": [[["github", "pr"], 2.0]]
    }
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from mint_budget.address import NodeAddress
from mint_budget.errors import OutputWriteError, PolicyLoadError
from mint_budget.graph import Graph, Node, WeightedGraph, Weights
from mint_budget.types import Budget


class _WeightedGraphDocument(BaseModel):
    nodes: list[Node] = Field(default_factory=list)
    node_weights: list[tuple[NodeAddress, float]] = Field(default_factory=list, alias="nodeWeights")

    model_config = {"populate_by_name": True}


# ─── Budget policy ────────────────────────────────────────────────────────────


def parse_budget(text: str, source: str = "<budget>") -> Budget:
    """
    Parse a budget policy document.

    Raises:
        PolicyLoadError: If the document is not valid JSON or does not match
            the policy schema.
    """
    try:
        return Budget.model_validate_json(text)
    except ValidationError as exc:
        raise PolicyLoadError(source, str(exc)) from exc


def load_budget(path: str | Path) -> Budget:
    """Read and parse a budget policy file."""
    return parse_budget(_read_text(path), source=str(path))


# ─── Weighted graph ───────────────────────────────────────────────────────────


def parse_weighted_graph(text: str, source: str = "<graph>") -> WeightedGraph:
    """
    Parse a weighted graph document.

    Raises:
        PolicyLoadError: If the document is malformed, a node address is
            duplicated with conflicting data, a weight address appears more
            than once, or a weight is negative or not finite.
    """
    try:
        document = _WeightedGraphDocument.model_validate_json(text)
        graph = Graph()
        for node in document.nodes:
            graph.add_node(node)
        node_weights: dict[NodeAddress, float] = {}
        for address, weight in document.node_weights:
            if address in node_weights:
                raise ValueError(f"duplicate node weight for {address}")
            node_weights[address] = weight
        weights = Weights(node_weights)
    except (ValidationError, ValueError) as exc:
        raise PolicyLoadError(source, str(exc)) from exc
    return WeightedGraph(graph=graph, weights=weights)


def load_weighted_graph(path: str | Path) -> WeightedGraph:
    """Read and parse a weighted graph file."""
    return parse_weighted_graph(_read_text(path), source=str(path))


def dump_weighted_graph(weighted_graph: WeightedGraph) -> str:
    """Serialise a weighted graph. Weights are sorted by address for stable output."""
    document = _WeightedGraphDocument(
        nodes=list(weighted_graph.graph.nodes()),
        node_weights=sorted(
            weighted_graph.weights.node_weights.items(),
            key=lambda item: item[0].parts,
        ),
    )
    return document.model_dump_json(by_alias=True, indent=2)


def save_weighted_graph(weighted_graph: WeightedGraph, path: str | Path) -> None:
    """
    Write a weighted graph document to ``path``.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    try:
        Path(path).write_text(dump_weighted_graph(weighted_graph) + "\n", encoding="utf-8")
    except OSError as exc:
        raise OutputWriteError(str(path), exc.strerror or str(exc)) from exc


def _read_text(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise PolicyLoadError(str(path), exc.strerror or str(exc)) from exc
