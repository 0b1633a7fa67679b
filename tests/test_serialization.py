# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

import json
from pathlib import Path

import pytest

from mint_budget.address import NodeAddress
from mint_budget.errors import OutputWriteError, PolicyLoadError
from mint_budget.serialization import (
    dump_weighted_graph,
    load_budget,
    load_weighted_graph,
    parse_budget,
    parse_weighted_graph,
    save_weighted_graph,
)

from conftest import GraphBuilder

BUDGET_JSON = """
{
  "intervalLength": "WEEKLY",
  "entries": [
    {"prefix": ["github"], "periods": [{"startTimeMs": 0, "budget": 100}, {"startTimeMs": 10, "budget": 50}]},
    {"prefix": ["discord"], "periods": []}
  ]
}
"""


# ---------------------------------------------------------------------------
# TestBudgetDocuments
# ---------------------------------------------------------------------------


class TestBudgetDocuments:
    def test_parses_camel_case_document(self) -> None:
        budget = parse_budget(BUDGET_JSON)
        assert budget.interval_length == "WEEKLY"
        assert budget.entries[0].prefix == NodeAddress.from_parts(["github"])
        assert [p.budget for p in budget.entries[0].periods] == [100, 50]
        assert budget.entries[1].periods == ()

    def test_unsupported_interval_length_still_parses(self) -> None:
        # Rejected later by the applier with a typed error.
        budget = parse_budget('{"intervalLength": "DAILY", "entries": []}')
        assert budget.interval_length == "DAILY"

    def test_negative_budget_is_rejected(self) -> None:
        document = '{"entries": [{"prefix": [], "periods": [{"startTimeMs": 0, "budget": -1}]}]}'
        with pytest.raises(PolicyLoadError) as excinfo:
            parse_budget(document)
        assert excinfo.value.code == "POLICY_LOAD_ERROR"

    def test_malformed_json_is_rejected(self) -> None:
        with pytest.raises(PolicyLoadError, match="<budget>"):
            parse_budget("{not json")

    def test_load_budget_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "budget.json"
        path.write_text(BUDGET_JSON, encoding="utf-8")
        assert len(load_budget(path).entries) == 2

    def test_missing_file_is_reported(self, tmp_path: Path) -> None:
        missing = tmp_path / "absent.json"
        with pytest.raises(PolicyLoadError, match="absent.json"):
            load_budget(missing)


# ---------------------------------------------------------------------------
# TestWeightedGraphDocuments
# ---------------------------------------------------------------------------


class TestWeightedGraphDocuments:
    def test_dump_then_parse_preserves_graph(self, builder: GraphBuilder, weeks: list[int]) -> None:
        builder.add_node(1, weeks[0], 2.5).add_node(2, None, 4.0)
        text = dump_weighted_graph(builder.weighted_graph)

        document = json.loads(text)
        assert document["nodes"][0] == {"address": ["1"], "description": "1", "timestampMs": weeks[0]}
        assert document["nodeWeights"] == [[["1"], 2.5], [["2"], 4.0]]

        parsed = parse_weighted_graph(text)
        assert parsed.weights == builder.weights
        assert parsed.graph.node(GraphBuilder.address_for(2)).timestamp_ms is None

    def test_negative_weight_is_rejected(self) -> None:
        with pytest.raises(PolicyLoadError, match="must be >= 0"):
            parse_weighted_graph('{"nodes": [], "nodeWeights": [[["a"], -1]]}')

    @pytest.mark.parametrize("weight", [float("nan"), float("inf")])
    def test_non_finite_weight_is_rejected(self, weight: float) -> None:
        with pytest.raises(PolicyLoadError):
            parse_weighted_graph(json.dumps({"nodes": [], "nodeWeights": [[["a"], weight]]}))

    def test_duplicate_weight_address_is_rejected(self) -> None:
        document = {"nodes": [], "nodeWeights": [[["a"], 2.0], [["a"], 3.0]]}
        with pytest.raises(PolicyLoadError, match="duplicate node weight"):
            parse_weighted_graph(json.dumps(document))

    def test_unwritable_destination_is_reported(self, tmp_path: Path, builder: GraphBuilder) -> None:
        with pytest.raises(OutputWriteError, match="unable to write"):
            save_weighted_graph(builder.weighted_graph, tmp_path / "missing" / "graph.json")

    def test_conflicting_nodes_are_rejected(self) -> None:
        document = {
            "nodes": [
                {"address": ["a"], "description": "first", "timestampMs": 0},
                {"address": ["a"], "description": "second", "timestampMs": 0},
            ]
        }
        with pytest.raises(PolicyLoadError, match="conflict"):
            parse_weighted_graph(json.dumps(document))

    def test_load_weighted_graph_from_file(self, tmp_path: Path, builder: GraphBuilder, weeks: list[int]) -> None:
        builder.add_node(1, weeks[0], 3.0)
        path = tmp_path / "graph.json"
        path.write_text(dump_weighted_graph(builder.weighted_graph), encoding="utf-8")
        loaded = load_weighted_graph(path)
        assert len(loaded.graph) == 1
        assert loaded.weights.get(GraphBuilder.address_for(1)) == 3.0
