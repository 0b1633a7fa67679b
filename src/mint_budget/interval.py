# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Weekly time partitioning of graph nodes.

Weeks are UTC calendar weeks beginning Sunday 00:00. Timestamps are
milliseconds since the Unix epoch.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from mint_budget.graph import Graph, Node

DAY_MS = 86_400_000
WEEK_MS = 7 * DAY_MS

# 1970-01-01 was a Thursday; the preceding Sunday is four days earlier.
_EPOCH_WEEK_START_MS = -4 * DAY_MS


class Interval(BaseModel, frozen=True):
    """Half-open time window ``[start_time_ms, end_time_ms)``."""

    start_time_ms: int = Field(..., alias="startTimeMs")
    end_time_ms: int = Field(..., alias="endTimeMs")

    model_config = {"populate_by_name": True}


class GraphInterval(BaseModel, frozen=True):
    """One weekly bucket and the nodes whose timestamps fall inside it."""

    interval: Interval
    nodes: tuple[Node, ...] = ()


def week_floor(timestamp_ms: int) -> int:
    """Start of the UTC week (Sunday 00:00) containing ``timestamp_ms``."""
    return timestamp_ms - (timestamp_ms - _EPOCH_WEEK_START_MS) % WEEK_MS


def week_intervals(start_ms: int, end_ms: int) -> list[Interval]:
    """
    Every week touching ``[start_ms, end_ms]``, in order.

    Returns an empty list when ``end_ms < start_ms``.
    """
    if end_ms < start_ms:
        return []
    intervals: list[Interval] = []
    current = week_floor(start_ms)
    while current <= end_ms:
        intervals.append(Interval(start_time_ms=current, end_time_ms=current + WEEK_MS))
        current += WEEK_MS
    return intervals


def partition_graph(graph: Graph) -> list[GraphInterval]:
    """
    Split the graph's timestamped nodes into consecutive weekly buckets.

    Buckets run from the week of the earliest node to the week of the latest,
    with empty weeks included. Nodes without a timestamp are left out.
    """
    timestamped = sorted(
        (node for node in graph.nodes() if node.timestamp_ms is not None),
        key=lambda node: node.timestamp_ms,
    )
    if not timestamped:
        return []

    intervals = week_intervals(timestamped[0].timestamp_ms, timestamped[-1].timestamp_ms)
    first_start = intervals[0].start_time_ms
    buckets: list[list[Node]] = [[] for _ in intervals]
    for node in timestamped:
        index = (week_floor(node.timestamp_ms) - first_start) // WEEK_MS
        buckets[index].append(node)

    return [
        GraphInterval(interval=interval, nodes=tuple(nodes))
        for interval, nodes in zip(intervals, buckets)
    ]
