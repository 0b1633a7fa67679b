# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from typing import Sequence

from mint_budget.address import NodeAddress


class MintBudgetError(Exception):
    """Base class for all mint-budget errors. Every subclass is fatal."""

    def __init__(self, message: str, code: str = "MINT_BUDGET_ERROR") -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class PrefixConflictError(MintBudgetError):
    """
    Raised when two budget entries' prefixes overlap (including duplicates).

    Attributes:
        prefixes: Every entry prefix of the rejected budget, in entry order.
        index_pair: Entry indices ``(i, j)``, ``i < j``, of the first conflict found.
    """

    def __init__(self, prefixes: Sequence[NodeAddress], index_pair: tuple[int, int]) -> None:
        first, second = index_pair
        super().__init__(
            f"budget prefix conflict detected: entry {first} ({prefixes[first]}) "
            f"overlaps entry {second} ({prefixes[second]}).",
            code="PREFIX_CONFLICT",
        )
        self.prefixes = tuple(prefixes)
        self.index_pair = index_pair


class UnsupportedIntervalLengthError(MintBudgetError):
    """Raised when a budget declares an interval length other than WEEKLY."""

    def __init__(self, interval_length: str) -> None:
        from mint_budget.types import SUPPORTED_INTERVAL_LENGTHS

        super().__init__(
            f"non-weekly budgets not supported: got interval length {interval_length!r}. "
            f"Valid values: {sorted(SUPPORTED_INTERVAL_LENGTHS)}.",
            code="UNSUPPORTED_INTERVAL_LENGTH",
        )
        self.interval_length = interval_length


class PeriodsOutOfOrderError(MintBudgetError):
    """
    Raised when an entry's periods are not sorted ascending by start time.

    Attributes:
        prefix: Prefix of the offending entry.
        period_index: Index of the first period that starts before its predecessor.
    """

    def __init__(self, prefix: NodeAddress, period_index: int) -> None:
        super().__init__(
            f"budget for {prefix} has periods out-of-order "
            f"(period {period_index} starts before period {period_index - 1}).",
            code="PERIODS_OUT_OF_ORDER",
        )
        self.prefix = prefix
        self.period_index = period_index


class PolicyLoadError(MintBudgetError):
    """Raised when a budget policy or weighted graph cannot be read or parsed."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"unable to load {path}: {detail}", code="POLICY_LOAD_ERROR")
        self.path = path
        self.detail = detail


class OutputWriteError(MintBudgetError):
    """Raised when a budgeted weighted graph cannot be written to its destination."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"unable to write {path}: {detail}", code="OUTPUT_WRITE_ERROR")
        self.path = path
        self.detail = detail
