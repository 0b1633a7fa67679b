# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Hierarchical node addresses.

An address is an ordered tuple of string tokens. Plugins write nodes under a
distinct leading token, so a prefix of an address names a whole family of
nodes (e.g. every node a plugin creates, or one node type within it).
"""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import BaseModel, field_validator, model_serializer, model_validator

_SEPARATOR = "\0"


class NodeAddress(BaseModel, frozen=True):
    """
    Immutable, hashable address of a graph node.

    Serialises to (and parses from) a plain JSON array of tokens.
    """

    parts: tuple[str, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_sequence(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return {"parts": tuple(value)}
        return value

    @field_validator("parts")
    @classmethod
    def parts_must_not_contain_separator(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for part in value:
            if _SEPARATOR in part:
                raise ValueError(f"address part {part!r} contains a NUL character")
        return value

    @model_serializer
    def _serialize(self) -> list[str]:
        return list(self.parts)

    # ─── Construction ─────────────────────────────────────────────────────────

    @classmethod
    def empty(cls) -> NodeAddress:
        """The empty address, which is a prefix of every address."""
        return cls(parts=())

    @classmethod
    def from_parts(cls, parts: Iterable[str]) -> NodeAddress:
        return cls(parts=tuple(parts))

    def append(self, *parts: str) -> NodeAddress:
        return NodeAddress(parts=self.parts + tuple(parts))

    # ─── Prefix relation ──────────────────────────────────────────────────────

    def has_prefix(self, prefix: NodeAddress) -> bool:
        """
        True iff ``prefix``'s tokens are a leading run of this address's tokens.

        Every address has itself (and the empty address) as a prefix.
        """
        prefix_parts = prefix.parts
        if len(prefix_parts) > len(self.parts):
            return False
        for own, other in zip(self.parts, prefix_parts):
            if own != other:
                return False
        return True

    def is_prefix_of(self, other: NodeAddress) -> bool:
        return other.has_prefix(self)

    def __str__(self) -> str:
        inner = ", ".join(f'"{part}"' for part in self.parts)
        return f"NodeAddress[{inner}]"
