from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Tuple

@dataclass(frozen=True)
class Node:
    id: str
    label: str
    value: float
    children: Tuple["Node", ...] = field(default_factory=tuple)

    @property
    def is_parent(self) -> bool:
        return len(self.children) > 0

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def with_value(self, value: float) -> "Node":
        return replace(self, value=value)

    def with_children(self, children: Tuple["Node", ...], value: float) -> "Node":
        return replace(self, value=value, children=tuple(children))
