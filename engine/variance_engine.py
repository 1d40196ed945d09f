from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Sequence
from ledger.node import Node
from ledger.tree import find_node, grand_total, iter_nodes

@dataclass(frozen=True)
class VarianceResult:
    by_node: Dict[str, float]  # node id -> percent change vs baseline
    grand_total: float

def variance(current: float, original: float) -> float:
    if original == 0:
        return 0.0
    return (current - original) / original * 100

def variance_direction(pct: float) -> str:
    if pct > 0:
        return "up"
    if pct < 0:
        return "down"
    return "flat"

def variance_of(node_id: str, live: Sequence[Node], baseline: Sequence[Node]) -> float:
    node = find_node(live, node_id)
    if node is None:
        return 0.0
    original = find_node(baseline, node_id)
    return variance(node.value, original.value if original else 0.0)

def grand_total_variance(live: Sequence[Node], baseline: Sequence[Node]) -> float:
    return variance(grand_total(live), grand_total(baseline))

def compute_variances(live: Sequence[Node], baseline: Sequence[Node]) -> VarianceResult:
    originals = {n.id: n.value for _, n in iter_nodes(baseline)}
    by_node = {n.id: variance(n.value, originals.get(n.id, 0.0)) for _, n in iter_nodes(live)}
    return VarianceResult(by_node=by_node, grand_total=grand_total_variance(live, baseline))
