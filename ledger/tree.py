"""Tree helpers for the ledger.

A tree is an ordered tuple of root nodes. Nodes are immutable, so helpers
here either read a tree or build a new one; none of them modify a node
in place.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Set, Tuple

from ledger.node import Node

Tree = Tuple[Node, ...]


class LedgerError(Exception):
    """Error raised when a seed ledger cannot be turned into a tree."""

    pass


def subtotal(children: Sequence[Node]) -> float:
    """Plain sum of child values, without rounding."""
    return sum(c.value for c in children)


def grand_total(tree: Sequence[Node]) -> float:
    return sum(n.value for n in tree)


def iter_nodes(tree: Sequence[Node], depth: int = 0) -> Iterator[Tuple[int, Node]]:
    """Yield (depth, node) pairs in depth-first pre-order."""
    for node in tree:
        yield depth, node
        yield from iter_nodes(node.children, depth + 1)


def find_node(tree: Sequence[Node], node_id: str) -> Optional[Node]:
    for _, node in iter_nodes(tree):
        if node.id == node_id:
            return node
    return None


def node_ids(tree: Sequence[Node]) -> List[str]:
    return [n.id for _, n in iter_nodes(tree)]


def clone_tree(tree: Sequence[Node]) -> Tree:
    """Deep copy of a tree; no node object is shared with the input."""
    return tuple(
        Node(id=n.id, label=n.label, value=n.value, children=clone_tree(n.children))
        for n in tree
    )


def _check_unique(tree: Sequence[Node]) -> None:
    seen: Set[str] = set()
    for _, node in iter_nodes(tree):
        if node.id in seen:
            raise LedgerError(f"Duplicate node id: {node.id!r}")
        seen.add(node.id)


def _node_from_record(record: Mapping[str, Any], path: str) -> Node:
    if not isinstance(record, Mapping):
        raise LedgerError(f"Node at {path} must be a mapping, got {type(record).__name__}")
    for key in ("id", "label"):
        if record.get(key) in (None, ""):
            raise LedgerError(f"Node at {path} is missing {key!r}")
    node_id = str(record["id"])
    try:
        value = float(record.get("value", 0.0))
    except (TypeError, ValueError):
        raise LedgerError(
            f"Node {node_id!r} has a non-numeric value: {record.get('value')!r}"
        ) from None
    children = tuple(
        _node_from_record(child, f"{path}/{node_id}")
        for child in (record.get("children") or [])
    )
    return Node(id=node_id, label=str(record["label"]), value=value, children=children)


def tree_from_records(records: Sequence[Mapping[str, Any]]) -> Tree:
    """Build a tree from nested mappings as loaded from YAML.

    Each record needs ``id``, ``label`` and ``value``; ``children`` is an
    optional list of records of the same shape. Seeded parent values are
    kept as given.

    Raises:
        LedgerError: On a malformed record or a duplicate id.
    """
    tree = tuple(_node_from_record(r, "") for r in (records or []))
    _check_unique(tree)
    return tree


def tree_to_records(tree: Sequence[Node]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for n in tree:
        rec: Dict[str, Any] = {"id": n.id, "label": n.label, "value": n.value}
        if n.children:
            rec["children"] = tree_to_records(n.children)
        out.append(rec)
    return out


def as_tree(seed: Sequence[Any]) -> Tree:
    """Accept either a sequence of Nodes or of nested records."""
    if all(isinstance(item, Node) for item in seed):
        tree = clone_tree(seed)
        _check_unique(tree)
        return tree
    return tree_from_records(seed)
