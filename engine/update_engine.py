"""Tree update engine.

Applies a value update to one node of a ledger tree and propagates it:

- a parent that is set directly pushes its new value down into its
  children in proportion to their previous shares;
- any other change rolls up, recomputing the subtotal of every ancestor.

Trees are never modified in place. Each call returns a new tuple of roots;
subtrees that the update does not touch are reused as-is.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence, Tuple, Union

from common.numeric import round2
from ledger.node import Node
from ledger.tree import Tree, subtotal

_log = logging.getLogger(__name__)


class UpdateMode(Enum):
    """How the caller arrived at the new value."""

    PERCENTAGE = "percentage"
    """Target resolved from a percent change of the current value."""

    DIRECT = "direct"
    """Target entered as an absolute value."""


def redistribute(children: Sequence[Node], target: float) -> Tuple[Node, ...]:
    """Scale children so they share ``target`` in their current proportions.

    Each child gets ``round2(child.value / old_subtotal * target)``. When the
    old subtotal is not positive there are no proportions to keep and every
    child becomes 0. Children that are parents themselves are redistributed
    the same way, and their value becomes the rounded sum of their new
    children.
    """
    old = subtotal(children)
    out = []
    for child in children:
        share = round2(child.value / old * target) if old > 0 else 0.0
        if child.children:
            grandchildren = redistribute(child.children, share)
            out.append(child.with_children(grandchildren, round2(subtotal(grandchildren))))
        else:
            out.append(child.with_value(share))
    return tuple(out)


def _update_node(node: Node, node_id: str, new_value: float, round_target: bool) -> Node:
    if node.id == node_id:
        if node.children:
            # Parent value is stored as given until a descendant changes.
            # With round_target it is the rounded sum of its new children.
            if round_target:
                children = redistribute(node.children, round2(new_value))
                return node.with_children(children, round2(subtotal(children)))
            return node.with_children(redistribute(node.children, new_value), new_value)
        return node.with_value(round2(new_value))

    if not node.children:
        return node

    children = _update_level(node.children, node_id, new_value, round_target)
    if any(new is not old for new, old in zip(children, node.children)):
        return node.with_children(children, round2(subtotal(children)))
    return node


def _update_level(
    nodes: Sequence[Node], node_id: str, new_value: float, round_target: bool
) -> Tuple[Node, ...]:
    return tuple(_update_node(n, node_id, new_value, round_target) for n in nodes)


def update_value(
    tree: Sequence[Node],
    node_id: str,
    new_value: float,
    mode: Union[UpdateMode, str] = UpdateMode.DIRECT,
    round_target: bool = False,
) -> Tree:
    """Set the value of one node and return the resulting tree.

    Args:
        tree: Current roots.
        node_id: Id of the node to update. An unknown id leaves the tree
            unchanged.
        new_value: Absolute target value. Percent changes must already be
            resolved (see ``engine.input_engine``).
        mode: ``UpdateMode`` or its string value. Both modes redistribute
            into the children of a parent target.
        round_target: Store the rounded sum of its new children as the value
            of a parent target instead of ``new_value`` as given.

    Returns:
        New tuple of roots. Nodes outside the updated path are shared with
        ``tree``.

    Raises:
        ValueError: If ``mode`` is not a known update mode.
    """
    mode = UpdateMode(mode)
    updated = _update_level(tree, node_id, new_value, round_target)

    if all(new is old for new, old in zip(updated, tree)):
        _log.debug("No node with id %r; tree unchanged", node_id)
    else:
        _log.debug("Updated %r to %s (%s)", node_id, new_value, mode.value)
    return updated
