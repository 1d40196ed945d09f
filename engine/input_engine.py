"""Resolution of raw input text into tree updates.

Raw text comes straight from an input field. It is parsed here and
nowhere else; text that does not parse is dropped without touching the
tree.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from common.numeric import parse_number
from engine.update_engine import UpdateMode, update_value
from ledger.node import Node
from ledger.tree import Tree, find_node

_log = logging.getLogger(__name__)


def percent_target(value: float, percent: float) -> float:
    """Absolute value after changing ``value`` by ``percent`` percent."""
    return value * (1 + percent / 100)


def resolve_percent_input(
    tree: Sequence[Node],
    node_id: str,
    raw_percent: Optional[str],
    round_target: bool = False,
) -> Tree:
    """Apply a percent change typed for one node.

    Returns the tree unchanged when the text is not a number or the id is
    unknown.
    """
    percent = parse_number(raw_percent)
    if percent is None:
        _log.debug("Ignoring unparsable percent %r for %r", raw_percent, node_id)
        return tuple(tree)
    node = find_node(tree, node_id)
    if node is None:
        _log.debug("Ignoring percent input for unknown node %r", node_id)
        return tuple(tree)
    target = percent_target(node.value, percent)
    return update_value(tree, node_id, target, UpdateMode.PERCENTAGE, round_target=round_target)


def resolve_direct_input(
    tree: Sequence[Node],
    node_id: str,
    raw_value: Optional[str],
    round_target: bool = False,
) -> Tree:
    """Apply an absolute value typed for one node."""
    value = parse_number(raw_value)
    if value is None:
        _log.debug("Ignoring unparsable value %r for %r", raw_value, node_id)
        return tuple(tree)
    return update_value(tree, node_id, value, UpdateMode.DIRECT, round_target=round_target)
