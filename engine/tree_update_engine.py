"""Stateful ledger session.

Owns the current tree, the baseline captured when the session starts and
the raw text typed per node that has not been applied yet. Every update
replaces ``tree`` with a new value; trees handed out earlier stay valid.
Calls are expected one at a time.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union

from common.numeric import parse_number
from engine.input_engine import resolve_direct_input, resolve_percent_input
from engine.update_engine import UpdateMode, update_value
from engine.variance_engine import (
    VarianceResult,
    compute_variances,
    grand_total_variance,
    variance_of,
)
from ledger.tree import Tree, as_tree, clone_tree, grand_total
from policy.rounding_policy import RoundingPolicy

_log = logging.getLogger(__name__)


def initialize(seed: Sequence[Any]) -> Tuple[Tree, Tree]:
    """Build the live tree and an independent baseline from a seed.

    Args:
        seed: Root Nodes or nested records (``id``, ``label``, ``value``,
            ``children``).

    Returns:
        Tuple of (live tree, baseline). They share no node objects.

    Raises:
        LedgerError: If the seed is malformed or repeats an id.
    """
    live = as_tree(seed)
    return live, clone_tree(live)


class TreeUpdateEngine:
    """Current ledger state plus the operations a table view needs."""

    def __init__(self, seed: Sequence[Any], rounding: Optional[RoundingPolicy] = None):
        self.tree, self._baseline = initialize(seed)
        self.rounding = rounding or RoundingPolicy()
        self.inputs: Dict[str, str] = {}
        self.num_updates = 0

    @classmethod
    def from_config(cls, seed_cfg: Dict[str, Any], settings: Dict[str, Any]) -> "TreeUpdateEngine":
        return cls(seed_cfg.get("nodes") or [], RoundingPolicy(settings))

    @property
    def baseline(self) -> Tree:
        return self._baseline

    def update_value(self, node_id: str, new_value: float, mode: Union[UpdateMode, str]) -> Tree:
        self._replace(update_value(
            self.tree,
            node_id,
            new_value,
            mode,
            round_target=self.rounding.round_redistributed_target,
        ))
        return self.tree

    def _replace(self, tree: Tree) -> bool:
        """Install ``tree``; count it only when some node actually changed."""
        changed = any(new is not old for new, old in zip(tree, self.tree))
        self.tree = tree
        if changed:
            self.num_updates += 1
        return changed

    # Pending input

    def set_input(self, node_id: str, text: str) -> None:
        self.inputs[node_id] = text

    def pending_input(self, node_id: str) -> str:
        return self.inputs.get(node_id, "")

    def has_pending_input(self, node_id: str) -> bool:
        return bool(self.pending_input(node_id))

    def apply_percent_input(self, node_id: str) -> Tree:
        return self._apply_input(node_id, resolve_percent_input)

    def apply_direct_input(self, node_id: str) -> Tree:
        return self._apply_input(node_id, resolve_direct_input)

    def _apply_input(self, node_id: str, resolve: Callable[..., Tree]) -> Tree:
        text = self.pending_input(node_id)
        if parse_number(text) is None:
            _log.debug("Pending input %r for %r is not a number", text, node_id)
            return self.tree
        changed = self._replace(resolve(
            self.tree,
            node_id,
            text,
            round_target=self.rounding.round_redistributed_target,
        ))
        self.inputs.pop(node_id, None)
        if changed:
            _log.info("Applied %r to %r; grand total %.2f", text, node_id, self.grand_total())
        return self.tree

    # Reads

    def grand_total(self) -> float:
        return grand_total(self.tree)

    def baseline_grand_total(self) -> float:
        return grand_total(self._baseline)

    def variance_of(self, node_id: str) -> float:
        return variance_of(node_id, self.tree, self._baseline)

    def grand_total_variance(self) -> float:
        return grand_total_variance(self.tree, self._baseline)

    def variances(self) -> VarianceResult:
        return compute_variances(self.tree, self._baseline)
