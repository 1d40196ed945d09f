"""Tabular view of a ledger for printing.

Rounding happens here, at display time only; the trees keep full
precision.
"""
from __future__ import annotations

from typing import Any, Dict, List, Sequence

import pandas as pd

from common.numeric import round_to
from engine.variance_engine import (
    compute_variances,
    grand_total_variance,
    variance_direction,
)
from ledger.node import Node
from ledger.tree import grand_total, iter_nodes

TOTAL_ID = "__total__"

COLUMNS = ["id", "label", "depth", "value", "baseline", "variance_pct", "direction", "is_parent"]


def ledger_rows(live: Sequence[Node], baseline: Sequence[Node], places: int = 2) -> List[Dict[str, Any]]:
    """One row per node in depth-first order, then a grand total row."""
    originals = {n.id: n.value for _, n in iter_nodes(baseline)}
    variances = compute_variances(live, baseline)
    rows: List[Dict[str, Any]] = []
    for depth, node in iter_nodes(live):
        pct = variances.by_node[node.id]
        rows.append({
            "id": node.id,
            "label": node.label,
            "depth": depth,
            "value": round_to(node.value, places),
            "baseline": round_to(originals.get(node.id, 0.0), places),
            "variance_pct": round_to(pct, places),
            "direction": variance_direction(pct),
            "is_parent": node.is_parent,
        })
    total_pct = variances.grand_total
    rows.append({
        "id": TOTAL_ID,
        "label": "Grand Total",
        "depth": 0,
        "value": round_to(grand_total(live), places),
        "baseline": round_to(grand_total(baseline), places),
        "variance_pct": round_to(total_pct, places),
        "direction": variance_direction(total_pct),
        "is_parent": False,
    })
    return rows


def ledger_frame(live: Sequence[Node], baseline: Sequence[Node], places: int = 2) -> pd.DataFrame:
    return pd.DataFrame(ledger_rows(live, baseline, places), columns=COLUMNS)


def ledger_summary(live: Sequence[Node], baseline: Sequence[Node]) -> Dict[str, Any]:
    return {
        "grand_total": grand_total(live),
        "baseline_grand_total": grand_total(baseline),
        "grand_total_variance_pct": grand_total_variance(live, baseline),
        "num_nodes": sum(1 for _ in iter_nodes(live)),
    }


def format_table(frame: pd.DataFrame, places: int = 2) -> str:
    """Render a ledger frame as indented plain text."""
    view = pd.DataFrame({
        "Label": [("-- " * d) + label for d, label in zip(frame["depth"], frame["label"])],
        "Value": [f"{v:,.{places}f}" for v in frame["value"]],
        "Variance %": [f"{v:.{places}f}%" for v in frame["variance_pct"]],
        "": frame["direction"],
    })
    return view.to_string(index=False, justify="left")
