"""Tests for the tabular ledger report."""
from __future__ import annotations

import pytest

from engine.update_engine import update_value
from ledger.tree import tree_from_records
from reporting.summary import COLUMNS, TOTAL_ID, format_table, ledger_frame, ledger_rows, ledger_summary


SEED = [
    {
        "id": "electronics",
        "label": "Electronics",
        "value": 1500,
        "children": [
            {"id": "phones", "label": "Phones", "value": 800},
            {"id": "laptops", "label": "Laptops", "value": 700},
        ],
    },
    {
        "id": "furniture",
        "label": "Furniture",
        "value": 1000,
        "children": [
            {"id": "tables", "label": "Tables", "value": 300},
            {"id": "chairs", "label": "Chairs", "value": 700},
        ],
    },
]


def make_trees():
    """Baseline and a live tree with the electronics parent set to 1000.557."""
    baseline = tree_from_records(SEED)
    live = update_value(baseline, "electronics", 1000.557, "direct")
    return live, baseline


class TestLedgerRows:
    """Tests for row flattening."""

    def test_rows_in_tree_order_with_total(self):
        live, baseline = make_trees()

        rows = ledger_rows(live, baseline)

        assert [r["id"] for r in rows] == [
            "electronics", "phones", "laptops", "furniture", "tables", "chairs", TOTAL_ID,
        ]
        assert [r["depth"] for r in rows[:3]] == [0, 1, 1]
        assert rows[0]["is_parent"] and not rows[1]["is_parent"]

    def test_values_rounded_for_display_only(self):
        """Rows round the unrounded parent while the tree keeps it."""
        live, baseline = make_trees()

        rows = ledger_rows(live, baseline)

        assert rows[0]["value"] == 1000.56
        assert live[0].value == 1000.557

    def test_variance_and_direction(self):
        live, baseline = make_trees()

        rows = {r["id"]: r for r in ledger_rows(live, baseline)}

        assert rows["phones"]["direction"] == "down"
        assert rows["furniture"]["direction"] == "flat"
        assert rows["furniture"]["variance_pct"] == 0
        assert rows[TOTAL_ID]["baseline"] == 2500


class TestLedgerFrame:
    """Tests for the pandas view."""

    def test_frame_columns(self):
        live, baseline = make_trees()

        frame = ledger_frame(live, baseline)

        assert list(frame.columns) == COLUMNS
        assert len(frame) == 7

    def test_format_table_indents_children(self):
        live, baseline = make_trees()

        text = format_table(ledger_frame(live, baseline))

        assert "-- Phones" in text
        assert "Grand Total" in text
        assert "1,000.56" in text

    def test_summary(self):
        live, baseline = make_trees()

        summary = ledger_summary(live, baseline)

        assert summary["grand_total"] == pytest.approx(2000.557)
        assert summary["baseline_grand_total"] == 2500
        assert summary["num_nodes"] == 6
