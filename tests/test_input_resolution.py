"""Tests for raw input parsing and percent/direct resolution.

Covers:
- Lenient leading-number parsing
- Percent-to-target conversion
- Soft failure on unparsable input and unknown ids
"""
from __future__ import annotations

import pytest

from common.numeric import parse_number, round2
from engine.input_engine import percent_target, resolve_direct_input, resolve_percent_input
from ledger.tree import find_node, tree_from_records


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


def make_tree():
    return tree_from_records(SEED)


class TestParseNumber:
    """Tests for raw text parsing."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("10", 10.0),
            (" 12.5 ", 12.5),
            ("-3", -3.0),
            ("+7", 7.0),
            (".5", 0.5),
            ("5.", 5.0),
            ("1e2", 100.0),
            ("12.5abc", 12.5),
        ],
    )
    def test_parses_leading_number(self, text, expected):
        """Leading numbers are parsed; trailing text is ignored."""
        assert parse_number(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "-", ".", "e5", "inf", "nan", "1e999", None])
    def test_rejects_non_numbers(self, text):
        """Empty, non-numeric and non-finite text gives None."""
        assert parse_number(text) is None


class TestRound2:
    """Tests for half-up rounding."""

    def test_rounds_half_up(self):
        assert round2(2.675 + 1e-9) == 2.68
        assert round2(0.125) == 0.13
        assert round2(-0.125) == -0.12

    def test_keeps_non_finite(self):
        assert round2(float("inf")) == float("inf")


class TestPercentResolution:
    """Tests for percent input."""

    def test_percent_target(self):
        """800 changed by 10% resolves to 880."""
        assert percent_target(800, 10) == pytest.approx(880.0)
        assert percent_target(800, -25) == pytest.approx(600.0)

    def test_percent_on_leaf(self):
        """Percent input on a leaf stores the rounded target and rolls up."""
        tree = make_tree()

        new_tree = resolve_percent_input(tree, "phones", "10")

        assert find_node(new_tree, "phones").value == 880.0
        assert find_node(new_tree, "electronics").value == 1580.0

    def test_percent_on_parent_redistributes(self):
        """Percent input on a parent scales its children."""
        tree = make_tree()

        new_tree = resolve_percent_input(tree, "electronics", "10")

        assert find_node(new_tree, "electronics").value == pytest.approx(1650.0)
        assert find_node(new_tree, "phones").value == 880.0
        assert find_node(new_tree, "laptops").value == 770.0

    def test_minus_hundred_percent_zeroes_leaf(self):
        tree = make_tree()

        new_tree = resolve_percent_input(tree, "tables", "-100")

        assert find_node(new_tree, "tables").value == 0
        assert find_node(new_tree, "furniture").value == 700

    def test_unparsable_percent_is_noop(self):
        """Text that is not a number leaves the tree unchanged."""
        tree = make_tree()

        new_tree = resolve_percent_input(tree, "phones", "abc")

        assert new_tree == tree
        assert all(a is b for a, b in zip(new_tree, tree))

    def test_unknown_id_is_noop(self):
        tree = make_tree()

        new_tree = resolve_percent_input(tree, "nonexistent", "10")

        assert new_tree == tree


class TestDirectResolution:
    """Tests for absolute value input."""

    def test_direct_on_leaf(self):
        tree = make_tree()

        new_tree = resolve_direct_input(tree, "phones", "1000")

        assert find_node(new_tree, "phones").value == 1000
        assert find_node(new_tree, "electronics").value == 1700

    def test_direct_on_parent(self):
        tree = make_tree()

        new_tree = resolve_direct_input(tree, "electronics", "3000")

        assert find_node(new_tree, "phones").value == 1600
        assert find_node(new_tree, "laptops").value == 1400

    def test_unparsable_direct_is_noop(self):
        tree = make_tree()

        new_tree = resolve_direct_input(tree, "phones", "")

        assert new_tree == tree
