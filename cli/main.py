"""Hierarchical ledger CLI.

Provides commands for:
- show: Print the seed ledger with variance against itself
- update: Apply direct and percentage updates in order and print the result
"""
from __future__ import annotations

import argparse
import logging
from typing import List, Tuple

from common.config_loader import LoadedConfig, load_all
from engine.tree_update_engine import TreeUpdateEngine
from engine.update_engine import UpdateMode
from ledger.tree import LedgerError, find_node
from policy.logging_policy import LoggingPolicy
from policy.rounding_policy import RoundingPolicy
from reporting.summary import format_table, ledger_frame, ledger_summary

_log = logging.getLogger(__name__)


def configure_logging(cfg: LoadedConfig, override: str | None = None) -> None:
    """Configure root logging from settings, or from --log-level when given."""
    pol = LoggingPolicy(cfg.settings)
    level = (override or pol.level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format=pol.format)


def parse_operation(op: str) -> Tuple[str, str, UpdateMode]:
    """Split ``ID=VALUE`` / ``ID=PCT%`` into (id, raw text, mode).

    Raises:
        ValueError: If the operation has no ``=`` or an empty id.
    """
    node_id, sep, raw = op.partition("=")
    node_id = node_id.strip()
    if not sep or not node_id:
        raise ValueError(f"Invalid operation: {op!r} (expected ID=VALUE or ID=PCT%)")
    raw = raw.strip()
    if raw.endswith("%"):
        return node_id, raw[:-1], UpdateMode.PERCENTAGE
    return node_id, raw, UpdateMode.DIRECT


def build_engine(cfg: LoadedConfig) -> TreeUpdateEngine:
    """Build the ledger session from loaded configuration."""
    return TreeUpdateEngine.from_config(cfg.seed, cfg.settings)


def print_ledger(engine: TreeUpdateEngine, places: int) -> None:
    frame = ledger_frame(engine.tree, engine.baseline, places)
    print(format_table(frame, places))

    summary = ledger_summary(engine.tree, engine.baseline)
    print("\nSummary:")
    print(f"  grand_total: {summary['grand_total']:,.{places}f}")
    print(f"  baseline_grand_total: {summary['baseline_grand_total']:,.{places}f}")
    print(f"  grand_total_variance: {summary['grand_total_variance_pct']:.{places}f}%")
    print(f"  num_nodes: {summary['num_nodes']}")
    print(f"  num_updates: {engine.num_updates}")


def cmd_show(args) -> int:
    """Handle show command: print the seed ledger."""
    cfg = load_all(args.seed, args.settings)
    configure_logging(cfg, args.log_level)
    try:
        engine = build_engine(cfg)
    except LedgerError as e:
        print(f"Error: {e}")
        return 1

    print("Ledger")
    print("=" * 50)
    print_ledger(engine, RoundingPolicy(cfg.settings).display_places)
    return 0


def cmd_update(args) -> int:
    """Handle update command: apply operations in order."""
    cfg = load_all(args.seed, args.settings)
    configure_logging(cfg, args.log_level)

    try:
        ops: List[Tuple[str, str, UpdateMode]] = [parse_operation(op) for op in args.ops]
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    try:
        engine = build_engine(cfg)
    except LedgerError as e:
        print(f"Error: {e}")
        return 1

    for node_id, raw, mode in ops:
        if find_node(engine.tree, node_id) is None:
            _log.warning("Unknown node %r; skipped", node_id)
            continue
        engine.set_input(node_id, raw)
        if mode is UpdateMode.PERCENTAGE:
            engine.apply_percent_input(node_id)
        else:
            engine.apply_direct_input(node_id)
        if engine.has_pending_input(node_id):
            _log.warning("Ignored non-numeric input %r for %r", raw, node_id)

    print(f"Ledger after {engine.num_updates} update(s)")
    print("=" * 50)
    print_ledger(engine, RoundingPolicy(cfg.settings).display_places)
    return 0


def main():
    """Main entry point."""
    p = argparse.ArgumentParser(
        prog="cli.main",
        description="Hierarchical ledger CLI: proportional allocation with subtotal roll-up",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # Common arguments for all commands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--seed", default="config/ledger.yaml", help="Seed ledger file")
    common.add_argument("--settings", default="config/settings.yaml", help="Settings file")
    common.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Override the configured log level",
    )

    # Show command
    show_p = sub.add_parser("show", parents=[common], help="Print the ledger")
    show_p.set_defaults(func=cmd_show)

    # Update command
    upd = sub.add_parser(
        "update",
        parents=[common],
        help="Apply updates to the ledger",
    )
    upd.add_argument(
        "ops",
        nargs="+",
        metavar="OP",
        help="ID=VALUE sets a value directly, ID=PCT%% changes it by a percentage",
    )
    upd.set_defaults(func=cmd_update)

    args = p.parse_args()
    raise SystemExit(args.func(args))


if __name__ == "__main__":
    main()
