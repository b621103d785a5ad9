"""Command line entry point for the budget ledger."""

from __future__ import annotations

import argparse
import logging
from datetime import date
from pathlib import Path
from typing import Iterable

from .config import get_settings
from .errors import EmptyExport, LedgerError
from .export import EXPORT_KINDS, write_export
from .formatting import (
    format_categories,
    format_chf,
    format_saved_records,
    format_summary,
    format_transactions,
)
from .store import LedgerStore, filter_transactions


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Track expenses against a monthly budget and see how much was "
            "saved in each payday-to-payday period."
        )
    )
    parser.add_argument(
        "--state",
        type=Path,
        help="Path to the ledger state file (defaults to BUDGET_LEDGER_STATE_FILE).",
    )
    parser.add_argument(
        "--export-dir",
        type=Path,
        help="Directory for exports (defaults to BUDGET_LEDGER_EXPORT_DIR).",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("summary", help="Show budget, spend and remaining amount.")

    add = commands.add_parser("add", help="Record a new expense.")
    add.add_argument("description")
    add.add_argument("amount")
    add.add_argument("--category", default="")

    delete = commands.add_parser("delete", help="Delete a transaction by id.")
    delete.add_argument("id")

    listing = commands.add_parser("list", help="List transactions, newest first.")
    listing.add_argument("--search", default="")
    listing.add_argument("--category", default="")

    budget = commands.add_parser("budget", help="Set the budget for the current period.")
    budget.add_argument("value")

    payday = commands.add_parser("payday", help="Set the payday (1-28).")
    payday.add_argument("day")

    commands.add_parser("saved", help="Show the amount saved per period.")
    commands.add_parser("categories", help="List categories.")

    category = commands.add_parser("category", help="Manage categories.")
    category_commands = category.add_subparsers(dest="category_command", required=True)
    category_add = category_commands.add_parser("add")
    category_add.add_argument("name")
    category_rename = category_commands.add_parser("rename")
    category_rename.add_argument("old")
    category_rename.add_argument("new")
    category_remove = category_commands.add_parser("remove")
    category_remove.add_argument("name")

    name = commands.add_parser("name", help="Set the name used in the greeting.")
    name.add_argument("name")

    theme = commands.add_parser("theme", help="Set the display theme.")
    theme.add_argument("theme")

    commands.add_parser("reset", help="Delete the whole transaction history.")

    export = commands.add_parser("export", help="Export the full history.")
    export.add_argument("kind", choices=EXPORT_KINDS)
    export.add_argument(
        "--date",
        type=date.fromisoformat,
        help="Override the date stamped into the export filename.",
    )
    return parser.parse_args(argv)


def _execute(args: argparse.Namespace, store: LedgerStore, export_dir: Path) -> str:
    command = args.command
    if command == "summary":
        return format_summary(
            store.summary(), name=store.state.name, payday=store.state.payday, now=store.clock()
        )
    if command == "add":
        tx = store.add_transaction(args.description, args.amount, args.category)
        return f"Added {tx.id}: {tx.category} {tx.description} {format_chf(tx.amount)}"
    if command == "delete":
        removed = store.delete_transaction(args.id)
        return f"Deleted {args.id}" if removed else f"No transaction {args.id}"
    if command == "list":
        return format_transactions(
            filter_transactions(store.transactions, args.search, args.category)
        )
    if command == "budget":
        return f"Budget: {format_chf(store.set_budget(args.value))}"
    if command == "payday":
        return f"Zahltag gespeichert: {store.set_payday(args.day)}"
    if command == "saved":
        return format_saved_records(store.saved_records)
    if command == "categories":
        return format_categories(store.categories)
    if command == "category":
        if args.category_command == "add":
            store.add_category(args.name)
        elif args.category_command == "rename":
            store.rename_category(args.old, args.new)
        else:
            store.remove_category(args.name)
        return format_categories(store.categories)
    if command == "name":
        return f"Hallo {store.set_name(args.name)}"
    if command == "theme":
        return f"Theme: {store.set_theme(args.theme)}"
    if command == "reset":
        store.clear_transactions()
        return "Verlauf gelöscht."
    if command == "export":
        path = write_export(args.kind, store.transactions, export_dir, args.date)
        return f"Exported to {path}"
    raise SystemExit(f"Unknown command: {command}")


def run(argv: Iterable[str] | None = None) -> str:
    args = parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    state_path = args.state or settings.state_file
    export_dir = args.export_dir or settings.export_dir

    store = LedgerStore.open(state_path)
    try:
        output_text = _execute(args, store, export_dir)
    except EmptyExport:
        raise SystemExit("Keine Daten")
    except LedgerError as exc:
        raise SystemExit(str(exc))
    print(output_text)
    return output_text


def main() -> None:
    run()


if __name__ == "__main__":
    main()
