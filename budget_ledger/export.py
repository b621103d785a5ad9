"""Grouped exports of the transaction history.

Transactions are grouped by category once; the CSV, document and workbook
renderers all consume the same :class:`GroupedTransactions`.
"""

from __future__ import annotations

import csv
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from html import escape
from io import StringIO
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from .errors import EmptyExport
from .models import Transaction
from .savings import total_amount

logger = logging.getLogger(__name__)

CSV_HEADER = ["Kategorie", "Beschreibung", "Betrag", "Datum"]
DOCUMENT_HEADER = ["Kategorie", "Beschreibung", "Betrag"]
GRAND_TOTAL_LABEL = "Gesamt"
BOM = "\ufeff"
EXPORT_KINDS = ("csv", "doc", "xlsx")


@dataclass(frozen=True)
class CategoryGroup:
    category: str
    transactions: Sequence[Transaction]
    subtotal: Decimal

    @property
    def label(self) -> str:
        return f"Total {self.category}"


@dataclass(frozen=True)
class GroupedTransactions:
    groups: Sequence[CategoryGroup]
    grand_total: Decimal

    def __iter__(self):
        return iter(self.groups)

    @property
    def transaction_count(self) -> int:
        return sum(len(group.transactions) for group in self.groups)


def group_by_category(transactions: Iterable[Transaction]) -> GroupedTransactions:
    """Group ``transactions`` by category, sorted by category name."""

    buckets: Dict[str, List[Transaction]] = defaultdict(list)
    for tx in transactions:
        buckets[tx.category].append(tx)
    if not buckets:
        raise EmptyExport("Keine Daten")

    groups = [
        CategoryGroup(
            category=category,
            transactions=tuple(items),
            subtotal=total_amount(items),
        )
        for category, items in sorted(buckets.items())
    ]
    grand_total = sum((group.subtotal for group in groups), Decimal("0.00"))
    return GroupedTransactions(groups=tuple(groups), grand_total=grand_total)


def _amount(value: Decimal) -> str:
    return f"{value:.2f}"


def render_csv(grouped: GroupedTransactions) -> str:
    output = StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for group in grouped:
        for tx in group.transactions:
            writer.writerow(
                [tx.category, tx.description, _amount(tx.amount), tx.date.isoformat()]
            )
    return output.getvalue()


def render_document(grouped: GroupedTransactions) -> str:
    """Render an HTML table that word processors open as a document."""

    head = "".join(
        f'<th style="text-align:right">{escape(h)}</th>' if h == "Betrag" else f"<th>{escape(h)}</th>"
        for h in DOCUMENT_HEADER
    )
    lines = [
        '<html><head><meta charset="utf-8"><title>Verlauf</title></head>',
        '<body style="font-family:Nunito, sans-serif"><h2>Verlauf</h2>',
        '<table border="1" cellpadding="6" cellspacing="0" style="border-collapse:collapse;width:100%">',
        f"<thead><tr>{head}</tr></thead><tbody>",
    ]
    for group in grouped:
        category = escape(group.category)
        for tx in group.transactions:
            lines.append(
                f"<tr><td>{category}</td><td>{escape(tx.description)}</td>"
                f'<td style="text-align:right">{_amount(tx.amount)}</td></tr>'
            )
        lines.append(
            f'<tr style="font-weight:700;background:#f5f5f5"><td colspan="2">{escape(group.label)}</td>'
            f'<td style="text-align:right">{_amount(group.subtotal)}</td></tr>'
        )
    lines.append(
        f'<tr style="font-weight:900;background:#e9f7ef"><td colspan="2">{GRAND_TOTAL_LABEL}</td>'
        f'<td style="text-align:right">{_amount(grouped.grand_total)}</td></tr>'
    )
    lines.append("</tbody></table></body></html>")
    return BOM + "\n".join(lines)


def export_filename(kind: str, today: date | None = None) -> str:
    today = today or date.today()
    return f"verlauf_{today:%Y-%m-%d}.{kind}"


def write_export(
    kind: str,
    transactions: Sequence[Transaction],
    directory: Path,
    today: date | None = None,
) -> Path:
    """Write one export of ``transactions`` into ``directory`` and return its path."""

    if kind not in EXPORT_KINDS:
        raise ValueError(f"Unknown export kind: {kind}")
    grouped = group_by_category(transactions)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(kind, today)

    if kind == "csv":
        path.write_text(render_csv(grouped), encoding="utf-8")
    elif kind == "doc":
        path.write_text(render_document(grouped), encoding="utf-8")
    else:
        from .excel import render_workbook

        render_workbook(grouped, path)
    logger.info("Exported %d transactions to %s", grouped.transaction_count, path)
    return path
