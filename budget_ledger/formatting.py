"""Utility helpers for turning ledger objects into text for the terminal."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Sequence, Union

from .models import SavedRecord, Transaction
from .periods import current_period
from .savings import LedgerSummary

QUOTES = (
    "Kleine Schritte, grosse Wirkung.",
    "Spare heute, geniesse morgen.",
    "Kenne deine Ausgaben, meistere dein Leben.",
    "Jeder Franken zählt.",
    "Bewusst leben, bewusst sparen.",
)
EMPTY_LIST = "Keine Einträge."


def format_chf(value: Union[Decimal, float, int, None]) -> str:
    return f"CHF {Decimal(str(value or 0)):.2f}"


def greeting(name: str) -> str:
    return f"Hallo {name}" if name else "Hallo"


def daily_quote(today: date | None = None) -> str:
    today = today or date.today()
    return f"“{QUOTES[today.day % len(QUOTES)]}”"


def _column_widths(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> Sequence[int]:
    widths = [len(h) for h in headers]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))
    return widths


def _format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = _column_widths(headers, rows)

    def format_row(row: Sequence[str]) -> str:
        return " | ".join(cell.ljust(widths[idx]) for idx, cell in enumerate(row)).rstrip()

    header_line = format_row(headers)
    separator = "-+-".join("-" * w for w in widths)
    body = "\n".join(format_row(row) for row in rows)
    return "\n".join([header_line, separator, body]) if body else "\n".join(
        [header_line, separator]
    )


def format_transactions(transactions: Iterable[Transaction]) -> str:
    rows = [
        [
            tx.id,
            f"{tx.date:%Y-%m-%d %H:%M}",
            tx.category,
            tx.description,
            format_chf(tx.amount),
        ]
        for tx in transactions
    ]
    if not rows:
        return EMPTY_LIST
    return _format_table(["Id", "Datum", "Kategorie", "Beschreibung", "Betrag"], rows)


def format_saved_records(records: Iterable[SavedRecord]) -> str:
    """Newest period first, as the savings tab lists them."""

    rows = [
        [
            record.label,
            f"{record.start:%Y-%m-%d}",
            f"{record.end:%Y-%m-%d}",
            format_chf(record.spent),
            format_chf(record.saved),
        ]
        for record in reversed(list(records))
    ]
    if not rows:
        return "Keine Daten."
    return _format_table(["Periode", "Von", "Bis", "Ausgaben", "Gespart"], rows)


def format_categories(categories: Iterable[str]) -> str:
    return "\n".join(sorted(categories))


def format_summary(
    summary: LedgerSummary,
    name: str = "",
    payday: int = 1,
    now: datetime | None = None,
) -> str:
    now = now or datetime.now()
    period = current_period(payday, now.date())
    lines = [
        greeting(name),
        f"Budget für {period.label} ({period.start:%d.%m.%Y} - {period.end:%d.%m.%Y})",
        f"{now:%d.%m. %H:%M}",
        daily_quote(now.date()),
        "",
        f"Budget:     {format_chf(summary.budget)}",
        f"Ausgegeben: {format_chf(summary.spent)}",
        f"Verbleibend: {format_chf(summary.remaining)}"
        + ("  (!)" if summary.low_balance else ""),
        f"Einträge:   {summary.transaction_count}",
    ]
    return "\n".join(lines)
