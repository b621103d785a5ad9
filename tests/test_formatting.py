from datetime import date, datetime
from decimal import Decimal

from budget_ledger.formatting import (
    QUOTES,
    daily_quote,
    format_chf,
    format_saved_records,
    format_summary,
    greeting,
)
from budget_ledger.models import SavedRecord
from budget_ledger.savings import LedgerSummary


def test_format_chf():
    assert format_chf(Decimal("12.5")) == "CHF 12.50"
    assert format_chf(-3) == "CHF -3.00"
    assert format_chf(None) == "CHF 0.00"


def test_greeting_and_quote():
    assert greeting("") == "Hallo"
    assert greeting("Mia") == "Hallo Mia"
    assert QUOTES[7 % len(QUOTES)] in daily_quote(date(2024, 5, 7))


def test_saved_records_newest_first():
    records = [
        SavedRecord("Jan. 2024", date(2024, 1, 1), date(2024, 1, 31), Decimal("10"), Decimal("90")),
        SavedRecord("Feb. 2024", date(2024, 2, 1), date(2024, 2, 29), Decimal("0"), Decimal("100")),
    ]
    lines = format_saved_records(records).splitlines()
    assert lines[2].startswith("Feb. 2024")
    assert lines[3].startswith("Jan. 2024")
    assert "CHF 90.00" in lines[3]


def test_summary_marks_low_balance():
    summary = LedgerSummary(budget=Decimal("250"), spent=Decimal("100"), transaction_count=1)
    text = format_summary(summary, name="Mia", payday=15, now=datetime(2024, 1, 10, 9, 0))
    assert text.splitlines()[0] == "Hallo Mia"
    assert "Dez. 2023" in text
    assert "Verbleibend: CHF 150.00  (!)" in text
