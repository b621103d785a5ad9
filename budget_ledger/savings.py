"""Derive per-period savings and overall spend from the transaction history."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence

from .models import SavedRecord, Transaction, to_money
from .periods import partition_periods

LOW_BALANCE_THRESHOLD = Decimal("200.00")


@dataclass(frozen=True)
class LedgerSummary:
    budget: Decimal
    spent: Decimal
    transaction_count: int

    @property
    def remaining(self) -> Decimal:
        return self.budget - self.spent

    @property
    def low_balance(self) -> bool:
        return self.remaining < LOW_BALANCE_THRESHOLD


def total_amount(transactions: Iterable[Transaction]) -> Decimal:
    return sum((tx.amount for tx in transactions), Decimal("0.00"))


def compute_saved_records(
    transactions: Sequence[Transaction],
    budget: Decimal,
    payday: int,
    now: date,
) -> List[SavedRecord]:
    """Partition the history by payday and report spend and savings per period.

    The current budget is applied to every period, so changing it shifts the
    ``saved`` figure of past periods as well.
    """

    if not transactions:
        return []
    budget = to_money(budget)
    days = sorted(tx.day for tx in transactions)
    horizon = max(now, days[-1])
    periods = partition_periods(payday, days[0], horizon)

    records: List[SavedRecord] = []
    for period in periods:
        spent = total_amount(tx for tx in transactions if period.contains(tx.day))
        records.append(
            SavedRecord(
                label=period.label,
                start=period.start,
                end=period.end,
                spent=spent,
                saved=budget - spent,
            )
        )
    return records


def build_summary(transactions: Sequence[Transaction], budget: Decimal) -> LedgerSummary:
    return LedgerSummary(
        budget=to_money(budget),
        spent=total_amount(transactions),
        transaction_count=len(transactions),
    )


def category_totals(transactions: Iterable[Transaction]) -> Dict[str, Decimal]:
    """Sum amounts per category in order of first appearance."""

    totals: Dict[str, Decimal] = {}
    for tx in transactions:
        totals[tx.category] = totals.get(tx.category, Decimal("0.00")) + tx.amount
    return totals
