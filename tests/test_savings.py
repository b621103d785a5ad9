from datetime import date, datetime
from decimal import Decimal

from budget_ledger.models import Transaction
from budget_ledger.savings import (
    build_summary,
    category_totals,
    compute_saved_records,
)


def make_transaction(**kwargs):
    base = dict(
        id="t_1",
        description="",
        amount=Decimal("0.00"),
        category="Sonstiges",
        date=datetime(2024, 1, 15, 12, 0),
    )
    base.update(kwargs)
    return Transaction(**base)


def test_saved_records_split_by_payday():
    transactions = [
        make_transaction(id="a", amount=Decimal("50"), date=datetime(2024, 1, 10, 9, 30)),
        make_transaction(id="b", amount=Decimal("30"), date=datetime(2024, 1, 20, 18, 0)),
    ]

    records = compute_saved_records(transactions, Decimal("500"), 15, date(2024, 1, 25))

    assert len(records) == 2
    first, second = records
    assert (first.start, first.end) == (date(2023, 12, 15), date(2024, 1, 14))
    assert first.spent == Decimal("50")
    assert first.saved == Decimal("450")
    assert (second.start, second.end) == (date(2024, 1, 15), date(2024, 2, 14))
    assert second.spent == Decimal("30")
    assert second.saved == Decimal("470")


def test_each_transaction_counted_once():
    transactions = [
        make_transaction(id=str(i), amount=Decimal("1.25"), date=datetime(2024, m, d, 23, 59))
        for i, (m, d) in enumerate([(1, 14), (1, 15), (2, 14), (2, 15), (3, 1), (12, 31)])
    ]

    records = compute_saved_records(transactions, Decimal("0"), 15, date(2025, 1, 1))

    assert sum(r.spent for r in records) == Decimal("7.50")


def test_no_transactions_means_no_periods():
    assert compute_saved_records([], Decimal("500"), 1, date(2024, 1, 1)) == []


def test_overspend_gives_negative_saved():
    transactions = [make_transaction(amount=Decimal("120.40"))]
    records = compute_saved_records(transactions, Decimal("100"), 1, date(2024, 1, 31))
    assert records[-1].saved == Decimal("-20.40")


def test_budget_applies_to_all_past_periods():
    transactions = [
        make_transaction(id="a", amount=Decimal("10"), date=datetime(2024, 1, 5)),
        make_transaction(id="b", amount=Decimal("20"), date=datetime(2024, 2, 5)),
    ]
    records = compute_saved_records(transactions, Decimal("300"), 1, date(2024, 2, 10))
    assert [r.saved for r in records] == [Decimal("290"), Decimal("280")]


def test_recompute_is_idempotent():
    transactions = [
        make_transaction(id="a", amount=Decimal("10"), date=datetime(2023, 11, 5)),
        make_transaction(id="b", amount=Decimal("20"), date=datetime(2024, 2, 5)),
    ]
    first = compute_saved_records(transactions, Decimal("300"), 7, date(2024, 3, 1))
    second = compute_saved_records(transactions, Decimal("300"), 7, date(2024, 3, 1))
    assert first == second


def test_future_transaction_still_covered():
    transactions = [make_transaction(amount=Decimal("5"), date=datetime(2024, 4, 2))]
    records = compute_saved_records(transactions, Decimal("50"), 1, date(2024, 3, 20))
    assert records[-1].label == "Apr. 2024"
    assert records[-1].spent == Decimal("5")


def test_summary_flags_low_balance():
    transactions = [
        make_transaction(amount=Decimal("250")),
        make_transaction(amount=Decimal("100")),
    ]
    summary = build_summary(transactions, Decimal("500"))
    assert summary.spent == Decimal("350")
    assert summary.remaining == Decimal("150")
    assert summary.low_balance
    assert not build_summary([], Decimal("500")).low_balance


def test_category_totals_keep_first_appearance_order():
    transactions = [
        make_transaction(category="Fun", amount=Decimal("20")),
        make_transaction(category="Food", amount=Decimal("10")),
        make_transaction(category="Fun", amount=Decimal("5")),
    ]
    assert category_totals(transactions) == {"Fun": Decimal("25"), "Food": Decimal("10")}
