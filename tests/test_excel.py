from datetime import date, datetime
from decimal import Decimal

from openpyxl import load_workbook

from budget_ledger.export import write_export
from budget_ledger.models import Transaction


def make_transaction(**kwargs):
    base = dict(
        id="t_1",
        description="",
        amount=Decimal("0.00"),
        category="Food",
        date=datetime(2024, 1, 15, 12, 0),
    )
    base.update(kwargs)
    return Transaction(**base)


def test_workbook_has_bold_subtotals_and_grand_total(tmp_path):
    transactions = [
        make_transaction(id="a", category="Fun", description="Cinema", amount=Decimal("20")),
        make_transaction(id="b", category="Food", description="Lunch", amount=Decimal("10")),
        make_transaction(id="c", category="Food", description="Coffee", amount=Decimal("5.50")),
    ]

    path = write_export("xlsx", transactions, tmp_path, date(2024, 3, 7))
    assert path.name == "verlauf_2024-03-07.xlsx"

    ws = load_workbook(path).active
    rows = [[cell.value for cell in row] for row in ws.iter_rows()]

    assert rows[0] == ["Kategorie", "Beschreibung", "Betrag"]
    assert rows[1][:2] == ["Food", "Lunch"]
    assert rows[3][0] == "Total Food"
    assert rows[3][2] == 15.5
    assert rows[5][0] == "Total Fun"
    assert rows[6][0] == "Gesamt"
    assert rows[6][2] == 35.5
    assert ws.cell(row=4, column=1).font.bold
    assert ws.cell(row=7, column=3).font.bold
    assert not ws.cell(row=2, column=1).font.bold


def test_workbook_keeps_formula_like_text_as_text(tmp_path):
    transactions = [
        make_transaction(id="a", category="=1+1", description='=HYPERLINK("http://x","y")', amount=Decimal("3")),
    ]

    path = write_export("xlsx", transactions, tmp_path, date(2024, 3, 7))
    ws = load_workbook(path).active

    assert ws.cell(row=2, column=2).data_type == "s"
    assert ws.cell(row=2, column=2).value == '=HYPERLINK("http://x","y")'
    assert ws.cell(row=2, column=1).data_type == "s"
    assert ws.cell(row=3, column=1).data_type == "s"
