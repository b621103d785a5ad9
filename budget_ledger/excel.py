from __future__ import annotations

from pathlib import Path
from typing import Sequence

from openpyxl import Workbook
from openpyxl.styles import Font

from .export import DOCUMENT_HEADER, GRAND_TOTAL_LABEL, GroupedTransactions

AMOUNT_FORMAT = "#,##0.00"
SHEET_TITLE = "Verlauf"


def _append_row(ws, values: Sequence[object], *, bold: bool = False) -> int:
    ws.append(list(values))
    row_idx = ws.max_row
    for col_idx in range(1, len(DOCUMENT_HEADER) + 1):
        cell = ws.cell(row=row_idx, column=col_idx)
        # user text stays text, never a formula
        if isinstance(cell.value, str):
            cell.data_type = "s"
        if bold:
            cell.font = Font(bold=True)
    amount_cell = ws.cell(row=row_idx, column=len(DOCUMENT_HEADER))
    if not isinstance(amount_cell.value, str):
        amount_cell.number_format = AMOUNT_FORMAT
    return row_idx


def render_workbook(grouped: GroupedTransactions, output_path: Path) -> None:
    """
    Write the grouped history as a single-sheet workbook: one row per
    transaction, a bold subtotal row after each category and a bold grand
    total at the bottom.
    """

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    _append_row(ws, DOCUMENT_HEADER, bold=True)

    for group in grouped:
        for tx in group.transactions:
            _append_row(ws, [group.category, tx.description, float(tx.amount)])
        _append_row(ws, [group.label, None, float(group.subtotal)], bold=True)
    _append_row(ws, [GRAND_TOTAL_LABEL, None, float(grouped.grand_total)], bold=True)

    ws.column_dimensions["A"].width = 24
    ws.column_dimensions["B"].width = 40
    ws.column_dimensions["C"].width = 14
    wb.save(str(output_path))
