"""Data models used by the budget ledger."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List

CENT = Decimal("0.01")

DEFAULT_CATEGORIES = (
    "Handyabo",
    "Fonds",
    "Eltern",
    "Verpflegung",
    "Frisör",
    "Sparen",
    "Geschenke",
    "Sonstiges",
)
DEFAULT_CATEGORY = "Sonstiges"
PLACEHOLDER_DESCRIPTION = "—"
DEFAULT_THEME = "standard"
DEFAULT_PAYDAY = 1


def to_money(value: Any) -> Decimal:
    """Return ``value`` as a ``Decimal`` rounded to the cent.

    Raises ``ValueError`` for anything that is not a finite number.
    """

    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Not a number: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Amount out of range: {value!r}") from exc


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into a naive local ``datetime``.

    Blobs written by the browser app carry UTC timestamps with a ``Z``
    suffix; those are converted to local time.
    """

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_day(value: str) -> date:
    """Parse a period boundary, accepting full timestamps from older blobs."""

    text = value.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    return parse_timestamp(text).date()


@dataclass(frozen=True)
class Transaction:
    """A single recorded expense."""

    id: str
    description: str
    amount: Decimal
    category: str
    date: datetime

    @property
    def day(self) -> date:
        return self.date.date()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "desc": self.description,
            "amount": float(self.amount),
            "category": self.category,
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        return cls(
            id=str(data["id"]),
            description=str(data.get("desc") or PLACEHOLDER_DESCRIPTION),
            amount=to_money(data.get("amount") or 0),
            category=str(data.get("category") or DEFAULT_CATEGORY),
            date=parse_timestamp(str(data["date"])),
        )


@dataclass(frozen=True)
class PeriodWindow:
    """One payday-to-payday interval, inclusive on both ends."""

    label: str
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class SavedRecord:
    label: str
    start: date
    end: date
    spent: Decimal
    saved: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "saved": float(self.saved),
            "spent": float(self.spent),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedRecord":
        return cls(
            label=str(data["label"]),
            start=parse_day(str(data["start"])),
            end=parse_day(str(data["end"])),
            spent=to_money(data.get("spent") or 0),
            saved=to_money(data.get("saved") or 0),
        )


@dataclass
class LedgerState:
    """The whole mutable ledger, persisted as one blob."""

    name: str = ""
    budget: Decimal = Decimal("0.00")
    transactions: List[Transaction] = field(default_factory=list)
    categories: List[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    theme: str = DEFAULT_THEME
    payday: int = DEFAULT_PAYDAY
    saved_records: List[SavedRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "budget": float(self.budget),
            "transactions": [tx.to_dict() for tx in self.transactions],
            "categories": list(self.categories),
            "theme": self.theme,
            "payday": self.payday,
            "savedRecords": [record.to_dict() for record in self.saved_records],
        }
