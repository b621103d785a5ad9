"""The ledger store: the single owner of all ledger state."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from .errors import (
    DuplicateCategory,
    InvalidAmount,
    InvalidName,
    PersistenceFailure,
    UnknownCategory,
)
from .models import (
    DEFAULT_CATEGORY,
    DEFAULT_THEME,
    PLACEHOLDER_DESCRIPTION,
    LedgerState,
    SavedRecord,
    Transaction,
    to_money,
)
from .periods import validate_payday
from .savings import LedgerSummary, build_summary, compute_saved_records
from .storage import JsonStateStorage, merge_with_defaults

logger = logging.getLogger(__name__)


def new_transaction_id() -> str:
    return f"t_{uuid.uuid4().hex}"


def normalize_name(value: str) -> str:
    return str(value or "").replace("ß", "ss").strip()


def filter_transactions(
    transactions: Iterable[Transaction],
    text: str = "",
    category: str = "",
) -> List[Transaction]:
    """Return matching transactions, newest first.

    ``text`` matches case-insensitively against description or category;
    ``category`` must match exactly when given.
    """

    needle = (text or "").lower()
    matches = [
        tx
        for tx in transactions
        if (not category or tx.category == category)
        and (
            not needle
            or needle in tx.description.lower()
            or needle in tx.category.lower()
        )
    ]
    matches.reverse()
    return matches


class LedgerStore:
    """Holds the ledger state and keeps derived period records current.

    Every mutating method validates first, then changes state and commits:
    derived records are recomputed from scratch and the whole state is
    saved. Persistence is best effort; failures are logged and the store
    keeps working in memory.
    """

    def __init__(
        self,
        storage: Optional[JsonStateStorage] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.storage = storage
        self.clock = clock
        self.state = LedgerState()

    @classmethod
    def open(cls, path: Path, clock: Callable[[], datetime] = datetime.now) -> "LedgerStore":
        store = cls(JsonStateStorage(path), clock=clock)
        store.load()
        return store

    # ------------------------------------------------------------------
    # persistence

    def load(self) -> None:
        blob: Dict[str, Any] = {}
        if self.storage is not None:
            try:
                blob = self.storage.load()
            except PersistenceFailure as exc:
                logger.warning("Starting from defaults: %s", exc)
        self.state = merge_with_defaults(blob)
        self.recompute()

    def save(self) -> None:
        if self.storage is None:
            return
        try:
            self.storage.save(self.to_blob())
        except PersistenceFailure as exc:
            logger.warning("State kept in memory only: %s", exc)

    def to_blob(self) -> Dict[str, Any]:
        return self.state.to_dict()

    def recompute(self) -> List[SavedRecord]:
        self.state.saved_records = compute_saved_records(
            self.state.transactions,
            self.state.budget,
            self.state.payday,
            self.clock().date(),
        )
        logger.debug("Recomputed %d saved records", len(self.state.saved_records))
        return self.state.saved_records

    def _commit(self) -> None:
        self.recompute()
        self.save()

    # ------------------------------------------------------------------
    # transactions

    @property
    def transactions(self) -> List[Transaction]:
        return list(self.state.transactions)

    def add_transaction(
        self,
        description: str,
        amount: Any,
        category: str = "",
    ) -> Transaction:
        try:
            value = to_money(amount)
        except ValueError as exc:
            raise InvalidAmount("Bitte gültigen Betrag eingeben") from exc
        if value <= 0:
            raise InvalidAmount("Bitte gültigen Betrag eingeben")

        category = (category or "").strip()
        if not category:
            category = DEFAULT_CATEGORY
        elif category not in self.state.categories:
            raise UnknownCategory(f"Unbekannte Kategorie: {category}")

        tx = Transaction(
            id=new_transaction_id(),
            description=(description or "").strip() or PLACEHOLDER_DESCRIPTION,
            amount=value,
            category=category,
            date=self.clock(),
        )
        self.state.transactions.append(tx)
        logger.info("Added transaction %s (%s, %s)", tx.id, tx.category, tx.amount)
        self._commit()
        return tx

    def delete_transaction(self, transaction_id: str) -> bool:
        before = len(self.state.transactions)
        self.state.transactions = [
            tx for tx in self.state.transactions if tx.id != transaction_id
        ]
        removed = len(self.state.transactions) != before
        if removed:
            logger.info("Deleted transaction %s", transaction_id)
        self._commit()
        return removed

    def clear_transactions(self) -> None:
        self.state.transactions = []
        logger.info("Cleared transaction history")
        self._commit()

    # ------------------------------------------------------------------
    # budget, payday and profile

    def set_budget(self, value: Any) -> Decimal:
        try:
            budget = to_money(value)
        except ValueError as exc:
            raise InvalidAmount(f"Invalid budget: {value!r}") from exc
        self.state.budget = budget
        self._commit()
        return budget

    def set_payday(self, day: Any) -> int:
        payday = validate_payday(day)
        self.state.payday = payday
        self._commit()
        return payday

    def set_name(self, name: str) -> str:
        value = normalize_name(name)
        if not value:
            raise InvalidName("Bitte Namen eingeben")
        self.state.name = value
        self._commit()
        return value

    def set_theme(self, theme: str) -> str:
        self.state.theme = (theme or "").strip() or DEFAULT_THEME
        self._commit()
        return self.state.theme

    # ------------------------------------------------------------------
    # categories; transactions keep whatever category string they were
    # created with, renames and removals never cascade

    @property
    def categories(self) -> List[str]:
        return list(self.state.categories)

    def add_category(self, name: str) -> None:
        name = (name or "").strip()
        if not name:
            raise InvalidName("Bitte Namen eingeben")
        if name in self.state.categories:
            raise DuplicateCategory(f"Kategorie existiert bereits: {name}")
        self.state.categories.append(name)
        self._commit()

    def rename_category(self, old: str, new: str) -> None:
        new = (new or "").strip()
        if not new:
            raise InvalidName("Bitte Namen eingeben")
        if old not in self.state.categories:
            raise UnknownCategory(f"Unbekannte Kategorie: {old}")
        if new == old:
            return
        if new in self.state.categories:
            raise DuplicateCategory(f"Kategorie existiert bereits: {new}")
        idx = self.state.categories.index(old)
        self.state.categories[idx] = new
        self._commit()

    def remove_category(self, name: str) -> None:
        if name not in self.state.categories:
            raise UnknownCategory(f"Unbekannte Kategorie: {name}")
        self.state.categories = [c for c in self.state.categories if c != name]
        self._commit()

    # ------------------------------------------------------------------
    # derived views

    @property
    def saved_records(self) -> List[SavedRecord]:
        return list(self.state.saved_records)

    def summary(self) -> LedgerSummary:
        return build_summary(self.state.transactions, self.state.budget)
