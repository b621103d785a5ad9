"""Persistence of the ledger state as a single JSON blob."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

from .errors import PersistenceFailure
from .models import (
    DEFAULT_CATEGORIES,
    DEFAULT_PAYDAY,
    DEFAULT_THEME,
    LedgerState,
    SavedRecord,
    Transaction,
    to_money,
)
from .periods import validate_payday

logger = logging.getLogger(__name__)


class JsonStateStorage:
    """Reads and writes the whole ledger snapshot at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
            raise PersistenceFailure(f"Could not read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceFailure(f"Unexpected state layout in {self.path}")
        return data

    def save(self, blob: Dict[str, Any]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as handle:
                json.dump(blob, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceFailure(f"Could not write {self.path}: {exc}") from exc


def _load_transactions(raw: Any) -> List[Transaction]:
    if not isinstance(raw, list):
        return []
    transactions: List[Transaction] = []
    for item in raw:
        try:
            transactions.append(Transaction.from_dict(item))
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.warning("Skipping unreadable transaction: %r", item)
    return transactions


def _load_saved_records(raw: Any) -> List[SavedRecord]:
    if not isinstance(raw, list):
        return []
    records: List[SavedRecord] = []
    for item in raw:
        try:
            records.append(SavedRecord.from_dict(item))
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.debug("Dropping unreadable saved record: %r", item)
    return records


def merge_with_defaults(blob: Dict[str, Any]) -> LedgerState:
    """Overlay persisted fields on a default state, field by field.

    Missing or malformed fields keep their default, so blobs written before a
    field existed still load. An empty category list is reseeded.
    """

    state = LedgerState()

    if isinstance(blob.get("name"), str):
        state.name = blob["name"]
    if "budget" in blob:
        try:
            state.budget = to_money(blob["budget"] or 0)
        except ValueError:
            logger.warning("Ignoring unreadable budget: %r", blob["budget"])
    state.transactions = _load_transactions(blob.get("transactions"))

    categories = blob.get("categories")
    if isinstance(categories, list):
        state.categories = [str(c) for c in categories if str(c).strip()]
    if not state.categories:
        state.categories = list(DEFAULT_CATEGORIES)

    state.theme = str(blob.get("theme") or DEFAULT_THEME)
    try:
        state.payday = validate_payday(blob.get("payday", DEFAULT_PAYDAY))
    except ValueError:
        logger.warning("Ignoring invalid payday: %r", blob.get("payday"))
        state.payday = DEFAULT_PAYDAY
    state.saved_records = _load_saved_records(blob.get("savedRecords"))
    return state
