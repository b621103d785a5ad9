"""Exceptions raised by the budget ledger."""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for user-facing ledger failures."""


class InvalidAmount(LedgerError, ValueError):
    pass


class InvalidPayday(LedgerError, ValueError):
    pass


class InvalidName(LedgerError, ValueError):
    pass


class DuplicateCategory(LedgerError):
    pass


class UnknownCategory(LedgerError, KeyError):
    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class EmptyExport(LedgerError):
    pass


class PersistenceFailure(LedgerError):
    """Reading or writing the state blob failed; the ledger keeps running in memory."""
