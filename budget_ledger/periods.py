"""Utilities for working with payday-anchored periods."""

from __future__ import annotations

from datetime import date, timedelta
from typing import List

from .errors import InvalidPayday
from .models import PeriodWindow

MIN_PAYDAY = 1
MAX_PAYDAY = 28

# Abbreviations as rendered by the de-DE locale.
MONTH_ABBREVIATIONS = (
    "Jan.",
    "Feb.",
    "März",
    "Apr.",
    "Mai",
    "Juni",
    "Juli",
    "Aug.",
    "Sept.",
    "Okt.",
    "Nov.",
    "Dez.",
)


def validate_payday(payday: object) -> int:
    """Return ``payday`` as an ``int`` or raise ``InvalidPayday``."""

    if isinstance(payday, bool):
        raise InvalidPayday(f"Payday must be a whole number, got {payday!r}")
    try:
        day = int(payday)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise InvalidPayday(f"Payday must be a whole number, got {payday!r}") from exc
    if isinstance(payday, float) and payday != day:
        raise InvalidPayday(f"Payday must be a whole number, got {payday!r}")
    if not MIN_PAYDAY <= day <= MAX_PAYDAY:
        raise InvalidPayday(f"Payday must be between {MIN_PAYDAY} and {MAX_PAYDAY}, got {day}")
    return day


def add_months(base: date, months: int) -> date:
    """Shift ``base`` by whole calendar months, keeping the day of month."""

    total_months = base.month - 1 + months
    year = base.year + total_months // 12
    month = total_months % 12 + 1
    return base.replace(year=year, month=month)


def period_start_for(day: date, payday: int) -> date:
    """Return the start of the period that contains ``day``."""

    candidate = day.replace(day=payday)
    if day >= candidate:
        return candidate
    return add_months(candidate, -1)


def period_label(start: date) -> str:
    return f"{MONTH_ABBREVIATIONS[start.month - 1]} {start.year}"


def _window(start: date) -> PeriodWindow:
    next_start = add_months(start, 1)
    return PeriodWindow(
        label=period_label(start),
        start=start,
        end=next_start - timedelta(days=1),
    )


def current_period(payday: int, today: date | None = None) -> PeriodWindow:
    """Return the period containing ``today``."""

    today = today or date.today()
    return _window(period_start_for(today, validate_payday(payday)))


def partition_periods(payday: int, earliest: date, now: date) -> List[PeriodWindow]:
    """Cover ``earliest`` .. ``now`` with contiguous monthly periods, oldest first.

    Every period starts on ``payday``; the first one contains ``earliest`` and
    the last one is the one starting on or before ``now``.
    """

    payday = validate_payday(payday)
    start = period_start_for(earliest, payday)
    periods: List[PeriodWindow] = []
    while start <= now:
        window = _window(start)
        periods.append(window)
        start = window.end + timedelta(days=1)
    return periods
