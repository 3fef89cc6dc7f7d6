from __future__ import annotations

from datetime import date, datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now()


def month_label(day: date) -> str:
    """Month label used on payments, e.g. ``October 2026``."""
    return day.strftime("%B %Y")


def weekday_name(day: date) -> str:
    return day.strftime("%A")
