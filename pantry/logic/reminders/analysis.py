"""Pantry reminder derivations: items about to expire and regular items to restock."""
from __future__ import annotations
from datetime import date as _date
from typing import Iterable, List, Optional, Tuple

from pantry.domain.PantryItem import PantryItem
from pantry.utilities.config import EXPIRY_WINDOW_DAYS

__all__ = ["days_between", "compute_expiring_soon", "compute_restock", "compute_reminders"]


def days_between(start: _date, end: _date) -> int:
    """Whole calendar days from start to end (negative when end is earlier)."""
    return (end - start).days


def compute_expiring_soon(items: Iterable[PantryItem], *, window: int | None = None,
                          today: Optional[_date] = None) -> List[Tuple[PantryItem, int]]:
    """Return (item, days_left) for items expiring in <= window days (including already expired).

    Items keep their input order.
    """
    expiring_window = window if window is not None else EXPIRY_WINDOW_DAYS
    today = today or _date.today()
    result: List[Tuple[PantryItem, int]] = []
    for item in items:
        if not item.expiration_date:
            continue
        days_left = days_between(today, item.expiration_date)
        if days_left <= expiring_window:
            result.append((item, days_left))
    return result


def compute_restock(items: Iterable[PantryItem]) -> List[PantryItem]:
    """Return regular items whose quantity has run out."""
    return [item for item in items if item.regular and item.quantity <= 0]


def compute_reminders(items: Iterable[PantryItem], *, window: int | None = None,
                      today: Optional[_date] = None):
    items = list(items)
    return compute_expiring_soon(items, window=window, today=today), compute_restock(items)
