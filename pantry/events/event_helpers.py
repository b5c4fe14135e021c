"""Event helper utilities.

Publishes reminder events for items that have just entered the soon-to-expire
or restock sets.
"""
from __future__ import annotations
from typing import Iterable, Optional, Tuple

from pantry.domain.PantryItem import PantryItem
from .Event_Bus import EventBus, GLOBAL_EVENT_BUS, PANTRY_NEAR_EXPIRY, PANTRY_RESTOCK

__all__ = ['publish_near_expiry', 'publish_restock', 'publish_new_reminders']


def publish_near_expiry(item: PantryItem, days_left: int, window: int, bus: Optional[EventBus] = None):
    """Publish a pantry.near_expiry event."""
    (bus or GLOBAL_EVENT_BUS).publish(PANTRY_NEAR_EXPIRY, {
        'item': item,
        'days_left': days_left,
        'window': window,
    })


def publish_restock(item: PantryItem, cheapest=None, bus: Optional[EventBus] = None):
    """Publish a pantry.restock event."""
    (bus or GLOBAL_EVENT_BUS).publish(PANTRY_RESTOCK, {
        'item': item,
        'cheapest': cheapest,
    })


def publish_new_reminders(before: Tuple[Iterable[Tuple[PantryItem, int]], Iterable[PantryItem]],
                          after: Tuple[Iterable[Tuple[PantryItem, int]], Iterable[PantryItem]],
                          *, window: int, price_lookup=None, bus: Optional[EventBus] = None) -> int:
    """Publish events for reminders present in ``after`` but not in ``before``.

    Both arguments are (expiring, restock) pairs as returned by
    compute_reminders. Returns the number of events published.
    """
    expiring_before = {item.id for item, _ in before[0]}
    restock_before = {item.id for item in before[1]}
    published = 0
    for item, days_left in after[0]:
        if item.id not in expiring_before:
            publish_near_expiry(item, days_left, window, bus=bus)
            published += 1
    for item in after[1]:
        if item.id not in restock_before:
            cheapest = price_lookup(item.name) if price_lookup else None
            publish_restock(item, cheapest, bus=bus)
            published += 1
    return published
