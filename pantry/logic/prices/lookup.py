"""Cheapest-store lookup over the static price table."""
from typing import Dict, List, Optional

from pantry.domain.PriceEntry import PriceEntry

__all__ = ["get_cheapest_store_for"]


def get_cheapest_store_for(item_name: str, price_table: Dict[str, List[PriceEntry]]) -> Optional[PriceEntry]:
    """Return the lowest-priced entry for an item, or None when the item has no prices.

    The table is keyed by lowercase item name. Ties keep the first entry listed.
    """
    entries = price_table.get(item_name.lower())
    if not entries:
        return None
    cheapest = entries[0]
    for entry in entries[1:]:
        if entry.price < cheapest.price:
            cheapest = entry
    return cheapest
