"""Inventory and user persistence on top of the key-value store.

Loading never raises: malformed stored data is logged and replaced by the
empty default, so a corrupt file cannot keep the app from starting.
"""
import json
import logging
from typing import List, Optional

from pantry.domain.PantryItem import PantryItem
from pantry.domain.User import User
from pantry.infra.Storage import JsonKeyValueStore
from pantry.utilities.constants import INVENTORY_KEY, USER_KEY

logger = logging.getLogger(__name__)


def load_inventory(store: JsonKeyValueStore) -> List[PantryItem]:
    """Load pantry items from the store (empty list when missing or malformed)."""
    try:
        raw = store.get_item(INVENTORY_KEY)
        if not raw:
            return []
        data = json.loads(raw)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ValueError(f"expected a list, got {type(data).__name__}")
        return [PantryItem.from_dict(entry) for entry in data]
    except (OSError, ValueError) as e:
        # json.JSONDecodeError is a ValueError
        logger.warning("Unable to parse stored inventory: %s", e)
        return []


def save_inventory(store: JsonKeyValueStore, items) -> None:
    store.set_item(INVENTORY_KEY, json.dumps([item.to_dict() for item in items], ensure_ascii=False, indent=2))


def load_user(store: JsonKeyValueStore) -> Optional[User]:
    """Load the signed-in user from the store (None when missing or malformed)."""
    try:
        raw = store.get_item(USER_KEY)
        if not raw:
            return None
        data = json.loads(raw)
        if data is None:
            return None
        return User.from_dict(data)
    except (OSError, ValueError) as e:
        logger.warning("Unable to parse stored user: %s", e)
        return None


def save_user(store: JsonKeyValueStore, user: Optional[User]) -> None:
    '''Stores the user record, or removes it on sign-out.'''
    if user is None:
        store.remove_item(USER_KEY)
    else:
        store.set_item(USER_KEY, json.dumps(user.to_dict(), ensure_ascii=False))
