"""Pure update functions: each takes a PantryState and returns the next one.

None of these functions touch storage; the hosting shell persists whatever
changed after applying them.
"""
from __future__ import annotations
from datetime import date
from typing import Dict, Optional

from pantry.domain.PantryItem import PantryItem, generate_id
from pantry.domain.PantryState import PantryState, ScanSession
from pantry.domain.Recipe import Recipe
from pantry.domain.User import User
from pantry.logic.recipes.suggestions import consume_ingredients
from pantry.utilities.config import USE_DECREMENT
from pantry.utilities.constants import SCAN_FAILED, SCAN_SUCCESS_TEMPLATE

__all__ = [
    "add_item", "use_item", "delete_item", "cook_recipe",
    "sign_in", "sign_out",
    "start_scan", "scan_succeeded", "scan_failed", "stop_scan",
]


# --- Inventory -------------------------------------------------------------
def add_item(state: PantryState, name: str, quantity: int = 1, expiration_date: Optional[date] = None,
             barcode: Optional[str] = None, regular: bool = False) -> PantryState:
    name = (name or "").strip()
    if not name:
        return state
    item = PantryItem(generate_id(), name, quantity, expiration_date, barcode, regular)
    # Submitting the form consumes the pre-filled scan result
    return state.replace(items=state.items + (item,), scan=state.scan.replace(code=None, draft=None))


def use_item(state: PantryState, item_id: str, *, step: int = USE_DECREMENT) -> PantryState:
    item = state.get_item(item_id)
    if item is None or item.quantity <= 0:
        return state
    used = item.with_quantity(max(item.quantity - step, 0))
    return state.replace(items=tuple(used if i.id == item_id else i for i in state.items))


def delete_item(state: PantryState, item_id: str) -> PantryState:
    remaining = tuple(i for i in state.items if i.id != item_id)
    if len(remaining) == len(state.items):
        return state
    return state.replace(items=remaining)


def cook_recipe(state: PantryState, recipe: Recipe, *, step: int = USE_DECREMENT) -> PantryState:
    """Consume one portion of every ingredient; raises RecipeNotCookable if any is missing."""
    return state.replace(items=consume_ingredients(recipe, state.items, step=step))


# --- Identity --------------------------------------------------------------
def sign_in(state: PantryState, user: User) -> PantryState:
    return state.replace(user=user)


def sign_out(state: PantryState) -> PantryState:
    if state.user is None:
        return state
    return state.replace(user=None)


# --- Barcode scanning ------------------------------------------------------
def start_scan(state: PantryState, draft: Optional[Dict[str, str]] = None) -> PantryState:
    """Open the scanner, keeping what was already typed into the add form."""
    kept = {k: v for k, v in (draft or {}).items() if v}
    return state.replace(scan=ScanSession(panel_open=True, scanning=True, code=state.scan.code, draft=kept))


def scan_succeeded(state: PantryState, code: str) -> PantryState:
    return state.replace(scan=ScanSession(
        panel_open=False,
        scanning=False,
        status=SCAN_SUCCESS_TEMPLATE.format(code=code),
        code=code,
        draft=state.scan.draft,
    ))


def scan_failed(state: PantryState, message: str = SCAN_FAILED) -> PantryState:
    # The panel stays visible so the message can be read
    return state.replace(scan=state.scan.replace(panel_open=True, scanning=False, status=message))


def stop_scan(state: PantryState) -> PantryState:
    return state.replace(scan=ScanSession(code=state.scan.code, draft=state.scan.draft))
