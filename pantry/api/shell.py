"""Hosting shell: owns the current PantryState and performs every side effect.

Handlers never mutate state directly. They call one of the action methods
below, which applies a pure update function, persists the values that
changed, and publishes reminder events for newly triggered items.
"""
from __future__ import annotations
import logging
import threading
from datetime import date
from typing import Callable, Dict, List, Optional

from pantry.domain.PantryState import PantryState
from pantry.domain.PriceEntry import PriceEntry
from pantry.domain.Recipe import Recipe
from pantry.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from pantry.events.event_helpers import publish_new_reminders
from pantry.infra.Inventory_Repository import load_inventory, load_user, save_inventory, save_user
from pantry.infra.Recipe_Repository import find_recipe
from pantry.infra.Storage import JsonKeyValueStore
from pantry.infra.identity import CredentialError, IdentityProvider
from pantry.infra.scanner import CodeScanner, ScanError, ScannerUnsupported, ZXingScanner
from pantry.logic.prices.lookup import get_cheapest_store_for
from pantry.logic.recipes.suggestions import RecipeNotCookable, get_recipe_suggestions
from pantry.logic.reminders.analysis import compute_reminders
from pantry.logic.state import updates
from pantry.utilities.config import EXPIRY_WINDOW_DAYS, USE_DECREMENT
from pantry.utilities.constants import SCAN_FAILED, SCAN_UNSUPPORTED
from pantry.utilities.validators import ItemInput

logger = logging.getLogger(__name__)


class PantryShell:
    def __init__(self, store: JsonKeyValueStore, recipes: List[Recipe], prices: Dict[str, List[PriceEntry]],
                 identity: IdentityProvider, *, scanner_factory: Callable[[], CodeScanner] = ZXingScanner,
                 bus: Optional[EventBus] = None, window: int = EXPIRY_WINDOW_DAYS, step: int = USE_DECREMENT,
                 today: Callable[[], date] = date.today):
        self.store = store
        self.recipes = list(recipes)
        self.prices = prices
        self.identity = identity
        self.window = window
        self.step = step
        self._scanner_factory = scanner_factory
        self._scanner: Optional[CodeScanner] = None
        self._bus = bus or GLOBAL_EVENT_BUS
        self._today = today
        self._lock = threading.Lock()
        self._scan_session = 0
        self.state = PantryState(items=load_inventory(store), user=load_user(store))
        logger.info("Loaded %d pantry items (signed in: %s)", len(self.state.items), self.state.user is not None)

    # --- Core loop ----------------------------------------------------------
    def dispatch(self, update, *args, **kwargs) -> PantryState:
        """Apply an update function and persist whatever it changed.

        Updates are serialized so concurrent requests never lose a change or
        write an older inventory over a newer one.
        """
        with self._lock:
            before = self.state
            after = update(before, *args, **kwargs)
            self.state = after
            if after.items != before.items:
                save_inventory(self.store, after.items)
            if after.user != before.user:
                save_user(self.store, after.user)
        if after.items != before.items:
            self._publish_reminders(before, after)
        return after

    def _publish_reminders(self, before: PantryState, after: PantryState):
        today = self._today()
        publish_new_reminders(
            compute_reminders(before.items, window=self.window, today=today),
            compute_reminders(after.items, window=self.window, today=today),
            window=self.window,
            price_lookup=self.cheapest_store_for,
            bus=self._bus,
        )

    # --- Derived views -----------------------------------------------------
    def cheapest_store_for(self, item_name: str) -> Optional[PriceEntry]:
        return get_cheapest_store_for(item_name, self.prices)

    def reminders(self):
        return compute_reminders(self.state.items, window=self.window, today=self._today())

    def suggestions(self):
        return get_recipe_suggestions(self.recipes, self.state.items)

    def find_recipe(self, name: str) -> Optional[Recipe]:
        return find_recipe(self.recipes, name)

    # --- Actions -------------------------------------------------------------
    def add_item(self, data: ItemInput) -> PantryState:
        return self.dispatch(updates.add_item, data.name, data.quantity, data.expirationDate,
                             data.barcode, data.regular)

    def use_item(self, item_id: str) -> PantryState:
        return self.dispatch(updates.use_item, item_id, step=self.step)

    def delete_item(self, item_id: str) -> PantryState:
        return self.dispatch(updates.delete_item, item_id)

    def cook(self, recipe: Recipe) -> bool:
        """Cook a recipe; returns False (state unchanged) when it is not cookable."""
        try:
            self.dispatch(updates.cook_recipe, recipe, step=self.step)
        except RecipeNotCookable as e:
            logger.warning("%s", e)
            return False
        return True

    def sign_in(self, credential: str) -> bool:
        """Decode an identity credential and sign the user in; False when it is rejected."""
        try:
            user = self.identity.decode_credential(credential)
        except CredentialError as e:
            logger.error("Failed to decode credential: %s", e)
            return False
        self.dispatch(updates.sign_in, user)
        logger.info("Signed in %s", user.display_name)
        return True

    def sign_out(self) -> PantryState:
        return self.dispatch(updates.sign_out)

    def start_scan(self, draft: Optional[Dict[str, str]] = None) -> PantryState:
        def _start(state):
            self._scan_session += 1
            return updates.start_scan(state, draft)

        self.dispatch(_start)
        if self._scanner is None:
            try:
                self._scanner = self._scanner_factory()
            except ScannerUnsupported as e:
                logger.error("Barcode reader init failed: %s", e)
                return self.dispatch(updates.scan_failed, SCAN_UNSUPPORTED)
        return self.state

    async def scan_frame(self, frame: bytes) -> Optional[str]:
        """Decode one frame for the running session.

        Returns the decoded code, or None when the frame holds no code, scanning
        failed, no session is running, or the session was stopped (or
        restarted) while the frame was decoding. Only a frame without a code
        leaves the session running.
        """
        if not self.state.scan.scanning or self._scanner is None:
            logger.info("Ignoring frame: no scan in progress")
            return None
        session = self._scan_session
        try:
            code = await self._scanner.decode_once(frame)
        except ScanError as e:
            logger.error("Scan failed: %s", e)
            self.dispatch(self._for_session(session, updates.scan_failed), SCAN_FAILED)
            return None
        if code is None:
            return None
        applied = []
        self.dispatch(self._for_session(session, updates.scan_succeeded, applied), code)
        if not applied:
            logger.info("Discarding scan result %r: session was stopped", code)
            return None
        return code

    def stop_scan(self) -> PantryState:
        return self.dispatch(updates.stop_scan)

    def _for_session(self, session: int, update, applied: Optional[list] = None):
        """Wrap a scan update so it only applies to the session that sent the frame."""
        def _apply(state, *args):
            if not state.scan.scanning or session != self._scan_session:
                return state
            if applied is not None:
                applied.append(session)
            return update(state, *args)
        return _apply
