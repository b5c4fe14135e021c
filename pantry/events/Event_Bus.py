"""Simple Event Bus / Observer implementation for pantry reminders.

Event names used so far:
  pantry.near_expiry -> payload {"item": PantryItem, "days_left": int, "window": int}
  pantry.restock -> payload {"item": PantryItem, "cheapest": PriceEntry | None}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
PANTRY_NEAR_EXPIRY = "pantry.near_expiry"
PANTRY_RESTOCK = "pantry.restock"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				# one failing observer must not stop the others or the update
				logger.exception("Error delivering %s to %r", event_name, cb)


# Process-wide instance shared by the shell and the web observers
GLOBAL_EVENT_BUS = EventBus()

__all__ = ['EventBus', 'GLOBAL_EVENT_BUS', 'PANTRY_NEAR_EXPIRY', 'PANTRY_RESTOCK']
