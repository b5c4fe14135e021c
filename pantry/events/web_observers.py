"""Web-facing observers for pantry reminder events.

This module subscribes to the GLOBAL_EVENT_BUS for:
  - pantry.near_expiry
  - pantry.restock

and stores a lightweight in-memory ring buffer of recent events that the web
layer serves at /api/pantry/alerts, so the page can show new reminders
without a full reload.

Each event is stored with an auto-increment integer id (cursor) so clients
can request only newer events (since=<last_id_seen>). A MAX_EVENTS cap keeps
memory bounded.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import GLOBAL_EVENT_BUS, PANTRY_NEAR_EXPIRY, PANTRY_RESTOCK

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300  # keep a few hundred recent events
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        }
        if isinstance(payload, dict):
            item = payload.get('item')
            if item is not None:
                evt['item_id'] = item.id
                evt['name'] = item.name
                evt['quantity'] = item.quantity
            if 'days_left' in payload:
                evt['days_left'] = payload['days_left']
            cheapest = payload.get('cheapest')
            if cheapest is not None:
                evt['store'] = cheapest.store
                evt['price'] = cheapest.price
        _events.append(evt)
        _next_id += 1
        # Trim buffer
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    GLOBAL_EVENT_BUS.subscribe(PANTRY_NEAR_EXPIRY, _record)
    GLOBAL_EVENT_BUS.subscribe(PANTRY_RESTOCK, _record)
    _started = True
    logger.info("Web observers for pantry reminders started")


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive).

    If since is None, returns the buffered backlog. The response includes
    next_cursor (largest id) so clients can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events', 'MAX_EVENTS']
