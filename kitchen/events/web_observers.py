"""Web-facing observers for ledger events.

Subscribes to every ledger event on the GLOBAL_EVENT_BUS and keeps a bounded
buffer of recent events that the HTTP layer serves from ``/api/alerts``.
Each event gets an increasing integer id so clients can poll with
``since=<last id seen>``.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, PANTRY_LOW_STOCK, RECEIPT_RECONCILED, SHOPPING_LIST_GENERATED,
    BUDGET_WARNING, BUDGET_EXCEEDED,
)

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False

_WATCHED = (PANTRY_LOW_STOCK, RECEIPT_RECONCILED, SHOPPING_LIST_GENERATED, BUDGET_WARNING, BUDGET_EXCEEDED)


def _record(event_name: str, payload: Any):
    global _next_id
    evt: Dict[str, Any] = {
        'type': event_name,
        'ts': datetime.now(timezone.utc).isoformat(),
    }
    if isinstance(payload, dict):
        for k, v in payload.items():
            if k == 'item':
                # entities are flattened so the buffer stays JSON-friendly
                evt['name'] = getattr(v, 'name', '')
                evt['unit'] = getattr(v, 'unit', '')
                evt['quantity'] = getattr(v, 'quantity', '')
            else:
                evt[k] = v
    with _lock:
        evt['id'] = _next_id
        _next_id += 1
        _events.append(evt)
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]
    logger.debug("Recorded event %s #%s", event_name, evt['id'])


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in _WATCHED:
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), plus the cursor for the next poll."""
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events', 'MAX_EVENTS']
