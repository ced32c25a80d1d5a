"""Web-facing observer for store change events.

Subscribes to the list and settings buses and keeps a lightweight in-memory
ring buffer of recent changes so HTTP clients can poll for analysis
completions without refetching everything.

Design:
  * Each event gets an auto-increment integer id (cursor); clients ask only
    for newer events with since=<last_id_seen>.
  * A Lock guards the buffer since background analyses commit from worker
    threads as well as the event loop.
  * MAX_EVENTS caps memory use.
"""
from __future__ import annotations
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import EventBus, LISTS_CHANGED, SETTINGS_CHANGED

MAX_EVENTS = 300


class ChangeFeed:
    def __init__(self, max_events: int = MAX_EVENTS):
        self._lock = Lock()
        self._events: List[Dict[str, Any]] = []
        self._next_id = 1
        self._max_events = max_events

    def record(self, event_name: str, payload: Any):  # signature expected by EventBus
        evt: Dict[str, Any] = {
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat(),
        }
        if event_name == LISTS_CHANGED:
            evt['lists'] = [lst.to_dict() for lst in payload]
        elif event_name == SETTINGS_CHANGED:
            evt['settings'] = payload.to_dict()
        with self._lock:
            evt['id'] = self._next_id
            self._next_id += 1
            self._events.append(evt)
            if len(self._events) > self._max_events:
                del self._events[: len(self._events) - self._max_events]

    def attach(self, list_bus: EventBus, settings_bus: EventBus):
        """Idempotent: EventBus ignores a callback subscribed twice."""
        list_bus.subscribe(LISTS_CHANGED, self.record)
        settings_bus.subscribe(SETTINGS_CHANGED, self.record)
        return self

    def get_events(self, since: int | None = None) -> Dict[str, Any]:
        """Return events newer than 'since' (exclusive).

        If since is None, returns the whole buffer. The response includes
        next_cursor (largest id) so the client can poll with since=next_cursor.
        """
        with self._lock:
            if since is None:
                data = list(self._events)
            else:
                data = [e for e in self._events if e['id'] > since]
            next_cursor = self._events[-1]['id'] if self._events else since or 0
        return {'events': data, 'next_cursor': next_cursor}


__all__ = ['ChangeFeed', 'MAX_EVENTS']
