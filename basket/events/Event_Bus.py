"""Simple Event Bus / Observer implementation for state change notifications.

Event names used so far:
  lists.changed    -> payload: tuple[ShoppingList, ...] (the new snapshot)
  settings.changed -> payload: Settings (the new snapshot)

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
LISTS_CHANGED = "lists.changed"
SETTINGS_CHANGED = "settings.changed"

Subscriber = Callable[[str, Any], None]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Subscriber]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: Subscriber):
        if callback not in self._subscribers[event_name]:
            self._subscribers[event_name].append(callback)

    def unsubscribe(self, event_name: str, callback: Subscriber):
        try:
            self._subscribers[event_name].remove(callback)
        except (ValueError, KeyError):
            pass

    def subscriber_count(self, event_name: str) -> int:
        return len(self._subscribers.get(event_name, []))

    def publish(self, event_name: str, payload: Any):
        for cb in list(self._subscribers.get(event_name, [])):
            try:
                cb(event_name, payload)
            except Exception:
                logger.exception("Error delivering %s to %r", event_name, cb)


__all__ = ['EventBus', 'Subscriber', 'LISTS_CHANGED', 'SETTINGS_CHANGED']
