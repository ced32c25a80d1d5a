"""List State: pure transitions over an immutable snapshot plus the ListStore container.

A snapshot is a tuple of ShoppingList. Every transition returns a new
snapshot and never mutates its input; when nothing changes (unknown list or
task, duplicate id, rejected removal) the very same snapshot object is
returned, which is how ListStore decides whether to notify subscribers.

Lookup misses are silent no-ops: an analysis completing after its task was
removed is an expected race, not an error.
"""
from __future__ import annotations
import logging
from threading import Lock
from typing import Callable, Optional, Tuple

from basket.domain.Analysis import (
    AnalysisResult, Completed, Failed, NOT_ANALYZED, PENDING,
)
from basket.domain.Results import GatewayFailure, GatewaySuccess
from basket.domain.ShoppingList import ShoppingList
from basket.domain.Task import Task
from basket.events.Event_Bus import EventBus, LISTS_CHANGED
from basket.utilities.constants import DEFAULT_LIST_NAME, DEFAULT_SHOPPING_LIST
from basket.utilities.validators import HealthResponse

logger = logging.getLogger(__name__)

Lists = Tuple[ShoppingList, ...]


def initial_lists() -> Lists:
    return (ShoppingList(id=DEFAULT_SHOPPING_LIST, name=DEFAULT_LIST_NAME),)


# --- Lookups ---------------------------------------------------------------
def find_list(lists: Lists, list_id: str) -> Optional[ShoppingList]:
    for lst in lists:
        if lst.id == list_id:
            return lst
    return None


def find_task(lists: Lists, list_id: str, task_id: str) -> Optional[Task]:
    lst = find_list(lists, list_id)
    return lst.get_task(task_id) if lst else None


def fallback_list_id(lists: Lists) -> str:
    """Reserved list when present, otherwise the first remaining list."""
    if find_list(lists, DEFAULT_SHOPPING_LIST) or not lists:
        return DEFAULT_SHOPPING_LIST
    return lists[0].id


# --- Internal helpers ------------------------------------------------------
def _update_list(lists: Lists, list_id: str, fn: Callable[[ShoppingList], ShoppingList]) -> Lists:
    for i, lst in enumerate(lists):
        if lst.id == list_id:
            updated = fn(lst)
            if updated is lst:
                return lists
            return lists[:i] + (updated,) + lists[i + 1:]
    logger.debug("List %s not found; ignoring update", list_id)
    return lists


def _update_task(lists: Lists, list_id: str, task_id: str, fn: Callable[[Task], Task]) -> Lists:
    def apply(lst: ShoppingList) -> ShoppingList:
        for i, task in enumerate(lst.tasks):
            if task.id == task_id:
                updated = fn(task)
                if updated == task:
                    return lst
                return lst.with_tasks(lst.tasks[:i] + (updated,) + lst.tasks[i + 1:])
        logger.debug("Task %s not found in list %s; ignoring update", task_id, list_id)
        return lst
    return _update_list(lists, list_id, apply)


def _analysis_from_result(result):
    if isinstance(result, GatewayFailure):
        return Failed(result.message)
    if isinstance(result, GatewaySuccess):
        result = result.payload
    if not isinstance(result, HealthResponse):
        result = HealthResponse.model_validate(result)
    return Completed(AnalysisResult.from_health_response(result))


# --- Transitions -----------------------------------------------------------
def add_task(lists: Lists, list_id: str, task: Task) -> Lists:
    def apply(lst):
        if lst.has_task(task.id):
            logger.warning("Task id %s already exists in list %s; not added", task.id, list_id)
            return lst
        return lst.with_tasks(lst.tasks + (task,))
    return _update_list(lists, list_id, apply)


def remove_task(lists: Lists, list_id: str, task_id: str) -> Lists:
    def apply(lst):
        if not lst.has_task(task_id):
            return lst
        return lst.with_tasks(t for t in lst.tasks if t.id != task_id)
    return _update_list(lists, list_id, apply)


def toggle_task_checked(lists: Lists, list_id: str, task_id: str) -> Lists:
    def apply(task):
        if task.checked:
            # Unchecking invalidates the previous analysis
            return task.with_changes(checked=False, analysis=NOT_ANALYZED)
        return task.with_changes(checked=True)
    return _update_task(lists, list_id, task_id, apply)


def mark_pending(lists: Lists, list_id: str, task_id: str) -> Lists:
    return _update_task(lists, list_id, task_id, lambda t: t.with_changes(analysis=PENDING))


def set_analysis_result(lists: Lists, list_id: str, task_id: str, result,
                        title: Optional[str] = None) -> Lists:
    """Commit a gateway outcome into the task keyed by (list_id, task_id).

    result is a HealthResponse (or GatewaySuccess wrapping one) or a
    GatewayFailure marker. When title is given the result is only committed
    if the task still carries that title.
    """
    task = find_task(lists, list_id, task_id)
    if task is None:
        logger.info("Dropping analysis result for missing task %s/%s", list_id, task_id)
        return lists
    if title is not None and task.title != title:
        logger.info("Dropping analysis of %r for task %s/%s, now titled %r", title, list_id, task_id, task.title)
        return lists
    analysis = _analysis_from_result(result)
    return _update_task(lists, list_id, task_id, lambda t: t.with_changes(analysis=analysis))


def add_list(lists: Lists, new_list: ShoppingList) -> Lists:
    if find_list(lists, new_list.id):
        logger.warning("List id %s already exists; not added", new_list.id)
        return lists
    return lists + (new_list,)


def remove_list(lists: Lists, list_id: str) -> Lists:
    if find_list(lists, list_id) is None:
        return lists
    if len(lists) <= 1:
        logger.info("Refusing to remove %s: at least one list must remain", list_id)
        return lists
    return tuple(lst for lst in lists if lst.id != list_id)


def replace_task_title(lists: Lists, list_id: str, task_id: str, new_title: str) -> Lists:
    return _update_task(
        lists, list_id, task_id,
        lambda t: t.with_changes(title=new_title, analysis=NOT_ANALYZED),
    )


def clear_suggestion(lists: Lists, list_id: str, task_id: str) -> Lists:
    return _update_task(lists, list_id, task_id, lambda t: t.with_changes(analysis=NOT_ANALYZED))


# --- Container ---------------------------------------------------------------
class ListStore:
    """Owns the current List State snapshot and notifies subscribers on change.

    Each method applies one named transition atomically and returns True when
    the snapshot changed. remove_list also keeps the active list in the
    SettingsStore pointing at an existing list.
    """

    def __init__(self, settings_store=None, lists: Optional[Lists] = None, event_bus: Optional[EventBus] = None):
        self._settings_store = settings_store
        self._event_bus = event_bus or EventBus()
        self._lock = Lock()
        self._lists: Lists = tuple(lists) if lists else initial_lists()

    @property
    def lists(self) -> Lists:
        return self._lists

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    def subscribe(self, callback):
        self._event_bus.subscribe(LISTS_CHANGED, callback)

    def unsubscribe(self, callback):
        self._event_bus.unsubscribe(LISTS_CHANGED, callback)

    def get_list(self, list_id: str) -> Optional[ShoppingList]:
        return find_list(self._lists, list_id)

    def get_task(self, list_id: str, task_id: str) -> Optional[Task]:
        return find_task(self._lists, list_id, task_id)

    def _apply(self, transition, *args) -> bool:
        with self._lock:
            current = self._lists
            updated = transition(current, *args)
            if updated is current:
                return False
            self._lists = updated
        self._event_bus.publish(LISTS_CHANGED, updated)
        return True

    def add_task(self, list_id: str, task: Task) -> bool:
        return self._apply(add_task, list_id, task)

    def remove_task(self, list_id: str, task_id: str) -> bool:
        return self._apply(remove_task, list_id, task_id)

    def toggle_task_checked(self, list_id: str, task_id: str) -> bool:
        return self._apply(toggle_task_checked, list_id, task_id)

    def mark_pending(self, list_id: str, task_id: str) -> bool:
        return self._apply(mark_pending, list_id, task_id)

    def set_analysis_result(self, list_id: str, task_id: str, result, title: Optional[str] = None) -> bool:
        return self._apply(set_analysis_result, list_id, task_id, result, title)

    def add_list(self, new_list: ShoppingList) -> bool:
        return self._apply(add_list, new_list)

    def remove_list(self, list_id: str) -> bool:
        removed = self._apply(remove_list, list_id)
        if removed and self._settings_store is not None:
            if self._settings_store.settings.current_list == list_id:
                self._settings_store.set_current_list(fallback_list_id(self._lists))
        return removed

    def replace_task_title(self, list_id: str, task_id: str, new_title: str) -> bool:
        return self._apply(replace_task_title, list_id, task_id, new_title)

    def clear_suggestion(self, list_id: str, task_id: str) -> bool:
        return self._apply(clear_suggestion, list_id, task_id)

    def ensure_current_list(self) -> str:
        """Point the active list at an existing list (lists are not persisted)."""
        if self._settings_store is None:
            return fallback_list_id(self._lists)
        current = self._settings_store.settings.current_list
        if find_list(self._lists, current) is None:
            fallback = fallback_list_id(self._lists)
            logger.info("Active list %s does not exist; switching to %s", current, fallback)
            self._settings_store.set_current_list(fallback)
            return fallback
        return current
