"""Settings State container.

Loads Settings once from the repository, persists on every change and
publishes settings.changed with the new snapshot.
"""
import logging
from threading import Lock
from typing import Iterable, Optional

from basket.domain.Settings import Settings, normalize_allergies
from basket.events.Event_Bus import EventBus, SETTINGS_CHANGED
from basket.infra.Settings_Repository import SettingsRepository
from basket.utilities.constants import HEALTH_LEVELS

logger = logging.getLogger(__name__)


class SettingsStore:
    def __init__(self, repository: Optional[SettingsRepository] = None, event_bus: Optional[EventBus] = None):
        self._repository = repository or SettingsRepository()
        self._event_bus = event_bus or EventBus()
        self._lock = Lock()
        self._settings = self._repository.load()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    def subscribe(self, callback):
        self._event_bus.subscribe(SETTINGS_CHANGED, callback)

    def unsubscribe(self, callback):
        self._event_bus.unsubscribe(SETTINGS_CHANGED, callback)

    def _commit(self, **changes) -> Settings:
        with self._lock:
            current = self._settings
            updated = current.with_changes(**changes)
            if updated == current:
                return current
            self._settings = updated
            try:
                self._repository.save(updated)
            except OSError:
                logger.exception("Failed to persist settings")
        self._event_bus.publish(SETTINGS_CHANGED, updated)
        return updated

    # --- Setters -------------------------------------------------------------
    @staticmethod
    def _check_health_level(level):
        if isinstance(level, bool) or level not in HEALTH_LEVELS:
            raise ValueError(f"Health level must be one of {HEALTH_LEVELS}: {level!r}")

    @staticmethod
    def _check_list_id(list_id):
        if not list_id:
            raise ValueError("List id cannot be empty")

    def set_health_level(self, level: int) -> Settings:
        self._check_health_level(level)
        return self._commit(health_level=level)

    def set_allergies(self, allergies: Iterable[str]) -> Settings:
        return self._commit(allergies=normalize_allergies(allergies))

    def add_allergy(self, allergy: str) -> Settings:
        return self.set_allergies(self._settings.allergies + (allergy,))

    def remove_allergy(self, allergy: str) -> Settings:
        return self.set_allergies(a for a in self._settings.allergies if a != allergy.strip())

    def set_suggest_vegan(self, suggest: bool) -> Settings:
        return self._commit(suggest_vegan=bool(suggest))

    def set_current_list(self, list_id: str) -> Settings:
        self._check_list_id(list_id)
        return self._commit(current_list=list_id)

    def update(self, health_level=None, allergies=None, suggest_vegan=None, current_list=None) -> Settings:
        '''Partial update committed as one change; None means "leave unchanged".

        Every field is validated before anything is applied, so a bad value
        leaves the settings untouched.
        '''
        changes = {}
        if health_level is not None:
            self._check_health_level(health_level)
            changes["health_level"] = health_level
        if allergies is not None:
            changes["allergies"] = normalize_allergies(allergies)
        if suggest_vegan is not None:
            changes["suggest_vegan"] = bool(suggest_vegan)
        if current_list is not None:
            self._check_list_id(current_list)
            changes["current_list"] = current_list
        if not changes:
            return self._settings
        return self._commit(**changes)
