"""ShoppingSession: user actions that combine state updates with AI calls.

Adding an item happens in two phases:
  1. add_item() appends the task synchronously with a Pending analysis.
  2. analyze_task() runs the Analysis Gateway off the event loop and commits
     the outcome by (list_id, task_id). If the task disappeared meanwhile the
     commit is a no-op.

Gateways are plain callables so tests and alternative providers can be
swapped in.
"""
import asyncio
import logging
from typing import Callable, Optional, Union

from basket.api.api_ai import analyze_food_item, scrape_recipe
from basket.domain.Analysis import PENDING
from basket.domain.Results import GatewayFailure, GatewayResult, input_failure
from basket.domain.ShoppingList import ShoppingList
from basket.domain.Task import Task
from basket.logic.shopping.list_builder import build_list_from_recipe, new_id
from basket.logic.state.list_state import ListStore
from basket.logic.state.settings_state import SettingsStore

logger = logging.getLogger(__name__)

Analyzer = Callable[..., GatewayResult]
Extractor = Callable[[str], GatewayResult]


class ShoppingSession:
    def __init__(self, list_store: ListStore, settings_store: SettingsStore,
                 analyzer: Analyzer = analyze_food_item, extractor: Extractor = scrape_recipe):
        self.lists = list_store
        self.settings = settings_store
        self._analyzer = analyzer
        self._extractor = extractor

    # --- Items ---------------------------------------------------------------
    def add_item(self, list_id: str, title: str) -> Optional[Task]:
        """Phase one: append a pending task. Returns None for blank titles or unknown lists."""
        title = (title or "").strip()
        if not title or self.lists.get_list(list_id) is None:
            return None
        task = Task(id=new_id(), title=title, analysis=PENDING)
        if not self.lists.add_task(list_id, task):
            return None
        return task

    async def analyze_task(self, list_id: str, task_id: str) -> Optional[GatewayResult]:
        """Phase two: run the gateway for the task's current title and commit the outcome."""
        task = self.lists.get_task(list_id, task_id)
        if task is None:
            return None
        current = self.settings.settings
        result = await asyncio.to_thread(
            self._analyzer, task.title, current.health_level, current.allergies, current.suggest_vegan,
        )
        if not self.lists.set_analysis_result(list_id, task_id, result, title=task.title):
            logger.debug("Analysis for %s/%s not committed (task gone, renamed or unchanged)", list_id, task_id)
        return result

    async def add_and_analyze(self, list_id: str, title: str) -> Optional[Task]:
        task = self.add_item(list_id, title)
        if task is None:
            return None
        await self.analyze_task(list_id, task.id)
        return self.lists.get_task(list_id, task.id)

    def retry_analysis(self, list_id: str, task_id: str) -> bool:
        """Mark a task pending again so analyze_task can be scheduled for it."""
        if self.lists.get_task(list_id, task_id) is None:
            return False
        self.lists.mark_pending(list_id, task_id)
        return True

    # --- Lists ---------------------------------------------------------------
    def create_empty_list(self, name: str) -> ShoppingList:
        name = (name or "").strip()
        if not name:
            raise ValueError("List name cannot be empty")
        new_list = ShoppingList(id=new_id(), name=name)
        self.lists.add_list(new_list)
        self.settings.set_current_list(new_list.id)
        return new_list

    async def create_list_from_recipe(self, text: str) -> Union[ShoppingList, GatewayFailure]:
        """Extract ingredients and, on success only, add them as a new active list."""
        if not (text or "").strip():
            return input_failure()
        result = await asyncio.to_thread(self._extractor, text.strip())
        if not result.ok:
            logger.warning("Recipe extraction failed: %s", result.message)
            return result
        new_list = build_list_from_recipe(result.payload)
        self.lists.add_list(new_list)
        self.settings.set_current_list(new_list.id)
        return new_list
