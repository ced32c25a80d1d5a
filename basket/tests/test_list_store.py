import os
import tempfile
import unittest

from basket.domain.Analysis import PENDING
from basket.domain.Results import GatewaySuccess
from basket.domain.ShoppingList import ShoppingList
from basket.domain.Task import Task
from basket.events.Event_Bus import LISTS_CHANGED
from basket.infra.Blob_Store import BlobStore
from basket.infra.Settings_Repository import SettingsRepository
from basket.logic.state.list_state import ListStore
from basket.logic.state.settings_state import SettingsStore
from basket.utilities.constants import DEFAULT_SHOPPING_LIST
from basket.utilities.validators import HealthResponse


class TestListStore(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        repo = SettingsRepository(BlobStore(os.path.join(self._tmp.name, "storage.json")))
        self.settings = SettingsStore(repo)
        self.store = ListStore(self.settings)
        self.events = []
        self.store.subscribe(lambda name, payload: self.events.append((name, payload)))

    def tearDown(self):
        self._tmp.cleanup()

    def test_remove_sole_list_is_noop(self):
        self.assertFalse(self.store.remove_list(DEFAULT_SHOPPING_LIST))
        self.assertEqual(len(self.store.lists), 1)
        self.assertEqual(self.events, [])

    def test_remove_active_list_resets_to_reserved(self):
        self.store.add_list(ShoppingList("l2", "Party"))
        self.settings.set_current_list("l2")
        self.assertTrue(self.store.remove_list("l2"))
        self.assertEqual(self.settings.settings.current_list, DEFAULT_SHOPPING_LIST)

    def test_remove_inactive_list_keeps_active(self):
        self.store.add_list(ShoppingList("l2", "Party"))
        self.store.add_list(ShoppingList("l3", "Camping"))
        self.settings.set_current_list("l2")
        self.store.remove_list("l3")
        self.assertEqual(self.settings.settings.current_list, "l2")

    def test_remove_reserved_list_while_active_falls_back_to_remaining(self):
        self.store.add_list(ShoppingList("l2", "Party"))
        self.store.remove_list(DEFAULT_SHOPPING_LIST)
        self.assertEqual(self.settings.settings.current_list, "l2")
        self.assertFalse(self.store.remove_list("l2"))
        self.assertEqual(len(self.store.lists), 1)

    def test_ensure_current_list_repairs_dangling_id(self):
        self.settings.set_current_list("gone-after-restart")
        self.assertEqual(self.store.ensure_current_list(), DEFAULT_SHOPPING_LIST)
        self.assertEqual(self.settings.settings.current_list, DEFAULT_SHOPPING_LIST)

    def test_publishes_only_on_change(self):
        self.store.add_task(DEFAULT_SHOPPING_LIST, Task("t1", "soda"))
        self.store.add_task("missing", Task("t2", "bread"))
        self.store.clear_suggestion(DEFAULT_SHOPPING_LIST, "t1")
        self.assertEqual(len(self.events), 1)
        name, snapshot = self.events[0]
        self.assertEqual(name, LISTS_CHANGED)
        self.assertIs(snapshot, self.store.lists)

    def test_stale_completion_after_removal(self):
        self.store.add_task(DEFAULT_SHOPPING_LIST, Task("t1", "soda", analysis=PENDING))
        self.store.remove_task(DEFAULT_SHOPPING_LIST, "t1")
        payload = HealthResponse(isAllergy=False, message="High sugar", alternatives=[])
        self.assertFalse(self.store.set_analysis_result(DEFAULT_SHOPPING_LIST, "t1", GatewaySuccess(payload)))
        self.assertIsNone(self.store.get_task(DEFAULT_SHOPPING_LIST, "t1"))

    def test_snapshots_are_replaced_not_edited(self):
        self.store.add_task(DEFAULT_SHOPPING_LIST, Task("t1", "soda"))
        first = self.store.lists
        self.store.toggle_task_checked(DEFAULT_SHOPPING_LIST, "t1")
        self.assertIsNot(self.store.lists, first)
        self.assertFalse(first[0].tasks[0].checked)
        self.assertTrue(self.store.get_task(DEFAULT_SHOPPING_LIST, "t1").checked)

    def test_unsubscribe(self):
        calls = []
        listener = lambda name, payload: calls.append(name)
        self.store.subscribe(listener)
        self.store.unsubscribe(listener)
        self.store.add_list(ShoppingList("l2", "Party"))
        self.assertEqual(calls, [])
