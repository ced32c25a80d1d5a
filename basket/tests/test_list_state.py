import random
import unittest

from basket.domain.Analysis import (
    Alternative, AnalysisResult, Completed, Failed, NOT_ANALYZED, PENDING,
)
from basket.domain.Results import GatewaySuccess, provider_failure
from basket.domain.ShoppingList import ShoppingList
from basket.domain.Task import Task
from basket.logic.state import list_state
from basket.utilities.constants import DEFAULT_SHOPPING_LIST
from basket.utilities.validators import HealthResponse

DONE = Completed(AnalysisResult(hint="Try oat milk", alternatives=(Alternative("oat milk", True),)))


class TestListStateTransitions(unittest.TestCase):

    def setUp(self):
        self.lists = list_state.add_task(
            list_state.initial_lists(), DEFAULT_SHOPPING_LIST, Task("t1", "milk", analysis=DONE)
        )

    def task(self, lists, task_id="t1"):
        return list_state.find_task(lists, DEFAULT_SHOPPING_LIST, task_id)

    def test_initial_lists_hold_reserved_list(self):
        lists = list_state.initial_lists()
        self.assertEqual(len(lists), 1)
        self.assertEqual(lists[0].id, DEFAULT_SHOPPING_LIST)
        self.assertEqual(lists[0].tasks, ())

    def test_add_task_appends_in_order(self):
        lists = list_state.add_task(self.lists, DEFAULT_SHOPPING_LIST, Task("t2", "bread"))
        self.assertEqual([t.title for t in lists[0].tasks], ["milk", "bread"])

    def test_add_task_unknown_list_is_noop(self):
        lists = list_state.add_task(self.lists, "nope", Task("t2", "bread"))
        self.assertIs(lists, self.lists)

    def test_add_task_rejects_duplicate_id(self):
        lists = list_state.add_task(self.lists, DEFAULT_SHOPPING_LIST, Task("t1", "other"))
        self.assertIs(lists, self.lists)
        self.assertEqual(self.task(lists).title, "milk")

    def test_remove_task(self):
        lists = list_state.remove_task(self.lists, DEFAULT_SHOPPING_LIST, "t1")
        self.assertIsNone(self.task(lists))
        self.assertIs(list_state.remove_task(lists, DEFAULT_SHOPPING_LIST, "t1"), lists)

    def test_transitions_do_not_mutate_previous_snapshot(self):
        before = self.lists
        after = list_state.toggle_task_checked(before, DEFAULT_SHOPPING_LIST, "t1")
        self.assertIsNot(after, before)
        self.assertFalse(self.task(before).checked)
        self.assertTrue(self.task(after).checked)

    def test_toggle_twice_restores_checked(self):
        once = list_state.toggle_task_checked(self.lists, DEFAULT_SHOPPING_LIST, "t1")
        twice = list_state.toggle_task_checked(once, DEFAULT_SHOPPING_LIST, "t1")
        self.assertFalse(self.task(twice).checked)

    def test_check_keeps_analysis(self):
        lists = list_state.toggle_task_checked(self.lists, DEFAULT_SHOPPING_LIST, "t1")
        self.assertEqual(self.task(lists).analysis, DONE)

    def test_uncheck_clears_analysis(self):
        lists = list_state.add_task(
            list_state.initial_lists(), DEFAULT_SHOPPING_LIST, Task("t1", "milk", checked=True, analysis=DONE)
        )
        lists = list_state.toggle_task_checked(lists, DEFAULT_SHOPPING_LIST, "t1")
        self.assertFalse(self.task(lists).checked)
        self.assertEqual(self.task(lists).analysis, NOT_ANALYZED)

    def test_replace_title_clears_any_analysis(self):
        for state in (NOT_ANALYZED, PENDING, Failed("boom"), DONE):
            lists = list_state.add_task(
                list_state.initial_lists(), DEFAULT_SHOPPING_LIST, Task("t1", "milk", analysis=state)
            )
            lists = list_state.replace_task_title(lists, DEFAULT_SHOPPING_LIST, "t1", "oat milk")
            self.assertEqual(self.task(lists).title, "oat milk")
            self.assertEqual(self.task(lists).analysis, NOT_ANALYZED)

    def test_clear_suggestion_keeps_title_and_checked(self):
        lists = list_state.toggle_task_checked(self.lists, DEFAULT_SHOPPING_LIST, "t1")
        lists = list_state.clear_suggestion(lists, DEFAULT_SHOPPING_LIST, "t1")
        task = self.task(lists)
        self.assertEqual((task.title, task.checked, task.analysis), ("milk", True, NOT_ANALYZED))

    def test_set_analysis_result_maps_payload(self):
        payload = HealthResponse(
            isAllergy=True, message="Contains lactose",
            alternatives=[{"name": "oat milk", "isVegan": True}],
        )
        lists = list_state.set_analysis_result(self.lists, DEFAULT_SHOPPING_LIST, "t1", GatewaySuccess(payload))
        self.assertEqual(self.task(lists).analysis.to_dict(), {
            "hint": "Contains lactose",
            "alternatives": [{"name": "oat milk", "isVegan": True}],
            "showWarning": True,
            "showRemove": False,
        })

    def test_set_analysis_failure_is_distinct_from_pending_and_none(self):
        lists = list_state.set_analysis_result(self.lists, DEFAULT_SHOPPING_LIST, "t1", provider_failure())
        analysis = self.task(lists).analysis
        self.assertIsInstance(analysis, Failed)
        self.assertEqual(analysis.to_dict(), "error")
        self.assertNotEqual(analysis, PENDING)
        self.assertNotEqual(analysis, NOT_ANALYZED)

    def test_stale_result_for_removed_task_is_dropped(self):
        lists = list_state.remove_task(self.lists, DEFAULT_SHOPPING_LIST, "t1")
        payload = HealthResponse(isAllergy=False, message="x", alternatives=[])
        after = list_state.set_analysis_result(lists, DEFAULT_SHOPPING_LIST, "t1", payload)
        self.assertIs(after, lists)
        self.assertIsNone(self.task(after))

    def test_result_for_old_title_is_dropped(self):
        lists = list_state.replace_task_title(self.lists, DEFAULT_SHOPPING_LIST, "t1", "oat milk")
        payload = HealthResponse(isAllergy=False, message="about milk", alternatives=[])
        after = list_state.set_analysis_result(lists, DEFAULT_SHOPPING_LIST, "t1", payload, title="milk")
        self.assertIs(after, lists)
        self.assertEqual(self.task(after).analysis, NOT_ANALYZED)

        matching = list_state.set_analysis_result(lists, DEFAULT_SHOPPING_LIST, "t1", payload, title="oat milk")
        self.assertEqual(self.task(matching).analysis.to_dict()["hint"], "about milk")

    def test_remove_sole_list_is_rejected(self):
        lists = list_state.initial_lists()
        self.assertIs(list_state.remove_list(lists, DEFAULT_SHOPPING_LIST), lists)

    def test_add_and_remove_list(self):
        lists = list_state.add_list(self.lists, ShoppingList("l2", "Weekend"))
        self.assertEqual([l.id for l in lists], [DEFAULT_SHOPPING_LIST, "l2"])
        self.assertIs(list_state.add_list(lists, ShoppingList("l2", "Dup")), lists)
        lists = list_state.remove_list(lists, DEFAULT_SHOPPING_LIST)
        self.assertEqual([l.id for l in lists], ["l2"])
        self.assertEqual(list_state.fallback_list_id(lists), "l2")

    def test_random_add_remove_keeps_task_ids_unique(self):
        rng = random.Random(7)
        lists = list_state.initial_lists()
        for _ in range(300):
            task_id = f"t{rng.randint(0, 9)}"
            if rng.random() < 0.6:
                lists = list_state.add_task(lists, DEFAULT_SHOPPING_LIST, Task(task_id, "item"))
            else:
                lists = list_state.remove_task(lists, DEFAULT_SHOPPING_LIST, task_id)
            ids = [t.id for t in lists[0].tasks]
            self.assertEqual(len(ids), len(set(ids)))
