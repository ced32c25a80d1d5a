"""Shopping list builder.

Provides build_list_from_recipe(response, list_id=None, today=None): turns a
recipe extraction payload into a new ShoppingList.
"""
from datetime import date as _date
from typing import Optional
from uuid import uuid4

from basket.domain.ShoppingList import ShoppingList
from basket.domain.Task import Task
from basket.utilities.constants import DISPLAY_DATE_FORMAT, RECIPE_LIST_FALLBACK_NAME
from basket.utilities.validators import RecipeItemsResponse


def new_id() -> str:
    return uuid4().hex


def recipe_list_name(extracted_name: str, today: _date) -> str:
    stamp = today.strftime(DISPLAY_DATE_FORMAT)
    name = (extracted_name or '').strip()
    if name:
        return f"{name} - {stamp}"
    return f"{RECIPE_LIST_FALLBACK_NAME} {stamp}"


def build_list_from_recipe(response: RecipeItemsResponse, list_id: Optional[str] = None,
                           today: Optional[_date] = None) -> ShoppingList:
    """Build a list whose tasks map one-to-one, in order, onto the extracted items.

    Args:
        response: Validated extraction payload (name, items).
        list_id: Id for the new list; a fresh one is generated when omitted.
        today: Date embedded in the list name (defaults to today).

    Returns:
        ShoppingList with unchecked, not-yet-analyzed tasks. Blank items are skipped.
    """
    list_id = list_id or new_id()
    today = today or _date.today()
    titles = [item.strip() for item in response.items if item and item.strip()]
    tasks = tuple(Task(id=f"{list_id}-{index}", title=title) for index, title in enumerate(titles))
    return ShoppingList(id=list_id, name=recipe_list_name(response.name, today), tasks=tasks)
