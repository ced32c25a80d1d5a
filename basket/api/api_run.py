from fastapi import (
    FastAPI,
    APIRouter,
    BackgroundTasks,
    Depends,
    HTTPException,
    Query,
)
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from basket.api.api_ai import router as ai_router, gateway_response
from basket.domain.ShoppingList import ShoppingList
from basket.events.web_observers import ChangeFeed
from basket.infra.Settings_Repository import SettingsRepository
from basket.logic.shopping.session import ShoppingSession
from basket.logic.state.list_state import ListStore
from basket.logic.state.settings_state import SettingsStore
from basket.utilities.validators import ListInput, SettingsUpdateInput, TaskInput, TextBody

# Logging
logger = logging.getLogger("basket_app")

# Initialize FastAPI app
app = FastAPI(title="Shopping List Hints API")
router = APIRouter(prefix="/api")

_session: Optional[ShoppingSession] = None
_feed = ChangeFeed()


def build_session(settings_repository: Optional[SettingsRepository] = None,
                  feed: Optional[ChangeFeed] = None) -> ShoppingSession:
    """Wire the stores together: settings loaded once, lists start with the reserved list."""
    settings_store = SettingsStore(settings_repository)
    list_store = ListStore(settings_store)
    list_store.ensure_current_list()
    (feed or _feed).attach(list_store.event_bus, settings_store.event_bus)
    return ShoppingSession(list_store, settings_store)


def get_session() -> ShoppingSession:
    global _session
    if _session is None:
        _session = build_session()
        logger.info("Shopping session initialised (active list: %s)", _session.settings.settings.current_list)
    return _session


def get_feed() -> ChangeFeed:
    return _feed


# -------------------- Helpers --------------------
def _require_list(session: ShoppingSession, list_id: str):
    shopping_list = session.lists.get_list(list_id)
    if shopping_list is None:
        raise HTTPException(status_code=404, detail=f"List '{list_id}' not found")
    return shopping_list


def _require_task(session: ShoppingSession, list_id: str, task_id: str):
    _require_list(session, list_id)
    task = session.lists.get_task(list_id, task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task '{task_id}' not found in list '{list_id}'")
    return task


def _list_payload(session: ShoppingSession, list_id: str):
    return session.lists.get_list(list_id).to_dict()


# -------------------- API: Lists --------------------
@router.get('/lists')
def api_lists(session: ShoppingSession = Depends(get_session)):
    return {
        "lists": [lst.to_dict() for lst in session.lists.lists],
        "currentList": session.settings.settings.current_list,
    }


@router.post('/lists', status_code=201)
def api_create_list(body: ListInput, session: ShoppingSession = Depends(get_session)):
    new_list = session.create_empty_list(body.name)
    logger.info("Created list %s (%s)", new_list.id, new_list.name)
    return new_list.to_dict()


@router.post('/lists/from-recipe', status_code=201)
async def api_create_list_from_recipe(body: TextBody, session: ShoppingSession = Depends(get_session)):
    result = await session.create_list_from_recipe(body.input)
    if isinstance(result, ShoppingList):
        logger.info("Created list %s from recipe with %d items", result.id, len(result.tasks))
        return result.to_dict()
    return gateway_response(result)


@router.delete('/lists/{list_id}')
def api_delete_list(list_id: str, session: ShoppingSession = Depends(get_session)):
    _require_list(session, list_id)
    if not session.lists.remove_list(list_id):
        raise HTTPException(status_code=409, detail="At least one list must remain")
    return {"removed": list_id, "currentList": session.settings.settings.current_list}


# -------------------- API: Tasks --------------------
@router.post('/lists/{list_id}/tasks', status_code=201)
def api_add_task(list_id: str, body: TaskInput, background_tasks: BackgroundTasks,
                 session: ShoppingSession = Depends(get_session)):
    _require_list(session, list_id)
    task = session.add_item(list_id, body.title)
    if task is None:
        raise HTTPException(status_code=400, detail="Item could not be added")
    background_tasks.add_task(session.analyze_task, list_id, task.id)
    return task.to_dict()


@router.delete('/lists/{list_id}/tasks/{task_id}')
def api_remove_task(list_id: str, task_id: str, session: ShoppingSession = Depends(get_session)):
    _require_task(session, list_id, task_id)
    session.lists.remove_task(list_id, task_id)
    return _list_payload(session, list_id)


@router.post('/lists/{list_id}/tasks/{task_id}/toggle')
def api_toggle_task(list_id: str, task_id: str, session: ShoppingSession = Depends(get_session)):
    _require_task(session, list_id, task_id)
    session.lists.toggle_task_checked(list_id, task_id)
    return session.lists.get_task(list_id, task_id).to_dict()


@router.put('/lists/{list_id}/tasks/{task_id}/title')
def api_replace_title(list_id: str, task_id: str, body: TaskInput,
                      session: ShoppingSession = Depends(get_session)):
    _require_task(session, list_id, task_id)
    session.lists.replace_task_title(list_id, task_id, body.title)
    return session.lists.get_task(list_id, task_id).to_dict()


@router.delete('/lists/{list_id}/tasks/{task_id}/suggestion')
def api_clear_suggestion(list_id: str, task_id: str, session: ShoppingSession = Depends(get_session)):
    _require_task(session, list_id, task_id)
    session.lists.clear_suggestion(list_id, task_id)
    return session.lists.get_task(list_id, task_id).to_dict()


@router.post('/lists/{list_id}/tasks/{task_id}/analyze', status_code=202)
def api_retry_analysis(list_id: str, task_id: str, background_tasks: BackgroundTasks,
                       session: ShoppingSession = Depends(get_session)):
    _require_task(session, list_id, task_id)
    session.retry_analysis(list_id, task_id)
    background_tasks.add_task(session.analyze_task, list_id, task_id)
    return session.lists.get_task(list_id, task_id).to_dict()


# -------------------- API: Settings --------------------
@router.get('/settings')
def api_get_settings(session: ShoppingSession = Depends(get_session)):
    return session.settings.settings.to_dict()


@router.patch('/settings')
def api_update_settings(body: SettingsUpdateInput, session: ShoppingSession = Depends(get_session)):
    if body.currentList is not None:
        _require_list(session, body.currentList)
    try:
        updated = session.settings.update(
            health_level=body.healthLevel,
            allergies=body.allergies,
            suggest_vegan=body.suggestVegan,
            current_list=body.currentList,
        )
    except ValueError as e:
        return JSONResponse(status_code=422, content={"error": str(e)})
    return updated.to_dict()


# -------------------- API: Change feed --------------------
@router.get('/events')
def api_events(since: Optional[int] = Query(default=None), feed: ChangeFeed = Depends(get_feed)):
    return feed.get_events(since)


@app.get("/health")
def health():
    return {"status": "ok"}


# Include routers
app.include_router(router)
app.include_router(ai_router)
