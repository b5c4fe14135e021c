from fastapi import (
    FastAPI,
    Request,
    Query,
    Form,
    File,
    UploadFile,
    APIRouter,
    HTTPException,
)
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from datetime import datetime
from typing import Optional
import logging

from pantry.api.shell import PantryShell
from pantry.events.web_observers import start as start_event_observers, get_events as get_web_events
from pantry.infra.Recipe_Repository import reading_from_prices, reading_from_recipes
from pantry.infra.Storage import JsonKeyValueStore
from pantry.infra.identity import GoogleIdentityProvider
from pantry.utilities.config import GOOGLE_CLIENT_ID, STORAGE_DIR, TEMPLATES_DIR
from pantry.utilities.validators import CredentialInput, ItemInput

# Logging
logger = logging.getLogger("pantry_app")

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


def _shell(request: Request) -> PantryShell:
    return request.app.state.shell


def _home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


def _ts() -> int:
    """Cache-busting timestamp for the page."""
    return int(datetime.now().timestamp())


def _reminder_rows(shell: PantryShell):
    expiring, restock = shell.reminders()
    soon = [
        {"item": item, "days_left": max(days_left, 0), "cheapest": shell.cheapest_store_for(item.name)}
        for item, days_left in expiring
    ]
    refill = [{"item": item, "cheapest": shell.cheapest_store_for(item.name)} for item in restock]
    return soon, refill


# -------------------- UI PAGES --------------------
@router.get("/", response_class=HTMLResponse)
def main_page(request: Request):
    shell = _shell(request)
    soon, refill = _reminder_rows(shell)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "state": shell.state,
            "client_id": shell.identity.client_id,
            "expiring_soon": soon,
            "restock_items": refill,
            "suggestions": shell.suggestions(),
            "expiring_window": shell.window,
            "time": _ts(),
        }
    )


@router.get("/recipe/{recipe_name}", response_class=HTMLResponse)
def recipe_detail(request: Request, recipe_name: str):
    shell = _shell(request)
    recipe = shell.find_recipe(recipe_name)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    suggestion = next(s for s in shell.suggestions() if s.recipe is recipe)
    return templates.TemplateResponse(
        request,
        "recipe_detail.html",
        {"recipe": recipe, "missing": suggestion.missing, "time": _ts()}
    )


# -------------------- Inventory actions (form posts) --------------------
@router.post("/items")
def add_item(
    request: Request,
    name: str = Form(""),
    quantity: str = Form("1"),
    expirationDate: str = Form(""),
    regular: Optional[str] = Form(None),
    barcode: str = Form(""),
):
    try:
        data = ItemInput(name=name, quantity=quantity, expirationDate=expirationDate,
                         regular=regular or False, barcode=barcode)
    except ValidationError as e:
        logger.warning("Rejected item form: %s", e)
        return _home()
    _shell(request).add_item(data)
    return _home()


@router.post("/items/{item_id}/use")
def use_item(request: Request, item_id: str):
    _shell(request).use_item(item_id)
    return _home()


@router.post("/items/{item_id}/delete")
def delete_item(request: Request, item_id: str):
    _shell(request).delete_item(item_id)
    return _home()


@router.post("/recipes/{recipe_name}/cook")
def cook_recipe(request: Request, recipe_name: str):
    shell = _shell(request)
    recipe = shell.find_recipe(recipe_name)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    shell.cook(recipe)
    return _home()


# -------------------- Sign-in --------------------
@router.post("/auth/google")
def google_callback(request: Request, credential: str = Form(...), g_csrf_token: Optional[str] = Form(None)):
    """Credential callback posted by Google Identity Services (redirect mode)."""
    payload = CredentialInput(credential=credential, g_csrf_token=g_csrf_token)
    _shell(request).sign_in(payload.credential)
    return _home()


@router.post("/auth/signout")
def sign_out(request: Request):
    _shell(request).sign_out()
    return _home()


# -------------------- Barcode scanning --------------------
@router.post("/scan/start")
def scan_start(
    request: Request,
    name: str = Form(""),
    quantity: str = Form(""),
    expirationDate: str = Form(""),
    regular: Optional[str] = Form(None),
):
    """Open the scanner; the add-form fields posted along are shown again afterwards."""
    draft = {"name": name.strip(), "quantity": quantity.strip(), "expirationDate": expirationDate.strip(),
             "regular": "on" if regular else ""}
    _shell(request).start_scan(draft)
    return _home()


@router.post("/scan/frame")
async def scan_frame(request: Request, frame: UploadFile = File(...)):
    shell = _shell(request)
    code = await shell.scan_frame(await frame.read())
    return {"code": code, "status": shell.state.scan.status, "scanning": shell.state.scan.scanning}


@router.post("/scan/stop")
def scan_stop(request: Request):
    _shell(request).stop_scan()
    return _home()


# -------------------- JSON API --------------------
@router.get("/api/inventory")
def api_inventory(request: Request):
    items = _shell(request).state.items
    return {"count": len(items), "items": [item.to_dict() for item in items]}


@router.post("/api/inventory", status_code=201)
def api_add_item(request: Request, payload: ItemInput):
    shell = _shell(request)
    if not payload.name:
        raise HTTPException(status_code=400, detail="Item name is required")
    state = shell.add_item(payload)
    return state.items[-1].to_dict()


@router.get("/api/reminders")
def api_reminders(request: Request):
    """Soon-to-expire and restock reminders with the cheapest store for each item."""
    soon, refill = _reminder_rows(_shell(request))

    def _row(entry):
        row = {"item": entry["item"].to_dict()}
        if "days_left" in entry:
            row["days_left"] = entry["days_left"]
        row["cheapest"] = entry["cheapest"].to_dict() if entry["cheapest"] else None
        return row

    return {
        "expiring_soon": [_row(e) for e in soon],
        "restock": [_row(e) for e in refill],
    }


@router.get("/api/recipes/suggestions")
def api_recipe_suggestions(request: Request):
    suggestions = _shell(request).suggestions()
    return {
        "count": sum(1 for s in suggestions if s.cookable),
        "total": len(suggestions),
        "recipes": [s.to_dict() for s in suggestions],
    }


@router.get("/api/prices/{item_name}")
def api_cheapest_price(request: Request, item_name: str):
    cheapest = _shell(request).cheapest_store_for(item_name)
    return {"item": item_name, "cheapest": cheapest.to_dict() if cheapest else None}


@router.get("/api/pantry/alerts")
def api_pantry_alerts(
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value")
):
    """
    Return recent reminder events (near expiry, restock).

    Client polling strategy:
        1. First call without 'since' to load the backlog.
        2. Store 'next_cursor' from the response.
        3. Subsequent polls: /api/pantry/alerts?since=<next_cursor>
    """
    return get_web_events(since)


# -------------------- App factory --------------------
def create_app(shell: Optional[PantryShell] = None) -> FastAPI:
    if shell is None:
        shell = PantryShell(
            JsonKeyValueStore(STORAGE_DIR),
            reading_from_recipes(),
            reading_from_prices(),
            GoogleIdentityProvider(GOOGLE_CLIENT_ID),
        )
    app = FastAPI(title="Smart Pantry")
    app.state.shell = shell
    app.include_router(router)
    start_event_observers()
    logger.info("Smart Pantry ready with %d recipes", len(shell.recipes))
    return app


app = create_app()
