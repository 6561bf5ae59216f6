"""
FastAPI backend: REST API for contacts, suggestions, interactions, and settings.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from neo4j import GraphDatabase
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from reconnect.application import (
    ContactData,
    ContactService,
    InteractionPayload,
    InteractionRecorder,
    Invalid,
    NotFound,
    SettingsManager,
    SettingsUpdate,
    SuggestionService,
    message_templates,
)
from reconnect.application.dto import KIND_NOT_FOUND, KIND_VALIDATION_ERROR
from reconnect.domain import Contact, Interaction, Settings
from reconnect.infrastructure import (
    InMemoryContactStore,
    InMemoryInteractionLedger,
    InMemorySettingsRepository,
    Neo4jContactStore,
    Neo4jInteractionLedger,
    Neo4jSettingsRepository,
    ensure_constraints,
    phone_normalizer,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
)
logger = logging.getLogger(__name__)

STORAGE_NEO4J = "neo4j"
STORAGE_MEMORY = "memory"


def _get_driver():
    uri = os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip()
    user = os.environ.get("NEO4J_USER", "neo4j").strip()
    password = os.environ.get("NEO4J_PASSWORD", "password").strip()
    return GraphDatabase.driver(uri, auth=(user, password))


@dataclass
class Services:
    contacts: ContactService
    interactions: InteractionRecorder
    settings: SettingsManager
    suggestions: SuggestionService


def build_services(storage: str, driver=None) -> Services:
    """Wire the application services onto the chosen storage backend."""
    if storage == STORAGE_MEMORY:
        contact_store = InMemoryContactStore()
        ledger = InMemoryInteractionLedger(contact_store)
        settings_repo = InMemorySettingsRepository()
    elif storage == STORAGE_NEO4J:
        if driver is None:
            raise ValueError("Neo4j storage needs a driver.")
        contact_store = Neo4jContactStore(driver)
        ledger = Neo4jInteractionLedger(driver)
        settings_repo = Neo4jSettingsRepository(driver)
    else:
        raise ValueError(f"Unsupported storage {storage!r}; use neo4j or memory.")

    settings = SettingsManager(settings_repo)
    normalize = phone_normalizer(os.environ.get("PHONE_DEFAULT_REGION"))
    return Services(
        contacts=ContactService(contact_store, normalize_phone=normalize),
        interactions=InteractionRecorder(contact_store, ledger),
        settings=settings,
        suggestions=SuggestionService(contact_store, settings),
    )


def _storage_from_env() -> str:
    return (os.environ.get("RECONNECT_STORAGE") or STORAGE_NEO4J).strip().lower()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.driver = None
    storage = _storage_from_env()
    try:
        if storage == STORAGE_NEO4J:
            app.state.driver = _get_driver()
            ensure_constraints(app.state.driver)
        app.state.services = build_services(storage, app.state.driver)
        logger.info("Reconnect API started with %s storage", storage)
        yield
    finally:
        if getattr(app.state, "driver", None) is not None:
            app.state.driver.close()


app = FastAPI(title="Reconnect API", lifespan=lifespan)


def _services(request: Request) -> Services:
    return request.app.state.services


def _fail(result: Invalid | NotFound) -> HTTPException:
    status_code = 404 if result.kind == KIND_NOT_FOUND else 400
    return HTTPException(
        status_code=status_code,
        detail={"kind": result.kind, "message": result.reason},
    )


@app.exception_handler(StarletteHTTPException)
async def structured_http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Errors raised with a {kind, message} detail are returned as the body itself."""
    if isinstance(exc.detail, dict):
        return JSONResponse(status_code=exc.status_code, content=exc.detail)
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return JSONResponse(
        status_code=422,
        content={"kind": KIND_VALIDATION_ERROR, "message": message},
    )


# --- REST models (camelCase on the wire) ---


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class ContactBody(_CamelModel):
    full_name: str
    relationship: str = "friend"
    phone_number: str | None = None
    email: str | None = None
    frequency_days: int = 30
    priority: int = 1


class ContactOut(_CamelModel):
    id: str
    full_name: str
    relationship: str
    phone_number: str | None = None
    email: str | None = None
    frequency_days: int
    priority: int
    last_contacted_at: datetime | None = None


class InteractionBody(_CamelModel):
    type: str
    message_preview: str | None = None
    notes: str | None = None


class InteractionOut(_CamelModel):
    id: str
    contact_id: str
    type: str
    message_preview: str | None = None
    notes: str | None = None
    created_at: datetime


class SettingsBody(_CamelModel):
    mode: str | None = None
    count_daily: int | None = None
    count_weekly: int | None = None
    default_frequencies: list[int] | None = None


class SettingsOut(_CamelModel):
    mode: str
    count_daily: int
    count_weekly: int
    default_frequencies: list[int]


def _contact_out(c: Contact) -> ContactOut:
    return ContactOut(
        id=c.id,
        full_name=c.full_name,
        relationship=c.relationship,
        phone_number=c.phone_number,
        email=c.email,
        frequency_days=c.frequency_days,
        priority=c.priority,
        last_contacted_at=c.last_contacted_at,
    )


def _interaction_out(i: Interaction) -> InteractionOut:
    return InteractionOut(
        id=i.id,
        contact_id=i.contact_id,
        type=i.type,
        message_preview=i.message_preview,
        notes=i.notes,
        created_at=i.created_at,
    )


def _settings_out(s: Settings) -> SettingsOut:
    return SettingsOut(
        mode=s.mode,
        count_daily=s.count_daily,
        count_weekly=s.count_weekly,
        default_frequencies=list(s.default_frequencies),
    )


def _contact_data(body: ContactBody) -> ContactData:
    return ContactData(
        full_name=body.full_name,
        relationship=body.relationship,
        phone_number=body.phone_number,
        email=body.email,
        frequency_days=body.frequency_days,
        priority=body.priority,
    )


router = APIRouter()


# --- REST: health ---


@router.get("/health")
def health():
    return {"status": "ok"}


# --- REST: contacts ---


@router.get("/contacts", response_model=list[ContactOut])
def list_contacts(request: Request):
    return [_contact_out(c) for c in _services(request).contacts.list_contacts()]


@router.post("/contacts", response_model=ContactOut, status_code=201)
def create_contact(body: ContactBody, request: Request):
    result = _services(request).contacts.create_contact(_contact_data(body))
    if isinstance(result, Invalid):
        raise _fail(result)
    return _contact_out(result)


@router.get("/contacts/{contact_id}", response_model=ContactOut)
def get_contact(contact_id: str, request: Request):
    contact = _services(request).contacts.get_contact(contact_id)
    if contact is None:
        raise _fail(NotFound(contact_id=contact_id))
    return _contact_out(contact)


@router.put("/contacts/{contact_id}", response_model=ContactOut)
def update_contact(contact_id: str, body: ContactBody, request: Request):
    result = _services(request).contacts.update_contact(contact_id, _contact_data(body))
    if isinstance(result, Invalid | NotFound):
        raise _fail(result)
    return _contact_out(result)


@router.delete("/contacts/{contact_id}")
def delete_contact(contact_id: str, request: Request):
    if not _services(request).contacts.delete_contact(contact_id):
        raise _fail(NotFound(contact_id=contact_id))
    return {"success": True}


# --- REST: suggestions ---


@router.get("/suggestions", response_model=list[ContactOut])
def suggestions(request: Request, mode: str | None = None, count: int | None = None):
    result = _services(request).suggestions.suggest(mode=mode, count=count)
    if isinstance(result, Invalid):
        raise _fail(result)
    return [_contact_out(c) for c in result]


# --- REST: interactions ---


@router.post(
    "/contacts/{contact_id}/interactions",
    response_model=InteractionOut,
    status_code=201,
)
def record_interaction(contact_id: str, body: InteractionBody, request: Request):
    result = _services(request).interactions.record(
        contact_id,
        body.type,
        InteractionPayload(message=body.message_preview, notes=body.notes),
    )
    if isinstance(result, Invalid | NotFound):
        raise _fail(result)
    return _interaction_out(result)


@router.get("/contacts/{contact_id}/interactions", response_model=list[InteractionOut])
def list_contact_interactions(contact_id: str, request: Request):
    result = _services(request).interactions.list_for_contact(contact_id)
    if isinstance(result, NotFound):
        raise _fail(result)
    return [_interaction_out(i) for i in result]


@router.get("/interactions", response_model=list[InteractionOut])
def list_interactions(request: Request):
    return [_interaction_out(i) for i in _services(request).interactions.list_interactions()]


# --- REST: settings ---


@router.get("/settings", response_model=SettingsOut)
def get_settings(request: Request):
    return _settings_out(_services(request).settings.get())


@router.put("/settings", response_model=SettingsOut)
def update_settings(body: SettingsBody, request: Request):
    result = _services(request).settings.update(
        SettingsUpdate(
            mode=body.mode,
            count_daily=body.count_daily,
            count_weekly=body.count_weekly,
            default_frequencies=body.default_frequencies,
        )
    )
    if isinstance(result, Invalid):
        raise _fail(result)
    return _settings_out(result)


# --- REST: templates and demo data ---


@router.get("/templates", response_model=list[str])
def templates(name: str | None = None):
    return message_templates(name)


@router.post("/seed")
def seed(request: Request):
    return {"created": _services(request).contacts.seed_demo_contacts()}


app.include_router(router)
# The web client calls everything under /api.
app.include_router(router, prefix="/api", include_in_schema=False)
