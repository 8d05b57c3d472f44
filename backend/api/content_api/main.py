from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from content_api import __version__, authoring, queries
from content_api.auth import Caller, get_caller
from content_api.config import configure_logging, get_settings
from content_api.db import db_ping, get_engine
from content_api.errors import ContentError, Unauthorized
from content_api.schemas import (
    ContentItemOut,
    ContentVariantOut,
    ContentViewOut,
    CreateContentIn,
    FeedItemOut,
    UpsertVariantIn,
)
from content_api.workflow import list_states

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Regional Content API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ContentError)
def content_error_handler(request: Request, exc: ContentError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


# -----------------------------
# Health checks
# -----------------------------
@app.get("/healthz")
def healthz():
    return {"status": "ok"}


@app.get("/readyz")
def readyz(engine: Engine = Depends(get_engine)):
    db_ping(engine)
    return {"status": "ready", "db": "ok"}


@app.get("/workflow/states")
def workflow_states():
    return {"states": list_states()}


# -----------------------------
# Authoring
# -----------------------------
@app.post("/api/v1/content", response_model=ContentItemOut, status_code=status.HTTP_201_CREATED)
def create_content(
    body: CreateContentIn,
    caller: Caller = Depends(get_caller),
    engine: Engine = Depends(get_engine),
):
    return authoring.create_content(engine, body, caller)


@app.put("/api/v1/content/{content_id}/variants", response_model=ContentVariantOut)
def upsert_variant(
    content_id: str,
    body: UpsertVariantIn,
    caller: Caller = Depends(get_caller),
    engine: Engine = Depends(get_engine),
):
    return authoring.upsert_variant(engine, content_id, body, caller)


@app.post("/api/v1/content/{content_id}/publish", response_model=ContentItemOut)
def publish(
    content_id: str,
    caller: Caller = Depends(get_caller),
    engine: Engine = Depends(get_engine),
):
    return authoring.publish(engine, content_id, caller)


# -----------------------------
# Delivery
# -----------------------------
@app.get("/api/v1/feed", response_model=List[FeedItemOut])
def feed(
    region: str = Query(...),
    lang: Optional[str] = Query(default=None),
    caller: Caller = Depends(get_caller),
    engine: Engine = Depends(get_engine),
):
    return queries.get_feed(engine, region, lang, caller.regions)


@app.get("/api/v1/content/{content_id}/view", response_model=ContentViewOut)
def view(
    content_id: str,
    lang: Optional[str] = Query(default=None),
    caller: Caller = Depends(get_caller),
    engine: Engine = Depends(get_engine),
):
    return queries.get_content_view(engine, content_id, lang, caller.regions)
