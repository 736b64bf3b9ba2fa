"""
FastAPI app entry point aggregating per-entity routers under jobly/routes.
Run with `uvicorn jobly.api:app`.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .db import get_conn, ensure_schema, read_config_yaml
from .logs import ensure_log_schema

logger = logging.getLogger(__name__)

app = FastAPI(title="jobly-api", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=read_config_yaml().get("cors_origins", ["http://localhost:3000", "http://127.0.0.1:3000"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    with get_conn() as conn:
        ensure_schema(conn)
    ensure_log_schema()
    logger.info("jobly schema ready")


# Include routers (split by entity)
from .routes import base as base_routes
from .routes import companies as companies_routes
from .routes import jobs as jobs_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(companies_routes.router)
app.include_router(jobs_routes.router)
app.include_router(logs_routes.router)
