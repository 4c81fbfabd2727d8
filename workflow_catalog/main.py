"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from workflow_catalog.config import settings
from workflow_catalog.database import dispose_db, init_db
from workflow_catalog.routers import collections, imports, templates

# ── Logging setup ────────────────────────────────────────────────────
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger(__name__)

ENDPOINTS = (
    ("GET", "/health", "API health status"),
    ("GET", "/templates/categories", "Get all categories"),
    ("GET", "/templates/collections", "Get collections with optional filters"),
    ("GET", "/templates/collections/{id}", "Get specific collection by ID"),
    ("GET", "/templates/search", "Search workflows with pagination"),
    ("GET", "/templates/workflows", "Get all workflows"),
    ("GET", "/templates/workflows/{id}", "Get specific workflow by ID"),
    ("GET", "/workflows/templates/{id}", "Get workflow in import shape"),
    ("PUT", "/templates/workflows", "Create or replace a workflow"),
    ("PUT", "/templates/collections", "Create a collection of workflows"),
    ("PATCH", "/templates/collections", "Add a workflow to a collection"),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("Using database %s", settings.database_url)
    for method, path, summary in ENDPOINTS:
        logger.info("  %-6s %-32s %s", method, path, summary)
    yield
    logger.info("Shutting down...")
    await dispose_db()


app = FastAPI(
    title="Workflow Template Catalog",
    description="Self-hosted workflow template catalog API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "HEAD", "PUT", "PATCH", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def bad_request_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies and missing fields are plain 400s for catalog clients.
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Database error"})


# Mount routers
app.include_router(templates.router, prefix="/templates", tags=["templates"])
app.include_router(collections.router, prefix="/templates", tags=["collections"])
app.include_router(imports.router, prefix="/workflows/templates", tags=["import"])


@app.get("/health")
async def health():
    return {"status": "OK"}
