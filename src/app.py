"""Kinderloop FastAPI application.

Processes commands synchronously via HTTP. Every request runs inside the
marketplace domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from marketplace.domain import marketplace
from marketplace.utils.logging import get_logger

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml.
marketplace.init()

from marketplace.api.errors import register_exception_handlers  # noqa: E402
from marketplace.api.middleware import request_context_middleware  # noqa: E402
from marketplace.api.routing import routers  # noqa: E402
from marketplace.catalogue.storage import LocalImageStore  # noqa: E402
from marketplace.shared.settings import setting  # noqa: E402

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    with marketplace.domain_context():
        app.state.image_store = LocalImageStore(setting("image_store_dir"), setting("image_base_url"))
    logger.info("app_started", domain=marketplace.name)
    yield
    logger.info("app_stopped", domain=marketplace.name)


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Kinderloop API",
    description="Marketplace for pre-loved kids' products",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the marketplace domain context for each request."""
    with marketplace.domain_context():
        response = await call_next(request)
    return response


app.middleware("http")(request_context_middleware)
register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
for router in routers:
    app.include_router(router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": marketplace.name}})
