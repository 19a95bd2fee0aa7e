from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog.api.errors import register_exception_handlers
from catalog.api.health import router as health_router
from catalog.api.middleware import RequestIdMiddleware
from catalog.api.routes_admin import router as admin_router
from catalog.api.routes_catalogue import router as catalogue_router
from catalog.config import settings
from catalog.db import init_db
from catalog.logging_config import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    configure_logging()
    # RESET_DB=1 drops and recreates every table (tests/CI, demos)
    init_db()
    logger.info("Catalog service started", version=app.version)
    try:
        yield
    finally:
        logger.info("Catalog service shutting down")


app = FastAPI(title="Catalog Service", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIdMiddleware)

register_exception_handlers(app)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])

app.include_router(admin_router, tags=["admin"])
