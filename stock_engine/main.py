from contextlib import asynccontextmanager

from fastapi import FastAPI

from stock_engine.config import Settings, get_settings
from stock_engine.core.logging import setup_logging
from stock_engine.database import Base, engine
from stock_engine.models import import_all_models
from stock_engine.routers import (
    alerts_router,
    health_router,
    history_router,
    inventory_router,
    reports_router,
)
from stock_engine.services.legacy_migration import run_legacy_migration

setup_logging()
settings: Settings = get_settings()

import_all_models()
Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.LEGACY_INVENTORY_SNAPSHOT:
        run_legacy_migration(settings.LEGACY_INVENTORY_SNAPSHOT)
    yield


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.include_router(health_router)
app.include_router(inventory_router)
app.include_router(alerts_router)
app.include_router(history_router)
app.include_router(reports_router)


__all__ = ["app"]
