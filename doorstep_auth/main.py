from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from doorstep_auth.api.errors import register_error_handlers
from doorstep_auth.api.routers import auth, health
from doorstep_auth.infrastructure.db.engine import Base, get_engine
from doorstep_auth.infrastructure.db.seeds.seed_roles import seed_roles
from doorstep_auth.shared.config import get_settings
from doorstep_auth.shared.log_config import configure_logging


settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.seed_roles_on_startup:
        engine = get_engine(settings.database_url)
        Base.metadata.create_all(engine)
        seed_roles(engine, now=datetime.now(timezone.utc))
    logger.info("auth service started")
    yield
    logger.info("auth service stopped")


app = FastAPI(title="AtYourDoorStep Auth API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)

app.include_router(health.router)
app.include_router(auth.router)
