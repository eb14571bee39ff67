from fastapi import FastAPI, Depends, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from contracthub.config import settings
from contracthub.routers import blueprints, contracts
from contracthub.db import Base, engine, get_db
from sqlalchemy.orm import Session

from contracthub.exceptions import (
    AppException,
    app_exception_handler,
    request_validation_exception_handler,
    general_exception_handler
)

import os
import logging
import sentry_sdk
from alembic import command
from alembic.config import Config
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from sqlalchemy import text

from contracthub.middleware.request_id import RequestIDMiddleware
from contracthub.utils.logging import configure_logging

configure_logging(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

# Only initialize if DSN is provided
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[
            FastApiIntegration(),
            SqlalchemyIntegration(),
        ],
        traces_sample_rate=0.1,
        environment=settings.ENVIRONMENT,
    )
    logger.info("Sentry error tracking initialized")


def run_migrations():
    """Run Alembic migrations on startup"""
    logger.info("Running DB migrations...")
    # backend/contracthub/main.py -> backend/
    current_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    alembic_cfg = Config(os.path.join(current_dir, "alembic.ini"))
    alembic_cfg.set_main_option("script_location", os.path.join(current_dir, "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url_fixed)
    command.upgrade(alembic_cfg, "head")
    logger.info("DB migrations completed successfully")


def init_database():
    if settings.RUN_MIGRATIONS:
        run_migrations()
    else:
        Base.metadata.create_all(bind=engine)


app = FastAPI(
    title=settings.APP_NAME,
    description="Blueprint-driven contracts with a role-gated approval lifecycle",
    version="1.0.0"
)

app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
    max_age=3600,
)
app.add_middleware(RequestIDMiddleware)


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup"""
    logger.info(f"Starting {settings.APP_NAME}...")
    init_database()


app.include_router(blueprints.router)
app.include_router(contracts.router)


@app.get("/")
def read_root():
    """Root endpoint"""
    return {
        "message": "Contract Management Platform API",
        "status": "running"
    }


@app.get("/healthz")
def healthz(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        raise HTTPException(status_code=503, detail={"status": "not_ready", "database": "error"})
    return {"status": "ok", "database": "ok"}
