# tenthouse/main.py
import logging

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from tenthouse.core.config import settings
from tenthouse.core.deps import get_db
from tenthouse.core.errors import ConfigurationError, register_exception_handlers
from tenthouse.core.logging import setup_logging
from tenthouse.db.session import engine
from tenthouse.db.mixins import Base
# load DB models so Base.metadata is populated
import tenthouse.db.models  # noqa: F401

# Routers
from tenthouse.api.v1.testimonials import router as testimonials_router
from tenthouse.api.v1.inquiries import router as inquiries_router
from tenthouse.api.v1.auth import router as auth_router
from tenthouse.api.v1.admin import router as admin_router

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)

@app.on_event("startup")
def on_startup():
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as exc:
        logger.critical("Database unavailable at startup: %s", exc)
        raise ConfigurationError("Database connection failed") from exc
    logger.info("create_all done. Tables: %s", list(Base.metadata.tables.keys()))

# Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(testimonials_router, prefix="/api/v1")
app.include_router(inquiries_router, prefix="/api/v1")
app.include_router(auth_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")

@app.get("/health")
def health():
    return {"status": "ok", "app": settings.APP_NAME}

@app.get("/health/db")
def db_ping(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"db": "ok"}
