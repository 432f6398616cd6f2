# tenthouse/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator
from tenthouse.core.config import settings
from tenthouse.core.errors import ConfigurationError

DATABASE_URL = settings.DATABASE_URL.strip()

if not DATABASE_URL:
    raise ConfigurationError("DATABASE_URL is not set")


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # sync routes run in a threadpool, so connections cross threads
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_size": 5,
        "max_overflow": 10,
    }


engine = create_engine(DATABASE_URL, future=True, **_engine_options(DATABASE_URL))

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)

def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
