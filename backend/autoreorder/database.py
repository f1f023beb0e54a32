from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from autoreorder.config import settings


def _connect_args(url: str) -> dict:
    # SQLite connections are shared between the request thread pool workers.
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL),
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all tables for development setups; production runs Alembic."""
    import autoreorder.models  # noqa: F401  (registers mappers)

    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
