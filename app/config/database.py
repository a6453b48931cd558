"""Database configuration and connection setup"""
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool

from app.config.settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def build_engine(database_url: str) -> Engine:
    """Create an engine; SQLite gets a thread-safe file connection instead of a sized pool"""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False, "timeout": 30},
            echo=False,
        )

    return create_engine(
        database_url,
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        echo=False,
    )


# Create database engine with connection pooling
engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind: Engine = None):
    """Create all scheduling tables that do not exist yet"""
    from app.models import Base  # registers every model on the shared Base

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables created")


if __name__ == "__main__":
    create_tables()
