"""
Database configuration and session management

Uses a direct PostgreSQL connection (no transaction pooler): the settlement update and
the allocation unique index rely on plain PostgreSQL transactions.
SQLite URLs are accepted for local runs and tests.
"""
from sqlalchemy import create_engine, text
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker
from .config import settings


def _engine_kwargs(database_url: str) -> dict:
    """Pool and connection options for the configured backend"""
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}

    connect_args = {
        "connect_timeout": 10,  # 10 second connection timeout
        "keepalives": 1,
        "keepalives_idle": 30,
        "keepalives_interval": 10,
        "keepalives_count": 5,
    }
    if settings.DB_STATEMENT_TIMEOUT_MS:
        # Every statement inherits the caller's timeout budget
        connect_args["options"] = f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"

    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_recycle": 300,  # Recycle connections every 5 minutes
        "pool_timeout": 30,
        "pool_reset_on_return": "commit",
        "connect_args": connect_args,
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    **_engine_kwargs(settings.DATABASE_URL),
)


# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def get_db():
    """Dependency to get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_connection() -> None:
    """Run a trivial query, raising if the database is unreachable"""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
