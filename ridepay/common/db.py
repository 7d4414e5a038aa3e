"""Database bootstrap helpers."""

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from ridepay.common.config import settings


# Single SQLAlchemy engine per process; the pool is shared by every request.
engine = create_engine(
    settings.postgres_dsn,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    pool_recycle=settings.db_pool_recycle_seconds,
    connect_args={"connect_timeout": settings.db_connect_timeout_seconds},
)
# `expire_on_commit=False` keeps ORM objects readable after commit in handlers.
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""

    pass
