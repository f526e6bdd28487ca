from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine, Session, SQLModel
from fastapi import Request

from project_tracker.core.config import Settings


def create_db_engine(settings: Settings):
    db_url = settings.database_url

    if not db_url.startswith("sqlite"):
        return create_engine(db_url, pool_pre_ping=True)

    # SQLite fix for multithreading
    connect_args = {"check_same_thread": False}

    # In-memory databases live inside one connection, so share it
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(db_url, connect_args=connect_args, poolclass=StaticPool)

    return create_engine(db_url, connect_args=connect_args)


def init_db(engine) -> None:
    # Import models so their tables are registered on the metadata
    from project_tracker import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_db(request: Request):
    with Session(request.app.state.context.engine) as session:
        yield session
