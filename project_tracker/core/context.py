"""
Application Context

Everything a request handler needs that outlives a single request: settings,
the database engine and the upload directory. Built once by ``create_app``
and stored on ``app.state.context``.
"""
import os
from dataclasses import dataclass

from sqlalchemy.engine import Engine

from project_tracker.core.config import Settings
from project_tracker.db.session import create_db_engine, init_db


@dataclass
class AppContext:
    settings: Settings
    engine: Engine
    upload_dir: str

    @classmethod
    def build(cls, settings: Settings) -> "AppContext":
        engine = create_db_engine(settings)
        init_db(engine)

        upload_dir = settings.UPLOAD_DIR
        os.makedirs(upload_dir, exist_ok=True)

        return cls(settings=settings, engine=engine, upload_dir=upload_dir)
