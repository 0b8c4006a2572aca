# /app/db/database.py

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import DATABASE_URL


def build_engine(database_url: str = DATABASE_URL) -> Engine:
    """
    Creates the SQLAlchemy engine for the given URL.

    For SQLite the 'check_same_thread' argument is disabled because the
    membership page runs its lookups on worker threads, and foreign keys are
    switched on so that membership rows cannot point at missing groups.
    """
    is_sqlite = database_url.startswith("sqlite")
    engine_args = {"connect_args": {"check_same_thread": False}} if is_sqlite else {}
    engine = create_engine(database_url, **engine_args)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


engine = build_engine()

# Each instance of SessionLocal is a database session. The repository opens
# one per backend call.
SessionLocal = build_session_factory(engine)


def init_db(bind: Engine = engine) -> None:
    """Creates every registered table that does not exist yet."""
    from . import base  # noqa: F401  (registers the models)
    base.Base.metadata.create_all(bind=bind)
