from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from calorics.core.config import settings
from calorics.db.base import Base


def _make_engine(url: str):
    connect_args = {}
    if url.startswith("sqlite"):
        # one handle shared by the request threadpool
        connect_args["check_same_thread"] = False

    engine = create_engine(
        url,
        future=True,
        pool_pre_ping=True,
        connect_args=connect_args,
    )

    if url.startswith("sqlite"):
        enable_sqlite_foreign_keys(engine)

    return engine


def enable_sqlite_foreign_keys(engine) -> None:
    """
    SQLite ignores ON DELETE CASCADE unless the pragma is set on every connection.
    """

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = _make_engine(settings.database_url)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def init_db(bind=None) -> None:
    """
    Create any missing tables. Alembic carries the same schema for managed deployments.
    """
    from calorics import models  # noqa  # register all tables on Base.metadata

    Base.metadata.create_all(bind=bind or engine)
