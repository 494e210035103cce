"""
Migration environment for the Calorics store.

Runs against the application's own engine, so migrations see the same
SQLite foreign key pragma as the API. The project root is put on sys.path
by `prepend_sys_path` in alembic.ini.
"""
from logging.config import fileConfig

from alembic import context

from calorics import models  # noqa  # register all tables on Base.metadata
from calorics.core.config import settings
from calorics.db.base import Base
from calorics.db.session import engine

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _configure_options(url: str) -> dict:
    return {
        "target_metadata": Base.metadata,
        "compare_type": True,
        # SQLite cannot ALTER most constraints in place
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    """Emit the migration SQL for settings.database_url without connecting."""
    context.configure(
        url=settings.database_url,
        literal_binds=True,
        **_configure_options(settings.database_url),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            **_configure_options(str(engine.url)),
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
