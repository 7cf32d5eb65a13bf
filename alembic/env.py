import os
from logging.config import fileConfig

from alembic import context

import partsflow.models  # noqa: F401  registers tables on Base.metadata
from partsflow.core.config import settings
from partsflow.db.base import Base
from partsflow.db.session import build_engine

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    # An in-memory DATABASE_URL is useless for migrations; fall back to alembic.ini.
    url = os.getenv("DATABASE_URL") or settings.database_url
    if url and url != "sqlite://":
        return url
    return config.get_main_option("sqlalchemy.url")


def run_migrations_offline() -> None:
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = build_engine(_database_url(), settings)
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )
        with context.begin_transaction():
            context.run_migrations()
    engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
