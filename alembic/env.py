import logging
from logging.config import fileConfig
import os
import sys
from pathlib import Path

import psycopg
from sqlalchemy import create_engine, pool

from alembic import context

# Add src to path so the ORM models can be imported
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from core.db import Base  # noqa: E402 - importing core.db registers all models

config = context.config

# Keep handlers attached by run_migrations() when invoked from Lambda
if config.config_file_name is not None and not logging.getLogger("alembic").handlers:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def _connect() -> psycopg.Connection:
    password = os.environ.get("DATABASE_PASSWORD")
    kwargs = {"password": password} if password else {}
    return psycopg.connect(os.environ["DATABASE_URL"], **kwargs)


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode, emitting SQL to the script output."""
    context.configure(
        url="postgresql+psycopg://",
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against DATABASE_URL."""
    connectable = create_engine("postgresql+psycopg://", creator=_connect, poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
