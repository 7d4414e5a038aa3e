"""Alembic environment for the payments database."""

from alembic import context
from sqlalchemy import engine_from_config, pool

from ridepay.common.config import settings
from ridepay.common.db import Base
from ridepay.services.payments import models  # noqa: F401  registers tables on Base.metadata


config = context.config
config.set_main_option("sqlalchemy.url", settings.postgres_dsn)
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(url=settings.postgres_dsn, target_metadata=target_metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
