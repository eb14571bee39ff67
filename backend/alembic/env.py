from alembic import context
from sqlalchemy import engine_from_config, pool

from contracthub.config import settings
from contracthub.db import Base
import contracthub.models  # noqa: F401  registers tables on Base.metadata

config = context.config

# main.run_migrations passes the resolved URL; the CLI falls back to settings
if config.get_main_option("sqlalchemy.url") == "sqlite:///./contracthub.db":
    config.set_main_option("sqlalchemy.url", settings.database_url_fixed)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
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
