from logging.config import fileConfig

from sqlalchemy import engine_from_config
from sqlalchemy import pool

from alembic import context

# Base with the testimonials + inquiries tables registered on it
from tenthouse.db.base import Base

from tenthouse.core.config import settings
from tenthouse.core.errors import ConfigurationError

# ----------------------------------------------------------------------
# Alembic Config
# ----------------------------------------------------------------------

config = context.config

if not settings.DATABASE_URL.strip():
    raise ConfigurationError("DATABASE_URL is not set; export it or add it to .env")

config.set_main_option("sqlalchemy.url", settings.DATABASE_URL.strip())

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# SQLite can't ALTER most things in place; batch mode rebuilds the table
_is_sqlite = settings.DATABASE_URL.strip().startswith("sqlite")

# ----------------------------------------------------------------------
# Offline: emit SQL to stdout
# ----------------------------------------------------------------------
def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=_is_sqlite,
    )

    with context.begin_transaction():
        context.run_migrations()

# ----------------------------------------------------------------------
# Online: run against the database
# ----------------------------------------------------------------------
def run_migrations_online():
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=_is_sqlite,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
