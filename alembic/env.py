"""Alembic environment for the platform database lookup tables.

The target URL comes from `-x database_url=...` when given, otherwise from the
`DATABASE_URL` application setting.
"""
# pylint: disable=no-member,invalid-name,wrong-import-order

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from recon_feed.config import config_load_database_url

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def _migration_resolve_database_url() -> str:
    """Return the migration target URL from command arguments or settings."""

    override_url = context.get_x_argument(as_dictionary=True).get("database_url", "").strip()
    return override_url or config_load_database_url()


def _migration_configure_options(database_url: str) -> dict[str, object]:
    # SQLite needs batch mode for column changes.
    return {"target_metadata": None, "render_as_batch": database_url.startswith("sqlite")}


def run_migrations_offline() -> None:
    """Emit migration SQL without a live connection."""

    database_url = _migration_resolve_database_url()
    context.configure(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_migration_configure_options(database_url),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over one connection to the platform database."""

    database_url = _migration_resolve_database_url()
    engine = create_engine(database_url, poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, **_migration_configure_options(database_url))
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
