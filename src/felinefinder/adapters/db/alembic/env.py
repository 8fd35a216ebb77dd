"""Alembic environment for the booking tables.

The config is always built in code (`felinefinder.config.build_alembic_config`);
there is no alembic.ini and Alembic does not touch logging.

The database URL is taken from ``-x url=...``, then from the config's
``sqlalchemy.url``, then from ``FELINEFINDER_DB_URL``. Every migration runs in
its own transaction, SQLite uses batch mode for ALTER TABLE, and an
autogenerate run that finds no change writes no revision file.
"""

import os
from typing import Any

from alembic import context
from sqlalchemy import create_engine, pool

import felinefinder.adapters.bookings.schema  # noqa: F401 # pylint: disable=unused-import
from felinefinder.adapters.db.metadata import metadata
from felinefinder.config import ALEMBIC_URL_KEY, DB_URL_ENV

# pylint: disable=no-member

config = context.config


def database_url() -> str:
    candidates = (
        context.get_x_argument(as_dictionary=True).get("url"),
        config.get_main_option(ALEMBIC_URL_KEY),
        os.environ.get(DB_URL_ENV),
    )
    for url in candidates:
        if url and "%(" not in url:
            return url
    raise RuntimeError(f"Set {DB_URL_ENV} to your database URL.")


def skip_empty_revisions(ctx, revision, directives) -> None:  # pylint: disable=unused-argument
    """Drop an autogenerated revision that contains no operations."""
    cmd_opts = getattr(config, "cmd_opts", None)
    if cmd_opts is not None and getattr(cmd_opts, "autogenerate", False):
        script = directives[0]
        if script.upgrade_ops.is_empty():
            directives[:] = []


def configure_options(**extra: Any) -> dict[str, Any]:
    return {
        "target_metadata": metadata,
        "compare_type": True,
        "compare_server_default": True,
        "transaction_per_migration": True,
        "process_revision_directives": skip_empty_revisions,
        **extra,
    }


def run_migrations_offline() -> None:
    """Write the migration SQL to stdout (``db upgrade --sql``)."""
    context.configure(
        **configure_options(
            url=database_url(),
            literal_binds=True,
            dialect_opts={"paramstyle": "named"},
        )
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(database_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(
                **configure_options(
                    connection=connection,
                    render_as_batch=connection.dialect.name == "sqlite",
                )
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
