from logging.config import fileConfig
from flask import current_app
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from alembic import context
import os
import sys

config = context.config


if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)


sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from tablebook.extensions import db
import tablebook.models

target_metadata = db.metadata

def get_database_url():
    """Gets the database URL from the running Flask app, else from the environment."""
    if current_app:
        return current_app.extensions["migrate"].db.engine.url.render_as_string(hide_password=False)
    url = os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")
    return url

def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = get_database_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()

def get_engine() -> Engine:
    """Reuses the Flask app's engine so its timeouts and pool options apply."""
    if current_app:
        return current_app.extensions["migrate"].db.engine
    from tablebook.config import Config, engine_options
    url = get_database_url()
    return create_engine(url, **engine_options(url, Config.STORE_TIMEOUT))

def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = get_engine()

    with connectable.connect() as connection:
        context.configure(
            connection=connection, target_metadata=target_metadata
        )

        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()