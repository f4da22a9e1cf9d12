"""
Alembic environment configuration

Migrations need a direct PostgreSQL connection (no transaction pooler):
partial indexes and CHECK constraints are created inside one transaction.
"""
from logging.config import fileConfig
from sqlalchemy import engine_from_config
from sqlalchemy import pool
from alembic import context
import os
import sys

# Add backend/ to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from alifarm.core.database import Base
from alifarm.core.config import settings
from alifarm.models import *  # Register all models on Base.metadata

config = context.config

config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    try:
        connectable = engine_from_config(
            config.get_section(config.config_ini_section, {}),
            prefix="sqlalchemy.",
            poolclass=pool.NullPool,
        )

        with connectable.connect() as connection:
            context.configure(
                connection=connection, target_metadata=target_metadata
            )

            with context.begin_transaction():
                context.run_migrations()
    except Exception as e:
        error_msg = str(e)
        if "could not translate host name" in error_msg or "nodename nor servname provided" in error_msg:
            db_url = config.get_main_option("sqlalchemy.url")
            hostname = db_url.split("@")[1].split(":")[0] if "@" in db_url else "unknown"
            print("\n" + "="*80)
            print("DATABASE CONNECTION ERROR")
            print("="*80)
            print(f"\nCannot resolve database hostname: {hostname}")
            print("\nCheck DATABASE_URL in your .env file.")
            print("For local development use: postgresql://postgres@localhost:5432/alifarm")
            print("\nTo generate SQL without connecting:")
            print("  alembic upgrade head --sql")
            print("="*80 + "\n")
        raise


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
