"""
Configuration de l'environnement Alembic pour les migrations de base de données.

Les migrations créent les tables `users` et `daily_scores`. L'URL de base vient de
`DATABASE_URL` (settings applicatifs, donc aussi du fichier .env), avec repli sur un
fichier SQLite local.
"""

from __future__ import annotations

import sys
from logging.config import fileConfig
from pathlib import Path

from sqlalchemy import create_engine, pool

from alembic import context  # type: ignore[attr-defined]

# Allow importing project modules when running via Alembic CLI
_this = Path(__file__).resolve()
for p in (_this.parent.parent, Path.cwd()):
    s = str(p)
    if s not in sys.path:
        sys.path.append(s)

from astro_daily.core.settings import get_settings  # noqa: E402
from astro_daily.infra.repo.models import Base  # noqa: E402

DEFAULT_URL = "sqlite:///./astro_daily.db"

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    return get_settings().DATABASE_URL or DEFAULT_URL


def run_migrations_offline() -> None:
    """Émet le SQL des migrations sans connexion (bindings littéraux)."""
    context.configure(url=_database_url(), target_metadata=target_metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Applique les migrations sur une connexion active."""
    connectable = create_engine(_database_url(), poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
