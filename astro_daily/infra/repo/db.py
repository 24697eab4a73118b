"""DB utilities for SQLAlchemy sessions/engine.

Uses `DATABASE_URL` env var or falls back to `sqlite+pysqlite:///:memory:` for tests.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from astro_daily.infra.repo.models import Base


def get_engine(url: str | None = None) -> Engine:
    """Crée un moteur SQLAlchemy à partir de l'URL de base de données."""
    db_url = url or os.getenv("DATABASE_URL") or "sqlite+pysqlite:///:memory:"
    kwargs: dict = {}
    if db_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # une base mémoire n'existe que sur sa connexion: on la partage
        if ":memory:" in db_url or db_url.rstrip("/").endswith("sqlite:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(db_url, future=True, echo=False, **kwargs)


def init_db(engine: Engine) -> None:
    """Crée les tables manquantes (dev/tests; Alembic en production)."""
    Base.metadata.create_all(engine)


def get_session_factory(engine: Engine) -> sessionmaker:
    """Crée une factory de sessions SQLAlchemy."""
    return sessionmaker(bind=engine, class_=Session, expire_on_commit=False)


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Contexte de session SQLAlchemy avec gestion automatique des transactions.

    Valide la transaction en sortie normale, l'annule et relance l'exception
    sinon; la session est toujours fermée.
    """
    SessionLocal = get_session_factory(engine)
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
