# ============================================================
# Module : astro_daily/infra/repo/daily_cache_repo.py
# Objet  : Accès SQL au cache quotidien (lecture + upsert).
# Notes  : upsert atomique INSERT ... ON CONFLICT DO UPDATE.
# ============================================================

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine

from astro_daily.domain.daily_cache import DailyCacheRow
from astro_daily.infra.repo.db import session_scope
from astro_daily.infra.repo.models import DailyScoreORM

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}
_PK = ("user_id", "local_date", "tz")


class SqlDailyCacheRepo:
    """Cache quotidien SQL, clé (user_id, local_date, tz)."""

    def __init__(self, engine: Engine) -> None:
        """Construit le repo à partir d'un moteur SQLAlchemy."""
        self._engine = engine

    def get(self, user_id: str, local_date: str, tz: str) -> DailyCacheRow | None:
        """Retourne la ligne en cache pour la clé, ou None."""
        stmt = select(DailyScoreORM).where(
            DailyScoreORM.user_id == user_id,
            DailyScoreORM.local_date == local_date,
            DailyScoreORM.tz == tz,
        )
        with session_scope(self._engine) as session:
            row = session.execute(stmt).scalars().first()
            if not row:
                return None
            return DailyCacheRow(
                user_id=row.user_id,
                local_date=row.local_date,
                tz=row.tz,
                anchored_local_noon=row.anchored_local_noon,
                anchored_utc=row.anchored_utc,
                result=dict(row.result_json or {}),
                created_at=row.created_at,
            )

    def upsert(self, entry: DailyCacheRow) -> None:
        """Insère ou remplace intégralement la ligne (dernier écrivain gagnant).

        Sur sqlite/postgresql, une seule instruction `ON CONFLICT DO UPDATE`;
        sinon repli sur `Session.merge`.
        """
        values = {
            "user_id": entry.user_id,
            "local_date": entry.local_date,
            "tz": entry.tz,
            "anchored_local_noon": entry.anchored_local_noon,
            "anchored_utc": entry.anchored_utc,
            "result_json": entry.result,
            "created_at": entry.created_at,
        }
        insert = _UPSERT_DIALECTS.get(self._engine.dialect.name)
        with session_scope(self._engine) as session:
            if insert is None:
                session.merge(DailyScoreORM(**values))
                return
            stmt = insert(DailyScoreORM).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=list(_PK),
                set_={k: stmt.excluded[k] for k in values if k not in _PK},
            )
            session.execute(stmt)
