# ============================================================
# Module : astro_daily/infra/repo/user_repo.py
# Objet  : Accès SQL (insert, lecture) pour les utilisateurs.
# ============================================================

from __future__ import annotations

from sqlalchemy.engine import Engine

from astro_daily.domain.entities import NatalChart, User
from astro_daily.infra.repo.db import session_scope
from astro_daily.infra.repo.models import UserORM


class SqlUserRepo:
    """Dépôt utilisateurs SQL (insert-only: le thème natal est immuable)."""

    def __init__(self, engine: Engine) -> None:
        """Construit le repo à partir d'un moteur SQLAlchemy."""
        self._engine = engine

    def save(self, user: User) -> User:
        """Insère un utilisateur. Lève IntegrityError si l'id existe déjà."""
        birth = user.natal.birth
        with session_scope(self._engine) as session:
            session.add(
                UserORM(
                    id=user.id,
                    created_at=user.created_at,
                    birth_utc=birth.birth_utc,
                    birth_tz=birth.birth_tz,
                    lat=birth.lat,
                    lon=birth.lon,
                    natal_json=user.natal.model_dump(mode="json"),
                )
            )
        return user

    def get(self, user_id: str) -> User | None:
        """Retourne l'utilisateur `user_id`, ou None s'il est absent."""
        with session_scope(self._engine) as session:
            row = session.get(UserORM, user_id)
            if not row:
                return None
            return User(
                id=row.id,
                created_at=row.created_at,
                natal=NatalChart.model_validate(row.natal_json),
            )
