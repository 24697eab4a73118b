"""SQLAlchemy models for persistence layer (users, daily_scores)."""

from __future__ import annotations

from sqlalchemy import (
    JSON,
    Column,
    Float,
    ForeignKey,
    Index,
    MetaData,
    String,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Classe de base pour tous les modèles SQLAlchemy."""

    metadata = MetaData()


class UserORM(Base):
    """Modèle ORM des utilisateurs (thème natal immuable en JSON)."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    created_at = Column(String(32), nullable=False)
    birth_utc = Column(String(32), nullable=False)
    birth_tz = Column(String(64), nullable=False)
    lat = Column(Float, nullable=False)
    lon = Column(Float, nullable=False)
    natal_json = Column(JSON, nullable=False)

    __table_args__ = (Index("idx_users_created_at", "created_at"),)


class DailyScoreORM(Base):
    """Modèle ORM du cache quotidien: une ligne par utilisateur, date locale et fuseau."""

    __tablename__ = "daily_scores"

    user_id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    local_date = Column(String(10), primary_key=True)
    tz = Column(String(64), primary_key=True)
    anchored_local_noon = Column(String(40), nullable=False)
    anchored_utc = Column(String(40), nullable=False)
    result_json = Column(JSON, nullable=False)
    created_at = Column(String(32), nullable=False)

    __table_args__ = (Index("idx_daily_scores_created", "created_at"),)
