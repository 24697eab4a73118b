"""
Repositories pour la gestion des données.

Ce module fournit des implémentations de repositories pour les utilisateurs et
le cache quotidien, avec des versions en mémoire et Redis. Les versions SQL
vivent dans `astro_daily.infra.repo`.
"""

import json
import threading
from dataclasses import asdict

import redis

from astro_daily.domain.daily_cache import DailyCacheRow
from astro_daily.domain.entities import User


class InMemoryUserRepo:
    """
    Dépôt utilisateurs en mémoire (utilisé pour dev/tests).

    Stocke les enregistrements dans un dict local, non persistant.
    """

    def __init__(self):
        """Initialise une base mémoire vide."""
        self._db: dict[str, User] = {}

    def save(self, user: User) -> User:
        """Enregistre un utilisateur et le renvoie."""
        self._db[user.id] = user
        return user

    def get(self, user_id: str) -> User | None:
        """Retourne un utilisateur par id, ou None s'il est absent."""
        return self._db.get(user_id)


class InMemoryDailyCacheRepo:
    """Cache quotidien en mémoire, protégé par un verrou."""

    def __init__(self):
        """Initialise un cache vide."""
        self._db: dict[tuple[str, str, str], DailyCacheRow] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str, local_date: str, tz: str) -> DailyCacheRow | None:
        """Retourne la ligne en cache, ou None."""
        with self._lock:
            return self._db.get((user_id, local_date, tz))

    def upsert(self, entry: DailyCacheRow) -> None:
        """Insère ou remplace la ligne de même clé."""
        with self._lock:
            self._db[entry.key] = entry


class RedisUserRepo:
    """Dépôt utilisateurs adossé à Redis (clé: `user:{id}`)."""

    def __init__(self, url: str):
        """Crée un client Redis à partir de l'URL fournie."""
        self.client = redis.Redis.from_url(url, decode_responses=True)

    def save(self, user: User) -> User:
        """Sérialise en JSON et stocke l'utilisateur sous `user:{id}`."""
        self.client.set(f"user:{user.id}", user.model_dump_json())
        return user

    def get(self, user_id: str) -> User | None:
        """Charge et désérialise `user:{id}`, si présent."""
        raw = self.client.get(f"user:{user_id}")
        return User.model_validate_json(raw) if raw else None


class RedisDailyCacheRepo:
    """Cache quotidien Redis (clé: `daily:{user_id}:{local_date}:{tz}`)."""

    def __init__(self, url: str):
        """Crée un client Redis à partir de l'URL fournie."""
        self.client = redis.Redis.from_url(url, decode_responses=True)

    @staticmethod
    def _key(user_id: str, local_date: str, tz: str) -> str:
        return f"daily:{user_id}:{local_date}:{tz}"

    def get(self, user_id: str, local_date: str, tz: str) -> DailyCacheRow | None:
        """Charge la ligne en cache, si présente."""
        raw = self.client.get(self._key(user_id, local_date, tz))
        return DailyCacheRow(**json.loads(raw)) if raw else None

    def upsert(self, entry: DailyCacheRow) -> None:
        """Écrase la ligne (un SET Redis est atomique)."""
        self.client.set(self._key(*entry.key), json.dumps(asdict(entry)))
