"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, dépôts, éphémérides, listes de
contenu, services) et expose un singleton `container` utilisé par le reste de
l'application.
"""

from __future__ import annotations

import structlog

from astro_daily.core.settings import Settings, get_settings
from astro_daily.domain.services import DailyForecastService, UserService
from astro_daily.infra.astro.base import EphemerisProvider
from astro_daily.infra.astro.mean_motion import MeanMotionEphemeris
from astro_daily.infra.astro.swiss_ephemeris import SwissEphemerisProvider
from astro_daily.infra.content_repo import ContentListRepository
from astro_daily.infra.repositories import (
    InMemoryDailyCacheRepo,
    InMemoryUserRepo,
    RedisDailyCacheRepo,
    RedisUserRepo,
)

log = structlog.get_logger(__name__)


def build_ephemeris(settings: Settings) -> EphemerisProvider:
    """Sélectionne le fournisseur d'éphémérides selon `EPHEMERIS_BACKEND`."""
    if settings.EPHEMERIS_BACKEND == "mean":
        return MeanMotionEphemeris()
    return SwissEphemerisProvider(ephe_path=settings.SE_EPHE_PATH)


class Container:
    """Assemble les dépendances: DATABASE_URL > REDIS_URL > mémoire."""

    def __init__(
        self,
        settings: Settings | None = None,
        ephemeris: EphemerisProvider | None = None,
        user_repo=None,
        cache_repo=None,
        content_repo: ContentListRepository | None = None,
    ):
        self.settings = settings or get_settings()
        self.ephemeris = ephemeris or build_ephemeris(self.settings)
        self.content_repo = content_repo or ContentListRepository(
            self.settings.CONTENT_LISTS_DIR
        )

        if user_repo is not None and cache_repo is not None:
            self.user_repo, self.cache_repo = user_repo, cache_repo
            self.storage_backend = "injected"
        elif self.settings.DATABASE_URL:
            from astro_daily.infra.repo.daily_cache_repo import SqlDailyCacheRepo  # noqa: PLC0415
            from astro_daily.infra.repo.db import get_engine, init_db  # noqa: PLC0415
            from astro_daily.infra.repo.user_repo import SqlUserRepo  # noqa: PLC0415

            engine = get_engine(self.settings.DATABASE_URL)
            init_db(engine)
            self.user_repo = SqlUserRepo(engine)
            self.cache_repo = SqlDailyCacheRepo(engine)
            self.storage_backend = engine.dialect.name
        elif self.settings.REDIS_URL:
            try:
                self.user_repo = RedisUserRepo(self.settings.REDIS_URL)
                self.cache_repo = RedisDailyCacheRepo(self.settings.REDIS_URL)
                self.user_repo.client.ping()
                self.storage_backend = "redis"
            except Exception as err:
                if self.settings.REQUIRE_REDIS:
                    raise RuntimeError("Redis required but unavailable") from err
                log.warning("redis_unavailable_fallback_memory", error=str(err))
                self.user_repo = InMemoryUserRepo()
                self.cache_repo = InMemoryDailyCacheRepo()
                self.storage_backend = "memory-fallback"
        else:
            if self.settings.REQUIRE_REDIS:
                raise RuntimeError("Redis required but REDIS_URL not set")
            self.user_repo = InMemoryUserRepo()
            self.cache_repo = InMemoryDailyCacheRepo()
            self.storage_backend = "memory"

        self.user_service = UserService(self.ephemeris, self.user_repo)
        self.daily_service = DailyForecastService(
            self.ephemeris,
            self.user_repo,
            self.cache_repo,
            self.content_repo,
            top_n=self.settings.SCORING_TOP_ASPECTS,
            explanation_limit=self.settings.EXPLANATION_LIMIT,
        )


container = Container()
