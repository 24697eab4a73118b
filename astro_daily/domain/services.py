"""
Services métier: inscription des utilisateurs et prévision quotidienne.

Les collaborateurs externes (éphémérides, dépôts, listes de contenu) sont
injectés par le conteneur; ce module ne fait qu'orchestrer les calculs purs
du domaine.
"""

from __future__ import annotations

import copy
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

import structlog
from opentelemetry import trace

from astro_daily.app.metrics import DAILY_CACHE_LOOKUPS, EPHEMERIS_LATENCY
from astro_daily.domain.aspects import detect_aspects
from astro_daily.domain.daily_cache import DailyCacheRow
from astro_daily.domain.daily_picker import derive_content
from astro_daily.domain.date_key import (
    anchor_instant,
    birth_to_utc,
    isoformat_utc,
    local_date_key,
)
from astro_daily.domain.entities import (
    Ascendant,
    BirthInput,
    BirthRecord,
    Houses,
    NatalChart,
    User,
)
from astro_daily.domain.errors import UserNotFoundError
from astro_daily.domain.scoring import (
    EXPLANATION_LIMIT,
    TOP_ASPECTS_FOR_SCORING,
    score_personal_day,
)
from astro_daily.domain.zodiac import Body, sign_from_longitude

log = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)


@contextmanager
def ephemeris_call(op: str, **attributes: Any) -> Iterator[None]:
    """Span OpenTelemetry + histogramme de latence autour d'un appel d'éphémérides."""
    with tracer.start_as_current_span(f"ephemeris.{op}") as span:
        for key, value in attributes.items():
            span.set_attribute(key, value)
        with EPHEMERIS_LATENCY.labels(op).time():
            yield


def _local_iso(instant: datetime) -> str:
    return instant.isoformat(timespec="milliseconds")


class UserService:
    """Inscription et lecture des utilisateurs.

    Le thème natal est calculé une seule fois, à l'inscription, puis stocké tel quel.
    """

    def __init__(self, ephemeris, user_repo):
        """Initialise le service.

        Paramètres:
        - ephemeris: `EphemerisProvider` (Swiss Ephemeris ou mouvement moyen).
        - user_repo: dépôt utilisateurs (SQL, Redis ou mémoire).
        """
        self.ephemeris = ephemeris
        self.users = user_repo

    def build_natal(self, birth: BirthInput) -> NatalChart:
        """Calcule le thème natal (longitudes, signes, ascendant, maisons en signes entiers)."""
        birth_utc = birth_to_utc(birth.birth_date, birth.birth_time, birth.birth_tz)
        with ephemeris_call("longitudes"):
            longitudes = self.ephemeris.longitudes_at(birth_utc)
        with ephemeris_call("ascendant"):
            asc = self.ephemeris.ascendant_at(birth_utc, birth.lat, birth.lon)
        rising = sign_from_longitude(asc).value
        return NatalChart(
            birth=BirthRecord(**birth.model_dump(), birth_utc=isoformat_utc(birth_utc)),
            longitudes_deg={b.value: deg for b, deg in longitudes.items()},
            sun_sign=sign_from_longitude(longitudes[Body.SUN]).value,
            moon_sign=sign_from_longitude(longitudes[Body.MOON]).value,
            ascendant=Ascendant(longitude_deg=asc, rising_sign=rising),
            houses=Houses(first_house_sign=rising),
        )

    def register(self, birth: BirthInput) -> User:
        """Crée un utilisateur (uuid4) avec son thème natal et le persiste."""
        natal = self.build_natal(birth)
        user = User(
            id=str(uuid.uuid4()),
            created_at=isoformat_utc(datetime.now(UTC)),
            natal=natal,
        )
        self.users.save(user)
        log.info("user_registered", user_id=user.id, sun_sign=natal.sun_sign)
        return user

    def get(self, user_id: str) -> User:
        """Retourne l'utilisateur ou lève `UserNotFoundError`."""
        user = self.users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user


class DailyForecastService:
    """Prévision quotidienne personnalisée, mise en cache par (user_id, date locale, tz).

    Responsabilités:
    - Résoudre la date locale et l'ancrage à midi local.
    - Servir le cache, sauf rafraîchissement forcé.
    - Sinon: transits, aspects vs natal, scores, contenu, puis upsert du cache.
    """

    def __init__(
        self,
        ephemeris,
        user_repo,
        cache_repo,
        content_repo,
        *,
        top_n: int = TOP_ASPECTS_FOR_SCORING,
        explanation_limit: int = EXPLANATION_LIMIT,
    ):
        """Initialise le service avec ses dépendances.

        Paramètres:
        - ephemeris: `EphemerisProvider`.
        - user_repo: dépôt utilisateurs.
        - cache_repo: dépôt du cache quotidien (`get`/`upsert`).
        - content_repo: `ContentListRepository` (listes sources du contenu).
        - top_n / explanation_limit: réglages du scoring.
        """
        self.ephemeris = ephemeris
        self.users = user_repo
        self.cache = cache_repo
        self.content = content_repo
        self.top_n = top_n
        self.explanation_limit = explanation_limit

    def get_daily_personal(
        self,
        user_id: str,
        tz: str,
        date: str | None = None,
        refresh: bool = False,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """Retourne la prévision du jour pour `user_id` dans le fuseau `tz`.

        Paramètres:
        - user_id: identifiant utilisateur.
        - tz: fuseau IANA (fait partie de la clé de cache).
        - date: "YYYY-MM-DD" optionnelle, sinon aujourd'hui dans `tz`.
        - refresh: ignore le cache et écrase la ligne existante.
        - now: instant courant injectable (tests).

        Raises:
            InvalidInputError: fuseau ou date invalide.
            UserNotFoundError: utilisateur inconnu (sur cache manquant).
            ContentConfigurationError: liste de contenu vide ou absente.
        """
        local_date = local_date_key(tz, date, now=now)
        bound = log.bind(user_id=user_id, local_date=local_date, tz=tz)

        if refresh:
            DAILY_CACHE_LOOKUPS.labels("refresh").inc()
            bound.info("daily_forced_refresh")
        else:
            row = self.cache.get(user_id, local_date, tz)
            if row is not None:
                DAILY_CACHE_LOOKUPS.labels("hit").inc()
                bound.debug("daily_cache_hit")
                payload = copy.deepcopy(row.result)
                meta = payload.setdefault("meta", {})
                meta["cached"] = True
                meta["cache_key"] = {"user_id": user_id, "local_date": local_date, "tz": tz}
                return payload
            DAILY_CACHE_LOOKUPS.labels("miss").inc()
            bound.debug("daily_cache_miss")

        user = self.users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        payload = self._compute(user, tz, local_date)
        meta = payload["meta"]
        self.cache.upsert(
            DailyCacheRow(
                user_id=user_id,
                local_date=local_date,
                tz=tz,
                anchored_local_noon=meta["anchored_local_noon"],
                anchored_utc=meta["anchored_utc"],
                result=payload,
                created_at=isoformat_utc(datetime.now(UTC)),
            )
        )
        bound.info("daily_computed", overall=payload["scores"]["overall"])
        return copy.deepcopy(payload)

    def _compute(self, user: User, tz: str, local_date: str) -> dict[str, Any]:
        anchor = anchor_instant(tz, local_date)
        with ephemeris_call("longitudes", local_date=local_date):
            transit = self.ephemeris.longitudes_at(anchor.utc)
        natal = user.natal
        aspects = detect_aspects(transit, natal.longitudes())
        scored = score_personal_day(
            natal.sun_sign,
            aspects,
            top_n=self.top_n,
            explanation_limit=self.explanation_limit,
        )
        content = derive_content(user.id, local_date, tz, self.content.reload_if_changed())
        return {
            "meta": {
                "user_id": user.id,
                "tz": tz,
                "local_date": local_date,
                "anchored_local_noon": _local_iso(anchor.local_noon),
                "anchored_utc": isoformat_utc(anchor.utc),
                "cached": False,
            },
            "natal_summary": natal.summary(),
            "scores": scored.as_scores(),
            "explanations": scored.explanations,
            "daily_content": content.to_dict(),
        }

    def get_daily_public(
        self, tz: str, date: str | None = None, now: datetime | None = None
    ) -> dict[str, Any]:
        """Instantané du ciel à midi local (non personnalisé, non mis en cache)."""
        local_date = local_date_key(tz, date, now=now)
        anchor = anchor_instant(tz, local_date)
        with ephemeris_call("longitudes", local_date=local_date):
            longitudes = self.ephemeris.longitudes_at(anchor.utc)
        return {
            "meta": {
                "tz": tz,
                "local_date": local_date,
                "anchored_local_noon": _local_iso(anchor.local_noon),
                "anchored_utc": isoformat_utc(anchor.utc),
            },
            "sky": {
                "sun_sign": sign_from_longitude(longitudes[Body.SUN]).value,
                "moon_sign": sign_from_longitude(longitudes[Body.MOON]).value,
                "longitudes_deg": {b.value: deg for b, deg in longitudes.items()},
            },
        }
