"""
Tests pour les services métier (inscription, prévision quotidienne).

Les éphémérides factices renvoient les mêmes longitudes à tout instant: le ciel du jour est donc
identique au thème natal, ce qui rend les aspects et les scores prévisibles.
"""

from __future__ import annotations

import copy
from datetime import UTC, datetime

import pytest

from astro_daily.domain.entities import BirthInput
from astro_daily.domain.errors import (
    ContentConfigurationError,
    InvalidInputError,
    UserNotFoundError,
)
from astro_daily.domain.services import DailyForecastService, UserService
from astro_daily.infra.astro.fake_deterministic import FakeDeterministicEphemeris
from astro_daily.infra.repositories import InMemoryDailyCacheRepo, InMemoryUserRepo

BIRTH = BirthInput(
    birth_date="2002-05-14", birth_time="09:25", birth_tz="Asia/Tokyo", lat=35.6762, lon=139.6503
)
TZ = "Asia/Tokyo"
DAY = "2026-01-06"


@pytest.fixture
def ephemeris():
    return FakeDeterministicEphemeris()


@pytest.fixture
def users():
    return InMemoryUserRepo()


@pytest.fixture
def cache():
    return InMemoryDailyCacheRepo()


@pytest.fixture
def user_service(ephemeris, users):
    return UserService(ephemeris, users)


@pytest.fixture
def daily_service(ephemeris, users, cache, content_repo):
    return DailyForecastService(ephemeris, users, cache, content_repo)


def test_register_builds_natal_chart(user_service, users):
    user = user_service.register(BIRTH)
    natal = user.natal
    assert natal.sun_sign == "Leo"
    assert natal.moon_sign == "Cancer"
    assert natal.ascendant.rising_sign == "Aries"
    assert natal.houses.system == "Whole Sign"
    assert natal.houses.first_house_sign == "Aries"
    assert natal.birth.birth_utc == "2002-05-14T00:25:00.000Z"
    assert natal.longitudes_deg["Sun"] == 135.0
    assert users.get(user.id) is user
    assert user.created_at.endswith("Z")


def test_register_rejects_bad_birth_time(user_service):
    bad = BIRTH.model_copy(update={"birth_time": "9h25"})
    with pytest.raises(InvalidInputError):
        user_service.register(bad)


def test_get_unknown_user(user_service):
    with pytest.raises(UserNotFoundError) as err:
        user_service.get("nope")
    assert err.value.user_id == "nope"


def test_daily_miss_then_hit(user_service, daily_service, ephemeris, cache):
    user = user_service.register(BIRTH)
    first = daily_service.get_daily_personal(user.id, TZ, DAY)
    assert first["meta"]["cached"] is False
    assert "cache_key" not in first["meta"]
    assert first["meta"]["anchored_utc"] == "2026-01-06T03:00:00.000Z"
    assert first["meta"]["anchored_local_noon"] == "2026-01-06T12:00:00.000+09:00"
    assert first["natal_summary"] == {
        "sun_sign": "Leo",
        "moon_sign": "Cancer",
        "rising_sign": "Aries",
    }
    assert cache.get(user.id, DAY, TZ) is not None

    second = daily_service.get_daily_personal(user.id, TZ, DAY)
    assert second["meta"]["cached"] is True
    assert second["meta"]["cache_key"] == {"user_id": user.id, "local_date": DAY, "tz": TZ}
    assert second["scores"] == first["scores"]
    assert second["daily_content"] == first["daily_content"]
    # inscription + un seul calcul quotidien
    assert len(ephemeris.calls) == 2


def test_refresh_recomputes_identical_payload(user_service, daily_service, cache):
    user = user_service.register(BIRTH)
    first = daily_service.get_daily_personal(user.id, TZ, DAY)
    row_before = copy.deepcopy(cache.get(user.id, DAY, TZ))

    again = daily_service.get_daily_personal(user.id, TZ, DAY, refresh=True)
    twice = daily_service.get_daily_personal(user.id, TZ, DAY, refresh=True)
    assert again == first == twice
    assert cache.get(user.id, DAY, TZ).result == row_before.result


def test_scores_and_explanations(user_service, daily_service):
    user = user_service.register(BIRTH)
    payload = daily_service.get_daily_personal(user.id, TZ, DAY)
    scores = payload["scores"]
    assert set(scores) == {"overall", "career", "fortune", "love", "social", "study"}
    assert all(isinstance(v, int) and 0 <= v <= 100 for v in scores.values())
    # ciel identique au natal: chaque corps est en conjonction exacte avec lui-même
    assert len(payload["explanations"]) == 8
    assert payload["explanations"][0].startswith("Moon ")


def test_explanation_limit_setting(user_service, ephemeris, users, cache, content_repo):
    service = DailyForecastService(
        ephemeris, users, cache, content_repo, explanation_limit=3
    )
    user = user_service.register(BIRTH)
    assert len(service.get_daily_personal(user.id, TZ, DAY)["explanations"]) == 3


def test_unknown_user_is_not_cached(daily_service, cache):
    with pytest.raises(UserNotFoundError):
        daily_service.get_daily_personal("ghost", TZ, DAY)
    assert cache.get("ghost", DAY, TZ) is None


def test_invalid_timezone(user_service, daily_service):
    user = user_service.register(BIRTH)
    with pytest.raises(InvalidInputError):
        daily_service.get_daily_personal(user.id, "Mars/Olympus", DAY)


def test_default_date_uses_timezone(user_service, daily_service):
    user = user_service.register(BIRTH)
    now = datetime(2026, 1, 5, 20, 0, tzinfo=UTC)
    payload = daily_service.get_daily_personal(user.id, TZ, now=now)
    assert payload["meta"]["local_date"] == "2026-01-06"


def test_empty_content_list_fails(user_service, daily_service, content_dir):
    (content_dir / "foods.txt").write_text("\n\n", encoding="utf-8")
    user = user_service.register(BIRTH)
    with pytest.raises(ContentConfigurationError):
        daily_service.get_daily_personal(user.id, TZ, DAY)


def test_daily_public(daily_service):
    payload = daily_service.get_daily_public(TZ, DAY)
    assert payload["meta"] == {
        "tz": TZ,
        "local_date": DAY,
        "anchored_local_noon": "2026-01-06T12:00:00.000+09:00",
        "anchored_utc": "2026-01-06T03:00:00.000Z",
    }
    assert payload["sky"]["sun_sign"] == "Leo"
    assert payload["sky"]["moon_sign"] == "Cancer"
    assert list(payload["sky"]["longitudes_deg"]) == [
        "Sun", "Moon", "Mercury", "Venus", "Mars",
        "Jupiter", "Saturn", "Uranus", "Neptune", "Pluto",
    ]
