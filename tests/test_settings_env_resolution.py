"""
Tests pour la résolution des variables d'environnement.

Ce module teste le chargement des settings à partir de fichiers .env personnalisés et le câblage du
conteneur qui en découle.
"""

from __future__ import annotations

import importlib
from pathlib import Path

import pytest

from astro_daily.core.container import Container, build_ephemeris
from astro_daily.core.settings import Settings
from astro_daily.infra.astro.mean_motion import MeanMotionEphemeris
from astro_daily.infra.astro.swiss_ephemeris import SwissEphemerisProvider


def test_settings_reads_env_file(tmp_path: Path, monkeypatch) -> None:
    """Les valeurs d'un fichier ENV_FILE explicite sont appliquées aux settings."""
    env = tmp_path / ".env.custom"
    env.write_text(
        "EXPLANATION_LIMIT=3\nSCORING_TOP_ASPECTS=10\nAPP_NAME=astro-test\n", encoding="utf-8"
    )
    monkeypatch.setenv("ENV_FILE", str(env))

    settings_mod = importlib.import_module("astro_daily.core.settings")
    try:
        importlib.reload(settings_mod)
        s = settings_mod.get_settings()
        assert s.EXPLANATION_LIMIT == 3
        assert s.SCORING_TOP_ASPECTS == 10
        assert s.APP_NAME == "astro-test"
    finally:
        monkeypatch.delenv("ENV_FILE")
        importlib.reload(settings_mod)


def test_defaults() -> None:
    s = Settings(_env_file=None)
    assert s.SCORING_TOP_ASPECTS == 25
    assert s.EXPLANATION_LIMIT == 8
    assert s.APP_DEBUG is False


def test_build_ephemeris_selection() -> None:
    assert isinstance(build_ephemeris(Settings(EPHEMERIS_BACKEND="mean")), MeanMotionEphemeris)
    assert isinstance(
        build_ephemeris(Settings(EPHEMERIS_BACKEND="swisseph")), SwissEphemerisProvider
    )


def test_container_storage_selection(content_repo) -> None:
    mem = Container(settings=Settings(EPHEMERIS_BACKEND="mean"), content_repo=content_repo)
    assert mem.storage_backend == "memory"

    sql = Container(
        settings=Settings(EPHEMERIS_BACKEND="mean", DATABASE_URL="sqlite+pysqlite:///:memory:"),
        content_repo=content_repo,
    )
    assert sql.storage_backend == "sqlite"
    assert sql.daily_service.top_n == 25


def test_require_redis_without_url(content_repo) -> None:
    with pytest.raises(RuntimeError, match="REDIS_URL"):
        Container(
            settings=Settings(EPHEMERIS_BACKEND="mean", REQUIRE_REDIS=True),
            content_repo=content_repo,
        )
