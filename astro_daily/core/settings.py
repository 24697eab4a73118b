"""Définition et chargement des paramètres de configuration applicative.

Objectif du module
------------------
- Centraliser les paramètres (env/.env) via Pydantic Settings
- Résoudre le fichier `.env` à utiliser selon la stratégie: ENV_FILE > .env.{APP_ENV} > .env
"""

import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Détermination du fichier .env à utiliser avec priorité:
# 1) ENV_FILE (chemin explicite)
# 2) .env.{APP_ENV} si présent
# 3) .env (défaut)
_cwd = Path.cwd()
_env_file_from_env = os.getenv("ENV_FILE")
if _env_file_from_env:
    _ENV_FILE_PATH = _env_file_from_env
else:
    _app_env = os.getenv("APP_ENV", "dev")
    _candidate_specific = _cwd / f".env.{_app_env}"
    _candidate_default = _cwd / ".env"
    if _candidate_specific.exists():
        _ENV_FILE_PATH = _candidate_specific
    else:
        _ENV_FILE_PATH = _candidate_default


class Settings(BaseSettings):
    """Modèle de configuration chargé depuis l'environnement et .env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
    )
    APP_NAME: str = "astro-daily"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = False
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000

    # Stockage: DATABASE_URL > REDIS_URL > mémoire
    DATABASE_URL: str | None = None
    REDIS_URL: str | None = None
    REQUIRE_REDIS: bool = False

    # Éphémérides
    EPHEMERIS_BACKEND: Literal["swisseph", "mean"] = "swisseph"
    SE_EPHE_PATH: str | None = None

    # Contenus quotidiens (répertoire des listes .txt; défaut: infra/content)
    CONTENT_LISTS_DIR: str | None = None

    # Scoring
    SCORING_TOP_ASPECTS: int = 25
    EXPLANATION_LIMIT: int = 8

    OTLP_ENDPOINT: str | None = None
    LOG_LEVEL: str = "DEBUG"


def get_settings() -> Settings:
    """Construit et retourne la configuration de l'application."""
    return Settings()
