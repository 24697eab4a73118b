"""Configuration de test pour pytest avec gestion des chemins.

Ce module configure pytest pour résoudre les imports `astro_daily` en ajoutant la racine du projet au
sys.path, force des réglages hermétiques (éphémérides par mouvement moyen, stockage en mémoire) et
fournit les fixtures partagées: listes de contenu temporaires, conteneur de test et client HTTP.
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so that
# imports like `from astro_daily...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Réglages lus à l'import du conteneur global
os.environ["EPHEMERIS_BACKEND"] = "mean"
os.environ["APP_DEBUG"] = "false"
for _key in ("DATABASE_URL", "REDIS_URL", "REQUIRE_REDIS", "OTLP_ENDPOINT"):
    os.environ.pop(_key, None)

from fastapi.testclient import TestClient  # noqa: E402

from astro_daily.api.deps import get_container  # noqa: E402
from astro_daily.app.main import app  # noqa: E402
from astro_daily.core.container import Container  # noqa: E402
from astro_daily.core.settings import Settings  # noqa: E402
from astro_daily.infra.astro.mean_motion import MeanMotionEphemeris  # noqa: E402
from astro_daily.infra.content_repo import ContentListRepository  # noqa: E402
from astro_daily.infra.repositories import (  # noqa: E402
    InMemoryDailyCacheRepo,
    InMemoryUserRepo,
)

CONTENT_FIXTURE = {
    "life_advices.txt": ["Breathe before you answer.", "Finish one thing.", "Ask for help."],
    "suggest_to_do.txt": ["Take a walk", "Call a friend", "Read ten pages", "Tidy your desk"],
    "avoid_to_do.txt": ["Impulse buys", "Late coffee", "Doomscrolling"],
    "daily_tasks.txt": ["Reply to emails", "Plan tomorrow", "Stretch", "Water plants"],
    "foods.txt": ["Miso soup", "Green apple", "Salmon"],
}


def write_content_dir(directory, lists=None):
    """Écrit les cinq fichiers de listes (un élément par ligne) dans `directory`."""
    for filename, items in (lists or CONTENT_FIXTURE).items():
        (directory / filename).write_text("\n".join(items) + "\n", encoding="utf-8")
    return directory


@pytest.fixture
def content_dir(tmp_path):
    """Répertoire temporaire contenant des listes de contenu valides."""
    return write_content_dir(tmp_path)


@pytest.fixture
def content_repo(content_dir):
    return ContentListRepository(content_dir)


@pytest.fixture
def test_container(content_repo):
    """Conteneur isolé: mouvement moyen, dépôts mémoire, listes temporaires."""
    return Container(
        settings=Settings(EPHEMERIS_BACKEND="mean"),
        ephemeris=MeanMotionEphemeris(),
        user_repo=InMemoryUserRepo(),
        cache_repo=InMemoryDailyCacheRepo(),
        content_repo=content_repo,
    )


@pytest.fixture
def client(test_container):
    """Client HTTP branché sur le conteneur de test."""
    app.dependency_overrides[get_container] = lambda: test_container
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_container, None)
