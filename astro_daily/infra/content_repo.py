"""Dépôt des listes de contenu basé sur des fichiers texte.

Ce module charge les listes sources du contenu quotidien (conseils, suggestions,
choses à éviter, tâches, aliments) depuis un répertoire: un élément par ligne,
lignes vides ignorées. Les listes sont gardées en mémoire et rechargées
uniquement quand la date de modification la plus récente des fichiers change.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path

import structlog

from astro_daily.app.metrics import CONTENT_LIST_RELOADS
from astro_daily.domain.daily_picker import ContentLists
from astro_daily.domain.errors import ContentConfigurationError

LIST_FILES: dict[str, str] = {
    "life_advices": "life_advices.txt",
    "suggest_to_do": "suggest_to_do.txt",
    "avoid_to_do": "avoid_to_do.txt",
    "daily_tasks": "daily_tasks.txt",
    "foods": "foods.txt",
}

DEFAULT_LISTS_DIR = Path(__file__).resolve().parent / "content"


def read_lines(path: Path) -> tuple[str, ...]:
    """Lit un fichier liste: lignes nettoyées, vides ignorées."""
    with open(path, encoding="utf-8") as f:
        return tuple(s for s in (line.strip() for line in f) if s)


class ContentListRepository:
    """Dépôt de listes de contenu avec rechargement sur changement de mtime.

    Une instance est injectée dans le service; l'accès au cache interne est
    protégé par un verrou.
    """

    def __init__(self, directory: str | os.PathLike[str] | None = None):
        """Initialise le dépôt.

        Paramètres:
        - directory: répertoire contenant les cinq fichiers `LIST_FILES`.
        """
        self.directory = Path(directory) if directory else DEFAULT_LISTS_DIR
        self._lock = threading.Lock()
        self._cached: ContentLists | None = None
        self._cached_mtime: float | None = None
        self._log = structlog.get_logger(__name__).bind(directory=str(self.directory))

    def _newest_mtime(self) -> float:
        mtimes = []
        for filename in LIST_FILES.values():
            path = self.directory / filename
            try:
                mtimes.append(path.stat().st_mtime)
            except FileNotFoundError as err:
                raise ContentConfigurationError(f"content list file missing: {path}") from err
        return max(mtimes)

    def reload_if_changed(self) -> ContentLists:
        """Retourne les listes, relues depuis le disque si un fichier a changé.

        Raises:
            ContentConfigurationError: fichier absent.
        """
        with self._lock:
            newest = self._newest_mtime()
            if self._cached is not None and self._cached_mtime == newest:
                return self._cached
            lists = ContentLists(
                **{field: read_lines(self.directory / name) for field, name in LIST_FILES.items()}
            )
            self._cached = lists
            self._cached_mtime = newest
            CONTENT_LIST_RELOADS.inc()
            self._log.info(
                "content_lists_loaded",
                sizes={field: len(getattr(lists, field)) for field in LIST_FILES},
            )
            return lists
