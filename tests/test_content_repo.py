"""Tests du dépôt de listes de contenu (fichiers texte, rechargement sur mtime)."""

from __future__ import annotations

import os

import pytest

from astro_daily.domain.errors import ContentConfigurationError
from astro_daily.infra.content_repo import (
    DEFAULT_LISTS_DIR,
    LIST_FILES,
    ContentListRepository,
)


def test_loads_trimmed_non_blank_lines(content_dir):
    (content_dir / "foods.txt").write_text("  Miso soup \n\n\nSalmon\n   \n", encoding="utf-8")
    lists = ContentListRepository(content_dir).reload_if_changed()
    assert lists.foods == ("Miso soup", "Salmon")
    assert len(lists.suggest_to_do) == 4


def test_cached_until_mtime_changes(content_repo, content_dir):
    first = content_repo.reload_if_changed()
    assert content_repo.reload_if_changed() is first

    path = content_dir / "life_advices.txt"
    path.write_text("Only one advice\n", encoding="utf-8")
    newer = os.stat(path).st_mtime + 10
    os.utime(path, (newer, newer))

    second = content_repo.reload_if_changed()
    assert second is not first
    assert second.life_advices == ("Only one advice",)


def test_missing_file_is_a_configuration_error(content_dir):
    (content_dir / "daily_tasks.txt").unlink()
    with pytest.raises(ContentConfigurationError, match="daily_tasks.txt"):
        ContentListRepository(content_dir).reload_if_changed()


def test_bundled_lists_are_complete_and_non_empty():
    lists = ContentListRepository().reload_if_changed()
    assert ContentListRepository().directory == DEFAULT_LISTS_DIR
    for field in LIST_FILES:
        assert getattr(lists, field), field
    lists.require_non_empty()
