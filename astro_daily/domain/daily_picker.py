"""
Contenu quotidien déterministe (conseil, suggestions, couleur, nombres...).

Le tirage dépend uniquement de (user_id, date locale, fuseau): chaque catégorie
possède son propre générateur, initialisé par une graine
`user_id|date|tz|<catégorie>` hachée en SHA-256 (4 premiers octets, petit-boutiste).
Le générateur est mulberry32, reproduit bit à bit pour que les résultats déjà
mis en cache restent cohérents d'une version à l'autre.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable, Sequence
from dataclasses import asdict, dataclass
from typing import Any, TypeVar

from astro_daily.domain.errors import ContentConfigurationError

PICKER_ALGORITHM = "sha256-le32+mulberry32-v1"

LUCKY_COLORS: tuple[str, ...] = (
    "Red", "Orange", "Yellow", "Green", "Blue", "Indigo", "Violet",
    "Pink", "Purple", "Teal", "Cyan", "Magenta",
    "Black", "White", "Gray", "Brown",
    "Gold", "Silver", "Navy", "Maroon",
)

LUCKY_NUMBER_RANGE = range(1, 100)
LUCKY_START_HOUR_MIN = 8
LUCKY_START_HOUR_MAX = 21
LUCKY_WINDOW_HOURS = 2

_MASK32 = 0xFFFFFFFF

T = TypeVar("T")
Rng = Callable[[], float]


@dataclass(frozen=True)
class ContentLists:
    """Listes sources ordonnées (une entrée non vide par élément)."""

    life_advices: tuple[str, ...]
    suggest_to_do: tuple[str, ...]
    avoid_to_do: tuple[str, ...]
    daily_tasks: tuple[str, ...]
    foods: tuple[str, ...]

    def require_non_empty(self) -> None:
        """Lève `ContentConfigurationError` si une liste est vide."""
        for name, items in asdict(self).items():
            if not items:
                raise ContentConfigurationError(f"content list '{name}' is empty")


@dataclass(frozen=True)
class DailyContent:
    """Contenu "chance" du jour."""

    life_advice: str
    suggest_to_do: list[str]
    avoid_to_do: list[str]
    lucky_food: str
    daily_tasks: list[str]
    lucky_color: str
    lucky_numbers: list[int]
    lucky_time: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def hash_to_uint32(seed: str) -> int:
    """Entier 32 bits non signé: 4 premiers octets (LE) du SHA-256 de `seed`."""
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "little")


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


def mulberry32(seed: int) -> Rng:
    """Générateur mulberry32: retourne une fonction produisant des flottants dans [0, 1)."""
    state = seed & _MASK32

    def next_float() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & _MASK32
        t = _imul(state ^ (state >> 15), 1 | state)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & _MASK32) ^ t
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296

    return next_float


def pick_one(rng: Rng, items: Sequence[T]) -> T:
    """Tire un élément uniformément par index."""
    if not items:
        raise ContentConfigurationError("cannot pick from an empty list")
    return items[int(rng() * len(items))]


def pick_n_unique(rng: Rng, items: Sequence[T], n: int) -> list[T]:
    """Tire `n` éléments distincts (sans remise); tous si la liste est plus courte."""
    pool = list(items)
    out: list[T] = []
    for _ in range(min(n, len(pool))):
        out.append(pool.pop(int(rng() * len(pool))))
    return out


def format_hour_range(start_hour: int, hours: int = LUCKY_WINDOW_HOURS) -> str:
    """Fenêtre horaire au format 12h, ex. 17 -> "5PM-7PM", 22 -> "10PM-12AM"."""

    def fmt(h24: int) -> str:
        suffix = "PM" if h24 >= 12 else "AM"
        h = h24 % 12 or 12
        return f"{h}{suffix}"

    return f"{fmt(start_hour)}-{fmt((start_hour + hours) % 24)}"


def category_rng(user_id: str, local_date: str, tz: str, category: str) -> Rng:
    """Générateur indépendant pour une catégorie de contenu."""
    return mulberry32(hash_to_uint32(f"{user_id}|{local_date}|{tz}|{category}"))


def derive_content(user_id: str, local_date: str, tz: str, lists: ContentLists) -> DailyContent:
    """
    Dérive le contenu du jour, identique pour des entrées identiques.

    Args:
        user_id: identifiant utilisateur.
        local_date: date locale "YYYY-MM-DD".
        tz: fuseau IANA utilisé pour la clé de cache.
        lists: listes sources (doivent toutes être non vides).

    Raises:
        ContentConfigurationError: une liste source est vide.
    """
    lists.require_non_empty()

    def rng(category: str) -> Rng:
        return category_rng(user_id, local_date, tz, category)

    time_rng = rng("time")
    span = LUCKY_START_HOUR_MAX - LUCKY_START_HOUR_MIN + 1
    start_hour = LUCKY_START_HOUR_MIN + int(time_rng() * span)

    return DailyContent(
        life_advice=pick_one(rng("advice"), lists.life_advices),
        suggest_to_do=pick_n_unique(rng("suggest"), lists.suggest_to_do, 2),
        avoid_to_do=pick_n_unique(rng("avoid"), lists.avoid_to_do, 2),
        lucky_food=pick_one(rng("food"), lists.foods),
        daily_tasks=pick_n_unique(rng("tasks"), lists.daily_tasks, 3),
        lucky_color=pick_one(rng("color"), LUCKY_COLORS),
        lucky_numbers=pick_n_unique(rng("numbers"), LUCKY_NUMBER_RANGE, 2),
        lucky_time=format_hour_range(start_hour),
    )
