"""
Corps célestes, signes du zodiaque tropical et maîtrises.

Les tables de correspondance sont indexées par des énumérations fermées et
vérifiées à l'import: une entrée manquante fait échouer le chargement du module.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from enum import Enum

from astro_daily.domain.angles import normalize_degrees


class Body(str, Enum):
    """Corps pris en compte (ordre fixe, utilisé pour les itérations)."""

    SUN = "Sun"
    MOON = "Moon"
    MERCURY = "Mercury"
    VENUS = "Venus"
    MARS = "Mars"
    JUPITER = "Jupiter"
    SATURN = "Saturn"
    URANUS = "Uranus"
    NEPTUNE = "Neptune"
    PLUTO = "Pluto"


class Sign(str, Enum):
    """Les 12 signes occidentaux, dans l'ordre à partir du Bélier (0°)."""

    ARIES = "Aries"
    TAURUS = "Taurus"
    GEMINI = "Gemini"
    CANCER = "Cancer"
    LEO = "Leo"
    VIRGO = "Virgo"
    LIBRA = "Libra"
    SCORPIO = "Scorpio"
    SAGITTARIUS = "Sagittarius"
    CAPRICORN = "Capricorn"
    AQUARIUS = "Aquarius"
    PISCES = "Pisces"


SIGNS: tuple[Sign, ...] = tuple(Sign)
BODIES: tuple[Body, ...] = tuple(Body)

RULERS: dict[Sign, Body] = {
    Sign.ARIES: Body.MARS,
    Sign.TAURUS: Body.VENUS,
    Sign.GEMINI: Body.MERCURY,
    Sign.CANCER: Body.MOON,
    Sign.LEO: Body.SUN,
    Sign.VIRGO: Body.MERCURY,
    Sign.LIBRA: Body.VENUS,
    Sign.SCORPIO: Body.MARS,
    Sign.SAGITTARIUS: Body.JUPITER,
    Sign.CAPRICORN: Body.SATURN,
    Sign.AQUARIUS: Body.URANUS,
    Sign.PISCES: Body.NEPTUNE,
}

_SIGN_BY_LOWER = {s.value.lower(): s for s in Sign}


def ensure_complete(table: Mapping, keys: Iterable, name: str) -> None:
    """Vérifie qu'une table couvre exactement l'énumération attendue.

    Raises:
        RuntimeError: si une clé manque ou si une clé inattendue est présente.
    """
    expected = set(keys)
    actual = set(table)
    if expected != actual:
        missing = sorted(str(k.value) for k in expected - actual)
        extra = sorted(str(getattr(k, "value", k)) for k in actual - expected)
        raise RuntimeError(f"incomplete table {name}: missing={missing} extra={extra}")


ensure_complete(RULERS, Sign, "RULERS")


def longitude_set(raw: Mapping[str | Body, float]) -> dict[Body, float]:
    """Construit un jeu de longitudes complet (un corps = une valeur normalisée).

    Accepte des clés `Body` ou leur nom ("Sun", ...), typiquement après un
    aller-retour JSON. L'ordre du résultat suit toujours `Body`.

    Raises:
        ValueError: corps manquant ou inconnu.
    """
    values = {Body(k): float(v) for k, v in raw.items()}
    missing = [b.value for b in Body if b not in values]
    if missing:
        raise ValueError(f"longitudes missing for: {', '.join(missing)}")
    return {b: normalize_degrees(values[b]) for b in Body}


def sign_from_longitude(lon_deg: float) -> Sign:
    """Retourne le signe contenant la longitude (tranches de 30° depuis le Bélier)."""
    idx = math.floor(normalize_degrees(lon_deg) / 30.0)
    return SIGNS[min(idx, 11)]


def normalize_sign(sign: str | Sign | None) -> str:
    """Nom canonique d'un signe (insensible à la casse), ou "" si inconnu.

    Une chaîne vide doit être traitée comme une erreur de validation par les
    appelants qui reçoivent un signe saisi par l'utilisateur.
    """
    if isinstance(sign, Sign):
        return sign.value
    s = str(sign or "").strip().lower()
    if not s:
        return ""
    found = _SIGN_BY_LOWER.get(s)
    return found.value if found else ""


def ruler_of(sign: str | Sign | None) -> Body:
    """Maître traditionnel/moderne du signe; le Soleil par défaut."""
    name = normalize_sign(sign)
    if not name:
        return Body.SUN
    return RULERS[Sign(name)]
