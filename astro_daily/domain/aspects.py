"""
Détection des aspects transit → natal.

Pour chaque couple (corps en transit, corps natal) on calcule la séparation
angulaire et on la compare aux cinq aspects majeurs, avec un orbe dépendant
des luminaires. La force d'un aspect vaut `1 - distance / orbe`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

from astro_daily.domain.angles import angular_separation
from astro_daily.domain.zodiac import BODIES, Body

MOON_RANK_BONUS = 0.05
LUMINARIES = frozenset({Body.SUN, Body.MOON})


@dataclass(frozen=True)
class Aspect:
    """Aspect canonique (angle exact, poids de base, polarité par défaut)."""

    name: str
    angle: float
    base_weight: int
    default_polarity: float


CONJUNCTION = Aspect("Conjunction", 0.0, 10, 0.0)
SEXTILE = Aspect("Sextile", 60.0, 6, 1.0)
SQUARE = Aspect("Square", 90.0, 8, -0.55)
TRINE = Aspect("Trine", 120.0, 8, 1.0)
OPPOSITION = Aspect("Opposition", 180.0, 10, -0.65)

ASPECTS: tuple[Aspect, ...] = (CONJUNCTION, SEXTILE, SQUARE, TRINE, OPPOSITION)


@dataclass(frozen=True)
class DetectedAspect:
    """Aspect détecté entre un corps en transit et un corps natal."""

    transit_body: Body
    natal_body: Body
    aspect: str
    angle: float
    separation_deg: float
    orb_deg: float
    distance_from_exact_deg: float
    strength: float
    polarity: float
    base_weight: int
    involves_moon: bool

    def rank_key(self) -> float:
        """Clé de tri: la Lune reçoit un léger bonus sans modifier la force."""
        return self.strength + (MOON_RANK_BONUS if self.involves_moon else 0.0)

    def to_dict(self) -> dict[str, Any]:
        """Représentation sérialisable (noms de corps en clair)."""
        data = asdict(self)
        data["transit_body"] = self.transit_body.value
        data["natal_body"] = self.natal_body.value
        return data


def orb_for_pair(body_a: Body, body_b: Body, aspect: Aspect) -> float:
    """Orbe toléré pour un couple de corps et un aspect donné."""
    with_luminary = body_a in LUMINARIES or body_b in LUMINARIES
    if aspect.name == SEXTILE.name:
        return 5.0 if with_luminary else 4.0
    return 8.0 if with_luminary else 6.0


def conjunction_polarity(body_a: Body, body_b: Body) -> float:
    """Polarité d'une conjonction selon les corps impliqués."""
    pair = {body_a, body_b}
    if Body.VENUS in pair or Body.JUPITER in pair:
        return 1.0
    if Body.SATURN in pair:
        return -1.0
    # Mars: neutre, comme tout autre couple
    return 0.0


def detect_aspects(
    transit_longitudes: Mapping[Body, float],
    natal_longitudes: Mapping[Body, float],
) -> list[DetectedAspect]:
    """
    Détecte tous les aspects transit → natal dans l'orbe.

    Parcourt le produit cartésien des corps (y compris un corps avec lui-même)
    et les cinq aspects. Le résultat est trié par force décroissante, la Lune
    recevant un bonus de classement de 0.05. Aucune troncature n'est faite.

    Args:
        transit_longitudes: longitudes des corps au moment du transit.
        natal_longitudes: longitudes natales de l'utilisateur.

    Returns:
        list[DetectedAspect]: aspects classés.
    """
    found: list[DetectedAspect] = []
    transit_bodies = [b for b in BODIES if b in transit_longitudes]
    natal_bodies = [b for b in BODIES if b in natal_longitudes]

    for t in transit_bodies:
        for n in natal_bodies:
            sep = angular_separation(transit_longitudes[t], natal_longitudes[n])
            for asp in ASPECTS:
                orb = orb_for_pair(t, n, asp)
                dist = abs(sep - asp.angle)
                if dist > orb:
                    continue
                polarity = asp.default_polarity
                if asp is CONJUNCTION:
                    polarity = conjunction_polarity(t, n)
                found.append(
                    DetectedAspect(
                        transit_body=t,
                        natal_body=n,
                        aspect=asp.name,
                        angle=asp.angle,
                        separation_deg=sep,
                        orb_deg=orb,
                        distance_from_exact_deg=dist,
                        strength=1.0 - dist / orb,
                        polarity=polarity,
                        base_weight=asp.base_weight,
                        involves_moon=Body.MOON in (t, n),
                    )
                )

    # tri stable: l'ordre de parcours départage les égalités
    found.sort(key=DetectedAspect.rank_key, reverse=True)
    return found


def intensity_label(strength: float) -> str:
    """strong / moderate / mild selon les seuils 0.75 et 0.45."""
    if strength >= 0.75:
        return "strong"
    if strength >= 0.45:
        return "moderate"
    return "mild"


def tone_label(polarity: float) -> str:
    """supportive / challenging / mixed selon le signe de la polarité."""
    if polarity > 0:
        return "supportive"
    if polarity < 0:
        return "challenging"
    return "mixed"


def aspect_to_text(a: DetectedAspect) -> str:
    """Phrase courte, ex. "Moon Trine natal Venus (strong, supportive)"."""
    bodies = f"{a.transit_body.value} {a.aspect} natal {a.natal_body.value}"
    return f"{bodies} ({intensity_label(a.strength)}, {tone_label(a.polarity)})"
