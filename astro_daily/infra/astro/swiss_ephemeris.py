"""
Fournisseur d'éphémérides Swiss Ephemeris (pyswisseph).

Les échecs de calcul ne sont pas masqués: une erreur `swisseph` remonte telle
quelle jusqu'à la frontière HTTP.
"""

from __future__ import annotations

import os
from datetime import UTC, datetime

import swisseph as swe

from astro_daily.domain.angles import normalize_degrees
from astro_daily.domain.zodiac import Body
from astro_daily.infra.astro.base import EphemerisProvider

SWE_BODIES: dict[Body, int] = {
    Body.SUN: swe.SUN,
    Body.MOON: swe.MOON,
    Body.MERCURY: swe.MERCURY,
    Body.VENUS: swe.VENUS,
    Body.MARS: swe.MARS,
    Body.JUPITER: swe.JUPITER,
    Body.SATURN: swe.SATURN,
    Body.URANUS: swe.URANUS,
    Body.NEPTUNE: swe.NEPTUNE,
    Body.PLUTO: swe.PLUTO,
}

WHOLE_SIGN = b"W"


def to_jd_utc(utc: datetime) -> float:
    """Convertit un instant en jour julien UTC (calendrier grégorien)."""
    if utc.tzinfo is None:
        utc = utc.replace(tzinfo=UTC)
    utc = utc.astimezone(UTC)
    hour = utc.hour + utc.minute / 60 + utc.second / 3600 + utc.microsecond / 3_600_000_000
    return swe.julday(utc.year, utc.month, utc.day, hour, swe.GREG_CAL)


class SwissEphemerisProvider(EphemerisProvider):
    """Longitudes tropicales géocentriques et ascendant via Swiss Ephemeris.

    Sans fichiers d'éphémérides, la bibliothèque bascule sur l'éphéméride
    analytique de Moshier (précision largement suffisante ici).
    """

    name = "swisseph"

    def __init__(self, ephe_path: str | os.PathLike[str] | None = None, use_moshier: bool = False):
        """
        Initialise le fournisseur.

        Args:
            ephe_path: répertoire des fichiers .se1 (optionnel).
            use_moshier: force l'éphéméride analytique de Moshier.
        """
        if ephe_path and os.path.isdir(os.fspath(ephe_path)):
            swe.set_ephe_path(os.fspath(ephe_path))
        self._flags = swe.FLG_MOSEPH if use_moshier else swe.FLG_SWIEPH

    def longitudes_at(self, utc: datetime) -> dict[Body, float]:
        """Longitudes écliptiques de chaque corps à l'instant `utc`."""
        jd = to_jd_utc(utc)
        out: dict[Body, float] = {}
        for body, code in SWE_BODIES.items():
            values, _ = swe.calc_ut(jd, code, self._flags)
            out[body] = normalize_degrees(values[0])
        return out

    def ascendant_at(self, utc: datetime, lat: float, lon: float) -> float:
        """Ascendant (ascmc[0]) pour le lieu donné."""
        _cusps, ascmc = swe.houses(to_jd_utc(utc), lat, lon, WHOLE_SIGN)
        return normalize_degrees(ascmc[0])
