"""
Éphémérides approchées par mouvement moyen (sans dépendance externe).

Ce module implémente un fournisseur déterministe pour le développement et les
tests: orbites circulaires à partir des longitudes moyennes J2000, conversion
héliocentrique → géocentrique, et ascendant calculé à partir du temps sidéral
(GMST), de l'obliquité moyenne et de la latitude. La précision est de l'ordre
du degré pour les planètes, insuffisante pour la production.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime

from astro_daily.domain.angles import normalize_degrees
from astro_daily.domain.zodiac import Body
from astro_daily.infra.astro.base import EphemerisProvider

J2000 = 2451545.0
UNIX_EPOCH_JD = 2440587.5

# (longitude moyenne J2000 en degrés, mouvement moyen en degrés/jour)
SUN_ELEMENTS = (280.46646, 0.98564736)
MOON_ELEMENTS = (218.3165, 13.17639648)

# (longitude moyenne J2000, mouvement moyen, demi-grand axe en UA)
PLANET_ELEMENTS: dict[Body, tuple[float, float, float]] = {
    Body.MERCURY: (252.250906, 4.092338, 0.387098),
    Body.VENUS: (181.979801, 1.602131, 0.723332),
    Body.MARS: (355.433000, 0.524033, 1.523679),
    Body.JUPITER: (34.351519, 0.083091, 5.202603),
    Body.SATURN: (50.077444, 0.033460, 9.554909),
    Body.URANUS: (314.055005, 0.011731, 19.218446),
    Body.NEPTUNE: (304.348665, 0.005981, 30.110387),
    Body.PLUTO: (238.928810, 0.003964, 39.482117),
}


def julian_date(utc: datetime) -> float:
    """Jour julien d'un instant (aware ou naïf supposé UTC)."""
    if utc.tzinfo is None:
        utc = utc.replace(tzinfo=UTC)
    return utc.timestamp() / 86400.0 + UNIX_EPOCH_JD


def gmst_deg(utc: datetime) -> float:
    """Temps sidéral moyen de Greenwich, en degrés."""
    jd = julian_date(utc)
    t = (jd - J2000) / 36525.0
    gmst = (
        280.46061837
        + 360.98564736629 * (jd - J2000)
        + 0.000387933 * t * t
        - (t * t * t) / 38710000.0
    )
    return normalize_degrees(gmst)


def mean_obliquity_deg(utc: datetime) -> float:
    """Obliquité moyenne de l'écliptique, en degrés."""
    t = (julian_date(utc) - J2000) / 36525.0
    return 23.439291 - 0.0130042 * t - 1.64e-7 * t * t + 5.04e-7 * t * t * t


def ascendant_longitude_deg(utc: datetime, lat_deg: float, lon_deg: float) -> float:
    """
    Longitude écliptique de l'ascendant.

    λ = atan2(sin θ · cos ε − tan φ · sin ε, cos θ), avec θ le temps sidéral
    local, ε l'obliquité moyenne et φ la latitude.
    """
    theta = math.radians(normalize_degrees(gmst_deg(utc) + lon_deg))
    eps = math.radians(mean_obliquity_deg(utc))
    phi = math.radians(lat_deg)
    y = math.sin(theta) * math.cos(eps) - math.tan(phi) * math.sin(eps)
    x = math.cos(theta)
    return normalize_degrees(math.degrees(math.atan2(y, x)))


class MeanMotionEphemeris(EphemerisProvider):
    """Fournisseur déterministe par mouvement moyen (développement et tests)."""

    name = "mean"

    def longitudes_at(self, utc: datetime) -> dict[Body, float]:
        """Longitudes géocentriques approchées à l'instant `utc`."""
        d = julian_date(utc) - J2000
        sun = normalize_degrees(SUN_ELEMENTS[0] + SUN_ELEMENTS[1] * d)
        moon = normalize_degrees(MOON_ELEMENTS[0] + MOON_ELEMENTS[1] * d)

        # La Terre est à l'opposé du Soleil vu de la Terre, à 1 UA
        earth = math.radians(sun + 180.0)
        ex, ey = math.cos(earth), math.sin(earth)

        out: dict[Body, float] = {Body.SUN: sun, Body.MOON: moon}
        for body, (l0, rate, a) in PLANET_ELEMENTS.items():
            helio = math.radians(l0 + rate * d)
            x = a * math.cos(helio) - ex
            y = a * math.sin(helio) - ey
            out[body] = normalize_degrees(math.degrees(math.atan2(y, x)))
        return {b: out[b] for b in Body}

    def ascendant_at(self, utc: datetime, lat: float, lon: float) -> float:
        """Ascendant approché (voir `ascendant_longitude_deg`)."""
        return ascendant_longitude_deg(utc, lat, lon)
