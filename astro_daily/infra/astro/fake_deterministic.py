"""Fournisseur d'éphémérides factice déterministe pour les tests.

Ce module implémente un fournisseur qui renvoie des longitudes fixes, quelle que
soit la date, pour écrire des tests prévisibles sans calcul astronomique.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from astro_daily.domain.zodiac import Body, longitude_set
from astro_daily.infra.astro.base import EphemerisProvider

# Soleil à 15° Lion, Lune à 10° Cancer, le reste réparti sur le zodiaque
DEFAULT_LONGITUDES: dict[Body, float] = {
    Body.SUN: 135.0,
    Body.MOON: 100.0,
    Body.MERCURY: 150.0,
    Body.VENUS: 200.0,
    Body.MARS: 10.0,
    Body.JUPITER: 250.0,
    Body.SATURN: 320.0,
    Body.URANUS: 40.0,
    Body.NEPTUNE: 355.0,
    Body.PLUTO: 300.0,
}


class FakeDeterministicEphemeris(EphemerisProvider):
    """Éphémérides factices: mêmes longitudes et même ascendant à tout instant.

    Enregistre les instants demandés dans `calls` pour les assertions de test.
    """

    name = "fake"

    def __init__(
        self,
        longitudes: Mapping[Body | str, float] | None = None,
        ascendant: float = 15.0,
    ):
        """
        Args:
            longitudes: longitudes à renvoyer (toutes les valeurs de `Body`).
            ascendant: longitude d'ascendant renvoyée.
        """
        self._longitudes = longitude_set(longitudes or DEFAULT_LONGITUDES)
        self._ascendant = ascendant
        self.calls: list[datetime] = []

    def longitudes_at(self, utc: datetime) -> dict[Body, float]:
        """Retourne une copie des longitudes fixes."""
        self.calls.append(utc)
        return dict(self._longitudes)

    def ascendant_at(self, utc: datetime, lat: float, lon: float) -> float:
        """Retourne l'ascendant fixe."""
        return self._ascendant
