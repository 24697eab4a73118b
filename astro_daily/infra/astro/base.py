"""Interface de base des fournisseurs d'éphémérides."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from astro_daily.domain.zodiac import Body


class EphemerisProvider(ABC):
    """Interface abstraite: longitudes écliptiques et ascendant à un instant UTC.

    Toutes les valeurs retournées sont normalisées dans [0, 360).
    """

    name: str = "abstract"

    @abstractmethod
    def longitudes_at(self, utc: datetime) -> dict[Body, float]:
        """Longitude écliptique tropicale de chaque corps de `Body`."""
        ...

    @abstractmethod
    def ascendant_at(self, utc: datetime, lat: float, lon: float) -> float:
        """Longitude écliptique de l'ascendant pour un lieu (lat +N, lon +E)."""
        ...
