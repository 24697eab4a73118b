"""
Entités du domaine métier.

Ce module définit les modèles de données principaux: données de naissance,
thème natal (immutable une fois créé) et utilisateur.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from astro_daily.domain.zodiac import Body, longitude_set

HouseSystem = Literal["Whole Sign"]


class BirthInput(BaseModel):
    """Données de naissance pour le calcul du thème natal."""

    birth_date: str  # YYYY-MM-DD
    birth_time: str  # HH:MM (24h)
    birth_tz: str  # IANA TZ
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class BirthRecord(BirthInput):
    """Données de naissance complétées par l'instant UTC calculé."""

    model_config = ConfigDict(frozen=True)

    birth_utc: str


class Ascendant(BaseModel):
    """Longitude de l'ascendant et signe ascendant."""

    model_config = ConfigDict(frozen=True)

    longitude_deg: float
    rising_sign: str


class Houses(BaseModel):
    """Maisons en signes entiers: la 1re maison est le signe ascendant."""

    model_config = ConfigDict(frozen=True)

    system: HouseSystem = "Whole Sign"
    first_house_sign: str


class NatalChart(BaseModel):
    """Thème natal calculé à l'inscription (jamais modifié ensuite)."""

    model_config = ConfigDict(frozen=True)

    birth: BirthRecord
    longitudes_deg: dict[str, float]
    sun_sign: str
    moon_sign: str
    ascendant: Ascendant
    houses: Houses

    @field_validator("longitudes_deg")
    @classmethod
    def _complete_longitudes(cls, v: dict[str, float]) -> dict[str, float]:
        return {b.value: deg for b, deg in longitude_set(v).items()}

    def longitudes(self) -> dict[Body, float]:
        """Longitudes natales indexées par `Body`."""
        return longitude_set(self.longitudes_deg)

    def summary(self) -> dict[str, str]:
        """Résumé natal: signes solaire, lunaire et ascendant."""
        return {
            "sun_sign": self.sun_sign,
            "moon_sign": self.moon_sign,
            "rising_sign": self.ascendant.rising_sign,
        }


class User(BaseModel):
    """Utilisateur enregistré avec son thème natal."""

    model_config = ConfigDict(frozen=True)

    id: str
    created_at: str
    natal: NatalChart
