"""
Ligne du cache quotidien (POPO).

Ce module définit l'objet de domaine DailyCacheRow: un résultat quotidien
calculé, identifié par (user_id, local_date, tz).
"""

# ============================================================
# Module : astro_daily/domain/daily_cache.py
# Objet  : Ligne du cache des résultats quotidiens (POPO).
# ============================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class DailyCacheRow:
    """
    Résultat quotidien mis en cache (objet domaine).

    Attributs
    - user_id, local_date ("YYYY-MM-DD"), tz (IANA): clé primaire.
    - anchored_local_noon: ISO datetime du midi local d'ancrage.
    - anchored_utc: ISO datetime UTC correspondant.
    - result: charge utile renvoyée au client (dict sérialisable JSON).
    - created_at: ISO datetime de calcul (seul champ variant d'un recalcul à l'autre).
    """

    user_id: str
    local_date: str
    tz: str
    anchored_local_noon: str
    anchored_utc: str
    result: dict[str, Any]
    created_at: str

    @property
    def key(self) -> tuple[str, str, str]:
        """Clé primaire (user_id, local_date, tz)."""
        return (self.user_id, self.local_date, self.tz)
