"""Utilitaires angulaires (degrés sur le cercle écliptique)."""

from __future__ import annotations


def normalize_degrees(deg: float) -> float:
    """Ramène un angle dans l'intervalle [0, 360)."""
    x = deg % 360.0
    # -1e-20 % 360 == 360.0 en flottants
    return 0.0 if x >= 360.0 else x


def angular_separation(a: float, b: float) -> float:
    """Distance angulaire la plus courte entre deux longitudes, dans [0, 180]."""
    d = abs(a - b) % 360.0
    if d > 180.0:
        d = 360.0 - d
    return d
