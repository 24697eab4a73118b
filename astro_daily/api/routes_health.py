"""
Endpoint de santé pour vérifier la disponibilité de l'API et du backend.

Expose `/health` pour signaler l'état général de l'application, du stockage et
du fournisseur d'éphémérides.
"""


from fastapi import APIRouter, Depends

from astro_daily.api.deps import get_container
from astro_daily.core.container import Container
from astro_daily.domain.daily_picker import PICKER_ALGORITHM

router = APIRouter(tags=["health"])


@router.get("/health")
def health(c: Container = Depends(get_container)):
    """Vérifie la disponibilité de l'API, le backend de stockage et les éphémérides."""
    return {
        "status": "ok",
        "storage": getattr(c, "storage_backend", "unknown"),
        "ephemeris": getattr(c.ephemeris, "name", "unknown"),
        "content_picker": PICKER_ALGORITHM,
    }
