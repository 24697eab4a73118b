"""
Routes de prévision quotidienne.

- `/v1/daily-personal`: scores, explications et contenu du jour pour un
  utilisateur, mis en cache par (user_id, date locale, fuseau).
- `/v1/daily-public`: instantané du ciel à midi local, non personnalisé.
"""

from fastapi import APIRouter, Depends

from astro_daily.api.deps import get_daily_service
from astro_daily.api.schemas import DailyPersonalResponse, DailyPublicResponse
from astro_daily.domain.errors import InvalidInputError
from astro_daily.domain.services import DailyForecastService

router = APIRouter(prefix="/v1", tags=["daily"])
daily_service_dep = Depends(get_daily_service)


@router.get(
    "/daily-personal",
    response_model=DailyPersonalResponse,
    response_model_exclude_none=True,
)
def daily_personal(
    user_id: str = "",
    tz: str = "",
    date: str | None = None,
    refresh: bool = False,
    service: DailyForecastService = daily_service_dep,
):
    """
    Retourne la prévision du jour pour un utilisateur.

    Paramètres:
    - user_id: identifiant utilisateur.
    - tz: fuseau IANA, ex. `Asia/Tokyo`.
    - date: `YYYY-MM-DD` optionnelle (défaut: aujourd'hui dans `tz`).
    - refresh: `1` force le recalcul et écrase le cache.
    """
    user_id = user_id.strip()
    if not user_id:
        raise InvalidInputError("Missing user_id.")
    return service.get_daily_personal(
        user_id, tz.strip(), date=(date or "").strip() or None, refresh=refresh
    )


@router.get("/daily-public", response_model=DailyPublicResponse)
def daily_public(
    tz: str = "",
    date: str | None = None,
    service: DailyForecastService = daily_service_dep,
):
    """Instantané du ciel (signes solaire et lunaire, longitudes) à midi local."""
    return service.get_daily_public(tz.strip(), date=(date or "").strip() or None)
