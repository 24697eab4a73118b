"""
Routes utilisateurs: inscription avec calcul du thème natal, et lecture.

Le thème natal est calculé une fois à l'inscription puis renvoyé tel quel.
"""

from fastapi import APIRouter, Depends

from astro_daily.api.deps import get_user_service
from astro_daily.api.schemas import BirthRequest, UserCreatedResponse, UserResponse
from astro_daily.domain.entities import BirthInput
from astro_daily.domain.services import UserService

router = APIRouter(prefix="/v1", tags=["users"])
user_service_dep = Depends(get_user_service)


@router.post("/users", response_model=UserCreatedResponse)
def create_user(payload: BirthRequest, service: UserService = user_service_dep):
    """
    Inscrit un utilisateur et calcule son thème natal.

    Paramètres:
    - payload: `BirthRequest` (date, heure, fuseau, latitude, longitude de naissance).

    Retour:
    - `UserCreatedResponse` (user_id, natal).
    """
    user = service.register(BirthInput(**payload.model_dump()))
    return {"user_id": user.id, "natal": user.natal.model_dump(mode="json")}


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(user_id: str, service: UserService = user_service_dep):
    """Retourne un utilisateur; 404 `NOT_FOUND` s'il est inconnu."""
    user = service.get(user_id)
    return {
        "user_id": user.id,
        "created_at": user.created_at,
        "natal": user.natal.model_dump(mode="json"),
    }
