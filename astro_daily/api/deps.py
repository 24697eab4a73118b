"""Dépendances partagées pour les routes de l'API.

But du module
-------------
- Centraliser l'accès aux services (inscription, prévision quotidienne) via
  FastAPI `Depends`.
- Permettre aux tests de substituer le conteneur
  (`app.dependency_overrides[get_container]`) sans modifier les routes.
"""

from fastapi import Depends

from astro_daily.core.container import Container, container
from astro_daily.domain.services import DailyForecastService, UserService


def get_container() -> Container:
    """Conteneur applicatif courant."""
    return container


def get_user_service(c: Container = Depends(get_container)) -> UserService:
    return c.user_service


def get_daily_service(c: Container = Depends(get_container)) -> DailyForecastService:
    return c.daily_service
