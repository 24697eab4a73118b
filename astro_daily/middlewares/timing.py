"""Middleware Starlette pour mesurer le temps de traitement des requêtes.

Ajoute l'en-tête `X-Process-Time-ms` (durée entière en millisecondes) à chaque réponse; utile pour
repérer les calculs d'éphémérides lents sur un cache manquant.
"""

import time
from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp


class TimingMiddleware(BaseHTTPMiddleware):
    """Middleware pour mesurer le temps de traitement des requêtes."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Process-Time-ms") -> None:
        """
        Args:
            app: Application ASGI à wrapper.
            header_name: Nom de l'en-tête HTTP pour le temps de traitement.
        """
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request, call_next: Callable):
        start = time.perf_counter()
        response = await call_next(request)
        response.headers[self.header_name] = str(int((time.perf_counter() - start) * 1000))
        return response
