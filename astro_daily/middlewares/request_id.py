"""Identifiant de requête pour corréler réponses, logs et enveloppes d'erreur.

Chaque réponse porte `X-Request-ID` (repris de la requête ou généré). La même valeur est posée sur
`request.state.trace_id`, où les gestionnaires de `apigw.errors` la lisent pour remplir `trace_id`.
"""

from collections.abc import Callable
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propage `X-Request-ID` jusqu'à la réponse et à l'état de la requête."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request, call_next: Callable):
        request_id = request.headers.get(self.header_name) or str(uuid4())
        request.state.trace_id = request_id
        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response
