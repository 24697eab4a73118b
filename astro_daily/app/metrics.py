"""
Métriques Prometheus pour l'application.

Ce module définit toutes les métriques Prometheus utilisées pour le monitoring du
service de prévisions quotidiennes, l'endpoint `/metrics` et un middleware de
mesure de la latence des requêtes HTTP par route.
"""

import time

from fastapi import APIRouter, Request
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

metrics_router = APIRouter()

REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "route", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "Latency of HTTP requests", ["route"]
)

# Daily forecast metrics
DAILY_CACHE_LOOKUPS = Counter(
    "daily_cache_lookups_total",
    "Daily forecast cache lookups",
    ["result"],  # hit | miss | refresh
)
EPHEMERIS_LATENCY = Histogram(
    "ephemeris_latency_seconds",
    "Latency of ephemeris computations",
    ["op"],  # longitudes | ascendant
)
CONTENT_LIST_RELOADS = Counter(
    "content_list_reloads_total",
    "Total reloads of the daily content lists from disk",
)


def normalize_route(request: Request) -> str:
    """Gabarit de route (ex. `/v1/users/{user_id}`) pour borner la cardinalité."""
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path or request.scope.get("path", "unknown")


@metrics_router.get("/metrics")
def metrics():
    """
    Expose les métriques Prometheus au format texte.

    Returns:
        Response: Réponse HTTP contenant les métriques au format Prometheus.
    """
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware Prometheus pour mesurer les métriques HTTP.

    Collecte les métriques de comptage des requêtes et de latence par route pour l'exposition
    Prometheus.
    """

    async def dispatch(self, request: Request, call_next):
        """
        Traite une requête HTTP et collecte les métriques.

        Args:
            request: Requête HTTP entrante.
            call_next: Fonction pour appeler le middleware suivant.

        Returns:
            Response: Réponse HTTP avec métriques collectées.
        """
        start = time.perf_counter()
        response: Response = await call_next(request)
        route = normalize_route(request)
        REQUEST_COUNT.labels(request.method, route, str(response.status_code)).inc()
        REQUEST_LATENCY.labels(route).observe(time.perf_counter() - start)
        return response
