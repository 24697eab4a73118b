"""
Application principale FastAPI.

Ce module assemble tous les composants de l'application : middlewares,
routes, métriques, gestion des erreurs et configuration de l'API de prévisions
quotidiennes.

Responsabilités du module:
- Initialiser le logging structuré et le tracing
- Construire l'application FastAPI avec son titre/debug
- Ajouter les middlewares (request id, métriques, timing)
- Installer les gestionnaires d'erreurs (enveloppe standard)
- Monter les routers (santé, utilisateurs, quotidien, métriques)
"""

from __future__ import annotations

from fastapi import FastAPI

from astro_daily.api.routes_daily import router as daily_router
from astro_daily.api.routes_health import router as health_router
from astro_daily.api.routes_users import router as users_router
from astro_daily.apigw.errors import register_exception_handlers
from astro_daily.app.metrics import PrometheusMiddleware, metrics_router
from astro_daily.app.tracing import setup_tracing
from astro_daily.core.container import container
from astro_daily.core.logging import setup_logging
from astro_daily.middlewares.request_id import RequestIDMiddleware
from astro_daily.middlewares.timing import TimingMiddleware


def create_app() -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog) et le tracing (OTLP optionnel)
    - Lit les paramètres d'exécution
    - Ajoute les middlewares utiles au debug/traçabilité
    - Publie les routes de santé, utilisateurs, quotidien et métriques
    """
    settings = container.settings
    setup_logging(settings.LOG_LEVEL)
    setup_tracing(settings)
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG)
    app.add_middleware(PrometheusMiddleware)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(daily_router)
    app.include_router(metrics_router)
    return app


app = create_app()
