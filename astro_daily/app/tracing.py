"""Configuration du tracing OpenTelemetry pour l'observabilité.

Ce module configure le tracing distribué avec OpenTelemetry pour exporter les traces (dont les spans
`ephemeris.*` du service quotidien) vers un endpoint OTLP configuré via les settings.
"""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from astro_daily.core.settings import Settings


def setup_tracing(settings: Settings) -> bool:
    """Configure le tracing OpenTelemetry si `OTLP_ENDPOINT` est renseigné.

    Retourne True si un exporteur a été installé. Sans endpoint, le tracer global reste le
    no-op d'OpenTelemetry et les spans ne coûtent rien.
    """
    if not settings.OTLP_ENDPOINT:
        return False

    provider = TracerProvider(resource=Resource.create({"service.name": settings.APP_NAME}))
    processor = BatchSpanProcessor(
        OTLPSpanExporter(endpoint=settings.OTLP_ENDPOINT, insecure=True)
    )
    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    return True
