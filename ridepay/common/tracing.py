"""OpenTelemetry setup for the payment service."""

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from ridepay.common.config import settings
from ridepay.common.logging import logger


# Probe-only endpoints that would otherwise dominate the trace volume.
UNTRACED_URLS = "health,metrics"


def setup_tracing(service_name: str) -> None:
    """Register an OTLP HTTP tracer provider unless tracing is disabled."""

    if not settings.tracing_enabled:
        logger.info("tracing_disabled service=%s", service_name)
        return
    resource = Resource.create(
        {"service.name": service_name, "deployment.environment": settings.environment}
    )
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.otel_exporter_otlp_endpoint))
    )
    trace.set_tracer_provider(provider)


def instrument_app(app: FastAPI) -> None:
    """Attach FastAPI request spans, skipping health and scrape traffic."""

    if settings.tracing_enabled:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=UNTRACED_URLS)
