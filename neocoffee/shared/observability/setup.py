import logging
from typing import Optional

import structlog
from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

# OpenTelemetry
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor


# 1. Structlog Processor: Injects Trace/Span IDs into every log line
def add_otel_ids(logger, log_method, event_dict):
    span = trace.get_current_span()
    if span.is_recording():
        ctx = span.get_span_context()
        event_dict["trace_id"] = trace.format_trace_id(ctx.trace_id)
        event_dict["span_id"] = trace.format_span_id(ctx.span_id)
    return event_dict


# 2. Configure Structlog for JSON output
def configure_logging(level: int = logging.INFO):
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_otel_ids,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


# 3. Configure OpenTelemetry Tracing (exports via OTLP gRPC, e.g. to Jaeger)
def configure_tracing(app: FastAPI, service_name: str, otlp_endpoint: str):
    resource = Resource.create({SERVICE_NAME: service_name})
    provider = TracerProvider(resource=resource)
    trace.set_tracer_provider(provider)

    exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
    provider.add_span_processor(BatchSpanProcessor(exporter))

    # Creates spans for all incoming requests
    FastAPIInstrumentor.instrument_app(app)


# 4. Configure Prometheus Metrics
def configure_metrics(app: FastAPI):
    # Tracks HTTP request latency, status codes, etc. and exposes them at /metrics
    Instrumentator().instrument(app).expose(app, include_in_schema=False)


def setup_observability(
    app: FastAPI,
    service_name: str,
    otlp_endpoint: Optional[str] = None,
    metrics_enabled: bool = True,
):
    """
    Bootstraps Logging, Tracing, and Metrics for a FastAPI app.
    Tracing is only wired up when an OTLP endpoint is configured.
    """
    configure_logging()
    if otlp_endpoint:
        configure_tracing(app, service_name, otlp_endpoint)
    if metrics_enabled:
        configure_metrics(app)
