"""Trace context propagation built on OpenTelemetry.

The inbound W3C ``traceparent`` header is extracted once at the handler
boundary and the resulting context is passed explicitly to every stage.
Nothing here installs a global tracer provider: the tracer is built from
:class:`~cepweather.core.config.ServiceConfig` and injected where needed.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Mapping, MutableMapping, Optional, Tuple, Type

from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.exporter.zipkin.json import ZipkinExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Span, Status, StatusCode, Tracer
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from cepweather.core.config import ServiceConfig


logger = logging.getLogger(__name__)

INSTRUMENTATION_NAME = "cepweather"

_propagator = TraceContextTextMapPropagator()


def build_tracer_provider(config: ServiceConfig) -> TracerProvider:
    """Create a provider that batches spans to Zipkin when an endpoint is configured."""
    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: config.service_name}))
    if config.zipkin_endpoint:
        provider.add_span_processor(BatchSpanProcessor(ZipkinExporter(endpoint=config.zipkin_endpoint)))
        logger.info("Exporting spans to Zipkin", extra={"endpoint": config.zipkin_endpoint})
    return provider


def build_tracer(config: ServiceConfig, provider: Optional[TracerProvider] = None) -> Tracer:
    provider = provider or build_tracer_provider(config)
    return provider.get_tracer(INSTRUMENTATION_NAME)


def extract_context(headers: Optional[Mapping[str, str]]) -> Context:
    """Return the trace context carried by ``headers`` or an empty one for a new root."""
    if not headers:
        return Context()
    return _propagator.extract(carrier=headers, context=Context())


def inject_headers(headers: MutableMapping[str, str], context: Optional[Context]) -> MutableMapping[str, str]:
    """Write ``traceparent``/``tracestate`` for ``context`` into ``headers``."""
    if context is not None:
        _propagator.inject(headers, context=context)
    return headers


@contextmanager
def traced(
    tracer: Tracer,
    name: str,
    context: Optional[Context] = None,
    expected: Tuple[Type[Exception], ...] = (),
) -> Iterator[tuple[Span, Context]]:
    """Open a span as a child of ``context`` and yield it with the context that carries it.

    The span ends exactly once when the block exits, whether it returns or raises.
    Exceptions are recorded on the span and mark it as failed before propagating,
    except instances of ``expected``, which are client errors and leave the status unset.
    """
    parent = context if context is not None else Context()
    with tracer.start_as_current_span(
        name, context=parent, record_exception=False, set_status_on_exception=False
    ) as span:
        try:
            yield span, trace.set_span_in_context(span, parent)
        except expected:
            raise
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, f"{type(exc).__name__}: {exc}"))
            raise


__all__ = [
    "build_tracer",
    "build_tracer_provider",
    "extract_context",
    "inject_headers",
    "traced",
]
