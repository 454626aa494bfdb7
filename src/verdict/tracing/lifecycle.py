"""OpenTelemetry helpers used by the combinators.

verdict only talks to the OpenTelemetry API. Installing a tracer provider
and exporters is left to the host application; until it does, the API
hands out no-op spans.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace

from verdict.config import get_settings


def get_tracer(name: str = "verdict") -> trace.Tracer:
    """Get a tracer instance for creating spans."""
    return trace.get_tracer(name)


@contextmanager
def trace_step(name: str, attributes: dict[str, Any] | None = None) -> Iterator[trace.Span]:
    """Open a span nested under the current one.

    Yields a non-recording span when ``trace_checks`` is disabled.
    """
    if not get_settings().trace_checks:
        yield trace.INVALID_SPAN
        return

    with get_tracer().start_as_current_span(name) as span:
        if attributes:
            for key, value in attributes.items():
                span.set_attribute(key, value)
        yield span
