from verdict.tracing.lifecycle import get_tracer, trace_step

__all__ = [
    "get_tracer",
    "trace_step",
]
