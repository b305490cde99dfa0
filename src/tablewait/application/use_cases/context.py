from __future__ import annotations

from dataclasses import dataclass

from opentelemetry import trace


@dataclass(frozen=True)
class TraceContext:
    trace_id: str | None
    request_id: str | None

    @classmethod
    def from_current_span(cls, request_id: str | None = None) -> TraceContext:
        return cls(trace_id=current_trace_id(), request_id=request_id)


def current_trace_id() -> str | None:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return None
    return format(span_context.trace_id, "032x")
