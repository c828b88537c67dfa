"""OpenTelemetry helpers

This package only creates spans; exporters and the tracer provider are the
host application's job. Without one configured, spans are no-ops.
"""

from contextlib import contextmanager
from typing import Optional

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer instance"""
    return trace.get_tracer(name)


class TelemetryManager:
    """Manager class for telemetry operations"""

    def __init__(self, service_name: Optional[str] = None):
        self.service_name = service_name or "generic-ai"
        self.tracer = get_tracer(self.service_name)

    @contextmanager
    def traced_operation(self, operation_name: str, **attributes):
        """Create a traced operation context

        Args:
            operation_name: Name of the operation
            **attributes: Span attributes; None values are dropped

        Yields:
            The active span
        """
        attributes = {k: v for k, v in attributes.items() if v is not None}
        with self.tracer.start_as_current_span(
            operation_name,
            attributes=attributes,
            record_exception=False,
            set_status_on_exception=False,
        ) as span:
            try:
                yield span
                span.set_status(Status(StatusCode.OK))
            except Exception as e:
                span.record_exception(e)
                span.set_status(Status(StatusCode.ERROR, str(e)))
                raise
