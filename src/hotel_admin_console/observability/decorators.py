"""OpenTelemetry tracing decorators."""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from opentelemetry import trace

# Type variable for generic function signatures
F = TypeVar("F", bound=Callable[..., Any])

SERVICE_NAME = "hotel-admin-console"


def traced(span_name: str | None = None, service_name: str = SERVICE_NAME) -> Callable[[F], F]:
    """Decorator to add OpenTelemetry tracing to a synchronous function.

    Creates a new span for the decorated function. Exceptions are recorded on
    the span and re-raised; a ``None`` or ``False`` result is tagged as a
    no-op, since store operations report unknown ids that way.

    Args:
        span_name: Name for the span (defaults to function name if not provided)
        service_name: Service name for span attributes

    Returns:
        Decorated function with tracing

    Example:
        @traced("entity_store.delete_hotel")
        def delete_hotel(self, hotel_id: str) -> bool:
            ...
    """

    def decorator(func: F) -> F:
        name = span_name or func.__name__
        tracer = trace.get_tracer(service_name)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(name) as span:
                span.set_attribute("service.name", service_name)

                if span_name:
                    span.set_attribute("function.name", func.__name__)

                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    span.set_attribute("success", False)
                    span.set_attribute("error.type", type(e).__name__)
                    span.set_attribute("error.message", str(e))
                    span.record_exception(e)
                    raise

                span.set_attribute("success", True)
                span.set_attribute("noop", result is None or result is False)
                return result

        return wrapper  # type: ignore

    return decorator
