"""OpenTelemetry instrumentation and structured logging for the admin console."""

from hotel_admin_console.observability.config import configure_logging, setup_observability
from hotel_admin_console.observability.decorators import traced

__all__ = ["setup_observability", "configure_logging", "traced"]
