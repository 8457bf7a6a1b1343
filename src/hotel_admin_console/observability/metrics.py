"""Custom metrics for the hotel admin console."""

from opentelemetry import metrics

meter = metrics.get_meter("hotel-admin-console")

entity_mutation_counter = meter.create_counter(
    name="entity_mutation_total",
    description="Total number of committed entity store mutations",
    unit="1",
)

persistence_failure_counter = meter.create_counter(
    name="persistence_failure_total",
    description="Total number of failed writes to the key-value store by key",
    unit="1",
)

login_attempt_counter = meter.create_counter(
    name="login_attempt_total",
    description="Total number of admin login attempts by outcome",
    unit="1",
)


def record_entity_mutation(entity: str, operation: str) -> None:
    """Record a committed mutation.

    Args:
        entity: Entity kind (e.g., "hotel", "menu")
        operation: Operation performed (e.g., "create", "delete")
    """
    entity_mutation_counter.add(1, {"entity": entity, "operation": operation})


def record_persistence_failure(key: str) -> None:
    """Record a failed write to the key-value store.

    Args:
        key: Storage key that could not be written
    """
    persistence_failure_counter.add(1, {"key": key})


def record_login_attempt(success: bool) -> None:
    """Record a login attempt against the session gate."""
    login_attempt_counter.add(1, {"outcome": "success" if success else "failure"})
