"""Custom spans for module sessions and wizard events.

Span Hierarchy:
    module_span (one per module visit)
    └── wizard_event_span (per edit, navigation or status event)
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import StatusCode

logger = logging.getLogger(__name__)


def get_tracer() -> trace.Tracer:
    """Tracer for the wizard engine.

    Without an installed SDK provider this is OpenTelemetry's no-op tracer.
    """
    return trace.get_tracer("mentor_diagnosis.workflow")


@contextmanager
def _traced(name: str, attributes: dict[str, Any]) -> Generator[Any, None, None]:
    tracer = get_tracer()
    with tracer.start_as_current_span(name=name, attributes=attributes) as span:
        try:
            yield span
            span.set_status(StatusCode.OK)
        except Exception as e:
            span.record_exception(e)
            span.set_status(StatusCode.ERROR, str(e))
            raise


@contextmanager
def module_span(
    module: str,
    user_email: str | None = None,
    **attributes: Any,
) -> Generator[Any, None, None]:
    """Create a span covering one visit to a module.

    Args:
        module: Module id (e.g. "mentor")
        user_email: Optional user for correlation
        **attributes: Additional span attributes

    Example:
        with module_span("mentee", "ana@example.com") as span:
            span.set_attribute("module.resume_step", 3)
    """
    span_attributes: dict[str, Any] = {"module.name": module}
    if user_email:
        span_attributes["user.email"] = user_email
    span_attributes.update(attributes)

    with _traced(f"module:{module}", span_attributes) as span:
        yield span


@contextmanager
def wizard_event_span(
    module: str,
    event: str,
    step: int | None = None,
    **attributes: Any,
) -> Generator[Any, None, None]:
    """Create a span for one wizard event (edit, next, back, submit...)."""
    span_attributes: dict[str, Any] = {"module.name": module, "wizard.event": event}
    if step is not None:
        span_attributes["wizard.step"] = step
    span_attributes.update(attributes)

    with _traced(f"wizard:{module}:{event}", span_attributes) as span:
        yield span
