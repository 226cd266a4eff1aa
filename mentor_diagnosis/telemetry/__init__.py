"""Logging and tracing setup for Mentor Diagnosis.

Usage:
    from mentor_diagnosis.telemetry import init_telemetry, module_span

    init_telemetry()
    with module_span("mentor", user_email):
        ...
"""

from mentor_diagnosis.telemetry.config import (
    ExporterType,
    TelemetryConfig,
    init_telemetry,
    is_telemetry_enabled,
    shutdown_telemetry,
)
from mentor_diagnosis.telemetry.spans import get_tracer, module_span, wizard_event_span

__all__ = [
    "ExporterType",
    "TelemetryConfig",
    "get_tracer",
    "init_telemetry",
    "is_telemetry_enabled",
    "module_span",
    "shutdown_telemetry",
    "wizard_event_span",
]
