"""Telemetry configuration and initialization.

Reads settings from the environment, configures stdout logging for the
engine and the Streamlit app, and installs an OpenTelemetry tracer provider
for the module and wizard spans.
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import DEPLOYMENT_ENVIRONMENT, SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.sdk.trace.sampling import ALWAYS_ON, ParentBased, TraceIdRatioBased

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty libraries kept at WARNING unless LOG_LEVEL=DEBUG
_QUIET_LOGGERS = ("burr", "streamlit", "watchdog", "urllib3")

_initialized = False
_provider: TracerProvider | None = None


class ExporterType(Enum):
    """Where finished spans go."""

    CONSOLE = "console"
    NONE = "none"


@dataclass
class TelemetryConfig:
    """Logging and tracing settings.

    Environment:
        LOG_LEVEL, OTEL_SERVICE_NAME, OTEL_TRACES_EXPORTER, OTEL_SDK_DISABLED,
        OTEL_TRACES_SAMPLER_ARG (0.0-1.0), MENTOR_DIAGNOSIS_ENV
    """

    log_level: str = "INFO"

    service_name: str = "mentor-diagnosis"
    environment: str = "local"
    traces_exporter: ExporterType = ExporterType.NONE
    otel_disabled: bool = False
    sample_ratio: float = 1.0

    resource_attributes: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "TelemetryConfig":
        exporter_name = os.getenv("OTEL_TRACES_EXPORTER", "none").lower()
        try:
            exporter = ExporterType(exporter_name)
        except ValueError:
            logger.warning(f"Unknown exporter type '{exporter_name}', defaulting to none")
            exporter = ExporterType.NONE

        try:
            ratio = float(os.getenv("OTEL_TRACES_SAMPLER_ARG", "1.0"))
        except ValueError:
            logger.warning("OTEL_TRACES_SAMPLER_ARG is not a number, sampling everything")
            ratio = 1.0

        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            service_name=os.getenv("OTEL_SERVICE_NAME", "mentor-diagnosis"),
            environment=os.getenv("MENTOR_DIAGNOSIS_ENV", "local"),
            traces_exporter=exporter,
            otel_disabled=os.getenv("OTEL_SDK_DISABLED", "false").lower() in ("true", "1", "yes"),
            sample_ratio=min(max(ratio, 0.0), 1.0),
        )


def _configure_logging(config: TelemetryConfig) -> None:
    """Send every log record to stdout in one format.

    Existing root handlers are replaced so a Streamlit rerun does not stack
    duplicate handlers.
    """
    level = logging.getLevelNamesMapping().get(config.log_level, logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)

    logging.getLogger("mentor_diagnosis").setLevel(level)
    if level > logging.DEBUG:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logger.info(f"Logging configured: level={config.log_level}")


def _build_provider(config: TelemetryConfig) -> TracerProvider | None:
    if config.otel_disabled:
        logger.info("OpenTelemetry disabled via OTEL_SDK_DISABLED")
        return None

    resource = Resource.create(
        {
            SERVICE_NAME: config.service_name,
            DEPLOYMENT_ENVIRONMENT: config.environment,
            **config.resource_attributes,
        }
    )
    sampler = ALWAYS_ON
    if config.sample_ratio < 1.0:
        sampler = ParentBased(TraceIdRatioBased(config.sample_ratio))
    provider = TracerProvider(resource=resource, sampler=sampler)

    if config.traces_exporter is ExporterType.CONSOLE:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
        logger.info("Console span exporter configured")

    trace.set_tracer_provider(provider)
    return provider


def init_telemetry(config: TelemetryConfig | None = None) -> None:
    """Configure logging and tracing once per process.

    Streamlit reruns the app script on every interaction, so repeated calls
    are ignored.

    Args:
        config: Settings to use; read from the environment when omitted
    """
    global _initialized, _provider

    if _initialized:
        logger.debug("Telemetry already initialized, skipping")
        return

    config = config or TelemetryConfig.from_env()
    _configure_logging(config)
    _provider = _build_provider(config)
    _initialized = True
    logger.info(
        f"Telemetry initialized: service={config.service_name}, env={config.environment}, "
        f"exporter={config.traces_exporter.value}, sample_ratio={config.sample_ratio}"
    )


def shutdown_telemetry() -> None:
    """Flush and drop the tracer provider."""
    global _initialized, _provider

    if not _initialized:
        return
    if _provider is not None:
        _provider.shutdown()
    _initialized = False
    _provider = None
    logger.info("Telemetry shutdown complete")


def is_telemetry_enabled() -> bool:
    """True once initialized with tracing on."""
    return _initialized and _provider is not None
