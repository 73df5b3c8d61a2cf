# wagerbook/utils/observability.py
"""
Structured events and prometheus metrics for wager book sessions.

Usage:
    from wagerbook.utils.observability import Logger, get_metrics

    events = Logger(__name__)
    events.log_event("wager_placed", wager_id=3, match="A vs B")
    get_metrics().wagers_placed.labels(mode="Back").inc()
"""
import logging
import sys
import contextvars
from typing import Optional

import structlog
from prometheus_client import CollectorRegistry, Counter, Gauge

from wagerbook.config import ObservabilitySettings

# Correlation ID tying together the events of one CLI command
CORRELATION_ID = contextvars.ContextVar('correlation_id', default=None)


class MetricsRegistry:
    """Ledger metrics on a private registry, so instances never collide."""

    def __init__(self):
        self.registry = CollectorRegistry()

        self.wagers_placed = Counter(
            'wagers_placed_total',
            'Wagers recorded',
            labelnames=['mode'],
            registry=self.registry
        )
        self.wagers_resolved = Counter(
            'wagers_resolved_total',
            'Wager resolutions, re-resolutions included',
            registry=self.registry
        )
        self.validation_failures = Counter(
            'validation_failures_total',
            'Rejected wager inputs',
            labelnames=['reason'],
            registry=self.registry
        )
        self.persistence_failures = Counter(
            'persistence_failures_total',
            'Ledger load/save failures',
            labelnames=['operation'],  # 'load' or 'save'
            registry=self.registry
        )
        self.ledger_size = Gauge(
            'ledger_size_wagers',
            'Wagers currently held in the ledger',
            registry=self.registry
        )


def configure_structlog(log_format: str = 'console', log_level: str = 'INFO') -> None:
    """
    Route structlog events to stderr.

    json: one JSON object per event (machine-readable)
    console: coloured key=value lines (human-readable)
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == 'json'
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt='iso'),
            structlog.dev.set_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


class Logger:
    """Wrapper for structured logging with context awareness."""

    def __init__(self, module_name: str):
        self.logger = structlog.get_logger(module_name)
        self.module_name = module_name

    def _context(self, kwargs: dict) -> dict:
        ctx = {'correlation_id': CORRELATION_ID.get(), 'module': self.module_name}
        ctx.update(kwargs)
        return ctx

    def log_event(self, event: str, **kwargs):
        return self.logger.info(event, **self._context(kwargs))

    def log_warning(self, event: str, **kwargs):
        return self.logger.warning(event, **self._context(kwargs))

    def log_error(self, event: str, exc_info=None, **kwargs):
        """Log error with exception details."""
        return self.logger.error(event, exc_info=exc_info, **self._context(kwargs))


METRICS: Optional[MetricsRegistry] = None


def initialize_observability(config: Optional[ObservabilitySettings] = None) -> MetricsRegistry:
    """Configure structlog from settings and create the process-wide metrics."""
    global METRICS
    if config is None:
        from wagerbook.config import settings
        config = settings.observability

    configure_structlog(log_format=config.log_format, log_level=config.log_level)
    METRICS = MetricsRegistry()

    structlog.get_logger(__name__).debug(
        'observability_initialized',
        environment=config.environment,
        log_format=config.log_format,
    )
    return METRICS


def get_metrics() -> MetricsRegistry:
    """Lazy-load metrics singleton."""
    if METRICS is None:
        initialize_observability()
    return METRICS
