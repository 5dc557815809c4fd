"""
Structured logging for the procurement AI pipeline.

Every pipeline entry point runs inside pipeline_call(), which opens a fresh
trace and tags every log line emitted during the call with:
- trace_id: one per synthesize/extract/compare call
- operation: which entry point is running
- rfp_id: the stored RFP the call works on, when known
- stage: the PipelineTimer stage currently executing (prompt, model, ...)

Output is JSON (LOG_JSON=true) or a colored console renderer.
"""

import logging
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Generator
from uuid import uuid4

import structlog
from structlog.types import Processor

from .config import get_settings

_trace_id: ContextVar[str | None] = ContextVar('trace_id', default=None)
_rfp_id: ContextVar[str | None] = ContextVar('rfp_id', default=None)
_operation: ContextVar[str | None] = ContextVar('operation', default=None)
_stage: ContextVar[str | None] = ContextVar('stage', default=None)

_CONTEXT_FIELDS = (
    ('trace_id', _trace_id),
    ('operation', _operation),
    ('rfp_id', _rfp_id),
    ('stage', _stage),
)


def get_trace_id() -> str | None:
    return _trace_id.get()


def get_rfp_id() -> str | None:
    return _rfp_id.get()


def get_operation() -> str | None:
    return _operation.get()


def get_stage() -> str | None:
    return _stage.get()


def add_context_info(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Processor that tags log entries with the current pipeline call context."""
    for key, var in _CONTEXT_FIELDS:
        value = var.get()
        if value and key not in event_dict:
            event_dict[key] = value
    return event_dict


def configure_logging(
    json_output: bool = False,
    log_level: str | None = None,
) -> None:
    """
    Configure structlog for the application.

    Args:
        json_output: JSON lines when True, colored console output otherwise
        log_level: Override log level (defaults to Settings.LOG_LEVEL)
    """
    level = log_level or get_settings().LOG_LEVEL
    level_num = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(format='%(message)s', stream=sys.stdout, level=level_num)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_context_info,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger (typically get_logger(__name__))."""
    return structlog.get_logger(name)


@contextmanager
def logging_context(
    trace_id: str | None = None,
    rfp_id: str | None = None,
    operation: str | None = None,
) -> Generator[None, None, None]:
    """
    Set call-scoped logging context, restoring the previous values on exit.

    Usage:
        with logging_context(trace_id="abc123", rfp_id="rfp_42"):
            logger.info("comparing proposals")  # Includes trace_id and rfp_id
    """
    tokens = []
    for var, value in ((_trace_id, trace_id), (_rfp_id, rfp_id), (_operation, operation)):
        if value is not None:
            tokens.append((var, var.set(value)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


class PipelineTimer:
    """
    Per-call stage timer. While a stage runs its name is part of the log context.

    Usage:
        timer = PipelineTimer()
        with timer.stage("prompt"):
            ...
        with timer.stage("model"):
            ...
        logger.info("done", timing=timer.summary())
    """

    def __init__(self):
        self.stages: dict[str, float] = {}
        self.start_time: float = time.perf_counter()

    @contextmanager
    def stage(self, name: str) -> Generator[None, None, None]:
        token = _stage.set(name)
        started = time.perf_counter()
        try:
            yield
        finally:
            self.stages[name] = (time.perf_counter() - started) * 1000
            _stage.reset(token)

    @property
    def total_ms(self) -> float:
        return (time.perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        return {
            'total_ms': round(self.total_ms, 2),
            'stages': {k: round(v, 2) for k, v in self.stages.items()},
        }


@contextmanager
def pipeline_call(
    operation: str,
    rfp_id: str | None = None,
) -> Generator[PipelineTimer, None, None]:
    """
    Open the logging scope for one pipeline entry point.

    Starts a new trace, tags it with the operation and RFP, and yields the
    call's PipelineTimer. A failure is logged with the stage it happened in
    and re-raised unchanged.
    """
    timer = PipelineTimer()
    with logging_context(trace_id=uuid4().hex, rfp_id=rfp_id, operation=operation):
        try:
            yield timer
        except Exception as exc:
            get_logger(__name__).warning(
                'pipeline.call_failed',
                error_type=type(exc).__name__,
                failed_stage=next(reversed(timer.stages), None),
                timing=timer.summary(),
            )
            raise


# Development mode by default; production deployments set LOG_JSON=true
configure_logging(json_output=get_settings().LOG_JSON)
