"""
Structured logging for the Intelligence Processing Engine.

structlog renders pretty console lines in development and JSON in
production (LOG_JSON=true). Every entry emitted inside logging_context()
carries the call's trace_id, company_name and account_id. Customer text
(transcripts, email bodies, model output) can end up in log values, so
long strings are clipped before rendering.
"""

import logging
import time
from collections.abc import Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Any, Generator

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from .config import get_settings

# Longest string value rendered as-is
MAX_LOGGED_VALUE_CHARS = 500

_EMPTY_CONTEXT: Mapping[str, str] = MappingProxyType({})
_call_context: ContextVar[Mapping[str, str]] = ContextVar('call_context', default=_EMPTY_CONTEXT)


def get_trace_id() -> str | None:
    return _call_context.get().get('trace_id')


def get_company_name() -> str | None:
    return _call_context.get().get('company_name')


def get_account_id() -> str | None:
    return _call_context.get().get('account_id')


def add_call_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the current processing call's identifiers to the entry."""
    for key, value in _call_context.get().items():
        event_dict.setdefault(key, value)
    return event_dict


def clip_customer_text(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Clip long string values, including strings inside lists."""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = _clip(value)
        elif isinstance(value, list):
            event_dict[key] = [_clip(v) if isinstance(v, str) else v for v in value]
    return event_dict


def _clip(text: str) -> str:
    if len(text) <= MAX_LOGGED_VALUE_CHARS:
        return text
    return f'{text[:MAX_LOGGED_VALUE_CHARS]}... [{len(text) - MAX_LOGGED_VALUE_CHARS} more chars]'


def configure_logging(
    json_output: bool | None = None,
    log_level: str | None = None,
) -> None:
    """
    Configure structlog for the engine.

    Args:
        json_output: JSON lines if True, console output if False.
            Defaults to settings.LOG_JSON.
        log_level: Minimum level name (defaults to settings.LOG_LEVEL)
    """
    settings = get_settings()
    if json_output is None:
        json_output = settings.LOG_JSON
    level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)

    processors: list[Processor] = [
        add_call_context,
        clip_customer_text,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt='iso'),
    ]
    if json_output:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger (name is typically __name__)."""
    return structlog.get_logger(name)


@contextmanager
def logging_context(
    trace_id: str | None = None,
    company_name: str | None = None,
    account_id: str | None = None,
) -> Generator[None, None, None]:
    """
    Scope log identifiers to one processing call.

    Values left as None are inherited from any enclosing context. The
    previous context is restored on exit, and concurrent calls never see
    each other's values.

    Usage:
        with logging_context(trace_id="abc123", company_name="Acme"):
            logger.info("processing")  # Includes trace_id and company_name
    """
    values = {'trace_id': trace_id, 'company_name': company_name, 'account_id': account_id}
    merged = dict(_call_context.get())
    merged.update({k: v for k, v in values.items() if v is not None})
    token = _call_context.set(MappingProxyType(merged))
    try:
        yield
    finally:
        _call_context.reset(token)


class PipelineTimer:
    """
    Wall-clock timings for the stages of one processing call.

    Usage:
        timer = PipelineTimer()
        with timer.stage("extraction"):
            ...
        logger.info("processing_complete", **timer.summary())
    """

    def __init__(self):
        self.stages: dict[str, float] = {}
        self.start_time: float = time.perf_counter()

    @contextmanager
    def stage(self, name: str) -> Generator[None, None, None]:
        """Time a stage; the duration is recorded even if the stage raises."""
        stage_start = time.perf_counter()
        try:
            yield
        finally:
            self.stages[name] = (time.perf_counter() - stage_start) * 1000  # ms

    @property
    def total_ms(self) -> float:
        return (time.perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        return {
            'total_ms': round(self.total_ms, 2),
            'stages': {k: round(v, 2) for k, v in self.stages.items()},
        }


# Console output by default; set LOG_JSON=true or call configure_logging(json_output=True)
configure_logging()
