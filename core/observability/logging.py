"""
Structured Logging with Correlation IDs

Every log line emitted while a DSR is being produced carries:
- show_id / show_name: the show record being rendered
- workflow_id / activity_id: the Temporal sweep and activity, when run there
- stage: the render step (load, template, equipment, render, persist)

Correlation values are captured onto the LogRecord when it is created, so
formatters see the context of the code that logged, not of the handler.

Usage:
    from core.observability.logging import get_logger, log_stage, with_correlation

    logger = get_logger(__name__)

    with with_correlation(show_id="SH1001"):
        with log_stage(logger, "render"):
            ...  # "render finished" is logged with duration_ms
"""

import json
import logging
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, Iterator, Optional, Union


# =============================================================================
# Correlation Context
# =============================================================================

@dataclass(frozen=True)
class CorrelationContext:
    """Identifiers tying a log line to a show, sweep and render stage."""
    show_id: Optional[str] = None
    show_name: Optional[str] = None
    workflow_id: Optional[str] = None
    workflow_run_id: Optional[str] = None
    activity_id: Optional[str] = None
    activity_name: Optional[str] = None
    task_queue: Optional[str] = None
    stage: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Set values only."""
        return {k: v for k, v in asdict(self).items() if v is not None}

    def merge(self, **kwargs) -> "CorrelationContext":
        """New context with ``kwargs`` layered on top; None values are ignored."""
        data = self.to_dict()
        data.update({k: v for k, v in kwargs.items() if v is not None})
        return CorrelationContext(**data)

    @property
    def prefix(self) -> str:
        """Short form for human-readable lines: show/workflow/stage."""
        parts = []
        if self.show_id:
            parts.append(self.show_id)
        if self.workflow_id:
            parts.append(self.workflow_id[:12])
        if self.stage:
            parts.append(self.stage)
        return "/".join(parts) or "-"


_correlation_context: ContextVar[CorrelationContext] = ContextVar(
    "dsr_correlation_context",
    default=CorrelationContext(),
)


def get_correlation_context() -> CorrelationContext:
    return _correlation_context.get()


@contextmanager
def with_correlation(**kwargs) -> Iterator[CorrelationContext]:
    """Layer correlation values over the current context for a block.

    Usage:
        with with_correlation(show_id="SH1001", stage="persist"):
            logger.info("Saving")  # carries show_id and stage
    """
    token = _correlation_context.set(get_correlation_context().merge(**kwargs))
    try:
        yield _correlation_context.get()
    finally:
        _correlation_context.reset(token)


@contextmanager
def log_stage(logger: "CorrelatedLogger", stage: str) -> Iterator[None]:
    """Run a block as a named render stage and log how long it took.

    Failures propagate untouched; only successful stages are logged.
    """
    started = time.perf_counter()
    with with_correlation(stage=stage):
        yield
        duration_ms = round((time.perf_counter() - started) * 1000, 1)
        logger.debug(f"{stage} finished", extra_fields={"duration_ms": duration_ms})


def _record_correlation(record: logging.LogRecord) -> Dict[str, Any]:
    correlation = getattr(record, "correlation", None)
    if correlation is None:
        correlation = get_correlation_context().to_dict()
    return correlation


# =============================================================================
# Formatters
# =============================================================================

class StructuredFormatter(logging.Formatter):
    """
    One JSON object per line.

    Output format:
    {
        "timestamp": "2024-01-09T12:00:00.000000Z",
        "level": "INFO",
        "logger": "document_service.service",
        "message": "DSR written to ...",
        "show_id": "SH1001",
        "stage": "persist",
        "size_bytes": 48213
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_record_correlation(record),
            **getattr(record, "extra_fields", {}),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Console format.

    Output format:
    2024-01-09 12:00:00 [INFO ] document_service.service [SH1001/dsr-sweep-1a/persist]: DSR written (size_bytes=48213)
    """

    def format(self, record: logging.LogRecord) -> str:
        prefix = CorrelationContext(**_record_correlation(record)).prefix
        timestamp = datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S")
        line = f"{timestamp} [{record.levelname:5}] {record.name} [{prefix}]: {record.getMessage()}"

        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            line += " (" + " ".join(f"{k}={v}" for k, v in extra_fields.items()) + ")"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


# =============================================================================
# Logger with Correlation Support
# =============================================================================

class CorrelatedLogger:
    """
    Thin wrapper over ``logging.Logger``.

    Each call may pass ``extra_fields={...}``; the current correlation
    context is captured onto the record at call time.
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def log(self, level: int, msg: str, *args, extra_fields: Optional[Dict[str, Any]] = None,
            exc_info: bool = False) -> None:
        if not self._logger.isEnabledFor(level):
            return
        record = self._logger.makeRecord(
            self._logger.name,
            level,
            "(unknown file)",
            0,
            msg,
            args,
            sys.exc_info() if exc_info else None,
        )
        record.extra_fields = extra_fields or {}
        record.correlation = get_correlation_context().to_dict()
        self._logger.handle(record)

    def debug(self, msg: str, *args, **kwargs):
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self.log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        kwargs["exc_info"] = True
        self.log(logging.ERROR, msg, *args, **kwargs)

    def isEnabledFor(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)


# =============================================================================
# Setup
# =============================================================================

# Loggers of this project; set to the configured level
PROJECT_LOGGERS = (
    "activities",
    "api",
    "core",
    "document_service",
    "dsr_renderer",
    "equipment_resolver",
    "storage",
    "workflows",
)

_loggers: Dict[str, CorrelatedLogger] = {}
_handler: Optional[logging.Handler] = None


def configure_logging(
    level: Union[int, str] = logging.INFO,
    json_format: bool = False,
    include_temporal: bool = True,
) -> None:
    """
    Install the console handler on the root logger.

    Calling again replaces the handler installed by the previous call.

    Args:
        level: Logging level (int or level name, e.g. "DEBUG")
        json_format: JSON lines instead of the human-readable format
        include_temporal: Also set the Temporal SDK loggers to INFO
    """
    global _handler

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stdout)
    _handler.setLevel(level)
    _handler.setFormatter(StructuredFormatter() if json_format else HumanReadableFormatter())

    root.setLevel(level)
    root.addHandler(_handler)

    for name in PROJECT_LOGGERS:
        logging.getLogger(name).setLevel(level)

    # Third-party noise
    for name in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(name).setLevel(logging.WARNING)

    if include_temporal:
        logging.getLogger("temporalio").setLevel(logging.INFO)


def get_logger(name: str) -> CorrelatedLogger:
    """
    Get a correlated logger for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        CorrelatedLogger instance (cached per name)
    """
    if name not in _loggers:
        _loggers[name] = CorrelatedLogger(logging.getLogger(name))
    return _loggers[name]
