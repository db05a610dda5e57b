"""Logging setup and the operation observer.

Business code does not log inline. Each use-case handler's ``handle``
is wrapped with ``@observed("<operation>")``, which records the start,
the outcome and the duration of every call at the handler boundary.
"""

from __future__ import annotations

import functools
import json
import logging
import sys
import time
import traceback
from datetime import datetime, timezone
from typing import Any, Callable, TypeVar

from orderproc.domain.exceptions import DomainException

F = TypeVar("F", bound=Callable[..., Any])

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "@timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "extra_fields"):
            log_obj["custom"] = record.extra_fields

        if record.exc_info and record.exc_info[0] is not None:
            log_obj["error"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_obj, default=str)


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Configure the root logger with a single stderr handler.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        fmt: ``text`` for human-readable lines, ``json`` for structured output.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers = []

    # stderr keeps log lines out of the CLI's stdout output
    handler = logging.StreamHandler(sys.stderr)
    if fmt.lower() == "json":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


_observer_logger = get_logger("orderproc.operations")


def observed(operation: str) -> Callable[[F], F]:
    """Log before and after each call of the decorated function.

    Domain failures are logged at WARNING (they are expected outcomes of
    bad input or insufficient stock); anything else at ERROR with the
    traceback. The exception is always re-raised unchanged.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            _observer_logger.debug("%s started", operation)
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except DomainException as exc:
                _observer_logger.warning(
                    "%s rejected: %s",
                    operation,
                    exc,
                    extra={"extra_fields": {
                        "operation": operation,
                        "error_type": type(exc).__name__,
                        "duration_ms": _elapsed_ms(start),
                    }},
                )
                raise
            except Exception:
                _observer_logger.exception(
                    "%s failed",
                    operation,
                    extra={"extra_fields": {
                        "operation": operation,
                        "duration_ms": _elapsed_ms(start),
                    }},
                )
                raise
            _observer_logger.info(
                "%s completed",
                operation,
                extra={"extra_fields": {
                    "operation": operation,
                    "duration_ms": _elapsed_ms(start),
                }},
            )
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 3)
