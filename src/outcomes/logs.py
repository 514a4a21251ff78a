"""
Logging setup for applications that use the opt-in layers.

The Outcome core never logs. Execution contexts and composition patterns log
through structlog; call configure_logging() once at startup to choose where
that output goes.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import structlog

from outcomes.config import get_settings


def configure_logging(log_level: Optional[str] = None) -> None:
    """
    Configure structlog for structured, human-readable console logging.

    The level defaults to OutcomeSettings.log_level (OUTCOMES_LOG_LEVEL).
    """
    level_name = (log_level or get_settings().log_level).upper()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level_name, logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def log_failure(event: str, **context: object) -> Callable[[tuple[Any, ...]], None]:
    """
    Build a tap_on_failure callback that logs the errors of a failed outcome.

        outcome.tap_on_failure(log_failure("order.rejected", order_id=order.id))
    """
    log = structlog.get_logger()

    def _log(errors: tuple[Any, ...]) -> None:
        log.warning(event, errors=[str(e) for e in errors], **context)

    return _log
