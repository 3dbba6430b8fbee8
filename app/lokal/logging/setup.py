"""Structlog configuration for lokal.

Importing lokal never touches logging configuration. Applications call
``configure_logging`` at startup; by default it reads ``settings.LOG_LEVEL``
and ``settings.is_production``. Module loggers are lazy and pick up the
configuration on first use.

Usage:
    from lokal.logging import get_module_logger

    logger = get_module_logger()
    logger.info("catalog_built", language_count=3)
"""

import inspect
import logging
import sys
from types import ModuleType
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from lokal.configuration import settings

SILENT_LEVEL = logging.CRITICAL + 1


def _under_pytest() -> bool:
    return "pytest" in sys.modules


def build_processors(is_production: bool) -> list[Processor]:
    """Processor chain for lokal log events.

    Args:
        is_production: JSON output when True, console output otherwise.

    Returns:
        Ordered structlog processors, renderer last.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if is_production:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and the standard library root logger.

    Called by the application, never on import. Existing root handlers are
    kept; ``basicConfig`` only installs one when the root logger has none.
    Under pytest every event is dropped at the root level, so test output
    stays clean regardless of the arguments.

    Args:
        log_level: Level name (DEBUG, INFO, ...); settings.LOG_LEVEL by default.
        is_production: Renderer selection; settings.is_production by default.

    Returns:
        Configured logger.
    """
    if _under_pytest():
        logging.root.setLevel(SILENT_LEVEL)
        _configure_structlog(
            [
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ]
        )
        return structlog.stdlib.get_logger()

    if is_production is None:
        is_production = settings.is_production
    _configure_structlog(build_processors(is_production))

    level_name = (log_level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        format="%(message)s", level=getattr(logging, level_name, logging.INFO)
    )
    return structlog.stdlib.get_logger()


def _configure_structlog(processors: list[Processor]) -> None:
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _calling_module(depth: int = 2) -> Optional[ModuleType]:
    frame = inspect.currentframe()
    for _ in range(depth):
        if frame is None:
            return None
        frame = frame.f_back
    return inspect.getmodule(frame) if frame is not None else None


def get_module_logger() -> BoundLogger:
    """Logger bound to the calling module.

    Binds ``component`` (last dotted segment) and ``module_path``. The
    logger is a lazy proxy, so it follows whatever configuration the
    application installs later.

    Example:
        # In lokal/i18n/catalog.py
        logger = get_module_logger()
        # context: {"component": "catalog", "module_path": "lokal.i18n.catalog"}
    """
    module = _calling_module()
    if module is None:
        return structlog.stdlib.get_logger(component="unknown")
    return structlog.stdlib.get_logger(
        component=module.__name__.rsplit(".", 1)[-1],
        module_path=module.__name__,
    )
