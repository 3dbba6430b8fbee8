"""Structured logging for lokal.

Public API:
    - configure_logging(): Configure structlog and the root logger at startup
    - get_module_logger(): Logger bound to the calling module
"""

from lokal.logging.setup import build_processors, configure_logging, get_module_logger

__all__ = [
    "build_processors",
    "configure_logging",
    "get_module_logger",
]
