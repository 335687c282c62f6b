"""structlog setup for applications embedding faultline.

The library only emits events through ``structlog.get_logger``; it never
configures logging on import. Applications that want faultline's debug
events rendered (pass-through nodes, unknown roots) call
``configure_logging`` once at startup.
"""

from __future__ import annotations

import logging

import structlog

__all__ = ["configure_logging"]


def configure_logging(level: str | int = "INFO") -> None:
    """Configure structlog on top of the stdlib logging module.
    
    Args:
        level: Minimum level, as a name ("DEBUG") or a logging constant
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    
    logging.basicConfig(level=level, format="%(message)s")
    
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
