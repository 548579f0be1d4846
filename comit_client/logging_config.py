"""
Logging for scripts and test runs that drive cnd nodes.

The library itself only uses ``logging.getLogger(__name__)``: requests and
Problem responses from ``providers.cnd``, resolved actions from the
converter, each poll attempt and its observed state from the poller, and
wallet transactions from ledger actions. ``setup_logging`` renders those
through structlog (JSON lines, or coloured console output at DEBUG) and
merges the ``actor`` tag set by ``bind_actor``, so interleaved output from
two actors polling concurrently can be told apart.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import settings


def setup_logging(log_level: Optional[str] = None) -> None:
    """Route stdlib logging through structlog on stderr.

    httpx and httpcore are held at WARNING.

    Args:
        log_level: Override log level (default: from settings.log_level)
    """
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)
    is_dev = level == logging.DEBUG

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if is_dev:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Route stdlib logging (the library logs through logging.getLogger) via structlog
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in ("httpcore", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_actor(name: str) -> None:
    """
    Tag log lines from the current task with ``actor=name``.

    Bound through contextvars, so each task started by ``asyncio.gather``
    keeps its own actor.
    """
    structlog.contextvars.bind_contextvars(actor=name)
