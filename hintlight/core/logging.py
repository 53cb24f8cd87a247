"""
hintlight/core/logging.py

Structured logging setup using structlog.

- In production: outputs newline-delimited JSON.
- In development: outputs coloured, human-readable console lines with timestamps.

Usage:
    from hintlight.core.logging import get_logger
    logger = get_logger(__name__)
    logger.info("hint_relay_success", platform="LeetCode", hints_length=812)

Never use print() for diagnostics; always use a logger. The CLI prints its
result to stdout, nothing else does. Never log the API key.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor


def _drop_color_message_key(_, __, event_dict: EventDict) -> EventDict:
    """Remove the `color_message` key injected by uvicorn's ColourizedFormatter."""
    event_dict.pop("color_message", None)
    return event_dict


def setup_logging(environment: str = "development", stream=None) -> None:
    """Configure structlog and stdlib logging.

    Call this once during application startup (inside the lifespan handler,
    or at the top of the CLI).

    Args:
        environment: "development" | "production". Determines output format.
        stream: Where log lines go. Defaults to stdout; the CLI passes stderr
            so rendered HTML on stdout stays clean.
    """
    is_production = environment == "production"
    stream = stream or sys.stdout

    shared_processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _drop_color_message_key,
    ]

    if is_production:
        processors: list[Processor] = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    # Route stdlib logging (uvicorn, httpx, redis) into the same stream.
    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=logging.INFO,
    )
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True
    # httpx logs full request URLs at INFO, and the Gemini URL carries the key.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog bound logger for the given module name."""
    return structlog.get_logger(name)
