"""Structured logging setup using structlog.

One shared processor chain (context vars, log level, timestamps, stack
info) feeds either a coloured ConsoleRenderer for local development or a
JSONRenderer for production.  The renderer follows ``APP_ENV`` unless
``json_output`` forces JSON.

Standard-library ``logging`` is routed through the same formatter so that
httpx and uvicorn lines look like ours.
"""

import logging
import os
import sys
import uuid

import structlog


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> structlog.BoundLogger:
    """Configure structlog with environment-appropriate rendering.

    Args:
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR).
        json_output: Force JSON output.  When False, JSON is used only when
                     ``APP_ENV`` is ``"production"``.

    Returns:
        A configured structlog BoundLogger.
    """
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *shared_processors,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger bound with ``logger_name``.

    Configures logging with defaults if nothing has configured it yet.
    """
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)


def bind_request_id(request_id: str | None = None) -> str:
    """Bind a request id into structlog's context vars and return it.

    Clears any bindings left over from a previous request on the same task
    first, so one request's context never leaks into the next.
    """
    structlog.contextvars.clear_contextvars()
    rid = request_id or uuid.uuid4().hex[:12]
    structlog.contextvars.bind_contextvars(request_id=rid)
    return rid
