"""Logging for the central-config CLI.

Engine and orchestrator events are emitted through structlog and rendered
by a single stderr handler, so stdout carries only command output.  The
environment can override what ``-v`` selects:

    CENTRALCONFIG_LOG_LEVEL   DEBUG, INFO, WARNING, ... (default WARNING, DEBUG with -v)
    CENTRALCONFIG_LOG_FORMAT  console | json (default console)
"""

from __future__ import annotations

import logging.config
import os

import structlog

LEVEL_ENV = "CENTRALCONFIG_LOG_LEVEL"
FORMAT_ENV = "CENTRALCONFIG_LOG_FORMAT"

# HTTP client libraries log every request at DEBUG.
_QUIET_LOGGERS = ("httpx", "httpcore")


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="%H:%M:%S"),
        structlog.processors.format_exc_info,
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(verbose: bool = False) -> str:
    """Route structlog and stdlib records to stderr; returns the level used."""
    level = os.environ.get(LEVEL_ENV) or ("DEBUG" if verbose else "WARNING")
    level = level.upper()
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = {
        "()": structlog.stdlib.ProcessorFormatter,
        "foreign_pre_chain": pre_chain,
        "processors": [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(os.environ.get(FORMAT_ENV, "console").lower()),
        ],
    }
    loggers = {"centralconfig": {"level": level}}
    loggers.update({name: {"level": "WARNING"} for name in _QUIET_LOGGERS})

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"cli": formatter},
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "cli",
                },
            },
            "root": {"handlers": ["stderr"], "level": level},
            "loggers": loggers,
        }
    )
    return level
