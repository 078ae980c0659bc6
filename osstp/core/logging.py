"""Logging setup: structlog events rendered through stdlib logging on stderr.

stdout carries the manifest, so no handler may ever write there.
"""

from __future__ import annotations

import logging
import logging.config
import os

import structlog

LEVEL_ENV = "OSSTP_LOG_LEVEL"
FORMAT_ENV = "OSSTP_LOG_FORMAT"

# Third-party loggers that are noisy at INFO during --download
_QUIET_LOGGERS = ("httpx", "httpcore")


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors applied to both structlog and foreign stdlib records."""
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def resolve_level(verbose: bool) -> str:
    """``-v`` wins; otherwise ``$OSSTP_LOG_LEVEL``, defaulting to INFO."""
    if verbose:
        return "DEBUG"
    return os.environ.get(LEVEL_ENV, "INFO").upper()


def setup_logging(verbose: bool = False) -> None:
    """Route structlog through a single stderr handler.

    ``$OSSTP_LOG_FORMAT`` selects ``console`` (default) or ``json`` output.
    """
    level = resolve_level(verbose)
    pre_chain = _pre_chain()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    loggers = {"osstp": {"level": level}}
    loggers.update({name: {"level": "WARNING"} for name in _QUIET_LOGGERS})

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "osstp": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": pre_chain,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        _renderer(os.environ.get(FORMAT_ENV, "console").lower()),
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "osstp",
                },
            },
            "root": {"handlers": ["stderr"], "level": level},
            "loggers": loggers,
        }
    )
