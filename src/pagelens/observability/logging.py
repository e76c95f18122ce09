"""
Structured logging for PageLens.

Both structlog loggers and plain ``logging`` loggers (the config loader
uses the latter) end up in one handler. Console runs get the readable
dev renderer; with ``log_file`` set every record is written as one JSON
object per line. Records emitted while a document is bound in the
context carry a ``document`` field.
"""
from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, Dict, List

import structlog
from structlog.contextvars import get_contextvars

if TYPE_CHECKING:
    from pagelens.config.config import MonitoringConfig


def add_document(logger: logging.Logger, method_name: str, event_dict: Dict[Any, Any]) -> Dict[Any, Any]:
    """Tag the record with the HTML file currently being processed."""
    document = get_contextvars().get("document")
    if document is not None:
        event_dict.setdefault("document", document)
    return event_dict


def _record_processors() -> List[Any]:
    """Processors applied to structlog events and foreign stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        add_document,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _build_handler(config: MonitoringConfig) -> logging.Handler:
    renderer: Any
    handler: logging.Handler
    if config.log_file:
        renderer = structlog.processors.JSONRenderer()
        handler = logging.FileHandler(config.log_file, encoding="utf-8")
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=_record_processors(),
        )
    )
    return handler


def configure_logging(config: MonitoringConfig) -> None:
    """
    Install the PageLens log pipeline.

    Safe to call more than once: the root handler is replaced each time,
    which is what the CLI relies on when ``--log-level`` overrides the
    configured level.
    """
    logging.basicConfig(
        format="%(message)s",
        level=config.log_level.upper(),
        handlers=[_build_handler(config)],
        force=True,
    )

    structlog.configure(
        processors=_record_processors()
        + [
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    structlog.get_logger(__name__).debug(
        "Log pipeline ready", level=config.log_level, destination=config.log_file or "stderr"
    )
