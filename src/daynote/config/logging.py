"""structlog configuration for daynote.

Two output modes:
- Human (default): console-rendered, colored when stderr is a TTY
- JSON (--log-json): Structured JSON lines to stderr

The CLI and ``daynote watch`` both call :func:`configure_logging` once per
process. The handler is named so that a second call replaces it instead of
stacking, and handlers installed by an embedding application survive.
"""

from __future__ import annotations

import logging
import sys

import structlog

HANDLER_NAME = "daynote"

# Libraries that log per filesystem event at DEBUG; capped regardless of -v.
QUIET_LOGGERS: dict[str, int] = {
    "watchdog": logging.WARNING,
}

_PRE_CHAIN: tuple[structlog.types.Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
)


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _install_handler(formatter: logging.Formatter) -> None:
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route structlog and stdlib records through one stderr handler.

    Args:
        verbose: Let ``daynote.*`` records through from DEBUG up. When
            False, only WARNING+ reaches stderr.
        log_json: Use JSON renderer instead of console renderer.
    """
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    _install_handler(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=list(_PRE_CHAIN),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    logging.getLogger("daynote").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
