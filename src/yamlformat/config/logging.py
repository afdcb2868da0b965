"""structlog rendering for yamlformat's stdlib log records.

Library modules only call ``logging.getLogger(__name__)``; this module
decides how those records look. Both modes write to stderr so encoded
documents on stdout stay clean:
- Human (default): console renderer, colored when stderr is a TTY
- JSON (--log-json): one JSON object per line, ``extra=`` fields as keys
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "yamlformat"


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route records through a structlog ``ProcessorFormatter`` on stderr.

    Args:
        verbose: Enable DEBUG-level output for ``yamlformat.*`` loggers,
            which is where the codec reports format and option counts.
            When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
