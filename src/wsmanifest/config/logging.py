"""structlog setup for the wsmanifest CLI.

Everything goes to stderr; stdout carries only results. Soft failures
(unreadable project manifests, missing peer metadata, dangling edges) are
debug events on ``wsmanifest.*`` loggers and only show with ``--verbose``.

Context bound with :func:`project_context` (and the ``workspace`` bound by
:func:`configure_logging`) is attached to every event, stdlib records
included.
"""

from __future__ import annotations

import logging
import sys
from contextlib import AbstractContextManager
from pathlib import Path

import structlog

LOGGER_NAME = "wsmanifest"


def _shared_processors(log_json: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if log_json:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    return processors


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    workspace_root: Path | None = None,
) -> None:
    """Attach a structlog-rendering stderr handler to the ``wsmanifest`` logger.

    Args:
        verbose: Show debug events. When False, only WARNING+.
        log_json: JSON lines (with timestamps) instead of console output.
        workspace_root: Bound as ``workspace`` on every event when given.
    """
    shared = _shared_processors(log_json)
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    # Only our loggers are routed; library loggers keep their own setup.
    ours = logging.getLogger(LOGGER_NAME)
    ours.handlers.clear()
    ours.addHandler(handler)
    ours.propagate = False
    ours.setLevel(logging.DEBUG if verbose else logging.WARNING)

    structlog.contextvars.clear_contextvars()
    if workspace_root is not None:
        structlog.contextvars.bind_contextvars(workspace=str(workspace_root))


def project_context(project: str) -> AbstractContextManager[object]:
    """Bind ``project`` to every event logged inside the ``with`` block."""
    return structlog.contextvars.bound_contextvars(project=project)
