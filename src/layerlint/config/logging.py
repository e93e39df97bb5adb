"""structlog configuration for layerlint.

Logs are operational chatter on stderr (unreadable files, plugin
failures, skipped checks). Violations are command output and never go
through logging.

- Human (default): bare ``level event key=value`` lines, colored on a TTY
- JSON (``--log-json``): one object per line with timestamp, logger,
  the bound ``project`` root and any formatted traceback, for CI
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog
from structlog.types import Processor


def _level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def _pipeline(log_json: bool) -> tuple[list[Processor], Processor]:
    """``(pre-chain, renderer)`` shared by structlog and stdlib records."""
    pre_chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if not log_json:
        return pre_chain, structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    pre_chain += [structlog.processors.TimeStamper(fmt="iso"), structlog.processors.format_exc_info]
    return pre_chain, structlog.processors.JSONRenderer()


def _stderr_handler(pre_chain: list[Processor], renderer: Processor) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
) -> None:
    """Route stdlib and structlog records through one stderr handler.

    Args:
        verbose: DEBUG for ``layerlint.*`` (wins over *quiet*).
        quiet: ERROR only, so ``--quiet`` output stays one line per issue.
        log_json: JSON lines instead of console lines.
    """
    pre_chain, renderer = _pipeline(log_json)
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.handlers[:] = [_stderr_handler(pre_chain, renderer)]
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("layerlint").setLevel(_level(verbose=verbose, quiet=quiet))
    logging.getLogger("pluggy").setLevel(logging.ERROR)


def bind_project(root: Path) -> None:
    """Tag every later record in this context with the project *root*."""
    structlog.contextvars.bind_contextvars(project=str(root))
