"""Logging configuration for the lesson toolkit.

Library modules log through the standard ``logging`` module with context passed
as ``extra={...}``. The CLI calls ``configure_logging`` to route those records
into loguru, which writes either human-readable lines or serialized JSON; the
``extra`` fields travel with each record as loguru bound context.
"""

import inspect
import logging
import sys
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from loguru import logger as loguru_logger

# LogRecord attributes that are not caller-supplied context
STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "asctime",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
    }
)


def record_context(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the ``extra={...}`` fields attached to a log record."""
    return {k: v for k, v in record.__dict__.items() if k not in STANDARD_ATTRS}


class InterceptHandler(logging.Handler):
    """Forward standard logging records to loguru, keeping their extra fields."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists.
        try:
            level: Union[str, int] = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message.
        frame, depth = inspect.currentframe(), 0
        while frame:
            filename = frame.f_code.co_filename
            is_logging = filename == logging.__file__
            is_frozen = "importlib" in filename and "_bootstrap" in filename
            if depth > 0 and not (is_logging or is_frozen):
                break
            frame = frame.f_back
            depth += 1

        context = {"logger": record.name, **record_context(record)}
        loguru_logger.bind(**context).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    json_format: bool = False,
) -> None:
    """Configure logging for the CLI.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional file path for log output (default: None = console only)
        json_format: If True, serialize records as JSON (default: False)

    Example:
        >>> configure_logging(level="DEBUG", log_file="logs/lessons.log")
    """
    if isinstance(level, int):
        level = logging.getLevelName(level)
    level = str(level).upper()

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    loguru_logger.remove()  # Remove default configuration
    loguru_logger.add(
        sys.stdout, level=level, backtrace=True, diagnose=False, serialize=json_format
    )

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        loguru_logger.add(
            log_file, level=level, backtrace=True, diagnose=False, serialize=json_format
        )

    logging.info(f"Logging configured: level={level}, json_format={json_format}")


def _describe_counts(counts: Dict[str, int]) -> str:
    return ", ".join(f"{value} {name}" for name, value in counts.items())


@contextmanager
def lesson_stage_logger(stage_name: str, source: str) -> Iterator[Dict[str, int]]:
    """Log one lesson's trip through a stage with timing and view counts.

    The caller fills the yielded dict with what the stage produced (quizzes,
    kanji, prompts); the counts are reported on completion both in the message
    and as ``<name>_count`` fields.

    Args:
        stage_name: Name of the stage
        source: Lesson file being processed

    Yields:
        Dict of counts to report when the stage completes

    Example:
        >>> with lesson_stage_logger("process_lesson", "neko.txt") as counts:
        ...     counts["quizzes"] = 3
        ...     counts["kanji"] = 1
    """
    logger = logging.getLogger(f"sensei.{stage_name}")
    counts: Dict[str, int] = {}

    start_time = datetime.now(UTC)
    logger.info(
        f"Starting {stage_name}: {source}",
        extra={"stage": stage_name, "status": "started", "source": source},
    )

    try:
        yield counts
    except Exception as e:
        duration_ms = (datetime.now(UTC) - start_time).total_seconds() * 1000
        logger.error(
            f"Failed {stage_name}: {source} ({type(e).__name__})",
            extra={
                "stage": stage_name,
                "status": "failed",
                "source": source,
                "duration_ms": round(duration_ms, 2),
                "error": str(e)[:200],
            },
            exc_info=True,
        )
        raise

    duration_ms = (datetime.now(UTC) - start_time).total_seconds() * 1000
    summary = f" ({_describe_counts(counts)})" if counts else ""
    logger.info(
        f"Completed {stage_name}: {source} in {duration_ms:.1f} ms{summary}",
        extra={
            "stage": stage_name,
            "status": "completed",
            "source": source,
            "duration_ms": round(duration_ms, 2),
            **{f"{name}_count": value for name, value in counts.items()},
        },
    )
