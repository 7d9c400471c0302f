"""Structured JSON logging for anchoredit.

Every module logs below the ``anchoredit`` namespace: the engine through
plain ``logging.getLogger(__name__)`` loggers (``anchoredit.engine.*``), the
tool and CLI layers through AnchorEditLogger. Configuring an AnchorEditLogger
installs the JSON handlers on the namespace root, so records from both reach
the same rotating file and console stream.

The engine only emits debug records. Its verbosity is controlled separately
(``engine_level`` / ANCHOREDIT_ENGINE_LOG_LEVEL) so fragment-level tracing can
be switched on without flooding the log with tool chatter.
"""

import json
import logging
import os
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from anchoredit.core.exceptions import AnchorEditException, format_error_for_log

LOGGER_NAME = "anchoredit"
ENGINE_LOGGER_NAME = "anchoredit.engine"
LOG_FILE_NAME = "anchoredit.log"


def parse_level(level: str | None, default: int = logging.WARNING) -> int:
    """Translate a level name (DEBUG/INFO/WARN/WARNING/ERROR) to its number.

    Unknown or empty names fall back to ``default``.
    """
    if not level:
        return default
    name = level.strip().upper()
    if name == "WARN":
        name = "WARNING"
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else default


def file_logging_disabled() -> bool:
    return os.environ.get("ANCHOREDIT_DISABLE_FILE_LOGGING", "").lower() in ("1", "true", "yes")


class AnchorEditLogger:
    """Structured JSON logger for the ``anchoredit`` namespace.

    Writes JSON lines to ~/.anchoredit/logs/anchoredit.log (rotated) and to
    stderr. Engine module loggers propagate into the same handlers.
    """

    log_dir: Path | None
    log_file: Path | None

    def __init__(
        self,
        log_dir: str | None = None,
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
        level: str | None = None,
        engine_level: str | None = None,
    ) -> None:
        """Configure the namespace handlers.

        Args:
            log_dir: Directory for log files (defaults to ~/.anchoredit/logs/)
            max_bytes: Maximum size before rotation (default 10MB)
            backup_count: Number of backup files to keep (default 5)
            level: Level for tool and CLI records, reads ANCHOREDIT_LOG_LEVEL
                if not provided (default WARNING)
            engine_level: Level for ``anchoredit.engine.*`` records, reads
                ANCHOREDIT_ENGINE_LOG_LEVEL if not provided; unset means the
                engine follows ``level``
        """
        self._logger = logging.getLogger(LOGGER_NAME)
        self._logger.propagate = False

        # Handlers live on the namespace root; re-creating the logger replaces them
        for handler in self._logger.handlers[:]:
            handler.close()
            self._logger.removeHandler(handler)

        self.log_dir = None
        self.log_file = None
        if not file_logging_disabled():
            self.log_dir = (
                Path(log_dir) if log_dir is not None else Path("~/.anchoredit/logs").expanduser()
            )
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = self.log_dir / LOG_FILE_NAME
            self._add_handler(
                RotatingFileHandler(self.log_file, maxBytes=max_bytes, backupCount=backup_count)
            )

        self._add_handler(logging.StreamHandler())

        self.set_level(level or os.environ.get("ANCHOREDIT_LOG_LEVEL"))
        self.set_engine_level(engine_level or os.environ.get("ANCHOREDIT_ENGINE_LOG_LEVEL"))

    def _add_handler(self, handler: logging.Handler) -> None:
        handler.setFormatter(JSONFormatter())
        self._logger.addHandler(handler)

    def set_level(self, level: str | None) -> None:
        """Set the level of the namespace root.

        Args:
            level: One of DEBUG, INFO, WARN/WARNING, ERROR (None for WARNING)
        """
        self._logger.setLevel(parse_level(level))

    def set_engine_level(self, level: str | None) -> None:
        """Set the level of the engine loggers.

        Args:
            level: Level name, or None to inherit the namespace level
        """
        engine_logger = logging.getLogger(ENGINE_LOGGER_NAME)
        engine_logger.setLevel(parse_level(level, default=logging.NOTSET))

    def debug(self, msg: str, **kv: Any) -> None:
        """Log debug message with optional key-value pairs.

        Args:
            msg: Log message
            **kv: Additional key-value pairs to include
        """
        self._logger.debug(msg, extra={"kv": kv})

    def info(self, msg: str, **kv: Any) -> None:
        """Log info message with optional key-value pairs.

        Args:
            msg: Log message
            **kv: Additional key-value pairs to include
        """
        self._logger.info(msg, extra={"kv": kv})

    def warn(self, msg: str, **kv: Any) -> None:
        """Log warning message with optional key-value pairs.

        Args:
            msg: Log message
            **kv: Additional key-value pairs to include
        """
        self._logger.warning(msg, extra={"kv": kv})

    def error(self, msg: str, **kv: Any) -> None:
        """Log error message with optional key-value pairs.

        Args:
            msg: Log message
            **kv: Additional key-value pairs to include
        """
        self._logger.error(msg, extra={"kv": kv})

    def failure(
        self, msg: str, exception: AnchorEditException, level: int = logging.WARNING, **kv: Any
    ) -> None:
        """Log an anchoredit exception with its structured details.

        The exception is serialized with format_error_for_log and nested under
        the ``error`` key.

        Args:
            msg: Log message
            exception: Exception to record
            level: Record level (default WARNING)
            **kv: Additional key-value pairs to include
        """
        self._logger.log(level, msg, extra={"kv": {**kv, "error": format_error_for_log(exception)}})

    @contextmanager
    def operation(self, operation_name: str, **kv: Any) -> Iterator[None]:
        """Log ``<name>_start`` and ``<name>_end`` around a block, with duration.

        The end record is written even when the block raises.

        Example:
            with logger.operation("replace_snippet", file_path="app.py"):
                ...
        """
        start_time = time.perf_counter()
        self.info(f"{operation_name}_start", **kv)

        try:
            yield
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.info(f"{operation_name}_end", duration_ms=duration_ms, **kv)


class JSONFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, message, extras."""

    def format(self, record: logging.LogRecord) -> str:
        dt = datetime.fromtimestamp(record.created, tz=UTC)

        log_data: dict[str, Any] = {
            "timestamp": dt.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        kv = getattr(record, "kv", None)
        if kv:
            log_data.update(kv)

        return json.dumps(log_data, default=str)
