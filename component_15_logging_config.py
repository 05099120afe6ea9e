"""
component_15_logging_config.py

Central logging system for Shrdlite.
Provides structured logging with per-handler levels and formatting.

Features:
- Console and rotating file logging
- Separate error-only and performance log files
- Structured formatting with timestamps and component names
- Performance tracking for resolution and planning runs
- Contextual key=value information appended to each record

Usage:
    from component_15_logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Plan found", extra={"plan_length": 6, "expansions": 41})
    logger.error("Resolution failed", extra={"command": "put"})
"""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import Any, Dict, Literal, MutableMapping, Optional, Tuple, Type

LOG_DIR: Path = Path("logs")

DEFAULT_LOG_FILE: Path = LOG_DIR / "shrdlite.log"
ERROR_LOG_FILE: Path = LOG_DIR / "shrdlite_errors.log"
PERFORMANCE_LOG_FILE: Path = LOG_DIR / "shrdlite_performance.log"

PERFORMANCE_LOGGER_NAME: str = "shrdlite.performance"

CONSOLE_LOG_LEVEL: int = logging.INFO
FILE_LOG_LEVEL: int = logging.DEBUG


class ShrdliteLogFormatter(logging.Formatter):
    """
    Formatter for structured log output.
    Optionally colours console output by level.
    """

    COLORS: Dict[str, str] = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",
    }

    def __init__(self, use_colors: bool = False, include_extra: bool = True) -> None:
        self.use_colors: bool = use_colors
        self.include_extra: bool = include_extra

        # [TIMESTAMP] [LEVEL] [COMPONENT] MESSAGE
        fmt = "[%(asctime)s] [%(levelname)-8s] [%(name)s] %(message)s"
        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        log_message = super().format(record)

        if self.include_extra and hasattr(record, "extra_info"):
            extra_str = " | ".join(f"{k}={v}" for k, v in record.extra_info.items())
            log_message += f" | {extra_str}"

        if self.use_colors:
            color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
            reset = self.COLORS["RESET"]
            log_message = f"{color}{log_message}{reset}"

        return log_message


class PerformanceLogger:
    """
    Context manager timing a critical operation.

    Usage:
        with PerformanceLogger(logger.logger, "Planning", interpretations=3):
            planner.plan_interpretation(formula, state)
    """

    def __init__(
        self, logger: logging.Logger, operation_name: str, **context: Any
    ) -> None:
        self.logger: logging.Logger = logger
        self.operation_name: str = operation_name
        self.context: Dict[str, Any] = context
        self.start_time: Optional[datetime] = None

    def __enter__(self) -> "PerformanceLogger":
        self.start_time = datetime.now()
        self.logger.debug(
            f"START: {self.operation_name}", extra={"extra_info": self.context}
        )
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> Literal[False]:
        assert (
            self.start_time is not None
        ), "PerformanceLogger was not entered"
        duration_ms = (datetime.now() - self.start_time).total_seconds() * 1000

        if exc_type is None:
            self.logger.debug(
                f"END: {self.operation_name} (duration: {duration_ms:.2f}ms)",
                extra={"extra_info": {**self.context, "duration_ms": duration_ms}},
            )

            perf_logger = logging.getLogger(PERFORMANCE_LOGGER_NAME)
            perf_logger.info(
                f"{self.operation_name}: {duration_ms:.2f}ms",
                extra={"extra_info": {**self.context, "duration_ms": duration_ms}},
            )
        else:
            # Expected failures (no plan, no objects) are reported by the caller
            self.logger.debug(
                f"FAILED: {self.operation_name} (duration: {duration_ms:.2f}ms)",
                extra={
                    "extra_info": {
                        **self.context,
                        "duration_ms": duration_ms,
                        "error": str(exc_val),
                    }
                },
            )

        return False


class StructuredLogger(logging.LoggerAdapter):
    """
    Logger adapter storing the ``extra`` dict as ``extra_info`` on the record.
    """

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> Tuple[str, MutableMapping[str, Any]]:
        extra = kwargs.get("extra", {})
        if extra:
            kwargs["extra"] = {"extra_info": extra}
        return msg, kwargs


def setup_logging(
    console_level: int = CONSOLE_LOG_LEVEL,
    file_level: int = FILE_LOG_LEVEL,
    log_file: Optional[Path] = None,
    enable_performance_logging: bool = True,
) -> None:
    """
    Configure the global logging system.

    Args:
        console_level: Level of console output
        file_level: Level of the main log file
        log_file: Path of the main log file (default: logs/shrdlite.log)
        enable_performance_logging: Enable the separate performance log
    """
    LOG_DIR.mkdir(exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Filtering happens per handler

    # Avoid duplicate handlers on repeated setup
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        ShrdliteLogFormatter(use_colors=True, include_extra=True)
    )
    root_logger.addHandler(console_handler)

    file_path = log_file or DEFAULT_LOG_FILE
    file_handler = logging.handlers.RotatingFileHandler(
        file_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"  # 10 MB
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(ShrdliteLogFormatter(use_colors=False, include_extra=True))
    root_logger.addHandler(file_handler)

    error_handler = logging.handlers.RotatingFileHandler(
        ERROR_LOG_FILE,
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=3,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(ShrdliteLogFormatter(use_colors=False, include_extra=True))
    root_logger.addHandler(error_handler)

    if enable_performance_logging:
        perf_logger = logging.getLogger(PERFORMANCE_LOGGER_NAME)
        perf_logger.setLevel(logging.INFO)
        perf_logger.propagate = False
        perf_logger.handlers.clear()

        perf_handler = logging.handlers.RotatingFileHandler(
            PERFORMANCE_LOG_FILE,
            maxBytes=5 * 1024 * 1024,  # 5 MB
            backupCount=3,
            encoding="utf-8",
        )
        perf_handler.setFormatter(
            ShrdliteLogFormatter(use_colors=False, include_extra=True)
        )
        perf_logger.addHandler(perf_handler)

    logger = logging.getLogger("shrdlite.logging_config")
    logger.debug(
        "Logging initialised",
        extra={
            "extra_info": {
                "console_level": logging.getLevelName(console_level),
                "file_level": logging.getLevelName(file_level),
                "log_file": str(file_path),
                "performance_logging": enable_performance_logging,
            }
        },
    )


def get_logger(name: str) -> StructuredLogger:
    """
    Create a structured logger for a component.

    Args:
        name: Component name (usually __name__)

    Returns:
        StructuredLogger instance

    Example:
        logger = get_logger(__name__)
        logger.info("Goal resolved", extra={"disjuncts": 2})
    """
    base_logger = logging.getLogger(name)
    return StructuredLogger(base_logger, {})


def log_component_start(
    logger: StructuredLogger, component_name: str, **context: Any
) -> None:
    """Log the start of a component operation."""
    logger.info(f"START: {component_name}", extra=context)


def log_component_end(
    logger: StructuredLogger, component_name: str, **context: Any
) -> None:
    """Log the successful end of a component operation."""
    logger.info(f"END: {component_name}", extra=context)


# Automatic setup on import; an explicit setup_logging() call overrides it
if not logging.getLogger().handlers:
    setup_logging()
