"""
Centralized Logging Configuration for the CV matching core
"""
import functools
import logging
import logging.config
import time
from datetime import datetime
from pathlib import Path
from typing import Dict, Any

from cvmatch import config


def setup_logging(
    level: str = "INFO",
    log_file: str = None,
    enable_console: bool = True,
    enable_file: bool = True,
    format_style: str = "detailed",
    log_dir: str = "logs"
) -> None:
    """
    Setup centralized logging configuration

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (defaults to logs/cvmatch_<date>.log)
        enable_console: Enable console logging
        enable_file: Enable file logging
        format_style: Format style ('simple', 'detailed', 'json')
        log_dir: Directory for the rotating log files
    """

    log_path = Path(log_dir)
    if enable_file:
        log_path.mkdir(parents=True, exist_ok=True)

    if log_file is None:
        log_file = log_path / f"cvmatch_{datetime.now().strftime('%Y%m%d')}.log"

    formats = {
        "simple": "%(levelname)s - %(name)s - %(message)s",
        "detailed": "%(asctime)s | %(levelname)-8s | %(name)-30s | %(funcName)-20s:%(lineno)-4d | %(message)s",
        "json": '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "function": "%(funcName)s", "line": %(lineno)d, "message": "%(message)s"}'
    }

    cfg: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": formats.get(format_style, formats["detailed"]),
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
            "simple": {
                "format": formats["simple"]
            }
        },
        "handlers": {},
        "loggers": {
            "cvmatch": {
                "level": level,
                "handlers": [],
                "propagate": True
            },
            "pdfminer": {
                "level": "ERROR",
                "handlers": [],
                "propagate": True
            }
        }
    }

    if enable_console:
        cfg["handlers"]["console"] = {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "simple" if format_style == "simple" else "detailed",
            "stream": "ext://sys.stdout"
        }
        cfg["loggers"]["cvmatch"]["handlers"].append("console")

    if enable_file:
        cfg["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": level,
            "formatter": "detailed",
            "filename": str(log_file),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "encoding": "utf8"
        }
        cfg["loggers"]["cvmatch"]["handlers"].append("file")

        error_log_file = log_path / f"cvmatch_errors_{datetime.now().strftime('%Y%m%d')}.log"
        cfg["handlers"]["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filename": str(error_log_file),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "encoding": "utf8"
        }
        cfg["loggers"]["cvmatch"]["handlers"].append("error_file")

    logging.config.dictConfig(cfg)

    logger = logging.getLogger("cvmatch.logging")
    logger.info(f"Logging configured - Level: {level}, Console: {enable_console}, File: {enable_file}")
    if enable_file:
        logger.info(f"Log file: {log_file}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with consistent naming

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger under the ``cvmatch`` hierarchy
    """
    if name == "cvmatch" or name.startswith("cvmatch."):
        return logging.getLogger(name)
    return logging.getLogger(f"cvmatch.{name}")


def log_function_call(func):
    """Debug-log entry and duration of a public entry point; failures are logged at ERROR and re-raised."""
    logger = get_logger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        started = time.perf_counter()
        logger.debug(f"Entering {func.__qualname__} (args={len(args)}, kwargs={sorted(kwargs)})")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"Error in {func.__qualname__} after {time.perf_counter() - started:.3f}s: {e}")
            raise
        logger.debug(f"Completed {func.__qualname__} in {time.perf_counter() - started:.3f}s")
        return result

    return wrapper


# level None means "use LOG_LEVEL"
_ENVIRONMENT_PROFILES: Dict[str, Dict[str, Any]] = {
    "production": {"level": None, "enable_file": True, "format_style": "detailed"},
    "development": {"level": "DEBUG", "enable_file": True, "format_style": "detailed"},
    "testing": {"level": "WARNING", "enable_file": False, "format_style": "simple"},
}


def configure_for_environment(environment: str = None, log_level: str = None) -> None:
    """
    Install handlers for ENVIRONMENT (production, development or testing).

    Unknown environments get LOG_LEVEL with the default handlers. Call once
    at startup; library modules never configure logging themselves.
    """
    environment = (environment or config.ENVIRONMENT).lower()
    log_level = (log_level or config.LOG_LEVEL).upper()

    profile = _ENVIRONMENT_PROFILES.get(environment)
    if profile is None:
        setup_logging(level=log_level)
        return

    setup_logging(
        level=profile["level"] or log_level,
        enable_console=True,
        enable_file=profile["enable_file"],
        format_style=profile["format_style"],
    )


class PerformanceMonitor:
    """
    Times a block and logs the elapsed milliseconds on exit.

    Used around candidate ranking; a block slower than ``threshold_ms`` logs
    at WARNING, a failing block at ERROR. ``elapsed_ms`` stays readable after
    the block.
    """

    def __init__(self, operation_name: str, logger: logging.Logger = None, threshold_ms: float = 1000):
        self.operation_name = operation_name
        self.logger = logger or get_logger("performance")
        self.threshold_ms = threshold_ms
        self._started = None
        self.elapsed_ms = None

    def __enter__(self):
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed_ms = (time.perf_counter() - self._started) * 1000

        if exc_type is not None:
            self.logger.error(f"{self.operation_name} failed after {self.elapsed_ms:.2f}ms: {exc_val}")
        elif self.elapsed_ms > self.threshold_ms:
            self.logger.warning(f"{self.operation_name} took {self.elapsed_ms:.2f}ms (threshold {self.threshold_ms}ms)")
        else:
            self.logger.info(f"{self.operation_name} completed in {self.elapsed_ms:.2f}ms")
        return False
