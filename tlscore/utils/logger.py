import logging
import os
import time
import functools
from typing import Callable, Optional
import contextvars
from logging.handlers import RotatingFileHandler

from tlscore.core.config import get_settings

class DefaultLogFieldsFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "emoji"):
            record.emoji = EMOJIS.get(record.levelname, "❔")

        if not hasattr(record, "service"):
            record.service = "system"

        if not hasattr(record, "func_name"):
            record.func_name = record.name

        return True

# -------------------------------------------------------------------
#   LOGGER SETUP
# -------------------------------------------------------------------

FORMAT = "%(asctime)s | %(levelname)s | %(emoji)s | %(service)s | %(func_name)s → %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"

EMOJIS = {
    "DEBUG": "🐞",
    "INFO": "ℹ️",
    "WARNING": "⚠️",
    "ERROR": "❌",
    "CRITICAL": "💥",
}

logger = logging.getLogger("tlscore")


def configure_logging(log_level: Optional[str] = None, log_dir: Optional[str] = None) -> logging.Logger:
    """
    Attach the console handler (and a rotating file handler when a log
    directory is configured) to the package logger. Safe to call again:
    previously attached handlers are replaced.
    """
    settings = get_settings()
    level = (log_level or settings.LOG_LEVEL).upper()
    log_dir = log_dir or settings.LOG_DIR

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(getattr(logging, level, logging.INFO))
    logger.propagate = True

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(FORMAT, datefmt=DATEFMT))
    console_handler.addFilter(DefaultLogFieldsFilter())
    logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "tlscore.log"),
            maxBytes=5_000_000,
            backupCount=3,
            encoding="utf-8"
        )
        file_handler.setFormatter(logging.Formatter(FORMAT, datefmt=DATEFMT))
        file_handler.addFilter(DefaultLogFieldsFilter())
        logger.addHandler(file_handler)

    return logger


configure_logging()


# -------------------------------------------------------------------
#   INTERNAL LOG WRAPPER FUNCTION (USED BY ALL HELPERS)
# -------------------------------------------------------------------
_LOG_DEPTH: contextvars.ContextVar[int] = contextvars.ContextVar("_LOG_DEPTH", default=0)


def _log(level: str, message: str, func_name: str, service="core", indent: int = 0):
    emoji = EMOJIS.get(level, "❔")
    indent_str = "  " * max(indent, 0)

    logger.log(
        getattr(logging, level),
        f"{indent_str}{message}",
        extra={
            "emoji": emoji,
            "func_name": func_name,
            "service": service,
        }
    )


# -------------------------------------------------------------------
#   PUBLIC LOG FUNCTIONS
# -------------------------------------------------------------------

def log_debug(message: str, func_name: str, service="debug"):
    _log("DEBUG", message, func_name, service)


def log_exception(exc: Exception, func_name: str, service="exception"):
    _log("ERROR", f"{type(exc).__name__}: {exc}", func_name, service)


def log_warning(message: str, func_name: str, service="warn"):
    _log("WARNING", message, func_name, service)


# -------------------------------------------------------------------
#   DECORATOR
# -------------------------------------------------------------------

def log_service(fn: Callable = None, *, service: str = "task", suppress_inner: bool = False):
    """
    Log start, completion time and failure of the wrapped call.

    Tracks nested depth and optionally suppresses inner logs when `suppress_inner=True`.
    Usage:
      @log_service
      def small_helper(...): ...
      OR
      @log_service(service="secret", suppress_inner=True)
      def top_level(...): ...
    """

    def decorator(inner_fn):

        @functools.wraps(inner_fn)
        def _wrapper(*args, **kwargs):
            fn_name = inner_fn.__name__
            depth = _LOG_DEPTH.get()

            if suppress_inner and depth > 0:
                return inner_fn(*args, **kwargs)

            token = _LOG_DEPTH.set(depth + 1)

            start = None

            try:
                _log("DEBUG", "started", fn_name, service=service, indent=depth)

                start = time.perf_counter()
                result = inner_fn(*args, **kwargs)

                elapsed = (time.perf_counter() - start) * 1000 if start else -1
                _log("DEBUG", f"completed | {elapsed:.2f}ms", fn_name, service=service, indent=depth)
                return result

            except Exception as exc:
                elapsed = (time.perf_counter() - start) * 1000 if start else -1
                _log("ERROR", f"failed after {elapsed:.2f}ms | {exc}", fn_name, service=service, indent=depth)
                raise

            finally:
                _LOG_DEPTH.reset(token)

        return _wrapper

    # Support both @log_service and @log_service(...options...)
    if callable(fn):
        return decorator(fn)
    return decorator
