"""
Logging Utilities

Root logger setup plus helpers for adding structured context to log
messages, improving observability and debugging.
"""

import inspect
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Context bound for the duration of the current operation
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})


def setup_logging(level: str = "INFO", log_dir: Optional[Path] = None) -> None:
    """
    Configure the root logger with a console handler and, when ``log_dir``
    is given, a rotating file handler (10MB per file, keep 5 backups).

    Does nothing if the root logger already has handlers, so calling it from
    create_app() more than once is safe.

    Args:
        level: Log level name (case insensitive)
        log_dir: Directory for records.log
    """
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(numeric_level)
    log_formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(numeric_level)
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / "records.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(log_formatter)
        file_handler.setLevel(numeric_level)
        root_logger.addHandler(file_handler)


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Record created", extra={
            "entity": "Employee",
            "record_id": 42
        })
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        context = get_logging_context()
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.debug(message, extra=self._add_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.info(message, extra=self._add_context(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.warning(message, extra=self._add_context(extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self.logger.error(message, extra=self._add_context(extra), exc_info=exc_info)


def get_logging_context() -> Dict[str, Any]:
    return _logging_context.get().copy()


@contextmanager
def logging_context(**kwargs):
    """
    Bind context for every StructuredLogger call inside the block.

    The previous context is restored on exit, so nested blocks only add to
    their parent.

    Example:
        with logging_context(entity="Employee", operation="delete"):
            logger.info("Deleted")  # carries entity and operation
    """
    token = _logging_context.set({**_logging_context.get(), **kwargs})
    try:
        yield
    finally:
        _logging_context.reset(token)


def log_operation(operation_name: str):
    """
    Decorator that logs the start and end of an operation.

    When applied to a method, the instance's ``entity_name`` (if any) is
    added to the context, along with a ``record_id``/``id`` keyword or
    first positional argument. The context stays bound while the operation
    runs, so the method's own log calls carry it too.

    Example:
        @log_operation("get_by_id")
        def get_by_id(self, id):
            ...
    """
    def decorator(func):
        params = list(inspect.signature(func).parameters)

        def _context(args, kwargs) -> Dict[str, Any]:
            context: Dict[str, Any] = {"operation": operation_name}
            if args and getattr(args[0], "entity_name", None):
                context["entity"] = args[0].entity_name
            for key in ("record_id", "id"):
                if key in kwargs:
                    context["record_id"] = kwargs[key]
                elif key in params:
                    position = params.index(key)
                    if position < len(args):
                        context["record_id"] = args[position]
            return context

        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)
            with logging_context(**_context(args, kwargs)):
                logger.debug(f"Starting {operation_name}")
                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    logger.error(
                        f"Failed {operation_name}",
                        extra={"error": str(e), "error_type": type(e).__name__},
                        exc_info=True
                    )
                    raise
                logger.debug(f"Completed {operation_name}")
                return result

        return wrapper

    return decorator
