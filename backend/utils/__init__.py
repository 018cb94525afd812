"""
Utility functions and decorators.
"""

from .logging_utils import (
    StructuredLogger,
    get_logging_context,
    log_operation,
    logging_context,
    setup_logging,
)

__all__ = [
    "StructuredLogger",
    "get_logging_context",
    "log_operation",
    "logging_context",
    "setup_logging",
]
