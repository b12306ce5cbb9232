"""
Structured Logging for geotrace
===============================

Bounded Context: Observability

JSON-structured logging with typed event names.

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    JSONFormatter: Pass-through formatter for JSON records
    create_logger: Factory function

Example:
    >>> from geotrace_core.logging import create_logger, LogEvent
    >>> logger = create_logger("session")
    >>> logger.info(
    ...     event=LogEvent.SESSION_STARTED,
    ...     message="Session started",
    ...     metadata={'session_id': 'walk'}
    ... )
"""

from .events import LogEvent
from .structured import StructuredLogger, JSONFormatter, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'JSONFormatter',
    'create_logger',
]
