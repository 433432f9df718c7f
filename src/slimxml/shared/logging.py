"""Correlation-aware logging for slimxml.

Every parse or query operation can carry a correlation ID. The tokenizer,
document parser and path resolvers receive a ``CorrelationLogger`` from their
caller instead of reaching for module-level state, so one operation's records
can be grouped regardless of which component emitted them.
"""

import logging
import uuid
from typing import Any, Dict, Optional

Extra = Optional[Dict[str, Any]]


class CorrelationLogger:
    """Wraps a stdlib logger and stamps ``component`` and ``correlation_id``
    into the ``extra`` of every record it emits.

    Args:
        name: Name of the wrapped ``logging`` logger, usually ``__name__``
        correlation_id: ID shared by all records of one operation
        component: Emitting component; defaults to the last part of ``name``
    """

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.rpartition(".")[2]

    def for_component(self, component: str) -> "CorrelationLogger":
        """Return a sibling logger sharing this logger's name and correlation ID."""
        return CorrelationLogger(self.logger.name, self.correlation_id, component)

    def is_enabled_for(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def log(self, level: int, message: str, extra: Extra = None, exc_info: bool = False) -> None:
        """Emit ``message`` at ``level``; keys in ``extra`` override the stamps."""
        fields = {"component": self.component, "correlation_id": self.correlation_id}
        fields.update(extra or {})
        self.logger.log(level, message, extra=fields, exc_info=exc_info)

    def debug(self, message: str, extra: Extra = None, exc_info: bool = False) -> None:
        self.log(logging.DEBUG, message, extra, exc_info)

    def info(self, message: str, extra: Extra = None, exc_info: bool = False) -> None:
        self.log(logging.INFO, message, extra, exc_info)

    def warning(self, message: str, extra: Extra = None, exc_info: bool = False) -> None:
        self.log(logging.WARNING, message, extra, exc_info)

    def error(self, message: str, extra: Extra = None, exc_info: bool = False) -> None:
        # Parse failures are logged right before they propagate; tracebacks are opt-in
        self.log(logging.ERROR, message, extra, exc_info)

    def exception(self, message: str, extra: Extra = None) -> None:
        """Log at error level with the active exception's traceback."""
        self.log(logging.ERROR, message, extra, exc_info=True)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance."""
    return CorrelationLogger(name, correlation_id, component)


def resolve_logger(
    logger: Optional[CorrelationLogger],
    name: str,
    component: str,
    correlation_id: Optional[str] = None
) -> CorrelationLogger:
    """Use an injected logger when given, otherwise build a module logger."""
    if logger is not None:
        return logger.for_component(component)
    return get_logger(name, correlation_id, component)


def new_correlation_id() -> str:
    """Generate a short correlation ID for one parse operation."""
    return uuid.uuid4().hex[:12]
