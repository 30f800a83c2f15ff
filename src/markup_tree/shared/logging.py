"""Structured logging utilities for markup tree operations.

Every record emitted through :class:`CorrelationLogger` carries the emitting
component and an optional correlation ID in ``extra`` so that a render or a
transform can be followed across the serializer and the zipper.
"""

import logging
import uuid
from typing import Any, Dict, Optional


def new_correlation_id() -> str:
    """Return a short random correlation ID."""
    return uuid.uuid4().hex[:12]


class CorrelationLogger:
    """Logger that automatically includes correlation ID and component information."""

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None,
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for tracking one render/transform
            component: Component name for structured logging
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]

    def bind(self, correlation_id: Optional[str]) -> "CorrelationLogger":
        """Return a logger for the same component tagged with ``correlation_id``."""
        return CorrelationLogger(self.logger.name, correlation_id, self.component)

    def is_enabled_for(self, level: int) -> bool:
        """Check the underlying logger level before building expensive messages."""
        return self.logger.isEnabledFor(level)

    def _get_extra(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        # unset IDs fall through to the formatter default
        combined_extra: Dict[str, Any] = {"component": self.component}
        if self.correlation_id is not None:
            combined_extra["correlation_id"] = self.correlation_id
        if extra:
            combined_extra.update(extra)
        return combined_extra

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log debug message with correlation info."""
        self.logger.debug(message, extra=self._get_extra(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log info message with correlation info."""
        self.logger.info(message, extra=self._get_extra(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        """Log warning message with correlation info."""
        self.logger.warning(message, extra=self._get_extra(extra))

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = True,
    ) -> None:
        """Log error message with correlation info."""
        self.logger.error(message, extra=self._get_extra(extra), exc_info=exc_info)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None,
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)


_HANDLER_NAME = "markup_tree.console"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stderr handler that prints component and correlation ID.

    Calling it again only changes the level; the handler is installed once.
    """
    package_logger = logging.getLogger("markup_tree")
    package_logger.setLevel(getattr(logging, level))
    if any(h.get_name() == _HANDLER_NAME for h in package_logger.handlers):
        return
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s [%(component)s:%(correlation_id)s] %(message)s",
            defaults={"component": "-", "correlation_id": "-"},
        )
    )
    package_logger.addHandler(handler)
