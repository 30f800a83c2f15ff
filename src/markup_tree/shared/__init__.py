"""Shared utilities for markup tree building and rendering.

This module provides configuration objects, result types, the exception
hierarchy and logging used across the element, render and zipper layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    GlobalConfig,
    MarkupConfig,
    RenderConfig,
    TransformConfig,
    VoidChildrenPolicy,
)
from .errors import (
    ElementCoercionError,
    MarkupError,
    TransformLimitError,
    VoidElementError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    RenderMetrics,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "GlobalConfig",
    "MarkupConfig",
    "RenderConfig",
    "TransformConfig",
    "VoidChildrenPolicy",
    "ElementCoercionError",
    "MarkupError",
    "TransformLimitError",
    "VoidElementError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "new_correlation_id",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "RenderMetrics",
]
