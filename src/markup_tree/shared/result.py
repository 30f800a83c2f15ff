"""Result objects and diagnostic types for markup rendering.

Renders and transforms report what they did through these types instead of
through exceptions, so callers can inspect hazards after the fact.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class RenderMetrics:
    """Counters collected while serializing one tree."""

    processing_time_ms: float = 0.0
    branches_rendered: int = 0
    leaves_rendered: int = 0
    lists_spliced: int = 0
    attributes_rendered: int = 0
    max_depth: int = 0
    output_length: int = 0

    @property
    def nodes_rendered(self) -> int:
        """Branches plus leaves; spliced lists are not nodes of the output."""
        return self.branches_rendered + self.leaves_rendered

    @property
    def nodes_per_second(self) -> float:
        """Calculate nodes rendered per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.nodes_rendered * 1000.0) / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary including derived rates."""
        return {
            "processing_time_ms": self.processing_time_ms,
            "branches_rendered": self.branches_rendered,
            "leaves_rendered": self.leaves_rendered,
            "lists_spliced": self.lists_spliced,
            "attributes_rendered": self.attributes_rendered,
            "max_depth": self.max_depth,
            "output_length": self.output_length,
            "nodes_rendered": self.nodes_rendered,
            "nodes_per_second": self.nodes_per_second,
        }
