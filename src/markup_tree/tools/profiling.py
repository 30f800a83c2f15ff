"""Performance profiling for building, rendering and transforming trees.

Tracks wall time and resident memory per phase with ``psutil`` and builds
synthetic trees of a given depth and width for repeatable measurements.
"""

import json
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import psutil

from markup_tree.element.attributes import CLASS, DISABLED, data_attr
from markup_tree.element.model import Branch, Element, Text
from markup_tree.render.serializer import HtmlSerializer
from markup_tree.shared import MarkupConfig, RenderConfig, get_logger
from markup_tree.zipper.transform import transform_with_stats


@dataclass
class PhasePerformance:
    """Measurements for one phase of a profiling session."""

    phase_name: str
    start_time: float
    end_time: float
    memory_start: int  # bytes
    memory_end: int  # bytes
    operations_count: int = 0

    @property
    def duration_ms(self) -> float:
        return (self.end_time - self.start_time) * 1000

    @property
    def memory_delta(self) -> int:
        return self.memory_end - self.memory_start

    @property
    def ops_per_second(self) -> float:
        duration_s = self.end_time - self.start_time
        return self.operations_count / duration_s if duration_s > 0 else 0.0


@dataclass
class ProfilingSession:
    """Container for one profiled run."""

    session_id: str
    start_time: float
    end_time: float = 0.0
    phases: List[PhasePerformance] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def total_duration_ms(self) -> float:
        return (self.end_time - self.start_time) * 1000

    def phase(self, name: str) -> Optional[PhasePerformance]:
        return next((p for p in self.phases if p.phase_name == name), None)


class PerformanceProfiler:
    """Collect timing and memory measurements across sessions.

    Examples:
        >>> profiler = PerformanceProfiler()
        >>> session = profiler.start_session("page")
        >>> with profiler.profile_phase(session, "render") as phase:
        ...     html = render(page)
        ...     phase.operations_count = 1
        >>> profiler.end_session(session)
    """

    def __init__(self, enable_memory_tracking: bool = True) -> None:
        self.enable_memory_tracking = enable_memory_tracking
        self.sessions: List[ProfilingSession] = []
        self.logger = get_logger(__name__, component="profiler")
        self._process = psutil.Process() if enable_memory_tracking else None

    def memory_rss(self) -> int:
        """Current resident set size in bytes, 0 when tracking is off."""
        if self._process is None:
            return 0
        return self._process.memory_info().rss

    def start_session(self, session_id: str, **metadata: Any) -> ProfilingSession:
        session = ProfilingSession(
            session_id=session_id,
            start_time=time.perf_counter(),
            metadata=dict(metadata),
        )
        self.sessions.append(session)
        return session

    def end_session(self, session: ProfilingSession) -> None:
        session.end_time = time.perf_counter()
        self.logger.debug(
            f"Profiling session {session.session_id} finished",
            extra={"duration_ms": session.total_duration_ms},
        )

    def profile_phase(self, session: ProfilingSession, phase_name: str) -> "PhaseProfiler":
        """Context manager measuring one phase of ``session``."""
        return PhaseProfiler(self, session, phase_name)

    def generate_report(self) -> Dict[str, Any]:
        return {
            "generated_at": time.time(),
            "sessions": [
                {
                    "session_id": s.session_id,
                    "total_duration_ms": s.total_duration_ms,
                    "metadata": s.metadata,
                    "phases": [
                        dict(asdict(p), duration_ms=p.duration_ms,
                             memory_delta=p.memory_delta,
                             ops_per_second=p.ops_per_second)
                        for p in s.phases
                    ],
                }
                for s in self.sessions
            ],
        }

    def save_report(self, output_path: Path) -> None:
        output_path.write_text(json.dumps(self.generate_report(), indent=2))

    def clear_sessions(self) -> None:
        self.sessions.clear()


class PhaseProfiler:
    """Context manager that records a :class:`PhasePerformance`."""

    def __init__(self, profiler: PerformanceProfiler, session: ProfilingSession, phase_name: str):
        self.profiler = profiler
        self.session = session
        self.phase_name = phase_name
        self.phase: Optional[PhasePerformance] = None

    def __enter__(self) -> PhasePerformance:
        self.phase = PhasePerformance(
            phase_name=self.phase_name,
            start_time=time.perf_counter(),
            end_time=0.0,
            memory_start=self.profiler.memory_rss(),
            memory_end=0,
        )
        return self.phase

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.phase.end_time = time.perf_counter()
        self.phase.memory_end = self.profiler.memory_rss()
        self.session.phases.append(self.phase)


def build_synthetic_tree(depth: int, width: int) -> Branch:
    """Tree ``depth`` levels deep with ``width`` children per level.

    One child per level carries the next level down; the others are small
    leaf-holding spans, so the tree has roughly ``depth * width`` nodes.
    """
    if depth < 1 or width < 1:
        raise ValueError("depth and width must be >= 1")
    node: Element = Text("leaf & <end>")
    for level in range(depth):
        siblings = [
            Branch(
                "span",
                attributes=(data_attr("index") << str(i), DISABLED << (i % 2 == 0)),
                children=(Text(f"item {level}.{i}"),),
            )
            for i in range(width - 1)
        ]
        node = Branch(
            "div",
            attributes=(CLASS << f"level-{level}",),
            children=(node, *siblings),
        )
    return node


def _upper_text(node: Element) -> Optional[Element]:
    if isinstance(node, Text):
        return Text(node.value.upper())
    return None


def benchmark_tree(
    depth: int,
    width: int,
    repeat: int = 1,
    mapper: Callable[[Element], Optional[Element]] = _upper_text,
    profiler: Optional[PerformanceProfiler] = None,
    config: Optional[Union[RenderConfig, MarkupConfig]] = None,
) -> Dict[str, Any]:
    """Build, render and transform a synthetic tree ``repeat`` times.

    A :class:`MarkupConfig` applies to both the render and the transform.
    """
    profiler = profiler or PerformanceProfiler()
    serializer = HtmlSerializer(config)
    transform_config = config if isinstance(config, MarkupConfig) else None
    runs = []
    for run in range(repeat):
        session = profiler.start_session(f"bench-{run}", depth=depth, width=width)
        with profiler.profile_phase(session, "build") as phase:
            tree = build_synthetic_tree(depth, width)
            phase.operations_count = depth * width
        with profiler.profile_phase(session, "render") as phase:
            result = serializer.render_result(tree)
            phase.operations_count = result.metrics.nodes_rendered
        with profiler.profile_phase(session, "transform") as phase:
            _, stats = transform_with_stats(tree, mapper, config=transform_config)
            phase.operations_count = stats.visited
        profiler.end_session(session)
        runs.append({
            "session": session.session_id,
            "render": result.metrics.to_dict(),
            "transform": {"visited": stats.visited, "edited": stats.edited,
                          "processing_time_ms": stats.processing_time_ms},
            "phases": {p.phase_name: {"duration_ms": p.duration_ms,
                                      "memory_delta": p.memory_delta}
                       for p in session.phases},
        })
    return {"depth": depth, "width": width, "repeat": repeat, "runs": runs}
