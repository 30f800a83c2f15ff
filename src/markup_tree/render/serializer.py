"""Iterative HTML serializer.

Rendering walks the tree with an explicit stack of frames instead of
recursion, so extra memory grows with tree depth rather than tree size and
arbitrarily deep trees never hit the interpreter's recursion limit.

Each frame holds a branch, a phase (START, CHILDREN, END) and a stack of
child iterators. An :class:`ElementList` child pushes an iterator over its
items onto the current frame, which splices it in traversal order without
building a flattened copy.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, List, Optional, Union

from markup_tree.element.model import Branch, Element, ElementList
from markup_tree.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    MarkupConfig,
    RenderConfig,
    RenderMetrics,
    VoidChildrenPolicy,
    VoidElementError,
    get_logger,
    new_correlation_id,
)


class _Phase(Enum):
    START = auto()
    CHILDREN = auto()
    END = auto()


@dataclass
class _RenderFrame:
    # branch is None only for the frame wrapping a non-branch root
    branch: Optional[Branch]
    pending: List[Iterator[Element]]
    depth: int
    phase: _Phase = _Phase.START

    def next_child(self) -> Optional[Element]:
        while self.pending:
            child = next(self.pending[-1], None)
            if child is not None:
                return child
            self.pending.pop()
        return None


@dataclass
class RenderResult:
    """Rendered markup with metrics and any diagnostics raised on the way."""

    html: str
    metrics: RenderMetrics
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return any(
            d.severity in (DiagnosticSeverity.WARNING, DiagnosticSeverity.ERROR)
            for d in self.diagnostics
        )

    def __str__(self) -> str:
        return self.html


class HtmlSerializer:
    """Render element trees to HTML text.

    Examples:
        >>> HtmlSerializer().render(DIV.child(H1.child("Hi")))
        '<div><h1>Hi</h1></div>'

        Refusing void elements with children:
        >>> strict = HtmlSerializer(MarkupConfig.strict())

    A :class:`MarkupConfig` contributes its ``render`` component; when its
    ``global_.enable_correlation_tracking`` is set and no ``correlation_id``
    is given, the serializer gets a fresh one.
    """

    def __init__(
        self,
        config: Optional[Union[RenderConfig, MarkupConfig]] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        if isinstance(config, MarkupConfig):
            if correlation_id is None and config.global_.enable_correlation_tracking:
                correlation_id = new_correlation_id()
            config = config.render
        self.config = config or RenderConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "serializer")

    def render(self, root: Element) -> str:
        """Serialize ``root`` and return the markup."""
        return self.render_result(root).html

    def render_result(self, root: Element) -> RenderResult:
        """Serialize ``root`` and report metrics and diagnostics."""
        start_time = time.perf_counter()
        metrics = RenderMetrics()
        diagnostics: List[DiagnosticEntry] = []

        html = self._serialize(root, metrics, diagnostics)

        metrics.processing_time_ms = (time.perf_counter() - start_time) * 1000
        metrics.output_length = len(html)
        if self.logger.is_enabled_for(logging.DEBUG):
            self.logger.debug(
                "Rendered markup",
                extra={
                    "nodes": metrics.nodes_rendered,
                    "max_depth": metrics.max_depth,
                    "output_length": metrics.output_length,
                },
            )
        return RenderResult(html=html, metrics=metrics, diagnostics=diagnostics)

    def _serialize(
        self,
        root: Element,
        metrics: RenderMetrics,
        diagnostics: List[DiagnosticEntry],
    ) -> str:
        collect = self.config.collect_metrics
        skip_empty = self.config.skip_empty_attributes
        out: List[str] = []

        if isinstance(root, Branch):
            stack = [_RenderFrame(root, [iter(root.children)], 1)]
        else:
            stack = [_RenderFrame(None, [iter((root,))], 0, _Phase.CHILDREN)]

        while stack:
            frame = stack[-1]

            if frame.phase is _Phase.START:
                branch = frame.branch
                out.append("<")
                out.append(branch.name)
                for attribute in branch.attributes:
                    rendered = attribute.render()
                    if rendered or not skip_empty:
                        out.append(" ")
                        out.append(rendered)
                        if collect:
                            metrics.attributes_rendered += 1
                if collect:
                    metrics.branches_rendered += 1
                    if frame.depth > metrics.max_depth:
                        metrics.max_depth = frame.depth

                if branch.is_void:
                    if branch.children:
                        self._handle_void_children(branch, diagnostics)
                    out.append(" />")
                    stack.pop()
                    continue

                out.append(">")
                frame.phase = _Phase.CHILDREN

            if frame.phase is _Phase.CHILDREN:
                child = frame.next_child()
                if child is None:
                    frame.phase = _Phase.END
                elif isinstance(child, Branch):
                    stack.append(
                        _RenderFrame(child, [iter(child.children)], frame.depth + 1)
                    )
                    continue
                elif isinstance(child, ElementList):
                    frame.pending.append(iter(child.items))
                    if collect:
                        metrics.lists_spliced += 1
                    continue
                else:
                    out.append(child.render())
                    if collect:
                        metrics.leaves_rendered += 1
                    continue

            if frame.phase is _Phase.END:
                if frame.branch is not None:
                    out.append("</")
                    out.append(frame.branch.name)
                    out.append(">")
                stack.pop()

        return "".join(out)

    def _handle_void_children(
        self, branch: Branch, diagnostics: List[DiagnosticEntry]
    ) -> None:
        policy = self.config.void_children_policy
        if policy is VoidChildrenPolicy.RAISE:
            raise VoidElementError(branch.name, len(branch.children))
        if policy is VoidChildrenPolicy.WARN:
            message = (
                f"Void element <{branch.name}> has {len(branch.children)} "
                "children; they are not rendered"
            )
            self.logger.warning(message, extra={"tag": branch.name})
            diagnostics.append(
                DiagnosticEntry(
                    severity=DiagnosticSeverity.WARNING,
                    message=message,
                    component="serializer",
                    details={"tag": branch.name, "children": len(branch.children)},
                    correlation_id=self.correlation_id,
                )
            )


_default_serializer = HtmlSerializer()


def render(
    element: Element, config: Optional[Union[RenderConfig, MarkupConfig]] = None
) -> str:
    """Render ``element`` with the default (or the given) configuration."""
    if config is None:
        return _default_serializer.render(element)
    return HtmlSerializer(config).render(element)
