"""Whole-tree rewriting in one pre-order pass.

``transform`` walks every node with a zipper, offering each node to the
mappers. A mapper returns a replacement node or None to leave the node
alone. Only branches on the path to an edited node are rebuilt.

With several mappers, all of them run at every node in the given order and
each sees the focus left by the one before it. Nodes introduced by a
replacement are visited by the same walk, so a mapper that always grows the
tree never terminates; ``TransformConfig.max_steps`` bounds that.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar, Union

from markup_tree.shared import (
    MarkupConfig,
    TransformConfig,
    TransformLimitError,
    get_logger,
    new_correlation_id,
)

from .cursor import Zipper
from .ops import ZipOps

E = TypeVar("E")

NodeMapper = Callable[[E], Optional[E]]

logger = get_logger(__name__, component="transform")


@dataclass
class TransformStats:
    """What one transform pass did."""

    visited: int = 0
    edited: int = 0
    processing_time_ms: float = 0.0

    @property
    def edit_rate(self) -> float:
        if self.visited == 0:
            return 0.0
        return self.edited / self.visited


def _as_mapper_list(mappers: Union[NodeMapper, Sequence[NodeMapper]]) -> List[NodeMapper]:
    if callable(mappers):
        return [mappers]
    return list(mappers)


def transform_with_stats(
    root: E,
    mappers: Union[NodeMapper, Sequence[NodeMapper]],
    ops: Optional[ZipOps[Any, E]] = None,
    config: Optional[Union[TransformConfig, MarkupConfig]] = None,
    correlation_id: Optional[str] = None,
) -> Tuple[E, TransformStats]:
    """Apply ``mappers`` to every node of ``root`` and return the new root.

    Args:
        root: Tree to rewrite; it is not modified
        mappers: One mapper or a sequence applied in order at each node
        ops: Tree capabilities; element trees need none
        config: Step limit and logging; a MarkupConfig contributes its
            ``transform`` component and correlation tracking
        correlation_id: Tag for the summary log record

    Returns:
        The rewritten root and a :class:`TransformStats`

    Raises:
        TransformLimitError: More than ``config.max_steps`` nodes were visited
    """
    if isinstance(config, MarkupConfig):
        if correlation_id is None and config.global_.enable_correlation_tracking:
            correlation_id = new_correlation_id()
        config = config.transform
    config = config or TransformConfig()
    log = logger.bind(correlation_id)
    mapper_list = _as_mapper_list(mappers)
    stats = TransformStats()
    start_time = time.perf_counter()

    loc = Zipper.from_root(root, ops)
    while True:
        if config.max_steps is not None and stats.visited >= config.max_steps:
            raise TransformLimitError(config.max_steps, stats.visited)
        edited = False
        for mapper in mapper_list:
            next_loc = loc.edit(mapper)
            if next_loc is not loc:
                loc = next_loc
                edited = True
        stats.visited += 1
        if edited:
            stats.edited += 1
        loc = loc.go_next()
        if loc.at_end:
            break

    stats.processing_time_ms = (time.perf_counter() - start_time) * 1000
    if config.log_summary and log.is_enabled_for(logging.DEBUG):
        log.debug(
            "Transform finished",
            extra={"visited": stats.visited, "edited": stats.edited},
        )
    return loc.focus, stats


def transform(
    root: E,
    mappers: Union[NodeMapper, Sequence[NodeMapper]],
    ops: Optional[ZipOps[Any, E]] = None,
    config: Optional[Union[TransformConfig, MarkupConfig]] = None,
    correlation_id: Optional[str] = None,
) -> E:
    """Apply ``mappers`` to every node of ``root`` and return the new root."""
    new_root, _ = transform_with_stats(root, mappers, ops, config, correlation_id)
    return new_root
