"""Exception hierarchy for markup tree operations.

Navigation never raises; these cover construction misuse, configured
strictness and runaway transforms.
"""

from typing import Optional


class MarkupError(Exception):
    """Base exception for markup tree errors."""


class VoidElementError(MarkupError):
    """A void branch carrying children was rendered under the RAISE policy."""

    def __init__(self, tag_name: str, child_count: int) -> None:
        super().__init__(
            f"Void element <{tag_name}> cannot render children "
            f"({child_count} supplied)"
        )
        self.tag_name = tag_name
        self.child_count = child_count


class ElementCoercionError(MarkupError, TypeError):
    """A value with no canonical text form was offered as an element."""

    def __init__(self, value: object) -> None:
        super().__init__(
            f"Cannot convert {type(value).__name__} to an element: {value!r}"
        )
        self.value = value


class TransformLimitError(MarkupError):
    """A transform walked more steps than its configured limit."""

    def __init__(self, max_steps: int, visited: Optional[int] = None) -> None:
        super().__init__(f"Transform exceeded max_steps={max_steps}")
        self.max_steps = max_steps
        self.visited = visited
