"""Persistent zipper over any tree that implements :class:`ZipOps`.

A :class:`Zipper` is a focus node plus everything needed to rebuild the
tree around it: siblings to the left and right, the ancestor branches and the
cursor it descended from. Every move or edit returns a new cursor and leaves
the old one valid. Moves that are not possible return None.

Edits set ``changed``. Only ``go_up`` on a changed cursor rebuilds the parent
(through ``ZipOps.make_node``), one level per call, so subtrees that were
never edited are shared with the original tree rather than copied.

Siblings and ancestors are stored as cons cells, ``(head, tail)`` pairs
ending in None, nearest element first. Moving one step sideways is O(1).
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, Tuple, TypeVar

from .ops import ELEMENT_OPS, ZipOps

B = TypeVar("B")
E = TypeVar("E")

# (head, tail) pairs ending in None
Cons = Optional[Tuple[Any, Any]]


def _cons_from(items: Iterable[Any]) -> Cons:
    """Cons list with the first item of ``items`` at the head."""
    result: Cons = None
    for item in reversed(list(items)):
        result = (item, result)
    return result


def _cons_iter(cells: Cons) -> Iterator[Any]:
    while cells is not None:
        yield cells[0]
        cells = cells[1]


@dataclass(frozen=True, eq=False, repr=False)
class Zipper(Generic[B, E]):
    """Cursor into a tree of ``E`` nodes whose branches are ``B``.

    Attributes:
        ops: Structural capabilities of the tree
        focus: Node under the cursor
        left_siblings: Siblings before the focus, nearest first (cons cells)
        right_siblings: Siblings after the focus, nearest first (cons cells)
        parent_nodes: Ancestor branches, nearest first (cons cells)
        path: Cursor this one descended from; None at the root
        changed: Focus or something below it was edited since descending
        at_end: ``go_next`` walked off the end of the tree
    """

    ops: ZipOps[B, E]
    focus: E
    left_siblings: Cons = None
    right_siblings: Cons = None
    parent_nodes: Cons = None
    path: Optional["Zipper[B, E]"] = None
    changed: bool = False
    at_end: bool = False

    @classmethod
    def from_root(cls, root: E, ops: Optional[ZipOps[B, E]] = None) -> "Zipper[B, E]":
        """Cursor focused on ``root``; element trees need no ``ops``."""
        return cls(ops if ops is not None else ELEMENT_OPS, root)

    # Inspection

    @property
    def left(self) -> Tuple[E, ...]:
        """Left siblings, nearest first."""
        return tuple(_cons_iter(self.left_siblings))

    @property
    def right(self) -> Tuple[E, ...]:
        """Right siblings, nearest first."""
        return tuple(_cons_iter(self.right_siblings))

    @property
    def ancestors(self) -> Tuple[B, ...]:
        """Ancestor branches, parent first."""
        return tuple(_cons_iter(self.parent_nodes))

    @property
    def is_root(self) -> bool:
        return self.path is None

    @property
    def is_branch(self) -> bool:
        return self.ops.as_branch(self.focus) is not None

    @property
    def depth(self) -> int:
        return sum(1 for _ in _cons_iter(self.parent_nodes))

    def children(self) -> Optional[Tuple[E, ...]]:
        """Children of the focus, or None if the focus is a leaf."""
        branch = self.ops.as_branch(self.focus)
        if branch is None:
            return None
        return tuple(self.ops.children_of(branch))

    def _siblings_with_focus(self) -> Tuple[E, ...]:
        before = list(_cons_iter(self.left_siblings))
        before.reverse()
        before.append(self.focus)
        before.extend(_cons_iter(self.right_siblings))
        return tuple(before)

    # Vertical movement

    def go_down(self) -> Optional["Zipper[B, E]"]:
        """Focus the first child of a branch focus."""
        branch = self.ops.as_branch(self.focus)
        if branch is None:
            return None
        children = iter(self.ops.children_of(branch))
        missing = object()
        first = next(children, missing)
        if first is missing:
            return None
        return Zipper(
            ops=self.ops,
            focus=first,
            left_siblings=None,
            right_siblings=_cons_from(children),
            parent_nodes=(branch, self.parent_nodes),
            path=self,
            changed=False,
        )

    def go_up(self) -> Optional["Zipper[B, E]"]:
        """Focus the parent, rebuilding it first if anything below changed."""
        if self.parent_nodes is None or self.path is None:
            return None
        if not self.changed:
            return self.path
        parent_node = self.parent_nodes[0]
        rebuilt = self.ops.make_node(parent_node, self._siblings_with_focus())
        return dataclasses.replace(self.path, focus=rebuilt, changed=True)

    def root(self) -> E:
        """Ascend to the root, applying every pending edit, and return it."""
        loc = self
        while True:
            parent = loc.go_up()
            if parent is None:
                return loc.focus
            loc = parent

    # Horizontal movement

    def go_right(self) -> Optional["Zipper[B, E]"]:
        if self.path is None or self.right_siblings is None:
            return None
        head, tail = self.right_siblings
        return dataclasses.replace(
            self,
            focus=head,
            left_siblings=(self.focus, self.left_siblings),
            right_siblings=tail,
        )

    def go_left(self) -> Optional["Zipper[B, E]"]:
        if self.path is None or self.left_siblings is None:
            return None
        head, tail = self.left_siblings
        return dataclasses.replace(
            self,
            focus=head,
            left_siblings=tail,
            right_siblings=(self.focus, self.right_siblings),
        )

    def go_rightmost(self) -> "Zipper[B, E]":
        """Focus the last sibling; returns self when already there."""
        if self.right_siblings is None:
            return self
        left: Cons = (self.focus, self.left_siblings)
        head, tail = self.right_siblings
        while tail is not None:
            left = (head, left)
            head, tail = tail
        return dataclasses.replace(
            self, focus=head, left_siblings=left, right_siblings=None
        )

    def go_leftmost(self) -> "Zipper[B, E]":
        """Focus the first sibling; returns self when already there."""
        if self.left_siblings is None:
            return self
        right: Cons = (self.focus, self.right_siblings)
        head, tail = self.left_siblings
        while tail is not None:
            right = (head, right)
            head, tail = tail
        return dataclasses.replace(
            self, focus=head, left_siblings=None, right_siblings=right
        )

    # Pre-order traversal

    def go_next(self) -> "Zipper[B, E]":
        """Step to the next node in pre-order.

        After the last node the root cursor comes back with ``at_end`` set,
        its focus holding the fully rebuilt tree. Further calls return it
        unchanged.
        """
        if self.at_end:
            return self
        child = self.go_down()
        if child is not None:
            return child
        sibling = self.go_right()
        if sibling is not None:
            return sibling
        loc = self
        while True:
            parent = loc.go_up()
            if parent is None:
                return dataclasses.replace(loc, at_end=True)
            sibling = parent.go_right()
            if sibling is not None:
                return sibling
            loc = parent

    def go_next_until(self, predicate: Callable[[E], bool]) -> "Zipper[B, E]":
        """Call ``go_next`` until ``predicate(focus)`` holds or the walk ends."""
        loc = self.go_next()
        while not loc.at_end and not predicate(loc.focus):
            loc = loc.go_next()
        return loc

    def go_prev(self) -> Optional["Zipper[B, E]"]:
        """Step to the previous node in pre-order; None at the root."""
        sibling = self.go_left()
        if sibling is None:
            return self.go_up()
        return sibling._descend_rightmost()

    def _descend_rightmost(self) -> "Zipper[B, E]":
        loc = self
        while True:
            child = loc.go_down()
            if child is None:
                return loc
            loc = child.go_rightmost()

    # Editing

    def replace(self, node: E) -> "Zipper[B, E]":
        """Put ``node`` in place of the focus."""
        return dataclasses.replace(self, focus=node, changed=True)

    def edit(self, fn: Callable[[E], Optional[E]]) -> "Zipper[B, E]":
        """Replace the focus with ``fn(focus)`` unless it returns None."""
        result = fn(self.focus)
        if result is None:
            return self
        return self.replace(result)

    def insert_left(self, node: E) -> Optional["Zipper[B, E]"]:
        """Insert ``node`` as the sibling just before the focus."""
        if self.path is None:
            return None
        return dataclasses.replace(
            self, left_siblings=(node, self.left_siblings), changed=True
        )

    def insert_right(self, node: E) -> Optional["Zipper[B, E]"]:
        """Insert ``node`` as the sibling just after the focus."""
        if self.path is None:
            return None
        return dataclasses.replace(
            self, right_siblings=(node, self.right_siblings), changed=True
        )

    def insert_child_first(self, node: E) -> Optional["Zipper[B, E]"]:
        """Prepend ``node`` to the children of a branch focus."""
        branch = self.ops.as_branch(self.focus)
        if branch is None:
            return None
        children = (node,) + tuple(self.ops.children_of(branch))
        return self.replace(self.ops.make_node(branch, children))

    def append_child(self, node: E) -> Optional["Zipper[B, E]"]:
        """Append ``node`` to the children of a branch focus."""
        branch = self.ops.as_branch(self.focus)
        if branch is None:
            return None
        children = tuple(self.ops.children_of(branch)) + (node,)
        return self.replace(self.ops.make_node(branch, children))

    def remove(self) -> Optional["Zipper[B, E]"]:
        """Delete the focus.

        The new focus is the node that preceded it in pre-order: the deepest
        rightmost descendant of the left sibling, or the rebuilt parent when
        there is no left sibling. None at the root.
        """
        if self.path is None or self.parent_nodes is None:
            return None
        if self.left_siblings is not None:
            head, tail = self.left_siblings
            loc = dataclasses.replace(
                self, focus=head, left_siblings=tail, changed=True
            )
            return loc._descend_rightmost()
        parent_node = self.parent_nodes[0]
        rebuilt = self.ops.make_node(
            parent_node, tuple(_cons_iter(self.right_siblings))
        )
        return dataclasses.replace(self.path, focus=rebuilt, changed=True)

    def __repr__(self) -> str:
        return (
            f"Zipper(focus={self.focus!r}, depth={self.depth}, "
            f"changed={self.changed}, at_end={self.at_end})"
        )


def zipper(root: E, ops: Optional[ZipOps[Any, E]] = None) -> Zipper[Any, E]:
    """Cursor at ``root``."""
    return Zipper.from_root(root, ops)
