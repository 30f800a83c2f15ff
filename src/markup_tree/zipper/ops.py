"""Structural capabilities a tree must provide to be navigated by a zipper."""

import dataclasses
from typing import Optional, Protocol, Sequence, TypeVar, Union

from markup_tree.element.model import Branch, Element, ElementList

B = TypeVar("B")
E = TypeVar("E")


class ZipOps(Protocol[B, E]):
    """How a zipper sees a tree whose branch type ``B`` is a subtype of ``E``."""

    def as_branch(self, node: E) -> Optional[B]:
        """Return ``node`` as a branch, or None if it is a leaf."""

    def children_of(self, branch: B) -> Sequence[E]:
        """Children of ``branch`` in order."""

    def make_node(self, branch: B, children: Sequence[E]) -> E:
        """Rebuild ``branch`` with new ``children``, keeping everything else."""


ElementBranch = Union[Branch, ElementList]


class ElementZipOps:
    """Zipper capabilities for element trees.

    Tags and list elements are both branches, so transforms reach nodes
    inside a spliced list as well.
    """

    def as_branch(self, node: Element) -> Optional[ElementBranch]:
        if isinstance(node, (Branch, ElementList)):
            return node
        return None

    def children_of(self, branch: ElementBranch) -> Sequence[Element]:
        if isinstance(branch, Branch):
            return branch.children
        return branch.items

    def make_node(
        self, branch: ElementBranch, children: Sequence[Element]
    ) -> Element:
        if isinstance(branch, Branch):
            return dataclasses.replace(branch, children=tuple(children))
        return dataclasses.replace(branch, items=tuple(children))


ELEMENT_OPS = ElementZipOps()
