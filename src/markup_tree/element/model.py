"""Immutable markup element model.

The element set is closed: :class:`Branch` (a tag), :class:`Text` (escaped
content), :class:`RawText` (verbatim content), :class:`ElementList` (children
spliced into the parent) and :class:`NoneElement` (renders nothing). Every
value is a frozen dataclass; composition methods return new values that share
unmodified children and attributes with the receiver.
"""

import dataclasses
import datetime
import types
import uuid
from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional, Sequence, Tuple, Union

from markup_tree.shared.errors import ElementCoercionError

if TYPE_CHECKING:
    from markup_tree.element.attributes import HtmlAttribute
    from markup_tree.shared.config import MarkupConfig, TransformConfig

# Ampersand is part of the table, so a single translate pass never double-escapes.
_HTML_ESCAPES = {
    ord("&"): "&amp;",
    ord("<"): "&lt;",
    ord(">"): "&gt;",
    ord('"'): "&quot;",
    ord("'"): "&#39;",
}

_TEXT_SCALARS = (str, int, float, Decimal, datetime.date, datetime.time, uuid.UUID)

Mapper = Callable[["Element"], Optional["Element"]]


def escape_html(value: str) -> str:
    """Replace ``& < > " '`` with their HTML entities."""
    return value.translate(_HTML_ESCAPES)


class Element:
    """Base of the closed element hierarchy."""

    __slots__ = ()

    def render(self) -> str:
        raise NotImplementedError

    def transform(
        self,
        mapper: Union[Mapper, Sequence[Mapper]],
        config: Optional[Union["TransformConfig", "MarkupConfig"]] = None,
    ) -> "Element":
        """Rewrite this tree with one mapper or a sequence of mappers.

        See :func:`markup_tree.zipper.transform.transform`.
        """
        from markup_tree.zipper.transform import transform

        return transform(self, mapper, config=config)

    def __str__(self) -> str:
        return self.render()


def _require_str(leaf: Any) -> None:
    if not isinstance(leaf.value, str):
        raise TypeError(
            f"{type(leaf).__name__} value must be str, got "
            f"{type(leaf.value).__name__}; use text() to convert scalars"
        )


@dataclass(frozen=True)
class Text(Element):
    """Text content, escaped on render."""

    value: str

    def __post_init__(self) -> None:
        _require_str(self)

    def render(self) -> str:
        return escape_html(self.value)


@dataclass(frozen=True)
class RawText(Element):
    """Markup rendered verbatim. The caller vouches for its safety."""

    value: str

    def __post_init__(self) -> None:
        _require_str(self)

    def render(self) -> str:
        return self.value


@dataclass(frozen=True)
class NoneElement(Element):
    """The element that renders to nothing."""

    def render(self) -> str:
        return ""


NONE = NoneElement()


@dataclass(frozen=True, eq=False)
class ElementList(Element):
    """A run of elements spliced into whatever contains it."""

    items: Tuple[Element, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", coerce_children(self.items))

    def render(self) -> str:
        from markup_tree.render.serializer import render

        return render(self)

    def __iter__(self) -> Iterator[Element]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return _same_tree(self, other)

    def __hash__(self) -> int:
        return hash((ElementList, len(self.items)))


@dataclass(frozen=True, eq=False)
class Branch(Element):
    """A tag with attributes and children.

    A void branch (``is_void=True``) renders as ``<name ... />``. Children
    attached to it are kept on the value but never rendered; the serializer
    reports them according to its ``void_children_policy``.

    Equality is structural and iterative, so comparing very deep trees is
    safe; ``repr`` still recurses.
    """

    name: str
    is_void: bool = False
    attributes: Tuple["HtmlAttribute[Any]", ...] = ()
    children: Tuple[Element, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Branch name cannot be empty")
        object.__setattr__(self, "attributes", tuple(self.attributes))
        object.__setattr__(self, "children", coerce_children(self.children))

    def attr(self, *attributes: "HtmlAttribute[Any]") -> "Branch":
        """Return a copy whose attributes are exactly ``attributes``."""
        return dataclasses.replace(self, attributes=attributes)

    def child(self, *children: Any) -> "Branch":
        """Return a copy whose children are exactly ``children``."""
        return dataclasses.replace(self, children=children)

    def append_attr(self, *attributes: "HtmlAttribute[Any]") -> "Branch":
        """Return a copy with ``attributes`` after the existing ones."""
        return dataclasses.replace(self, attributes=self.attributes + attributes)

    def append_child(self, *children: Any) -> "Branch":
        """Return a copy with ``children`` after the existing ones."""
        return dataclasses.replace(
            self, children=self.children + coerce_children(children)
        )

    with_attributes = attr
    with_children = child
    append_attributes = append_attr
    append_children = append_child

    def __call__(self, *children: Any) -> "Branch":
        return self.child(*children)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return _same_tree(self, other)

    def __hash__(self) -> int:
        return hash((self.name, self.is_void, self.attributes, len(self.children)))

    def render(self) -> str:
        from markup_tree.render.serializer import render

        return render(self)


def _same_tree(left: Element, right: Element) -> bool:
    """Structural equality over whole trees, walked with an explicit stack."""
    pending = [(left, right)]
    while pending:
        a, b = pending.pop()
        if a is b:
            continue
        if type(a) is not type(b):
            return False
        if isinstance(a, Branch):
            if (
                a.name != b.name
                or a.is_void != b.is_void
                or a.attributes != b.attributes
                or len(a.children) != len(b.children)
            ):
                return False
            pending.extend(zip(a.children, b.children))
        elif isinstance(a, ElementList):
            if len(a.items) != len(b.items):
                return False
            pending.extend(zip(a.items, b.items))
        elif a != b:
            return False
    return True


def to_element(value: Any) -> Element:
    """Convert ``value`` to an element.

    Scalars (strings, numbers, dates, UUIDs) become :class:`Text` through
    ``str()``, lists, tuples and iterators become :class:`ElementList`, and
    ``None`` becomes :data:`NONE`. Booleans are refused: ``True`` has no
    sensible text form in markup.
    """
    if isinstance(value, Element):
        return value
    if value is None:
        return NONE
    if isinstance(value, bool):
        raise ElementCoercionError(value)
    if isinstance(value, _TEXT_SCALARS):
        return Text(str(value))
    if isinstance(value, (list, tuple, types.GeneratorType, Iterator)):
        return ElementList(tuple(value))
    raise ElementCoercionError(value)


def coerce_children(children: Iterable[Any]) -> Tuple[Element, ...]:
    return tuple(to_element(child) for child in children)


def text(value: Any) -> Text:
    """Text element for any scalar."""
    return Text(value if isinstance(value, str) else str(value))


def raw(value: str) -> RawText:
    return RawText(value)


def fragment(*elements: Any) -> ElementList:
    """Splice ``elements`` wherever the result is placed."""
    return ElementList(elements)


def to_html(elements: Iterable[Any]) -> ElementList:
    """Wrap any iterable of elements (or coercible values) as a list element."""
    return ElementList(tuple(elements))
