"""If / else-if / else composition of elements with lazy branches.

    >>> if_h(user is None, lambda: LOGIN_LINK)
    ...     .else_if(lambda: user.is_admin, lambda: admin_menu(user))
    ...     .else_final(lambda: user_menu(user))

Nothing in an untaken branch is evaluated: once a branch has produced an
element, later conditions and thunks are skipped. "No branch taken yet" is
recognised by the :class:`NoneElement` variant, so a user-built empty element
(``raw("")``, an empty fragment) still counts as a taken branch.
"""

from typing import Any, Callable, Union

from .model import NONE, Element, NoneElement, to_element

Thunk = Callable[[], Any]
Condition = Union[bool, Callable[[], bool]]


class ConditionalBuilder:
    """Chain state: the element produced so far, or NONE."""

    __slots__ = ("element",)

    def __init__(self, element: Element = NONE) -> None:
        self.element = element

    @property
    def resolved(self) -> bool:
        return not isinstance(self.element, NoneElement)

    def else_if(self, condition: Condition, thunk: Thunk) -> "ConditionalBuilder":
        """Take this branch if nothing matched yet and ``condition`` holds.

        ``condition`` may be a plain bool or a zero-argument callable; the
        callable is not invoked when an earlier branch already matched.
        """
        if self.resolved:
            return self
        matched = condition() if callable(condition) else condition
        if not matched:
            return self
        return ConditionalBuilder(to_element(thunk()))

    def else_final(self, thunk: Thunk) -> Element:
        """Finish the chain, evaluating ``thunk`` only if nothing matched."""
        if self.resolved:
            return self.element
        return to_element(thunk())

    def render(self) -> str:
        return self.element.render()

    def __repr__(self) -> str:
        return f"ConditionalBuilder({self.element!r})"


def if_h(condition: bool, thunk: Thunk) -> ConditionalBuilder:
    """Start a conditional chain."""
    if condition:
        return ConditionalBuilder(to_element(thunk()))
    return ConditionalBuilder()


def render_when(flag: bool, element: Any) -> Element:
    """``element`` if ``flag`` else the NONE element."""
    return to_element(element) if flag else NONE
