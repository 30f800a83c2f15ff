"""Tests for if/else-if/else element composition."""

from markup_tree.element import NONE, ConditionalBuilder, if_h, raw, render_when
from markup_tree.element.attributes import NAME, TYPE, VALUE
from markup_tree.element.tags import DIV, INPUT, P, SPAN


def counter(value: int):
    return INPUT.attr(TYPE << "hidden", VALUE << str(value), NAME << str(value))


class Recorder:
    """Records which thunks were called."""

    def __init__(self) -> None:
        self.calls = []

    def element(self, label, value):
        def thunk():
            self.calls.append(label)
            return counter(value)
        return thunk

    def condition(self, label, result):
        def thunk():
            self.calls.append(label)
            return result
        return thunk


class TestConditionalBuilder:
    """Test branch selection."""

    def test_first_condition_true(self) -> None:
        """Test the if branch wins."""
        ele = (
            if_h(True, lambda: DIV.child(counter(1)))
            .else_if(lambda: True, lambda: counter(2))
            .else_final(lambda: counter(3))
        )

        assert ele == DIV.child(counter(1))

    def test_second_condition_true(self) -> None:
        """Test the first matching else-if wins."""
        ele = (
            if_h(False, lambda: DIV.child(counter(1)))
            .else_if(lambda: True, lambda: counter(2))
            .else_final(lambda: counter(3))
        )

        assert ele == counter(2)

    def test_all_conditions_false(self) -> None:
        """Test falling through to the else branch."""
        ele = (
            if_h(False, lambda: counter(1))
            .else_if(lambda: False, lambda: counter(2))
            .else_final(lambda: counter(3))
        )

        assert ele == counter(3)

    def test_single_if_without_else(self) -> None:
        """Test reading the element of an unfinished chain."""
        assert if_h(True, lambda: counter(1)).element == counter(1)
        assert if_h(False, lambda: counter(1)).element is NONE

    def test_unmatched_chain_renders_nothing(self) -> None:
        """Test that no match yields the none element."""
        builder = if_h(False, lambda: counter(1)).else_if(lambda: False, lambda: counter(2))

        assert builder.element is NONE
        assert builder.render() == ""

    def test_nested_conditionals(self) -> None:
        """Test a chain producing another chain's result."""
        ele = (
            if_h(True, lambda: if_h(False, lambda: counter(1)).else_final(lambda: counter(2)))
            .else_final(lambda: counter(3))
        )

        assert ele == counter(2)

    def test_plain_bool_condition(self) -> None:
        """Test else_if accepts a bool as well as a callable."""
        ele = if_h(False, lambda: counter(1)).else_if(True, lambda: counter(2)).element

        assert ele == counter(2)

    def test_thunk_values_are_coerced(self) -> None:
        """Test that thunks may return strings."""
        assert if_h(True, lambda: "<x>").element.render() == "&lt;x&gt;"


class TestShortCircuit:
    """Test that untaken branches are never evaluated."""

    def test_later_branches_not_evaluated(self) -> None:
        """Test that C's condition and thunk never run once B matched."""
        rec = Recorder()

        ele = (
            if_h(False, rec.element("A", 1))
            .else_if(rec.condition("cond B", True), rec.element("B", 2))
            .else_if(rec.condition("cond C", True), rec.element("C", 3))
            .element
        )

        assert ele == counter(2)
        assert rec.calls == ["cond B", "B"]

    def test_false_condition_skips_thunk(self) -> None:
        """Test that a false condition leaves its thunk alone."""
        rec = Recorder()

        if_h(False, rec.element("A", 1)).else_if(rec.condition("cond B", False), rec.element("B", 2))

        assert rec.calls == ["cond B"]

    def test_else_not_evaluated_after_match(self) -> None:
        """Test else_final skips its thunk when resolved."""
        rec = Recorder()

        ele = if_h(True, rec.element("A", 1)).else_final(rec.element("else", 9))

        assert ele == counter(1)
        assert rec.calls == ["A"]

    def test_if_thunk_not_evaluated_when_false(self) -> None:
        """Test the initial thunk is lazy too."""
        rec = Recorder()

        if_h(False, rec.element("A", 1))

        assert rec.calls == []


class TestNoneDetection:
    """Test that only the none variant means no branch matched."""

    def test_user_built_empty_element_counts_as_match(self) -> None:
        """Test an empty raw element is not mistaken for none."""
        ele = if_h(True, lambda: raw("")).else_final(lambda: P.child("fallback"))

        assert ele == raw("")
        assert ele.render() == ""

    def test_builder_default_is_unresolved(self) -> None:
        """Test a fresh builder has not matched."""
        assert not ConditionalBuilder().resolved
        assert ConditionalBuilder(SPAN).resolved


class TestRenderWhen:
    """Test the single-condition helper."""

    def test_render_when(self) -> None:
        """Test flag true and false."""
        assert render_when(True, SPAN).render() == "<span></span>"
        assert render_when(False, SPAN) is NONE
