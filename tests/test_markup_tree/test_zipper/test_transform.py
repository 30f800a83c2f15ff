"""Tests for whole-tree transforms."""

import logging

import pytest

from markup_tree.element import Branch, Element, RawText, Text, fragment
from markup_tree.element.attributes import CLASS
from markup_tree.element.tags import A, DIV, LI, P, SPAN, UL
from markup_tree.shared import MarkupConfig, TransformConfig, TransformLimitError
from markup_tree.zipper import transform, transform_with_stats


def sample_tree() -> Branch:
    return DIV.attr(CLASS << "page").child(
        P.child("hello", SPAN.child("world")),
        UL.child(LI.child("one"), LI.child("two")),
        fragment("tail", A.child("link")),
    )


def upper_text(node: Element):
    if isinstance(node, Text):
        return Text(node.value.upper())
    return None


class TestTransform:
    """Test single-mapper transforms."""

    def test_identity_mapper_returns_equal_tree(self) -> None:
        """Test a never-editing map reproduces the tree."""
        tree = sample_tree()

        result = transform(tree, lambda node: None)

        assert result == tree
        assert result is tree

    def test_rewrites_every_matching_node(self) -> None:
        """Test text anywhere in the tree, including inside lists."""
        tree = sample_tree()

        result = transform(tree, upper_text)

        assert result.render() == (
            '<div class="page"><p>HELLO<span>WORLD</span></p>'
            "<ul><li>ONE</li><li>TWO</li></ul>TAIL<a>LINK</a></div>"
        )
        assert tree.render().count("hello") == 1

    def test_untouched_subtrees_are_shared(self) -> None:
        """Test that only branches above an edit are rebuilt."""
        tree = sample_tree()

        def only_one(node):
            if node == Text("one"):
                return Text("1")
            return None

        result = transform(tree, only_one)

        assert result.children[0] is tree.children[0]
        assert result.children[2] is tree.children[2]
        assert result.children[1] is not tree.children[1]
        assert result.children[1].children[1] is tree.children[1].children[1]

    def test_replacing_branch_with_leaf(self) -> None:
        """Test a mapper that collapses branches."""
        def collapse_span(node):
            if isinstance(node, Branch) and node.name == "span":
                return RawText("<em>x</em>")
            return None

        result = transform(P.child("a", SPAN.child("b"), "c"), collapse_span)

        assert result.render() == "<p>a<em>x</em>c</p>"

    def test_replacing_root(self) -> None:
        """Test the root itself may be replaced."""
        result = transform(DIV.child("x"), lambda n: P.child("y") if n == DIV.child("x") else None)

        assert result.render() == "<p>y</p>"

    def test_replacement_subtree_is_visited(self) -> None:
        """Test that nodes introduced by an edit are walked too."""
        def expand(node):
            if isinstance(node, Text) and node.value == "x":
                return SPAN.child("inner")
            return upper_text(node)

        result = transform(DIV.child("x"), expand)

        assert result.render() == "<div><span>INNER</span></div>"

    def test_element_transform_method(self) -> None:
        """Test the convenience method on elements."""
        assert DIV.child("a").transform(upper_text).render() == "<div>A</div>"

    def test_leaf_root(self) -> None:
        """Test transforming a single leaf."""
        assert transform(Text("a"), upper_text) == Text("A")


class TestMultipleMappers:
    """Test that every mapper sees the previous mapper's output."""

    def test_mappers_chain_at_each_node(self) -> None:
        """Test mappers compose in order rather than first-match-wins."""
        def add_bang(node):
            if isinstance(node, Text):
                return Text(node.value + "!")
            return None

        result = transform(DIV.child("a", P.child("b")), [upper_text, add_bang])

        assert result.render() == "<div>A!<p>B!</p></div>"

    def test_second_mapper_sees_first_result(self) -> None:
        """Test the focus handed to each mapper."""
        seen = []

        def first(node):
            if node == Text("a"):
                return Text("b")
            return None

        def second(node):
            seen.append(node)
            return None

        transform(DIV.child("a"), [first, second])

        assert seen == [DIV.child("a"), Text("b")]

    def test_order_matters(self) -> None:
        """Test swapping mappers changes the result."""
        def a_to_b(node):
            return Text("b") if node == Text("a") else None

        def b_to_c(node):
            return Text("c") if node == Text("b") else None

        assert transform(Text("a"), [a_to_b, b_to_c]) == Text("c")
        assert transform(Text("a"), [b_to_c, a_to_b]) == Text("b")


class TestTransformStats:
    """Test stats, limits and logging."""

    def test_visits_each_node_once(self) -> None:
        """Test visit and edit counts."""
        tree = sample_tree()

        _, stats = transform_with_stats(tree, upper_text)

        # div, p, hello, span, world, ul, li, one, li, two, list, tail, a, link
        assert stats.visited == 14
        assert stats.edited == 6
        assert stats.edit_rate == pytest.approx(6 / 14)

    def test_max_steps_guard(self) -> None:
        """Test a runaway mapper is stopped."""
        def grow(node):
            if isinstance(node, Text):
                return SPAN.child(node)
            return None

        with pytest.raises(TransformLimitError, match="max_steps=50"):
            transform(DIV.child("x"), grow, config=TransformConfig(max_steps=50))

    def test_max_steps_equal_to_tree_size_is_allowed(self) -> None:
        """Test the limit counts visited nodes."""
        result = transform(DIV.child("a", "b"), upper_text, config=TransformConfig(max_steps=3))

        assert result.render() == "<div>AB</div>"

    def test_summary_logged(self, caplog) -> None:
        """Test the debug summary record."""
        with caplog.at_level(logging.DEBUG, logger="markup_tree.zipper.transform"):
            transform(DIV.child("a"), upper_text)

        records = [r for r in caplog.records if r.getMessage() == "Transform finished"]
        assert records[0].visited == 2
        assert records[0].edited == 1

    def test_summary_can_be_disabled(self, caplog) -> None:
        """Test log_summary=False."""
        with caplog.at_level(logging.DEBUG, logger="markup_tree.zipper.transform"):
            transform(DIV.child("a"), upper_text, config=TransformConfig(log_summary=False))

        assert "Transform finished" not in caplog.text


class TestMarkupConfig:
    """Test transforms driven by the aggregate configuration."""

    def test_transform_component_is_used(self) -> None:
        """Test max_steps taken from the aggregate."""
        config = MarkupConfig().override(transform__max_steps=2)

        with pytest.raises(TransformLimitError, match="max_steps=2"):
            transform(DIV.child("a", "b"), upper_text, config=config)

    def test_lenient_preset_skips_summary(self, caplog) -> None:
        """Test log_summary taken from the aggregate."""
        with caplog.at_level(logging.DEBUG, logger="markup_tree.zipper.transform"):
            result = transform(DIV.child("a"), upper_text, config=MarkupConfig.lenient())

        assert result.render() == "<div>A</div>"
        assert "Transform finished" not in caplog.text

    def test_summary_carries_correlation_id(self, caplog) -> None:
        """Test tracking tags the summary record."""
        with caplog.at_level(logging.DEBUG, logger="markup_tree.zipper.transform"):
            transform(DIV.child("a"), upper_text, config=MarkupConfig())
            transform(DIV.child("a"), upper_text, correlation_id="req-7")

        records = [r for r in caplog.records if r.getMessage() == "Transform finished"]
        assert len(records[0].correlation_id) == 12
        assert records[1].correlation_id == "req-7"

    def test_tracking_disabled_leaves_id_unset(self, caplog) -> None:
        """Test no correlation ID without tracking."""
        config = MarkupConfig().override(global___enable_correlation_tracking=False)

        with caplog.at_level(logging.DEBUG, logger="markup_tree.zipper.transform"):
            transform(DIV.child("a"), upper_text, config=config)

        records = [r for r in caplog.records if r.getMessage() == "Transform finished"]
        assert not hasattr(records[0], "correlation_id")
