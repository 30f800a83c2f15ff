"""Tests for attribute keys and encoders."""

import pytest

from markup_tree.element.attributes import (
    AUTOCOMPLETE,
    CLASS,
    DISABLED,
    DRAGGABLE,
    HREF,
    TABINDEX,
    TRANSLATE,
    HtmlAttribute,
    HtmlKey,
    data_attr,
    float_key,
    string_encoder,
)
from markup_tree.element.tags import BUTTON, INPUT


class TestHtmlKey:
    """Test binding values to keys."""

    def test_shift_operator_binds(self) -> None:
        """Test ``key << value`` builds an attribute."""
        attr = HREF << "/page.html"

        assert isinstance(attr, HtmlAttribute)
        assert attr.name == "href"
        assert attr.value == "/page.html"
        assert attr.render() == 'href="/page.html"'

    def test_bind_matches_operator(self) -> None:
        """Test bind() and << are equivalent."""
        assert CLASS.bind("x") == (CLASS << "x")

    def test_empty_name_raises_error(self) -> None:
        """Test that keys need a name."""
        with pytest.raises(ValueError, match="Attribute name cannot be empty"):
            HtmlKey("", string_encoder)

    def test_custom_encoder_receives_name_and_value(self) -> None:
        """Test the (name, value) encoder contract."""
        calls = []

        def encoder(name, value):
            calls.append((name, value))
            return f"{name}={value}"

        key = HtmlKey("x-count", encoder)

        assert (key << 3).render() == "x-count=3"
        assert calls == [("x-count", 3)]


class TestEncoders:
    """Test the built-in encoders."""

    def test_string_values_are_escaped(self) -> None:
        """Test string attributes use the text entity set."""
        assert (CLASS << "container<test>").render() == 'class="container&lt;test&gt;"'
        assert (CLASS << "a\"b'c&").render() == 'class="a&quot;b&#39;c&amp;"'

    def test_presence_boolean(self) -> None:
        """Test bare-name booleans."""
        assert (DISABLED << True).render() == "disabled"
        assert (DISABLED << False).render() == ""

    def test_true_false_boolean(self) -> None:
        """Test literal true/false booleans."""
        assert (DRAGGABLE << True).render() == 'draggable="true"'
        assert (DRAGGABLE << False).render() == 'draggable="false"'

    def test_yes_no_and_on_off_booleans(self) -> None:
        """Test the other boolean spellings."""
        assert (TRANSLATE << True).render() == 'translate="yes"'
        assert (TRANSLATE << False).render() == 'translate="no"'
        assert (AUTOCOMPLETE << True).render() == 'autocomplete="on"'
        assert (AUTOCOMPLETE << False).render() == 'autocomplete="off"'

    def test_numeric_encoders(self) -> None:
        """Test integer and float encoders."""
        assert (TABINDEX << 5).render() == 'tabindex="5"'
        assert (float_key("step") << 0.5).render() == 'step="0.5"'
        assert (float_key("step") << 2.0).render() == 'step="2"'

    def test_data_attribute(self) -> None:
        """Test data-* key factory."""
        assert (data_attr("user-id") << "12345").render() == 'data-user-id="12345"'


class TestAttributesInTags:
    """Test attributes as rendered inside a tag."""

    def test_false_presence_attribute_disappears(self) -> None:
        """Test that an empty attribute leaves no stray space."""
        button = BUTTON.attr(DISABLED << False, CLASS << "btn").child("Go")

        assert button.render() == '<button class="btn">Go</button>'

    def test_true_presence_attribute_is_bare(self) -> None:
        """Test a true presence attribute inside a void tag."""
        field = INPUT.attr(DISABLED << True)

        assert field.render() == "<input disabled />"

    def test_duplicates_are_kept_in_order(self) -> None:
        """Test that attributes are neither reordered nor deduplicated."""
        button = BUTTON.attr(CLASS << "a", CLASS << "b")

        assert button.render() == '<button class="a" class="b"></button>'
