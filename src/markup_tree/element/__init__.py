"""Element model, attributes and conditional composition.

Elements are immutable values. Build trees with :func:`tag` (or the tag
constants), attach attributes with ``HtmlKey << value`` and pass strings,
numbers or lists as children; they are coerced to text and list elements.
"""

from . import attributes
from .attributes import (
    Encoder,
    HtmlAttribute,
    HtmlKey,
    boolean_on_off_encoder,
    boolean_presence_encoder,
    boolean_true_false_encoder,
    boolean_yes_no_encoder,
    data_attr,
    float_encoder,
    float_key,
    int_encoder,
    int_key,
    on_off_key,
    presence_key,
    string_encoder,
    string_key,
    true_false_key,
    yes_no_key,
)
from .conditional import ConditionalBuilder, if_h, render_when
from .model import (
    NONE,
    Branch,
    Element,
    ElementList,
    Mapper,
    NoneElement,
    RawText,
    Text,
    coerce_children,
    escape_html,
    fragment,
    raw,
    text,
    to_element,
    to_html,
)
from .tags import VOID_ELEMENTS, tag

__all__ = [
    "attributes",
    "Encoder",
    "HtmlAttribute",
    "HtmlKey",
    "boolean_on_off_encoder",
    "boolean_presence_encoder",
    "boolean_true_false_encoder",
    "boolean_yes_no_encoder",
    "data_attr",
    "float_encoder",
    "float_key",
    "int_encoder",
    "int_key",
    "on_off_key",
    "presence_key",
    "string_encoder",
    "string_key",
    "true_false_key",
    "yes_no_key",
    "ConditionalBuilder",
    "if_h",
    "render_when",
    "NONE",
    "Branch",
    "Element",
    "ElementList",
    "Mapper",
    "NoneElement",
    "RawText",
    "Text",
    "coerce_children",
    "escape_html",
    "fragment",
    "raw",
    "text",
    "to_element",
    "to_html",
    "VOID_ELEMENTS",
    "tag",
]
