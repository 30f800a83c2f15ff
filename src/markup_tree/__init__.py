"""markup-tree: immutable HTML element trees.

Build trees from immutable elements, render them with an iterative
serializer and rewrite them through a persistent zipper.

Progressive API:
- Level 1: functions - tag(), text(), raw(), fragment(), if_h(), render(), transform()
- Level 2: configured objects - HtmlSerializer, Zipper, MarkupConfig
"""

__version__ = "0.1.0"
__author__ = "markup-tree developers"

from .element import (
    NONE,
    Branch,
    ConditionalBuilder,
    Element,
    ElementList,
    HtmlAttribute,
    HtmlKey,
    NoneElement,
    RawText,
    Text,
    escape_html,
    fragment,
    if_h,
    raw,
    render_when,
    tag,
    text,
    to_element,
    to_html,
)
from .render import HtmlSerializer, RenderResult, render
from .shared.config import MarkupConfig, RenderConfig, TransformConfig, VoidChildrenPolicy
from .zipper import ElementZipOps, Zipper, ZipOps, transform, transform_with_stats, zipper

__all__ = [
    "__author__",
    "__version__",
    # Level 1
    "tag",
    "text",
    "raw",
    "fragment",
    "to_html",
    "to_element",
    "if_h",
    "render_when",
    "render",
    "transform",
    "transform_with_stats",
    "zipper",
    "escape_html",
    # Element model
    "NONE",
    "Branch",
    "ConditionalBuilder",
    "Element",
    "ElementList",
    "HtmlAttribute",
    "HtmlKey",
    "NoneElement",
    "RawText",
    "Text",
    # Level 2
    "HtmlSerializer",
    "RenderResult",
    "Zipper",
    "ZipOps",
    "ElementZipOps",
    "MarkupConfig",
    "RenderConfig",
    "TransformConfig",
    "VoidChildrenPolicy",
]
