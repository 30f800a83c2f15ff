"""Branch factory and a few common tags.

The complete tag catalog is external vocabulary; this module only knows
which HTML5 names are void so that :func:`tag` can default ``is_void``.
"""

from typing import Optional

from .model import Branch

# in html5 these elements can not have closing tags or children
VOID_ELEMENTS = frozenset({
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
})


def tag(name: str, is_void: Optional[bool] = None) -> Branch:
    """Empty branch named ``name``.

    ``is_void`` defaults to whether ``name`` is an HTML5 void element.
    """
    if is_void is None:
        is_void = name.lower() in VOID_ELEMENTS
    return Branch(name, is_void)


HTML = tag("html")
HEAD = tag("head")
TITLE = tag("title")
META = tag("meta")
LINK = tag("link")
BODY = tag("body")
DIV = tag("div")
SPAN = tag("span")
P = tag("p")
A = tag("a")
H1 = tag("h1")
H2 = tag("h2")
UL = tag("ul")
OL = tag("ol")
LI = tag("li")
IMG = tag("img")
BR = tag("br")
HR = tag("hr")
INPUT = tag("input")
FORM = tag("form")
BUTTON = tag("button")
