"""Tree-to-text rendering."""

from .serializer import HtmlSerializer, RenderResult, render

__all__ = ["HtmlSerializer", "RenderResult", "render"]
