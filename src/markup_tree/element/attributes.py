"""Typed attribute keys and their encoders.

An :class:`HtmlKey` pairs an attribute name with an encoder of shape
``(name, value) -> str``. Binding a value to a key (``key << value`` or
``key.bind(value)``) yields an :class:`HtmlAttribute` whose ``render()``
delegates to that encoder. Several keys may share a value type but differ in
encoding; booleans in particular have presence, ``true/false``, ``yes/no``
and ``on/off`` forms.

Encoders must be total for their value type. String encoders escape with the
same entity set as :class:`~markup_tree.element.model.Text`. Presence encoders
return ``""`` for ``False`` and the serializer drops empty renders together
with their separating space.
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from .model import escape_html

T = TypeVar("T")

Encoder = Callable[[str, T], str]


@dataclass(frozen=True)
class HtmlKey(Generic[T]):
    """Attribute name plus the rule that encodes its value."""

    name: str
    encode: Encoder

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Attribute name cannot be empty")

    def bind(self, value: T) -> "HtmlAttribute[T]":
        return HtmlAttribute(self, value)

    def __lshift__(self, value: T) -> "HtmlAttribute[T]":
        return HtmlAttribute(self, value)


@dataclass(frozen=True)
class HtmlAttribute(Generic[T]):
    """A key bound to a concrete value."""

    key: HtmlKey[T]
    value: T

    @property
    def name(self) -> str:
        return self.key.name

    def render(self) -> str:
        return self.key.encode(self.key.name, self.value)


# Encoders

def string_encoder(name: str, value: str) -> str:
    return f'{name}="{escape_html(value)}"'


def boolean_presence_encoder(name: str, value: bool) -> str:
    return name if value else ""


def boolean_true_false_encoder(name: str, value: bool) -> str:
    return f'{name}="{"true" if value else "false"}"'


def boolean_yes_no_encoder(name: str, value: bool) -> str:
    return f'{name}="{"yes" if value else "no"}"'


def boolean_on_off_encoder(name: str, value: bool) -> str:
    return f'{name}="{"on" if value else "off"}"'


def int_encoder(name: str, value: int) -> str:
    return f'{name}="{int(value)}"'


def float_encoder(name: str, value: float) -> str:
    # 2.0 -> "2", 2.5 -> "2.5"
    formatted = repr(float(value))
    if formatted.endswith(".0"):
        formatted = formatted[:-2]
    return f'{name}="{formatted}"'


# Key factories

def string_key(name: str) -> HtmlKey[str]:
    return HtmlKey(name, string_encoder)


def presence_key(name: str) -> HtmlKey[bool]:
    return HtmlKey(name, boolean_presence_encoder)


def true_false_key(name: str) -> HtmlKey[bool]:
    return HtmlKey(name, boolean_true_false_encoder)


def yes_no_key(name: str) -> HtmlKey[bool]:
    return HtmlKey(name, boolean_yes_no_encoder)


def on_off_key(name: str) -> HtmlKey[bool]:
    return HtmlKey(name, boolean_on_off_encoder)


def int_key(name: str) -> HtmlKey[int]:
    return HtmlKey(name, int_encoder)


def float_key(name: str) -> HtmlKey[float]:
    return HtmlKey(name, float_encoder)


def data_attr(name: str) -> HtmlKey[str]:
    """Key for a custom ``data-*`` attribute."""
    return string_key(f"data-{name}")


# Common keys. The full attribute vocabulary lives outside this package.
CLASS = string_key("class")
ID = string_key("id")
HREF = string_key("href")
SRC = string_key("src")
ALT = string_key("alt")
NAME = string_key("name")
VALUE = string_key("value")
TYPE = string_key("type")
CHARSET = string_key("charset")
DISABLED = presence_key("disabled")
CHECKED = presence_key("checked")
HIDDEN = presence_key("hidden")
DRAGGABLE = true_false_key("draggable")
TRANSLATE = yes_no_key("translate")
AUTOCOMPLETE = on_off_key("autocomplete")
TABINDEX = int_key("tabindex")
