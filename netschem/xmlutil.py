"""Helpers for reading attributes of XML elements."""

from __future__ import annotations

import re
from xml.etree.ElementTree import Element

_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


class XmlFormatError(ValueError):
    """Raised when an XML document does not have the expected shape."""


def leading_int(text: str) -> int:
    """Parse the integer at the start of ``text``.

    Leading whitespace and a sign are accepted, trailing characters are
    ignored, and text without leading digits gives 0.
    """
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def get_str_attribute(element: Element, name: str) -> str:
    """Return an attribute's value, or an empty string when it is absent."""
    return element.get(name, "")


def get_int_attribute(element: Element, name: str) -> int:
    """Return an attribute's value as an integer.

    Raises XmlFormatError when the attribute is missing.
    """
    text = element.get(name)
    if text is None:
        raise XmlFormatError(f'"{name}" attribute missing in <{element.tag}> tag.')
    return leading_int(text)