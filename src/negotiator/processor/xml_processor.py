"""
=============================================================================
XML RESPONSE PROCESSOR
=============================================================================

Handles every XML media type: application/xml, text/xml and any +xml
structured syntax suffix (application/atom+xml, image/svg+xml, ...).

Python objects are mapped onto elements like this:

    @dataclass
    class User:                   <User>
        name: str          ──►      <name>Joe</name>
        roles: list                 <roles>admin</roles>
                                    <roles>dev</roles>
                                  </User>

    {"name": "Joe"}        ──►    <root_tag><name>Joe</name></root_tag>
    Element(...)           ──►    written as is

A list inside a field repeats the field's element, one per item. A list
at the top level becomes <root_tag> with one child per item.

=============================================================================
"""

import copy
import dataclasses
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from ..http.response import HTTPResponse
from .base import ResponseProcessor, no_content, write_with_newline


DEFAULT_XML_CONTENT_TYPE = "application/xml"

# XML names, restricted to ASCII. Anything else is rejected rather than
# producing a malformed document.
XML_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9._-]*$")

SCALAR_TYPES = (str, int, float, Decimal)


def _is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _check_tag(tag: str) -> str:
    if not XML_NAME_PATTERN.match(tag):
        raise ValueError(f"Invalid XML element name: {tag!r}")
    return tag


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _add_child(parent: ET.Element, tag: str, value: Any) -> None:
    if isinstance(value, (list, tuple)):
        for item in value:
            parent.append(_build(tag, item))
    else:
        parent.append(_build(tag, value))


def _build(tag: str, value: Any) -> ET.Element:
    """Build the element for one value."""
    if ET.iselement(value):
        # indenting works in place; keep the caller's element untouched
        return copy.deepcopy(value)

    element = ET.Element(_check_tag(tag))

    if _is_dataclass_instance(value):
        for f in dataclasses.fields(value):
            _add_child(element, f.name, getattr(value, f.name))
    elif isinstance(value, Mapping):
        for key, item in value.items():
            _add_child(element, str(key), item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            item_tag = type(item).__name__ if _is_dataclass_instance(item) else "item"
            element.append(_build(item_tag, item))
    elif value is None:
        pass
    elif isinstance(value, (bool,) + SCALAR_TYPES):
        element.text = _text(value)
    else:
        raise TypeError(f"Unsupported type for XML: {type(value).__name__}")

    return element


def to_element(data: Any, root_tag: str = "root") -> ET.Element:
    """
    Convert data to an ElementTree element.

    Dataclass instances are named after their class; everything else is
    wrapped in root_tag.
    """
    if _is_dataclass_instance(data):
        return _build(type(data).__name__, data)
    return _build(root_tag, data)


@dataclass(frozen=True)
class XMLProcessor(ResponseProcessor):
    """
    Serializes data as XML.

    Dense output (indent=None) has no trailing newline; indented output
    ends with one.
    """

    content_type: str = DEFAULT_XML_CONTENT_TYPE
    indent: Optional[Union[str, int]] = None
    root_tag: str = "root"

    def can_process(self, media_range: str, language: str) -> bool:
        media_range = media_range.lower()
        return "/xml" in media_range or media_range.endswith("+xml")

    def process(self, response: HTTPResponse, template: str, data: Any) -> None:
        if data is None:
            no_content(response)
            return

        root = to_element(data, self.root_tag)

        if self.indent is None:
            response.set_content_type(self.content_type)
            response.write(ET.tostring(root, encoding="unicode"))
            return

        space = " " * self.indent if isinstance(self.indent, int) else self.indent
        ET.indent(root, space=space)
        response.set_content_type(self.content_type)
        write_with_newline(response, ET.tostring(root, encoding="unicode"))
